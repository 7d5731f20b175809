"""Wspólne dla komend: wczytanie źródła i kompilacja z obsługą błędów."""

from __future__ import annotations

import requests
from rich.console import Console

from textbook.compiler import CompileResult, compile_textbook
from textbook.config import CompileConfig
from textbook.errors import TextbookError
from textbook.source import book_location, load_source


def resolve_location(source: str | None, config: CompileConfig, console: Console) -> str:
    """Ścieżka/URL z argumentu albo <TEXT_REPOSITORY>/<book>.md."""
    if source:
        return source
    location = book_location(config.book)
    if location is None:
        console.print("[red]Nie podano źródła i brak TEXT_REPOSITORY.[/red]")
        raise SystemExit(1)
    return location


def read_source(location: str, console: Console) -> str:
    try:
        return load_source(location)
    except OSError as e:
        console.print(f"[red]Nie można odczytać pliku:[/red] {e}")
        raise SystemExit(1)
    except requests.RequestException as e:
        console.print(f"[red]Błąd pobierania:[/red] {e}")
        raise SystemExit(1)


def compile_or_exit(config: CompileConfig, text: str, console: Console) -> CompileResult:
    try:
        return compile_textbook(config, text)
    except TextbookError as e:
        console.print(f"[red]Błąd kompilacji:[/red] {e}")
        raise SystemExit(1)
