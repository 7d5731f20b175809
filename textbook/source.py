"""textbook/source.py — wczytywanie tekstu źródłowego (plik lokalny albo URL)."""

from __future__ import annotations

import pathlib

import requests

from textbook.config import text_repository

_HTTP_PREFIXES = ("http://", "https://")


def is_url(location: str) -> bool:
    return location.startswith(_HTTP_PREFIXES)


def load_source(location: str) -> str:
    """Treść pliku albo odpowiedź GET dla adresu http(s)."""
    if is_url(location):
        resp = requests.get(location, timeout=30)
        resp.raise_for_status()
        resp.encoding = resp.encoding or "utf-8"
        return resp.text
    return pathlib.Path(location).read_text(encoding="utf-8")


def book_location(book: str, repository: str | None = None) -> str | None:
    """
    Lokalizacja pliku książki w repozytorium tekstów: <repo>/<book>.md.
    Bez repozytorium (argument ani TEXT_REPOSITORY) → None.
    """
    repository = repository or text_repository()
    if not repository:
        return None
    if is_url(repository):
        return f"{repository.rstrip('/')}/{book}.md"
    return str(pathlib.Path(repository) / f"{book}.md")
