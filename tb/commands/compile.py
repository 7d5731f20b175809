"""Komenda: tb compile — kompilacja źródła podręcznika do JSON."""

from __future__ import annotations

import argparse
from pathlib import Path

from rich import box
from rich.console import Console
from rich.table import Table

from data_model.textbook import Chapter
from tb._source import compile_or_exit, read_source, resolve_location
from textbook.config import CompileConfig
from textbook.diagnostics import CompileDiagnostics
from textbook.query import iter_body_items, iter_sections
from textbook.serialize import dumps_chapters

# Komunikaty na stderr, stdout zostaje dla JSON
console = Console(stderr=True)

_LEVELS = {"chapter": 1, "section": 2, "subsection": 3}


# ---------------------------------------------------------------------------
# Wyświetlanie w terminalu
# ---------------------------------------------------------------------------

def _show_table(chapters: dict[str, Chapter]) -> None:
    if not chapters:
        console.print("[yellow]Brak rozdziałów.[/yellow]")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("LVL",       justify="right", no_wrap=True, style="dim")
    table.add_column("ID",        no_wrap=True, style="bold cyan")
    table.add_column("STRONA",    justify="center", no_wrap=True)
    table.add_column("ELEMENTY",  justify="right", no_wrap=True)
    table.add_column("REFERENCJA", no_wrap=True, style="dim")
    table.add_column("NAZWA",     no_wrap=False, max_width=50)

    count = 0
    for section in iter_sections(chapters):
        level = _LEVELS[section.type]
        count += 1
        table.add_row(
            str(level),
            "  " * (level - 1) + section.id,
            str(section.page) if section.page is not None else "-",
            str(sum(1 for _ in iter_body_items(section.body))),
            section.reference,
            section.name[:80],
        )

    console.print()
    console.print(table)
    console.print(f"  [dim]{count} kontenerów[/dim]\n")


def _report_dropped(diagnostics: CompileDiagnostics) -> None:
    if not diagnostics.dropped_count:
        return
    summary = ", ".join(f"<{name}> × {n}" for name, n in sorted(diagnostics.dropped_by_name().items()))
    console.print(f"[yellow]Pominięte tagi ({diagnostics.dropped_count}):[/yellow] {summary}")


# ---------------------------------------------------------------------------
# Główna logika komendy
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    config = CompileConfig.from_env(book=args.book, namespace=args.namespace)
    location = resolve_location(args.source, config, console)

    console.print(
        f"Kompilacja [bold]{location}[/bold] "
        f"(namespace=[cyan]{config.namespace}[/cyan], book=[cyan]{config.book}[/cyan]) …"
    )
    text = read_source(location, console)
    result = compile_or_exit(config, text, console)

    console.print(f"Znaleziono [bold]{len(result.chapters)}[/bold] rozdziałów.")
    _report_dropped(result.diagnostics)

    payload = dumps_chapters(result.chapters)
    if args.out:
        out_path = Path(args.out)
        out_path.write_text(payload, encoding="utf-8")
        console.print(f"[green]JSON:[/green] {out_path}")
    elif not args.show:
        print(payload)

    if args.show:
        _show_table(result.chapters)


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "compile",
        help="Kompiluje źródło podręcznika (Markdown + tagi) do JSON.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Kompiluje źródło podręcznika do drzewa rozdziałów / sekcji / podsekcji
i zapisuje je jako JSON. Bez --out i --show JSON trafia na stdout.

Źródło: ścieżka, URL http(s) albo (gdy pominięte) <TEXT_REPOSITORY>/<book>.md.

Przykłady:
  tb compile v1.md --show
  tb compile v1.md --out v1.json
  tb compile https://example.org/text/v1.md --book v1
  tb compile --book v2 --namespace acme
        """,
    )
    p.add_argument(
        "source",
        nargs="?",
        default=None,
        metavar="ŹRÓDŁO",
        help="Plik .md albo URL (domyślnie: z TEXT_REPOSITORY).",
    )
    p.add_argument(
        "--namespace",
        metavar="NS",
        default=None,
        help="Przestrzeń nazw referencji (domyślnie: TEXTBOOK_NAMESPACE lub acme).",
    )
    p.add_argument(
        "--book",
        metavar="KSIĄŻKA",
        default=None,
        help="Identyfikator książki (domyślnie: TEXTBOOK_BOOK lub v1).",
    )
    p.add_argument(
        "--out",
        metavar="PLIK.json",
        default=None,
        help="Zapisz JSON do pliku.",
    )
    p.add_argument(
        "--show",
        action="store_true",
        help="Wyświetl tabelę kontenerów w terminalu.",
    )
    p.set_defaults(func=run)
