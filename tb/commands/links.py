"""Komenda: tb links — linki wiki [[...]] w pliku tekstowym."""

from __future__ import annotations

import argparse

from rich import box
from rich.console import Console
from rich.table import Table

from tb._source import read_source
from textref.links import find_wiki_links

console = Console()


def run(args: argparse.Namespace) -> None:
    text = read_source(args.source, console)
    links = find_wiki_links(text)

    if not links:
        console.print("[yellow]Brak linków.[/yellow]")
        return

    table = Table(box=box.SIMPLE_HEAD, show_header=True, header_style="bold white")
    table.add_column("LINIA",    justify="right", no_wrap=True, style="dim")
    table.add_column("CEL",      no_wrap=True, style="bold cyan")
    table.add_column("HREF",     no_wrap=True)
    table.add_column("ETYKIETA", no_wrap=True)

    unknown = 0
    for link in links:
        line = text.count("\n", 0, link.start) + 1
        if link.reference is None:
            unknown += 1
            table.add_row(str(line), link.target, "-", f"[red]{link.display}[/red]")
            continue
        if args.unknown_only:
            continue
        table.add_row(str(line), link.target, link.href, link.display)

    console.print(table)
    console.print(f"  [dim]{len(links)} linków, {unknown} nierozpoznanych[/dim]\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "links",
        help="Wyszukuje linki wiki [[...]] i rozwiązuje ich referencje.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wyszukuje linki wiki [[namespace:book/type/address]] w pliku (albo pod URL)
i pokazuje kotwicę href oraz etykietę dla każdego rozpoznanego adresu.

Przykłady:
  tb links notatki.md
  tb links notatki.md --unknown-only
        """,
    )
    p.add_argument(
        "source",
        metavar="ŹRÓDŁO",
        help="Plik tekstowy albo URL.",
    )
    p.add_argument(
        "--unknown-only",
        action="store_true",
        help="Pokaż tylko linki z nierozpoznanym adresem.",
    )
    p.set_defaults(func=run)
