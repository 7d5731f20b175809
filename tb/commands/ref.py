"""Komenda: tb ref — parsowanie adresu referencji."""

from __future__ import annotations

import argparse
import dataclasses
import sys

from rich import box
from rich.console import Console
from rich.table import Table

from textref.grammar import parse_ref
from textref.links import build_display_reference, build_href

console = Console()


def run(args: argparse.Namespace) -> None:
    text: str = args.reference
    ref = parse_ref(text, partial=args.partial)

    if ref is None:
        console.print(f"[red]Nieprawidłowa referencja:[/red] {text}")
        sys.exit(1)

    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Pole",    style="cyan", no_wrap=True)
    table.add_column("Wartość")

    for f in dataclasses.fields(ref):
        value = getattr(ref, f.name)
        if value is None or value is False:
            continue
        table.add_row(f.name, str(value))

    console.print(table)

    if not args.partial:
        console.print(f"  [dim]kanoniczna:[/dim] {ref}")
        console.print(f"  [dim]href:[/dim]       {build_href(ref)}")
        console.print(f"  [dim]etykieta:[/dim]   {build_display_reference(ref)}")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "ref",
        help="Parsuje adres referencji i wyświetla jego pola.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Parsuje adres referencji postaci namespace:book/type/address.

Tryb dokładny (domyślny) wymaga pełnego, poprawnego adresu.
Tryb --partial przyjmuje dowolny prefiks poprawnego adresu; ogon po
"namespace:book/", który nie pasuje do gramatyki, trafia do fuzzy_query.

Przykłady:
  tb ref acme:v1/result/1.2.3
  tb ref "acme:v1/exercise/1.2(ii..iv)"
  tb ref acme:v1/text/1. --partial
  tb ref "acme:v1/granica ciągu" --partial
        """,
    )
    p.add_argument(
        "reference",
        metavar="REFERENCJA",
        help="Adres referencji, np. acme:v1/result/1.2(ii).",
    )
    p.add_argument(
        "--partial",
        action="store_true",
        help="Tryb częściowy (prefiks adresu, fuzzy_query).",
    )
    p.set_defaults(func=run)
