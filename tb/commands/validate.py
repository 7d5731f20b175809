"""Komenda: tb validate — walidacja skompilowanego drzewa podręcznika."""

from __future__ import annotations

import argparse
import dataclasses
import json
import pathlib
import sys
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

from tb._source import compile_or_exit, read_source
from textbook.config import CompileConfig
from textbook.serialize import chapters_to_json
from validator import validate_chapters

console = Console()


def _load_tree(args: argparse.Namespace) -> dict[str, Any]:
    """JSON z `tb compile` albo źródło .md kompilowane w locie."""
    path = pathlib.Path(args.source)
    if path.suffix.lower() == ".json":
        if not path.exists():
            console.print(f"[red]Brak pliku:[/red] {path}")
            raise SystemExit(1)
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            console.print(f"[red]Błąd parsowania JSON:[/red] {exc}")
            raise SystemExit(1)

    config = CompileConfig.from_env(book=args.book, namespace=args.namespace)
    result = compile_or_exit(config, read_source(args.source, console), console)
    return chapters_to_json(result.chapters)


def run(args: argparse.Namespace) -> None:
    tree = _load_tree(args)
    report = validate_chapters(tree)

    if report.is_valid:
        console.print(f"[green]OK[/green]  Drzewo ({len(tree)} rozdziałów) jest poprawne.")
    else:
        console.print(f"[red]BŁĄD[/red]  {len(report.errors)} błąd(ów).")

        table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
        table.add_column("Kod",      style="yellow", no_wrap=True)
        table.add_column("Ścieżka", style="cyan",   no_wrap=True)
        table.add_column("Komunikat")

        for e in report.errors:
            table.add_row(e.code, e.path, e.message)

        console.print(table)

    if report.warnings and not args.quiet:
        console.print("[yellow]Ostrzeżenia:[/yellow]")
        for w in report.warnings:
            console.print(f"  [yellow]·[/yellow] {w}")

    if args.json_output:
        out = {
            "is_valid": report.is_valid,
            "errors": [dataclasses.asdict(e) for e in report.errors],
            "warnings": report.warnings,
        }
        print(json.dumps(out, ensure_ascii=False, indent=2))

    if not report.is_valid:
        sys.exit(1)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "validate",
        help="Waliduje skompilowane drzewo (JSON) albo źródło .md.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""\
Waliduje drzewo podręcznika (etapy A–C):

  A  JSON Schema           (kształt drzewa, Draft 2020-12)
  B  Duplikaty referencji  (E_DUPLICATE_REFERENCE)
  C  Referencje            (każdy adres przechodzi parser dokładny)

Plik .json jest wczytywany wprost; każde inne źródło jest najpierw kompilowane.

Przykłady:
  tb validate v1.json
  tb validate v1.md --book v1
  tb validate v1.json --json-output
        """,
    )
    p.add_argument(
        "source",
        metavar="ŹRÓDŁO",
        help="Plik .json z `tb compile` albo źródło .md / URL.",
    )
    p.add_argument(
        "--namespace",
        metavar="NS",
        default=None,
        help="Przestrzeń nazw przy kompilacji źródła .md.",
    )
    p.add_argument(
        "--book",
        metavar="KSIĄŻKA",
        default=None,
        help="Identyfikator książki przy kompilacji źródła .md.",
    )
    p.add_argument(
        "--json-output",
        action="store_true",
        help="Wypisz raport walidacji jako JSON na stdout.",
    )
    p.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Nie wypisuj ostrzeżeń.",
    )
    p.set_defaults(func=run)
