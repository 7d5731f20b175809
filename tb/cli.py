"""
tb — narzędzie CLI kompilatora podręcznika.

Użycie:
  tb <komenda> [opcje]

Komendy:
  compile    Kompiluje źródło podręcznika (Markdown + tagi) do JSON.
  ref        Parsuje adres referencji i wyświetla jego pola.
  links      Wyszukuje linki wiki [[...]] i rozwiązuje ich referencje.
  validate   Waliduje skompilowane drzewo (JSON) albo źródło .md.
"""

from __future__ import annotations

import argparse
import sys

# Windows: terminal może używać cp1252, wymuszamy UTF-8 dla polskich znaków
# w tekstach pomocy argparse.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from tb.commands import compile as cmd_compile
from tb.commands import links as cmd_links
from tb.commands import ref as cmd_ref
from tb.commands import validate as cmd_validate


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tb",
        description="Kompilator podręcznika i gramatyka referencji — narzędzie CLI.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version="tb 0.1.0"
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_compile.add_parser(subparsers)
    cmd_ref.add_parser(subparsers)
    cmd_links.add_parser(subparsers)
    cmd_validate.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
