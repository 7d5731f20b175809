"""
textref — gramatyka referencji podręcznika.

Interfejs publiczny:
    parse_exact, parse_partial, parse_ref — parsowanie adresów
    build_reference, format_reference     — synteza adresów
    classify_list_item                    — rozstrzyganie "rzymska przed literą"
    find_wiki_links, build_href, build_display_reference — linki [[...]]

Typowe użycie:
    from textref import parse_exact

    ref = parse_exact("acme:v1/result/1.2.3(ii)")
    if ref is None:
        ...  # nieprawidłowa referencja, decyduje wywołujący
"""

from .grammar import (
    build_reference,
    classify_list_item,
    format_reference,
    parse_exact,
    parse_partial,
    parse_ref,
)
from .links import (
    UNKNOWN_REFERENCE,
    WikiLink,
    build_display_reference,
    build_href,
    find_wiki_links,
)

__all__ = [
    "build_reference",
    "classify_list_item",
    "format_reference",
    "parse_exact",
    "parse_partial",
    "parse_ref",
    "UNKNOWN_REFERENCE",
    "WikiLink",
    "build_display_reference",
    "build_href",
    "find_wiki_links",
]
