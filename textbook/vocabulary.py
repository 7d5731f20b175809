"""
textbook/vocabulary.py — zamknięty słownik tagów pseudo-HTML.

Każda nazwa tagu spoza słownika klasyfikowana jest jawnie jako UNKNOWN;
polityka "nieznany tag jest pomijany" żyje w jednym miejscu
(textbook.tags.build_element).
"""

from __future__ import annotations

from enum import StrEnum


class TagKind(StrEnum):
    OL               = "ol"
    PROOF            = "proof"
    PAGEBREAK        = "pagebreak"
    EQUATION         = "equation"
    ALGORITHM        = "algorithm"
    TEXTTABLE        = "texttable"
    RESULT           = "result"
    EXERCISE         = "exercise"
    FIGURE           = "figure"
    CONTEXT_OPTIONAL = "context-optional"
    UNKNOWN          = "unknown"


_BY_NAME: dict[str, TagKind] = {
    kind.value: kind for kind in TagKind if kind is not TagKind.UNKNOWN
}

# Język informacyjny bloku ``` z metadanymi strony
FRONTMATTER_LANGUAGE = "toml"


def classify_tag(name: str) -> TagKind:
    return _BY_NAME.get(name.lower(), TagKind.UNKNOWN)


def is_recognized(name: str) -> bool:
    return classify_tag(name) is not TagKind.UNKNOWN
