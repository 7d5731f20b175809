"""
textbook/markup.py — pomocnicze operacje na pseudo-HTML źródła.

  find_opening_tag(text, anchored)  -> OpeningTag | None
  parse_attributes(tag_text)        -> dict[str, str]      (BeautifulSoup)
  split_element(content, self_closing) -> (attrs, body)

Tagi są "lekkie": nie budujemy DOM całego elementu, bo wnętrze to dalej
Markdown (LaTeX, znaki '<' w formułach) i musi zostać dosłowne. Parser HTML
dostaje wyłącznie tekst tagu otwierającego.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

# Tag otwierający: nazwa + opcjonalny ukośnik samozamykający.
# Wartości atrybutów w cudzysłowach mogą zawierać '/' i '>'.
_TAG_BODY = r"<([a-zA-Z0-9_-]+)(?:[^>/\"']|\"[^\"]*\"|'[^']*')*(/)?>"
_OPENING_TAG_RE          = re.compile(_TAG_BODY)
_ANCHORED_OPENING_TAG_RE = re.compile("^" + _TAG_BODY)

_LEADING_TAG_RE  = re.compile(r"^\s*" + _TAG_BODY)
_TRAILING_TAG_RE = re.compile(r"</[^<]*$")


@dataclass(frozen=True, slots=True)
class OpeningTag:
    name: str
    self_closing: bool
    end: int = 0  # pozycja za tagiem otwierającym

    @property
    def closing(self) -> str:
        """Znacznik zamykający małymi literami (porównywany bez rozróżniania wielkości liter)."""
        return f"</{self.name}>"


def find_opening_tag(text: str, anchored: bool = False) -> OpeningTag | None:
    """
    Szuka tagu otwierającego.

    anchored=False — pierwszy tag w dowolnym miejscu (tokeny html_block),
    anchored=True  — tylko na początku tekstu (fragmenty treści zagnieżdżonej).
    """
    m = _ANCHORED_OPENING_TAG_RE.match(text) if anchored else _OPENING_TAG_RE.search(text)
    if not m:
        return None
    return OpeningTag(name=m.group(1).lower(), self_closing=m.group(2) == "/", end=m.end())


def parse_attributes(tag_text: str) -> dict[str, str]:
    """Atrybuty pierwszego tagu w tag_text (nazwy małymi literami)."""
    soup = BeautifulSoup(tag_text, "html.parser", multi_valued_attributes=None)
    element = soup.find(True)
    if not isinstance(element, Tag):
        return {}
    return {str(k): str(v) for k, v in element.attrs.items()}


def split_element(content: str, self_closing: bool) -> tuple[dict[str, str], str]:
    """
    Rozdziela element na atrybuty tagu otwierającego i dosłowne wnętrze.

    Dla elementów niesamozamykających z wnętrza usuwany jest tag otwierający
    oraz ostatni tag zamykający (z tym, co po nim), a wynik jest przycinany.
    """
    m = _OPENING_TAG_RE.search(content)
    attrs = parse_attributes(m.group()) if m else {}
    if self_closing:
        return attrs, content
    body = _LEADING_TAG_RE.sub("", content, count=1)
    body = _TRAILING_TAG_RE.sub("", body, count=1)
    return attrs, body.strip()
