"""
textref/links.py — linki wiki [[namespace:book/type/id]] i ich prezentacja.

Link wiki mieści się w jednej linii, a jego cel musi zawierać co najmniej
jeden znak niebiały. Nierozpoznany cel nie jest błędem — link dostaje
reference=None, a warstwa prezentacji pokazuje "Unknown reference".
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from data_model.references import Reference
from textref.grammar import parse_exact

_WIKI_LINK_RE = re.compile(r"\[\[([^\]\n]*?)\]\]")

UNKNOWN_REFERENCE = "Unknown reference"

# Skrócone nazwy typów w etykietach
_DISPLAY_TYPES: dict[str, str] = {
    "exercise": "HW",
}


@dataclass(slots=True)
class WikiLink:
    target: str
    start: int
    end: int
    reference: Reference | None

    @property
    def href(self) -> str:
        return build_href(self.reference) if self.reference else "#"

    @property
    def display(self) -> str:
        return build_display_reference(self.reference) if self.reference else UNKNOWN_REFERENCE


def find_wiki_links(text: str) -> list[WikiLink]:
    """Zwraca linki wiki w kolejności wystąpienia."""
    links: list[WikiLink] = []
    for m in _WIKI_LINK_RE.finditer(text):
        target = m.group(1)
        if not target.strip():
            continue
        links.append(WikiLink(
            target=target,
            start=m.start(),
            end=m.end(),
            reference=parse_exact(target),
        ))
    return links


def build_href(ref: Reference) -> str:
    """Kotwica URL, np. "#result-1.2", "#exercise-1.2(ii)"."""
    href = f"#{ref.type}-{ref.number}"
    if ref.list_item:
        href += f"({ref.list_item})"
    return href


def build_display_reference(ref: Reference) -> str:
    """Etykieta linku, np. "V1 Result 1.2.3", "V1 HW 1.2(ii)"."""
    display_type = _DISPLAY_TYPES.get(ref.type, ref.type)
    display = f"{ref.book.upper()} {display_type[:1].upper()}{display_type[1:]} {ref.number}"
    if ref.list_item:
        display += f"({ref.list_item})"
    return display
