"""
textbook/inline.py — podział tekstu akapitu na elementy inline.

Kolejność:
  1. <pagebreak page="N" .../>                     → PageBreak
  2. <TYPEref attrs>etykieta</TYPEref> (jedna linia) → InlineReference
  3. reszta                                        → InlineText

Niezmiennik: "".join(item.content for item in extract_inline_items(t, cfg)) == t
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from data_model.textbook import InlineItem, InlineReference, InlineText, PageBreak
from textbook.config import CompileConfig
from textbook.markup import parse_attributes
from textref.grammar import build_reference

INLINE_REFERENCE_TYPES = (
    "text", "result", "proof", "exercise", "figure", "equation", "algorithm",
)

_PAGEBREAK_RE = re.compile(r'<pagebreak\s+page="(\d+)"[^>]*/>')
_INLINE_REF_RE = re.compile(
    r"<(" + "|".join(INLINE_REFERENCE_TYPES) + r")ref([^>]*)>(.*?)</\1ref>"
)


def _split(text: str, pattern: re.Pattern[str]) -> Iterator[str | re.Match[str]]:
    """Przeplata niepuste fragmenty tekstu z dopasowaniami wzorca."""
    current = 0
    for m in pattern.finditer(text):
        if m.start() > current:
            yield text[current:m.start()]
        yield m
        current = m.end()
    if current < len(text):
        yield text[current:]


def parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _build_inline_reference(m: re.Match[str], config: CompileConfig) -> InlineReference:
    reference_type, raw_attrs, label = m.group(1), m.group(2), m.group(3)
    attrs = parse_attributes(f"<{reference_type}ref{raw_attrs}>")
    ref_id = attrs.get("id") or attrs.get("of")
    roman = attrs.get("roman")
    letter = attrs.get("letter")
    book = attrs.get("book")

    reference = None
    if ref_id:
        list_item = roman or letter
        target = f"{ref_id}({list_item})" if list_item else ref_id
        reference = build_reference(config.namespace, book or config.book, reference_type, target)

    return InlineReference(
        reference_type=reference_type,
        id=ref_id,
        body=label,
        content=m.group(),
        reference=reference,
        roman=roman,
        letter=letter,
        number=parse_int(attrs.get("number")),
        book=book,
    )


def _extract_refs(text: str, config: CompileConfig) -> list[InlineItem]:
    items: list[InlineItem] = []
    for part in _split(text, _INLINE_REF_RE):
        if isinstance(part, str):
            items.append(InlineText(body=part))
        else:
            items.append(_build_inline_reference(part, config))
    return items


def extract_inline_items(text: str, config: CompileConfig) -> list[InlineItem]:
    """Dzieli surowy tekst akapitu na uporządkowane elementy inline."""
    items: list[InlineItem] = []
    for part in _split(text, _PAGEBREAK_RE):
        if isinstance(part, str):
            items.extend(_extract_refs(part, config))
        else:
            items.append(PageBreak(page=int(part.group(1)), content=part.group()))
    return items
