"""
data_model/references.py — adresy referencji podręcznika.

Postać kanoniczna:
  namespace:book/type/chapter[.section[.subsection]][(listItem)][..chapterEnd[.sectionEnd[.subsectionEnd]][(listItemEnd)]]
lub zakres punktów listy w obrębie jednego adresu:
  namespace:book/type/chapter[.section[.subsection]](listItemRangeStart..listItemRangeEnd)

Reference jest wartością (nie encją) — parser ją tworzy, nikt jej nie mutuje.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ListItemKind(StrEnum):
    """Rodzaj numeracji punktu listy. Rzymska ma pierwszeństwo przed literą."""
    ROMAN  = "roman"
    LETTER = "letter"


def _number(chapter: str | None, section: str | None, subsection: str | None) -> str:
    parts = [p for p in (chapter, section, subsection) if p is not None]
    return ".".join(parts)


@dataclass(frozen=True, slots=True)
class Reference:
    """
    Dokładnie sparsowana referencja.

    - namespace, book, type: prefiks adresu, np. "acme", "v1", "result"
    - chapter:     cyfry albo pojedyncza wielka litera ("1", "A")
    - section, subsection: ciągi cyfr (opcjonalnie)
    - list_item:   punkt listy ("ii", "b")
    - *_end:       koniec pełnego zakresu ("..2.1.1(iii)")
    - list_item_range_start / list_item_range_end: zakres "(ii..xv)"

    Pełny zakres i zakres punktów listy wykluczają się wzajemnie.
    """
    namespace: str
    book: str
    type: str
    chapter: str
    section: str | None = None
    subsection: str | None = None
    list_item: str | None = None
    chapter_end: str | None = None
    section_end: str | None = None
    subsection_end: str | None = None
    list_item_end: str | None = None
    list_item_range_start: str | None = None
    list_item_range_end: str | None = None

    @property
    def is_range(self) -> bool:
        return self.chapter_end is not None

    @property
    def is_list_item_range(self) -> bool:
        return self.list_item_range_start is not None

    @property
    def number(self) -> str:
        """Numer początku adresu, np. "1.2.3"."""
        return _number(self.chapter, self.section, self.subsection)

    def __str__(self) -> str:
        out = f"{self.namespace}:{self.book}/{self.type}/{self.number}"
        if self.list_item_range_start is not None:
            return out + f"({self.list_item_range_start}..{self.list_item_range_end})"
        if self.list_item is not None:
            out += f"({self.list_item})"
        if self.chapter_end is not None:
            out += ".." + _number(self.chapter_end, self.section_end, self.subsection_end)
            if self.list_item_end is not None:
                out += f"({self.list_item_end})"
        return out


@dataclass(slots=True)
class PartialReference:
    """
    Wynik parsowania częściowego (użytkownik wciąż pisze referencję).

    Wypełnione są tylko pola, które udało się dopasować. Gdy ogon po
    "namespace:book/" nie pasuje do gramatyki, trafia w całości do
    fuzzy_query (wyszukiwanie przybliżone / autouzupełnianie).
    """
    namespace: str | None = None
    book: str | None = None
    type: str | None = None
    chapter: str | None = None
    section: str | None = None
    subsection: str | None = None
    list_item: str | None = None
    list_item_range_start: str | None = None
    list_item_range_end: str | None = None
    has_range: bool = False
    chapter_end: str | None = None
    section_end: str | None = None
    subsection_end: str | None = None
    list_item_end: str | None = None
    fuzzy_query: str | None = None

    @property
    def is_fuzzy(self) -> bool:
        return self.fuzzy_query is not None
