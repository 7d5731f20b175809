"""
textbook/query.py — odczyty ze skompilowanego drzewa.

  iter_sections(chapters)          -> Chapter / Section / Subsection w kolejności źródła
  iter_body_items(items)           -> wszystkie elementy blokowe (w głąb)
  collect_references(item)         -> referencje inline pod elementem
  pinned_references(item)          -> zbiór referencji przypiętych przez element
  is_context_item(item, pinned)    -> czy element wchodzi do kontekstu
  index_references(chapters)       -> referencja → element
  find_exercise(chapters, ch, id)  -> Exercise | None

Unikalność referencji nie jest wymuszana przy kompilacji: przy duplikatach
index_references zachowuje element występujący później w źródle
(walidator raportuje duplikaty jako E_DUPLICATE_REFERENCE).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from data_model.textbook import (
    BodyItem,
    Chapter,
    Exercise,
    InlineReference,
    PageBreak,
    Result,
    SectionItem,
    TextItem,
)

# Wyniki tych typów pomijane w kontekście, chyba że są przypięte
_OPTIONAL_RESULT_TYPES = frozenset({"application", "vista"})


def iter_sections(chapters: Mapping[str, Chapter]) -> Iterator[SectionItem]:
    for chapter in chapters.values():
        yield chapter
        for section in chapter.sections:
            yield section
            yield from section.sections


def iter_body_items(items: Iterable[BodyItem]) -> Iterator[BodyItem]:
    """Przejście w głąb (pre-order) po elementach blokowych i ich dzieciach."""
    for item in items:
        yield item
        if isinstance(item, (TextItem, PageBreak)):
            continue
        body = getattr(item, "body", None)
        if isinstance(body, list):
            yield from iter_body_items(body)


def collect_references(item: BodyItem | SectionItem) -> list[str]:
    """Zsyntetyzowane referencje wszystkich <TYPEref> pod elementem, w kolejności źródła."""
    if isinstance(item, TextItem):
        roots: list[BodyItem] = [item]
    else:
        body = getattr(item, "body", None)
        roots = body if isinstance(body, list) else []
    found: list[str] = []
    for child in iter_body_items(roots):
        if not isinstance(child, TextItem):
            continue
        for inline in child.body:
            if isinstance(inline, InlineReference) and inline.reference:
                found.append(inline.reference)
    return found


def pinned_references(item: BodyItem | SectionItem) -> set[str]:
    """Referencje przypięte przez element (np. ćwiczenie cytujące przykład)."""
    return set(collect_references(item))


def is_context_item(item: BodyItem, pinned: set[str] | None = None) -> bool:
    """
    Filtr treści przekazywanej jako kontekst:
      - łamania stron nigdy,
      - tekst z context-optional nie,
      - wyniki typu application / vista tylko gdy są przypięte.
    """
    match item:
        case PageBreak():
            return False
        case TextItem():
            return not item.context_optional
        case Result() if item.result_type in _OPTIONAL_RESULT_TYPES:
            return pinned is not None and item.reference in pinned
        case _:
            return True


def index_references(chapters: Mapping[str, Chapter]) -> dict[str, SectionItem | BodyItem]:
    index: dict[str, SectionItem | BodyItem] = {}
    for section in iter_sections(chapters):
        index[section.reference] = section
        for item in iter_body_items(section.body):
            reference = getattr(item, "reference", None)
            if reference:
                index[reference] = item
    return index


def find_exercise(
    chapters: Mapping[str, Chapter],
    chapter_id: str,
    exercise_id: str,
) -> Exercise | None:
    chapter = chapters.get(chapter_id)
    if chapter is None:
        return None
    for section in iter_sections({chapter_id: chapter}):
        for item in iter_body_items(section.body):
            if isinstance(item, Exercise) and item.id == exercise_id:
                return item
    return None
