"""
textbook/tags.py — budowanie elementów blokowych z tagów pseudo-HTML.

build_element(tag, raw, context, config, diagnostics) -> list[BodyItem]
parse_body(text, context, config, diagnostics)        -> list[BodyItem]

Tag → element:
  result / proof / equation / algorithm / texttable / exercise / figure
      → kontener z referencją (id; dla proof: of) i rekurencyjnym body
  ol               → ListBlock (ListItem + PageBreak w kolejności źródła)
  pagebreak        → PageBreak
  context-optional → zawartość bez opakowania, TextItem.context_optional=True
  UNKNOWN          → pomijany (liczony w CompileDiagnostics)

Kontekst (parent_type, parent_id) służy do syntezy referencji punktów list:
kontener z id przekazuje dzieciom własny kontekst, bez id — odziedziczony.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from data_model.textbook import (
    Algorithm,
    BodyItem,
    BodyItemType,
    Equation,
    Exercise,
    Fence,
    Figure,
    ListBlock,
    ListItem,
    PageBreak,
    Proof,
    Result,
    Table,
    TextItem,
)
from textbook.blocks import FENCE_MARKER, Chunk, ChunkKind, iter_chunks
from textbook.config import CompileConfig
from textbook.diagnostics import CompileDiagnostics
from textbook.inline import extract_inline_items, parse_int
from textbook.markup import OpeningTag, split_element
from textbook.vocabulary import TagKind, classify_tag
from textref.grammar import build_reference

_FENCE_RE       = re.compile(r"^```(\w+)?\n([\s\S]*)\n```$")
_LIST_ENTRY_RE  = re.compile(r"(<li[^>]*>.*?</li>|<pagebreak[^>]*/>)", re.DOTALL | re.IGNORECASE)
_PAGE_ATTR_RE   = re.compile(r'page="(\d+)"')

_LIST_TYPES = ("roman", "letter")


@dataclass(frozen=True, slots=True)
class ParentContext:
    """Rodzic dla syntezy referencji, np. ("exercise", "1.2") albo ("text", "1.2")."""
    parent_type: str
    parent_id: str | None


# ---------------------------------------------------------------------------
# Atrybuty
# ---------------------------------------------------------------------------

# Atrybuty przyjmowane przez dany tag; pozostałe są ignorowane
_ACCEPTED_ATTRIBUTES: dict[TagKind, frozenset[str]] = {
    TagKind.RESULT:    frozenset({"id", "type", "name", "page"}),
    TagKind.PROOF:     frozenset({"of", "page"}),
    TagKind.EQUATION:  frozenset({"id", "page"}),
    TagKind.ALGORITHM: frozenset({"id", "name", "page"}),
    TagKind.TEXTTABLE: frozenset({"id", "name", "page"}),
    TagKind.EXERCISE:  frozenset({"id", "name", "page"}),
    TagKind.FIGURE:    frozenset({"id", "name", "page"}),
    TagKind.OL:        frozenset({"type", "page"}),
    TagKind.PAGEBREAK: frozenset({"page"}),
}

# Atrybut "type" zmienia nazwę pola
_RENAMED_ATTRIBUTES: dict[tuple[TagKind, str], str] = {
    (TagKind.RESULT, "type"): "result_type",
    (TagKind.OL, "type"):     "list_type",
}

_CONTAINERS: dict[TagKind, tuple[type, BodyItemType]] = {
    TagKind.RESULT:    (Result,    BodyItemType.RESULT),
    TagKind.PROOF:     (Proof,     BodyItemType.PROOF),
    TagKind.EQUATION:  (Equation,  BodyItemType.EQUATION),
    TagKind.ALGORITHM: (Algorithm, BodyItemType.ALGORITHM),
    TagKind.TEXTTABLE: (Table,     BodyItemType.TABLE),
    TagKind.EXERCISE:  (Exercise,  BodyItemType.EXERCISE),
    TagKind.FIGURE:    (Figure,    BodyItemType.FIGURE),
}


def attribute_fields(kind: TagKind, attrs: dict[str, str]) -> dict[str, Any]:
    """Mapuje atrybuty tagu na pola elementu (page → int, type → *_type)."""
    accepted = _ACCEPTED_ATTRIBUTES.get(kind, frozenset())
    fields: dict[str, Any] = {}
    for key, value in attrs.items():
        if key not in accepted:
            continue
        name = _RENAMED_ATTRIBUTES.get((kind, key), key)
        match name:
            case "page":
                fields["page"] = parse_int(value)
            case "list_type":
                if value in _LIST_TYPES:
                    fields["list_type"] = value
            case _:
                fields[name] = value
    return fields


# ---------------------------------------------------------------------------
# Budowniczowie
# ---------------------------------------------------------------------------

def _build_container(
    kind: TagKind,
    body: str,
    attrs: dict[str, str],
    context: ParentContext,
    config: CompileConfig,
    diagnostics: CompileDiagnostics,
) -> BodyItem:
    cls, item_type = _CONTAINERS[kind]
    fields = attribute_fields(kind, attrs)
    reference_id = fields.get("of") if kind is TagKind.PROOF else fields.get("id")

    child_context = ParentContext(item_type.value, reference_id) if reference_id else context
    reference = (
        build_reference(config.namespace, config.book, item_type.value, reference_id)
        if reference_id else None
    )
    return cls(
        **fields,
        reference=reference,
        body=parse_body(body, child_context, config, diagnostics),
        content=body,
    )


def _build_list(
    body: str,
    attrs: dict[str, str],
    context: ParentContext,
    config: CompileConfig,
    diagnostics: CompileDiagnostics,
) -> ListBlock:
    entries: list[ListItem | PageBreak] = []

    for m in _LIST_ENTRY_RE.finditer(body):
        entry = m.group(1)
        if entry.lower().startswith("<pagebreak"):
            page = _PAGE_ATTR_RE.search(entry)
            if not page or not int(page.group(1)):
                continue
            entries.append(PageBreak(page=int(page.group(1)), content=entry))
            continue

        li_attrs, li_body = split_element(entry, self_closing=False)
        roman = li_attrs.get("roman")
        letter = li_attrs.get("letter")
        marker = roman or letter
        reference = None
        if marker and context.parent_id is not None:
            reference = build_reference(
                config.namespace, config.book, context.parent_type,
                f"{context.parent_id}({marker})",
            )
        entries.append(ListItem(
            number=parse_int(li_attrs.get("value")),
            roman=roman,
            letter=letter,
            reference=reference,
            body=parse_body(li_body, context, config, diagnostics),
            content=entry,
        ))

    return ListBlock(**attribute_fields(TagKind.OL, attrs), body=entries, content=body)


def _build_fence(text: str) -> Fence | None:
    m = _FENCE_RE.match(text)
    if not m:
        return None
    return Fence(info=m.group(1), body=m.group(2), content=text)


def build_element(
    tag: OpeningTag,
    raw: str,
    context: ParentContext,
    config: CompileConfig,
    diagnostics: CompileDiagnostics,
) -> list[BodyItem]:
    """Buduje elementy blokowe z dosłownego tekstu elementu `raw`."""
    kind = classify_tag(tag.name)
    attrs, body = split_element(raw, tag.self_closing)
    if tag.self_closing and kind is not TagKind.PAGEBREAK:
        # <result id="1"/>, <context-optional/>: element bez wnętrza
        body = ""

    match kind:
        case TagKind.OL:
            return [_build_list(body, attrs, context, config, diagnostics)]
        case TagKind.PAGEBREAK:
            return [PageBreak(**attribute_fields(kind, attrs), content=raw)]
        case TagKind.CONTEXT_OPTIONAL:
            items = parse_body(body, context, config, diagnostics)
            for item in items:
                if isinstance(item, TextItem):
                    item.context_optional = True
            return items
        case (
            TagKind.RESULT | TagKind.PROOF | TagKind.EQUATION | TagKind.ALGORITHM
            | TagKind.TEXTTABLE | TagKind.EXERCISE | TagKind.FIGURE
        ):
            return [_build_container(kind, body, attrs, context, config, diagnostics)]
        case TagKind.UNKNOWN:
            diagnostics.record_drop(tag.name, context.parent_id, raw)
            return []


def parse_body(
    text: str,
    context: ParentContext,
    config: CompileConfig,
    diagnostics: CompileDiagnostics,
) -> list[BodyItem]:
    """Rekurencyjny parser treści: fragmenty → tagi / bloki ``` / tekst."""
    items: list[BodyItem] = []
    for chunk in iter_chunks(text, context.parent_id):
        match chunk:
            case Chunk(kind=ChunkKind.TAG, tag=OpeningTag() as tag):
                items.extend(build_element(tag, chunk.text, context, config, diagnostics))
            case Chunk(kind=ChunkKind.FENCE):
                fence = _build_fence(chunk.text)
                if fence is None:
                    diagnostics.record_drop(FENCE_MARKER, context.parent_id, chunk.text)
                else:
                    items.append(fence)
            case _:
                items.append(TextItem(
                    body=extract_inline_items(chunk.text, config),
                    content=chunk.text,
                ))
    return items
