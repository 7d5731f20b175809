"""
textbook/blocks.py — składanie bloków rozciętych przez tokenizer.

Dwa poziomy:
  stitch_html_block(tokens, start, ...) — płaski strumień tokenów markdown-it:
      tag otwarty w tokenie html_block, a zamknięty kilka tokenów dalej,
      sklejany jest z powrotem w jeden tekst (akapity rozdzielone pustą
      linią, bloki ``` odtwarzane razem ze znacznikami i językiem).
  iter_chunks(text, ...) — treść zagnieżdżona (wnętrze tagu) dzielona na
      fragmenty po pustych liniach; fragmenty tagu / bloku ``` sklejane
      aż do znacznika zamykającego.

Brak znacznika zamykającego dla rozpoznanego tagu (albo bloku ```) kończy
się UnterminatedTagError — nigdy odczytem poza końcem wejścia.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import StrEnum

from markdown_it.token import Token

from textbook.errors import UnterminatedTagError
from textbook.markup import OpeningTag, find_opening_tag
from textbook.vocabulary import is_recognized

BLOCK_SEPARATOR = "\n\n"
FENCE_MARKER = "```"


# ---------------------------------------------------------------------------
# Poziom tokenów
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class StitchedBlock:
    """
    - text:       sklejony, dosłowny tekst elementu (z tagami)
    - last_index: indeks ostatniego skonsumowanego tokenu
    - terminated: False gdy do końca strumienia nie było tagu zamykającego
    """
    tag: OpeningTag
    text: str
    last_index: int
    terminated: bool = True


def token_source(token: Token) -> str:
    """Tekst tokenu w postaci nadającej się do ponownego parsowania."""
    if token.type == "fence":
        return f"{token.markup}{token.info}\n{token.content}{token.markup}"
    return token.content


def stitch_html_block(
    tokens: Sequence[Token],
    start: int,
    tag: OpeningTag,
    container_id: str | None = None,
) -> StitchedBlock:
    """
    Skleja element HTML zaczynający się w tokens[start].

    Nierozpoznany tag bez zamknięcia konsumuje tylko swój token
    (terminated=False); rozpoznany → UnterminatedTagError.
    """
    if tag.self_closing:
        return StitchedBlock(tag=tag, text=tokens[start].content, last_index=start)

    closing = tag.closing
    text = ""
    j = start
    while j < len(tokens) and closing not in tokens[j].content.lower():
        # Tokeny paragraph_open/close mają pustą treść; separator "\n"
        # dokładany przy każdym z nich odtwarza pustą linię między akapitami.
        if text and not text.endswith(BLOCK_SEPARATOR):
            text += "\n"
        text += token_source(tokens[j])
        j += 1

    if j >= len(tokens):
        if is_recognized(tag.name):
            raise UnterminatedTagError(tag.name, container_id)
        return StitchedBlock(tag=tag, text=tokens[start].content, last_index=start, terminated=False)

    if j != start and not text.endswith(BLOCK_SEPARATOR):
        text += "\n"
    text += tokens[j].content
    return StitchedBlock(tag=tag, text=text, last_index=j)


# ---------------------------------------------------------------------------
# Poziom treści zagnieżdżonej
# ---------------------------------------------------------------------------

class ChunkKind(StrEnum):
    TAG   = "tag"
    FENCE = "fence"
    TEXT  = "text"


@dataclass(slots=True)
class Chunk:
    kind: ChunkKind
    text: str
    tag: OpeningTag | None = None


def split_chunks(text: str) -> list[str]:
    """Fragmenty rozdzielone pustą linią (bez fragmentów pustych/białych)."""
    return [p for p in text.split(BLOCK_SEPARATOR) if p.strip()]


def _find_closing(chunks: list[str], after: int, marker: str) -> int | None:
    for k in range(after + 1, len(chunks)):
        if marker in chunks[k].lower():
            return k
    return None


def iter_chunks(text: str, container_id: str | None = None) -> Iterator[Chunk]:
    """Dzieli treść na fragmenty TAG / FENCE / TEXT, sklejając elementy wielofragmentowe."""
    chunks = split_chunks(text)
    i = 0
    while i < len(chunks):
        chunk = chunks[i]
        trimmed = chunk.lstrip()
        tag = find_opening_tag(trimmed, anchored=True)

        if tag is not None and tag.self_closing and trimmed[tag.end:].strip():
            # <pagebreak .../> otwierający akapit zostaje w tekście jako element inline
            yield Chunk(ChunkKind.TEXT, chunk)
            i += 1
            continue

        if tag is not None:
            recognized = is_recognized(tag.name)
            chunk = trimmed
            if not tag.self_closing and tag.closing not in chunk.lower():
                k = _find_closing(chunks, i, tag.closing)
                if k is None:
                    if recognized:
                        raise UnterminatedTagError(tag.name, container_id)
                else:
                    chunk = BLOCK_SEPARATOR.join([chunk, *chunks[i + 1:k + 1]])
                    i = k
            # Nierozpoznany tag na początku akapitu to zwykły tekst (np. <em>)
            yield Chunk(ChunkKind.TAG if recognized else ChunkKind.TEXT, chunk, tag)
            i += 1
            continue

        if trimmed.startswith(FENCE_MARKER):
            if FENCE_MARKER not in trimmed[len(FENCE_MARKER):]:
                k = _find_closing(chunks, i, FENCE_MARKER)
                if k is None:
                    raise UnterminatedTagError(FENCE_MARKER, container_id)
                chunk = BLOCK_SEPARATOR.join(chunks[i:k + 1])
                i = k
            yield Chunk(ChunkKind.FENCE, chunk.strip())
            i += 1
            continue

        yield Chunk(ChunkKind.TEXT, chunk)
        i += 1
