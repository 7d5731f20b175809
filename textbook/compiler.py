"""
textbook/compiler.py — kompilacja źródła podręcznika do drzewa rozdziałów.

compile_textbook(config, text) -> CompileResult
parse_textbook(config, text)   -> dict[str, Chapter]

Jeden liniowy przebieg po płaskim strumieniu tokenów markdown-it:
  heading_open h1/h2/h3  → nowy Chapter / Section / Subsection
  heading_open h4+       → StandaloneHeading w najgłębszym otwartym kontenerze
  fence ```toml          → metadane (page) najgłębszego otwartego kontenera
  html_block             → sklejenie elementu + Tag Handler Dispatch
  paragraph_open         → parse_body treści akapitu

Tekst nagłówka ma postać "<id>: <nazwa>"; referencja kontenera to
"<namespace>:<book>/text/<id>". Treść przed pierwszym rozdziałem jest pomijana,
ale blok ```toml jest sprawdzany także tam.
"""

from __future__ import annotations

import re
import tomllib
from collections.abc import Sequence
from dataclasses import dataclass, field

from markdown_it import MarkdownIt
from markdown_it.token import Token

from data_model.textbook import (
    BodyItem,
    Chapter,
    Fence,
    Section,
    SectionItem,
    StandaloneHeading,
    Subsection,
)
from textbook.blocks import BLOCK_SEPARATOR, stitch_html_block, token_source
from textbook.config import CompileConfig
from textbook.diagnostics import CompileDiagnostics
from textbook.errors import InvalidMetadataError, MissingPageMetadataError, OrphanHeadingError
from textbook.markup import find_opening_tag
from textbook.tags import ParentContext, build_element, parse_body
from textbook.vocabulary import FRONTMATTER_LANGUAGE
from textref.grammar import build_reference

_CONTAINER_TYPE = "text"
_HEADING_SEPARATOR = ": "

# Starsza, jednoliniowa forma metadanych: ```toml page = 12```
_LEGACY_METADATA_RE = re.compile(r"^```(?:toml)?\s*page\s*=\s*(\d+)\s*```$")


def markdown_parser() -> MarkdownIt:
    return MarkdownIt("js-default", {"html": True, "typographer": True})


# ---------------------------------------------------------------------------
# Stos kontenerów
# ---------------------------------------------------------------------------

class ContainerStack:
    """
    Otwarte kontenery, indeksowane poziomem nagłówka (1 = rozdział).

    Otwarcie kontenera na poziomie N zamyka wszystkie kontenery na
    poziomach >= N; brak rodzica (poziom N-1) to OrphanHeadingError.
    """

    def __init__(self) -> None:
        self._open: list[SectionItem] = []

    def push(self, level: int, item: SectionItem) -> None:
        del self._open[level - 1:]
        self._open.append(item)

    def peek(self, level: int) -> SectionItem | None:
        return self._open[level - 1] if len(self._open) >= level else None

    def innermost(self) -> SectionItem | None:
        return self._open[-1] if self._open else None

    def open_chapter(self, chapter: Chapter) -> None:
        self.push(1, chapter)

    def open_section(self, section: Section, heading: str) -> None:
        chapter = self.peek(1)
        if not isinstance(chapter, Chapter):
            raise OrphanHeadingError(2, heading)
        chapter.sections.append(section)
        self.push(2, section)

    def open_subsection(self, subsection: Subsection, heading: str) -> None:
        section = self.peek(2)
        if not isinstance(section, Section):
            raise OrphanHeadingError(3, heading)
        section.sections.append(subsection)
        self.push(3, subsection)


# ---------------------------------------------------------------------------
# Wynik
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class CompileResult:
    """
    - chapters:    id rozdziału → Chapter, w kolejności źródła
    - diagnostics: pominięte tagi (kompilacja ich nie odrzuca)
    """
    chapters: dict[str, Chapter] = field(default_factory=dict)
    diagnostics: CompileDiagnostics = field(default_factory=CompileDiagnostics)


# ---------------------------------------------------------------------------
# Pomocnicze
# ---------------------------------------------------------------------------

def split_heading(text: str) -> tuple[str, str]:
    """'1.2: Granice: definicja' → ('1.2', 'Granice: definicja')."""
    head, sep, rest = text.partition(_HEADING_SEPARATOR)
    return head, rest if sep else ""


def _append_content(container: SectionItem, text: str) -> None:
    container.content = (
        container.content + BLOCK_SEPARATOR + text if container.content else text
    )


def _read_page(source: str, container_id: str | None) -> int:
    try:
        metadata = tomllib.loads(source)
    except tomllib.TOMLDecodeError as e:
        raise InvalidMetadataError(container_id, str(e)) from e
    if "page" not in metadata:
        raise MissingPageMetadataError(container_id)
    page = metadata["page"]
    if isinstance(page, bool) or not isinstance(page, int):
        raise InvalidMetadataError(container_id, f"page must be an integer, got {page!r}")
    return page


class _Compiler:
    def __init__(self, config: CompileConfig) -> None:
        self.config = config
        self.stack = ContainerStack()
        self.result = CompileResult()

    def _reference(self, container_id: str) -> str:
        return build_reference(self.config.namespace, self.config.book, _CONTAINER_TYPE, container_id)

    def _context(self, container: SectionItem) -> ParentContext:
        return ParentContext(_CONTAINER_TYPE, container.id)

    def _add(self, container: SectionItem, items: list[BodyItem], source: str) -> None:
        if not items:
            return
        container.body.extend(items)
        _append_content(container, source)

    # --- tokeny -----------------------------------------------------------

    def heading(self, level: int, text: str) -> None:
        if level >= 4:
            container = self.stack.innermost()
            if container is not None:
                container.body.append(StandaloneHeading(level=level, body=text, content=text))
            return

        container_id, name = split_heading(text)
        reference = self._reference(container_id)
        match level:
            case 1:
                chapter = Chapter(id=container_id, name=name, reference=reference)
                self.result.chapters[container_id] = chapter
                self.stack.open_chapter(chapter)
            case 2:
                self.stack.open_section(Section(id=container_id, name=name, reference=reference), text)
            case 3:
                self.stack.open_subsection(Subsection(id=container_id, name=name, reference=reference), text)

    def fence(self, token: Token) -> None:
        container = self.stack.innermost()
        if token.info.strip() == FRONTMATTER_LANGUAGE:
            # Metadane są sprawdzane zawsze, także przed pierwszym rozdziałem
            page = _read_page(token.content, container.id if container else None)
            if container is not None:
                container.page = page
            return
        if container is None:
            return
        source = token_source(token)
        self._add(container, [Fence(info=token.info or None, body=token.content.removesuffix("\n"), content=source)], source)

    def html_block(self, tokens: Sequence[Token], i: int) -> int:
        """Zwraca indeks ostatniego skonsumowanego tokenu."""
        container = self.stack.innermost()
        if container is None:
            return i
        tag = find_opening_tag(tokens[i].content.lstrip(), anchored=True)
        if tag is None:
            return i

        block = stitch_html_block(tokens, i, tag, container.id)
        context = self._context(container)
        diagnostics = self.result.diagnostics
        raw = block.text.strip()

        if tag.self_closing and raw[tag.end:].strip():
            # <pagebreak .../> z tekstem za nim: akapit z elementem inline
            items = parse_body(raw, context, self.config, diagnostics)
        else:
            items = build_element(tag, raw, context, self.config, diagnostics)
        self._add(container, items, raw)
        return block.last_index

    def paragraph(self, text: str) -> None:
        container = self.stack.innermost()
        if container is None:
            return
        legacy = _LEGACY_METADATA_RE.match(text.strip())
        if legacy:
            container.page = int(legacy.group(1))
            return
        items = parse_body(text, self._context(container), self.config, self.result.diagnostics)
        self._add(container, items, text)

    def run(self, text: str) -> CompileResult:
        tokens = markdown_parser().parse(text)
        i = 0
        while i < len(tokens):
            token = tokens[i]
            match token.type:
                case "heading_open":
                    self.heading(int(token.tag[1:]), tokens[i + 1].content)
                    i += 1
                case "fence":
                    self.fence(token)
                case "html_block":
                    i = self.html_block(tokens, i)
                case "paragraph_open":
                    self.paragraph(tokens[i + 1].content)
                    i += 1
            i += 1
        return self.result


# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------

def compile_textbook(config: CompileConfig, text: str) -> CompileResult:
    """
    Kompiluje źródło Markdown + pseudo-HTML do drzewa rozdziałów.

    Błędy fatalne (TextbookError) przerywają kompilację bez częściowego wyniku.
    """
    return _Compiler(config).run(text)


def parse_textbook(config: CompileConfig, text: str) -> dict[str, Chapter]:
    """Rozdziały po id — bez diagnostyki."""
    return compile_textbook(config, text).chapters
