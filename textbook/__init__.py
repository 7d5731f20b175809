"""
textbook — kompilator źródła podręcznika (Markdown + pseudo-HTML) do drzewa.

Użycie:
    from textbook import CompileConfig, compile_textbook

    result = compile_textbook(CompileConfig(namespace="acme", book="v1"), source)
    result.chapters["1"].sections[0].body
    result.diagnostics.dropped_count
"""

from .compiler import CompileResult, ContainerStack, compile_textbook, parse_textbook
from .config import CompileConfig
from .diagnostics import CompileDiagnostics, DroppedTag
from .errors import (
    InvalidMetadataError,
    MissingPageMetadataError,
    OrphanHeadingError,
    TextbookError,
    UnterminatedTagError,
)
from .inline import extract_inline_items
from .serialize import chapters_to_json, dumps_chapters, to_json_dict
from .source import load_source

__all__ = [
    "CompileResult",
    "ContainerStack",
    "compile_textbook",
    "parse_textbook",
    "CompileConfig",
    "CompileDiagnostics",
    "DroppedTag",
    "TextbookError",
    "MissingPageMetadataError",
    "InvalidMetadataError",
    "OrphanHeadingError",
    "UnterminatedTagError",
    "extract_inline_items",
    "chapters_to_json",
    "dumps_chapters",
    "to_json_dict",
    "load_source",
]
