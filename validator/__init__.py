"""
validator — walidator skompilowanego drzewa podręcznika.

Interfejs publiczny:
    TreeValidator     — główny walidator (etapy A–C)
    validate_chapters — skrót z domyślnym schematem
    TEXTBOOK_SCHEMA   — JSON Schema wyniku kompilacji
    ValidationReport, ValidationError, ErrorCode — typy raportu

Typowe użycie:
    from textbook import CompileConfig, compile_textbook, chapters_to_json
    from validator import validate_chapters

    result = compile_textbook(CompileConfig(), source)
    report = validate_chapters(chapters_to_json(result.chapters))
    if not report.is_valid:
        for e in report.errors:
            print(e.code, e.path, e.message)
"""

from .schema import TEXTBOOK_SCHEMA
from .tree_validator import TreeValidator, validate_chapters
from .types import ErrorCode, ValidationError, ValidationReport

__all__ = [
    "ErrorCode",
    "ValidationError",
    "ValidationReport",
    "TEXTBOOK_SCHEMA",
    "TreeValidator",
    "validate_chapters",
]
