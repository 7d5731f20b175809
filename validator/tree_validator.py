"""
validator/tree_validator.py — walidacja skompilowanego drzewa podręcznika.

TreeValidator.validate(chapters_json) -> ValidationReport

Etapy:
  A — JSON Schema              (jsonschema, Draft 2020-12; fail-fast)
  B — duplikaty referencji     (kompilator ich nie odrzuca)
  C — referencje vs gramatyka  (każda zsyntetyzowana referencja przechodzi parse_exact)

Ostrzeżenia: kontenery (rozdział/sekcja/podsekcja) bez numeru strony.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import jsonschema

from textref.grammar import parse_exact

from .schema import TEXTBOOK_SCHEMA
from .types import ErrorCode, ValidationError, ValidationReport

# Limit błędów; po przekroczeniu dalsze etapy są pomijane
MAX_ERRORS = 50

_SECTION_TYPES = frozenset({"chapter", "section", "subsection"})


def _pointer(parts: tuple[str | int, ...]) -> str:
    return "/" + "/".join(str(p) for p in parts) if parts else "/"


def iter_referenced(chapters_json: dict[str, Any]) -> Iterator[tuple[str, str, dict[str, Any]]]:
    """
    (JSON Pointer, referencja, węzeł) dla każdego elementu z polem `reference`.

    Schodzi wyłącznie przez `sections` i `body` elementów blokowych; referencje
    inline (cytowania) nie są adresami elementów i są pomijane.
    """

    def walk(node: dict[str, Any], path: tuple[str | int, ...]) -> Iterator[tuple[str, str, dict[str, Any]]]:
        reference = node.get("reference")
        if isinstance(reference, str):
            yield _pointer(path), reference, node
        if node.get("type") == "text":
            return
        for key in ("body", "sections"):
            children = node.get(key)
            if not isinstance(children, list):
                continue
            for i, child in enumerate(children):
                if isinstance(child, dict):
                    yield from walk(child, (*path, key, i))

    for chapter_id, chapter in chapters_json.items():
        if isinstance(chapter, dict):
            yield from walk(chapter, (chapter_id,))


class TreeValidator:
    """
    Walidator wyniku textbook.serialize.chapters_to_json.

    Użycie:
        validator = TreeValidator()
        report    = validator.validate(chapters_to_json(result.chapters))
        if not report.is_valid:
            for e in report.errors:
                print(e.code, e.path, e.message)
    """

    def __init__(self, schema: dict[str, Any] | None = None) -> None:
        self._schema = schema if schema is not None else TEXTBOOK_SCHEMA

    # ------------------------------------------------------------------
    # Publiczny interfejs
    # ------------------------------------------------------------------

    def validate(self, chapters_json: dict[str, Any]) -> ValidationReport:
        errors: list[ValidationError] = []
        warnings: list[str] = []

        # A — JSON Schema (fail-fast: dalsze etapy zakładają poprawny kształt)
        self._stage_schema(chapters_json, errors)
        if errors:
            return ValidationReport(is_valid=False, errors=errors, warnings=warnings)

        referenced = list(iter_referenced(chapters_json))

        # B — duplikaty
        self._stage_duplicates(referenced, errors)

        # C — gramatyka
        if len(errors) < MAX_ERRORS:
            self._stage_grammar(referenced, errors)

        self._collect_warnings(referenced, warnings)

        return ValidationReport(is_valid=len(errors) == 0, errors=errors, warnings=warnings)

    # ------------------------------------------------------------------
    # Stage A — JSON Schema
    # ------------------------------------------------------------------

    def _stage_schema(self, chapters_json: dict[str, Any], errors: list[ValidationError]) -> None:
        validator = jsonschema.Draft202012Validator(self._schema)
        for e in validator.iter_errors(chapters_json):
            errors.append(ValidationError(
                code=ErrorCode.SCHEMA_VIOLATION,
                path=_pointer(tuple(e.absolute_path)),
                message=e.message,
            ))
            if len(errors) >= MAX_ERRORS:
                return

    # ------------------------------------------------------------------
    # Stage B — unikalność referencji
    # ------------------------------------------------------------------

    def _stage_duplicates(
        self,
        referenced: list[tuple[str, str, dict[str, Any]]],
        errors: list[ValidationError],
    ) -> None:
        first_seen: dict[str, str] = {}
        for path, reference, _node in referenced:
            previous = first_seen.setdefault(reference, path)
            if previous == path:
                continue
            errors.append(ValidationError(
                code=ErrorCode.DUPLICATE_REFERENCE,
                path=path,
                message=f"Referencja '{reference}' występuje już w {previous}.",
                details={"reference": reference, "first": previous},
            ))
            if len(errors) >= MAX_ERRORS:
                return

    # ------------------------------------------------------------------
    # Stage C — referencje vs gramatyka
    # ------------------------------------------------------------------

    def _stage_grammar(
        self,
        referenced: list[tuple[str, str, dict[str, Any]]],
        errors: list[ValidationError],
    ) -> None:
        for path, reference, _node in referenced:
            if parse_exact(reference) is not None:
                continue
            errors.append(ValidationError(
                code=ErrorCode.REFERENCE_UNPARSEABLE,
                path=f"{path}/reference",
                message=f"Referencja '{reference}' nie jest poprawnym adresem.",
                details={"reference": reference},
            ))
            if len(errors) >= MAX_ERRORS:
                return

    # ------------------------------------------------------------------
    # Ostrzeżenia
    # ------------------------------------------------------------------

    def _collect_warnings(
        self,
        referenced: list[tuple[str, str, dict[str, Any]]],
        warnings: list[str],
    ) -> None:
        for path, reference, node in referenced:
            if node.get("type") in _SECTION_TYPES and "page" not in node:
                warnings.append(f"{path}: brak numeru strony dla {reference}")


def validate_chapters(chapters_json: dict[str, Any]) -> ValidationReport:
    """Skrót: walidacja domyślnym schematem."""
    return TreeValidator().validate(chapters_json)
