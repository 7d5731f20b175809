"""
validator/types.py — kody błędów i struktury raportu walidacji.

ValidationError — pojedynczy błąd z kodem, ścieżką JSON Pointer
    i komunikatem.
ValidationReport — wynik walidacji: is_valid, errors, warnings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Stałe kody błędów walidatora (etapy A–C)."""

    # A — JSON Schema
    SCHEMA_VIOLATION       = "E_SCHEMA_VIOLATION"

    # B — unikalność referencji
    DUPLICATE_REFERENCE    = "E_DUPLICATE_REFERENCE"

    # C — poprawność referencji względem gramatyki
    REFERENCE_UNPARSEABLE  = "E_REFERENCE_UNPARSEABLE"


@dataclass(slots=True)
class ValidationError:
    """
    - code:    stały identyfikator klasy błędu (ErrorCode)
    - path:    JSON Pointer do miejsca błędu, np. "/1/sections/0/body/3"
    - message: czytelny opis błędu
    - details: opcjonalny słownik z dodatkowymi danymi
    """

    code: ErrorCode
    path: str
    message: str
    details: dict[str, Any] | None = None


@dataclass(slots=True)
class ValidationReport:
    """
    - is_valid: True gdy brak błędów (warnings nie wpływają)
    - errors:   lista błędów (ValidationError)
    - warnings: komunikaty ostrzegawcze, np. kontener bez numeru strony
    """

    is_valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
