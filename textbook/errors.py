"""
textbook/errors.py — błędy kompilacji.

Wszystkie błędy są fatalne: przerywają całą kompilację (brak częściowego
wyniku). Nierozpoznane tagi NIE są błędem — trafiają do diagnostyki
(CompileDiagnostics.dropped_tags).
"""

from __future__ import annotations


class TextbookError(Exception):
    """Bazowy błąd kompilatora podręcznika."""


class MissingPageMetadataError(TextbookError):
    """Blok metadanych ```toml bez właściwości `page`."""

    def __init__(self, container_id: str | None) -> None:
        self.container_id = container_id
        super().__init__(f"No page property in metadata (section {container_id!r})")


class InvalidMetadataError(TextbookError):
    """Blok metadanych nie jest poprawnym TOML albo `page` nie jest liczbą całkowitą."""

    def __init__(self, container_id: str | None, detail: str) -> None:
        self.container_id = container_id
        self.detail = detail
        super().__init__(f"Invalid metadata in section {container_id!r}: {detail}")


class OrphanHeadingError(TextbookError):
    """Nagłówek poziomu 2/3 bez otwartego kontenera nadrzędnego."""

    def __init__(self, level: int, heading: str) -> None:
        self.level = level
        self.heading = heading
        parent = "chapter" if level == 2 else "section"
        super().__init__(f"No current {parent} for level-{level} heading {heading!r}")


class UnterminatedTagError(TextbookError):
    """Rozpoznany tag bez znacznika zamykającego do końca wejścia."""

    def __init__(self, tag: str, container_id: str | None = None) -> None:
        self.tag = tag
        self.container_id = container_id
        where = f" in section {container_id!r}" if container_id else ""
        super().__init__(f"Unterminated tag <{tag}>{where}")
