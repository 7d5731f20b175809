"""
textbook/config.py — konfiguracja kompilacji.

Zmienne środowiskowe:
  TEXTBOOK_NAMESPACE   przestrzeń nazw referencji (domyślnie: acme)
  TEXTBOOK_BOOK        identyfikator książki       (domyślnie: v1)
  TEXT_REPOSITORY      katalog lub bazowy URL http(s) z plikami <book>.md

Opcjonalnie plik .env w katalogu głównym projektu:
  TEXTBOOK_NAMESPACE=acme
  TEXT_REPOSITORY=https://example.org/text
"""

from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_NAMESPACE = "acme"
DEFAULT_BOOK      = "v1"

_ENV_NAMESPACE  = "TEXTBOOK_NAMESPACE"
_ENV_BOOK       = "TEXTBOOK_BOOK"
_ENV_REPOSITORY = "TEXT_REPOSITORY"

_DOTENV_PATH = pathlib.Path(__file__).resolve().parent.parent / ".env"


@dataclass(frozen=True, slots=True)
class CompileConfig:
    """
    Niezmienna konfiguracja jednej kompilacji — przekazywana jawnie
    do wszystkich funkcji kompilatora.

    - namespace: np. "acme"
    - book:      np. "v1"
    """
    namespace: str = DEFAULT_NAMESPACE
    book: str = DEFAULT_BOOK

    @classmethod
    def from_env(cls, book: str | None = None, namespace: str | None = None) -> CompileConfig:
        """Buduje konfigurację ze zmiennych środowiskowych; argumenty mają pierwszeństwo."""
        load_dotenv(_DOTENV_PATH)
        return cls(
            namespace = namespace or os.getenv(_ENV_NAMESPACE, DEFAULT_NAMESPACE),
            book      = book      or os.getenv(_ENV_BOOK,      DEFAULT_BOOK),
        )


def text_repository() -> str | None:
    """Lokalizacja repozytorium tekstów (TEXT_REPOSITORY) albo None."""
    load_dotenv(_DOTENV_PATH)
    return os.getenv(_ENV_REPOSITORY) or None
