"""
textref/grammar.py — parser referencji (zejście rekurencyjne, dwa tryby).

Gramatyka:
  reference := NAME ":" NAME "/" TYPE "/" address
  address   := number ( "(" item ".." item ")"
                      | ["(" item ")"] [".." number ["(" item ")"]] )
  number    := chapter ["." DIGITS ["." DIGITS]]
  chapter   := DIGITS | [A-Z]
  item      := roman | letter

Tryby:
  exact   — dopasowanie zakotwiczone; każde odstępstwo → None.
  partial — akceptuje dowolny prefiks poprawnej referencji; koniec wejścia
            w dowolnym miejscu kończy parsowanie sukcesem. Jeśli ogon po
            "namespace:book/" nie pasuje do gramatyki, trafia do fuzzy_query.

Publiczne API:
  parse_exact(text)   -> Reference | None
  parse_partial(text) -> PartialReference | None
  parse_ref(text, partial=False)
  classify_list_item(token) -> ListItemKind | None
  build_reference(namespace, book, type, id) -> str
  format_reference(ref) -> str
"""

from __future__ import annotations

import re
from typing import overload, Literal

from data_model.references import ListItemKind, PartialReference, Reference

# ---------------------------------------------------------------------------
# Leksemy
# ---------------------------------------------------------------------------

_NAME_RE    = re.compile(r"[a-z0-9\-]+", re.IGNORECASE)
_TYPE_RE    = re.compile(r"[a-z\-]+", re.IGNORECASE)
_CHAPTER_RE = re.compile(r"\d+|[A-Z]")
_DIGITS_RE  = re.compile(r"\d+")
_ITEM_RE    = re.compile(r"[a-z]+")

_ROMAN_RE  = re.compile(r"^(?=[mdclxvi])m{0,3}(cm|cd|d?c{0,3})(xc|xl|l?x{0,3})(ix|iv|v?i{0,3})$")
_LETTER_RE = re.compile(r"^[a-z]$")

_RANGE_OP = ".."

# Pola końca pełnego zakresu (wypełniane przez _number z prefiksem "end")
_START_FIELDS = ("chapter", "section", "subsection")
_END_FIELDS   = ("chapter_end", "section_end", "subsection_end")


def classify_list_item(token: str) -> ListItemKind | None:
    """
    Rozpoznaje rodzaj punktu listy.

    Liczba rzymska ma pierwszeństwo: "i", "v", "x", "c" itd. są zawsze
    rzymskie, mimo że są też pojedynczymi literami.
    """
    if _ROMAN_RE.match(token):
        return ListItemKind.ROMAN
    if _LETTER_RE.match(token):
        return ListItemKind.LETTER
    return None


def build_reference(namespace: str, book: str, type: str, id: str) -> str:
    """Syntetyzuje kanoniczny adres "namespace:book/type/id"."""
    return f"{namespace}:{book}/{type}/{id}"


def format_reference(ref: Reference) -> str:
    return str(ref)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class _NoMatch(Exception):
    """Wejście nie pasuje do gramatyki."""


class _Incomplete(Exception):
    """Koniec wejścia w trybie częściowym — dotychczasowe pola są wynikiem."""


class _Parser:
    __slots__ = ("text", "pos", "partial", "fields")

    def __init__(self, text: str, partial: bool) -> None:
        self.text = text
        self.pos = 0
        self.partial = partial
        self.fields: dict[str, str | bool] = {}

    # -- prymitywy ---------------------------------------------------------

    def _rest(self) -> str:
        return self.text[self.pos:]

    def _out_of_input(self) -> None:
        if self.partial:
            raise _Incomplete
        raise _NoMatch

    def token(self, pattern: re.Pattern[str], name: str | None = None) -> str:
        if self.pos >= len(self.text):
            self._out_of_input()
        m = pattern.match(self.text, self.pos)
        if not m:
            raise _NoMatch
        self.pos = m.end()
        if name is not None:
            self.fields[name] = m.group()
        return m.group()

    def literal(self, lit: str) -> None:
        rest = self._rest()
        if rest.startswith(lit):
            self.pos += len(lit)
            return
        # W trybie częściowym prefiks literału na końcu wejścia jest poprawny
        if self.partial and lit.startswith(rest):
            raise _Incomplete
        raise _NoMatch

    def peek(self, lit: str) -> bool:
        rest = self._rest()
        if rest.startswith(lit):
            return True
        return self.partial and bool(rest) and lit.startswith(rest)

    def peek_subnumber(self) -> bool:
        """Czy dalej jest ".DIGITS" (a nie operator zakresu "..")."""
        rest = self._rest()
        if len(rest) >= 2 and rest[0] == "." and rest[1].isdigit():
            return True
        return self.partial and rest == "."

    def end(self) -> None:
        if self.pos != len(self.text):
            raise _NoMatch

    # -- reguły ------------------------------------------------------------

    def item(self) -> str:
        token = self.token(_ITEM_RE)
        if classify_list_item(token) is None:
            raise _NoMatch
        return token

    def number(self, names: tuple[str, str, str]) -> None:
        chapter, section, subsection = names
        self.token(_CHAPTER_RE, chapter)
        if self.peek_subnumber():
            self.literal(".")
            self.token(_DIGITS_RE, section)
            if self.peek_subnumber():
                self.literal(".")
                self.token(_DIGITS_RE, subsection)

    def address(self) -> None:
        self.number(_START_FIELDS)
        if self.pos >= len(self.text):
            return
        if self.peek("("):
            self.literal("(")
            # Wstępnie punkt listy; po ".." staje się początkiem zakresu punktów
            self.fields["list_item"] = self.item()
            if self.peek(_RANGE_OP):
                self.literal(_RANGE_OP)
                self.fields["list_item_range_start"] = self.fields.pop("list_item")
                self.fields["list_item_range_end"] = self.item()
                self.literal(")")
                # Zakres punktów listy wyklucza pełny zakres
                return
            self.literal(")")
        if self.pos >= len(self.text):
            return
        if self.peek(_RANGE_OP):
            self.literal(_RANGE_OP)
            self.fields["has_range"] = True
            self.number(_END_FIELDS)
            if self.peek("("):
                self.literal("(")
                self.fields["list_item_end"] = self.item()
                self.literal(")")

    def typed(self) -> None:
        self.token(_TYPE_RE, "type")
        self.literal("/")
        self.address()
        self.end()

    def prefix(self) -> None:
        self.token(_NAME_RE, "namespace")
        self.literal(":")
        self.token(_NAME_RE, "book")
        self.literal("/")


def _run_exact(text: str) -> dict[str, str | bool] | None:
    parser = _Parser(text, partial=False)
    try:
        parser.prefix()
        parser.typed()
    except _NoMatch:
        return None
    return parser.fields


def _run_partial(text: str) -> dict[str, str | bool] | None:
    parser = _Parser(text, partial=True)
    try:
        parser.prefix()
    except _Incomplete:
        return parser.fields
    except _NoMatch:
        return None

    specifier_start = parser.pos
    prefix_fields = dict(parser.fields)
    try:
        parser.typed()
    except _Incomplete:
        pass
    except _NoMatch:
        # Fallback: reszta wejścia jako zapytanie przybliżone
        prefix_fields["fuzzy_query"] = text[specifier_start:]
        return prefix_fields
    return parser.fields


def parse_exact(text: str) -> Reference | None:
    """Parsuje pełną referencję; None gdy wejście nie jest poprawnym adresem."""
    fields = _run_exact(text)
    if fields is None:
        return None
    fields.pop("has_range", None)
    return Reference(**fields)  # type: ignore[arg-type]


def parse_partial(text: str) -> PartialReference | None:
    """Parsuje (być może niedokończoną) referencję; None gdy nawet prefiks nie pasuje."""
    fields = _run_partial(text)
    if not fields:
        return None
    return PartialReference(**fields)  # type: ignore[arg-type]


@overload
def parse_ref(text: str, partial: Literal[False] = ...) -> Reference | None: ...
@overload
def parse_ref(text: str, partial: Literal[True]) -> PartialReference | None: ...


def parse_ref(text: str, partial: bool = False) -> Reference | PartialReference | None:
    return parse_partial(text) if partial else parse_exact(text)
