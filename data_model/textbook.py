"""
data_model/textbook.py — drzewo dokumentu podręcznika.

Hierarchia:
  Chapter ─┬─ body: list[BodyItem]
           └─ sections: list[Section] ─┬─ body
                                       └─ sections: list[Subsection] ── body

Drzewo budowane jest jednym przebiegiem kompilatora (textbook.compiler)
i po zakończeniu kompilacji traktowane jako niezmienne.

Pole `type` każdej klasy jest dyskryminatorem wariantu (wartości jak
w formacie JSON konsumowanym przez warstwę HTTP); nie jest argumentem
konstruktora.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Literal


class BodyItemType(StrEnum):
    TEXT               = "text"
    STANDALONE_HEADING = "standalone_heading"
    RESULT             = "result"
    PROOF              = "proof"
    EQUATION           = "equation"
    ALGORITHM          = "algorithm"
    TABLE              = "table"
    FIGURE             = "figure"
    EXERCISE           = "exercise"
    LIST               = "list"
    LIST_ITEM          = "list_item"
    FENCE              = "fence"
    PAGEBREAK          = "pagebreak"


# ---------------------------------------------------------------------------
# Elementy inline (wnętrze akapitu)
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class InlineText:
    type: Literal["inline"] = field(default="inline", init=False)
    body: str = ""

    @property
    def content(self) -> str:
        return self.body


@dataclass(slots=True)
class InlineReference:
    """
    Osadzona referencja <TYPEref id=.. roman=.. letter=.. number=..>etykieta</TYPEref>.

    - reference_type: "text" | "result" | "proof" | "exercise" | "figure" | "equation" | "algorithm"
    - id:             atrybut id (lub of)
    - body:           etykieta między tagami
    - content:        dosłowny fragment źródła (cały tag)
    - reference:      zsyntetyzowany adres, np. "acme:v1/result/1.2(ii)"
    """
    type: Literal["reference"] = field(default="reference", init=False)
    reference_type: str = ""
    id: str | None = None
    body: str = ""
    content: str = ""
    reference: str | None = None
    roman: str | None = None
    letter: str | None = None
    number: int | None = None
    book: str | None = None


@dataclass(slots=True)
class PageBreak:
    """Łamanie strony — występuje zarówno jako element inline, jak i blokowy."""
    type: Literal["pagebreak"] = field(default="pagebreak", init=False)
    page: int | None = None
    content: str = ""


type InlineItem = InlineText | InlineReference | PageBreak


# ---------------------------------------------------------------------------
# Elementy blokowe
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class TextItem:
    type: Literal["text"] = field(default="text", init=False)
    body: list[InlineItem] = field(default_factory=list)
    content: str = ""
    context_optional: bool | None = None


@dataclass(slots=True)
class StandaloneHeading:
    """Nagłówek poziomu >= 4 — nie otwiera kontenera."""
    type: Literal["standalone_heading"] = field(default="standalone_heading", init=False)
    level: int = 4
    body: str = ""
    content: str = ""


@dataclass(slots=True)
class Fence:
    type: Literal["fence"] = field(default="fence", init=False)
    info: str | None = None
    body: str = ""
    content: str = ""


@dataclass(slots=True)
class Result:
    type: Literal["result"] = field(default="result", init=False)
    id: str | None = None
    result_type: str | None = None
    name: str | None = None
    page: int | None = None
    reference: str | None = None
    body: list[BodyItem] = field(default_factory=list)
    content: str = ""


@dataclass(slots=True)
class Proof:
    type: Literal["proof"] = field(default="proof", init=False)
    of: str | None = None
    page: int | None = None
    reference: str | None = None
    body: list[BodyItem] = field(default_factory=list)
    content: str = ""


@dataclass(slots=True)
class Equation:
    type: Literal["equation"] = field(default="equation", init=False)
    id: str | None = None
    page: int | None = None
    reference: str | None = None
    body: list[BodyItem] = field(default_factory=list)
    content: str = ""


@dataclass(slots=True)
class Algorithm:
    type: Literal["algorithm"] = field(default="algorithm", init=False)
    id: str | None = None
    name: str | None = None
    page: int | None = None
    reference: str | None = None
    body: list[BodyItem] = field(default_factory=list)
    content: str = ""


@dataclass(slots=True)
class Table:
    """Tabela tekstowa (<texttable>)."""
    type: Literal["table"] = field(default="table", init=False)
    id: str | None = None
    name: str | None = None
    page: int | None = None
    reference: str | None = None
    body: list[BodyItem] = field(default_factory=list)
    content: str = ""


@dataclass(slots=True)
class Figure:
    type: Literal["figure"] = field(default="figure", init=False)
    id: str | None = None
    name: str | None = None
    page: int | None = None
    reference: str | None = None
    body: list[BodyItem] = field(default_factory=list)
    content: str = ""


@dataclass(slots=True)
class Exercise:
    type: Literal["exercise"] = field(default="exercise", init=False)
    id: str | None = None
    name: str | None = None
    page: int | None = None
    reference: str | None = None
    body: list[BodyItem] = field(default_factory=list)
    content: str = ""


@dataclass(slots=True)
class ListItem:
    """
    Punkt listy <li value=.. roman=.. letter=..>.

    reference = "<ns>:<book>/<typ rodzica>/<id rodzica>(<roman|letter>)"
    """
    type: Literal["list_item"] = field(default="list_item", init=False)
    number: int | None = None
    roman: str | None = None
    letter: str | None = None
    reference: str | None = None
    body: list[BodyItem] = field(default_factory=list)
    content: str = ""


@dataclass(slots=True)
class ListBlock:
    """Lista <ol>; body przeplata ListItem i PageBreak w kolejności źródła."""
    type: Literal["list"] = field(default="list", init=False)
    list_type: Literal["roman", "letter"] = "roman"
    page: int | None = None
    body: list[ListItem | PageBreak] = field(default_factory=list)
    content: str = ""


type BodyItem = (
    TextItem
    | StandaloneHeading
    | Result
    | Proof
    | Equation
    | Algorithm
    | Table
    | Figure
    | Exercise
    | ListBlock
    | ListItem
    | Fence
    | PageBreak
)

# Warianty z ciałem będącym listą BodyItem (do rekurencyjnego przechodzenia)
type ContainerItem = Result | Proof | Equation | Algorithm | Table | Figure | Exercise | ListItem


# ---------------------------------------------------------------------------
# Kontenery sekcji
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Subsection:
    type: Literal["subsection"] = field(default="subsection", init=False)
    id: str = ""
    name: str = ""
    reference: str = ""
    page: int | None = None
    content: str = ""
    body: list[BodyItem] = field(default_factory=list)


@dataclass(slots=True)
class Section:
    type: Literal["section"] = field(default="section", init=False)
    id: str = ""
    name: str = ""
    reference: str = ""
    page: int | None = None
    content: str = ""
    body: list[BodyItem] = field(default_factory=list)
    sections: list[Subsection] = field(default_factory=list)


@dataclass(slots=True)
class Chapter:
    type: Literal["chapter"] = field(default="chapter", init=False)
    id: str = ""
    name: str = ""
    reference: str = ""
    page: int | None = None
    content: str = ""
    body: list[BodyItem] = field(default_factory=list)
    sections: list[Section] = field(default_factory=list)


type SectionItem = Chapter | Section | Subsection
