"""
data_model — struktury danych kompilatora podręcznika.

Użycie:
  from data_model import Chapter, Section, Result, Reference, ...

Moduły:
  references — Reference, PartialReference, ListItemKind
  textbook   — Chapter, Section, Subsection, elementy blokowe (BodyItem)
               i elementy inline (InlineItem)

Format JSON (textbook.serialize) zachowuje nazwy pól 1:1; pola None
są pomijane, pole `type` rozróżnia warianty.
"""

from .references import (
    ListItemKind,
    Reference,
    PartialReference,
)
from .textbook import (
    BodyItemType,
    InlineText,
    InlineReference,
    PageBreak,
    InlineItem,
    TextItem,
    StandaloneHeading,
    Fence,
    Result,
    Proof,
    Equation,
    Algorithm,
    Table,
    Figure,
    Exercise,
    ListItem,
    ListBlock,
    BodyItem,
    ContainerItem,
    Subsection,
    Section,
    Chapter,
    SectionItem,
)

__all__ = [
    # references
    "ListItemKind",
    "Reference",
    "PartialReference",
    # textbook — inline
    "InlineText",
    "InlineReference",
    "PageBreak",
    "InlineItem",
    # textbook — body
    "BodyItemType",
    "TextItem",
    "StandaloneHeading",
    "Fence",
    "Result",
    "Proof",
    "Equation",
    "Algorithm",
    "Table",
    "Figure",
    "Exercise",
    "ListItem",
    "ListBlock",
    "BodyItem",
    "ContainerItem",
    # textbook — sekcje
    "Subsection",
    "Section",
    "Chapter",
    "SectionItem",
]
