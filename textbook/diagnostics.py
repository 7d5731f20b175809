"""
textbook/diagnostics.py — niefatalne obserwacje kompilacji.

Pominięte (nierozpoznane) tagi nie przerywają kompilacji, ale są liczone,
żeby politykę "nieznany tag znika" dało się zweryfikować na realnym źródle.
"""

from __future__ import annotations

from dataclasses import dataclass, field

_EXCERPT_LEN = 80


@dataclass(slots=True)
class DroppedTag:
    """
    - name:         nazwa tagu (lub "```" dla niepoprawnego bloku kodu)
    - container_id: id kontenera, w którym wystąpił
    - excerpt:      początek dosłownego tekstu elementu
    """
    name: str
    container_id: str | None
    excerpt: str


@dataclass(slots=True)
class CompileDiagnostics:
    dropped_tags: list[DroppedTag] = field(default_factory=list)

    @property
    def dropped_count(self) -> int:
        return len(self.dropped_tags)

    def record_drop(self, name: str, container_id: str | None, text: str) -> None:
        excerpt = " ".join(text.split())[:_EXCERPT_LEN]
        self.dropped_tags.append(DroppedTag(name=name, container_id=container_id, excerpt=excerpt))

    def dropped_by_name(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for tag in self.dropped_tags:
            counts[tag.name] = counts.get(tag.name, 0) + 1
        return counts
