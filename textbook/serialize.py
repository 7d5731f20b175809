"""textbook/serialize.py — zapis skompilowanego drzewa do JSON."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import asdict
from typing import Any

from data_model.textbook import Chapter


def _without_none(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    # Pola nieobecne w źródle (None) nie trafiają do JSON
    return {key: value for key, value in pairs if value is not None}


def to_json_dict(item: Any) -> dict[str, Any]:
    """Dataclass drzewa → dict gotowy do json.dumps (z dyskryminatorem `type`)."""
    return asdict(item, dict_factory=_without_none)


def chapters_to_json(chapters: Mapping[str, Chapter]) -> dict[str, dict[str, Any]]:
    return {chapter_id: to_json_dict(chapter) for chapter_id, chapter in chapters.items()}


def dumps_chapters(chapters: Mapping[str, Chapter], indent: int | None = 2) -> str:
    return json.dumps(chapters_to_json(chapters), ensure_ascii=False, indent=indent)
