"""
validator/schema.py — JSON Schema (Draft 2020-12) skompilowanego podręcznika.

Opisuje wynik textbook.serialize.chapters_to_json: obiekt id rozdziału →
rozdział. Pola None nie występują w JSON, więc pola opcjonalne nie są
nigdy null.
"""

from __future__ import annotations

from typing import Any

_STRING = {"type": "string"}
_INT    = {"type": "integer"}


def _variant(type_name: str, properties: dict[str, Any], required: tuple[str, ...] = ()) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {"type": {"const": type_name}, **properties},
        "required": ["type", *required],
        "additionalProperties": False,
    }


def _container(type_name: str, id_field: str, extra: dict[str, Any] | None = None) -> dict[str, Any]:
    return _variant(
        type_name,
        {
            id_field: _STRING,
            "page": _INT,
            "reference": _STRING,
            "body": {"type": "array", "items": {"$ref": "#/$defs/body_item"}},
            "content": _STRING,
            **(extra or {}),
        },
        ("body", "content"),
    )


def _section(type_name: str, children: str | None) -> dict[str, Any]:
    properties: dict[str, Any] = {
        "id": _STRING,
        "name": _STRING,
        "reference": _STRING,
        "page": _INT,
        "content": _STRING,
        "body": {"type": "array", "items": {"$ref": "#/$defs/body_item"}},
    }
    required: tuple[str, ...] = ("id", "name", "reference", "content", "body")
    if children:
        properties["sections"] = {"type": "array", "items": {"$ref": f"#/$defs/{children}"}}
        required += ("sections",)
    return _variant(type_name, properties, required)


_INLINE_PAGEBREAK = _variant("pagebreak", {"page": _INT, "content": _STRING}, ("content",))

TEXTBOOK_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": {"$ref": "#/$defs/chapter"},
    "$defs": {
        "inline_item": {
            "oneOf": [
                _variant("inline", {"body": _STRING}, ("body",)),
                _variant(
                    "reference",
                    {
                        "reference_type": {"enum": [
                            "text", "result", "proof", "exercise", "figure", "equation", "algorithm",
                        ]},
                        "id": _STRING,
                        "body": _STRING,
                        "content": _STRING,
                        "reference": _STRING,
                        "roman": _STRING,
                        "letter": _STRING,
                        "number": _INT,
                        "book": _STRING,
                    },
                    ("reference_type", "body", "content"),
                ),
                _INLINE_PAGEBREAK,
            ],
        },
        "pagebreak": _INLINE_PAGEBREAK,
        "list_item": _variant(
            "list_item",
            {
                "number": _INT,
                "roman": _STRING,
                "letter": _STRING,
                "reference": _STRING,
                "body": {"type": "array", "items": {"$ref": "#/$defs/body_item"}},
                "content": _STRING,
            },
            ("body", "content"),
        ),
        "body_item": {
            "oneOf": [
                _variant(
                    "text",
                    {
                        "body": {"type": "array", "items": {"$ref": "#/$defs/inline_item"}},
                        "content": _STRING,
                        "context_optional": {"type": "boolean"},
                    },
                    ("body", "content"),
                ),
                _variant(
                    "standalone_heading",
                    {"level": {"type": "integer", "minimum": 4}, "body": _STRING, "content": _STRING},
                    ("level", "body", "content"),
                ),
                _variant("fence", {"info": _STRING, "body": _STRING, "content": _STRING}, ("body", "content")),
                _container("result", "id", {"result_type": _STRING, "name": _STRING}),
                _container("proof", "of"),
                _container("equation", "id"),
                _container("algorithm", "id", {"name": _STRING}),
                _container("table", "id", {"name": _STRING}),
                _container("figure", "id", {"name": _STRING}),
                _container("exercise", "id", {"name": _STRING}),
                _variant(
                    "list",
                    {
                        "list_type": {"enum": ["roman", "letter"]},
                        "page": _INT,
                        "body": {
                            "type": "array",
                            "items": {"oneOf": [{"$ref": "#/$defs/list_item"}, {"$ref": "#/$defs/pagebreak"}]},
                        },
                        "content": _STRING,
                    },
                    ("list_type", "body", "content"),
                ),
                {"$ref": "#/$defs/list_item"},
                {"$ref": "#/$defs/pagebreak"},
            ],
        },
        "subsection": _section("subsection", None),
        "section": _section("section", "subsection"),
        "chapter": _section("chapter", "section"),
    },
}
