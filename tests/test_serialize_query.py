"""
Tests for JSON serialization and tree queries (textbook/serialize.py, textbook/query.py)
"""

import json

import pytest

from data_model.textbook import Exercise, PageBreak, Result, TextItem
from textbook.compiler import compile_textbook, parse_textbook
from textbook.query import (
    collect_references,
    find_exercise,
    index_references,
    is_context_item,
    iter_body_items,
    iter_sections,
    pinned_references,
)
from textbook.serialize import chapters_to_json, dumps_chapters, to_json_dict


@pytest.fixture
def chapters(config, sample_source):
    return compile_textbook(config, sample_source).chapters


class TestSerialize:
    def test_none_fields_are_omitted(self):
        assert to_json_dict(PageBreak(content="<pagebreak/>")) == {"type": "pagebreak", "content": "<pagebreak/>"}

    def test_discriminator_and_renamed_fields(self, chapters):
        statement = chapters_to_json(chapters)["1"]["sections"][0]["body"][0]
        assert statement["type"] == "result"
        assert statement["result_type"] == "theorem"
        assert "page" not in statement
        assert statement["body"][1] == {
            "type": "fence", "info": "python", "body": "x = 1", "content": "```python\nx = 1\n```",
        }

    def test_inline_items(self, chapters):
        text = chapters_to_json(chapters)["1"]["body"][0]
        assert text["body"][0] == {"type": "inline", "body": "Intro with "}
        assert text["body"][1]["type"] == "reference"
        assert text["body"][1]["reference_type"] == "result"

    def test_dumps_keeps_unicode(self, config):
        chapters = parse_textbook(config, "# 1: Granice ciągów\n")
        data = dumps_chapters(chapters, indent=None)
        assert "Granice ciągów" in data
        assert json.loads(data)["1"]["name"] == "Granice ciągów"


class TestTraversal:
    def test_iter_sections(self, chapters):
        assert [s.id for s in iter_sections(chapters)] == ["1", "1.1", "1.1.1"]

    def test_iter_body_items_descends_into_lists(self, chapters):
        subsection = chapters["1"].sections[0].sections[0]
        types = [item.type for item in iter_body_items(subsection.body)]
        assert types == [
            "exercise", "text", "list", "list_item", "text", "pagebreak", "list_item", "text",
            "standalone_heading",
        ]

    def test_index_references(self, chapters):
        index = index_references(chapters)
        assert index["acme:v1/text/1.1"] is chapters["1"].sections[0]
        assert isinstance(index["acme:v1/result/1.1.1"], Result)
        assert index["acme:v1/exercise/1.1.1(ii)"].number == 2
        assert "acme:v1/figure/1" not in index

    def test_index_keeps_last_duplicate(self, config):
        chapters = parse_textbook(config, '# 1: A\n\n<result id="1">\nOne.\n</result>\n\n<result id="1">\nTwo.\n</result>\n')
        assert index_references(chapters)["acme:v1/result/1"].body[0].content == "Two."

    def test_find_exercise(self, chapters):
        exercise = find_exercise(chapters, "1", "1.1.1")
        assert isinstance(exercise, Exercise)
        assert exercise.name == "Warmup"
        assert find_exercise(chapters, "1", "9.9") is None
        assert find_exercise(chapters, "2", "1.1.1") is None


class TestContext:
    SOURCE = (
        "# 1: A\n\n"
        '<exercise id="1.1">\nUse <resultref id="1.2">the vista</resultref> and '
        '<equationref id="1.3">(1.3)</equationref>.\n</exercise>\n\n'
        '<result id="1.2" type="vista">\nA view.\n</result>\n\n'
        '<result id="1.4" type="application">\nUnpinned.\n</result>\n\n'
        '<result id="1.5" type="theorem">\nAlways.\n</result>\n\n'
        "<context-optional>\nSkip me.\n</context-optional>\n"
    )

    @pytest.fixture
    def body(self, config):
        return parse_textbook(config, self.SOURCE)["1"].body

    def test_collect_references(self, body):
        assert collect_references(body[0]) == ["acme:v1/result/1.2", "acme:v1/equation/1.3"]

    def test_collect_references_from_text_item(self, body):
        assert collect_references(body[0].body[0]) == ["acme:v1/result/1.2", "acme:v1/equation/1.3"]

    def test_pinned_results_enter_context(self, body):
        exercise, vista, application, theorem, optional = body
        pinned = pinned_references(exercise)
        assert is_context_item(vista, pinned)
        assert not is_context_item(application, pinned)
        assert not is_context_item(vista)
        assert is_context_item(theorem)

    def test_optional_text_and_pagebreaks_are_skipped(self, body):
        optional = body[-1]
        assert isinstance(optional, TextItem)
        assert not is_context_item(optional)
        assert not is_context_item(PageBreak(page=1))
        assert is_context_item(TextItem(content="plain"))
