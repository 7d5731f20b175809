"""
Tests for the reference grammar (textref/grammar.py)

Run: python -m pytest tests/test_grammar.py -q
"""

import pytest

from data_model.references import ListItemKind, PartialReference, Reference
from textref.grammar import (
    build_reference,
    classify_list_item,
    format_reference,
    parse_exact,
    parse_partial,
    parse_ref,
)


# ---------------------------------------------------------------------------
# Exact mode
# ---------------------------------------------------------------------------

class TestParseExact:
    def test_chapter_only(self):
        ref = parse_exact("acme:v1/text/1")
        assert ref == Reference(namespace="acme", book="v1", type="text", chapter="1")

    def test_fully_qualified_with_list_item(self):
        ref = parse_exact("acme:v1/exercise/1.2.3(ii)")
        assert ref is not None
        assert (ref.chapter, ref.section, ref.subsection) == ("1", "2", "3")
        assert ref.list_item == "ii"
        assert not ref.is_range

    def test_letter_chapter(self):
        ref = parse_exact("acme:v1/result/A.2")
        assert ref is not None
        assert ref.chapter == "A"
        assert ref.section == "2"

    def test_full_range_with_list_items(self):
        ref = parse_exact("acme:v1/text/1.1.3(ii)..2.1.1(iii)")
        assert ref is not None
        assert (ref.chapter, ref.section, ref.subsection, ref.list_item) == ("1", "1", "3", "ii")
        assert (ref.chapter_end, ref.section_end, ref.subsection_end, ref.list_item_end) == (
            "2", "1", "1", "iii",
        )
        assert ref.is_range
        assert not ref.is_list_item_range

    def test_full_range_without_list_items(self):
        ref = parse_exact("acme:v1/text/1.2..1.4")
        assert ref is not None
        assert (ref.chapter, ref.section) == ("1", "2")
        assert (ref.chapter_end, ref.section_end) == ("1", "4")
        assert ref.subsection_end is None

    def test_list_item_range_excludes_other_range_fields(self):
        ref = parse_exact("acme:v1/text/1.1.3(ii..xv)")
        assert ref is not None
        assert ref.list_item_range_start == "ii"
        assert ref.list_item_range_end == "xv"
        assert ref.list_item is None
        assert ref.chapter_end is None
        assert ref.section_end is None
        assert ref.subsection_end is None
        assert ref.list_item_end is None
        assert ref.is_list_item_range

    def test_list_item_range_followed_by_full_range_is_rejected(self):
        assert parse_exact("acme:v1/text/1.1(i..ii)..2") is None

    def test_case_insensitive_prefix(self):
        ref = parse_exact("ACME:V1/Result/1.2")
        assert ref is not None
        assert ref.namespace == "ACME"
        assert ref.type == "Result"

    @pytest.mark.parametrize("text", [
        "",
        "acme",
        "acme:v1",
        "acme:v1/",
        "acme:v1/result/",
        "acme:v1/result/1.",
        "acme/v1/result/1",
        "acme:v1/result/1.2 ",
        "acme:v1/result/a.2",
        "acme:v1/result/1(ab)",
        "acme:v1/result/1(ii",
        "acme:v1/result/1.2.3.4",
        "acme:v1/result/Intro",
    ])
    def test_malformed_input_returns_none(self, text):
        assert parse_exact(text) is None

    def test_canonical_form_round_trip(self):
        for text in (
            "acme:v1/text/1",
            "acme:v1/result/1.2.3",
            "acme:v1/exercise/1.2(ii)",
            "acme:v1/text/1.1.3(ii)..2.1.1(iii)",
            "acme:v1/text/1.1.3(ii..xv)",
            "acme:v2/figure/B.4",
        ):
            ref = parse_exact(text)
            assert ref is not None
            assert format_reference(ref) == text
            assert str(ref) == text


# ---------------------------------------------------------------------------
# Roman before letter
# ---------------------------------------------------------------------------

class TestClassifyListItem:
    @pytest.mark.parametrize("token", ["i", "ii", "iv", "v", "x", "xv", "xlii", "c"])
    def test_roman(self, token):
        assert classify_list_item(token) is ListItemKind.ROMAN

    @pytest.mark.parametrize("token", ["a", "b", "h", "z"])
    def test_letter(self, token):
        assert classify_list_item(token) is ListItemKind.LETTER

    @pytest.mark.parametrize("token", ["", "ab", "iiii", "I", "1"])
    def test_neither(self, token):
        assert classify_list_item(token) is None

    def test_ambiguous_i_is_roman(self):
        """'i' is both roman one and the letter i; roman wins."""
        assert classify_list_item("i") is ListItemKind.ROMAN
        ref = parse_exact("acme:v1/exercise/1.2(i)")
        assert ref is not None and ref.list_item == "i"


# ---------------------------------------------------------------------------
# Partial mode
# ---------------------------------------------------------------------------

class TestParsePartial:
    def test_trailing_dot_while_typing(self):
        ref = parse_partial("acme:v1/text/1.")
        assert ref == PartialReference(namespace="acme", book="v1", type="text", chapter="1")

    def test_complete_reference_is_also_a_prefix(self):
        ref = parse_partial("acme:v1/result/1.2(ii)")
        assert ref is not None
        assert ref.section == "2"
        assert ref.list_item == "ii"
        assert not ref.is_fuzzy

    @pytest.mark.parametrize("text, expected", [
        ("acme", {"namespace": "acme"}),
        ("acme:", {"namespace": "acme"}),
        ("acme:v", {"namespace": "acme", "book": "v"}),
        ("acme:v1/", {"namespace": "acme", "book": "v1"}),
        ("acme:v1/res", {"namespace": "acme", "book": "v1", "type": "res"}),
        ("acme:v1/text/1.2(", {"namespace": "acme", "book": "v1", "type": "text",
                               "chapter": "1", "section": "2"}),
    ])
    def test_prefixes(self, text, expected):
        ref = parse_partial(text)
        assert ref is not None
        for name, value in expected.items():
            assert getattr(ref, name) == value
        assert ref.fuzzy_query is None

    def test_open_range_sets_has_range(self):
        ref = parse_partial("acme:v1/text/1.2..")
        assert ref is not None
        assert ref.has_range
        assert ref.chapter_end is None

    def test_fuzzy_fallback(self):
        ref = parse_partial("acme:v1/squeeze theorem")
        assert ref is not None
        assert ref.namespace == "acme"
        assert ref.book == "v1"
        assert ref.type is None
        assert ref.fuzzy_query == "squeeze theorem"
        assert ref.is_fuzzy

    def test_fuzzy_keeps_whole_specifier(self):
        ref = parse_partial("acme:v1/text/1.2 limits")
        assert ref is not None
        assert ref.fuzzy_query == "text/1.2 limits"
        assert ref.chapter is None

    @pytest.mark.parametrize("text", ["", "!!", ":v1/text/1"])
    def test_no_prefix_returns_none(self, text):
        assert parse_partial(text) is None


class TestParseRef:
    def test_dispatches_on_mode(self):
        assert isinstance(parse_ref("acme:v1/text/1"), Reference)
        assert isinstance(parse_ref("acme:v1/text/1.", partial=True), PartialReference)
        assert parse_ref("acme:v1/text/1.") is None


class TestBuildReference:
    def test_canonical_string(self):
        assert build_reference("acme", "v1", "result", "1.2.3") == "acme:v1/result/1.2.3"

    def test_synthesized_reference_parses(self):
        ref = parse_exact(build_reference("acme", "v1", "exercise", "1.2(ii)"))
        assert ref is not None
        assert ref.list_item == "ii"
