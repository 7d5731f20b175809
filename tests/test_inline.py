"""
Tests for the inline content extractor (textbook/inline.py)
"""

import pytest

from data_model.textbook import InlineReference, InlineText, PageBreak
from textbook.config import CompileConfig
from textbook.inline import extract_inline_items, parse_int


def _content(items):
    return "".join(item.content for item in items)


class TestExtractInlineItems:
    def test_plain_text(self, config):
        items = extract_inline_items("Just words.", config)
        assert items == [InlineText(body="Just words.")]

    def test_reference_with_roman_item(self, config):
        text = 'See <resultref id="1.2" roman="ii">Theorem 1.2(ii)</resultref> now.'
        items = extract_inline_items(text, config)
        assert [type(i) for i in items] == [InlineText, InlineReference, InlineText]
        ref = items[1]
        assert ref.reference_type == "result"
        assert ref.id == "1.2"
        assert ref.roman == "ii"
        assert ref.body == "Theorem 1.2(ii)"
        assert ref.reference == "acme:v1/result/1.2(ii)"

    def test_proof_reference_uses_of_attribute(self, config):
        (ref,) = extract_inline_items('<proofref of="3.1">proof</proofref>', config)
        assert ref.id == "3.1"
        assert ref.reference == "acme:v1/proof/3.1"

    def test_book_override_and_number(self, config):
        (ref,) = extract_inline_items(
            '<exerciseref id="2.1" letter="b" number="4" book="v2">HW</exerciseref>', config,
        )
        assert ref.book == "v2"
        assert ref.number == 4
        assert ref.reference == "acme:v2/exercise/2.1(b)"

    def test_reference_without_id_has_no_address(self, config):
        (ref,) = extract_inline_items("<textref>somewhere</textref>", config)
        assert ref.reference is None

    def test_pagebreak(self, config):
        items = extract_inline_items('end of page <pagebreak page="12"/> start of next', config)
        assert items == [
            InlineText(body="end of page "),
            PageBreak(page=12, content='<pagebreak page="12"/>'),
            InlineText(body=" start of next"),
        ]

    def test_reference_spanning_lines_stays_text(self, config):
        text = '<resultref id="1">first\nsecond</resultref>'
        assert extract_inline_items(text, config) == [InlineText(body=text)]

    def test_unknown_ref_tag_stays_text(self, config):
        text = '<lemmaref id="1">L</lemmaref>'
        assert extract_inline_items(text, config) == [InlineText(body=text)]

    def test_namespace_comes_from_config(self):
        (ref,) = extract_inline_items(
            '<figureref id="4.1">Fig</figureref>', CompileConfig(namespace="other", book="b2"),
        )
        assert ref.reference == "other:b2/figure/4.1"

    @pytest.mark.parametrize("text", [
        "",
        "no tags at all",
        'a <pagebreak page="3"/>b<equationref id="2.4">(2.4)</equationref>c',
        '<algorithmref id="1">A</algorithmref><textref id="2">B</textref>',
        'x <pagebreak page="1" kind="soft"/> <resultref id="9.9" letter="a">R</resultref>',
    ])
    def test_round_trip(self, config, text):
        assert _content(extract_inline_items(text, config)) == text


class TestParseInt:
    def test_valid(self):
        assert parse_int(" 12 ") == 12

    def test_invalid_and_missing(self):
        assert parse_int("twelve") is None
        assert parse_int(None) is None
