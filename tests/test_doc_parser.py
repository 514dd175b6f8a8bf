"""Tests for tagdoc.doc_parser."""

from __future__ import annotations

from tagdoc.doc_parser import DocParser, strip_comment
from tagdoc.models import SourceFileRef

COMMENT = """/**
 * Sets the title of the window.
 * Contact owner@example.com for details.
 *
 * @param {String} title The new
 * title text.
 * @param {Boolean} [animate=false] Whether to animate.
 * @return {this}
 * @private
 */"""


def test_strip_comment_removes_decoration() -> None:
    assert strip_comment("/**\n * Hello\n * world\n */") == "Hello\nworld"


def test_parse_splits_doc_and_tags(registry, warnings) -> None:
    parser = DocParser(registry, warnings)

    parsed = parser.parse(COMMENT, SourceFileRef("win.js", 3))

    assert parsed.doc == "Sets the title of the window.\nContact owner@example.com for details."
    params = parsed.occurrences.doc["params"]
    assert [p["name"] for p in params] == ["title", "animate"]
    assert params[0]["type"] == "String"
    assert params[0]["doc"] == "The new\ntitle text."
    assert params[0]["optional"] is False
    assert params[1]["optional"] is True
    assert params[1]["default"] == "false"
    assert parsed.occurrences.doc["return"] == [{"tagname": "return", "type": "this", "doc": ""}]
    assert parsed.occurrences.doc["private"] == [{"tagname": "private"}]
    assert warnings.records == []


def test_unknown_tag_warns_and_stays_in_doc(registry, warnings) -> None:
    parser = DocParser(registry, warnings)

    parsed = parser.parse("Intro.\n@frobnicate now\n@private", SourceFileRef("a.js", 1))

    assert "@frobnicate now" in parsed.doc
    assert "private" in parsed.occurrences.doc
    [warning] = warnings.records
    assert warning.category == "tag"
    assert "@frobnicate" in warning.message


def test_text_after_member_tag_becomes_doc(registry, warnings) -> None:
    parser = DocParser(registry, warnings)

    parsed = parser.parse("@method show\nShows the component.")

    assert parsed.occurrences.doc["method"] == [{"tagname": "method", "type": None, "name": "show"}]
    assert parsed.doc == "Shows the component."


def test_repeated_tag_records_are_all_collected(registry, warnings) -> None:
    parser = DocParser(registry, warnings)

    parsed = parser.parse("@since 1.0\n@since 2.0")

    assert [r["version"] for r in parsed.occurrences.doc["since"]] == ["1.0", "2.0"]


def test_malformed_tag_syntax_is_a_warning(registry, warnings) -> None:
    parser = DocParser(registry, warnings)

    parsed = parser.parse("@param {String title broken", SourceFileRef("b.js", 9))

    assert "params" in parsed.occurrences.doc
    categories = [w.category for w in warnings.records]
    assert "tag_syntax" in categories
    assert warnings.records[0].position == SourceFileRef("b.js", 9)


def test_mixins_tag_yields_one_record_per_name(registry, warnings) -> None:
    parser = DocParser(registry, warnings)

    parsed = parser.parse("@mixins Ext.util.Observable Ext.util.Floating")

    assert [r["name"] for r in parsed.occurrences.doc["mixins"]] == [
        "Ext.util.Observable",
        "Ext.util.Floating",
    ]


def test_deprecated_keeps_version_and_message(registry, warnings) -> None:
    parser = DocParser(registry, warnings)

    parsed = parser.parse("Old API.\n@deprecated 4.1 Use *show* instead.")

    [record] = parsed.occurrences.doc["deprecated"]
    assert record["version"] == "4.1"
    assert record["doc"] == "Use *show* instead."
    assert parsed.doc == "Old API."
