"""Tests for doc comment tag parsing."""

from __future__ import annotations

from noirdoc.render.doc_comments import parse_doc_comment


def test_doc_comment_without_tags_is_all_description() -> None:
    text = "  Verifies the payload.\n\nRuns the calls in order.  \n"
    parsed = parse_doc_comment(text)

    assert parsed.params == ()
    assert parsed.description == text.strip()


def test_doc_comment_extracts_single_param_tag() -> None:
    parsed = parse_doc_comment("Summary line.\n@param x does a thing")

    assert parsed.params == (("x", "does a thing"),)
    assert parsed.description == "Summary line."


def test_doc_comment_matches_tags_behind_block_gutters() -> None:
    parsed = parse_doc_comment("* Intro\n * @param inner_hash The hash to check.")

    assert parsed.params == (("inner_hash", "The hash to check."),)
    assert parsed.description == "* Intro"


def test_doc_comment_keeps_repeated_tags_in_order() -> None:
    parsed = parse_doc_comment("@param a first\n@param b second\n@param a again")

    assert parsed.params == (("a", "first"), ("b", "second"), ("a", "again"))
    assert parsed.description == ""


def test_doc_comment_ignores_tag_without_description() -> None:
    parsed = parse_doc_comment("@param lonely")

    assert parsed.params == ()
    assert parsed.description == "@param lonely"


def test_empty_doc_comment_degrades_gracefully() -> None:
    parsed = parse_doc_comment("")

    assert parsed.description == ""
    assert parsed.params == ()


def test_doc_comment_keeps_form_feed_and_line_separator_in_description() -> None:
    for text in ("page\x0cbreak", "line\u2028separator"):
        parsed = parse_doc_comment(text)

        assert parsed.params == ()
        assert parsed.description == text


def test_doc_comment_treats_crlf_as_one_line_break() -> None:
    parsed = parse_doc_comment("Summary.\r\n@param x the input\r\n")

    assert parsed.description == "Summary."
    assert parsed.params == (("x", "the input"),)
