# tests/test_parser.py
"""Tests for the labelled response parser."""

import pytest

from ragdesk.parser import FALLBACK_CONFIDENCE, FALLBACK_REASONING, ResponseLabels, ResponseParser


@pytest.fixture
def parser():
    return ResponseParser()


class TestResponseParser:
    def test_parses_all_sections(self, parser):
        parsed = parser.parse("ANSWER: X\nCONFIDENCE: 7\nREASONING: Y")
        assert parsed.answer == "X"
        assert parsed.confidence == 7
        assert parsed.reasoning == "Y"
        assert parsed.structured is True

    def test_unlabelled_response_falls_back(self, parser):
        parsed = parser.parse("hello")
        assert parsed.answer == "hello"
        assert parsed.confidence == FALLBACK_CONFIDENCE
        assert parsed.reasoning == FALLBACK_REASONING
        assert parsed.structured is False

    def test_continuation_lines_extend_open_section(self, parser):
        text = "ANSWER: line one\nline two\n\nCONFIDENCE: 6\nREASONING: because\nof the docs"
        parsed = parser.parse(text)
        assert parsed.answer == "line one line two"
        assert parsed.reasoning == "because of the docs"

    def test_lines_after_confidence_are_dropped(self, parser):
        parsed = parser.parse("ANSWER: A\nCONFIDENCE: 4\nstray text")
        assert parsed.answer == "A"
        assert parsed.confidence == 4
        assert parsed.reasoning == ""

    def test_leading_whitespace_is_ignored(self, parser):
        parsed = parser.parse("   ANSWER: indented\n  CONFIDENCE: 3")
        assert parsed.answer == "indented"
        assert parsed.confidence == 3

    def test_missing_sections_are_empty(self, parser):
        parsed = parser.parse("ANSWER: only an answer")
        assert parsed.answer == "only an answer"
        assert parsed.confidence == 0
        assert parsed.reasoning == ""
        assert parsed.structured is True

    def test_repeated_label_replaces_section(self, parser):
        parsed = parser.parse("ANSWER: first\nANSWER: second")
        assert parsed.answer == "second"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("8/10", 8), ("9 out of 10", 9), ("15", 10), ("-3", 0), ("high", 0), ("", 0)],
    )
    def test_confidence_values(self, parser, value, expected):
        assert parser.parse(f"ANSWER: a\nCONFIDENCE: {value}").confidence == expected

    def test_labels_are_case_sensitive(self, parser):
        parsed = parser.parse("answer: lower case")
        assert parsed.structured is False
        assert parsed.answer == "answer: lower case"

    def test_custom_labels(self):
        parser = ResponseParser(ResponseLabels(answer="A>", confidence="C>", reasoning="R>"))
        parsed = parser.parse("A> yes\nC> 9\nR> stated")
        assert (parsed.answer, parsed.confidence, parsed.reasoning) == ("yes", 9, "stated")
