"""Tests for parser error messages and positions."""

from __future__ import annotations

import pytest

from slidemark.errors import ParseError
from slidemark.parser import parse


class TestUnterminatedInlineCode:
    def test_fails(self):
        with pytest.raises(ParseError, match="unterminated inline code"):
            parse("= T\n`abc\n")

    def test_position_at_line_end(self):
        with pytest.raises(ParseError) as exc_info:
            parse("= T\n`abc\n")
        err = exc_info.value
        assert err.span.start.line == 2
        assert err.span.start.column == 5

    def test_message_names_opening(self):
        with pytest.raises(ParseError, match="opened at 2:1"):
            parse("= T\n`abc\n")

    def test_expected_and_found(self):
        with pytest.raises(ParseError) as exc_info:
            parse("= T\n`abc")
        assert exc_info.value.expected == "'`'"
        assert exc_info.value.found == "end of input"

    def test_in_title(self):
        with pytest.raises(ParseError, match="unterminated inline code"):
            parse("= The `map\n")

    def test_in_bullet_item(self):
        with pytest.raises(ParseError):
            parse("= T\n* x `y\n")


class TestCodeBlockIndentation:
    def test_single_space_line(self):
        with pytest.raises(ParseError, match="indentation") as exc_info:
            parse("= T\n:code\n  a\n b\n")
        assert exc_info.value.span.start.line == 4
        assert exc_info.value.expected == "two-space indentation"


class TestUnterminatedRawBlock:
    def test_fails(self):
        with pytest.raises(ParseError, match="unterminated raw block"):
            parse("= T\n{{{\n<div>\n")

    def test_position_at_end_of_input(self):
        with pytest.raises(ParseError) as exc_info:
            parse("= T\n{{{\n<div>\n")
        assert exc_info.value.span.start.line == 4
        assert exc_info.value.found == "end of input"


class TestSlideStructure:
    def test_text_before_first_slide(self):
        with pytest.raises(ParseError, match="expected '=' starting a slide, found 'H'"):
            parse("Hello\n= T\n")

    def test_leading_blank_line(self):
        with pytest.raises(ParseError) as exc_info:
            parse("\n= T\n")
        assert exc_info.value.found == "end of line"

    def test_missing_title_at_end(self):
        with pytest.raises(ParseError, match="expected slide title"):
            parse("= A\n=\n")

    def test_missing_title_found(self):
        with pytest.raises(ParseError) as exc_info:
            parse("=")
        assert exc_info.value.found == "end of input"


class TestAllOrNothing:
    def test_error_in_later_slide_discards_everything(self):
        with pytest.raises(ParseError) as exc_info:
            parse("= Good\nfine\n= Bad\n`oops\n")
        assert exc_info.value.span.start.line == 4


class TestErrorFormat:
    def test_format_contains_arrow_and_filename(self):
        with pytest.raises(ParseError) as exc_info:
            parse("= T\n`abc\n")
        formatted = exc_info.value.format("talk.slides")
        assert "--> talk.slides:2:5" in formatted
        assert formatted.startswith("error:")

    def test_format_contains_source_line_and_caret(self):
        with pytest.raises(ParseError) as exc_info:
            parse("= T\n`abc\n")
        formatted = exc_info.value.format()
        assert "2 | `abc" in formatted
        assert formatted.endswith("    ^")

    def test_parse_filename_labels_error(self):
        with pytest.raises(ParseError) as exc_info:
            parse("= T\n`abc\n", "talk.slides")
        assert exc_info.value.filename == "talk.slides"
        assert "--> talk.slides:2:5" in exc_info.value.format()
        assert "--> talk.slides:2:5" in str(exc_info.value)

    def test_parse_filename_on_no_match_error(self):
        with pytest.raises(ParseError) as exc_info:
            parse("text before any slide\n", "talk.slides")
        assert "--> talk.slides:1:1" in exc_info.value.format()

    def test_default_filename(self):
        with pytest.raises(ParseError) as exc_info:
            parse("= T\n`abc\n")
        assert "--> input.slides:2:5" in exc_info.value.format()
