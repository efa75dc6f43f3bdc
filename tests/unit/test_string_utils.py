"""
Unit tests for string formatting utilities.
"""

import pytest

from scrivener.utils.string_utils import (
    format_float,
    format_int,
    format_uint,
    indent_text,
    quote_rune,
    quote_string,
    to_float32,
)


class TestQuoting:
    """Test string and rune quoting."""

    def test_simple_escapes(self):
        assert quote_string("a\tb\\c") == '"a\\tb\\\\c"'

    def test_control_characters(self):
        assert quote_string("\x00\x7f") == '"\\x00\\x7f"'

    def test_astral_characters_ascii_only(self):
        assert quote_string("\U0001F600", ascii_only=True) == '"\\U0001f600"'

    def test_double_quote_not_escaped_in_rune(self):
        assert quote_rune('"') == "'\"'"

    def test_single_quote_not_escaped_in_string(self):
        assert quote_string("it's") == '"it\'s"'


class TestNumbers:
    """Test integer and float formatting."""

    def test_format_uint(self):
        assert format_uint(0) == "0"
        assert format_uint(255, 2) == "11111111"
        with pytest.raises(ValueError):
            format_uint(-1)

    def test_format_int(self):
        assert format_int(-255, 16) == "-ff"
        with pytest.raises(ValueError):
            format_int(1, 1)

    def test_format_float(self):
        assert format_float(2.5) == "2.5000"
        assert format_float(2.5, 0) == "2"
        assert format_float(-1.25, 1) == "-1.2"

    def test_to_float32(self):
        assert to_float32(0.5) == 0.5
        assert to_float32(0.1) != 0.1


class TestIndentText:
    """Test text indentation."""

    def test_indent_skips_blank_lines(self):
        assert indent_text("a\n\nb") == "    a\n\n    b"

    def test_indent_custom_level(self):
        assert indent_text("a", level=2, indent_str=" ") == "  a"

    def test_indent_empty(self):
        assert indent_text("") == ""
