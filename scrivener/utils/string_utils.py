"""
String Manipulation Utilities for Scrivener.

This module provides the literal formatting used by the literal nodes
(quoted strings and runes, integers in arbitrary bases, fixed-precision
floats) together with general text helpers.
"""

from __future__ import annotations

import math
import struct
import unicodedata
from typing import Optional

from .constants import TEMPLATE_INDENT, DEFAULT_FLOAT_PRECISION


_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

_SIMPLE_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


# =============================================================================
# Quoting
# =============================================================================

def _escape_char(ch: str, quote: str, ascii_only: bool, graphic: bool) -> str:
    """Escape a single character for a quoted literal."""
    if ch == quote or ch == "\\":
        return "\\" + ch

    code = ord(ch)
    if ascii_only:
        if code < 0x80 and ch.isprintable():
            return ch
    elif ch.isprintable():
        return ch
    elif graphic and unicodedata.category(ch) == "Zs":
        return ch

    if ch in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[ch]
    if code < 0x20 or code == 0x7F:
        return f"\\x{code:02x}"
    if code < 0x10000:
        return f"\\u{code:04x}"
    return f"\\U{code:08x}"


def quote_string(value: str, ascii_only: bool = False) -> str:
    """
    Return a double-quoted string literal with escapes applied.

    Args:
        value: String to quote
        ascii_only: Escape every non-ASCII character as well

    Returns:
        Quoted literal text
    """
    body = "".join(_escape_char(ch, '"', ascii_only, False) for ch in value)
    return f'"{body}"'


def quote_rune(value: str, mode: str = "quoted") -> str:
    """
    Return a single-quoted rune literal.

    Args:
        value: A single character
        mode: ``quoted`` (escape non-printable), ``ascii`` (escape
            non-ASCII too) or ``graphic`` (keep Unicode spaces)

    Returns:
        Quoted rune text

    Raises:
        ValueError: If value is not exactly one character or mode is unknown
    """
    if len(value) != 1:
        raise ValueError(f"Rune literal requires exactly one character, got {value!r}")
    if mode not in ("quoted", "ascii", "graphic"):
        raise ValueError(f"Unknown rune quoting mode: {mode}")

    body = _escape_char(value, "'", mode == "ascii", mode == "graphic")
    return f"'{body}'"


# =============================================================================
# Number Formatting
# =============================================================================

def _check_base(base: int) -> None:
    if not 2 <= base <= 36:
        raise ValueError(f"Base must be between 2 and 36, got {base}")


def format_uint(value: int, base: int = 10) -> str:
    """
    Format a non-negative integer in the given base with lowercase digits.

    Args:
        value: Non-negative integer
        base: Base between 2 and 36

    Returns:
        Formatted digits
    """
    _check_base(base)
    if value < 0:
        raise ValueError(f"Unsigned value must be non-negative, got {value}")
    if value == 0:
        return "0"

    digits = []
    while value:
        value, remainder = divmod(value, base)
        digits.append(_DIGITS[remainder])
    return "".join(reversed(digits))


def format_int(value: int, base: int = 10) -> str:
    """
    Format a signed integer in the given base.

    Args:
        value: Integer value
        base: Base between 2 and 36

    Returns:
        Formatted digits with a leading ``-`` for negative values
    """
    if value < 0:
        return "-" + format_uint(-value, base)
    return format_uint(value, base)


def to_float32(value: float) -> float:
    """Round a float through single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


def format_float(value: float, precision: Optional[int] = None, bit_size: int = 64) -> str:
    """
    Format a float in plain decimal notation with a fixed precision.

    Args:
        value: Float value
        precision: Digits after the decimal point
        bit_size: 32 rounds through single precision first; 64 uses the value as is

    Returns:
        Formatted text; infinities render as ``+Inf``/``-Inf`` and NaN as ``NaN``
    """
    if precision is None:
        precision = DEFAULT_FLOAT_PRECISION
    if precision < 0:
        raise ValueError(f"Precision must be non-negative, got {precision}")
    if bit_size not in (32, 64):
        raise ValueError(f"Float bit size must be 32 or 64, got {bit_size}")

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"

    if bit_size == 32:
        value = to_float32(value)
    return f"{value:.{precision}f}"


# =============================================================================
# Text Formatting and Indentation
# =============================================================================

def indent_text(text: str, level: int = 1, indent_str: str = TEMPLATE_INDENT) -> str:
    """
    Indent text by the specified level.

    Args:
        text: Text to indent
        level: Indentation level (number of indent_str to prepend)
        indent_str: String to use for each indentation level

    Returns:
        Indented text; blank lines are left untouched
    """
    if not text:
        return text

    indent = indent_str * level
    lines = text.split("\n")
    indented_lines = [f"{indent}{line}" if line.strip() else line for line in lines]
    return "\n".join(indented_lines)
