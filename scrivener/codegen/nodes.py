"""
Renderable Nodes for Code Synthesis.

Every piece of generated source is a node that writes its own bytes
into a binary sink. Composite nodes write their children in order;
leaf nodes write fixed or computed text. Nodes are immutable, so
rendering one twice always produces the same bytes.
"""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Tuple

from ..utils.constants import DEFAULT_FLOAT_PRECISION
from ..utils.string_utils import (
    quote_string,
    quote_rune,
    format_int,
    format_uint,
    format_float,
)


class Declaration(ABC):
    """
    Base class for every renderable node.

    Subclasses implement ``write_to``, which writes UTF-8 bytes to any
    object exposing ``write(bytes)`` and returns the number of bytes
    written. Errors are raised; a sink error propagates unchanged.
    """

    @abstractmethod
    def write_to(self, sink) -> int:
        """Write this node's bytes to sink and return the count written."""

    def render_bytes(self) -> bytes:
        """Render into an in-memory buffer and return the bytes."""
        buffer = io.BytesIO()
        write_declaration(self, buffer)
        return buffer.getvalue()

    def render(self) -> str:
        """Render into an in-memory buffer and return the decoded text."""
        return self.render_bytes().decode("utf-8")


class WriteCounter:
    """Sink wrapper that forwards writes and tracks the total written."""

    def __init__(self, sink):
        self.sink = sink
        self.written = 0

    def write(self, data: bytes) -> int:
        count = self.sink.write(data)
        if count is None:
            count = len(data)
        self.written += count
        return count


def write_bytes(sink, data: bytes) -> int:
    """Write raw bytes to sink, returning the count written."""
    if not data:
        return 0
    count = sink.write(data)
    return len(data) if count is None else count


def write_declaration(declaration: Declaration, sink) -> int:
    """
    Render one child node into sink.

    An ``EOFError`` raised by the child is the end-of-stream signal and
    counts as success; the bytes it wrote before signalling are still
    counted. Any other error propagates to the caller.

    Args:
        declaration: Node to render
        sink: Binary writable destination

    Returns:
        Number of bytes the child wrote
    """
    counter = WriteCounter(sink)
    try:
        declaration.write_to(counter)
    except EOFError:
        pass
    return counter.written


class Declarations(Declaration):
    """Ordered node sequence rendered by straight concatenation."""

    def __init__(self, *items: Declaration):
        self._items: Tuple[Declaration, ...] = tuple(items)

    @classmethod
    def of(cls, items: Iterable[Declaration]) -> "Declarations":
        return cls(*items)

    @property
    def items(self) -> Tuple[Declaration, ...]:
        return self._items

    def __iter__(self) -> Iterator[Declaration]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Declarations):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"Declarations{self._items!r}"

    def map(self, mapper) -> Declaration:
        """Combine the items with a mapper, e.g. ``COMMA_SPACED_MAPPER``."""
        return mapper.map(*self._items)

    def write_to(self, sink) -> int:
        total = 0
        for item in self._items:
            total += write_declaration(item, sink)
        return total


# =============================================================================
# Leaf Nodes
# =============================================================================

@dataclass(frozen=True)
class Text(Declaration):
    """Literal text written verbatim."""
    value: str

    def write_to(self, sink) -> int:
        return write_bytes(sink, self.value.encode("utf-8"))


@dataclass(frozen=True)
class Name(Declaration):
    """An identifier."""
    value: str

    def write_to(self, sink) -> int:
        return write_bytes(sink, self.value.encode("utf-8"))


@dataclass(frozen=True)
class TypeName(Declaration):
    """A type expression such as ``int32`` or ``*http.Request``."""
    value: str

    def write_to(self, sink) -> int:
        return write_bytes(sink, self.value.encode("utf-8"))


@dataclass(frozen=True)
class Operator(Declaration):
    """A binary or unary operator symbol."""
    symbol: str

    def write_to(self, sink) -> int:
        return write_bytes(sink, self.symbol.encode("utf-8"))


PLUS = Operator("+")
MINUS = Operator("-")
MODULO = Operator("%")
DIVIDE = Operator("/")
MULTIPLY = Operator("*")
EQUAL = Operator("==")
LESS_THAN = Operator("<")
GREATER_THAN = Operator(">")
LESS_THAN_EQUAL = Operator("<=")
GREATER_THAN_EQUAL = Operator(">=")
NOT_EQUAL = Operator("!=")
AND = Operator("&&")
OR = Operator("||")
BINARY_AND = Operator("&")
BINARY_OR = Operator("|")
DECREMENT = Operator("--")
INCREMENT = Operator("++")


@dataclass(frozen=True)
class RawBytes(Declaration):
    """Pre-encoded bytes written as is."""
    data: bytes

    def write_to(self, sink) -> int:
        return write_bytes(sink, self.data)


@dataclass(frozen=True)
class Enclosed(Declaration):
    """Wraps a child between begin and end delimiters."""
    inner: Declaration
    begin: str = "("
    end: str = ")"

    def write_to(self, sink) -> int:
        total = write_bytes(sink, self.begin.encode("utf-8"))
        total += write_declaration(self.inner, sink)
        total += write_bytes(sink, self.end.encode("utf-8"))
        return total


# =============================================================================
# Literal Nodes
# =============================================================================

_INT_BIT_SIZES = (8, 16, 32, 64)


@dataclass(frozen=True)
class StringLiteral(Declaration):
    """A double-quoted string literal; ``ascii_only`` escapes non-ASCII too."""
    value: str
    ascii_only: bool = False

    def write_to(self, sink) -> int:
        return write_bytes(sink, quote_string(self.value, self.ascii_only).encode("utf-8"))


@dataclass(frozen=True)
class RuneLiteral(Declaration):
    """A single-quoted rune literal quoted per ``mode``."""
    value: str
    mode: str = "quoted"

    def __post_init__(self):
        # Validates the value and mode up front
        quote_rune(self.value, self.mode)

    def write_to(self, sink) -> int:
        return write_bytes(sink, quote_rune(self.value, self.mode).encode("utf-8"))


@dataclass(frozen=True)
class BoolLiteral(Declaration):
    value: bool

    def write_to(self, sink) -> int:
        return write_bytes(sink, b"true" if self.value else b"false")


@dataclass(frozen=True)
class IntLiteral(Declaration):
    """A signed integer literal in ``base``, checked against ``bit_size``."""
    value: int
    base: int = 10
    bit_size: int = 64

    def __post_init__(self):
        if self.bit_size not in _INT_BIT_SIZES:
            raise ValueError(f"Integer bit size must be one of {_INT_BIT_SIZES}, got {self.bit_size}")
        if not 2 <= self.base <= 36:
            raise ValueError(f"Base must be between 2 and 36, got {self.base}")
        bound = 1 << (self.bit_size - 1)
        if not -bound <= self.value < bound:
            raise ValueError(f"Value {self.value} overflows int{self.bit_size}")

    def write_to(self, sink) -> int:
        return write_bytes(sink, format_int(self.value, self.base).encode("utf-8"))


@dataclass(frozen=True)
class UIntLiteral(Declaration):
    """An unsigned integer literal in ``base``, checked against ``bit_size``."""
    value: int
    base: int = 10
    bit_size: int = 64

    def __post_init__(self):
        if self.bit_size not in _INT_BIT_SIZES:
            raise ValueError(f"Integer bit size must be one of {_INT_BIT_SIZES}, got {self.bit_size}")
        if not 2 <= self.base <= 36:
            raise ValueError(f"Base must be between 2 and 36, got {self.base}")
        if self.value < 0:
            raise ValueError(f"Unsigned value must be non-negative, got {self.value}")
        if self.value >= 1 << self.bit_size:
            raise ValueError(f"Value {self.value} overflows uint{self.bit_size}")

    def write_to(self, sink) -> int:
        return write_bytes(sink, format_uint(self.value, self.base).encode("utf-8"))


@dataclass(frozen=True)
class FloatLiteral(Declaration):
    """A fixed-precision decimal float literal."""
    value: float
    precision: int = DEFAULT_FLOAT_PRECISION
    bit_size: int = 64

    def __post_init__(self):
        if self.bit_size not in (32, 64):
            raise ValueError(f"Float bit size must be 32 or 64, got {self.bit_size}")
        if self.precision < 0:
            raise ValueError(f"Precision must be non-negative, got {self.precision}")

    def write_to(self, sink) -> int:
        text = format_float(self.value, self.precision, self.bit_size)
        return write_bytes(sink, text.encode("utf-8"))


@dataclass(frozen=True)
class ValueLiteral(Declaration):
    """Any value formatted by a caller-supplied converter (``str`` by default)."""
    value: Any
    converter: Callable[[Any], str] = str

    def write_to(self, sink) -> int:
        return write_bytes(sink, self.converter(self.value).encode("utf-8"))
