"""
Combinators that merge node sequences into one node.

All separator-based mappers share ``write_separated``: separators go
strictly between items, so N items produce N-1 separators and a
sequence of zero or one items produces none.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Iterable, Tuple

from .nodes import Declaration, write_bytes, write_declaration


def write_separated(sink, declarations: Iterable[Declaration], separator: bytes) -> int:
    """
    Write declarations with separator between consecutive items.

    Args:
        sink: Binary writable destination
        declarations: Nodes to write, in order
        separator: Bytes written between items

    Returns:
        Total bytes written; a failing child aborts the remaining items
    """
    total = 0
    for index, declaration in enumerate(declarations):
        if index:
            total += write_bytes(sink, separator)
        total += write_declaration(declaration, sink)
    return total


class Mapper(ABC):
    """Combines a sequence of nodes into a single node."""

    @abstractmethod
    def map(self, *declarations: Declaration) -> Declaration:
        """Return a node rendering declarations under this mapper."""


@dataclass(frozen=True)
class _Mapped(Declaration):
    declarations: Tuple[Declaration, ...]
    write_fn: Callable

    def write_to(self, sink) -> int:
        return self.write_fn(sink, self.declarations)


@dataclass(frozen=True)
class SeparatedMapper(Mapper):
    """Mapper placing ``separator`` between items."""
    separator: bytes

    def _write(self, sink, declarations) -> int:
        return write_separated(sink, declarations, self.separator)

    def map(self, *declarations: Declaration) -> Declaration:
        return _Mapped(tuple(declarations), self._write)


@dataclass(frozen=True)
class FunctionMapper(Mapper):
    """Mapper backed by ``map_fn(sink, declarations) -> int``."""
    map_fn: Callable

    def map(self, *declarations: Declaration) -> Declaration:
        return _Mapped(tuple(declarations), self.map_fn)


COMMA_MAPPER = SeparatedMapper(b",")
COMMA_SPACED_MAPPER = SeparatedMapper(b", ")
DOT_MAPPER = SeparatedMapper(b".")
NEWLINE_MAPPER = SeparatedMapper(b"\n")
CONCAT_MAPPER = SeparatedMapper(b"")


@dataclass(frozen=True)
class ConstantWriter(Declaration):
    """Node that always writes the same bytes."""
    data: bytes

    def write_to(self, sink) -> int:
        return write_bytes(sink, self.data)


COMMA_WRITER = ConstantWriter(b",")
COMMA_SPACED_WRITER = ConstantWriter(b", ")
PERIOD_WRITER = ConstantWriter(b".")
NEWLINE_WRITER = ConstantWriter(b"\n")
