"""
Convenience constructors for common node shapes.

Short names for building node trees inside generators, e.g.
``package("main", function("main", body=[text('print("hi")')]))``.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Sequence

from .nodes import Declaration, Declarations, Name, Text
from .structures import Comment, Constructor, Function, Package, Returns
from .templates.renderer import SourceText


def text(value: str) -> Text:
    return Text(value)


def name(value: str) -> Name:
    return Name(value)


def block(*items: Declaration) -> Declarations:
    """Concatenate nodes with no separator."""
    return Declarations(*items)


def package(package_name: str, *body: Declaration) -> Package:
    """Package clause followed by the body nodes."""
    return Package(package_name, Declarations(*body))


def commentary(*lines: str) -> Comment:
    """Line comment from one or more lines of text."""
    if not lines:
        raise ValueError("commentary requires at least one line")
    return Comment(lines[0], tuple(lines[1:]))


def function(
    function_name: str,
    arguments: Sequence[Declaration] = (),
    returns: Sequence[Declaration] = (),
    body: Sequence[Declaration] = (),
) -> Function:
    """Function with the given arguments, return types and body statements."""
    return Function(
        Name(function_name),
        Constructor(tuple(arguments)),
        Returns(tuple(returns)),
        tuple(body),
    )


def source_text(
    template: str,
    binding: Any = None,
    helpers: Optional[Mapping[str, Callable]] = None,
) -> SourceText:
    """Node rendering template source against a binding."""
    return SourceText(template, binding, helpers)
