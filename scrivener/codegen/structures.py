"""
Structural Node Library.

Nodes for the language constructs generators compose: packages,
structs, functions, conditionals, switches, imports, comments, variable
declarations and collection literals.

Template-backed constructs render in two phases. Every sub-part is
first rendered into its own buffer, so a failing part never reaches the
output sink; the resulting strings are then bound into a record and the
construct's template asset is executed once.
"""

from __future__ import annotations

import io
from abc import abstractmethod
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Dict, Mapping, Optional, Sequence, Union

from .mappers import COMMA_SPACED_MAPPER, CONCAT_MAPPER, NEWLINE_MAPPER
from .nodes import Declaration, Enclosed, Name, Operator, write_bytes, write_declaration
from .templates.renderer import get_template_binder
from ..utils.constants import TemplateId

Part = Union[str, Declaration, None]


def render_part(part: Part) -> str:
    """Render a sub-part into its own buffer and return the text."""
    if part is None:
        return ""
    if isinstance(part, str):
        return part
    buffer = io.BytesIO()
    write_declaration(part, buffer)
    return buffer.getvalue().decode("utf-8")


def render_parts(parts: Sequence[Part]) -> list:
    return [render_part(part) for part in parts]


class CompositeDeclaration(Declaration):
    """Base for dataclass nodes holding child sequences; lists are stored as tuples."""

    def __post_init__(self):
        for item in fields(self):
            value = getattr(self, item.name)
            if isinstance(value, list):
                object.__setattr__(self, item.name, tuple(value))


class TemplateDeclaration(CompositeDeclaration):
    """Base for constructs rendered through a stored template asset."""

    template_id: ClassVar[str]

    @abstractmethod
    def binding(self) -> Dict[str, Any]:
        """Render the sub-parts and return the template binding record."""

    def write_to(self, sink) -> int:
        binding = self.binding()
        return get_template_binder().execute_named(self.template_id, binding, sink)


# =============================================================================
# Files and Packages
# =============================================================================

@dataclass(frozen=True)
class Package(TemplateDeclaration):
    """Package clause followed by the body; an empty name omits the clause."""
    template_id: ClassVar[str] = TemplateId.PACKAGE

    name: str
    body: Part = None

    def binding(self) -> Dict[str, Any]:
        return {"name": self.name, "body": render_part(self.body)}


@dataclass(frozen=True)
class SourceFile(TemplateDeclaration):
    """Bare file envelope: the body, terminated by a newline."""
    template_id: ClassVar[str] = TemplateId.FILE

    body: Part = None

    def binding(self) -> Dict[str, Any]:
        body = render_part(self.body)
        if not body.endswith("\n"):
            body += "\n"
        return {"body": body}


# =============================================================================
# Structs
# =============================================================================

@dataclass(frozen=True)
class Tag(TemplateDeclaration):
    """A struct field tag such as ``json:"name"``."""
    template_id: ClassVar[str] = TemplateId.TAG

    format: str
    name: str

    def binding(self) -> Dict[str, Any]:
        return {"format": self.format, "name": self.name}


@dataclass(frozen=True)
class StructField(TemplateDeclaration):
    """
    A struct field. Tags concatenate with no separator inside one
    backtick-delimited string; a field without tags has no tag string.
    """
    template_id: ClassVar[str] = TemplateId.STRUCT_FIELD

    name: Part
    type: Part
    tags: Sequence[Tag] = ()

    def binding(self) -> Dict[str, Any]:
        return {
            "name": render_part(self.name),
            "type": render_part(self.type),
            "tags": render_part(CONCAT_MAPPER.map(*self.tags)),
        }


@dataclass(frozen=True)
class Struct(TemplateDeclaration):
    template_id: ClassVar[str] = TemplateId.STRUCT

    name: Part
    fields: Sequence[Declaration] = ()
    type: Part = "struct"
    comments: Part = None
    annotations: Sequence[Declaration] = ()

    def binding(self) -> Dict[str, Any]:
        return {
            "name": render_part(self.name),
            "type": render_part(self.type),
            "fields": render_parts(self.fields),
            "comments": render_part(self.comments).rstrip("\n"),
            "annotations": render_part(NEWLINE_MAPPER.map(*self.annotations)),
        }


# =============================================================================
# Functions
# =============================================================================

@dataclass(frozen=True)
class Constructor(CompositeDeclaration):
    """Function arguments, comma-space separated inside parentheses."""
    arguments: Sequence[Declaration] = ()

    def write_to(self, sink) -> int:
        return write_declaration(Enclosed(COMMA_SPACED_MAPPER.map(*self.arguments)), sink)


@dataclass(frozen=True)
class Returns(CompositeDeclaration):
    """Return types; none renders nothing, otherwise a parenthesized list."""
    types: Sequence[Declaration] = ()

    def write_to(self, sink) -> int:
        if not self.types:
            return 0
        return write_declaration(Enclosed(COMMA_SPACED_MAPPER.map(*self.types)), sink)


@dataclass(frozen=True)
class CustomReturns(CompositeDeclaration):
    """Arbitrary return nodes inside parentheses, e.g. named results."""
    returns: Sequence[Declaration] = ()

    def write_to(self, sink) -> int:
        return write_declaration(Enclosed(COMMA_SPACED_MAPPER.map(*self.returns)), sink)


@dataclass(frozen=True)
class Function(TemplateDeclaration):
    """A function declaration; body statements concatenate with no separator."""
    template_id: ClassVar[str] = TemplateId.FUNCTION

    name: Part
    constructor: Declaration = field(default_factory=Constructor)
    returns: Part = None
    body: Sequence[Declaration] = ()

    def binding(self) -> Dict[str, Any]:
        return {
            "name": render_part(self.name),
            "constructor": render_part(self.constructor),
            "returns": render_part(self.returns),
            "body": render_part(CONCAT_MAPPER.map(*self.body)),
        }


@dataclass(frozen=True)
class FunctionType(TemplateDeclaration):
    """A function signature without a body, usable as a type."""
    template_id: ClassVar[str] = TemplateId.FUNCTION_TYPE

    name: Part = None
    constructor: Declaration = field(default_factory=Constructor)
    returns: Part = None

    def binding(self) -> Dict[str, Any]:
        return {
            "name": render_part(self.name),
            "constructor": render_part(self.constructor),
            "returns": render_part(self.returns),
        }


# =============================================================================
# Variables
# =============================================================================

@dataclass(frozen=True)
class VariableName(Declaration):
    name: str

    def write_to(self, sink) -> int:
        return write_declaration(Name(self.name), sink)


@dataclass(frozen=True)
class VariableType(TemplateDeclaration):
    """``name type`` pair, as used in argument lists and struct bodies."""
    template_id: ClassVar[str] = TemplateId.VARIABLE_TYPE

    name: Part
    type: Part

    def binding(self) -> Dict[str, Any]:
        return {"name": render_part(self.name), "type": render_part(self.type)}


@dataclass(frozen=True)
class VariableDeclaration(TemplateDeclaration):
    """``var name type``"""
    template_id: ClassVar[str] = TemplateId.VARIABLE_DECLARATION

    name: Part
    type: Part

    def binding(self) -> Dict[str, Any]:
        return {"name": render_part(self.name), "type": render_part(self.type)}


@dataclass(frozen=True)
class _Assignment(TemplateDeclaration):
    name: Part
    value: Part

    def binding(self) -> Dict[str, Any]:
        return {"name": render_part(self.name), "value": render_part(self.value)}


@dataclass(frozen=True)
class VariableAssignment(_Assignment):
    """``var name = value``"""
    template_id: ClassVar[str] = TemplateId.VARIABLE_ASSIGNMENT


@dataclass(frozen=True)
class ShortAssignment(_Assignment):
    """``name := value``"""
    template_id: ClassVar[str] = TemplateId.SHORT_ASSIGNMENT


@dataclass(frozen=True)
class ValueAssignment(_Assignment):
    """``name = value``"""
    template_id: ClassVar[str] = TemplateId.VALUE_ASSIGNMENT


# =============================================================================
# Control Flow
# =============================================================================

@dataclass(frozen=True)
class Condition(Declaration):
    """``left operator right``"""
    left: Declaration
    operator: Operator
    right: Declaration

    def write_to(self, sink) -> int:
        total = write_declaration(self.left, sink)
        total += write_bytes(sink, b" ")
        total += write_declaration(self.operator, sink)
        total += write_bytes(sink, b" ")
        total += write_declaration(self.right, sink)
        return total


@dataclass(frozen=True)
class If(TemplateDeclaration):
    """An if statement; the condition is wrapped in parentheses."""
    template_id: ClassVar[str] = TemplateId.IF

    condition: Declaration
    action: Part = None

    def binding(self) -> Dict[str, Any]:
        return {
            "condition": render_part(Enclosed(self.condition)),
            "action": render_part(self.action),
        }


@dataclass(frozen=True)
class Case(TemplateDeclaration):
    template_id: ClassVar[str] = TemplateId.CASE

    condition: Part
    action: Part = None

    def binding(self) -> Dict[str, Any]:
        return {"condition": render_part(self.condition), "action": render_part(self.action)}


@dataclass(frozen=True)
class DefaultCase(TemplateDeclaration):
    """The default branch; renders nothing when its action is empty."""
    template_id: ClassVar[str] = TemplateId.DEFAULT_CASE

    action: Part = None

    def binding(self) -> Dict[str, Any]:
        return {"action": render_part(self.action)}

    def write_to(self, sink) -> int:
        binding = self.binding()
        if not binding["action"]:
            return 0
        return get_template_binder().execute_named(self.template_id, binding, sink)


@dataclass(frozen=True)
class Switch(TemplateDeclaration):
    """A switch statement; cases keep declaration order, the default comes last."""
    template_id: ClassVar[str] = TemplateId.SWITCH

    condition: Part
    cases: Sequence[Case] = ()
    default: Optional[DefaultCase] = None

    def binding(self) -> Dict[str, Any]:
        return {
            "condition": render_part(self.condition),
            "cases": "".join(render_parts(self.cases)),
            "default": render_part(self.default),
        }


# =============================================================================
# Imports and Comments
# =============================================================================

@dataclass(frozen=True)
class ImportItem(TemplateDeclaration):
    template_id: ClassVar[str] = TemplateId.IMPORT_ITEM

    path: str
    namespace: str = ""

    def binding(self) -> Dict[str, Any]:
        return {"path": self.path, "namespace": self.namespace}


@dataclass(frozen=True)
class Import(TemplateDeclaration):
    template_id: ClassVar[str] = TemplateId.IMPORT

    packages: Sequence[ImportItem] = ()

    def binding(self) -> Dict[str, Any]:
        return {"packages": render_parts(self.packages)}


@dataclass(frozen=True)
class Comment(TemplateDeclaration):
    """Line comment: a main line followed by optional extra lines."""
    template_id: ClassVar[str] = TemplateId.COMMENT

    main: str
    blocks: Sequence[str] = ()

    def binding(self) -> Dict[str, Any]:
        return {"main": self.main, "blocks": list(self.blocks)}


@dataclass(frozen=True)
class MultiComment(Comment):
    """Block comment."""
    template_id: ClassVar[str] = TemplateId.MULTI_COMMENT


@dataclass(frozen=True)
class AnnotationComment(TemplateDeclaration):
    """An annotation marker comment, ``//@value``."""
    template_id: ClassVar[str] = TemplateId.ANNOTATION

    value: str

    def binding(self) -> Dict[str, Any]:
        return {"value": self.value}


# =============================================================================
# Collections
# =============================================================================

@dataclass(frozen=True)
class SliceType(TemplateDeclaration):
    template_id: ClassVar[str] = TemplateId.SLICE_TYPE

    type: Part

    def binding(self) -> Dict[str, Any]:
        return {"type": render_part(self.type)}


@dataclass(frozen=True)
class Slice(TemplateDeclaration):
    """A slice literal; values are comma-space separated."""
    template_id: ClassVar[str] = TemplateId.SLICE

    type: Part
    values: Sequence[Declaration] = ()

    def binding(self) -> Dict[str, Any]:
        return {
            "type": render_part(self.type),
            "values": render_part(COMMA_SPACED_MAPPER.map(*self.values)),
        }


@dataclass(frozen=True)
class Array(TemplateDeclaration):
    template_id: ClassVar[str] = TemplateId.ARRAY

    type: Part
    size: int

    def __post_init__(self):
        super().__post_init__()
        if self.size < 0:
            raise ValueError(f"Array size must be non-negative, got {self.size}")

    def binding(self) -> Dict[str, Any]:
        return {"type": render_part(self.type), "size": self.size}


@dataclass(frozen=True)
class MapLiteral(TemplateDeclaration):
    """A map literal; entries render in insertion order with quoted keys."""
    template_id: ClassVar[str] = TemplateId.MAP

    key_type: Part
    value_type: Part
    entries: Mapping[str, Part] = field(default_factory=dict, hash=False)

    def binding(self) -> Dict[str, Any]:
        return {
            "key_type": render_part(self.key_type),
            "value_type": render_part(self.value_type),
            "entries": {key: render_part(value) for key, value in self.entries.items()},
        }
