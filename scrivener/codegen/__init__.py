"""
Code synthesis node library.

This package provides the renderable nodes, the mappers that combine
them, the template binder and the structural constructs generators use
to assemble output source.
"""

from .nodes import (
    Declaration,
    Declarations,
    WriteCounter,
    write_declaration,
    Text,
    Name,
    TypeName,
    Operator,
    RawBytes,
    Enclosed,
    StringLiteral,
    RuneLiteral,
    BoolLiteral,
    IntLiteral,
    UIntLiteral,
    FloatLiteral,
    ValueLiteral,
)
from .mappers import (
    Mapper,
    SeparatedMapper,
    FunctionMapper,
    ConstantWriter,
    write_separated,
    COMMA_MAPPER,
    COMMA_SPACED_MAPPER,
    DOT_MAPPER,
    NEWLINE_MAPPER,
    CONCAT_MAPPER,
)
from .structures import (
    Package,
    SourceFile,
    Struct,
    StructField,
    Tag,
    Function,
    FunctionType,
    Constructor,
    Returns,
    CustomReturns,
    VariableName,
    VariableType,
    VariableDeclaration,
    VariableAssignment,
    ShortAssignment,
    ValueAssignment,
    Condition,
    If,
    Switch,
    Case,
    DefaultCase,
    Import,
    ImportItem,
    Comment,
    MultiComment,
    AnnotationComment,
    SliceType,
    Slice,
    Array,
    MapLiteral,
)
from .templates import SourceText, TemplateBinder, get_template_binder, set_template_binder

__all__ = [
    # Nodes
    "Declaration",
    "Declarations",
    "WriteCounter",
    "write_declaration",
    "Text",
    "Name",
    "TypeName",
    "Operator",
    "RawBytes",
    "Enclosed",
    "StringLiteral",
    "RuneLiteral",
    "BoolLiteral",
    "IntLiteral",
    "UIntLiteral",
    "FloatLiteral",
    "ValueLiteral",

    # Mappers
    "Mapper",
    "SeparatedMapper",
    "FunctionMapper",
    "ConstantWriter",
    "write_separated",
    "COMMA_MAPPER",
    "COMMA_SPACED_MAPPER",
    "DOT_MAPPER",
    "NEWLINE_MAPPER",
    "CONCAT_MAPPER",

    # Structures
    "Package",
    "SourceFile",
    "Struct",
    "StructField",
    "Tag",
    "Function",
    "FunctionType",
    "Constructor",
    "Returns",
    "CustomReturns",
    "VariableName",
    "VariableType",
    "VariableDeclaration",
    "VariableAssignment",
    "ShortAssignment",
    "ValueAssignment",
    "Condition",
    "If",
    "Switch",
    "Case",
    "DefaultCase",
    "Import",
    "ImportItem",
    "Comment",
    "MultiComment",
    "AnnotationComment",
    "SliceType",
    "Slice",
    "Array",
    "MapLiteral",

    # Templates
    "SourceText",
    "TemplateBinder",
    "get_template_binder",
    "set_template_binder",
]
