"""
Constants and Enumerations for Scrivener.

This module consolidates constant definitions shared across the
project: template asset naming, annotation vocabulary and formatting
defaults.
"""

from __future__ import annotations

from enum import Enum


# =============================================================================
# Formatting Constants
# =============================================================================

TEMPLATE_INDENT = "    "
TEMPLATE_EXTENSION = ".j2"

DEFAULT_FLOAT_PRECISION = 4
DEFAULT_CACHE_SIZE = 128


# =============================================================================
# Annotation Vocabulary
# =============================================================================

TEMPLATER_ANNOTATION = "templaterTypesFor"
TEMPLATER_COMPANION = "templater"

TEMPLATER_FILENAME_FORMAT = "{id}_templater_types_for_gen.{kind}"


class OutputKind(Enum):
    """Output kinds understood by the templater generator."""

    PARTIAL_GO = "partial.go"  # Notice, package clause and body
    GO = "go"  # Bare file envelope
    RAW = "raw"  # Body passed through unchanged

    @classmethod
    def from_string(cls, kind: str) -> "OutputKind":
        """Resolve a kind parameter case-insensitively; unknown kinds are raw."""
        lowered = kind.lower()
        for member in cls:
            if member.value == lowered:
                return member
        return cls.RAW


# =============================================================================
# Structural Template Ids
# =============================================================================

class TemplateId:
    """Ids of the packaged structural template assets."""

    PACKAGE = "package.j2"
    FILE = "file.j2"
    STRUCT = "struct.j2"
    STRUCT_FIELD = "structtype.j2"
    TAG = "tag.j2"
    FUNCTION = "function.j2"
    FUNCTION_TYPE = "function-type.j2"
    IF = "if.j2"
    SWITCH = "switch.j2"
    CASE = "case.j2"
    DEFAULT_CASE = "case-default.j2"
    IMPORT = "import.j2"
    IMPORT_ITEM = "import-item.j2"
    COMMENT = "comments.j2"
    MULTI_COMMENT = "multicomments.j2"
    ANNOTATION = "annotations.j2"
    SLICE_TYPE = "slicetype.j2"
    SLICE = "slicevalue.j2"
    ARRAY = "array.j2"
    MAP = "map.j2"
    VARIABLE_TYPE = "variable-type.j2"
    VARIABLE_DECLARATION = "var-variable-type.j2"
    VARIABLE_ASSIGNMENT = "variable-assign-basic.j2"
    SHORT_ASSIGNMENT = "variable-assign.j2"
    VALUE_ASSIGNMENT = "value-assign.j2"

    @classmethod
    def all(cls) -> list:
        """Return every structural template id."""
        return [
            value for key, value in vars(cls).items()
            if key.isupper() and isinstance(value, str)
        ]
