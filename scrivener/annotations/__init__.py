"""
Annotation-driven generation.

This package provides the front-end declaration records, the
annotation registry, the dispatcher that runs generation passes and
the bundled templater generators.
"""

from .declarations import (
    AnnotationDeclaration,
    DeclarationLevel,
    FieldDeclaration,
    MethodDeclaration,
    TypeDeclaration,
    StructDeclaration,
    InterfaceDeclaration,
    PackageDeclaration,
)
from .directives import WriteDirective
from .registry import (
    GeneratorVariant,
    PackageGenerator,
    TypeGenerator,
    StructGenerator,
    InterfaceGenerator,
    RegistryBuilder,
    AnnotationRegistry,
    default_registry,
)
from .dispatch import Dispatcher, GenerationResult, GenerationFailure
from .templater import generate_types_for, register_templater_annotations

__all__ = [
    # Declarations
    "AnnotationDeclaration",
    "DeclarationLevel",
    "FieldDeclaration",
    "MethodDeclaration",
    "TypeDeclaration",
    "StructDeclaration",
    "InterfaceDeclaration",
    "PackageDeclaration",

    # Directives
    "WriteDirective",

    # Registry
    "GeneratorVariant",
    "PackageGenerator",
    "TypeGenerator",
    "StructGenerator",
    "InterfaceGenerator",
    "RegistryBuilder",
    "AnnotationRegistry",
    "default_registry",

    # Dispatch
    "Dispatcher",
    "GenerationResult",
    "GenerationFailure",

    # Templater
    "generate_types_for",
    "register_templater_annotations",
]
