"""
Front-end Declaration Records.

Immutable records describing the parsed source tree handed to the
generation engine: annotations with their parameters and template
bodies, the annotated declarations at each level, and the package that
owns them.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple, Union


class DeclarationLevel(Enum):
    """Level of the declaration an annotation is attached to."""

    PACKAGE = "package"
    TYPE = "type"
    STRUCT = "struct"
    INTERFACE = "interface"


@dataclass(frozen=True)
class AnnotationDeclaration:
    """
    One annotation occurrence, e.g. ``@templaterTypesFor(id => Mob)``.

    ``params`` maps parameter keys to values; ``template`` holds the
    free-text body some annotations carry.
    """
    name: str
    params: Dict[str, str] = field(default_factory=dict, hash=False)
    template: str = ""

    def param(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.params.get(key, default)

    def has_param(self, key: str) -> bool:
        return key in self.params


@dataclass(frozen=True)
class FieldDeclaration:
    name: str
    type_name: str
    tags: Dict[str, str] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class MethodDeclaration:
    name: str
    arguments: Tuple[str, ...] = ()
    returns: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TypeDeclaration:
    """A named non-struct, non-interface type, e.g. ``type Mob int``."""
    name: str
    type_name: str = ""
    annotations: Tuple[AnnotationDeclaration, ...] = ()

    @property
    def level(self) -> DeclarationLevel:
        return DeclarationLevel.TYPE


@dataclass(frozen=True)
class StructDeclaration:
    name: str
    fields: Tuple[FieldDeclaration, ...] = ()
    annotations: Tuple[AnnotationDeclaration, ...] = ()

    @property
    def level(self) -> DeclarationLevel:
        return DeclarationLevel.STRUCT


@dataclass(frozen=True)
class InterfaceDeclaration:
    name: str
    methods: Tuple[MethodDeclaration, ...] = ()
    annotations: Tuple[AnnotationDeclaration, ...] = ()

    @property
    def level(self) -> DeclarationLevel:
        return DeclarationLevel.INTERFACE


AnyDeclaration = Union[TypeDeclaration, StructDeclaration, InterfaceDeclaration]


@dataclass(frozen=True)
class PackageDeclaration:
    """
    A parsed package: package-level annotations plus its declarations
    in source order.
    """
    name: str
    path: str = ""
    annotations: Tuple[AnnotationDeclaration, ...] = ()
    declarations: Tuple[AnyDeclaration, ...] = ()

    @property
    def level(self) -> DeclarationLevel:
        return DeclarationLevel.PACKAGE

    def annotations_for(self, name: str) -> List[AnnotationDeclaration]:
        """
        Return every annotation called name, package level first and
        then each declaration in source order.
        """
        found = [annotation for annotation in self.annotations if annotation.name == name]
        for declaration in self.declarations:
            found.extend(
                annotation for annotation in declaration.annotations if annotation.name == name
            )
        return found

    def _of_level(self, level: DeclarationLevel) -> List[AnyDeclaration]:
        return [declaration for declaration in self.declarations if declaration.level is level]

    @property
    def types(self) -> List[TypeDeclaration]:
        return self._of_level(DeclarationLevel.TYPE)

    @property
    def structs(self) -> List[StructDeclaration]:
        return self._of_level(DeclarationLevel.STRUCT)

    @property
    def interfaces(self) -> List[InterfaceDeclaration]:
        return self._of_level(DeclarationLevel.INTERFACE)

    def output_dir(self, to_dir: Optional[str] = None) -> str:
        """Directory generated files for this package land in."""
        return to_dir or self.path

    def package_name_for(self, to_dir: Optional[str] = None) -> str:
        """
        Package name for files written to to_dir.

        Files written beside the package keep its name; files written
        elsewhere take the name of the target directory.
        """
        target = self.output_dir(to_dir)
        if not target or os.path.normpath(target) == os.path.normpath(self.path or "."):
            return self.name
        return os.path.basename(os.path.normpath(target)) or self.name


def iter_occurrences(package: PackageDeclaration) -> Sequence[Tuple[AnnotationDeclaration, object]]:
    """Every (annotation, carrying declaration) pair, package level first."""
    occurrences = [(annotation, package) for annotation in package.annotations]
    for declaration in package.declarations:
        occurrences.extend((annotation, declaration) for annotation in declaration.annotations)
    return occurrences
