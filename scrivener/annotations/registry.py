"""
Annotation Registry.

Maps annotation names to generator variants, one per declaration
level. The registry is assembled by a ``RegistryBuilder`` during an
explicit initialization phase and is immutable once built, so
generation passes can share it without locking.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, ClassVar, Dict, List, Mapping, Optional

from .declarations import AnnotationDeclaration, DeclarationLevel, PackageDeclaration
from .directives import WriteDirective
from ..utils.exceptions import RegistryError
from ..utils.logging import ScrivenerLogger

GeneratorFn = Callable[[str, AnnotationDeclaration, Any, PackageDeclaration], List[WriteDirective]]


@dataclass(frozen=True)
class GeneratorVariant:
    """
    A generator callable tagged with the declaration level it handles.

    The callable receives ``(to_dir, annotation, declaration, package)``
    and returns the write directives it produces.
    """
    generate: GeneratorFn
    level: ClassVar[DeclarationLevel]

    def __call__(self, to_dir: str, annotation: AnnotationDeclaration, declaration, package: PackageDeclaration) -> List[WriteDirective]:
        return list(self.generate(to_dir, annotation, declaration, package))


@dataclass(frozen=True)
class PackageGenerator(GeneratorVariant):
    """Package-level variant; receives the package as its declaration."""
    level: ClassVar[DeclarationLevel] = DeclarationLevel.PACKAGE


@dataclass(frozen=True)
class TypeGenerator(GeneratorVariant):
    level: ClassVar[DeclarationLevel] = DeclarationLevel.TYPE


@dataclass(frozen=True)
class StructGenerator(GeneratorVariant):
    level: ClassVar[DeclarationLevel] = DeclarationLevel.STRUCT


@dataclass(frozen=True)
class InterfaceGenerator(GeneratorVariant):
    level: ClassVar[DeclarationLevel] = DeclarationLevel.INTERFACE


class AnnotationRegistry:
    """Read-only mapping of (annotation name, level) to generator variant."""

    def __init__(self, variants: Mapping[str, Mapping[DeclarationLevel, GeneratorVariant]]):
        self._variants = MappingProxyType(
            {name: MappingProxyType(dict(levels)) for name, levels in variants.items()}
        )

    def lookup(self, name: str, level: DeclarationLevel) -> Optional[GeneratorVariant]:
        """Get the variant registered for name at level, if any."""
        levels = self._variants.get(name)
        if levels is None:
            return None
        return levels.get(level)

    def variants(self, name: str) -> Dict[DeclarationLevel, GeneratorVariant]:
        """Get every variant registered under name."""
        return dict(self._variants.get(name, {}))

    def names(self) -> List[str]:
        """List registered annotation names."""
        return sorted(self._variants)

    def variant_count(self) -> int:
        return sum(len(levels) for levels in self._variants.values())

    def __contains__(self, name: str) -> bool:
        return name in self._variants

    def __len__(self) -> int:
        return len(self._variants)


class RegistryBuilder:
    """Collects generator registrations and builds an immutable registry."""

    def __init__(self):
        self._variants: Dict[str, Dict[DeclarationLevel, GeneratorVariant]] = {}
        self._built = False
        self._log = ScrivenerLogger(__name__)

    def register(self, name: str, variant: GeneratorVariant) -> "RegistryBuilder":
        """
        Register a generator variant under an annotation name.

        Args:
            name: Annotation name, e.g. ``templaterTypesFor``
            variant: Generator variant; its level selects the slot

        Returns:
            This builder, for chaining

        Raises:
            RegistryError: If the registry was already built or the
                (name, level) slot is taken
        """
        if not isinstance(variant, GeneratorVariant):
            raise TypeError(f"Expected a generator variant, got {type(variant).__name__}")
        if self._built:
            raise RegistryError(
                "Cannot register generators after the registry is built", name, variant.level.value
            )

        levels = self._variants.setdefault(name, {})
        if variant.level in levels:
            raise RegistryError(
                f"Generator already registered for @{name}", name, variant.level.value
            )

        levels[variant.level] = variant
        return self

    def build(self) -> AnnotationRegistry:
        """End the initialization phase and return the immutable registry."""
        self._built = True
        registry = AnnotationRegistry(self._variants)
        self._log.log_registry_built(len(registry), registry.variant_count())
        return registry


def default_registry() -> AnnotationRegistry:
    """Build a registry holding the bundled annotation generators."""
    from .templater import register_templater_annotations

    builder = RegistryBuilder()
    register_templater_annotations(builder)
    return builder.build()
