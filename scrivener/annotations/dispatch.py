"""
Annotation Dispatch.

Routes each annotation occurrence to the generator variant registered
for its name and the level of the declaration carrying it, and runs a
generation pass over a whole package.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from .declarations import AnnotationDeclaration, PackageDeclaration, iter_occurrences
from .directives import WriteDirective
from .registry import AnnotationRegistry
from ..codegen.templates.renderer import TemplateBinder, get_template_binder, set_template_binder
from ..utils.exceptions import FatalConfigurationError, ScrivenerError
from ..utils.logging import ScrivenerLogger


@dataclass(frozen=True)
class GenerationFailure:
    """A generator error recorded during a generation pass."""
    annotation: AnnotationDeclaration
    declaration: Any
    error: ScrivenerError


@dataclass(frozen=True)
class GenerationResult:
    """Directives produced by a generation pass and the failures it recorded."""
    directives: Tuple[WriteDirective, ...] = ()
    failures: Tuple[GenerationFailure, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures

    def raise_first(self) -> None:
        """Raise the first recorded error, if any."""
        if self.failures:
            raise self.failures[0].error


class Dispatcher:
    """Dispatches annotations to registered generators."""

    def __init__(self, registry: AnnotationRegistry, to_dir: str = "", binder: Optional[TemplateBinder] = None):
        """
        Initialize the dispatcher.

        Template assets are loaded and validated here, so a broken
        template configuration fails before any generation pass starts.

        Args:
            registry: Built annotation registry
            to_dir: Output directory passed to generators
            binder: Optional binder to install as the process-wide binder

        Raises:
            FatalConfigurationError: If the template assets cannot be loaded
        """
        if binder is not None:
            set_template_binder(binder)
        self.binder = get_template_binder()
        self.registry = registry
        self.to_dir = to_dir
        self._log = ScrivenerLogger(__name__)

    def dispatch(self, annotation: AnnotationDeclaration, declaration, package: PackageDeclaration) -> List[WriteDirective]:
        """
        Invoke the generator for one annotation occurrence.

        The variant is chosen by the level of the declaration carrying
        the annotation. Unregistered annotations produce no directives;
        generator errors propagate.

        Args:
            annotation: The annotation occurrence
            declaration: The declaration carrying it (the package for package-level annotations)
            package: The enclosing package

        Returns:
            Write directives from the generator
        """
        level = declaration.level
        variant = self.registry.lookup(annotation.name, level)
        if variant is None:
            self._log.log_unhandled(annotation.name, level.value)
            return []

        self._log.log_dispatch(annotation.name, level.value, declaration.name)
        return variant(self.to_dir, annotation, declaration, package)

    def generate(self, package: PackageDeclaration) -> GenerationResult:
        """
        Run one generation pass over every annotation in package.

        Package-level annotations go first, then each declaration in
        source order. A failing generator is recorded and the pass
        continues; fatal configuration errors propagate.

        Args:
            package: Package to generate for

        Returns:
            Collected directives and failures
        """
        directives: List[WriteDirective] = []
        failures: List[GenerationFailure] = []

        for annotation, declaration in iter_occurrences(package):
            try:
                directives.extend(self.dispatch(annotation, declaration, package))
            except FatalConfigurationError:
                raise
            except ScrivenerError as e:
                self._log.log_failure(annotation.name, declaration.name, e)
                failures.append(GenerationFailure(annotation, declaration, e))

        return GenerationResult(tuple(directives), tuple(failures))
