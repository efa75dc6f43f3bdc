"""
Templater Annotation Generators.

``@templaterTypesFor`` instantiates a template defined elsewhere in the
package by a companion ``@templater`` annotation with the same ``id``.
The triggering annotation's parameters fill the template's
placeholders through the ``select``/``sel`` helpers:

    @templater(id => Mob, kind => Go, {
      func Add(m {{select TYPE1}}, n {{select TYPE2}}) {{select TYPE3}} {
      }
    })

    @templaterTypesFor(id => Mob, filename => mob_gen.go, TYPE1 => int32, TYPE2 => int32, TYPE3 => int64)

The same generator is registered for package, type, struct and
interface declarations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .declarations import AnnotationDeclaration, PackageDeclaration
from .directives import WriteDirective
from .registry import (
    RegistryBuilder,
    PackageGenerator,
    TypeGenerator,
    StructGenerator,
    InterfaceGenerator,
)
from ..codegen.nodes import Declaration, Declarations, Text
from ..codegen.structures import Comment, Package, SourceFile
from ..codegen.templates.renderer import get_template_binder, standard_helpers
from ..utils.config import get_config
from ..utils.constants import (
    OutputKind,
    TEMPLATER_ANNOTATION,
    TEMPLATER_COMPANION,
    TEMPLATER_FILENAME_FORMAT,
)
from ..utils.exceptions import (
    MissingParameterError,
    MissingTemplateBodyError,
    UnresolvedCompanionError,
)


@dataclass(frozen=True)
class TemplaterBinding:
    """Fields available to a companion template."""
    template_params: Dict[str, str] = field(hash=False)
    template_for_params: Dict[str, str] = field(hash=False)
    type_for_annotation: AnnotationDeclaration
    template_annotation: AnnotationDeclaration
    declaration: Any
    package: PackageDeclaration
    level: str


def find_companion(package: PackageDeclaration, companion_id: str):
    """First ``@templater`` annotation in the package with the given id."""
    for candidate in package.annotations_for(TEMPLATER_COMPANION):
        if candidate.param("id") == companion_id:
            return candidate
    return None


def resolve_kind(annotation: AnnotationDeclaration, companion: AnnotationDeclaration) -> str:
    """Output kind, lowercased; the triggering annotation's ``kind`` wins."""
    kind = annotation.param("kind") or companion.param("kind") or companion.param("gen") or ""
    return kind.lower()


def generate_types_for(
    to_dir: str,
    annotation: AnnotationDeclaration,
    declaration,
    package: PackageDeclaration,
) -> List[WriteDirective]:
    """
    Render the companion template selected by the annotation's ``id``.

    Args:
        to_dir: Output directory
        annotation: The ``@templaterTypesFor`` occurrence
        declaration: Declaration carrying it
        package: Enclosing package

    Returns:
        Exactly one write directive

    Raises:
        MissingParameterError: If the annotation has no ``id``
        UnresolvedCompanionError: If no companion carries that id
        MissingTemplateBodyError: If the companion has no template body
        TemplateParseError: If the companion template is malformed
        TemplateRenderError: If the template fails to render
    """
    companion_id = annotation.param("id")
    if not companion_id:
        raise MissingParameterError("id", annotation.name)

    companion = find_companion(package, companion_id)
    if companion is None:
        raise UnresolvedCompanionError(TEMPLATER_COMPANION, companion_id, annotation.name)
    if not companion.template.strip():
        raise MissingTemplateBodyError(TEMPLATER_COMPANION, companion_id, annotation.name)

    kind = resolve_kind(annotation, companion)
    file_name = annotation.param("filename") or TEMPLATER_FILENAME_FORMAT.format(
        id=companion_id.lower(), kind=kind or OutputKind.RAW.value
    )

    binding = TemplaterBinding(
        template_params=dict(companion.params),
        template_for_params=dict(annotation.params),
        type_for_annotation=annotation,
        template_annotation=companion,
        declaration=declaration,
        package=package,
        level=declaration.level.value,
    )
    body = get_template_binder().render(
        companion.template,
        binding,
        standard_helpers(annotation.params),
        f"@{TEMPLATER_COMPANION}({companion_id})",
    )

    generation = get_config().generation
    output_kind = OutputKind.from_string(kind)

    writer: Declaration
    if output_kind is OutputKind.PARTIAL_GO:
        writer = Declarations(
            Comment(generation.notice),
            Package(package.name, Text(body)),
        )
    elif output_kind is OutputKind.GO:
        writer = SourceFile(Text(body))
    else:
        writer = Text(body)

    return [
        WriteDirective(
            file_name=file_name,
            writer=writer,
            allow_overwrite=generation.allow_overwrite,
            format_source=generation.format_source and output_kind is not OutputKind.RAW,
        )
    ]


def register_templater_annotations(builder: RegistryBuilder) -> RegistryBuilder:
    """Register ``@templaterTypesFor`` for every declaration level."""
    for variant in (PackageGenerator, TypeGenerator, StructGenerator, InterfaceGenerator):
        builder.register(TEMPLATER_ANNOTATION, variant(generate_types_for))
    return builder
