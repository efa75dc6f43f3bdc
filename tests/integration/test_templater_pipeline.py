"""
Integration tests for the templater generation pipeline.

Runs whole generation passes through the default registry and the
packaged template assets, from annotated declarations to rendered file
bytes.
"""

import pytest

from scrivener.annotations import (
    AnnotationDeclaration,
    Dispatcher,
    InterfaceDeclaration,
    PackageDeclaration,
    StructDeclaration,
    TypeDeclaration,
    default_registry,
)
from scrivener.utils.config import ScrivenerConfig, set_config
from scrivener.utils.exceptions import (
    MissingParameterError,
    MissingTemplateBodyError,
    TemplateParseError,
    TemplateRenderError,
    UnresolvedCompanionError,
)

from conftest import MOB_BODY, templater, types_for


NOTICE_LINE = "// Autogenerated using the scrivener templater annotation.\n"


@pytest.fixture
def dispatcher(temp_test_dir):
    return Dispatcher(default_registry(), temp_test_dir)


def single_directive(result):
    assert result.ok, [str(failure.error) for failure in result.failures]
    assert len(result.directives) == 1
    return result.directives[0]


class TestOutputKinds:
    """Test the envelope chosen for each output kind."""

    def test_go_kind_wraps_source_file(self, dispatcher, mob_package):
        directive = single_directive(dispatcher.generate(mob_package("Go")))

        assert directive.file_name == "mob_templater_types_for_gen.go"
        assert directive.render() == (MOB_BODY + "\n").encode()
        assert directive.format_source is True
        assert directive.allow_overwrite is False

    def test_partial_go_adds_notice_and_package(self, dispatcher, mob_package):
        directive = single_directive(dispatcher.generate(mob_package("partial.go")))

        assert directive.file_name == "mob_templater_types_for_gen.partial.go"
        assert directive.render() == (NOTICE_LINE + "package mob\n\n" + MOB_BODY).encode()

    def test_unknown_kind_is_passed_through(self, dispatcher, mob_package):
        directive = single_directive(dispatcher.generate(mob_package("txt")))

        assert directive.file_name == "mob_templater_types_for_gen.txt"
        assert directive.render() == MOB_BODY.encode()
        assert directive.format_source is False

    def test_missing_kind_uses_raw_extension(self, dispatcher):
        package = PackageDeclaration(
            name="mob",
            annotations=(templater("Mob"),),
            declarations=(StructDeclaration("Mob", annotations=(types_for(),)),),
        )

        directive = single_directive(dispatcher.generate(package))
        assert directive.file_name == "mob_templater_types_for_gen.raw"
        assert directive.render() == MOB_BODY.encode()

    def test_configured_notice(self, dispatcher, mob_package, tmp_path):
        config_file = tmp_path / "scrivener.yaml"
        config_file.write_text("generation:\n  notice: Generated code, do not edit.\n  allow_overwrite: true\n")
        set_config(ScrivenerConfig(str(config_file)))

        directive = single_directive(dispatcher.generate(mob_package("partial.go")))

        assert directive.render().startswith(b"// Generated code, do not edit.\npackage mob\n")
        assert directive.allow_overwrite is True


class TestParameterResolution:
    """Test how the triggering and companion annotations combine."""

    def test_filename_override(self, dispatcher, mob_package):
        package = mob_package("go", types_for(filename="mob_gen.go"))

        directive = single_directive(dispatcher.generate(package))
        assert directive.file_name == "mob_gen.go"

    def test_trigger_kind_overrides_companion(self, dispatcher, mob_package):
        package = mob_package("go", types_for(kind="partial.go"))

        directive = single_directive(dispatcher.generate(package))
        assert directive.file_name.endswith(".partial.go")
        assert directive.render().startswith(NOTICE_LINE.encode())

    def test_legacy_gen_parameter(self, dispatcher):
        package = PackageDeclaration(
            name="mob",
            annotations=(templater("Mob", gen="go"),),
            declarations=(StructDeclaration("Mob", annotations=(types_for(),)),),
        )

        directive = single_directive(dispatcher.generate(package))
        assert directive.file_name == "mob_templater_types_for_gen.go"

    def test_first_companion_wins(self, dispatcher):
        package = PackageDeclaration(
            name="mob",
            annotations=(
                templater("Mob", "first {{select TYPE1}}", kind="txt"),
                templater("Mob", "second {{select TYPE1}}", kind="txt"),
            ),
            declarations=(StructDeclaration("Mob", annotations=(types_for(),)),),
        )

        directive = single_directive(dispatcher.generate(package))
        assert directive.render() == b"first int32"

    def test_companion_on_declaration_is_found(self, dispatcher):
        package = PackageDeclaration(
            name="mob",
            declarations=(
                TypeDeclaration("Count", "int", annotations=(templater("Mob", kind="txt"),)),
                StructDeclaration("Mob", annotations=(types_for(),)),
            ),
        )

        directive = single_directive(dispatcher.generate(package))
        assert directive.render() == MOB_BODY.encode()

    def test_sel_alias_and_missing_keys(self, dispatcher):
        package = PackageDeclaration(
            name="mob",
            annotations=(templater("Mob", "[{{sel TYPE1}}][{{select UNKNOWN}}]", kind="txt"),),
            declarations=(StructDeclaration("Mob", annotations=(types_for(),)),),
        )

        directive = single_directive(dispatcher.generate(package))
        assert directive.render() == b"[int32][]"

    def test_binding_fields(self, dispatcher):
        template = (
            "{{ declaration.name }} {{ package.name }} {{ level }} "
            "{{ template_params.id }} {{ template_for_params.TYPE3 }}"
        )
        package = PackageDeclaration(
            name="mob",
            annotations=(templater("Mob", template, kind="txt"),),
            declarations=(StructDeclaration("Counter", annotations=(types_for(),)),),
        )

        directive = single_directive(dispatcher.generate(package))
        assert directive.render() == b"Counter mob struct Mob int64"


class TestDeclarationLevels:
    """Test that every declaration level dispatches to the templater."""

    @pytest.mark.parametrize("declaration, level", [
        (TypeDeclaration("Mob", "int", annotations=(types_for(),)), "type"),
        (StructDeclaration("Mob", annotations=(types_for(),)), "struct"),
        (InterfaceDeclaration("Mob", annotations=(types_for(),)), "interface"),
    ])
    def test_declaration_levels(self, dispatcher, declaration, level):
        package = PackageDeclaration(
            name="mob",
            annotations=(templater("Mob", "{{ level }}", kind="txt"),),
            declarations=(declaration,),
        )

        directive = single_directive(dispatcher.generate(package))
        assert directive.render() == level.encode()

    def test_package_level(self, dispatcher):
        package = PackageDeclaration(
            name="mob",
            annotations=(
                templater("Mob", "{{ level }} {{ declaration.name }}", kind="txt"),
                types_for(),
            ),
        )

        directive = single_directive(dispatcher.generate(package))
        assert directive.render() == b"package mob"

    def test_directives_follow_source_order(self, dispatcher):
        package = PackageDeclaration(
            name="mob",
            annotations=(
                templater("Mob", "{{ declaration.name }}", kind="txt"),
                types_for(filename="pkg.txt"),
            ),
            declarations=(
                StructDeclaration("A", annotations=(types_for(filename="a.txt"),)),
                TypeDeclaration("B", "int", annotations=(types_for(filename="b.txt"),)),
            ),
        )

        result = dispatcher.generate(package)
        assert [d.file_name for d in result.directives] == ["pkg.txt", "a.txt", "b.txt"]
        assert [d.render() for d in result.directives] == [b"mob", b"A", b"B"]


class TestFailures:
    """Test that input errors are recorded without aborting the pass."""

    def test_unresolved_id_records_failure(self, dispatcher, mob_package):
        result = dispatcher.generate(mob_package("go", types_for("Missing")))

        assert not result.ok
        assert result.directives == ()
        assert isinstance(result.failures[0].error, UnresolvedCompanionError)
        assert result.failures[0].declaration.name == "Mob"

    def test_missing_id(self, dispatcher, mob_package):
        result = dispatcher.generate(mob_package("go", types_for(None)))

        with pytest.raises(MissingParameterError):
            result.raise_first()

    def test_empty_template_body(self, dispatcher):
        package = PackageDeclaration(
            name="mob",
            annotations=(templater("Mob", "  ", kind="go"),),
            declarations=(StructDeclaration("Mob", annotations=(types_for(),)),),
        )

        result = dispatcher.generate(package)
        assert isinstance(result.failures[0].error, MissingTemplateBodyError)

    def test_malformed_template(self, dispatcher):
        package = PackageDeclaration(
            name="mob",
            annotations=(templater("Mob", "{% if %}", kind="go"),),
            declarations=(StructDeclaration("Mob", annotations=(types_for(),)),),
        )

        result = dispatcher.generate(package)
        assert isinstance(result.failures[0].error, TemplateParseError)

    def test_undefined_field_fails_render(self, dispatcher):
        package = PackageDeclaration(
            name="mob",
            annotations=(templater("Mob", "{{ nothing.here }}", kind="go"),),
            declarations=(StructDeclaration("Mob", annotations=(types_for(),)),),
        )

        result = dispatcher.generate(package)
        assert isinstance(result.failures[0].error, TemplateRenderError)

    def test_failure_does_not_stop_other_declarations(self, dispatcher):
        package = PackageDeclaration(
            name="mob",
            annotations=(templater("Mob", "ok", kind="txt"),),
            declarations=(
                StructDeclaration("Broken", annotations=(types_for("Missing"),)),
                StructDeclaration("Mob", annotations=(types_for(),)),
            ),
        )

        result = dispatcher.generate(package)
        assert len(result.failures) == 1
        assert [d.render() for d in result.directives] == [b"ok"]

    def test_unregistered_annotations_are_ignored(self, dispatcher):
        package = PackageDeclaration(
            name="mob",
            annotations=(AnnotationDeclaration("json"), templater("Mob")),
        )

        result = dispatcher.generate(package)
        assert result.ok
        assert result.directives == ()
