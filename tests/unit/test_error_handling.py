"""
Unit tests for the exception hierarchy.

Tests message formatting, attached details and the classification of
configuration, render, registry and generation errors.
"""

import pytest

from scrivener.utils.exceptions import (
    ConfigurationError,
    FatalConfigurationError,
    GenerationError,
    MissingParameterError,
    MissingTemplateBodyError,
    RegistryError,
    ScrivenerError,
    TemplateNotFoundError,
    TemplateParseError,
    TemplateRenderError,
    UnresolvedCompanionError,
)


class TestScrivenerExceptions:
    """Test cases for custom exception classes."""

    def test_scrivener_error_basic(self):
        """Test basic ScrivenerError functionality."""
        error = ScrivenerError("Test error message")
        assert str(error) == "Test error message"
        assert error.message == "Test error message"
        assert error.details == {}

    def test_scrivener_error_with_details(self):
        """Test ScrivenerError with details."""
        details = {"key1": "value1", "key2": 42}
        error = ScrivenerError("Test error", details)

        assert error.details == details
        assert str(error) == "Test error (key1=value1, key2=42)"

    def test_fatal_configuration_error(self):
        error = FatalConfigurationError("Asset missing", "function.j2")

        assert isinstance(error, ConfigurationError)
        assert error.template_id == "function.j2"
        assert "template_id=function.j2" in str(error)

    def test_template_not_found_error(self):
        error = TemplateNotFoundError("if.j2")

        assert isinstance(error, ConfigurationError)
        assert not isinstance(error, FatalConfigurationError)
        assert "if.j2" in error.message

    def test_template_parse_error(self):
        error = TemplateParseError("unexpected end", "broken", 3)

        assert error.details == {"template": "broken", "line": 3}
        assert error.lineno == 3

    def test_template_render_error_is_not_configuration(self):
        error = TemplateRenderError("undefined field", "struct.j2")

        assert not isinstance(error, ConfigurationError)
        assert error.template_name == "struct.j2"

    def test_registry_error(self):
        error = RegistryError("duplicate", "json", "struct")
        assert str(error) == "duplicate (annotation=json, level=struct)"


class TestGenerationErrors:
    """Test per-invocation input errors."""

    @pytest.mark.parametrize("error", [
        MissingParameterError("id", "templaterTypesFor"),
        UnresolvedCompanionError("templater", "Mob", "templaterTypesFor"),
        MissingTemplateBodyError("templater", "Mob", "templaterTypesFor"),
    ])
    def test_generation_errors_share_base(self, error):
        assert isinstance(error, GenerationError)
        assert error.annotation == "templaterTypesFor"
        assert error.details["annotation"] == "templaterTypesFor"

    def test_missing_parameter(self):
        error = MissingParameterError("id")

        assert error.parameter == "id"
        assert "'id'" in error.message
        assert "annotation" not in error.details

    def test_unresolved_companion(self):
        error = UnresolvedCompanionError("templater", "Mob")

        assert error.companion_id == "Mob"
        assert "@templater" in error.message
        assert error.details == {"companion": "templater", "id": "Mob"}

    def test_missing_template_body(self):
        error = MissingTemplateBodyError("templater", "Mob")
        assert "template body" in error.message
