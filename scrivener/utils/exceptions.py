"""
Custom exception definitions.

This module defines the exception hierarchy for Scrivener-specific
errors. Configuration errors abort the enclosing render, input errors
abort one generator invocation, and sink failures are never wrapped:
they propagate as the ``OSError`` the sink raised.
"""

from typing import Optional


class ScrivenerError(Exception):
    """
    Base exception for all Scrivener-related errors.

    This is the root exception class for all Scrivener-specific
    errors, providing common functionality and error handling.
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        """
        Initialize Scrivener error.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# Configuration errors
# =============================================================================

class ConfigurationError(ScrivenerError):
    """
    Raised for broken configuration: unreadable config files, missing
    template assets or malformed template syntax.

    Outside of start-up this aborts only the render that hit it.
    """


class FatalConfigurationError(ConfigurationError):
    """
    Raised when start-up asset loading cannot complete.

    Only the ``must`` accessors used while initializing the template
    store raise this; a generation run never does.
    """

    def __init__(self, message: str, template_id: Optional[str] = None):
        details = {}
        if template_id is not None:
            details["template_id"] = template_id

        super().__init__(message, details)
        self.template_id = template_id


class TemplateNotFoundError(ConfigurationError):
    """Raised when a render asks for a template asset the store does not hold."""

    def __init__(self, template_id: str):
        super().__init__(f"Template asset '{template_id}' not found", {"template_id": template_id})
        self.template_id = template_id


class TemplateParseError(ConfigurationError):
    """
    Raised when template source fails to parse.

    Carries the template name and, where the parser reports it, the
    offending line number.
    """

    def __init__(self, message: str, template_name: str = "", lineno: Optional[int] = None):
        """
        Initialize template parse error.

        Args:
            message: Parser error description
            template_name: Name the template was compiled under
            lineno: Optional line number of the syntax error
        """
        details = {}
        if template_name:
            details["template"] = template_name
        if lineno is not None:
            details["line"] = lineno

        super().__init__(message, details)
        self.template_name = template_name
        self.lineno = lineno


# =============================================================================
# Render errors
# =============================================================================

class TemplateRenderError(ScrivenerError):
    """
    Raised when executing a parsed template fails.

    Covers missing binding fields, failing helper calls and any other
    error raised while the template runs.
    """

    def __init__(self, message: str, template_name: str = ""):
        details = {"template": template_name} if template_name else {}
        super().__init__(message, details)
        self.template_name = template_name


# =============================================================================
# Registry errors
# =============================================================================

class RegistryError(ScrivenerError):
    """
    Raised for invalid registry construction.

    Duplicate ``(name, level)`` registrations and registrations after
    the registry has been built both raise this.
    """

    def __init__(self, message: str, annotation: Optional[str] = None, level: Optional[str] = None):
        details = {}
        if annotation is not None:
            details["annotation"] = annotation
        if level is not None:
            details["level"] = level

        super().__init__(message, details)
        self.annotation = annotation
        self.level = level


# =============================================================================
# Generation (input) errors
# =============================================================================

class GenerationError(ScrivenerError):
    """
    Raised by a generator when its input cannot produce output.

    These errors belong to a single generator invocation; a generation
    pass records them and continues with other declarations.
    """

    def __init__(self, message: str, annotation: Optional[str] = None, details: Optional[dict] = None):
        merged = dict(details or {})
        if annotation is not None:
            merged.setdefault("annotation", annotation)

        super().__init__(message, merged)
        self.annotation = annotation


class MissingParameterError(GenerationError):
    """Raised when a required annotation parameter is absent."""

    def __init__(self, parameter: str, annotation: Optional[str] = None):
        super().__init__(
            f"Required parameter '{parameter}' not provided",
            annotation,
            {"parameter": parameter},
        )
        self.parameter = parameter


class UnresolvedCompanionError(GenerationError):
    """Raised when no companion annotation carries the referenced id."""

    def __init__(self, companion: str, companion_id: str, annotation: Optional[str] = None):
        super().__init__(
            f"No @{companion} annotation with id '{companion_id}' found in package",
            annotation,
            {"companion": companion, "id": companion_id},
        )
        self.companion = companion
        self.companion_id = companion_id


class MissingTemplateBodyError(GenerationError):
    """Raised when the selected companion annotation carries no template body."""

    def __init__(self, companion: str, companion_id: str, annotation: Optional[str] = None):
        super().__init__(
            f"Expected template body from @{companion} annotation with id '{companion_id}'",
            annotation,
            {"companion": companion, "id": companion_id},
        )
        self.companion = companion
        self.companion_id = companion_id
