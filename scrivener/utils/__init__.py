"""
Utils package for Scrivener.

This module provides the exception hierarchy, configuration, logging
and string formatting helpers shared across the project.
"""

# Core utilities
from .exceptions import (
    ScrivenerError,
    ConfigurationError,
    FatalConfigurationError,
    TemplateNotFoundError,
    TemplateParseError,
    TemplateRenderError,
    RegistryError,
    GenerationError,
    MissingParameterError,
    UnresolvedCompanionError,
    MissingTemplateBodyError,
)
from .constants import *
from .string_utils import *

# Configuration and system utilities
from .config import (
    ScrivenerConfig,
    TemplateConfig,
    GenerationConfig,
    LoggingConfig,
    get_config,
    set_config,
    load_config,
)

from .logging import get_logger, setup_logging, ScrivenerLogger

__all__ = [
    # Exceptions
    "ScrivenerError",
    "ConfigurationError",
    "FatalConfigurationError",
    "TemplateNotFoundError",
    "TemplateParseError",
    "TemplateRenderError",
    "RegistryError",
    "GenerationError",
    "MissingParameterError",
    "UnresolvedCompanionError",
    "MissingTemplateBodyError",

    # Constants (exported via *)
    # String utilities (exported via *)

    # Configuration
    "ScrivenerConfig",
    "TemplateConfig",
    "GenerationConfig",
    "LoggingConfig",
    "get_config",
    "set_config",
    "load_config",

    # Logging
    "get_logger",
    "setup_logging",
    "ScrivenerLogger",
]
