"""
Scrivener: annotation-driven source code synthesis.

Declarations parsed from a source tree carry annotations; each
annotation is resolved to a registered generator, generators compose
trees of renderable nodes bound to templates, and the result is a list
of write directives for the caller to put on disk.

Usage:
    from scrivener import Dispatcher, default_registry

    dispatcher = Dispatcher(default_registry(), to_dir="out")
    result = dispatcher.generate(package)
    for directive in result.directives:
        content = directive.render()
"""

__version__ = "0.1.0"
__author__ = "Scrivener Team"
__email__ = "scrivener@example.com"

# Public API exports
from .utils.exceptions import ScrivenerError

from .utils.config import (
    get_config,
    ScrivenerConfig
)

from .annotations import (
    Dispatcher,
    GenerationResult,
    RegistryBuilder,
    AnnotationRegistry,
    WriteDirective,
    default_registry,
)

__all__ = [
    "ScrivenerError",
    "get_config",
    "ScrivenerConfig",
    "Dispatcher",
    "GenerationResult",
    "RegistryBuilder",
    "AnnotationRegistry",
    "WriteDirective",
    "default_registry",
]
