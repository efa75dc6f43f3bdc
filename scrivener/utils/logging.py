"""
Logging configuration and utilities.

This module provides centralized logging configuration for the
Scrivener package with appropriate formatting and levels.
"""

import logging
import os
from typing import Optional


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Configure logging for the Scrivener package.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output
    """
    if level is None:
        level = os.environ.get("SCRIVENER_LOG_LEVEL", "INFO")

    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("scrivener")
    logger.setLevel(log_level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the given module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    if name == "scrivener" or name.startswith("scrivener."):
        return logging.getLogger(name)
    return logging.getLogger(f"scrivener.{name}")


class ScrivenerLogger:
    """
    Logging helpers for the generation pipeline.

    Wraps a module logger with methods for the events a generation
    pass reports: registry construction, dispatch, template cache
    traffic and recorded failures.
    """

    def __init__(self, name: str):
        """
        Initialize logger for specific component.

        Args:
            name: Component name for logging context
        """
        self.logger = get_logger(name)

    def log_registry_built(self, annotation_count: int, variant_count: int) -> None:
        """
        Log the end of the registry initialization phase.

        Args:
            annotation_count: Number of distinct annotation names
            variant_count: Number of registered generator variants
        """
        self.logger.info(
            f"Annotation registry built: {annotation_count} annotations, {variant_count} variants"
        )

    def log_dispatch(self, annotation: str, level: str, declaration: str) -> None:
        """
        Log a generator invocation.

        Args:
            annotation: Annotation name being dispatched
            level: Declaration level carrying the annotation
            declaration: Name of the declaration
        """
        self.logger.debug(f"Dispatching @{annotation} on {level} '{declaration}'")

    def log_unhandled(self, annotation: str, level: str) -> None:
        """
        Log an annotation with no generator for its level.

        Args:
            annotation: Annotation name
            level: Declaration level carrying the annotation
        """
        self.logger.debug(f"No generator registered for @{annotation} at {level} level")

    def log_failure(self, annotation: str, declaration: str, error: Exception) -> None:
        """
        Log a generator failure recorded in a generation result.

        Args:
            annotation: Annotation name whose generator failed
            declaration: Name of the declaration
            error: The recorded error
        """
        self.logger.debug(f"Recorded failure for @{annotation} on '{declaration}': {error}")

    def log_cache_hit(self, template_name: str) -> None:
        """
        Log a parsed-template cache hit.

        Args:
            template_name: Name of the cached template
        """
        self.logger.debug(f"Template cache hit for {template_name}")

    def log_cache_miss(self, template_name: str) -> None:
        """
        Log a parsed-template cache miss requiring a parse.

        Args:
            template_name: Name of the template being parsed
        """
        self.logger.debug(f"Template cache miss for {template_name}")


# Initialize logging on module import
setup_logging()
