"""
Configuration System for Scrivener.

This module provides a single configuration object covering template
loading, generation defaults and logging. Values come from an optional
JSON or YAML file and can be overridden through environment variables.
"""

import json
import os
from typing import Dict, Any, Optional
from pathlib import Path
from dataclasses import dataclass

import yaml

from .exceptions import ConfigurationError
from .constants import DEFAULT_CACHE_SIZE
from .logging import get_logger, setup_logging

logger = get_logger(__name__)


DEFAULT_NOTICE = "Autogenerated using the scrivener templater annotation."


@dataclass
class TemplateConfig:
    """Template loading and parsing configuration."""

    template_dir: Optional[str] = None
    cache_size: int = DEFAULT_CACHE_SIZE
    trim_blocks: bool = True
    lstrip_blocks: bool = True


@dataclass
class GenerationConfig:
    """Defaults applied to generated write directives."""

    notice: str = DEFAULT_NOTICE
    allow_overwrite: bool = False
    format_source: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    enable_file_logging: bool = False
    log_file: str = "scrivener.log"


class ScrivenerConfig:
    """
    Unified configuration manager for Scrivener.

    This class loads all configuration sections from a single JSON or
    YAML file. A missing file yields the defaults; a file that exists
    but cannot be parsed raises ``ConfigurationError``.
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration file. If None, uses default location.
        """
        self._explicit = bool(config_file or os.getenv("SCRIVENER_CONFIG"))
        self.config_file = self._get_config_file_path(config_file)
        self._config_data = self._load_config()

        self.templates = self._create_template_config()
        self.generation = self._create_generation_config()
        self.logging = self._create_logging_config()

    def _get_config_file_path(self, config_file: Optional[str]) -> Path:
        """Get the configuration file path."""
        if config_file:
            return Path(config_file)

        env_file = os.getenv("SCRIVENER_CONFIG")
        if env_file:
            return Path(env_file)

        # Default location: try YAML first, then JSON
        config_dir = Path.cwd()
        yaml_config = config_dir / "scrivener.yaml"
        json_config = config_dir / "scrivener.json"

        if yaml_config.exists():
            return yaml_config
        return json_config

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from file (JSON or YAML)."""
        if not self.config_file.exists():
            if self._explicit:
                logger.warning(f"Configuration file {self.config_file} not found, using defaults")
            else:
                logger.debug(f"Configuration file {self.config_file} not found, using defaults")
            return {}

        try:
            with open(self.config_file, "r") as f:
                if self.config_file.suffix.lower() in [".yaml", ".yml"]:
                    config_data = yaml.safe_load(f)
                else:
                    config_data = json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Failed to load configuration: {e}", {"config_file": str(self.config_file)}
            ) from e

        if config_data is None:
            config_data = {}
        if not isinstance(config_data, dict):
            raise ConfigurationError(
                "Configuration root must be a mapping", {"config_file": str(self.config_file)}
            )

        logger.info(f"Loaded configuration from {self.config_file}")
        return config_data

    def _create_template_config(self) -> TemplateConfig:
        """Create template configuration from loaded data."""
        template_data = self._config_data.get("templates", {})

        template_dir = os.getenv("SCRIVENER_TEMPLATE_DIR") or template_data.get("template_dir")

        cache_size = template_data.get("cache_size", DEFAULT_CACHE_SIZE)
        env_cache_size = os.getenv("SCRIVENER_TEMPLATE_CACHE_SIZE")
        if env_cache_size:
            try:
                cache_size = int(env_cache_size)
            except ValueError as e:
                raise ConfigurationError(
                    f"SCRIVENER_TEMPLATE_CACHE_SIZE must be an integer, got '{env_cache_size}'"
                ) from e

        return TemplateConfig(
            template_dir=template_dir,
            cache_size=cache_size,
            trim_blocks=template_data.get("trim_blocks", True),
            lstrip_blocks=template_data.get("lstrip_blocks", True),
        )

    def _create_generation_config(self) -> GenerationConfig:
        """Create generation configuration from loaded data."""
        gen_data = self._config_data.get("generation", {})

        return GenerationConfig(
            notice=gen_data.get("notice", DEFAULT_NOTICE),
            allow_overwrite=gen_data.get("allow_overwrite", False),
            format_source=gen_data.get("format_source", True),
        )

    def _create_logging_config(self) -> LoggingConfig:
        """Create logging configuration from loaded data."""
        log_data = self._config_data.get("logging", {})

        return LoggingConfig(
            level=os.getenv("SCRIVENER_LOG_LEVEL") or log_data.get("level", "INFO"),
            enable_file_logging=log_data.get("enable_file_logging", False),
            log_file=log_data.get("log_file", "scrivener.log"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the configuration as plain data."""
        return {
            "version": "1.0",
            "description": "Scrivener Configuration",
            "templates": {
                "template_dir": self.templates.template_dir,
                "cache_size": self.templates.cache_size,
                "trim_blocks": self.templates.trim_blocks,
                "lstrip_blocks": self.templates.lstrip_blocks,
            },
            "generation": {
                "notice": self.generation.notice,
                "allow_overwrite": self.generation.allow_overwrite,
                "format_source": self.generation.format_source,
            },
            "logging": {
                "level": self.logging.level,
                "enable_file_logging": self.logging.enable_file_logging,
                "log_file": self.logging.log_file,
            },
        }

    def apply_logging(self) -> None:
        """Reconfigure the package logger from the logging section."""
        log_file = self.logging.log_file if self.logging.enable_file_logging else None
        setup_logging(level=self.logging.level, log_file=log_file)

    def save_config(self, config_file: Optional[str] = None) -> Path:
        """
        Save current configuration to file.

        Args:
            config_file: Optional target path; defaults to the loaded file

        Returns:
            Path the configuration was written to
        """
        target = Path(config_file) if config_file else self.config_file

        with open(target, "w") as f:
            if target.suffix.lower() in [".yaml", ".yml"]:
                yaml.safe_dump(self.to_dict(), f, sort_keys=False)
            else:
                json.dump(self.to_dict(), f, indent=2)

        logger.info(f"Configuration saved to {target}")
        return target


# Global configuration instance
_global_config: Optional[ScrivenerConfig] = None


def get_config() -> ScrivenerConfig:
    """Get the global configuration instance."""
    global _global_config
    if _global_config is None:
        _global_config = ScrivenerConfig()
    return _global_config


def set_config(config: Optional[ScrivenerConfig]) -> None:
    """Set the global configuration instance; ``None`` resets to lazy defaults."""
    global _global_config
    _global_config = config


def load_config(config_file: str) -> ScrivenerConfig:
    """Load configuration from a specific file, install it globally and apply its logging section."""
    config = ScrivenerConfig(config_file)
    config.apply_logging()
    set_config(config)
    return config
