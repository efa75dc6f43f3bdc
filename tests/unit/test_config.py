"""
Unit tests for the configuration system.

Tests defaults, JSON and YAML loading, environment overrides and the
global configuration accessors.
"""

import json
import logging
import pytest
import yaml
from unittest.mock import patch

from scrivener.utils.config import (
    DEFAULT_NOTICE,
    ScrivenerConfig,
    get_config,
    load_config,
    set_config,
)
from scrivener.utils.exceptions import ConfigurationError


class TestDefaults:
    """Test configuration defaults."""

    def test_missing_file_uses_defaults(self, tmp_path):
        config = ScrivenerConfig(str(tmp_path / "absent.yaml"))

        assert config.templates.template_dir is None
        assert config.templates.cache_size == 128
        assert config.templates.trim_blocks is True
        assert config.generation.notice == DEFAULT_NOTICE
        assert config.generation.allow_overwrite is False
        assert config.generation.format_source is True
        assert config.logging.level == "INFO"


class TestFileLoading:
    """Test loading configuration files."""

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "scrivener.yaml"
        path.write_text(yaml.safe_dump({
            "templates": {"cache_size": 8, "template_dir": "/opt/templates"},
            "generation": {"notice": "Generated.", "allow_overwrite": True},
        }))

        config = load_config(str(path))

        assert config.templates.cache_size == 8
        assert config.templates.template_dir == "/opt/templates"
        assert config.generation.notice == "Generated."
        assert config.generation.allow_overwrite is True

    def test_load_json(self, tmp_path):
        path = tmp_path / "scrivener.json"
        path.write_text(json.dumps({"logging": {"level": "DEBUG"}}))

        assert load_config(str(path)).logging.level == "DEBUG"

    def test_load_config_installs_globally(self, tmp_path):
        path = tmp_path / "scrivener.json"
        path.write_text(json.dumps({"logging": {"level": "WARNING"}}))

        config = load_config(str(path))

        assert get_config() is config
        assert logging.getLogger("scrivener").level == logging.WARNING

    def test_file_logging_enabled(self, tmp_path):
        log_file = tmp_path / "scrivener.log"
        path = tmp_path / "scrivener.yaml"
        path.write_text(yaml.safe_dump({
            "logging": {"enable_file_logging": True, "log_file": str(log_file)},
        }))

        load_config(str(path))

        handlers = logging.getLogger("scrivener").handlers
        assert any(isinstance(h, logging.FileHandler) for h in handlers)

    def test_empty_yaml_uses_defaults(self, tmp_path):
        path = tmp_path / "scrivener.yaml"
        path.write_text("")

        assert load_config(str(path)).templates.cache_size == 128

    def test_malformed_file_raises(self, tmp_path):
        path = tmp_path / "scrivener.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(str(path))
        assert exc_info.value.details["config_file"] == str(path)

    def test_non_mapping_root_raises(self, tmp_path):
        path = tmp_path / "scrivener.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError):
            load_config(str(path))

    def test_save_round_trip(self, tmp_path):
        config = ScrivenerConfig(str(tmp_path / "absent.json"))
        config.generation.notice = "Saved notice."

        target = config.save_config(str(tmp_path / "saved.yaml"))
        reloaded = load_config(str(target))

        assert reloaded.generation.notice == "Saved notice."
        assert reloaded.to_dict()["templates"] == config.to_dict()["templates"]


class TestEnvironmentOverrides:
    """Test environment variable overrides."""

    def test_template_dir_override(self, tmp_path):
        with patch.dict("os.environ", {"SCRIVENER_TEMPLATE_DIR": "/srv/templates"}):
            config = ScrivenerConfig(str(tmp_path / "absent.json"))
        assert config.templates.template_dir == "/srv/templates"

    def test_cache_size_override(self, tmp_path):
        with patch.dict("os.environ", {"SCRIVENER_TEMPLATE_CACHE_SIZE": "16"}):
            config = ScrivenerConfig(str(tmp_path / "absent.json"))
        assert config.templates.cache_size == 16

    def test_invalid_cache_size_override(self, tmp_path):
        with patch.dict("os.environ", {"SCRIVENER_TEMPLATE_CACHE_SIZE": "lots"}):
            with pytest.raises(ConfigurationError):
                ScrivenerConfig(str(tmp_path / "absent.json"))

    def test_log_level_override(self, tmp_path):
        with patch.dict("os.environ", {"SCRIVENER_LOG_LEVEL": "ERROR"}):
            config = ScrivenerConfig(str(tmp_path / "absent.json"))
        assert config.logging.level == "ERROR"

    def test_config_file_from_environment(self, tmp_path):
        path = tmp_path / "env.json"
        path.write_text(json.dumps({"templates": {"cache_size": 3}}))

        with patch.dict("os.environ", {"SCRIVENER_CONFIG": str(path)}):
            config = ScrivenerConfig()
        assert config.templates.cache_size == 3


class TestGlobalConfig:
    """Test the global accessors."""

    def test_set_and_get(self, tmp_path):
        config = ScrivenerConfig(str(tmp_path / "absent.json"))
        set_config(config)
        assert get_config() is config

    def test_reset_builds_lazily(self):
        set_config(None)
        assert isinstance(get_config(), ScrivenerConfig)
