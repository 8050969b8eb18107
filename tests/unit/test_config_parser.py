"""
Unit tests for configuration parser.

Tests the YAML configuration parsing, validation, and error handling
functionality of the ConfigParser class.
"""

import pytest
import tempfile
import os
import yaml
from pathlib import Path
from unittest.mock import patch

from vfind.config.parser import (
    ConfigParser,
    ConfigParseResult,
    ConfigurationError,
    load_config,
    validate_config_file,
    create_config_template
)
from vfind.models.config import FindConfig


def write_yaml(content: str) -> str:
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        f.write(content)
        return f.name


class TestConfigParser:
    """Test cases for ConfigParser class."""

    def test_init_default(self):
        """Test default initialization."""
        parser = ConfigParser()
        assert parser.strict_mode is False
        assert parser.DEFAULT_CONFIG_NAMES == [
            '.vfind.yaml',
            '.vfind.yml',
            'vfind.yaml',
            'vfind.yml'
        ]

    def test_load_config_with_valid_file(self):
        """Test loading configuration from valid YAML file."""
        config_data = {
            'log_level': 'info',
            'exec': {'enabled': False},
        }
        temp_path = write_yaml(yaml.dump(config_data))

        try:
            result = ConfigParser().load_config(temp_path)

            assert isinstance(result, ConfigParseResult)
            assert result.config.log_level == "INFO"
            assert result.config.exec.enabled is False
            assert result.config_path == Path(temp_path)
            assert result.is_default is False
            assert result.warnings == []
        finally:
            os.unlink(temp_path)

    def test_load_config_file_not_found(self):
        """Test loading configuration from non-existent file."""
        with pytest.raises(ConfigurationError, match="Configuration file not found"):
            ConfigParser().load_config("/nonexistent/config.yaml")

    def test_load_config_invalid_yaml(self):
        """Test loading configuration with invalid YAML syntax."""
        temp_path = write_yaml("exec:\n  - invalid: [\n")
        try:
            with pytest.raises(ConfigurationError, match="Invalid YAML syntax"):
                ConfigParser().load_config(temp_path)
        finally:
            os.unlink(temp_path)

    def test_load_config_empty_file(self):
        """Test that an empty file yields the defaults."""
        temp_path = write_yaml("")
        try:
            result = ConfigParser().load_config(temp_path)
            assert result.config == FindConfig()
            assert result.is_default is False
        finally:
            os.unlink(temp_path)

    def test_load_config_non_dict_yaml(self):
        """Test loading configuration with non-dictionary YAML."""
        temp_path = write_yaml("- item1\n- item2")
        try:
            with pytest.raises(ConfigurationError, match="must contain a YAML object"):
                ConfigParser().load_config(temp_path)
        finally:
            os.unlink(temp_path)

    def test_load_config_invalid_values(self):
        temp_path = write_yaml("log_level: LOUD\n")
        try:
            with pytest.raises(ConfigurationError, match="Configuration validation failed"):
                ConfigParser().load_config(temp_path)
        finally:
            os.unlink(temp_path)

    def test_strict_mode(self):
        """Test that strict mode turns warnings into errors."""
        temp_path = write_yaml("filesystem:\n  sort_entries: false\n")
        try:
            assert ConfigParser().load_config(temp_path).warnings
            with pytest.raises(ConfigurationError, match="strict mode"):
                ConfigParser(strict_mode=True).load_config(temp_path)
        finally:
            os.unlink(temp_path)

    def test_discovery(self, tmp_path):
        """Test finding a configuration file in the search paths."""
        (tmp_path / ".vfind.yml").write_text("log_level: debug\n")
        with patch.object(ConfigParser, '_search_paths', return_value=[tmp_path]):
            result = load_config()
        assert result.config_path == tmp_path / ".vfind.yml"
        assert result.config.log_level == "DEBUG"

    def test_defaults_when_nothing_found(self, tmp_path):
        with patch.object(ConfigParser, '_search_paths', return_value=[tmp_path]):
            result = load_config(strict_mode=True)
        assert result.is_default is True
        assert result.config_path is None
        assert result.config == FindConfig()
        assert "No configuration file found, using default settings" in result.warnings

    def test_discovery_skips_broken_file(self, tmp_path):
        (tmp_path / ".vfind.yaml").write_text("exec: [\n")
        (tmp_path / "vfind.yaml").write_text("log_level: error\n")
        with patch.object(ConfigParser, '_search_paths', return_value=[tmp_path]):
            result = load_config()
        assert result.config_path == tmp_path / "vfind.yaml"


class TestConvenienceFunctions:
    """Test cases for module-level helpers."""

    def test_validate_config_file(self, tmp_path):
        good = tmp_path / "good.yaml"
        good.write_text("log_level: info\n")
        bad = tmp_path / "bad.yaml"
        bad.write_text("unknown_section: 1\n")

        assert validate_config_file(good) == []
        errors = validate_config_file(bad)
        assert len(errors) == 1
        assert "unknown_section" in errors[0]
        assert validate_config_file(tmp_path / "missing.yaml") == [
            f"Configuration file not found: {tmp_path / 'missing.yaml'}"
        ]

    def test_create_config_template(self, tmp_path):
        """Test that the template is valid YAML describing the defaults."""
        output = tmp_path / "nested" / ".vfind.yaml"
        create_config_template(output)

        content = output.read_text()
        assert content.startswith("# vfind configuration")
        data = yaml.safe_load(content)
        assert FindConfig.from_dict(data) == FindConfig()
        assert validate_config_file(output) == []
