"""
Unit tests for configuration data models.

Tests validation and normalization of the logging, -exec and
file system settings.
"""

import pytest
from pydantic import ValidationError

from vfind.models.config import ExecConfig, FileSystemConfig, FindConfig, validate_config_dict


class TestExecConfig:
    """Test cases for ExecConfig."""

    def test_default_config(self):
        config = ExecConfig()
        assert config.enabled is True
        assert config.shell is None

    def test_blank_shell_is_default(self):
        assert ExecConfig(shell='  ').shell is None
        assert ExecConfig(shell=' /bin/bash ').shell == '/bin/bash'


class TestFindConfig:
    """Test cases for the FindConfig model."""

    def test_defaults(self):
        """Test default configuration values."""
        config = FindConfig()
        assert config.log_level == "WARNING"
        assert config.exec == ExecConfig()
        assert config.filesystem == FileSystemConfig()
        assert config.validate_configuration() == []

    def test_log_level_normalized(self):
        """Test that log level names are case-insensitive."""
        assert FindConfig(log_level="debug").log_level == "DEBUG"
        assert FindConfig(log_level="info").get_log_level() == 20

    @pytest.mark.parametrize("level", ["LOUD", 10, None])
    def test_invalid_log_level(self, level):
        with pytest.raises(ValidationError):
            FindConfig(log_level=level)

    def test_validate_configuration_warnings(self):
        """Test non-fatal configuration warnings."""
        config = FindConfig(exec={'shell': 'no-such-shell-anywhere'}, filesystem={'sort_entries': False})
        warnings = config.validate_configuration()
        assert any("shell not found" in w for w in warnings)
        assert any("unsorted" in w for w in warnings)

    def test_missing_shell_ignored_when_exec_disabled(self):
        config = FindConfig(exec={'enabled': False, 'shell': 'no-such-shell-anywhere'})
        assert config.validate_configuration() == []

    def test_dict_conversion(self):
        config = FindConfig(log_level="ERROR", exec={'enabled': False})
        data = config.to_dict()
        assert data == {
            'log_level': 'ERROR',
            'exec': {'enabled': False, 'shell': None},
            'filesystem': {'sort_entries': True},
        }
        assert FindConfig.from_dict(data) == config

    def test_str(self):
        assert str(FindConfig()) == "FindConfig(log_level=WARNING, exec=enabled, sort_entries=True)"


class TestValidateConfigDict:
    """Test cases for validate_config_dict."""

    def test_rejects_unknown_keys(self):
        with pytest.raises(ValueError, match="Unknown configuration keys: roots"):
            validate_config_dict({'roots': ['.']})

    def test_rejects_bad_values(self):
        with pytest.raises(ValueError, match="Configuration validation failed"):
            validate_config_dict({'filesystem': {'sort_entries': 'sometimes'}})

    def test_fills_defaults(self):
        assert validate_config_dict({})['exec'] == {'enabled': True, 'shell': None}
