"""
Configuration data models for vfind.

This module defines the settings read from ``.vfind.yaml``: logging verbosity,
whether and how ``-exec`` may run host commands, and how the local file system
lists directories.
"""

import shutil
import logging
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator


LOG_LEVELS = ['CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG']


class ExecConfig(BaseModel):
    """
    Configuration for ``-exec``.

    Attributes:
        enabled: Whether host commands may be executed at all
        shell: Shell executable used to run command lines (None for /bin/sh)
    """

    enabled: bool = Field(True, description="Allow -exec to run host commands")
    shell: Optional[str] = Field(None, description="Shell executable for -exec")

    @field_validator('shell')
    @classmethod
    def validate_shell(cls, v: Optional[str]) -> Optional[str]:
        """Normalize an empty shell setting to the default."""
        if v is None or not v.strip():
            return None
        return v.strip()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class FileSystemConfig(BaseModel):
    """
    Configuration for the local file system.

    Attributes:
        sort_entries: List directory entries sorted by name
    """

    sort_entries: bool = Field(True, description="Sort directory listings by name")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class FindConfig(BaseModel):
    """
    Main configuration class for vfind.

    Attributes:
        log_level: Logging level name for the command-line tool
        exec: ``-exec`` configuration
        filesystem: Local file system configuration
    """

    log_level: str = Field("WARNING", description="Logging level")
    exec: ExecConfig = Field(default_factory=ExecConfig, description="-exec configuration")
    filesystem: FileSystemConfig = Field(default_factory=FileSystemConfig, description="File system configuration")

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v) -> str:
        """Validate and normalize the logging level name."""
        if not isinstance(v, str):
            raise ValueError(f"Invalid log level: {v!r}")
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level '{v}'. Must be one of: {LOG_LEVELS}")
        return level

    def get_log_level(self) -> int:
        """Get the numeric logging level."""
        return getattr(logging, self.log_level)

    def validate_configuration(self) -> List[str]:
        """
        Check the configuration for problems that do not prevent running.

        Returns:
            List of warning messages
        """
        warnings = []
        if self.exec.enabled and self.exec.shell and shutil.which(self.exec.shell) is None:
            warnings.append(f"Configured shell not found: {self.exec.shell}")
        if not self.filesystem.sort_entries:
            warnings.append("Directory listings are unsorted - output order may vary between runs")
        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'log_level': self.log_level,
            'exec': self.exec.to_dict(),
            'filesystem': self.filesystem.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FindConfig':
        """Create a FindConfig instance from a dictionary."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        """String representation of the configuration."""
        exec_state = "enabled" if self.exec.enabled else "disabled"
        return f"FindConfig(log_level={self.log_level}, exec={exec_state}, sort_entries={self.filesystem.sort_entries})"


def validate_config_dict(config_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate raw configuration data.

    Args:
        config_data: Configuration dictionary

    Returns:
        Validated configuration dictionary

    Raises:
        ValueError: If the data is not a valid configuration
    """
    known_sections = set(FindConfig.model_fields)
    unknown = [key for key in config_data if key not in known_sections]
    if unknown:
        raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
    try:
        return FindConfig.model_validate(config_data).to_dict()
    except ValueError as e:
        raise ValueError(f"Configuration validation failed: {e}") from e
