"""
Configuration management package for vfind.

This package provides configuration parsing, validation, and management
functionality for the vfind command-line tool.
"""

from .parser import (
    ConfigParser,
    ConfigParseResult,
    ConfigurationError,
    load_config,
    validate_config_file,
    create_config_template
)

__all__ = [
    'ConfigParser',
    'ConfigParseResult',
    'ConfigurationError',
    'load_config',
    'validate_config_file',
    'create_config_template'
]
