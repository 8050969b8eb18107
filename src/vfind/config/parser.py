"""
YAML configuration parser for vfind.

This module provides functionality to load, parse, and validate YAML configuration files
for vfind. It handles configuration file discovery, parsing, validation,
and provides helpful error messages for configuration issues.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List, Union
import logging
from dataclasses import dataclass

from ..models.config import FindConfig, validate_config_dict


logger = logging.getLogger(__name__)


@dataclass
class ConfigParseResult:
    """
    Result of configuration parsing operation.

    Attributes:
        config: The parsed and validated configuration
        warnings: List of non-fatal warnings
        config_path: Path to the configuration file used
        is_default: Whether default configuration was used
    """
    config: FindConfig
    warnings: List[str]
    config_path: Optional[Path]
    is_default: bool


class ConfigurationError(Exception):
    """Raised when configuration parsing or validation fails."""
    pass


class ConfigParser:
    """
    YAML configuration parser with validation and error handling.

    This class handles loading YAML configuration files, validating their contents,
    and converting them to FindConfig objects.
    """

    DEFAULT_CONFIG_NAMES = [
        '.vfind.yaml',
        '.vfind.yml',
        'vfind.yaml',
        'vfind.yml'
    ]

    def __init__(self, strict_mode: bool = False):
        """
        Initialize the configuration parser.

        Args:
            strict_mode: If True, treat warnings as errors
        """
        self.strict_mode = strict_mode
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def load_config(self, config_path: Optional[Union[str, Path]] = None) -> ConfigParseResult:
        """
        Load and parse configuration from file or use defaults.

        Args:
            config_path: Path to configuration file. If None, searches for default files.

        Returns:
            ConfigParseResult containing parsed configuration and metadata

        Raises:
            ConfigurationError: If configuration is invalid or file cannot be read
        """
        if config_path:
            config_path = Path(config_path)
            if not config_path.exists():
                raise ConfigurationError(f"Configuration file not found: {config_path}")
            config_data = self._load_yaml_file(config_path)
            is_default = False
        else:
            config_path, config_data = self._find_and_load_config()
            is_default = config_data is None
            if is_default:
                config_data = {}

        validated_data = self._validate_config_data(config_data)
        find_config = FindConfig.from_dict(validated_data)

        warnings = find_config.validate_configuration()
        if is_default:
            warnings.append("No configuration file found, using default settings")

        # The missing-file notice is informational, strict mode ignores it
        if self.strict_mode and not is_default and warnings:
            raise ConfigurationError(f"Configuration warnings in strict mode: {'; '.join(warnings)}")

        self.logger.info(f"Configuration loaded successfully from {config_path or 'defaults'}")

        return ConfigParseResult(
            config=find_config,
            warnings=warnings,
            config_path=config_path,
            is_default=is_default
        )

    def _search_paths(self) -> List[Path]:
        return [
            Path.cwd(),
            Path.home(),
            Path.home() / '.config' / 'vfind',
        ]

    def _find_and_load_config(self) -> tuple[Optional[Path], Optional[Dict[str, Any]]]:
        """
        Find and load configuration file from default locations.

        Returns:
            Tuple of (config_path, config_data) or (None, None) if not found
        """
        for search_path in self._search_paths():
            for config_name in self.DEFAULT_CONFIG_NAMES:
                config_file = search_path / config_name
                if config_file.exists() and config_file.is_file():
                    try:
                        config_data = self._load_yaml_file(config_file)
                        self.logger.info(f"Found configuration file: {config_file}")
                        return config_file, config_data
                    except ConfigurationError as e:
                        self.logger.warning(f"Failed to load {config_file}: {e}")
                        continue

        self.logger.info("No configuration file found, using defaults")
        return None, None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load and parse YAML file.

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed YAML data as dictionary

        Raises:
            ConfigurationError: If file cannot be read or parsed
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()

            if not content.strip():
                self.logger.warning(f"Configuration file is empty: {file_path}")
                return {}

            data = yaml.safe_load(content)

            if data is None:
                return {}

            if not isinstance(data, dict):
                raise ConfigurationError(f"Configuration file must contain a YAML object, got {type(data).__name__}")

            return data

        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {file_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {file_path}: {e}") from e

    def _validate_config_data(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate configuration data structure and values.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        try:
            return validate_config_dict(config_data)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

    def validate_config_file(self, config_path: Union[str, Path]) -> List[str]:
        """
        Validate a configuration file without loading it into a FindConfig.

        Args:
            config_path: Path to configuration file

        Returns:
            List of validation errors (empty if valid)
        """
        config_path = Path(config_path)
        if not config_path.exists():
            return [f"Configuration file not found: {config_path}"]

        try:
            config_data = self._load_yaml_file(config_path)
            self._validate_config_data(config_data)
        except ConfigurationError as e:
            return [str(e)]
        return []

    def get_config_template(self) -> str:
        """
        Get a template configuration file with all options and comments.

        Returns:
            YAML template as string
        """
        template_config = FindConfig().to_dict()

        lines = [
            "# vfind configuration",
            "",
        ]
        sections = [
            ("log_level", "Logging level: CRITICAL, ERROR, WARNING, INFO or DEBUG"),
            ("exec", "Host command execution for -exec"),
            ("filesystem", "Local file system behaviour"),
        ]
        for section_name, comment in sections:
            lines.append(f"# {comment}")
            section_yaml = yaml.dump({section_name: template_config[section_name]},
                                     default_flow_style=False,
                                     sort_keys=False)
            lines.append(section_yaml.rstrip())
            lines.append("")

        return "\n".join(lines)


def load_config(config_path: Optional[Union[str, Path]] = None, strict_mode: bool = False) -> ConfigParseResult:
    """
    Convenience function to load configuration.

    Args:
        config_path: Path to configuration file (optional)
        strict_mode: Whether to treat warnings as errors

    Returns:
        ConfigParseResult containing parsed configuration

    Raises:
        ConfigurationError: If configuration is invalid
    """
    parser = ConfigParser(strict_mode=strict_mode)
    return parser.load_config(config_path)


def validate_config_file(config_path: Union[str, Path]) -> List[str]:
    """
    Convenience function to validate a configuration file.

    Args:
        config_path: Path to configuration file

    Returns:
        List of validation errors (empty if valid)
    """
    parser = ConfigParser()
    return parser.validate_config_file(config_path)


def create_config_template(output_path: Union[str, Path]) -> None:
    """
    Create a template configuration file.

    Args:
        output_path: Where to save the template

    Raises:
        ConfigurationError: If template cannot be created
    """
    parser = ConfigParser()
    template_content = parser.get_config_template()

    try:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(template_content)

    except OSError as e:
        raise ConfigurationError(f"Cannot create template file {output_path}: {e}") from e
