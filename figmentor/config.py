"""
Configuration management for Figmentor.

This module handles loading and accessing configuration values from config.yaml.
It provides a centralized way to manage conversion defaults, Figma API access
and logging without changing code.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional
import logging


class ConfigManager:
    """
    Manages configuration loading and access for Figmentor.
    """

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file, layered over the defaults."""
        defaults = self._get_default_config()
        try:
            if not self.config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}

            if not isinstance(loaded, dict):
                raise ValueError(f"Configuration root must be a mapping, got {type(loaded).__name__}")

            self._config = self._merge(defaults, loaded)
            logging.info(f"Configuration loaded from {self.config_path}")

        except Exception as e:
            logging.error(f"Failed to load configuration: {e}")
            # Fall back to default configuration
            self._config = defaults

    @classmethod
    def _merge(cls, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge override into a copy of base."""
        merged = dict(base)
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = cls._merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return {
            "conversion": {
                "schema": "atomic",
                "id_mode": "random",
                "class_prefix": "e-",
                "suffix_length": 7,
                "document_version": "0.4",
                "default_title": "Figma Design"
            },
            "figma": {
                "api_base": "https://api.figma.com/v1",
                "timeout": 30.0,
                "token_env": "FIGMA_API_KEY"
            },
            "paths": {
                "output_dir": "output",
                "log_file": "figmentor.log"
            },
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        }

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "conversion.schema")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("conversion.schema")  # Returns "atomic"
            config.get("figma.timeout")  # Returns 30.0
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get an entire configuration section.

        Args:
            section: Name of the configuration section

        Returns:
            Dictionary containing the section configuration
        """
        return self._config.get(section, {})

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    # Convenience properties for commonly used values

    @property
    def schema(self) -> str:
        """Get the default output schema name."""
        return self.get("conversion.schema", "atomic")

    @property
    def id_mode(self) -> str:
        """Get the identifier generation mode ("random" or "deterministic")."""
        return self.get("conversion.id_mode", "random")

    @property
    def class_prefix(self) -> str:
        """Get the style class identifier prefix."""
        return self.get("conversion.class_prefix", "e-")

    @property
    def suffix_length(self) -> int:
        """Get the length of generated identifier suffixes."""
        return int(self.get("conversion.suffix_length", 7))

    @property
    def document_version(self) -> str:
        """Get the version string written into documents."""
        return str(self.get("conversion.document_version", "0.4"))

    @property
    def default_title(self) -> str:
        """Get the document title used when no metadata name is given."""
        return self.get("conversion.default_title", "Figma Design")

    @property
    def figma_api_base(self) -> str:
        """Get the Figma REST API base URL."""
        return self.get("figma.api_base", "https://api.figma.com/v1")

    @property
    def figma_timeout(self) -> float:
        """Get the Figma API timeout."""
        return float(self.get("figma.timeout", 30.0))

    @property
    def figma_token_env(self) -> str:
        """Get the name of the environment variable holding the Figma token."""
        return self.get("figma.token_env", "FIGMA_API_KEY")

    @property
    def output_directory(self) -> str:
        """Get the output directory for converted documents."""
        return self.get("paths.output_dir", "output")

    @property
    def log_filename(self) -> str:
        """Get log file name."""
        return self.get("paths.log_file", "figmentor.log")


# Global configuration instance
config = ConfigManager()


def get_config() -> ConfigManager:
    """
    Get the global configuration instance.

    Returns:
        The global ConfigManager instance
    """
    return config


def get_option(value: Optional[Any], key_path: str, default: Any = None) -> Any:
    """Return value unless it is None, otherwise the configured value."""
    if value is not None:
        return value
    return config.get(key_path, default)
