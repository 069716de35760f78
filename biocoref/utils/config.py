"""
Configuration management for the coreference pipeline
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from ..core.configuration import Configuration
from ..core.domain import DomainVocabulary
from ..core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


DEFAULT_CONFIG = {
    "resolution": {
        # Built-in strategy set: default, generic or i2b2
        "strategies": "default",
        # YAML file of strategies declared by component name
        "strategy_file": None,
    },
    # DomainVocabulary fields; anything left out keeps the built-in biomedical lists
    "domain": {},
    "logging": {
        "level": "WARNING",
    },
}


class ConfigManager:
    """Manages configuration for the coreference pipeline"""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to YAML config file, if None uses defaults
        """
        self.config = copy.deepcopy(DEFAULT_CONFIG)
        self.config_path = config_path

        if config_path and config_path.exists():
            self.load_config(config_path)
        elif config_path:
            logger.warning(f"Config file not found: {config_path}, using defaults")

    def load_config(self, config_path: Path) -> None:
        """
        Load configuration from YAML file.

        Raises:
            ConfigurationError: If the file cannot be read or is not a mapping
        """
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                file_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load config from {config_path}: {e}") from e

        if file_config is None:
            file_config = {}
        if not isinstance(file_config, dict):
            raise ConfigurationError(f"Config file {config_path} must hold a mapping")

        # Deep merge with default config
        self.config = self._merge_configs(DEFAULT_CONFIG, file_config)
        self.config_path = config_path
        logger.info(f"Loaded configuration from {config_path}")

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key_path: Dot-separated path like 'resolution.strategies'
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self.config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key_path: str, value: Any) -> None:
        """
        Set configuration value using dot notation.

        Args:
            key_path: Dot-separated path like 'resolution.strategies'
            value: Value to set
        """
        keys = key_path.split('.')
        config = self.config

        # Navigate to parent dict
        for key in keys[:-1]:
            if key not in config:
                config[key] = {}
            config = config[key]

        config[keys[-1]] = value

    def _merge_configs(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two configuration dictionaries."""
        result = copy.deepcopy(base)

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def vocabulary(self) -> DomainVocabulary:
        """Domain vocabulary built from the ``domain`` section."""
        domain = self.get("domain") or {}
        try:
            return DomainVocabulary(**domain)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid domain section: {e}") from e

    def strategies(self) -> Configuration:
        """
        Strategy configuration named by the ``resolution`` section.

        A strategy file is resolved relative to the config file and takes
        precedence over the built-in set name.
        """
        strategy_file = self.get("resolution.strategy_file")
        if strategy_file:
            path = Path(strategy_file)
            if not path.is_absolute() and self.config_path is not None:
                path = Path(self.config_path).parent / path
            return Configuration.from_yaml(path)
        return Configuration.builtin(self.get("resolution.strategies", "default"))

    def save_config(self, config_path: Path) -> None:
        """Save current configuration to YAML file."""
        try:
            with open(config_path, 'w', encoding="utf-8") as f:
                yaml.dump(self.config, f, default_flow_style=False, indent=2)
        except OSError as e:
            raise ConfigurationError(f"Failed to save config to {config_path}: {e}") from e
        logger.info(f"Saved configuration to {config_path}")

    def to_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary."""
        return copy.deepcopy(self.config)
