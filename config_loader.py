"""
Configuration loader utility for the Dataroid request logger.
Loads configuration from config.json and provides it to all components.
"""

import json
from typing import Dict, Any, Optional, List
from pathlib import Path

class ConfigLoader:
    """Loads and provides access to application configuration."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration loader.

        Args:
            config_path: Path to the config.json file. If None, uses default location.
        """
        if config_path is None:
            config_path = Path(__file__).parent / "config.json"

        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file."""
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                self._config = json.load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., 'logging.debugMode' or 'providers.DATAROID')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def get_logging_config(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return self._config.get('logging', {})

    def get_all_provider_configs(self) -> Dict[str, Any]:
        """Get all provider configurations."""
        return self.get('providers', {})

    def get_provider_config(self, provider_key: str) -> Dict[str, Any]:
        """Get configuration for a single provider."""
        return self.get(f'providers.{provider_key}', {})

    def get_disabled_providers(self) -> List[str]:
        """Get keys of providers switched off in the configuration."""
        return [
            key for key, provider_config in self.get_all_provider_configs().items()
            if not provider_config.get('enabled', True)
        ]

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

# Global configuration instance
_config_loader: Optional[ConfigLoader] = None

def get_config() -> ConfigLoader:
    """Get the global configuration loader instance."""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader

def init_config(config_path: Optional[str] = None) -> ConfigLoader:
    """Initialize the global configuration loader with a specific path."""
    global _config_loader
    _config_loader = ConfigLoader(config_path)
    return _config_loader

