"""
Configuration management for html_snapshot.

This module provides a singleton `ConfigurationManager` class that loads
settings from YAML files in the package's `config/` directory. The file is
chosen per environment (e.g. development, production), so the same tool can
run with different log levels and timeouts on a workstation and in a container.

Key Features:
- Loads settings from `<env>.yaml` based on the APP_ENV environment variable.
- Defaults to the 'development' environment if APP_ENV is not set.
- Provides a global `config_manager` instance for easy access.
- Supports dot notation for accessing nested keys (e.g., "renderer.viewport.width").
"""
import os
import yaml
from typing import Any, Dict, Optional

from html_snapshot.core.exceptions import ConfigurationError

# CONFIG_DIR: directory holding the environment YAML files (html_snapshot/config).
CONFIG_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "config")

# DEFAULT_ENV: environment used when neither an explicit env nor APP_ENV is given.
DEFAULT_ENV = "development"


class ConfigError(ConfigurationError):
    """Base class for all configuration loading errors."""
    pass


class ConfigFileNotFoundError(ConfigError):
    """Raised when the YAML file for the requested environment cannot be found."""
    pass


class InvalidYamlError(ConfigError):
    """Raised when a configuration file contains invalid YAML or is not a mapping."""
    pass


class ConfigurationManager:
    """
    Loads and serves configuration settings from YAML files.

    Implemented as a singleton: later instantiations return the same object.
    The YAML file is read on first access (or an explicit `load_config`), so a
    missing or malformed file surfaces as a `ConfigError` where it can be handled
    instead of at import time.
    """
    CONFIG_DIR: str = CONFIG_DIR
    _instance: Optional['ConfigurationManager'] = None
    _config: Dict[str, Any] = {}
    _current_env: str = ""
    _loaded: bool = False

    def __new__(cls) -> 'ConfigurationManager':
        if cls._instance is None:
            cls._instance = super(ConfigurationManager, cls).__new__(cls)
        return cls._instance

    def load_config(self, env: Optional[str] = None) -> None:
        """
        Loads configuration for the given environment.

        The environment is determined in the following order of precedence:
        1. The `env` parameter passed to this method.
        2. The `APP_ENV` environment variable.
        3. `DEFAULT_ENV`.

        Args:
            env (Optional[str]): Environment name (e.g., "production") to load.

        Raises:
            ConfigFileNotFoundError: If the YAML file for the environment is not found.
            InvalidYamlError: If the YAML file is malformed or not a dictionary.
        """
        self._current_env = env or os.getenv("APP_ENV", DEFAULT_ENV)
        config_file_path = os.path.join(self.CONFIG_DIR, f"{self._current_env}.yaml")

        try:
            with open(config_file_path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except FileNotFoundError:
            raise ConfigFileNotFoundError(
                f"Configuration file not found for environment '{self._current_env}' at '{config_file_path}'. "
                f"Ensure '{self._current_env}.yaml' exists in the '{self.CONFIG_DIR}' directory."
            )
        except yaml.YAMLError as e:
            raise InvalidYamlError(
                f"Error parsing YAML in configuration file '{config_file_path}': {e}"
            )
        if not isinstance(loaded, dict):
            raise InvalidYamlError(
                f"Configuration file '{config_file_path}' does not contain a valid YAML dictionary."
            )
        self._config = loaded
        self._loaded = True

    def ensure_loaded(self) -> None:
        """Loads the configuration for the active environment unless already loaded."""
        if not self._loaded:
            self.load_config()

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        """
        Retrieves a configuration value, using dot notation for nested keys.

        Args:
            key (str): The key to look up, e.g. "renderer.pdf.scale".
            default (Optional[Any]): Value returned when the key is missing.

        Returns:
            Any: The configuration value if found, otherwise `default`.
        """
        self.ensure_loaded()
        value: Any = self._config
        for k_part in key.split("."):
            if not isinstance(value, dict) or k_part not in value:
                return default
            value = value[k_part]
        return value

    def reload_config(self, env: Optional[str] = None) -> None:
        """
        Reloads the configuration, optionally switching environment.

        Args:
            env (Optional[str]): The environment to load. If None, the currently
                                 active environment is reloaded.
        """
        self.load_config(env or self._current_env or None)

    @property
    def current_environment(self) -> str:
        """Name of the currently loaded environment (e.g. "development")."""
        return self._current_env


# Global instance; its YAML file is read on first use.
config_manager = ConfigurationManager()


def get_config(key: str, default: Optional[Any] = None) -> Any:
    """Convenience accessor for values held by the global `config_manager`."""
    return config_manager.get(key, default)
