from .config import get_config, config_manager, ConfigurationManager, ConfigError, ConfigFileNotFoundError, InvalidYamlError
from .exceptions import (
    HtmlSnapshotError,
    ConfigurationError,
    ComponentError,
    RendererError,
    BrowserLaunchError,
    NavigationError,
    CaptureError,
)
from .logger import setup_logging, get_logger

__all__ = [
    # Config
    "get_config",
    "config_manager",
    "ConfigurationManager",
    "ConfigError",
    "ConfigFileNotFoundError",
    "InvalidYamlError",
    # Logger
    "setup_logging",
    "get_logger",
    # Exceptions
    "HtmlSnapshotError",
    "ConfigurationError",
    "ComponentError",
    "RendererError",
    "BrowserLaunchError",
    "NavigationError",
    "CaptureError",
]
