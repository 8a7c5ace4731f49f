"""
Centralized logging setup for html_snapshot.

This module configures the standard library `logging` system from the
`logging` section of the YAML configuration, supporting a console handler
and a rotating file handler.

Key Functions:
- `setup_logging()`: Initializes the logging system from configuration.
                     Called once at program start (see `html_snapshot.cli`).
- `get_logger(name)`: Returns a logger for the given module name, making sure
                      logging has been initialized (with fallbacks) first.
"""
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional, Dict, Any, TYPE_CHECKING

from html_snapshot.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from html_snapshot.core.config import ConfigurationManager

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Prevents repeated initialization of the root logger.
_logging_initialized = False


def setup_logging(config: Optional['ConfigurationManager'] = None, force: bool = False) -> None:
    """
    Configures the root logger from the 'logging' section of the configuration.

    Falls back to `logging.basicConfig` when no configuration is available, the
    configuration file cannot be loaded, or the section is missing. Loading errors
    are left for the caller to report. Relative log file paths are resolved
    against the current working directory.

    Args:
        config (Optional[ConfigurationManager]): Configuration to read. If None, the
            global `config_manager` is used.
        force (bool): Re-run the setup even if logging was already initialized.
    """
    global _logging_initialized
    if _logging_initialized and not force:
        logging.getLogger(__name__).debug("setup_logging: already initialized.")
        return

    current_config = config
    if current_config is None:
        from html_snapshot.core.config import config_manager as global_config_manager
        current_config = global_config_manager

    try:
        log_settings: Optional[Dict[str, Any]] = current_config.get("logging")
    except ConfigurationError as e:
        logging.basicConfig(level=logging.INFO, format=DEFAULT_LOG_FORMAT)
        logging.warning(f"Logging setup: configuration could not be loaded ({e}). Using basicConfig.")
        _logging_initialized = True
        return

    if not log_settings:
        logging.basicConfig(level=logging.INFO, format=DEFAULT_LOG_FORMAT)
        logging.warning("Logging setup: 'logging' section not found in configuration. Using basicConfig.")
        _logging_initialized = True
        return

    log_level_str = str(log_settings.get("level", "INFO")).upper()
    log_level = getattr(logging, log_level_str, logging.INFO)
    log_format = log_settings.get("format", DEFAULT_LOG_FORMAT)

    root_logger = logging.getLogger()
    # Drop handlers from earlier setups (or basicConfig) to avoid duplicate output.
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(log_level)
    formatter = logging.Formatter(log_format)

    handlers_settings = log_settings.get("handlers", {}) or {}

    console_handler_settings = handlers_settings.get("console", {}) or {}
    if console_handler_settings.get("enabled", False):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    file_handler_settings = handlers_settings.get("file", {}) or {}
    log_file_path_absolute = None
    if file_handler_settings.get("enabled", False):
        log_file_path = file_handler_settings.get("path", "logs/html_snapshot.log")
        log_file_path_absolute = os.path.abspath(log_file_path)
        max_bytes = int(file_handler_settings.get("max_bytes", 10 * 1024 * 1024))
        backup_count = int(file_handler_settings.get("backup_count", 5))

        try:
            os.makedirs(os.path.dirname(log_file_path_absolute), exist_ok=True)
            file_handler = RotatingFileHandler(
                filename=log_file_path_absolute,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            # File logging is optional; rendering continues with the remaining handlers.
            logging.error(f"Logging setup: Failed to configure file logging at '{log_file_path_absolute}': {e}. File logging disabled.", exc_info=True)
            log_file_path_absolute = None

    _logging_initialized = True
    logging.debug(f"Logging system initialized. Level: {log_level_str}.")
    if log_file_path_absolute:
        logging.debug(f"File logging handler enabled at path: {log_file_path_absolute}")


def get_logger(name: str) -> logging.Logger:
    """
    Retrieves a logger instance with the specified name.

    Ensures `setup_logging()` has run at least once, so modules can safely call
    this at import time.

    Args:
        name (str): The logger name, typically `__name__` of the calling module.

    Returns:
        logging.Logger: The logger.
    """
    if not _logging_initialized:
        setup_logging()
    return logging.getLogger(name)
