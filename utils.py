# utils.py
"""
Utility functions for the flow field renderer.

This module provides helper functions, such as logging setup and config
loading, that are used across different parts of the application but do
not belong to a specific domain like noise or rendering.
"""
import logging
import logging.handlers
import json
import os
from typing import Dict, Any, Optional
from errors import ConfigurationError

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary with an optional "logging" section holding
#       "level", "format", and "log_file". A null log_file disables
#       file logging.
#   - Side Effects: Replaces the root logger's handlers with a console
#     handler and, when enabled, a rotating file handler.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Outputs: The parsed config. Known sections are guaranteed to be
#     dictionaries (missing ones are filled in as empty).
#   - Side Effects: Logs and re-raises FileNotFoundError and
#     json.JSONDecodeError. Raises ConfigurationError when the file or
#     one of its sections is not a JSON object.

CONFIG_SECTIONS = ('flow_parameters', 'visualization', 'run_control', 'logging')
DEFAULT_LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
DEFAULT_LOG_FILE = 'logs/flow_field.log'
LOG_MAX_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 5


def _rotating_file_handler(log_file_path: str) -> logging.Handler:
    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    return logging.handlers.RotatingFileHandler(
        log_file_path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT
    )


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Points the root logger at the console and an optional log file.
    """
    log_config = config.get('logging') or {}
    log_level = str(log_config.get('level', 'INFO')).upper()
    log_file_path: Optional[str] = log_config.get('log_file', DEFAULT_LOG_FILE)
    formatter = logging.Formatter(log_config.get('format', DEFAULT_LOG_FORMAT))

    handlers = [logging.StreamHandler()]
    if log_file_path:
        handlers.append(_rotating_file_handler(log_file_path))

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    logging.info(
        f"Logging initialized at {log_level} "
        f"({'console + ' + log_file_path if log_file_path else 'console only'})."
    )


def load_config(path: str) -> Dict[str, Any]:
    """Reads the JSON config and checks its section layout."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError as e:
        logging.error(f"Invalid JSON in {path}: {e}")
        raise

    if not isinstance(config, dict):
        msg = f"Configuration error: {path} must contain a JSON object, got {type(config).__name__}."
        logging.error(msg)
        raise ConfigurationError(msg)

    for section in CONFIG_SECTIONS:
        value = config.setdefault(section, {})
        if not isinstance(value, dict):
            msg = f"Configuration error: section '{section}' in {path} must be an object."
            logging.error(msg)
            raise ConfigurationError(msg)

    logging.info("Configuration loaded successfully.")
    return config
