# utils.py
"""
Utility functions for the particle network application.

This module provides helper functions, such as logging setup and config
loading, that are used across different parts of the application but do
not belong to a specific domain like motion or rendering.
"""
import logging
import logging.handlers
import json
import os
from typing import Dict, Any

from constants import (
    CONNECTION_DISTANCE, DAMPING, PARTICLE_COUNT, POINTER_FORCE,
    POINTER_RADIUS, SPEED_CAP
)

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary whose optional "logging" section holds
#       "level", "format", "log_file" (null disables the file),
#       "max_bytes", "backup_count" and "library_level".
#   - Side Effects: Replaces the root logger's handlers with a console
#     handler and, unless disabled, a rotating file handler. Caps the
#     numba and pygame loggers at "library_level" so DEBUG runs only show
#     application records.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Raises: FileNotFoundError, json.JSONDecodeError, or ValueError when
#     the top-level JSON value is not an object. Each is logged first.
#
# network_params(config: Dict[str, Any]) -> Dict[str, Any]:
#   - Outputs: the "network" section with every missing key filled in
#     from constants.py.

DEFAULT_NETWORK_PARAMS: Dict[str, Any] = {
    "seed": None,
    "particle_count": PARTICLE_COUNT,
    "connection_distance": CONNECTION_DISTANCE,
    "pointer_radius": POINTER_RADIUS,
    "pointer_force": POINTER_FORCE,
    "speed_cap": SPEED_CAP,
    "damping": DAMPING,
    "particle_colors": None,
}

# Third-party loggers that flood the console at DEBUG (numba logs every
# compilation pass).
NOISY_LIBRARY_LOGGERS = ("numba", "pygame")


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the root logger for the animation.

    Console output is always on; the rotating log file can be switched off
    by setting "log_file" to null.
    """
    log_config = config.get('logging', {}) or {}
    log_level = log_config.get('level', 'INFO').upper()
    log_format = log_config.get('format', '%(asctime)s - %(levelname)s - %(message)s')
    log_file_path = log_config.get('log_file', 'logs/network.log')
    max_bytes = int(log_config.get('max_bytes', 1024 * 1024))
    backup_count = int(log_config.get('backup_count', 5))
    library_level = log_config.get('library_level', 'WARNING').upper()

    root = logging.getLogger()
    root.setLevel(log_level)
    # Clear existing handlers to avoid duplication
    root.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if log_file_path:
        log_dir = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file_path, maxBytes=max_bytes, backupCount=backup_count
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for name in NOISY_LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    logging.info("Logging system initialized.")
    logging.debug(
        f"Log level {log_level}, library level {library_level}, "
        f"log file {log_file_path or 'disabled'} "
        f"({max_bytes} bytes x {backup_count} backups)."
    )


def load_config(path: str) -> Dict[str, Any]:
    """Loads the JSON configuration file; the top level must be an object."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError as e:
        logging.error(f"Invalid JSON in {path} at line {e.lineno}, column {e.colno}: {e.msg}.")
        raise

    if not isinstance(config, dict):
        msg = f"Configuration in {path} must be a JSON object, got {type(config).__name__}."
        logging.error(msg)
        raise ValueError(msg)

    sections = ", ".join(sorted(config)) or "none"
    logging.info(f"Configuration loaded. Sections: {sections}.")
    return config


def network_params(config: Dict[str, Any]) -> Dict[str, Any]:
    """Returns the network section of the config merged over the defaults."""
    params = dict(DEFAULT_NETWORK_PARAMS)
    overrides = config.get('network', {}) or {}

    unknown = sorted(set(overrides) - set(DEFAULT_NETWORK_PARAMS))
    if unknown:
        logging.warning(f"Ignoring unknown network parameters: {', '.join(unknown)}")

    for key in DEFAULT_NETWORK_PARAMS:
        if key in overrides:
            params[key] = overrides[key]
    return params
