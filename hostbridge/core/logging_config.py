"""
Logging Configuration Module.

This module provides centralized logging configuration for hostbridge.
Library modules only create loggers with ``logging.getLogger(__name__)``;
applications embedding hostbridge call ``setup_logging`` once at startup.

Features:
- Configurable log levels per module
- Simple, detailed and JSON line formats
- Level and format defaults taken from ``hostbridge.core.config.Settings``
"""

import logging
from typing import Optional

from hostbridge.core.config import get_settings

# Define log formats
SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"

JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", '
    '"module": "%(filename)s", "function": "%(funcName)s", "line": %(lineno)d, '
    '"message": "%(message)s"}'
)

# Module-specific log levels
MODULE_LOG_LEVELS = {
    "hostbridge": "INFO",
    "hostbridge.session": "INFO",
    "hostbridge.messaging": "INFO",
    "hostbridge.runtime": "INFO",
    "hostbridge.capabilities": "INFO",
    "hostbridge.transport": "WARNING",
    "asyncio": "WARNING",
}


def _format_string(fmt: str) -> str:
    if fmt == "json":
        return JSON_FORMAT
    if fmt == "simple":
        return SIMPLE_FORMAT
    return DETAILED_FORMAT


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    module_levels: Optional[dict[str, str]] = None,
) -> None:
    """
    Configure logging for an application using hostbridge.

    Args:
        log_level: Override the configured console level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Override the configured format (simple, detailed, json)
        module_levels: Extra per-logger levels, applied after ``MODULE_LOG_LEVELS``
    """
    settings = get_settings()
    level = (log_level or settings.log_level).upper()
    fmt = (log_format or settings.log_format).lower()

    formatter = logging.Formatter(_format_string(fmt), datefmt="%Y-%m-%d %H:%M:%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture all levels, filter at handler level

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    levels = dict(MODULE_LOG_LEVELS)
    levels.update(module_levels or {})
    # A DEBUG console level also lowers every hostbridge logger to DEBUG.
    if level == "DEBUG":
        levels.update({name: "DEBUG" for name in levels if name.startswith("hostbridge")})
    for module_name, module_level in levels.items():
        logging.getLogger(module_name).setLevel(module_level)

    root_logger.info(f"Logging configured: level={level}, format={fmt}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The module name (typically __name__)

    Returns:
        A configured logger instance
    """
    return logging.getLogger(name)
