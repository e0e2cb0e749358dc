"""
Logging Utilities
=================

Centralized logging configuration for the moderation service.
"""

import logging
import sys
from typing import Any, Mapping, Optional

# Service level names as written in the configuration file
LEVEL_NAMES = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def resolve_log_level(level: Any) -> int:
    """
    Convert a configured level name to a logging constant.

    Args:
        level: Level name such as ``"WARN"``

    Returns:
        Logging level; INFO for unknown names
    """
    return LEVEL_NAMES.get(str(level).upper(), logging.INFO)


def setup_logging(
    config: Optional[Mapping[str, Any]] = None,
    log_level: str = "INFO",
) -> logging.Logger:
    """
    Set up centralized logging configuration.

    Args:
        config: Loaded configuration; its ``logLevel`` wins over ``log_level``
        log_level: Logging level used when no configuration is given

    Returns:
        Configured logger
    """
    if config:
        log_level = config.get("logLevel", log_level)

    numeric_level = resolve_log_level(log_level)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    app_logger = logging.getLogger('mjolnir')
    app_logger.info(f"Logging initialized - Level: {logging.getLevelName(numeric_level)}")

    return app_logger
