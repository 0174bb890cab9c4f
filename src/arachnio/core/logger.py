"""
Logging configuration for arachnio.

Library modules only ask for named loggers; handlers are installed by
`setup_logger`, which the console calls at startup.
"""

import logging
import sys
from typing import Optional, Union

ROOT_LOGGER_NAME = "arachnio"


def setup_logger(
    level: Union[int, str] = logging.WARNING,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Set up and return the package logger.

    Args:
        level: Logging level, as an int or a level name such as "DEBUG"
        log_file: Optional file path for logging

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger.setLevel(level)

    # setup_logger may run more than once (e.g. from tests)
    configured = [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]
    if configured:
        for handler in configured:
            handler.setLevel(level)
        return logger

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_module_logger(module_name: str) -> logging.Logger:
    """
    Get a child logger for a specific module, e.g. "arachnio.client".

    Child loggers inherit the handlers configured by `setup_logger`.
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{module_name}")
