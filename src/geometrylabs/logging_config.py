"""
Logging Configuration
Handlers for the 'geometrylabs' logger namespace. Every module logs through
``logging.getLogger(__name__)``; only this module attaches handlers.
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Union

PACKAGE_LOGGER = "geometrylabs"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def level_from_name(name: Union[str, int], default: int = logging.INFO) -> int:
    """Resolve a level stored in settings ("DEBUG", "warning", 10, ...) to a logging level."""
    if isinstance(name, int):
        return name
    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else default


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach a stdout handler (and optionally a file handler) to the package logger.

    Calling it again replaces the handlers, so a level change from the
    settings does not duplicate output.

    Args:
        level: Logging level or its name.
        log_file: Optional path of a log file, truncated on start.

    Returns:
        The configured package logger.

    Raises:
        OSError: The log file cannot be opened.
    """
    level = level_from_name(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info(f"Logging initialized at {logging.getLevelName(level)}.")
    return logger
