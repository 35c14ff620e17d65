"""
Centralized logging configuration.
Every module logs through get_logger(__name__).
"""
import logging
import logging.handlers
from pathlib import Path
from .constants import (
    LOG_LEVEL, LOG_FORMAT, LOG_FILE,
    LOG_MAX_SIZE_MB, LOG_BACKUP_COUNT
)

ROOT_LOGGER_NAME = 'interline'

# Top-level packages whose module loggers hang under ROOT_LOGGER_NAME
PROJECT_PACKAGES = ('interline', 'providers', 'config')


def _qualified_name(name: str = None) -> str:
    if not name:
        return ROOT_LOGGER_NAME
    package = name.split('.')[0]
    if package in PROJECT_PACKAGES and package != ROOT_LOGGER_NAME:
        return f"{ROOT_LOGGER_NAME}.{name}"
    return name


def setup_logger(name: str = None) -> logging.Logger:
    """
    Get or create a configured logger.

    Module loggers of the project packages (``interline.grammar``,
    ``providers.google_provider``...) are placed under the ``interline``
    logger and propagate to its handlers; other names get handlers of their
    own.

    Usage:
        from config.logging_config import get_logger
        logger = get_logger(__name__)
        logger.info("Message here")

    Args:
        name: Logger name. If None, uses 'interline'.

    Returns:
        Configured logging.Logger instance.
    """
    name = _qualified_name(name)
    logger = logging.getLogger(name)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    if name.startswith(ROOT_LOGGER_NAME + '.'):
        # Handled by the 'interline' logger
        return logger

    logger.setLevel(getattr(logging, LOG_LEVEL))

    # Console handler - WARNING level, the CLI raises it with --verbose
    console = logging.StreamHandler()
    console.setLevel(logging.WARNING)
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console)

    # File handler with rotation - DEBUG level
    log_path = Path(LOG_FILE)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        LOG_FILE,
        maxBytes=LOG_MAX_SIZE_MB * 1024 * 1024,
        backupCount=LOG_BACKUP_COUNT,
        encoding='utf-8'
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(file_handler)

    return logger


def get_logger(name: str = None) -> logging.Logger:
    """
    Alias for setup_logger for convenience.

    Usage:
        from config.logging_config import get_logger
        logger = get_logger(__name__)
    """
    return setup_logger(name)


def set_console_level(level: int, name: str = None) -> None:
    """Change the console verbosity of a configured logger."""
    target = setup_logger(name)
    target.setLevel(min(target.level or level, level))
    for handler in target.handlers:
        if not isinstance(handler, logging.handlers.RotatingFileHandler):
            handler.setLevel(level)


# Singleton logger for quick imports
# Usage: from config.logging_config import logger
logger = setup_logger(ROOT_LOGGER_NAME)
