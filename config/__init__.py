"""
Configuration package for Interline Translate.

Settings are not imported here; use `from config.settings import settings`
so that reading the environment stays explicit.
"""
from .constants import (
    ANNOTATION_CLOSE,
    ANNOTATION_OPEN,
    BATCH_DELIMITER,
    CACHE_FILE_NAME,
    CACHE_PAIR_SEPARATOR,
    DEFAULT_MIN_WORD_LENGTH,
    DEFAULT_PROVIDER,
    DEFAULT_SOURCE_LANGUAGE,
    DEFAULT_TARGET_LANGUAGE,
)
from .logging_config import setup_logger, get_logger, set_console_level, logger

__all__ = [
    # Constants
    'ANNOTATION_CLOSE',
    'ANNOTATION_OPEN',
    'BATCH_DELIMITER',
    'CACHE_FILE_NAME',
    'CACHE_PAIR_SEPARATOR',
    'DEFAULT_MIN_WORD_LENGTH',
    'DEFAULT_PROVIDER',
    'DEFAULT_SOURCE_LANGUAGE',
    'DEFAULT_TARGET_LANGUAGE',
    # Logging
    'setup_logger',
    'get_logger',
    'set_console_level',
    'logger',
]
