# ## File: documentwise_engine/utils/logging_utils.py
# Version: 1.2.0
# Date: 2026-10-19
# Purpose: Centralized logging configuration and utilities.
#          - Level comes from an explicit argument, then the level applied
#            from ApiConfig, then DOCUMENTWISE_LOG_LEVEL, then INFO.
#          - apply_log_level() retunes every logger created here, including
#            module loggers built before the configuration was read.

import logging
import os
import sys
import threading
from pathlib import Path
from typing import Dict, Optional, Union

LOG_LEVEL_VAR = "DOCUMENTWISE_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_lock = threading.Lock()
_configured_level: Optional[int] = None
_managed_loggers: Dict[str, logging.Logger] = {}


def resolve_log_level(level: Optional[Union[int, str]] = None) -> int:
    """
    Turn a level name or number into a logging level.

    Args:
        level: Level name ("DEBUG"), number, or None for the configured level

    Returns:
        Logging level integer, INFO when the name is unknown
    """
    if isinstance(level, int):
        return level
    if not level and _configured_level is not None:
        return _configured_level
    name = (level or os.environ.get(LOG_LEVEL_VAR, "INFO")).strip().upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def _set_level(logger: logging.Logger, level: int) -> None:
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


def apply_log_level(level: Optional[Union[int, str]]) -> int:
    """
    Make `level` the level of every DocumentWise logger.

    Loggers created later by setup_logging pick it up as their default.
    Passing None drops the applied level, so DOCUMENTWISE_LOG_LEVEL is
    read again.

    Returns:
        The level now in effect
    """
    global _configured_level
    with _lock:
        _configured_level = None if level is None else resolve_log_level(level)
        effective = resolve_log_level()
        for logger in _managed_loggers.values():
            _set_level(logger, effective)
    return effective


def setup_logging(
    name: str,
    level: Optional[Union[int, str]] = None,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Set up standardized logging configuration.

    Args:
        name: Logger name (usually __name__)
        level: Logging level (default: the applied level, else DOCUMENTWISE_LOG_LEVEL)
        log_file: Optional log file path
        format_string: Custom format string

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    with _lock:
        if logger.handlers:
            return logger

        resolved = resolve_log_level(level)
        formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if log_file:
            try:
                log_path = Path(log_file)
                log_path.parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(log_file)
                file_handler.setFormatter(formatter)
                logger.addHandler(file_handler)
            except OSError as e:
                logger.warning(f"Could not create file handler for {log_file}: {e}")

        _set_level(logger, resolved)
        # An explicit level pins the logger; the rest follow apply_log_level.
        if level is None:
            _managed_loggers[name] = logger

    return logger


def get_logger(name: str, log_file: Optional[str] = None) -> logging.Logger:
    """Logger for `name`, following the applied DocumentWise level."""
    return setup_logging(name, log_file=log_file)


class LoggerMixin:
    """
    Mixin class to add standardized logging to any class.
    """

    @property
    def logger(self) -> logging.Logger:
        if not hasattr(self, '_logger'):
            self._logger = get_logger(self.__class__.__name__)
        return self._logger
