"""Shared logger for the arithmetic calculator."""
import logging
import os


LOG_LEVEL_ENV: str = "ARITHMETIC_CALCULATOR_LOG_LEVEL"
LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _build_logger() -> logging.Logger:
    """
    Create the package logger with a single stream handler.

    The level is read from the ``ARITHMETIC_CALCULATOR_LOG_LEVEL`` environment variable (default ``INFO``, also used when the value is not a level name).

    :return: Configured logger
    :rtype: logging.Logger
    """
    _logger = logging.getLogger("arithmetic_calculator")
    # Avoid stacking handlers when the module is reloaded
    if not _logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        _logger.addHandler(handler)
    level = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    # Unknown names map to "Level X" strings, not to a level number
    if not isinstance(logging.getLevelName(level), int):
        level = "INFO"
    _logger.setLevel(level)
    return _logger


logger: logging.Logger = _build_logger()
