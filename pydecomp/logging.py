"""
Logging for pydecomp.

This module provides:
- Configurable log level, format and file via environment variables
- JSON formatting option
- LOG_* convenience functions
- A timing context manager for profiling geometric queries
"""

from __future__ import annotations

import logging
import os
import sys
import time
from contextlib import contextmanager
from typing import Any, Optional, Union


# =============================================================================
# Log Level Configuration
# =============================================================================

LOG_LEVEL_ENV = "PYDECOMP_LOG_LEVEL"
LOG_FORMAT_ENV = "PYDECOMP_LOG_FORMAT"
LOG_FILE_ENV = "PYDECOMP_LOG_FILE"

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
JSON_FORMAT = '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}'


def get_log_level() -> int:
    """Get log level from environment variable."""
    level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def get_log_format() -> str:
    """Get log format from environment variable."""
    format_type = os.environ.get(LOG_FORMAT_ENV, "default").lower()
    if format_type == "json":
        return JSON_FORMAT
    return DEFAULT_FORMAT


def get_log_file() -> Optional[str]:
    """Get log file path from environment variable."""
    return os.environ.get(LOG_FILE_ENV)


def resolve_level(level: Union[int, str, None]) -> int:
    """Turn a level name such as ``"debug"`` into a logging constant."""
    if level is None:
        return get_log_level()
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


# =============================================================================
# Logger Setup
# =============================================================================

_root_logger: Optional[logging.Logger] = None
_handlers: list = []


def setup_logging(
    level: Union[int, str, None] = None,
    format_str: Optional[str] = None,
    log_file: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """Setup the pydecomp logging system.

    Args:
        level: Log level or level name (default: from env or INFO).
        format_str: Log format string (default: from env or DEFAULT_FORMAT).
        log_file: Optional file to write logs to.
        force: Force reconfiguration even if already setup.

    Returns:
        Configured root logger.
    """
    global _root_logger, _handlers

    if _root_logger is not None and not force:
        return _root_logger

    if _root_logger is not None:
        for handler in _handlers:
            _root_logger.removeHandler(handler)
            handler.close()
    _handlers = []

    _root_logger = logging.getLogger("pydecomp")
    _root_logger.setLevel(resolve_level(level))
    _root_logger.propagate = False

    formatter = logging.Formatter(format_str or get_log_format())

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    _root_logger.addHandler(console_handler)
    _handlers.append(console_handler)

    file_path = log_file or get_log_file()
    if file_path:
        file_handler = logging.FileHandler(file_path)
        file_handler.setFormatter(formatter)
        _root_logger.addHandler(file_handler)
        _handlers.append(file_handler)

    return _root_logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (will be prefixed with 'pydecomp.').
              If None, returns root pydecomp logger.

    Returns:
        Logger instance.
    """
    if _root_logger is None:
        setup_logging()

    if name:
        return logging.getLogger(f"pydecomp.{name}")
    return _root_logger


# =============================================================================
# Convenience Functions
# =============================================================================


def LOG_DEBUG(msg: str, *args: Any, **kwargs: Any) -> None:
    """Log a debug message."""
    get_logger().debug(msg, *args, **kwargs)


def LOG_INFO(msg: str, *args: Any, **kwargs: Any) -> None:
    """Log an info message."""
    get_logger().info(msg, *args, **kwargs)


# =============================================================================
# Performance Profiling
# =============================================================================


@contextmanager
def profile_scope(name: str, log_level: int = logging.DEBUG):
    """Context manager for profiling code execution time.

    Example:
        with profile_scope("closest_hyperplane"):
            hp = ellipsoid.closest_hyperplane(obstacles)
    """
    start_time = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start_time
        get_logger().log(log_level, f"{name} took {elapsed:.6f}s")


# Setup logging on module import with defaults
setup_logging()
