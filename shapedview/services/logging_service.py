"""
Logging for ShapedView.

Library code only ever calls get_logger(); every logger lives under the
"shapedview" namespace, which carries a NullHandler (see the package
__init__) so a host application decides where records go.

setup_logging() is for the standalone demo. It attaches a console handler
and a dated log file to the "shapedview" logger only, never to the root
logger, and remembers what it attached so reset_logging() can take exactly
those handlers off again.
"""

import logging
import os
from datetime import date
from pathlib import Path
from typing import List, Optional

PACKAGE_LOGGER = "shapedview"

DEFAULT_LOG_DIR = Path.home() / ".local" / "share" / "shapedview" / "logs"

# Overrides the level passed to setup_logging(), e.g. SHAPEDVIEW_LOG_LEVEL=DEBUG
LOG_LEVEL_ENV = "SHAPEDVIEW_LOG_LEVEL"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_installed: List[logging.Handler] = []


def _level_from_env(default: int) -> int:
    name = os.getenv(LOG_LEVEL_ENV, "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(handler)
    _installed.append(handler)


def log_file_path(log_dir: Path, day: Optional[date] = None) -> Path:
    """Path of the log file for day (today by default) inside log_dir."""
    day = day or date.today()
    return log_dir / f"shapedview_{day:%Y%m%d}.log"


def setup_logging(
    log_level: int = logging.INFO,
    log_to_file: bool = True,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """
    Send ShapedView log records to the console and, optionally, a file.

    Args:
        log_level: Level for the package logger and its handlers.
            SHAPEDVIEW_LOG_LEVEL in the environment takes precedence.
        log_to_file: Also write to a dated file in log_dir.
        log_dir: Directory for log files. Defaults to
            ~/.local/share/shapedview/logs/

    Returns:
        The package logger. Calling again before reset_logging() changes
        nothing.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if _installed:
        return logger

    level = _level_from_env(log_level)
    logger.setLevel(level)
    # Records stay in the package handlers instead of also reaching root
    logger.propagate = False

    console = logging.StreamHandler()
    _attach(logger, console, level)

    if log_to_file:
        path = log_file_path(log_dir or DEFAULT_LOG_DIR)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            _attach(logger, logging.FileHandler(path, encoding="utf-8"), level)
        except OSError as e:
            console.setLevel(max(level, logging.WARNING))
            logger.warning(f"Could not open log file {path}: {e}. Logging to console only.")

    return logger


def reset_logging() -> None:
    """Detach and close the handlers added by setup_logging()."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    while _installed:
        handler = _installed.pop()
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def get_logger(name: str) -> logging.Logger:
    """
    Logger for a ShapedView module.

    Usage:
        logger = get_logger(__name__)
    """
    return logging.getLogger(name)
