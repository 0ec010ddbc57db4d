"""Package logger.

The terminal belongs to the TUI, so records go to a log file (when
configured) rather than stderr.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger("notebook_tui")
logger.addHandler(logging.NullHandler())

_LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(level: str | int = "WARNING", log_file: Path | None = None) -> None:
    """Configure the package logger.

    *level* accepts a level name (``"DEBUG"``) or number.  When *log_file* is
    given, a file handler is attached; parent directories are created.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logger.setLevel(level)

    if log_file is None:
        return
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and Path(
            handler.baseFilename
        ) == Path(log_file).resolve():
            return
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError:
        logger.debug("cannot open log file %s", log_file, exc_info=True)
        return
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(handler)
