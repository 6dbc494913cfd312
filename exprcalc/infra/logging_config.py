"""Centralized logging configuration.

configure_logging() installs the process-wide handlers: stderr always, plus
a rotating file when LOG_FILE (or an explicit path) is set. Level and file
come from exprcalc.infra.config when not passed in.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from exprcalc.infra.config import get_log_file, get_log_level

_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3
_FORMATTER = logging.Formatter(
    "%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def configure_logging(*, level: int | None = None, log_file: str | Path | None = None) -> None:
    """Replace the root handlers; safe to call again (e.g. in tests).

    Args:
        level: Log level. If None, taken from LOG_LEVEL env.
        log_file: Rotating log file path. If None, taken from LOG_FILE env.
    """
    if level is None:
        level = get_log_level()
    path = Path(log_file) if log_file else get_log_file()

    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    _attach(root, logging.StreamHandler(sys.stderr), level)
    if path is not None:
        try:
            _attach(root, _open_file_handler(path), level)
        except OSError as e:
            root.warning("Could not open log file %s: %s; logging to stderr only", path, e)


def _attach(root: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(_FORMATTER)
    root.addHandler(handler)


def _open_file_handler(path: Path) -> RotatingFileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        path,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
