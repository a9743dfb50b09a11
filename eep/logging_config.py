"""Logging setup.

The editor owns the terminal, so log records never go to stdout or stderr.
When enabled they are written to a file in the user log directory; otherwise
the package logger swallows them with a NullHandler.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import platformdirs

LOG_ENV_VAR = "EEP_LOG"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_package_logger = logging.getLogger("eep")


def default_log_path() -> Path:
    return Path(platformdirs.user_log_dir("eep")) / "eep.log"


def level_from_env(value: Optional[str]) -> Optional[int]:
    """Map an EEP_LOG value to a logging level; None means logging is off.

    "1", "true", "yes" and "on" enable INFO; a level name such as "debug"
    selects that level.
    """
    if not value:
        return None
    value = value.strip().lower()
    if value in ('0', 'false', 'no', 'off'):
        return None
    if value in ('1', 'true', 'yes', 'on'):
        return logging.INFO
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(enabled: bool = False, level: Optional[int] = None,
                      log_path: Optional[Path] = None) -> Optional[Path]:
    """Configure the package logger.

    Args:
        enabled: Force file logging on (the --log flag).
        level: Logging level; defaults to the EEP_LOG value or INFO.
        log_path: Log file location; defaults to the user log directory.

    Returns:
        The log file path if file logging was enabled, else None.
    """
    env_level = level_from_env(os.environ.get(LOG_ENV_VAR))
    for handler in list(_package_logger.handlers):
        _package_logger.removeHandler(handler)
        handler.close()
    _package_logger.propagate = False

    if not enabled and env_level is None:
        _package_logger.addHandler(logging.NullHandler())
        return None

    path = log_path or default_log_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding='utf-8')
    except OSError:
        # No writable log location; run without logging
        _package_logger.addHandler(logging.NullHandler())
        return None
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    _package_logger.addHandler(handler)
    _package_logger.setLevel(level or env_level or logging.INFO)
    return path
