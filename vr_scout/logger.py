# === FILE: vr_scout/logger.py ===
"""Project logger for **VR Scout**.

Diagnostics go to stderr so stdout stays free for the JSON pair list; an
optional rotating file receives the same records. Import :data:`logger`
anywhere, the CLI calls :func:`init_logging` once with the user's options.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

_DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOGGER_NAME: Final[str] = "VRScout"
_LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024

_LevelT = Union[int, str]


def _handlers(fmt: str, log_file: str | Path | None) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(str(log_file), maxBytes=_LOG_FILE_MAX_BYTES, backupCount=3, encoding="utf-8")
        )
    formatter = logging.Formatter(fmt)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def init_logging(
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
) -> logging.Logger:
    """Replace the handlers of the ``VRScout`` logger and set its level.

    Calling it again (e.g. from the CLI after import time) reconfigures the
    same logger object, so module-level references stay valid.
    """
    lg = logging.getLogger(_LOGGER_NAME)
    lg.setLevel(level)
    for old in list(lg.handlers):
        lg.removeHandler(old)
        old.close()
    for handler in _handlers(log_format, log_file):
        lg.addHandler(handler)
    lg.propagate = False
    return lg


logger: logging.Logger = init_logging()

__all__ = ["logger", "init_logging"]
