# File: vr_scout/observer.py
"""
Observer hooks for discovery and pairing events.

Crawler, discovery and pairing code never touch the process-wide log
directly: they report to an observer. ``LoggingObserver`` (the default)
forwards to the project logger, ``RecordingObserver`` keeps events in memory.
"""
from __future__ import annotations

import logging
from typing import Any, List, Protocol, Tuple

from vr_scout.logger import logger


class ScoutObserver(Protocol):
    def debug(self, msg: str, *args: Any) -> None: ...

    def info(self, msg: str, *args: Any) -> None: ...

    def warning(self, msg: str, *args: Any) -> None: ...

    def error(self, msg: str, *args: Any) -> None: ...


class LoggingObserver:
    """Forwards events to a :class:`logging.Logger` (project logger by default)."""

    def __init__(self, target: logging.Logger | None = None) -> None:
        self._log = target or logger

    def debug(self, msg: str, *args: Any) -> None:
        self._log.debug(msg, *args)

    def info(self, msg: str, *args: Any) -> None:
        self._log.info(msg, *args)

    def warning(self, msg: str, *args: Any) -> None:
        self._log.warning(msg, *args)

    def error(self, msg: str, *args: Any) -> None:
        self._log.error(msg, *args)


class RecordingObserver:
    """Stores ``(level, message)`` tuples with arguments already interpolated."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, str]] = []

    def _record(self, level: str, msg: str, args: Tuple[Any, ...]) -> None:
        self.events.append((level, msg % args if args else msg))

    def debug(self, msg: str, *args: Any) -> None:
        self._record("debug", msg, args)

    def info(self, msg: str, *args: Any) -> None:
        self._record("info", msg, args)

    def warning(self, msg: str, *args: Any) -> None:
        self._record("warning", msg, args)

    def error(self, msg: str, *args: Any) -> None:
        self._record("error", msg, args)

    def messages(self, level: str | None = None) -> List[str]:
        return [m for lvl, m in self.events if level is None or lvl == level]


__all__ = ["ScoutObserver", "LoggingObserver", "RecordingObserver"]
