# File: vr_scout/errors.py
"""vr_scout.errors: Иерархия исключений VR Scout."""

from __future__ import annotations

from typing import Optional

__all__ = (
    "ScoutError",
    "NetworkError",
    "ResponseTooLargeError",
    "FetchTimeoutError",
    "HttpStatusError",
    "ParseError",
    "InvalidUrlError",
    "NoUrlsError",
)


class ScoutError(Exception):
    """Базовое исключение для всех ошибок VR Scout."""


class NetworkError(ScoutError):
    """Соединение не установлено или разорвано (refused, reset, DNS)."""


class ResponseTooLargeError(NetworkError):
    """Тело ответа больше допустимого лимита байт."""

    def __init__(self, url: str, limit: int) -> None:
        self.url = url
        self.limit = limit
        super().__init__(f"Response body exceeds {limit} bytes: {url}")


class FetchTimeoutError(ScoutError, TimeoutError):
    """Ответ не получен вовремя, либо превышено число редиректов."""


class HttpStatusError(ScoutError):
    """Итоговый HTTP-статус вне диапазона [200, 400)."""

    def __init__(self, status: int, url: str, reason: Optional[str] = None) -> None:
        self.status = status
        self.url = url
        self.reason = reason
        super().__init__(f"HTTP {status}: {reason or 'error'} ({url})")


class ParseError(ScoutError):
    """Документ не является корректным XML."""


class InvalidUrlError(ScoutError, ValueError):
    """Строка не разбирается как абсолютный http(s) URL."""

    def __init__(self, url: str, detail: str = "invalid URL") -> None:
        self.url = url
        super().__init__(f"{detail}: {url!r}")


class NoUrlsError(ScoutError):
    """Ни одна стратегия (mapping, sitemap, явный список) не дала пар URL."""
