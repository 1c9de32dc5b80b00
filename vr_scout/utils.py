# File: vr_scout/utils.py
"""vr_scout.utils: Утилиты для списков URL: разбор, дедупликация, фильтрация и лимит."""

from __future__ import annotations

import re
from typing import Collection, Dict, Iterable, List, Sequence
from urllib.parse import urlparse

from vr_scout.logger import logger

__all__: Sequence[str] = (
    "ensure_scheme",
    "parse_url_list",
    "remove_duplicates",
    "filter_urls",
    "limit_urls",
    "prepare_urls",
    "group_urls_by_domain",
)


def ensure_scheme(url: str) -> str:
    """Добавляет https:// к URL без схемы http(s)."""
    if url.startswith(("http://", "https://")):
        return url
    return f"https://{url}"


def parse_url_list(text: str | None) -> List[str]:
    """Разбирает строку URL через запятую: trim, без пустых, со схемой по умолчанию."""
    if not text:
        return []
    return [ensure_scheme(part.strip()) for part in text.split(",") if part.strip()]


def remove_duplicates(urls: Collection[str]) -> List[str]:
    """Удаляет дубликаты из списка URL, сохраняя порядок."""
    unique = list(dict.fromkeys(urls))
    removed = len(urls) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate URLs", removed)
    return unique


def _compile_patterns(patterns: Iterable[str]) -> List[re.Pattern[str]]:
    compiled: List[re.Pattern[str]] = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as exc:
            raise ValueError(f"Invalid exclusion pattern {pattern!r}: {exc}") from exc
    return compiled


def filter_urls(urls: Iterable[str], patterns: Iterable[str]) -> List[str]:
    """Отбрасывает URL, совпадающие хотя бы с одним regex-шаблоном (поиск по всей строке)."""
    compiled = _compile_patterns(patterns)
    if not compiled:
        return list(urls)
    return [url for url in urls if not any(rx.search(url) for rx in compiled)]


def limit_urls(urls: Sequence[str], limit: int) -> List[str]:
    """Возвращает префикс списка длиной не больше limit."""
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
    return list(urls[:limit])


def prepare_urls(urls: Collection[str], patterns: Iterable[str], limit: int) -> List[str]:
    """Дедупликация, затем фильтрация, затем лимит."""
    patterns = list(patterns)
    unique = remove_duplicates(urls)
    filtered = filter_urls(unique, patterns)
    if len(filtered) != len(unique):
        logger.info(
            "Filtered URLs from %d to %d using patterns: %s",
            len(unique), len(filtered), ", ".join(patterns),
        )
    limited = limit_urls(filtered, limit)
    if len(limited) != len(filtered):
        logger.info("Limiting URLs from %d to %d", len(filtered), limit)
    return limited


def group_urls_by_domain(urls: Iterable[str]) -> Dict[str, List[str]]:
    """Группирует URL по hostname; некорректные URL пропускаются."""
    groups: Dict[str, List[str]] = {}
    for url in urls:
        try:
            host = urlparse(url).hostname
        except ValueError:
            host = None
        if not host:
            logger.warning("Invalid URL: %s", url)
            continue
        groups.setdefault(host, []).append(url)
    return groups
