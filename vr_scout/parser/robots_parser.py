# File: vr_scout/parser/robots_parser.py
"""vr_scout.parser.robots_parser: Извлечение деклараций Sitemap из robots.txt."""

from __future__ import annotations

import re
from typing import List

_SITEMAP_RE = re.compile(r"^\s*sitemap\s*:\s*(https?://\S+)", re.IGNORECASE)


def extract_sitemaps(text: str) -> List[str]:
    """Возвращает URL из строк ``Sitemap: <url>`` в порядке появления.

    Регистр ключевого слова не важен, остальные директивы игнорируются.
    """
    found: List[str] = []
    for raw in text.splitlines():
        match = _SITEMAP_RE.match(raw)
        if match:
            found.append(match.group(1))
    return found


__all__ = ["extract_sitemaps"]
