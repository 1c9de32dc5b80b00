# === FILE: vr_scout/crawler/sitemap_crawler.py ===
from __future__ import annotations

import time
from typing import Iterable, List, Optional, Set, Tuple

from vr_scout.crawler.fetcher import XmlFetcher
from vr_scout.errors import ScoutError
from vr_scout.observer import LoggingObserver, ScoutObserver
from vr_scout.parser.sitemap_parser import parse_sitemap
from vr_scout.utils import remove_duplicates

__all__ = ("SitemapCrawler", "DEFAULT_MAX_DEPTH")

DEFAULT_MAX_DEPTH = 5


class SitemapCrawler:
    """
    Разворачивает sitemap и sitemap index в плоский список URL страниц.

    Обход в глубину по явному стеку, в порядке перечисления; уже посещённые
    sitemap пропускаются. Ошибка одного дочернего sitemap не прерывает остальные.
    """

    def __init__(
        self,
        fetcher: XmlFetcher,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
        observer: Optional[ScoutObserver] = None,
    ) -> None:
        self.fetcher = fetcher
        self.max_depth = max_depth
        self.observer: ScoutObserver = observer or LoggingObserver()

    async def crawl(self, sitemap_url: str) -> List[str]:
        """Returns page URLs of one sitemap, children expanded in listed order."""
        self.observer.info("Crawling sitemap: %s", sitemap_url)
        start = time.monotonic()
        urls: List[str] = []
        visited: Set[str] = set()
        stack: List[Tuple[str, int]] = [(sitemap_url, 0)]

        while stack:
            url, depth = stack.pop()
            if url in visited:
                self.observer.warning("Sitemap already visited, skipping: %s", url)
                continue
            visited.add(url)
            try:
                body = await self.fetcher.fetch_bytes(url)
                document = parse_sitemap(body)
            except ScoutError as exc:
                if depth == 0:
                    self.observer.error("Error crawling sitemap %s: %s", url, exc)
                else:
                    self.observer.error("Error crawling child sitemap %s: %s", url, exc)
                continue

            if document.kind == "urlset":
                urls.extend(document.locations)
            elif document.is_index:
                if depth >= self.max_depth:
                    self.observer.warning(
                        "Sitemap index %s exceeds max depth %d, children skipped", url, self.max_depth
                    )
                    continue
                # reversed so the first listed child is popped first
                for child in reversed(document.locations):
                    stack.append((child, depth + 1))
            else:
                self.observer.warning("Unrecognized sitemap document: %s", url)

        self.observer.info(
            "Found %d URLs in sitemap: %s (%.2f s)", len(urls), sitemap_url, time.monotonic() - start
        )
        return urls

    async def crawl_many(self, sitemap_urls: Iterable[str]) -> List[str]:
        """Crawls sitemaps one after another; the union is deduplicated in first-seen order."""
        collected: List[str] = []
        for sitemap_url in sitemap_urls:
            collected.extend(await self.crawl(sitemap_url))
        return remove_duplicates(collected)
