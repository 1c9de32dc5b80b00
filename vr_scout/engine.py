# File: vr_scout/engine.py
"""vr_scout.engine: Orchestration layer — выбор стратегии и построение списка пар URL."""

from __future__ import annotations

from typing import List, Optional

from vr_scout.config import ScoutConfig
from vr_scout.crawler.discovery import discover_sitemaps
from vr_scout.crawler.fetcher import XmlFetcher
from vr_scout.crawler.models import UrlPair
from vr_scout.crawler.sitemap_crawler import SitemapCrawler
from vr_scout.errors import NoUrlsError
from vr_scout.observer import LoggingObserver, ScoutObserver
from vr_scout.pairing import PairingEngine, build_context, pair_explicit, parse_url_mapping
from vr_scout.utils import group_urls_by_domain, prepare_urls

__all__ = ["resolve_pairs"]


def _require_reference(config: ScoutConfig) -> str:
    if not config.reference:
        raise NoUrlsError("A reference URL is required unless --url-mapping resolves every pair")
    return config.reference


async def _sitemap_pairs(
    config: ScoutConfig, fetcher: XmlFetcher, observer: ScoutObserver
) -> List[UrlPair]:
    reference = _require_reference(config)
    if not config.test:
        raise NoUrlsError("Sitemap mode needs at least one test URL")
    if len(config.test) > 1:
        observer.warning(
            "Sitemap mode pairs against the first test URL only (%s); %d others ignored",
            config.test[0], len(config.test) - 1,
        )

    crawler = SitemapCrawler(fetcher, max_depth=config.max_depth, observer=observer)
    if config.auto_discover:
        sitemaps = await discover_sitemaps(reference, fetcher, observer)
        if not sitemaps:
            observer.warning("No sitemaps discovered for %s", reference)
            return []
        urls = await crawler.crawl_many(sitemaps)
    else:
        urls = await crawler.crawl(config.sitemap or "")

    if not urls:
        observer.warning("No URLs found in sitemap")
        return []

    selected = prepare_urls(urls, config.sitemap_filter, config.sitemap_limit)
    for host, host_urls in group_urls_by_domain(selected).items():
        observer.info("Selected %d URLs on %s", len(host_urls), host)
    engine = PairingEngine(build_context(reference, config.test[0]), observer)
    return engine.pair_all(selected)


async def resolve_pairs(
    config: ScoutConfig,
    fetcher: Optional[XmlFetcher] = None,
    observer: Optional[ScoutObserver] = None,
) -> List[UrlPair]:
    """
    Возвращает упорядоченный список пар URL для внешнего visual-diff движка.

    Стратегии по порядку: явный url_mapping → sitemap (или автопоиск) →
    явные списки reference/test. Если ни одна не дала пар, бросает NoUrlsError.
    """
    obs: ScoutObserver = observer or LoggingObserver()

    if config.url_mapping:
        obs.info("Using custom URL mapping...")
        pairs = parse_url_mapping(config.url_mapping, obs)
        if pairs:
            obs.info("Created %d URL pairs from mapping", len(pairs))
            return pairs

    if config.sitemap:
        if fetcher is None:
            async with XmlFetcher(
                timeout=config.timeout,
                max_redirects=config.max_redirects,
                max_bytes=config.max_bytes,
                user_agent=config.user_agent,
            ) as own_fetcher:
                pairs = await _sitemap_pairs(config, own_fetcher, obs)
        else:
            pairs = await _sitemap_pairs(config, fetcher, obs)
        if pairs:
            return pairs

    if not config.test:
        raise NoUrlsError("No URLs to test. Please provide test URLs or a valid sitemap.")
    reference = _require_reference(config)
    obs.info("Total test URLs: %d", len(config.test))
    pairs = pair_explicit([reference], config.test, obs)
    if not pairs:
        raise NoUrlsError("No URLs to test. Please provide test URLs or a valid sitemap.")
    return pairs
