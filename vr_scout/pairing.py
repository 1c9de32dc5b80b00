# File: vr_scout/pairing.py
"""
Построение пар reference ↔ test URL.

* ``PairingEngine`` — пары для URL из sitemap: определяет, какому окружению
  принадлежит URL, и синтезирует парный URL с заменой origin (с сохранением
  учётных данных test-окружения).
* ``pair_explicit`` — пары для явно переданных списков URL.
* ``parse_url_mapping`` — явное сопоставление ``ref:test,ref2:test2``.
"""
from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional, Sequence
from urllib.parse import SplitResult, urlsplit

from vr_scout.crawler.models import Origin, PairingContext, UrlPair
from vr_scout.errors import InvalidUrlError
from vr_scout.observer import LoggingObserver, ScoutObserver
from vr_scout.utils import ensure_scheme, remove_duplicates

__all__ = [
    "origin_of",
    "build_context",
    "PairingEngine",
    "pair_explicit",
    "parse_url_mapping",
]

_DEFAULT_PORTS: Dict[str, int] = {"http": 80, "https": 443}

# first ':' that is not "://", not a port and not inside user:pass@
_MAPPING_SEP = re.compile(r":(?!//)(?!\d+(?:[/?#:]|$))(?![^/@]*@)")


def _split(url: str) -> SplitResult:
    try:
        parts = urlsplit(url)
        parts.port
    except ValueError as exc:
        raise InvalidUrlError(url, str(exc)) from exc
    if parts.scheme not in _DEFAULT_PORTS or not parts.hostname:
        raise InvalidUrlError(url, "not an absolute http(s) URL")
    return parts


def origin_of(url: str) -> Origin:
    """Origin URL-а; порт по умолчанию для схемы опускается."""
    parts = _split(url)
    port = parts.port
    if port == _DEFAULT_PORTS[parts.scheme]:
        port = None
    return Origin(parts.scheme, parts.hostname or "", port)


def _credentials(parts: SplitResult) -> Optional[str]:
    if not (parts.username or parts.password):
        return None
    user = parts.username or ""
    return f"{user}:{parts.password}" if parts.password else user


def _remainder(url: str, parts: SplitResult) -> str:
    """Часть URL после authority: path, query и fragment как есть."""
    return url[len(parts.scheme) + 3 + len(parts.netloc):]


def build_context(reference_url: str, test_url: str) -> PairingContext:
    """Создаёт PairingContext из reference URL и (первого) test URL."""
    test_parts = _split(test_url)
    return PairingContext(
        reference_origin=origin_of(reference_url),
        test_origin=origin_of(test_url),
        test_credentials=_credentials(test_parts),
    )


class PairingEngine:
    """Сопоставляет URL из sitemap с парным URL другого окружения."""

    def __init__(self, context: PairingContext, observer: Optional[ScoutObserver] = None) -> None:
        self.context = context
        self.observer: ScoutObserver = observer or LoggingObserver()

    def classify(self, url: str) -> str:
        """``"reference"``, ``"test"`` или ``"foreign"`` по hostname URL-а."""
        hostname = _split(url.strip()).hostname
        if hostname == self.context.reference_origin.hostname:
            return "reference"
        if hostname == self.context.test_origin.hostname:
            return "test"
        return "foreign"

    def pair(self, url: str) -> UrlPair:
        """
        Возвращает пару для одного URL из sitemap.

        Порядок проверки: host reference → host test → любой другой host
        (считается test-стороной, например sitemap на CDN).
        Учётные данные добавляются только в синтезированный test URL.
        """
        url = url.strip()
        parts = _split(url)
        rest = _remainder(url, parts)
        ctx = self.context

        if self.classify(url) == "reference":
            test = ctx.test_origin.prefix(ctx.test_credentials) + rest
            return UrlPair(reference=url, test=test)

        # test host or a third-party host: crawled URL is the test side
        return UrlPair(reference=ctx.reference_origin.prefix() + rest, test=url)

    def pair_all(self, urls: Iterable[str]) -> List[UrlPair]:
        """Пары в порядке входа; некорректные URL пропускаются с предупреждением."""
        pairs: List[UrlPair] = []
        for url in urls:
            try:
                pairs.append(self.pair(url))
            except InvalidUrlError:
                self.observer.warning("Skipping invalid sitemap URL: %s", url)
        self.observer.info("Created %d URL pairs from sitemap", len(pairs))
        for index, p in enumerate(pairs, start=1):
            self.observer.debug("  %d. %s vs %s", index, p.reference, p.test)
        return pairs


def _make_pairs(
    candidates: Iterable[tuple[str, str]], observer: ScoutObserver
) -> List[UrlPair]:
    pairs: List[UrlPair] = []
    for reference, test in candidates:
        try:
            pairs.append(UrlPair(reference=reference, test=test))
        except InvalidUrlError as exc:
            observer.warning("Skipping invalid URL pair %s vs %s: %s", reference, test, exc)
    return pairs


def pair_explicit(
    reference_urls: Sequence[str],
    test_urls: Sequence[str],
    observer: Optional[ScoutObserver] = None,
) -> List[UrlPair]:
    """
    Пары для явных списков URL.

    Если в обоих списках больше одного URL, пары строятся по индексу до длины
    более короткого списка; иначе каждый test URL сравнивается с первым reference.
    """
    obs: ScoutObserver = observer or LoggingObserver()
    references = remove_duplicates(list(reference_urls))
    tests = remove_duplicates(list(test_urls))
    if not references or not tests:
        return []

    if len(references) > 1 and len(tests) > 1:
        pairs = _make_pairs(zip(references, tests), obs)
        obs.info("Created %d URL pairs for testing", len(pairs))
    else:
        pairs = _make_pairs(((references[0], t) for t in tests), obs)
        obs.info("Created %d URL pairs using single reference URL", len(pairs))
    return pairs


def parse_url_mapping(text: Optional[str], observer: Optional[ScoutObserver] = None) -> List[UrlPair]:
    """
    Разбирает ``ref:test,ref2:test2`` в список пар.

    Разделитель — первое ``:``, не относящееся к ``scheme://``, порту или
    ``user:pass@``. URL без схемы получают ``https://``.
    """
    obs: ScoutObserver = observer or LoggingObserver()
    if not text:
        return []
    candidates: List[tuple[str, str]] = []
    for entry in (m.strip() for m in text.split(",")):
        pieces = _MAPPING_SEP.split(entry, maxsplit=1)
        if len(pieces) != 2:
            if entry:
                obs.warning("Ignoring URL mapping without separator: %s", entry)
            continue
        reference, test = (p.strip() for p in pieces)
        if reference and test:
            candidates.append((ensure_scheme(reference), ensure_scheme(test)))
    return _make_pairs(candidates, obs)
