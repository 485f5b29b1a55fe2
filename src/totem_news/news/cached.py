"""Cached wrapper around any NewsClient."""

import logging

from totem_news.news.cache import ResultCache, cache_key
from totem_news.news.models import NewsResult, TimeRange, UrlSummaryResult
from totem_news.news.provider import NewsClient

logger = logging.getLogger(__name__)


class CachedNewsClient:
    """Wrap a ``NewsClient`` so identical scans reuse a fresh result.

    Only scans are cached; URL summaries always go upstream. Concurrent misses
    for the same key each issue their own request.
    """

    def __init__(self, inner: NewsClient, cache: ResultCache) -> None:
        self._inner = inner
        self._cache = cache

    def scan(self, archetype: str, time_range: TimeRange, topics: list[str]) -> NewsResult:
        key = cache_key(archetype, time_range, topics)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("News cache hit for %s", key)
            return cached

        result = self._inner.fetch_news(archetype, time_range, topics)
        self._cache.put(key, result)
        return result

    def summarize_url(self, archetype: str, url: str) -> UrlSummaryResult:
        return self._inner.summarize_url(archetype, url)
