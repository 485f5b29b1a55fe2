"""NewsClient protocol defining the query interface."""

from typing import Protocol

from totem_news.news.models import NewsResult, TimeRange, UrlSummaryResult


class NewsClient(Protocol):
    """Structural protocol for archetype news clients."""

    def fetch_news(self, archetype: str, time_range: TimeRange, topics: list[str]) -> NewsResult: ...

    def summarize_url(self, archetype: str, url: str) -> UrlSummaryResult: ...
