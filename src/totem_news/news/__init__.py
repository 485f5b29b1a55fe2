"""Perplexity-backed news scanning with result caching."""

from totem_news.news.models import ArticleItem, NewsResult, TimeRange, UrlSummaryResult

__all__ = ["ArticleItem", "NewsResult", "TimeRange", "UrlSummaryResult"]
