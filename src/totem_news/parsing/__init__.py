"""Tolerant JSON extraction for free-form LLM responses."""

from totem_news.parsing.extract import ExtractionError, JSONValue, extract
from totem_news.parsing.normalize import to_news_result, to_url_summary
from totem_news.parsing.sanitize import sanitize

__all__ = ["ExtractionError", "JSONValue", "extract", "sanitize", "to_news_result", "to_url_summary"]
