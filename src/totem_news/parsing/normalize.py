"""Coerce a parsed payload into the typed news and URL-summary results.

Both mappings are total: missing or mistyped fields fall back to defaults and
malformed articles are dropped without being reported.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Any

from totem_news.news.models import ArticleItem, NewsResult, UrlSummaryResult

# Calendar dates and date-times with an optional offset. fromisoformat alone
# accepts more (basic and week dates) on newer interpreters.
_ISO_DATE_RE = re.compile(
    r"\d{4}-\d{2}-\d{2}"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d{3}(?:\d{3})?)?)?(?:[Zz]|[+-]\d{2}:\d{2})?)?"
)


def to_news_result(payload: Mapping[str, Any], raw_text: str) -> NewsResult:
    """Build a :class:`NewsResult` from an extracted payload."""
    articles = payload.get("articles")
    items: list[ArticleItem] = []
    if isinstance(articles, list):
        for candidate in articles:
            if (item := _to_article(candidate)) is not None:
                items.append(item)
    return NewsResult(summary=_str_or_empty(payload.get("summary")), articles=items, raw=raw_text)


def to_url_summary(payload: Mapping[str, Any], raw_text: str) -> UrlSummaryResult:
    """Build a :class:`UrlSummaryResult`, appending key points as bullets."""
    text = _str_or_empty(payload.get("summary"))
    key_points = payload.get("key_points")
    points = [p for p in key_points if isinstance(p, str)] if isinstance(key_points, list) else []
    if points:
        text += "\n\n" + "\n".join(f"• {p}" for p in points)
    return UrlSummaryResult(summary=text, raw=raw_text)


def _to_article(candidate: Any) -> ArticleItem | None:
    if not isinstance(candidate, Mapping):
        return None
    title = candidate.get("title")
    url = candidate.get("url")
    if not isinstance(title, str) or not isinstance(url, str):
        return None
    title, url = title.strip(), url.strip()
    if not title or not url:
        return None

    source = candidate.get("source")
    published_at = candidate.get("publishedAt")
    return ArticleItem(
        title=title,
        url=url,
        source=source.strip() if isinstance(source, str) else None,
        published_at=published_at if isinstance(published_at, str) and is_valid_date(published_at) else None,
    )


def is_valid_date(value: str) -> bool:
    """Return True if *value* parses as an ISO-8601 or RFC 2822 date."""
    text = value.strip()
    if not text:
        return False
    if _ISO_DATE_RE.fullmatch(text):
        try:
            datetime.fromisoformat(text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text)
            return True
        except ValueError:
            pass
    try:
        parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        return False
    return True


def _str_or_empty(value: Any) -> str:
    return value if isinstance(value, str) else ""
