"""Data models for news scans and URL summaries."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

TimeRange = Literal["24h", "72h", "week", "month"]
Recency = Literal["day", "week", "month"]


class ArticleItem(BaseModel):
    """A single article cited by a news scan."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    url: str
    source: str | None = None
    published_at: str | None = Field(default=None, alias="publishedAt")


class NewsResult(BaseModel):
    """Archetype-tailored news summary plus the articles it cites."""

    summary: str = ""
    articles: list[ArticleItem] = Field(default_factory=list)
    raw: str | None = None


class UrlSummaryResult(BaseModel):
    """Summary of a single article URL."""

    summary: str = ""
    raw: str | None = None
