"""Tests for news data models."""

from totem_news.news.models import ArticleItem, NewsResult, UrlSummaryResult


def test_article_accepts_alias_and_field_name() -> None:
    by_alias = ArticleItem.model_validate({"title": "A", "url": "u", "publishedAt": "2026-02-28"})
    by_name = ArticleItem(title="A", url="u", published_at="2026-02-28")
    assert by_alias == by_name


def test_article_dumps_published_at_alias() -> None:
    item = ArticleItem(title="A", url="u", published_at="2026-02-28")
    assert item.model_dump(by_alias=True)["publishedAt"] == "2026-02-28"


def test_news_result_defaults() -> None:
    result = NewsResult()
    assert result.summary == ""
    assert result.articles == []
    assert result.raw is None


def test_news_result_articles_not_shared() -> None:
    a, b = NewsResult(), NewsResult()
    a.articles.append(ArticleItem(title="A", url="u"))
    assert b.articles == []


def test_url_summary_defaults() -> None:
    assert UrlSummaryResult().summary == ""
