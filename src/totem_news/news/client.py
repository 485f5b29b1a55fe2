"""Perplexity chat-completions client for archetype news scans.

Every response goes through :func:`~totem_news.parsing.extract` and the
normalizers. A response whose content cannot be parsed degrades to a
plain-text summary; only transport failures reach the caller as errors.
"""

from __future__ import annotations

import logging
import os
from types import TracebackType
from typing import Any

import httpx

from totem_news.config import PERPLEXITY_API_URL, PerplexityConfig
from totem_news.news.models import NewsResult, Recency, TimeRange, UrlSummaryResult
from totem_news.parsing.extract import ExtractionError, extract
from totem_news.parsing.normalize import to_news_result, to_url_summary

logger = logging.getLogger(__name__)

_DEFAULT_MODEL = "sonar"
_NO_SUMMARY = "No summary returned."

_RECENCY: dict[str, Recency] = {
    "24h": "day",
    "72h": "week",  # closest available bucket
    "week": "week",
    "month": "month",
}

_NEWS_SYSTEM_PROMPT = (
    "You are a precise crypto news analyst. Only return strict JSON with keys: summary (string), "
    "articles (array of {title, url, source, publishedAt}). No markdown, no commentary outside JSON."
)
_SUMMARY_SYSTEM_PROMPT = (
    "Summarize for a crypto investor. Return strict JSON with keys: summary (string), "
    "key_points (string[]). No text outside JSON."
)


class TransportError(RuntimeError):
    """The upstream request did not complete successfully."""

    def __init__(self, status_code: int | None, body: str) -> None:
        self.status_code = status_code
        self.body = body
        label = status_code if status_code is not None else "transport"
        super().__init__(f"Perplexity error: {label} {body}")


class MissingApiKeyError(RuntimeError):
    """No API key and no proxy URL are configured."""


def map_recency(time_range: str) -> Recency:
    """Map a UI time range onto the coarser upstream recency filter."""
    return _RECENCY.get(time_range, "month")


def _base_body(*, model: str, max_tokens: int, recency: Recency, system: str, user: str) -> dict[str, Any]:
    return {
        "model": model,
        "temperature": 0.2,
        "top_p": 0.9,
        "max_tokens": max_tokens,
        "return_images": False,
        "return_related_questions": False,
        "search_recency_filter": recency,
        "frequency_penalty": 1,
        "presence_penalty": 0,
        "messages": [
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ],
    }


def build_news_request(
    archetype: str, time_range: TimeRange, topics: list[str], *, model: str = _DEFAULT_MODEL
) -> dict[str, Any]:
    """Return the chat-completions body for a news scan."""
    topics_line = f"Focus on these topics when relevant: {', '.join(topics)}." if topics else ""
    user = (
        "Scan the web for the most important cryptocurrency and blockchain headlines from the last "
        f"{time_range}. {topics_line} Tailor the summary for the {archetype} archetype — emphasize what "
        "they care about. Output concise, neutral language. Include 6–10 diverse, credible sources with "
        "canonical URLs and ISO dates. Return JSON only."
    )
    return _base_body(
        model=model, max_tokens=1200, recency=map_recency(time_range), system=_NEWS_SYSTEM_PROMPT, user=user
    )


def build_summary_request(archetype: str, url: str, *, model: str = _DEFAULT_MODEL) -> dict[str, Any]:
    """Return the chat-completions body for a single-URL summary."""
    user = f"Read and summarize this URL for the {archetype} archetype: {url}. Return JSON only."
    return _base_body(model=model, max_tokens=900, recency="month", system=_SUMMARY_SYSTEM_PROMPT, user=user)


class PerplexityClient:
    """Issue news scans and URL summaries against a chat-completions endpoint.

    ``endpoint`` is either the Perplexity API itself (with ``api_key``) or a
    same-origin proxy that injects the key server-side (``api_key=None``).
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        endpoint: str = PERPLEXITY_API_URL,
        model: str = _DEFAULT_MODEL,
        timeout: float = 60.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key
        self._endpoint = endpoint
        self._model = model
        self._owns_http = http_client is None
        self._http = http_client if http_client is not None else httpx.Client(timeout=timeout)

    @classmethod
    def from_config(cls, cfg: PerplexityConfig, *, http_client: httpx.Client | None = None) -> PerplexityClient:
        """Build a client for the proxy if configured, else for the direct API."""
        if cfg.proxy_url:
            return cls(endpoint=cfg.proxy_url, model=cfg.model, timeout=cfg.timeout, http_client=http_client)
        api_key = os.environ.get(cfg.api_key_env)
        if not api_key:
            msg = f"Missing Perplexity API key: set {cfg.api_key_env} or configure perplexity.proxy_url"
            raise MissingApiKeyError(msg)
        return cls(api_key, endpoint=cfg.endpoint, model=cfg.model, timeout=cfg.timeout, http_client=http_client)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def fetch_news(self, archetype: str, time_range: TimeRange, topics: list[str]) -> NewsResult:
        """Return a news summary tailored to *archetype*."""
        body = build_news_request(archetype, time_range, topics, model=self._model)
        content = self._complete(body)
        try:
            return to_news_result(extract(content), content)
        except ExtractionError:
            logger.warning("Could not parse news JSON; returning raw text for %s", archetype)
            return NewsResult(summary=content or _NO_SUMMARY, articles=[], raw=content)

    def summarize_url(self, archetype: str, url: str) -> UrlSummaryResult:
        """Return a summary of the article at *url* for *archetype*."""
        body = build_summary_request(archetype, url, model=self._model)
        content = self._complete(body)
        try:
            return to_url_summary(extract(content), content)
        except ExtractionError:
            logger.warning("Could not parse summary JSON for %s; returning raw text", url)
            return UrlSummaryResult(summary=content or _NO_SUMMARY, raw=content)

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> PerplexityClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _complete(self, body: dict[str, Any]) -> str:
        """POST *body* and return the first choice's message content.

        Raises :class:`TransportError` on connection failures, non-2xx
        statuses, and non-JSON success bodies.
        """
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        try:
            response = self._http.post(self._endpoint, json=body, headers=headers)
        except httpx.HTTPError as exc:
            raise TransportError(None, str(exc)) from exc

        if not response.is_success:
            logger.error("Perplexity request failed with status %d", response.status_code)
            raise TransportError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as exc:
            raise TransportError(response.status_code, response.text) from exc
        return _message_content(data)


def _message_content(data: Any) -> str:
    """Read ``choices[0].message.content``, tolerating any missing level."""
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return ""
    message = choices[0].get("message")
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    return content if isinstance(content, str) else ""
