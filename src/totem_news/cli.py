"""CLI entry point for totem-news."""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from totem_news import __version__
from totem_news.config import AppConfig, load_config
from totem_news.news.cache import JSONFileStore, MemoryStore, ResultCache
from totem_news.news.cached import CachedNewsClient
from totem_news.news.client import MissingApiKeyError, PerplexityClient, TransportError
from totem_news.news.models import NewsResult
from totem_news.quiz import ARCHETYPES, QUESTIONS, closest_archetype, score_answers

logger = logging.getLogger(__name__)


class TimeRangeChoice(str, Enum):
    day = "24h"
    three_days = "72h"
    week = "week"
    month = "month"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"totem-news {__version__}")
        raise typer.Exit()


app = typer.Typer(name="totem-news", help="Totem News — archetype quiz and tailored crypto news summaries")


@app.callback()
def main(
    version: Annotated[
        bool, typer.Option("--version", "-V", help="Show version and exit", callback=_version_callback, is_eager=True)
    ] = False,
) -> None:
    """Totem News — archetype quiz and tailored crypto news summaries."""


DEFAULT_CONFIG = Path("config.yaml")

ConfigOption = Annotated[Path, typer.Option("--config", "-c", help="Path to config.yaml")]
JsonOption = Annotated[bool, typer.Option("--json", help="Print the result as JSON")]


def _load_config(config_path: Path) -> AppConfig:
    """Load config from file, warning if the file does not exist."""
    if config_path.exists():
        return load_config(config_path)
    logger.warning("Config file %s not found, using defaults", config_path)
    return AppConfig()


def _setup_logging(cfg: AppConfig) -> None:
    """Configure logging based on monitoring config."""
    from totem_news.monitoring.logging import setup_logging  # noqa: PLC0415

    log_file = Path(cfg.monitoring.log_file) if cfg.monitoring.log_file else None
    setup_logging(structured=cfg.monitoring.structured_logging, log_file=log_file, level=cfg.monitoring.log_level)


def _build_cache(cfg: AppConfig) -> ResultCache:
    store = JSONFileStore(Path(cfg.cache.path)) if cfg.cache.path else MemoryStore()
    return ResultCache(store, ttl=cfg.cache.ttl, namespace=cfg.cache.namespace)


def _parse_topics(topics: str) -> list[str]:
    return [t.strip() for t in topics.split(",") if t.strip()]


def _echo_news(result: NewsResult) -> None:
    for paragraph in result.summary.splitlines():
        if paragraph.strip():
            typer.echo(paragraph)
    if result.articles:
        typer.echo("\nArticles:")
    for article in result.articles:
        meta = " · ".join(part for part in (article.source, article.published_at) if part)
        typer.echo(f"- {article.title}" + (f" ({meta})" if meta else ""))
        typer.echo(f"  {article.url}")


@app.command()
def scan(
    archetype: Annotated[str, typer.Argument(help="Archetype to tailor the summary for, e.g. Guardian")],
    time_range: Annotated[TimeRangeChoice, typer.Option("--range", "-r", help="How far back to look")] = (
        TimeRangeChoice.day
    ),
    topics: Annotated[str, typer.Option("--topics", "-t", help="Comma separated focus topics")] = "",
    as_json: JsonOption = False,
    no_cache: Annotated[bool, typer.Option("--no-cache", help="Skip the result cache")] = False,
    config: ConfigOption = DEFAULT_CONFIG,
) -> None:
    """Scan recent crypto news tailored to an archetype."""
    cfg = _load_config(config)
    _setup_logging(cfg)
    topic_list = _parse_topics(topics)

    try:
        with PerplexityClient.from_config(cfg.perplexity) as client:
            if no_cache or not cfg.cache.enabled:
                result = client.fetch_news(archetype, time_range.value, topic_list)
            else:
                result = CachedNewsClient(client, _build_cache(cfg)).scan(archetype, time_range.value, topic_list)
    except (TransportError, MissingApiKeyError) as exc:
        typer.echo(f"Scan failed: {exc}")
        raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(result.model_dump_json(by_alias=True, exclude={"raw"}, indent=2))
    else:
        _echo_news(result)


@app.command()
def summarize(
    archetype: Annotated[str, typer.Argument(help="Archetype to tailor the summary for")],
    url: Annotated[str, typer.Argument(help="Article URL to summarize")],
    as_json: JsonOption = False,
    config: ConfigOption = DEFAULT_CONFIG,
) -> None:
    """Summarize a single article URL for an archetype."""
    cfg = _load_config(config)
    _setup_logging(cfg)

    try:
        with PerplexityClient.from_config(cfg.perplexity) as client:
            result = client.summarize_url(archetype, url)
    except (TransportError, MissingApiKeyError) as exc:
        typer.echo(f"Could not summarize URL: {exc}")
        raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(result.model_dump_json(exclude={"raw"}, indent=2))
    else:
        typer.echo(result.summary)


@app.command()
def quiz(
    answers: Annotated[
        str | None, typer.Option("--answers", "-a", help="Comma separated option numbers (1-4), one per question")
    ] = None,
) -> None:
    """Take the eight-question archetype quiz."""
    if answers is not None:
        try:
            picks = [int(a) - 1 for a in answers.split(",")]
            traits = score_answers(picks)
        except ValueError as exc:
            typer.echo(f"Invalid answers: {exc}")
            raise typer.Exit(code=1) from exc
    else:
        picks = []
        for number, question in enumerate(QUESTIONS, start=1):
            typer.echo(f"\nQuestion {number} of {len(QUESTIONS)}: {question.text}")
            for index, option in enumerate(question.options, start=1):
                typer.echo(f"  {index}. {option.label}")
            choice = typer.prompt("Your pick", type=int)
            while not 1 <= choice <= len(question.options):
                choice = typer.prompt(f"Pick a number from 1 to {len(question.options)}", type=int)
            picks.append(choice - 1)
        traits = score_answers(picks)

    archetype = ARCHETYPES[closest_archetype(traits)]
    typer.echo(f"\nYou are... {archetype.name}!")
    typer.echo(archetype.blurb)
    typer.echo("\nStrengths:")
    for item in archetype.strengths:
        typer.echo(f"  - {item}")
    typer.echo("Be mindful of:")
    for item in archetype.watch:
        typer.echo(f"  - {item}")
    typer.echo("\nTraits: " + ", ".join(f"{k}={v}" for k, v in traits.items()))
    typer.echo(f"\nTailored news: totem-news scan {archetype.name}")


@app.command()
def proxy(
    config: ConfigOption = DEFAULT_CONFIG,
    host: Annotated[str | None, typer.Option("--host", help="Proxy bind address")] = None,
    port: Annotated[int | None, typer.Option("--port", help="Proxy port")] = None,
) -> None:
    """Serve the same-origin Perplexity proxy."""
    cfg = _load_config(config)
    _setup_logging(cfg)

    # Fall back to config values when CLI flags are not provided
    resolved_host = host if host is not None else cfg.proxy.host
    resolved_port = port if port is not None else cfg.proxy.port

    try:
        import uvicorn  # noqa: PLC0415

        from totem_news.proxy.app import create_app  # noqa: PLC0415
    except ImportError as exc:
        typer.echo("The proxy requires optional dependencies: pip install totem-news[proxy]")
        raise typer.Exit(code=1) from exc

    typer.echo(f"Proxy listening on http://{resolved_host}:{resolved_port}{cfg.proxy.path}")
    uvicorn.run(create_app(cfg.proxy), host=resolved_host, port=resolved_port, log_level="info")
