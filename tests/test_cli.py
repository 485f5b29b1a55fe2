"""Tests for CLI entry point."""

import json
from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

from totem_news import __version__
from totem_news.cli import app
from totem_news.config import PerplexityConfig
from totem_news.news.client import PerplexityClient

runner = CliRunner()

_CONTENT = '```json\n{"summary":"Markets steady.","articles":[{"title":"A","url":"https://x.com","source":"X"}]}\n```'


@pytest.fixture()
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(
        "perplexity:\n"
        "  api_key_env: TOTEM_CLI_TEST_KEY\n"
        "cache:\n"
        f"  path: {tmp_path / 'cache.json'}\n"
        "monitoring:\n"
        "  log_level: WARNING\n"
    )
    return path


@pytest.fixture()
def upstream(monkeypatch: pytest.MonkeyPatch) -> list[httpx.Request]:
    """Route PerplexityClient.from_config through a mock transport."""
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"choices": [{"message": {"content": _CONTENT}}]})

    def from_config(cfg: PerplexityConfig) -> PerplexityClient:
        return PerplexityClient("k", http_client=httpx.Client(transport=httpx.MockTransport(handler)))

    monkeypatch.setattr(PerplexityClient, "from_config", staticmethod(from_config))
    return requests


def test_cli_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"totem-news {__version__}" in result.stdout


def test_cli_version_short() -> None:
    result = runner.invoke(app, ["-V"])
    assert result.exit_code == 0
    assert "totem-news" in result.stdout


def test_cli_help() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "scan" in result.stdout
    assert "quiz" in result.stdout


def test_cli_scan_prints_summary(config_file: Path, upstream: list[httpx.Request]) -> None:
    result = runner.invoke(app, ["scan", "Guardian", "--range", "72h", "--topics", "BTC, eth", "-c", str(config_file)])
    assert result.exit_code == 0
    assert "Markets steady." in result.stdout
    assert "- A (X)" in result.stdout
    assert "https://x.com" in result.stdout
    assert json.loads(upstream[0].content)["search_recency_filter"] == "week"


def test_cli_scan_json_output(config_file: Path, upstream: list[httpx.Request]) -> None:
    result = runner.invoke(app, ["scan", "Guardian", "--json", "-c", str(config_file)])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["summary"] == "Markets steady."
    assert payload["articles"][0]["url"] == "https://x.com"
    assert "raw" not in payload


def test_cli_scan_uses_cache(config_file: Path, upstream: list[httpx.Request]) -> None:
    runner.invoke(app, ["scan", "Guardian", "-t", "BTC", "-c", str(config_file)])
    runner.invoke(app, ["scan", "Guardian", "-t", "btc", "-c", str(config_file)])
    assert len(upstream) == 1
    runner.invoke(app, ["scan", "Guardian", "-t", "btc", "--no-cache", "-c", str(config_file)])
    assert len(upstream) == 2


def test_cli_scan_without_key_fails(config_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TOTEM_CLI_TEST_KEY", raising=False)
    result = runner.invoke(app, ["scan", "Guardian", "-c", str(config_file)])
    assert result.exit_code == 1
    assert "Scan failed" in result.stdout
    assert "TOTEM_CLI_TEST_KEY" in result.stdout


def test_cli_summarize(config_file: Path, upstream: list[httpx.Request]) -> None:
    result = runner.invoke(app, ["summarize", "Builder", "https://example.com/a", "-c", str(config_file)])
    assert result.exit_code == 0
    assert "Markets steady." in result.stdout
    assert json.loads(upstream[0].content)["search_recency_filter"] == "month"


def test_cli_quiz_scripted_answers() -> None:
    result = runner.invoke(app, ["quiz", "--answers", "4,2,3,1,4,3,4,1"])
    assert result.exit_code == 0
    assert "You are... Guardian!" in result.stdout
    assert "totem-news scan Guardian" in result.stdout


def test_cli_quiz_interactive() -> None:
    result = runner.invoke(app, ["quiz"], input="1\n1\n1\n4\n2\n4\n2\n2\n")
    assert result.exit_code == 0
    assert "Question 8 of 8" in result.stdout
    assert "You are... Gambler!" in result.stdout


@pytest.mark.parametrize("answers", ["1,2,3", "1,1,1,1,1,1,1,9", "a,b,c,d,e,f,g,h"])
def test_cli_quiz_invalid_answers(answers: str) -> None:
    result = runner.invoke(app, ["quiz", "--answers", answers])
    assert result.exit_code == 1
    assert "Invalid answers" in result.stdout
