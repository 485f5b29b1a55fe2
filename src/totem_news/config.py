"""Configuration loading and validation."""

from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

PERPLEXITY_API_URL = "https://api.perplexity.ai/chat/completions"


class PerplexityConfig(BaseModel):
    """Upstream chat-completions configuration.

    When ``proxy_url`` is set, requests go to the same-origin proxy and no
    API key is sent; the proxy injects it server-side.
    """

    endpoint: str = PERPLEXITY_API_URL
    model: str = "sonar"
    api_key_env: str = "PERPLEXITY_API_KEY"
    proxy_url: str | None = None
    timeout: float = 60.0


class CacheConfig(BaseModel):
    """Scan result cache configuration."""

    enabled: bool = True
    ttl: float = 600.0
    path: str | None = None
    namespace: str = "news_cache_v1:"


class ProxyConfig(BaseModel):
    """Forwarding proxy configuration."""

    host: str = "127.0.0.1"
    port: int = 8787
    path: str = "/functions/v1/perplexity"
    upstream: str = PERPLEXITY_API_URL
    api_key_env: str = "PERPLEXITY_API_KEY"
    timeout: float = 60.0


class MonitoringConfig(BaseModel):
    """Logging configuration."""

    structured_logging: bool = False
    log_file: str | None = None
    log_level: str = "INFO"


class AppConfig(BaseModel):
    """Top-level application configuration."""

    perplexity: PerplexityConfig = Field(default_factory=PerplexityConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    proxy: ProxyConfig = Field(default_factory=ProxyConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)


def load_config(path: Path) -> AppConfig:
    """Load config from a YAML file."""
    load_dotenv(path.parent / ".env", override=False)
    return AppConfig(**(yaml.safe_load(path.read_text()) or {}))
