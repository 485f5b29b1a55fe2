"""FastAPI forwarding proxy for Perplexity chat completions.

Clients post the request body they would send to Perplexity; the proxy adds
the bearer key from the environment and relays the upstream response
verbatim (status, body and content type).
"""

import logging
import os
from typing import Any

import httpx

from totem_news import __version__
from totem_news.config import ProxyConfig

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "*",
}


def create_app(cfg: ProxyConfig, *, http_client: httpx.AsyncClient | None = None) -> Any:
    """Create and return the FastAPI application.

    Args:
        cfg: Proxy configuration (route path, upstream URL, key env var).
        http_client: Optional client for upstream calls; one is created per
            request when omitted.

    Returns:
        A FastAPI application instance.
    """
    from fastapi import FastAPI, Request  # noqa: PLC0415
    from fastapi.responses import JSONResponse, PlainTextResponse, Response  # noqa: PLC0415

    app = FastAPI(title="Totem News Proxy", version=__version__)

    def _error(status: int, message: str) -> JSONResponse:
        return JSONResponse({"error": message}, status_code=status, headers=CORS_HEADERS)

    @app.get("/api/health")
    def api_health() -> JSONResponse:
        return JSONResponse({"status": "ok", "version": __version__})

    @app.options(cfg.path)
    def preflight() -> PlainTextResponse:
        return PlainTextResponse("ok", headers=CORS_HEADERS)

    @app.post(cfg.path)
    async def forward(request: Request) -> Response:
        api_key = os.environ.get(cfg.api_key_env)
        if not api_key:
            logger.error("%s not set; rejecting proxy request", cfg.api_key_env)
            return _error(500, f"Missing {cfg.api_key_env} secret")

        try:
            payload = await request.json()
        except ValueError:
            return _error(400, "Invalid JSON body")

        headers = {"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"}
        try:
            if http_client is not None:
                upstream = await http_client.post(cfg.upstream, json=payload, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=cfg.timeout) as client:
                    upstream = await client.post(cfg.upstream, json=payload, headers=headers)
        except httpx.HTTPError:
            logger.exception("Upstream request to %s failed", cfg.upstream)
            return _error(502, "Upstream request failed")

        content_type = upstream.headers.get("content-type", "application/json")
        return Response(
            content=upstream.content,
            status_code=upstream.status_code,
            headers={**CORS_HEADERS, "Content-Type": content_type},
        )

    return app
