"""httpx client wrapper."""

from __future__ import annotations

import httpx

from app.core.config import Settings, settings

_client: httpx.AsyncClient | None = None


def build_http_client(app_settings: Settings | None = None) -> httpx.AsyncClient:
    """Create an AsyncClient pointed at the heroes backend."""
    app_settings = app_settings or settings
    return httpx.AsyncClient(
        base_url=app_settings.api_base_url,
        timeout=httpx.Timeout(app_settings.http_timeout_seconds),
        headers={
            "Accept": "application/json",
            "User-Agent": f"{app_settings.app_name}/{app_settings.app_version}",
        },
    )


def get_http_client() -> httpx.AsyncClient:
    """Return a singleton AsyncClient."""
    global _client
    if _client is None or _client.is_closed:
        _client = build_http_client()
    return _client
