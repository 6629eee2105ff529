"""Shared httpx plumbing for the OpenRouter adapters."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"


class OpenRouterHttpBase:
    """Holds credentials and hands out an httpx client per call.

    An injected ``http_client`` (tests, connection reuse) is used as-is and
    never closed here; otherwise a short-lived client is opened per request.
    """

    provider = "openrouter"

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        app_name: str = "AppliHero",
        *,
        timeout: float,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._app_name = app_name
        self._timeout = timeout
        self._http_client = http_client

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "X-Title": self._app_name,
        }

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            yield client

    async def _post(self, path: str, payload: dict[str, Any]) -> httpx.Response:
        """POST JSON to ``{base_url}{path}``. Transport errors propagate."""
        async with self._client() as client:
            return await client.post(
                f"{self._base_url}{path}",
                headers=self._headers(),
                json=payload,
                timeout=self._timeout,
            )


def error_message(response: httpx.Response) -> str:
    """The provider's ``error.message`` when the body has one, else the raw text."""
    try:
        data = response.json()
    except ValueError:
        return response.text[:500]
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return response.text[:500]
