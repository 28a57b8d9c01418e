"""Async HTTP client shared by outbound integrations (email delivery)."""

from typing import Any

import httpx

_USER_AGENT = "cause-totes-api/1.0"


class HttpClient:
    """Thin async wrapper around httpx.AsyncClient.

    One instance is created in the app lifespan and closed on shutdown.
    """

    def __init__(self, timeout: float = 5.0) -> None:
        self._client = httpx.AsyncClient(
            timeout=timeout, headers={"User-Agent": _USER_AGENT}
        )

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self._client.post(url, **kwargs)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
