"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Async client for the Brave Search API.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ..settings import DEFAULT_BASE_URL
from .errors import (
    BraveAuthenticationError,
    BraveHTTPError,
    BraveResponseError,
    BraveTransportError,
)
from .models import SummarySearchResponse, WebSearchResponse

logger = logging.getLogger("bravemcp.brave")

WEB_SEARCH_PATH = "/res/v1/web/search"
SUMMARIZER_PATH = "/res/v1/summarizer/search"
SUBSCRIPTION_TOKEN_HEADER = "X-Subscription-Token"


class BraveSearchClient:
    """
    Thin wrapper over ``httpx.AsyncClient`` for the three Brave calls used here.

    No retries are made: transport errors and non-2xx statuses surface as
    ``BraveError`` subclasses.

    Args:
        api_key: Subscription token. ``None`` or blank makes every call raise
            ``BraveAuthenticationError`` without touching the network.
        base_url: API host.
        timeout_s: Per-request timeout.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout_s: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = (api_key or "").strip()
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_s,
            transport=transport,
        )

    @property
    def is_closed(self) -> bool:
        return self._http.is_closed

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "BraveSearchClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def web_search(self, query: str, *, count: int = 10) -> WebSearchResponse:
        """``GET /res/v1/web/search?q=&count=`` parsed into result records."""
        response = await self._get(WEB_SEARCH_PATH, params={"q": query, "count": str(count)})
        try:
            return WebSearchResponse.model_validate(_json_body(response))
        except ValidationError as e:
            raise BraveResponseError(f"Unexpected web search payload: {e}") from e

    async def summary_key(self, query: str) -> str:
        """Run a summary-enabled search and return its summarizer key."""
        response = await self._get(WEB_SEARCH_PATH, params={"q": query, "summary": "true"})
        try:
            parsed = SummarySearchResponse.model_validate(_json_body(response))
        except ValidationError as e:
            raise BraveResponseError(f"Unexpected summary search payload: {e}") from e

        key = parsed.summary_key()
        if key is None:
            raise BraveResponseError(f"No summarizer key returned for query: {query}")
        return key

    async def summarizer(self, key: str) -> str:
        """Fetch the summarizer result for ``key`` as raw body text."""
        # httpx percent-encodes query params, so ``key`` is passed as-is.
        response = await self._get(SUMMARIZER_PATH, params={"key": key})
        return response.text

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Accept-Encoding": "gzip",
            SUBSCRIPTION_TOKEN_HEADER: self._api_key,
        }

    async def _get(self, path: str, *, params: dict[str, str]) -> httpx.Response:
        if not self._api_key:
            raise BraveAuthenticationError(
                "Brave API key not configured (set brave.apikey or BRAVE_APIKEY)",
                status_code=401,
            )

        try:
            response = await self._http.get(path, params=params, headers=self._headers())
        except httpx.HTTPError as e:
            raise BraveTransportError(f"Network error calling Brave API {path}: {e}") from e

        if response.status_code in (401, 403):
            raise BraveAuthenticationError(
                f"Brave API rejected the subscription token (HTTP {response.status_code})",
                status_code=response.status_code,
            )
        if not response.is_success:
            raise BraveHTTPError(
                f"HTTP {response.status_code} from Brave API {path}: {response.text[:200]}",
                status_code=response.status_code,
            )
        logger.debug("Brave API %s -> HTTP %s", path, response.status_code)
        return response


def _json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise BraveResponseError("Brave API returned a non-JSON body") from e
