"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Search orchestration: normalize the query, coalesce through the cache, and
shape upstream responses into the text handed back to tool callers.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

from .brave import BraveSearchClient, WebResult
from .cache import CoalescingCache, normalize_query

logger = logging.getLogger("bravemcp.search")

NO_RESULTS_MESSAGE = "No search results found for this query."
SEARCH_COUNT = 10
MAX_RENDERED_RESULTS = 5


def render_results(hits: Sequence[WebResult]) -> str:
    """Render up to five hits as a JSON array of ``{title, url, description}``."""
    if not hits:
        return NO_RESULTS_MESSAGE
    rows = [
        {
            "title": hit.title or "",
            "url": hit.url or "",
            "description": hit.description or "",
        }
        for hit in hits[:MAX_RENDERED_RESULTS]
    ]
    return json.dumps(rows, ensure_ascii=False, separators=(",", ":"))


class BraveSearchService:
    """
    Cached entry points for the direct-results and summary tool variants.

    Each variant owns its own ``CoalescingCache``. A failure anywhere in a
    variant's upstream sequence evicts that key so the next call retries.
    """

    def __init__(
        self,
        client: BraveSearchClient,
        *,
        results_cache: CoalescingCache[str] | None = None,
        summary_cache: CoalescingCache[str] | None = None,
    ) -> None:
        self._client = client
        self.results_cache = results_cache or CoalescingCache("results")
        self.summary_cache = summary_cache or CoalescingCache("summary")

    async def search_results(self, query: str) -> str:
        logger.info("Search query: %s", query)
        key = normalize_query(query)

        async def compute() -> str:
            response = await self._client.web_search(key, count=SEARCH_COUNT)
            hits = response.hits()
            if not hits:
                logger.warning("No search results found for query: %s", query)
            else:
                logger.info("Found %d results for query: %s", len(hits), query)
            return render_results(hits)

        return await self.results_cache.run(key, compute)

    async def search_summary(self, query: str) -> str:
        logger.info("Summary query: %s", query)
        key = normalize_query(query)

        async def compute() -> str:
            summary_key = await self._client.summary_key(key)
            text = await self._client.summarizer(summary_key)
            logger.info("Fetched summary for query: %s", query)
            return text

        return await self.summary_cache.run(key, compute)

    def cache_stats(self) -> list[dict[str, Any]]:
        return [self.results_cache.stats(), self.summary_cache.stats()]
