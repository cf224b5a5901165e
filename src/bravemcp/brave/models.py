"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Response models for the Brave web search and summarizer endpoints.

Fields the API may omit are ``None`` here; conversion to empty strings
happens only when results are rendered for the caller.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class _BraveModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class WebResult(_BraveModel):
    title: str | None = None
    url: str | None = None
    description: str | None = None


class WebResults(_BraveModel):
    results: list[WebResult] | None = None


class WebSearchResponse(_BraveModel):
    web: WebResults | None = None

    def hits(self) -> list[WebResult]:
        """Result records, or an empty list when the section is absent."""
        if self.web is None or self.web.results is None:
            return []
        return list(self.web.results)


class Summarizer(_BraveModel):
    key: str | None = None


class SummarySearchResponse(_BraveModel):
    summarizer: Summarizer | None = None

    def summary_key(self) -> str | None:
        if self.summarizer is None or not self.summarizer.key:
            return None
        return self.summarizer.key
