"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Brave Search API client package.
"""

from .client import BraveSearchClient
from .errors import (
    BraveAuthenticationError,
    BraveError,
    BraveHTTPError,
    BraveResponseError,
    BraveTransportError,
)
from .models import (
    Summarizer,
    SummarySearchResponse,
    WebResult,
    WebResults,
    WebSearchResponse,
)

__all__ = [
    "BraveSearchClient",
    "BraveError",
    "BraveTransportError",
    "BraveHTTPError",
    "BraveAuthenticationError",
    "BraveResponseError",
    "WebResult",
    "WebResults",
    "WebSearchResponse",
    "Summarizer",
    "SummarySearchResponse",
]
