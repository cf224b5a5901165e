"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Brave Search MCP server with a single-flight query cache.

Quick start::

    from bravemcp import BraveSettings, build_server

    server = build_server(BraveSettings.from_env())
    server.run()  # starts on http://0.0.0.0:8000
"""

__version__ = "0.1.0"

from .app import build_server
from .cache import CoalescingCache, normalize_query
from .search import NO_RESULTS_MESSAGE, BraveSearchService, render_results
from .settings import BraveSettings

__all__ = [
    "__version__",
    "build_server",
    "BraveSettings",
    "BraveSearchService",
    "CoalescingCache",
    "normalize_query",
    "render_results",
    "NO_RESULTS_MESSAGE",
]
