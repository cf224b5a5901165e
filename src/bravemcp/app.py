"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Wires settings, the Brave client, the cached search service and the MCP server.
"""

from __future__ import annotations

import logging

import httpx

from .brave import BraveSearchClient
from .mcp import MCPServer, MCPServerConfig
from .search import BraveSearchService
from .settings import BraveSettings
from .tools import ToolRegistry, build_brave_tools

logger = logging.getLogger("bravemcp")


def build_server(
    settings: BraveSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> MCPServer:
    """
    Build an MCP server exposing the configured Brave tool variant(s).

    The search service, and with it every cache, lives as long as the
    returned server.
    """
    if not settings.has_api_key:
        logger.warning("brave.apikey is not set; every search will fail with an auth error")

    client = BraveSearchClient(
        settings.api_key,
        base_url=settings.base_url,
        timeout_s=settings.timeout_s,
        transport=transport,
    )
    service = BraveSearchService(client)

    registry = ToolRegistry()
    registry.register_many(build_brave_tools(service, variant=settings.tool_variant))

    return MCPServer(
        registry,
        config=MCPServerConfig(host=settings.host, port=settings.port),
        health_info=lambda: {"caches": service.cache_stats()},
        shutdown_hooks=[client.aclose],
    )
