"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

MCP (Model Context Protocol) server built on FastAPI.

Exposes tools from a ``ToolRegistry`` over JSON-RPC 2.0:
- ``initialize``: server capability handshake
- ``tools/list``: discover available tools
- ``tools/call``: execute a tool
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Iterable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, Callable

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from .. import __version__
from ..tools import ToolRegistry
from .protocol import INVALID_REQUEST, PARSE_ERROR, MCPProtocolHandler, jsonrpc_error

logger = logging.getLogger("bravemcp.mcp")


@dataclass
class MCPServerConfig:
    """
    Configuration for the MCP server.

    Attributes:
        name: Server name advertised during ``initialize``.
        version: Server version string.
        host: Bind host for uvicorn.
        port: Bind port for uvicorn.
        instructions: Optional instructions describing the server's purpose.
        cors_origins: List of allowed CORS origins.
        mcp_path: JSON-RPC endpoint path.
        health_path: Health endpoint path.
        allow_batch_requests: Whether JSON-RPC batch requests are accepted.
    """

    name: str = "brave-mcp"
    version: str = __version__
    host: str = "0.0.0.0"
    port: int = 8000
    instructions: str | None = None
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    mcp_path: str = "/mcp"
    health_path: str = "/health"
    allow_batch_requests: bool = True


class MCPServer:
    """
    MCP server exposing ``ToolRegistry`` tools via FastAPI.

    Endpoints:
        ``POST /mcp``: JSON-RPC 2.0 endpoint
        ``GET /health``: health check, extended with ``health_info()``

    Args:
        registry: Tools to expose.
        config: Server configuration.
        health_info: Optional callable whose dict is merged into the health
            payload (cache stats, for example).
        shutdown_hooks: Async callables awaited when the app shuts down
            (closing upstream HTTP clients, for example).
    """

    def __init__(
        self,
        registry: ToolRegistry,
        *,
        config: MCPServerConfig | None = None,
        health_info: Callable[[], dict[str, Any]] | None = None,
        shutdown_hooks: Iterable[Callable[[], Awaitable[None]]] = (),
    ) -> None:
        self._registry = registry
        self._config = config or MCPServerConfig()
        self._health_info = health_info
        self._shutdown_hooks = list(shutdown_hooks)
        self._protocol_handler = MCPProtocolHandler(
            registry=registry,
            server_name=self._config.name,
            server_version=self._config.version,
            instructions=self._config.instructions,
        )
        self._app = self._create_app()

    @property
    def app(self) -> FastAPI:
        """The FastAPI application instance."""
        return self._app

    @property
    def config(self) -> MCPServerConfig:
        return self._config

    def _create_router(self) -> APIRouter:
        router = APIRouter()

        @router.get(self._config.health_path)
        async def health():
            payload: dict[str, Any] = {
                "status": "ok",
                "server": self._config.name,
                "version": self._config.version,
                "tools_count": len(self._registry.names()),
            }
            if self._health_info is not None:
                payload.update(self._health_info())
            return payload

        @router.post(self._config.mcp_path)
        async def mcp_endpoint(request: Request):
            """Main JSON-RPC 2.0 endpoint for MCP."""
            try:
                body = await request.json()
            except ValueError:
                return JSONResponse(jsonrpc_error(None, PARSE_ERROR, "Parse error"))

            if isinstance(body, list):
                if not self._config.allow_batch_requests:
                    return JSONResponse(
                        jsonrpc_error(None, INVALID_REQUEST, "Batch requests disabled")
                    )
                responses = []
                for item in body:
                    resp = await self._protocol_handler.handle_message(item)
                    if resp is not None:
                        responses.append(resp)
                if not responses:
                    return Response(status_code=204)
                return JSONResponse(responses)

            result = await self._protocol_handler.handle_message(body)
            if result is None:
                return Response(status_code=204)
            return JSONResponse(result)

        return router

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI) -> AsyncIterator[None]:
        _ = app
        yield
        for hook in self._shutdown_hooks:
            try:
                await hook()
            except Exception:
                logger.exception("Shutdown hook %r failed", hook)

    def _create_app(self) -> FastAPI:
        app = FastAPI(
            title=self._config.name,
            version=self._config.version,
            description="Brave Search MCP server",
            lifespan=self._lifespan,
        )
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self._config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        app.include_router(self._create_router())
        return app

    def run(self, **kwargs: Any) -> None:
        """Start the MCP server using uvicorn."""
        import uvicorn

        logger.info(
            "Starting %s on %s:%s with tools: %s",
            self._config.name,
            self._config.host,
            self._config.port,
            ", ".join(self._registry.names()),
        )
        uvicorn.run(
            self._app,
            host=kwargs.pop("host", self._config.host),
            port=kwargs.pop("port", self._config.port),
            **kwargs,
        )
