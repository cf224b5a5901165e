"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Protocol-layer helpers for MCP JSON-RPC request handling.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any

from ..tools import ToolContext, ToolNotFoundError, ToolRegistry, ToolValidationError

logger = logging.getLogger("bravemcp.mcp")

MCP_PROTOCOL_VERSION = "2025-06-18"

# Standard JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


def jsonrpc_response(id: Any, result: Any) -> dict[str, Any]:
    """Build a JSON-RPC 2.0 success response."""
    return {"jsonrpc": "2.0", "id": id, "result": result}


def jsonrpc_error(
    id: Any,
    code: int,
    message: str,
    data: Any = None,
) -> dict[str, Any]:
    """Build a JSON-RPC 2.0 error response."""
    error: dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": "2.0", "id": id, "error": error}


class MCPProtocolHandler:
    """
    Handles MCP methods and JSON-RPC envelope validation.

    Kept independent of HTTP routing so other transports can reuse it.
    """

    def __init__(
        self,
        *,
        registry: ToolRegistry,
        server_name: str,
        server_version: str,
        instructions: str | None = None,
    ) -> None:
        self._registry = registry
        self._server_name = server_name
        self._server_version = server_version
        self._instructions = instructions

    async def handle_message(self, message: Any) -> dict[str, Any] | None:
        """Route one JSON-RPC 2.0 message to the appropriate MCP method."""
        if not isinstance(message, dict):
            return jsonrpc_error(None, INVALID_REQUEST, "Invalid Request")

        if message.get("jsonrpc") != "2.0":
            return jsonrpc_error(
                message.get("id"),
                INVALID_REQUEST,
                "Invalid JSON-RPC version",
            )

        method = message.get("method")
        params = message.get("params") or {}
        msg_id = message.get("id")

        if not method:
            return jsonrpc_error(msg_id, INVALID_REQUEST, "Missing method")

        is_notification = msg_id is None

        try:
            if method == "initialize":
                result = self.handle_initialize(params)
            elif method == "tools/list":
                result = self.handle_tools_list(params)
            elif method == "tools/call":
                result = await self.handle_tools_call(params)
            elif method in ("ping", "notifications/initialized"):
                result = {}
            else:
                return jsonrpc_error(
                    msg_id,
                    METHOD_NOT_FOUND,
                    f"Method not found: {method}",
                )
        except (ToolNotFoundError, ToolValidationError, ValueError) as exc:
            return jsonrpc_error(msg_id, INVALID_PARAMS, str(exc))
        except Exception as exc:
            logger.exception("Error handling MCP method %s", method)
            return jsonrpc_error(msg_id, INTERNAL_ERROR, str(exc))

        if is_notification:
            return None
        return jsonrpc_response(msg_id, result)

    def handle_initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle ``initialize`` and return server capabilities."""
        _ = params
        return {
            "protocolVersion": MCP_PROTOCOL_VERSION,
            "capabilities": {"tools": {"listChanged": False}},
            "serverInfo": {
                "name": self._server_name,
                "version": self._server_version,
            },
            **({"instructions": self._instructions} if self._instructions else {}),
        }

    def handle_tools_list(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle ``tools/list`` and return MCP tool schemas."""
        _ = params
        return {
            "tools": [
                {
                    "name": spec.name,
                    "description": spec.description,
                    "inputSchema": {"type": "object", **spec.parameters_schema},
                }
                for spec in self._registry.specs()
            ]
        }

    async def handle_tools_call(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle ``tools/call`` and return MCP content result."""
        tool_name = params.get("name")
        if not tool_name:
            raise ValueError("Missing 'name' in tools/call params")

        arguments = params.get("arguments") or {}
        if not isinstance(arguments, dict):
            raise ValueError("'arguments' must be an object")

        ctx = ToolContext(
            request_id=uuid.uuid4().hex,
            metadata={"source": "mcp", "tool_name": tool_name},
        )
        result = await self._registry.call(tool_name, arguments, ctx=ctx)
        if not result.success:
            return {
                "content": [
                    {"type": "text", "text": result.error_message or "Tool execution failed"}
                ],
                "isError": True,
            }
        return {"content": [_text_content(result.output)], "isError": False}


def _text_content(output: Any) -> dict[str, Any]:
    if isinstance(output, str):
        return {"type": "text", "text": output}
    if output is None:
        return {"type": "text", "text": ""}
    return {"type": "text", "text": json.dumps(output, default=str)}
