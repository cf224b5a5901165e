"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

MCP (Model Context Protocol) serving for the Brave search tools.
"""

from .protocol import MCP_PROTOCOL_VERSION, MCPProtocolHandler
from .server import MCPServer, MCPServerConfig

__all__ = [
    "MCP_PROTOCOL_VERSION",
    "MCPProtocolHandler",
    "MCPServer",
    "MCPServerConfig",
]
