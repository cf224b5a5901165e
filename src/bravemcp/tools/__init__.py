"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Tool primitives, registry and the Brave search tools.
"""

from .base import Tool, ToolContext, ToolResult, ToolSpec, schema_for
from .brave import SEARCH_TOOL_NAME, SUMMARIZER_TOOL_NAME, build_brave_tools
from .errors import (
    ToolAlreadyRegisteredError,
    ToolError,
    ToolNotFoundError,
    ToolTimeoutError,
    ToolValidationError,
)
from .registry import ToolCallRecord, ToolRegistry

__all__ = [
    "Tool",
    "ToolSpec",
    "ToolContext",
    "ToolResult",
    "schema_for",
    "ToolRegistry",
    "ToolCallRecord",
    "build_brave_tools",
    "SEARCH_TOOL_NAME",
    "SUMMARIZER_TOOL_NAME",
    "ToolError",
    "ToolAlreadyRegisteredError",
    "ToolNotFoundError",
    "ToolValidationError",
    "ToolTimeoutError",
]
