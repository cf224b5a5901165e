"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Defines the exceptions raised by tools and the tool registry.
"""


class ToolError(Exception):
    """Base error for tool registration and execution."""


class ToolAlreadyRegisteredError(ToolError):
    pass


class ToolNotFoundError(ToolError):
    pass


class ToolValidationError(ToolError):
    """Raised when raw arguments do not match the tool's args model."""


class ToolTimeoutError(ToolError):
    pass
