"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Defines the exceptions raised by the Brave API client.
"""


class BraveError(RuntimeError):
    """Base error for Brave API calls."""


class BraveTransportError(BraveError):
    """Raised when the Brave API host cannot be reached."""


class BraveHTTPError(BraveError):
    """Raised when the Brave API answers with a non-success status."""

    def __init__(self, message: str, *, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class BraveAuthenticationError(BraveHTTPError):
    """Raised when the subscription token is missing or rejected."""


class BraveResponseError(BraveError):
    """Raised when a response body does not have the expected shape."""
