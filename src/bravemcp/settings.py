"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Service settings and explicit config loading.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any, Literal

ToolVariant = Literal["results", "summary", "both"]

DEFAULT_BASE_URL = "https://api.search.brave.com"
TOOL_VARIANTS: tuple[str, ...] = ("results", "summary", "both")


class SettingsError(ValueError):
    """Raised when a configuration value cannot be parsed."""


@dataclass(frozen=True, slots=True)
class BraveSettings:
    """
    Explicit settings for the Brave client and the MCP host.

    Attributes:
        api_key: Subscription token from the ``brave.apikey`` namespace. Left
            empty, startup succeeds and every upstream call fails with an
            authentication error.
        base_url: Brave API host.
        timeout_s: Per-request HTTP timeout.
        tool_variant: Which tool shape(s) to expose.
        host: Bind host for the MCP server.
        port: Bind port for the MCP server.
    """

    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    timeout_s: float = 10.0
    tool_variant: ToolVariant = "results"
    host: str = "0.0.0.0"
    port: int = 8000

    def __post_init__(self) -> None:
        if self.tool_variant not in TOOL_VARIANTS:
            raise SettingsError(
                f"tool_variant must be one of {', '.join(TOOL_VARIANTS)}; got {self.tool_variant!r}"
            )
        if self.timeout_s <= 0:
            raise SettingsError("timeout_s must be > 0")

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    @staticmethod
    def from_env() -> "BraveSettings":
        """Load settings from environment variables."""
        return BraveSettings(
            api_key=os.getenv("BRAVE_APIKEY") or None,
            base_url=os.getenv("BRAVE_BASE_URL", DEFAULT_BASE_URL),
            timeout_s=_as_float("BRAVE_TIMEOUT_S", os.getenv("BRAVE_TIMEOUT_S", "10")),
            tool_variant=os.getenv("BRAVE_TOOL_VARIANT", "results"),  # type: ignore[arg-type]
            host=os.getenv("BRAVEMCP_HOST", "0.0.0.0"),
            port=_as_int("BRAVEMCP_PORT", os.getenv("BRAVEMCP_PORT", "8000")),
        )

    @staticmethod
    def from_mapping(data: Mapping[str, Any]) -> "BraveSettings":
        """
        Load settings from a nested mapping, e.g. a parsed config file::

            {"brave": {"apikey": "...", "timeout_s": 5}, "server": {"port": 9000}}
        """
        brave = data.get("brave") or {}
        server = data.get("server") or {}
        if not isinstance(brave, Mapping) or not isinstance(server, Mapping):
            raise SettingsError("'brave' and 'server' sections must be mappings")
        apikey = brave.get("apikey")
        if apikey is not None and not isinstance(apikey, str):
            raise SettingsError("brave.apikey must be a string")
        return BraveSettings(
            api_key=apikey or None,
            base_url=str(brave.get("base_url", DEFAULT_BASE_URL)),
            timeout_s=_as_float("brave.timeout_s", brave.get("timeout_s", 10.0)),
            tool_variant=str(brave.get("tool_variant", "results")),  # type: ignore[arg-type]
            host=str(server.get("host", "0.0.0.0")),
            port=_as_int("server.port", server.get("port", 8000)),
        )

    def with_overrides(self, **changes: Any) -> "BraveSettings":
        """Return a copy with non-None overrides applied (used by the CLI)."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def _as_float(name: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise SettingsError(f"{name} must be a number; got {value!r}") from e


def _as_int(name: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise SettingsError(f"{name} must be an integer; got {value!r}") from e
