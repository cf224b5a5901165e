"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

This module implements the ToolRegistry used by the MCP server.
It stores tools by name and executes them with a concurrency limit, an
optional registry-level timeout and a bounded log of recent calls.
"""

from __future__ import annotations

import asyncio
import time
from collections import deque
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from .base import Tool, ToolContext, ToolResult, ToolSpec
from .errors import ToolAlreadyRegisteredError, ToolNotFoundError, ToolTimeoutError


@dataclass(frozen=True, slots=True)
class ToolCallRecord:
    tool_name: str
    started_at_s: float
    ended_at_s: float
    ok: bool
    error: Optional[str] = None
    tool_call_id: Optional[str] = None


class ToolRegistry:
    """
    Stores tools by name and provides async execution with:
      - concurrency limiting
      - registry-level default timeout
      - a bounded record of recent calls
    """

    def __init__(
        self,
        *,
        max_concurrency: int = 32,
        default_timeout: float | None = None,
        max_records: int = 1000,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")

        self._tools: Dict[str, Tool[Any, Any]] = {}
        self._sem = asyncio.Semaphore(max_concurrency)
        self._default_timeout = default_timeout
        self._records: deque[ToolCallRecord] = deque(maxlen=max_records)

    # ''''''''''''
    # Registration
    # ''''''''''''

    def register(self, tool: Tool[Any, Any], *, overwrite: bool = False) -> None:
        name = tool.spec.name
        if not overwrite and name in self._tools:
            raise ToolAlreadyRegisteredError(f"Tool already registered: {name}")
        self._tools[name] = tool

    def register_many(self, tools: Iterable[Tool[Any, Any]], *, overwrite: bool = False) -> None:
        for t in tools:
            self.register(t, overwrite=overwrite)

    def unregister(self, name: str) -> None:
        self._tools.pop(name, None)

    def get(self, name: str) -> Tool[Any, Any]:
        try:
            return self._tools[name]
        except KeyError as e:
            raise ToolNotFoundError(f"Unknown tool: {name}") from e

    def list(self) -> List[Tool[Any, Any]]:
        return list(self._tools.values())

    def names(self) -> List[str]:
        return list(self._tools.keys())

    def has(self, name: str) -> bool:
        return name in self._tools

    def specs(self) -> List[ToolSpec]:
        return [t.spec for t in self._tools.values()]

    # '''''''''
    # Execution
    # '''''''''

    async def call(
        self,
        name: str,
        raw_args: Dict[str, Any],
        *,
        ctx: ToolContext | None = None,
        timeout: float | None = None,
        tool_call_id: str | None = None,
    ) -> ToolResult[Any]:
        """
        Execute a registered tool by name.

        Timeout precedence:
          1) call(timeout=...)
          2) tool.default_timeout
          3) registry default_timeout
        """
        tool = self.get(name)
        ctx = ctx or ToolContext()
        started = time.time()

        async with self._sem:
            effective_timeout = (
                timeout
                if timeout is not None
                else (tool.default_timeout if tool.default_timeout is not None else self._default_timeout)
            )

            try:
                if effective_timeout is not None:
                    try:
                        res = await asyncio.wait_for(
                            tool.call(raw_args, ctx=ctx, timeout=None, tool_call_id=tool_call_id),
                            timeout=effective_timeout,
                        )
                    except asyncio.TimeoutError as e:
                        self._record(name, started, ok=False, error="timeout", tool_call_id=tool_call_id)
                        raise ToolTimeoutError(
                            f"Tool '{name}' timed out after {effective_timeout} seconds."
                        ) from e
                else:
                    res = await tool.call(raw_args, ctx=ctx, timeout=None, tool_call_id=tool_call_id)

                self._record(
                    name,
                    started,
                    ok=res.success,
                    error=res.error_message,
                    tool_call_id=tool_call_id,
                )
                return res

            except ToolTimeoutError:
                raise
            except Exception as e:
                self._record(name, started, ok=False, error=str(e), tool_call_id=tool_call_id)
                raise

    # '''''''''''''
    # Observability
    # '''''''''''''

    def recent_calls(self, limit: int = 100) -> List[ToolCallRecord]:
        return list(self._records)[-limit:]

    def _record(
        self,
        name: str,
        started: float,
        *,
        ok: bool,
        error: str | None,
        tool_call_id: str | None,
    ) -> None:
        self._records.append(
            ToolCallRecord(
                tool_name=name,
                started_at_s=started,
                ended_at_s=time.time(),
                ok=ok,
                error=error,
                tool_call_id=tool_call_id,
            )
        )
