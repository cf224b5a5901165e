"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Tool primitives: spec, call context, result envelope and the callable wrapper.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from .errors import ToolValidationError

logger = logging.getLogger("bravemcp.tools")

ArgsT = TypeVar("ArgsT", bound=BaseModel)
OutT = TypeVar("OutT")


@dataclass(frozen=True, slots=True)
class ToolSpec:
    """Name, description and JSON schema advertised to tool callers."""

    name: str
    description: str
    parameters_schema: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class ToolContext:
    request_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class ToolResult(Generic[OutT]):
    output: OutT | None = None
    success: bool = True
    error_message: str | None = None
    tool_name: str | None = None
    tool_call_id: str | None = None


ToolFn = Callable[[Any, ToolContext], Awaitable[Any]]


class Tool(Generic[ArgsT, OutT]):
    """
    Async tool backed by a pydantic args model.

    ``call`` validates raw arguments and awaits ``fn(args, ctx)``. Validation
    problems raise ``ToolValidationError``; failures inside ``fn`` are
    returned as an unsuccessful ``ToolResult`` so transports can report them.
    """

    def __init__(
        self,
        *,
        spec: ToolSpec,
        fn: Callable[[ArgsT, ToolContext], Awaitable[OutT]],
        args_model: type[ArgsT],
        default_timeout: float | None = None,
    ) -> None:
        self.spec = spec
        self.fn = fn
        self.args_model = args_model
        self.default_timeout = default_timeout

    async def call(
        self,
        raw_args: dict[str, Any],
        *,
        ctx: ToolContext | None = None,
        timeout: float | None = None,
        tool_call_id: str | None = None,
    ) -> ToolResult[OutT]:
        ctx = ctx or ToolContext()
        try:
            args = self.args_model.model_validate(raw_args)
        except ValidationError as e:
            raise ToolValidationError(
                f"Invalid arguments for tool '{self.spec.name}': {e}"
            ) from e

        effective_timeout = timeout if timeout is not None else self.default_timeout
        try:
            if effective_timeout is not None:
                output = await asyncio.wait_for(self.fn(args, ctx), timeout=effective_timeout)
            else:
                output = await self.fn(args, ctx)
        except asyncio.TimeoutError:
            raise
        except Exception as e:  # noqa: BLE001
            logger.warning("Tool '%s' failed: %s", self.spec.name, e)
            return ToolResult(
                output=None,
                success=False,
                error_message=str(e) or type(e).__name__,
                tool_name=self.spec.name,
                tool_call_id=tool_call_id,
            )
        return ToolResult(
            output=output,
            success=True,
            tool_name=self.spec.name,
            tool_call_id=tool_call_id,
        )


def schema_for(args_model: type[BaseModel]) -> dict[str, Any]:
    """Object-shaped JSON schema for an args model, without pydantic titles."""
    raw = args_model.model_json_schema()
    properties = {
        name: {k: v for k, v in prop.items() if k != "title"}
        for name, prop in raw.get("properties", {}).items()
    }
    return {
        "type": "object",
        "properties": properties,
        "required": list(raw.get("required", [])),
        "additionalProperties": False,
    }
