from __future__ import annotations

import asyncio

import pytest
from pydantic import BaseModel

from bravemcp.tools import (
    Tool,
    ToolAlreadyRegisteredError,
    ToolNotFoundError,
    ToolRegistry,
    ToolSpec,
    ToolTimeoutError,
    ToolValidationError,
    schema_for,
)


def run_async(coro):
    return asyncio.run(coro)


class _EchoArgs(BaseModel):
    text: str


def _tool(name: str = "echo", fn=None) -> Tool:
    async def echo(args: _EchoArgs, ctx) -> str:
        _ = ctx
        return args.text

    return Tool(
        spec=ToolSpec(name=name, description="Echo text", parameters_schema=schema_for(_EchoArgs)),
        fn=fn or echo,
        args_model=_EchoArgs,
    )


def test_register_rejects_duplicates_unless_overwrite():
    registry = ToolRegistry()
    registry.register(_tool())

    with pytest.raises(ToolAlreadyRegisteredError):
        registry.register(_tool())

    registry.register(_tool(), overwrite=True)
    assert registry.names() == ["echo"]


def test_call_unknown_tool_raises():
    with pytest.raises(ToolNotFoundError):
        run_async(ToolRegistry().call("missing", {}))


def test_call_returns_output_and_records_call():
    registry = ToolRegistry()
    registry.register(_tool())

    result = run_async(registry.call("echo", {"text": "hi"}, tool_call_id="c1"))

    assert result.success is True
    assert result.output == "hi"
    record = registry.recent_calls()[-1]
    assert record.tool_name == "echo"
    assert record.ok is True
    assert record.tool_call_id == "c1"


def test_tool_failure_becomes_unsuccessful_result():
    async def explode(args: _EchoArgs, ctx) -> str:
        raise RuntimeError(f"cannot echo {args.text}")

    registry = ToolRegistry()
    registry.register(_tool(fn=explode))

    result = run_async(registry.call("echo", {"text": "x"}))

    assert result.success is False
    assert result.error_message == "cannot echo x"
    assert registry.recent_calls()[-1].ok is False


def test_invalid_arguments_raise_validation_error():
    registry = ToolRegistry()
    registry.register(_tool())

    with pytest.raises(ToolValidationError):
        run_async(registry.call("echo", {}))


def test_registry_timeout_applies():
    async def slow(args: _EchoArgs, ctx) -> str:
        await asyncio.sleep(1)
        return args.text

    registry = ToolRegistry(default_timeout=0.01)
    registry.register(_tool(fn=slow))

    with pytest.raises(ToolTimeoutError):
        run_async(registry.call("echo", {"text": "x"}))
    assert registry.recent_calls()[-1].error == "timeout"


def test_schema_for_strips_titles():
    schema = schema_for(_EchoArgs)
    assert schema == {
        "type": "object",
        "properties": {"text": {"type": "string"}},
        "required": ["text"],
        "additionalProperties": False,
    }
