from __future__ import annotations

import asyncio

import httpx
import pytest

from bravemcp.brave import BraveSearchClient
from bravemcp.search import BraveSearchService
from bravemcp.tools import (
    SEARCH_TOOL_NAME,
    SUMMARIZER_TOOL_NAME,
    ToolRegistry,
    build_brave_tools,
)


def run_async(coro):
    return asyncio.run(coro)


def _service(handler=None) -> BraveSearchService:
    def default(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"web": {"results": []}})

    client = BraveSearchClient("brave-key", transport=httpx.MockTransport(handler or default))
    return BraveSearchService(client)


@pytest.mark.parametrize(
    ("variant", "names"),
    [
        ("results", [SEARCH_TOOL_NAME]),
        ("summary", [SEARCH_TOOL_NAME]),
        ("both", [SEARCH_TOOL_NAME, SUMMARIZER_TOOL_NAME]),
    ],
)
def test_build_brave_tools_names_per_variant(variant, names):
    tools = build_brave_tools(_service(), variant=variant)
    assert [t.spec.name for t in tools] == names


def test_build_brave_tools_rejects_unknown_variant():
    with pytest.raises(ValueError):
        build_brave_tools(_service(), variant="images")


def test_query_parameter_is_required_string():
    (tool,) = build_brave_tools(_service())
    schema = tool.spec.parameters_schema

    assert schema["required"] == ["query"]
    assert schema["properties"]["query"]["type"] == "string"
    assert "400 chars" in schema["properties"]["query"]["description"]


def test_summary_variant_routes_to_summarizer():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/res/v1/summarizer/search":
            return httpx.Response(200, text="summarized")
        return httpx.Response(200, json={"summarizer": {"key": "abc"}})

    registry = ToolRegistry()
    registry.register_many(build_brave_tools(_service(handler), variant="summary"))

    result = run_async(registry.call(SEARCH_TOOL_NAME, {"query": "Anything"}))

    assert result.success is True
    assert result.output == "summarized"
