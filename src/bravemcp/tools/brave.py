"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Brave search tools exposed over MCP.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from ..search import BraveSearchService
from ..settings import TOOL_VARIANTS
from .base import Tool, ToolContext, ToolSpec, schema_for

SEARCH_TOOL_NAME = "brave_web_search_summary"
SUMMARIZER_TOOL_NAME = "brave_summarizer"

RESULTS_DESCRIPTION = (
    "Performs web searches using the Brave Search API and returns comprehensive "
    "search results with rich metadata. When to use: "
    "- General web searches for information, facts, or current topics "
    "- Location-based queries (restaurants, businesses, points of interest) "
    "- News searches for recent events or breaking stories "
    "- Finding videos, discussions, or FAQ content "
    "- Research requiring diverse result types (web pages, images, reviews, etc.) "
    "Returns a JSON list of web results with title, description, and URL."
)

SUMMARY_DESCRIPTION = (
    "Searches the web using the Brave Search API and returns an AI-generated "
    "summary of the top results. Use for questions that need a concise, "
    "synthesized answer rather than a list of links."
)


class _QueryArgs(BaseModel):
    # Length limits are advisory; the query is forwarded unchanged.
    query: str = Field(description="search query (max 400 chars, 50 words)")


def build_brave_tools(service: BraveSearchService, *, variant: str = "results") -> list[Tool[Any, Any]]:
    """
    Construct the Brave tools for ``variant``.

    - ``results``: direct results as ``brave_web_search_summary``
    - ``summary``: summarizer output as ``brave_web_search_summary``
    - ``both``: direct results as ``brave_web_search_summary`` plus
      summarizer output as ``brave_summarizer``
    """
    if variant not in TOOL_VARIANTS:
        raise ValueError(f"Unknown tool variant: {variant}")

    schema = schema_for(_QueryArgs)

    async def search_results(args: _QueryArgs, ctx: ToolContext) -> str:
        _ = ctx
        return await service.search_results(args.query)

    async def search_summary(args: _QueryArgs, ctx: ToolContext) -> str:
        _ = ctx
        return await service.search_summary(args.query)

    results_tool = Tool(
        spec=ToolSpec(name=SEARCH_TOOL_NAME, description=RESULTS_DESCRIPTION, parameters_schema=schema),
        fn=search_results,
        args_model=_QueryArgs,
    )

    if variant == "results":
        return [results_tool]

    summary_name = SEARCH_TOOL_NAME if variant == "summary" else SUMMARIZER_TOOL_NAME
    summary_tool = Tool(
        spec=ToolSpec(name=summary_name, description=SUMMARY_DESCRIPTION, parameters_schema=schema),
        fn=search_summary,
        args_model=_QueryArgs,
    )
    if variant == "summary":
        return [summary_tool]
    return [results_tool, summary_tool]
