from __future__ import annotations

import asyncio

import httpx
import pytest

from bravemcp.brave import (
    BraveAuthenticationError,
    BraveHTTPError,
    BraveResponseError,
    BraveSearchClient,
    BraveTransportError,
)


def run_async(coro):
    return asyncio.run(coro)


def _client(handler, api_key: str | None = "brave-key") -> BraveSearchClient:
    return BraveSearchClient(api_key, transport=httpx.MockTransport(handler))


def test_web_search_sends_query_and_required_headers():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "web": {
                    "results": [
                        {"title": "Brave Title", "url": "https://example.com", "description": "Snippet"},
                        {"url": "https://example.com/untitled"},
                    ]
                }
            },
        )

    response = run_async(_client(handler).web_search("python asyncio", count=10))

    request = seen[0]
    assert request.method == "GET"
    assert request.url.host == "api.search.brave.com"
    assert request.url.path == "/res/v1/web/search"
    assert request.url.params["q"] == "python asyncio"
    assert request.url.params["count"] == "10"
    assert request.headers["Accept"] == "application/json"
    assert request.headers["Accept-Encoding"] == "gzip"
    assert request.headers["X-Subscription-Token"] == "brave-key"

    hits = response.hits()
    assert [h.title for h in hits] == ["Brave Title", None]
    assert hits[1].description is None


def test_web_search_without_web_section_yields_no_hits():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"query": {"original": "x"}})

    response = run_async(_client(handler).web_search("x"))
    assert response.hits() == []


def test_summary_key_then_summarizer_body():
    seen: list[httpx.Request] = []
    summary_key = '{"query":"what is mcp","country":"us"}'

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path == "/res/v1/web/search":
            return httpx.Response(200, json={"summarizer": {"type": "summarizer", "key": summary_key}})
        return httpx.Response(200, text='{"status":"complete","summary":[]}')

    async def scenario():
        client = _client(handler)
        key = await client.summary_key("what is mcp")
        body = await client.summarizer(key)
        return key, body

    key, body = run_async(scenario())

    assert key == summary_key
    assert body == '{"status":"complete","summary":[]}'
    assert seen[0].url.params["summary"] == "true"
    assert seen[1].url.path == "/res/v1/summarizer/search"
    assert seen[1].url.params["key"] == summary_key
    assert seen[1].headers["X-Subscription-Token"] == "brave-key"


def test_summary_key_missing_is_a_response_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"web": {"results": []}})

    with pytest.raises(BraveResponseError, match="No summarizer key"):
        run_async(_client(handler).summary_key("nothing"))


def test_non_success_status_raises_http_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="unavailable")

    with pytest.raises(BraveHTTPError) as exc_info:
        run_async(_client(handler).web_search("q"))
    assert exc_info.value.status_code == 503
    assert not isinstance(exc_info.value, BraveAuthenticationError)


def test_rejected_token_raises_authentication_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"type": "ErrorResponse"})

    with pytest.raises(BraveAuthenticationError):
        run_async(_client(handler).web_search("q"))


def test_missing_api_key_fails_without_network_call():
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(200, json={})

    with pytest.raises(BraveAuthenticationError, match="not configured"):
        run_async(_client(handler, api_key="   ").web_search("q"))
    assert calls == 0


def test_transport_error_is_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(BraveTransportError, match="connection refused"):
        run_async(_client(handler).web_search("q"))


def test_non_json_body_is_a_response_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>oops</html>")

    with pytest.raises(BraveResponseError):
        run_async(_client(handler).web_search("q"))


def test_aclose_closes_underlying_http_client():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={})

    client = _client(handler)
    assert client.is_closed is False
    run_async(client.aclose())
    assert client.is_closed is True
