from __future__ import annotations

import asyncio

import pytest
from fastmcp import Client
from mcp.shared.exceptions import McpError

from core.errors import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    RATE_LIMIT_MESSAGE,
    PlatformError,
)
from tests.fakes import FakePlatform
from tools.dispatcher import ToolDispatcher
from tools.mcp_server import create_server, invoke
from tools.schemas import TOOL_CATALOG


def _call_over_mcp(platform: FakePlatform, name: str, arguments: dict):
    server = create_server(ToolDispatcher(platform))

    async def run():
        async with Client(server) as client:
            return await client.call_tool_mcp(name, arguments)

    return asyncio.run(run())


# -----------------------------------------------------------------------------
# invoke
# -----------------------------------------------------------------------------
def test_invoke_returns_text_on_success() -> None:
    result = asyncio.run(invoke(ToolDispatcher(FakePlatform()), "post_tweet", {"text": "hello"}))
    assert not result.isError
    assert "https://twitter.com/status/123" in result.content[0].text


def test_invoke_marks_error_envelope() -> None:
    dispatcher = ToolDispatcher(FakePlatform(error=PlatformError("slow down", code="429", http_status=429)))
    result = asyncio.run(invoke(dispatcher, "post_tweet", {"text": "hello"}))
    assert result.isError
    assert result.content[0].text == RATE_LIMIT_MESSAGE


@pytest.mark.parametrize("name, arguments, code", [
    ("nope", {}, METHOD_NOT_FOUND),
    ("search_tweets", {"query": "claude", "count": 5}, INVALID_PARAMS),
])
def test_invoke_raises_mcp_error_for_protocol_failures(name, arguments, code) -> None:
    with pytest.raises(McpError) as info:
        asyncio.run(invoke(ToolDispatcher(FakePlatform()), name, arguments))
    assert info.value.error.code == code


# -----------------------------------------------------------------------------
# Over an MCP session
# -----------------------------------------------------------------------------
def test_server_publishes_the_catalog_verbatim() -> None:
    server = create_server(ToolDispatcher(FakePlatform()))

    async def list_tools():
        async with Client(server) as client:
            return await client.list_tools()

    published = asyncio.run(list_tools())

    assert [tool.name for tool in published] == [tool.name for tool in TOOL_CATALOG]
    for tool, descriptor in zip(published, TOOL_CATALOG):
        assert tool.description == descriptor.description
        assert tool.inputSchema == descriptor.input_schema


def test_post_tweet_over_mcp() -> None:
    platform = FakePlatform()
    result = _call_over_mcp(platform, "post_tweet", {"text": "hello"})

    assert not result.isError
    assert result.content[0].text == "Tweet posted successfully!\nURL: https://twitter.com/status/123"
    assert platform.posts == [("hello", None)]


def test_unknown_tool_is_a_jsonrpc_error() -> None:
    with pytest.raises(McpError) as info:
        _call_over_mcp(FakePlatform(), "nope", {})
    assert info.value.error.code == METHOD_NOT_FOUND
    assert info.value.error.message == "Unknown tool: nope"


def test_out_of_range_count_is_a_jsonrpc_error() -> None:
    platform = FakePlatform()
    with pytest.raises(McpError) as info:
        _call_over_mcp(platform, "search_tweets", {"query": "claude", "count": 5})
    assert info.value.error.code == INVALID_PARAMS
    assert platform.searches == []


def test_missing_media_path_is_a_jsonrpc_error(tmp_path) -> None:
    platform = FakePlatform()
    missing = str(tmp_path / "no-such.png")
    with pytest.raises(McpError) as info:
        _call_over_mcp(platform, "post_tweet", {"text": "hi", "media": [{"data": missing}]})
    assert info.value.error.code == INVALID_PARAMS
    assert "File not found" in info.value.error.message
    assert platform.posts == []


def test_unexpected_failure_is_an_internal_jsonrpc_error() -> None:
    with pytest.raises(McpError) as info:
        _call_over_mcp(FakePlatform(error=RuntimeError("boom")), "post_tweet", {"text": "hello"})
    assert info.value.error.code == INTERNAL_ERROR
    assert info.value.error.message == "An unexpected error occurred"


def test_rate_limit_is_an_error_result_not_a_jsonrpc_error() -> None:
    platform = FakePlatform(error=PlatformError("Too Many Requests", code="88", http_status=429))
    result = _call_over_mcp(platform, "search_tweets", {"query": "claude", "count": 10})

    assert result.isError
    assert result.content[0].text == RATE_LIMIT_MESSAGE
