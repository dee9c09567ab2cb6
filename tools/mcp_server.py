# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the four Twitter tools over MCP.  FastMCP owns the transport
#   (stdio, initialize handshake, lifecycle); the two tool requests are
#   answered straight from the ToolDispatcher:
#
#     tools/list  →  dispatcher.list_tools(), schemas published verbatim
#     tools/call  →  dispatcher.call_tool(name, raw arguments)
#
#   Outcomes of a call:
#
#     success envelope          →  CallToolResult
#     error envelope (isError)  →  CallToolResult with isError=true
#     ProtocolError             →  McpError, sent as a JSON-RPC error
#
#   The handlers sit directly in the low-level request table.  FastMCP's own
#   tool wrappers would validate against function signatures and turn every
#   exception into an isError result, so unknown tools and bad arguments
#   would never reach the client as -32601 / -32602.
#
# RUNNING THIS SERVER:
#   python main.py   (stdio transport; see main.py for config and logging)
# =============================================================================

from typing import Any, Mapping, Optional

from fastmcp import FastMCP
from mcp import types
from mcp.shared.exceptions import McpError

from core.errors import ProtocolError
from core.models import ToolResponse
from tools.dispatcher import ToolDispatcher

SERVER_NAME = "twitter-mcp"


def _to_call_result(response: ToolResponse) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=item.text) for item in response.content],
        isError=response.is_error,
    )


async def invoke(
    dispatcher: ToolDispatcher,
    name: str,
    arguments: Optional[Mapping[str, Any]],
) -> types.CallToolResult:
    """Run a tool through the dispatcher and adapt the envelope for MCP."""
    try:
        response = await dispatcher.call_tool(name, arguments)
    except ProtocolError as exc:
        raise McpError(types.ErrorData(code=exc.code, message=exc.message)) from exc
    return _to_call_result(response)


def published_tools(dispatcher: ToolDispatcher) -> list[types.Tool]:
    return [
        types.Tool(name=tool.name, description=tool.description, inputSchema=tool.input_schema)
        for tool in dispatcher.list_tools()
    ]


def create_server(dispatcher: ToolDispatcher) -> FastMCP:
    """Build the FastMCP server with the tool requests bound to `dispatcher`."""
    mcp = FastMCP(SERVER_NAME)
    tools = published_tools(dispatcher)

    async def list_tools(request: types.ListToolsRequest) -> types.ServerResult:
        return types.ServerResult(types.ListToolsResult(tools=tools))

    # McpError raised here propagates to the session, which answers with a
    # JSON-RPC error carrying its code.
    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        params = request.params
        return types.ServerResult(await invoke(dispatcher, params.name, params.arguments))

    handlers = mcp._mcp_server.request_handlers
    handlers[types.ListToolsRequest] = list_tools
    handlers[types.CallToolRequest] = call_tool
    return mcp
