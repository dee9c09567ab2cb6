# =============================================================================
# tools/__init__.py
# =============================================================================
# This package is the MCP-facing layer of the Twitter server.
#
#   schemas.py     : the tool catalog and a pydantic model per tool
#   dispatcher.py  : validate → route → map errors; transport-agnostic
#   mcp_server.py  : FastMCP wiring that exposes the dispatcher over stdio
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT talk to Twitter directly (that's clients/)
#   - They do NOT read files or format text themselves (that's core/)
#
# TOOL CONTRACT QUALITY:
#   Each tool has a clear name, a description the agent reads to decide when
#   to call it, and an input schema with explicit limits.  A call that breaks
#   the schema is rejected before anything touches Twitter.
# =============================================================================
