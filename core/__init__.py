# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains the framework-free pieces of the Twitter MCP server.
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP, the MCP SDK, pydantic, or the
#   Twitter SDK.  Every module here is plain Python: data models, the error
#   taxonomy, media resolution, response formatting, config and logging.
#
#   The tools/ layer validates arguments and wires everything into MCP.
#   The clients/ layer talks to Twitter.  Both depend on core/, never the
#   other way around.
# =============================================================================
