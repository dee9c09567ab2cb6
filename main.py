# =============================================================================
# main.py  —  Entry Point for the Twitter MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py          (or the `twitter-mcp` console script)
#
# WHAT HAPPENS:
#   1. Loads .env into the environment (python-dotenv)
#   2. Reads the four Twitter credentials; any missing one is fatal (exit 1)
#   3. Opens the log (~/.twitter-mcp/twitter-mcp.log + stderr)
#   4. Builds the Twitter client, the dispatcher and the FastMCP server
#   5. Serves MCP over stdio until the agent disconnects or Ctrl-C (exit 0)
#
# An MCP client (Claude Desktop, an ADK agent, ...) starts this process and
# talks to it over stdin/stdout.  Nothing else may write to stdout.
# =============================================================================

import sys

from dotenv import load_dotenv

from clients.twitter_api import TwitterClient
from core.config import DEFAULT_LOG_DIR, load_config
from core.errors import ConfigError
from core.log_setup import open_log
from tools.dispatcher import ToolDispatcher
from tools.mcp_server import create_server


def main() -> int:
    # Must happen before load_config(): the credentials usually live in .env.
    load_dotenv()

    try:
        config = load_config()
    except ConfigError as exc:
        with open_log(DEFAULT_LOG_DIR) as log:
            log.error(f"Failed to start server: {exc}")
        return 1

    with open_log(config.log_dir, config.log_level) as log:
        try:
            client = TwitterClient.from_config(config, logger=log.getChild("client"))
            dispatcher = ToolDispatcher(client, logger=log.getChild("tools"))
            server = create_server(dispatcher)
        except Exception as exc:
            log.exception(f"Failed to start server: {exc!r}")
            return 1

        log.info("Twitter MCP server running on stdio")
        try:
            server.run()
        except KeyboardInterrupt:
            log.info("Shutting down server...")
        except Exception as exc:
            log.exception(f"[MCP Error]: {exc!r}")
            return 1
    return 0


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    sys.exit(main())
