# =============================================================================
# core/log_setup.py  —  Logging Setup
# =============================================================================
#
# We log to TWO places:
#   1. ~/.twitter-mcp/twitter-mcp.log  (append-only, one timestamped line per
#      message).  This is where you look when a tool call misbehaves.
#   2. STDERR.  Never stdout: the MCP server talks to the agent over
#      stdin/stdout, and a stray log line on stdout corrupts the protocol.
#
# open_log() is a context manager.  main.py opens it once at startup and
# everything else gets a child logger passed in.  On exit the handlers are
# flushed, closed and detached.
#
# If the log directory can't be created or the file can't be opened we keep
# going on stderr alone.  Losing the log file is not worth refusing to serve.
# =============================================================================

import logging
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional, Union

LOGGER_NAME = "twitter_mcp"
LOG_FILENAME = "twitter-mcp.log"


class IsoFormatter(logging.Formatter):
    """`<ISO-8601 UTC timestamp> <message>`, one line per record."""

    def formatTime(self, record, datefmt=None):
        return datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds")


def _file_handler(log_dir: Path) -> Optional[logging.Handler]:
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_dir / LOG_FILENAME, mode="a", encoding="utf-8")
    except OSError as exc:
        print(f"[twitter-mcp] cannot open log file in {log_dir}: {exc}", file=sys.stderr)
        return None
    handler.setFormatter(IsoFormatter("%(asctime)s %(message)s"))
    return handler


@contextmanager
def open_log(
    log_dir: Optional[Path] = None,
    level: Union[int, str] = logging.INFO,
    stream=None,
) -> Iterator[logging.Logger]:
    """Configure the server logger for the duration of the block.

    Args:
        log_dir: Directory for twitter-mcp.log.  None disables the file.
        level: Logging level name or number.
        stream: Console stream, defaults to sys.stderr.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    handlers: list[logging.Handler] = []
    if log_dir is not None:
        file_handler = _file_handler(Path(log_dir))
        if file_handler is not None:
            handlers.append(file_handler)

    console = logging.StreamHandler(stream or sys.stderr)
    console.setFormatter(logging.Formatter("%(asctime)s [MCP] %(message)s", datefmt="%H:%M:%S"))
    handlers.append(console)

    for handler in handlers:
        logger.addHandler(handler)
    try:
        yield logger
    finally:
        for handler in handlers:
            handler.flush()
            handler.close()
            logger.removeHandler(handler)
