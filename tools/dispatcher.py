# =============================================================================
# tools/dispatcher.py  —  Tool Registry & Dispatcher
# =============================================================================
#
# HOW A TOOL CALL FLOWS:
#   1. Look the tool up by name            → UnknownTool if it isn't ours
#   2. Validate the raw arguments          → InvalidArguments on failure
#   3. Run the tool's handler with the validated pydantic model
#   4. Map whatever the handler raised through ONE catch point:
#        - PlatformError (rate limit)  →  error envelope "please wait"
#        - PlatformError (other)       →  error envelope with Twitter's message
#        - ProtocolError               →  re-raised unchanged
#        - anything else               →  logged, re-raised as InternalError
#
#   Steps 1 and 2 happen before any side effect, so a bad call never reaches
#   Twitter or the filesystem.
#
# LOGGING:
#   Tool name + params in CYAN, status lines in YELLOW, results in GREEN.
#   The colors only matter on stderr; the log file gets the same text.
# =============================================================================

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, Mapping, Optional, Protocol

from pydantic import BaseModel, ValidationError

from core.errors import (
    RATE_LIMIT_MESSAGE,
    InternalError,
    InvalidArguments,
    PlatformError,
    ProtocolError,
    UnknownTool,
)
from core.formatter import format_post_response, format_search_response
from core.media import classify_media, describe_media_items, resolve_image_file, resolve_source
from core.models import PostedTweet, ResolvedMedia, SearchResult, ToolResponse
from tools.schemas import (
    POST_TWEET,
    POST_TWEET_DEBUG,
    POST_TWEET_WITH_IMAGE,
    SEARCH_TWEETS,
    TOOL_CATALOG,
    PostTweetArgs,
    PostTweetDebugArgs,
    PostTweetWithImageArgs,
    SearchTweetsArgs,
    ToolDescriptor,
)

# ANSI color codes for terminal output
_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"


class TwitterPlatform(Protocol):
    """What the dispatcher needs from the Twitter client."""

    async def post_tweet(self, text: str, media: Optional[ResolvedMedia] = None) -> PostedTweet: ...

    async def search_tweets(self, query: str, max_results: int = 10) -> SearchResult: ...


Handler = Callable[[Any], Awaitable[ToolResponse]]


class ToolDispatcher:
    def __init__(self, platform: TwitterPlatform, logger: Optional[logging.Logger] = None):
        self._platform = platform
        self._log = logger or logging.getLogger("twitter_mcp.tools")
        self._tools: dict[str, ToolDescriptor] = {tool.name: tool for tool in TOOL_CATALOG}
        self._handlers: dict[str, Handler] = {
            POST_TWEET: self._post_tweet,
            POST_TWEET_WITH_IMAGE: self._post_tweet_with_image,
            POST_TWEET_DEBUG: self._post_tweet_debug,
            SEARCH_TWEETS: self._search_tweets,
        }

    # -------------------------------------------------------------------------
    # Logging helpers
    # -------------------------------------------------------------------------
    def _log_request(self, tool_name: str, arguments: Mapping[str, Any]) -> None:
        self._log.info(f"{_CYAN}Tool called: {tool_name} {json.dumps(arguments, default=str)}{_RESET}")

    def _log_status(self, message: str) -> None:
        self._log.info(f"{_YELLOW}  → {message}{_RESET}")

    def _log_response(self, tool_name: str, response: ToolResponse) -> ToolResponse:
        self._log.info(f"{_GREEN}  ← {tool_name} response: "
                       f"{json.dumps(response.to_dict(), separators=(',', ':'))}{_RESET}")
        return response

    # -------------------------------------------------------------------------
    # Public surface
    # -------------------------------------------------------------------------
    def list_tools(self) -> tuple[ToolDescriptor, ...]:
        return TOOL_CATALOG

    def validate(self, name: str, arguments: Optional[Mapping[str, Any]]) -> BaseModel:
        tool = self._tools.get(name)
        if tool is None:
            self._log.error(f"[ERROR] Unknown tool: {name}")
            raise UnknownTool(name)
        try:
            return tool.args_model.model_validate(arguments if arguments is not None else {})
        except ValidationError as exc:
            self._log.error(f"[ERROR] Invalid parameters for {name}: {exc}")
            raise InvalidArguments(f"Invalid parameters: {exc}") from exc

    async def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResponse:
        """Run one tool call and return its envelope.

        Raises:
            ProtocolError: unknown tool, invalid arguments, unreadable media,
                or an unexpected failure (as InternalError).
        """
        self._log_request(name, arguments or {})
        args = self.validate(name, arguments)
        handler = self._handlers[name]
        try:
            response = await handler(args)
        except Exception as exc:
            response = self._handle_error(name, exc)
        return self._log_response(name, response)

    def _handle_error(self, name: str, exc: Exception) -> ToolResponse:
        if isinstance(exc, ProtocolError):
            self._log.error(f"[ERROR] {name} rejected: {exc.message}")
            raise exc
        if isinstance(exc, PlatformError):
            self._log.error(f"[ERROR] Twitter API error in {name}: {exc!r}")
            if exc.is_rate_limit:
                return ToolResponse.error(RATE_LIMIT_MESSAGE)
            return ToolResponse.error(f"Twitter API error: {exc.message}")
        self._log.exception(f"Unexpected error in {name}: {exc!r}")
        raise InternalError() from exc

    # -------------------------------------------------------------------------
    # Handlers
    # -------------------------------------------------------------------------
    async def _post_tweet(self, args: PostTweetArgs) -> ToolResponse:
        media = None
        if args.media:
            if len(args.media) > 1:
                # TODO: upload every item and attach all media ids to the tweet.
                self._log.warning(f"[WARN] {len(args.media)} media items sent; only the first is posted")
            item = args.media[0]
            source = classify_media(item.data, item.media_type)
            self._log_status(f"Resolving media: {type(source).__name__}")
            media = await asyncio.to_thread(resolve_source, source)
            self._log_status(f"Media ready: {media.mime_type}, {len(media.data)} bytes")

        tweet = await self._platform.post_tweet(args.text, media)
        return ToolResponse.text(format_post_response(tweet))

    async def _post_tweet_with_image(self, args: PostTweetWithImageArgs) -> ToolResponse:
        media = await asyncio.to_thread(resolve_image_file, args.image_path)
        self._log_status(f"Read {args.image_path}: {media.mime_type}, {len(media.data)} bytes")
        tweet = await self._platform.post_tweet(args.text, media)
        return ToolResponse.text(format_post_response(tweet))

    async def _post_tweet_debug(self, args: PostTweetDebugArgs) -> ToolResponse:
        items = [(item.data, item.media_type) for item in args.media or []]
        report = await asyncio.to_thread(describe_media_items, args.text, items)
        self._log_status(f"Debug info: {report}")
        return ToolResponse.text(f"DEBUG INFO:\n{report}")

    async def _search_tweets(self, args: SearchTweetsArgs) -> ToolResponse:
        result = await self._platform.search_tweets(args.query, args.count)
        self._log_status(f"Found {len(result.tweets)} tweets, {len(result.users)} users")
        return ToolResponse.text(format_search_response(args.query, result.tweets, result.users))
