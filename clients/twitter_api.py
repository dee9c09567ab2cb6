# =============================================================================
# clients/twitter_api.py  —  Twitter Platform Client Adapter
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Wraps tweepy behind three async operations:
#     - post_tweet(text, media)      →  PostedTweet
#     - search_tweets(query, count)  →  SearchResult
#     - get_user(username)           →  TwitterUser | None
#
# TWO TWITTER APIS:
#   Media upload still lives on the v1.1 API (tweepy.API.media_upload), while
#   tweets are created and searched through v2 (tweepy.Client).  A post with
#   an image is therefore two calls: upload → media id → create tweet.
#
# ASYNC:
#   tweepy's clients are blocking.  Each SDK call runs in a worker thread via
#   asyncio.to_thread so the event loop only ever waits on I/O.
#
# ERRORS:
#   Any tweepy or requests failure is re-raised as PlatformError carrying the
#   best message we can find, a code, and the HTTP status when there is one.
#   Anything else is a bug and propagates untouched.
# =============================================================================

import asyncio
import io
import logging
from datetime import datetime, timezone
from typing import Any, Optional

import requests
import tweepy

from core.config import Config
from core.errors import PlatformError
from core.models import (
    PostedTweet,
    ResolvedMedia,
    SearchResult,
    TweetMetrics,
    TweetRecord,
    TwitterUser,
)
from core.rate_limit import RateLimiter, SlidingWindowRateLimiter

TWEET_FIELDS = ["text", "created_at", "author_id", "public_metrics"]
USER_FIELDS = ["username", "name", "verified"]
EXPANSIONS = ["author_id"]

# tweepy picks the upload MIME type from the filename, so each upload gets a
# throwaway name with the right extension.
_UPLOAD_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


def _wrap_error(exc: Exception) -> PlatformError:
    """Translate a tweepy/requests exception into a PlatformError."""
    if isinstance(exc, tweepy.HTTPException):
        response = exc.response
        status = getattr(response, "status_code", None) or getattr(response, "status", None)
        message = "; ".join(str(m) for m in exc.api_messages) or str(exc) or "Unknown Twitter API error"
        if exc.api_codes:
            code = str(exc.api_codes[0])
        elif status is not None:
            code = str(status)
        else:
            code = "unknown"
        return PlatformError(message, code=code, http_status=status)

    if isinstance(exc, requests.RequestException):
        status = getattr(exc.response, "status_code", None)
        return PlatformError(str(exc) or type(exc).__name__,
                             code=str(status) if status else "unknown", http_status=status)

    return PlatformError(str(exc) or "Unknown Twitter API error")


def _iso(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    if value:
        return str(value)
    return datetime.now(timezone.utc).isoformat()


def _to_tweet_record(tweet: Any) -> TweetRecord:
    metrics = getattr(tweet, "public_metrics", None) or {}
    author_id = getattr(tweet, "author_id", None)
    return TweetRecord(
        id=str(tweet.id),
        text=getattr(tweet, "text", "") or "",
        created_at=_iso(getattr(tweet, "created_at", None)),
        author_id=str(author_id) if author_id is not None else "",
        metrics=TweetMetrics(
            likes=int(metrics.get("like_count", 0) or 0),
            retweets=int(metrics.get("retweet_count", 0) or 0),
        ),
    )


class TwitterClient:
    """Async facade over tweepy.Client (v2) and tweepy.API (v1.1 media)."""

    def __init__(
        self,
        client: Any,
        api: Any,
        rate_limiter: Optional[RateLimiter] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._client = client
        self._api = api
        self._rate_limiter = rate_limiter or RateLimiter()
        self._log = logger or logging.getLogger("twitter_mcp.client")

    @classmethod
    def from_config(cls, config: Config, logger: Optional[logging.Logger] = None) -> "TwitterClient":
        client = tweepy.Client(
            consumer_key=config.api_key,
            consumer_secret=config.api_secret_key,
            access_token=config.access_token,
            access_token_secret=config.access_token_secret,
        )
        auth = tweepy.OAuth1UserHandler(
            config.api_key,
            config.api_secret_key,
            config.access_token,
            config.access_token_secret,
        )
        limiter = None
        if config.rate_limit:
            limiter = SlidingWindowRateLimiter(config.rate_limit, config.rate_limit_window_seconds)
        instance = cls(client, tweepy.API(auth), rate_limiter=limiter, logger=logger)
        instance._log.info("Twitter API client initialized")
        return instance

    async def _call(self, endpoint: str, fn, *args, **kwargs):
        await self._rate_limiter.acquire(endpoint)
        try:
            return await asyncio.to_thread(fn, *args, **kwargs)
        except (tweepy.TweepyException, requests.RequestException) as exc:
            self._log.error(f"[ERROR] Twitter API Error in {endpoint}: {exc!r}")
            raise _wrap_error(exc) from exc

    # -------------------------------------------------------------------------
    # post_tweet
    # -------------------------------------------------------------------------
    async def post_tweet(self, text: str, media: Optional[ResolvedMedia] = None) -> PostedTweet:
        media_ids = None
        if media is not None:
            filename = "upload" + _UPLOAD_EXTENSIONS.get(media.mime_type, ".png")
            uploaded = await self._call(
                "media/upload",
                self._api.media_upload,
                filename=filename,
                file=io.BytesIO(media.data),
            )
            media_ids = [uploaded.media_id]
            self._log.info(f"Media uploaded with ID: {uploaded.media_id} ({media.mime_type}, {len(media.data)} bytes)")

        response = await self._call("tweets/create", self._client.create_tweet, text=text, media_ids=media_ids)
        data = response.data or {}
        tweet = PostedTweet(id=str(data.get("id", "")), text=data.get("text", text))
        self._log.info(f"Tweet posted successfully with ID: {tweet.id}")
        return tweet

    # -------------------------------------------------------------------------
    # search_tweets
    # -------------------------------------------------------------------------
    async def search_tweets(self, query: str, max_results: int = 10) -> SearchResult:
        response = await self._call(
            "tweets/search/recent",
            self._client.search_recent_tweets,
            query=query,
            max_results=max_results,
            tweet_fields=TWEET_FIELDS,
            user_fields=USER_FIELDS,
            expansions=EXPANSIONS,
            user_auth=True,
        )
        tweets = [_to_tweet_record(t) for t in (response.data or [])]
        includes = response.includes or {}
        users = [TwitterUser(id=str(u.id), username=u.username) for u in includes.get("users", [])]
        self._log.info(f'Fetched {len(tweets)} tweets for query: "{query}"')
        return SearchResult(tweets=tweets, users=users)

    # -------------------------------------------------------------------------
    # get_user  (not used by any tool yet)
    # -------------------------------------------------------------------------
    async def get_user(self, username: str) -> Optional[TwitterUser]:
        response = await self._call(
            "users/by/username",
            self._client.get_user,
            username=username,
            user_fields=["username"],
            user_auth=True,
        )
        if not response.data:
            return None
        return TwitterUser(id=str(response.data.id), username=response.data.username)
