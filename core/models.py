# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the shape of every piece of information that flows
# through a tool call: media on its way in, tweets and users on their way
# back from Twitter, and the response envelope handed to the MCP client.
#
# Nothing here is persisted.  Every instance lives for one tool call.
# =============================================================================

from dataclasses import dataclass, field
from typing import Optional, Union


# -----------------------------------------------------------------------------
# Media — what the agent sends vs. what Twitter receives
# -----------------------------------------------------------------------------
# The agent sends a single "data" string that is EITHER base64 bytes OR a
# filesystem path.  We split that ambiguity once, at the boundary, into one
# of two explicit sources.  After that, everything downstream only ever sees
# ResolvedMedia: raw bytes plus a known MIME type.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class PathSource:
    """Media referenced by a path on the local filesystem."""

    path: str


@dataclass(frozen=True)
class InlineSource:
    """Media carried inline as a base64 string."""

    data: str
    media_type: Optional[str] = None


MediaSource = Union[PathSource, InlineSource]


@dataclass(frozen=True)
class ResolvedMedia:
    """Canonical media ready for upload.

    `mime_type` is always one of the supported image types and `data` is
    never empty.
    """

    data: bytes
    mime_type: str


# -----------------------------------------------------------------------------
# Twitter records
# -----------------------------------------------------------------------------
@dataclass
class PostedTweet:
    """The id and text Twitter echoes back after a successful post."""

    id: str
    text: str


@dataclass
class TweetMetrics:
    likes: int = 0
    retweets: int = 0


@dataclass
class TweetRecord:
    """One tweet from a search, with defaults already filled in."""

    id: str
    text: str
    created_at: str                    # ISO-8601, "now" when Twitter omits it
    author_id: str = ""                # may not match any user in the result
    metrics: TweetMetrics = field(default_factory=TweetMetrics)


@dataclass
class TwitterUser:
    id: str
    username: str


@dataclass
class SearchResult:
    tweets: list[TweetRecord] = field(default_factory=list)
    users: list[TwitterUser] = field(default_factory=list)


# -----------------------------------------------------------------------------
# ToolResponse — the envelope every handled tool call returns
# -----------------------------------------------------------------------------
# Shape on the wire:
#   {"content": [{"type": "text", "text": "...", "isError": true}]}
# `isError` is only present on failures.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class TextContent:
    text: str
    is_error: bool = False

    def to_dict(self) -> dict:
        item = {"type": "text", "text": self.text}
        if self.is_error:
            item["isError"] = True
        return item


@dataclass(frozen=True)
class ToolResponse:
    content: tuple[TextContent, ...]

    @classmethod
    def text(cls, text: str) -> "ToolResponse":
        return cls(content=(TextContent(text),))

    @classmethod
    def error(cls, text: str) -> "ToolResponse":
        return cls(content=(TextContent(text, is_error=True),))

    @property
    def is_error(self) -> bool:
        return any(item.is_error for item in self.content)

    @property
    def joined_text(self) -> str:
        return "\n".join(item.text for item in self.content)

    def to_dict(self) -> dict:
        return {"content": [item.to_dict() for item in self.content]}
