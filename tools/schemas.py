# =============================================================================
# tools/schemas.py  —  Tool Catalog & Argument Models
# =============================================================================
#
# WHAT THIS FILE DOES:
#   1. Declares the four tools the server exposes (TOOL_CATALOG): name,
#      description and the JSON Schema the agent sees.
#   2. Declares a pydantic model per tool.  Incoming arguments are untyped
#      JSON; the dispatcher validates them into one of these models and
#      never touches the raw dict again.
#
#   The limits (280 chars, 4 media items, 10–100 results) are defined once
#   below and used by both the schemas and the models.
# =============================================================================

from dataclasses import dataclass
from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field

MAX_TWEET_LENGTH = 280
MAX_MEDIA_ITEMS = 4
MIN_SEARCH_RESULTS = 10
MAX_SEARCH_RESULTS = 100

POST_TWEET = "post_tweet"
POST_TWEET_WITH_IMAGE = "post_tweet_with_image"
POST_TWEET_DEBUG = "post_tweet_debug"
SEARCH_TWEETS = "search_tweets"


# =============================================================================
# Argument models
# =============================================================================
class _Args(BaseModel):
    # Unknown keys are dropped; camelCase wire names map to snake_case fields.
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class MediaItem(_Args):
    data: str = Field(description="Base64 encoded media data or file path to an image")
    media_type: Optional[str] = Field(
        default=None,
        alias="mediaType",
        description="MIME type of media (e.g., image/jpeg). Optional if data is a file path.",
    )


class DebugMediaItem(_Args):
    data: str = Field(description="Base64 encoded media data")
    media_type: str = Field(alias="mediaType", description="MIME type of media (e.g., image/jpeg, video/mp4)")


class PostTweetArgs(_Args):
    text: str = Field(max_length=MAX_TWEET_LENGTH)
    media: Optional[Annotated[list[MediaItem], Field(max_length=MAX_MEDIA_ITEMS)]] = None


class PostTweetWithImageArgs(_Args):
    text: str = Field(max_length=MAX_TWEET_LENGTH)
    image_path: str = Field(alias="imagePath", min_length=1)


class PostTweetDebugArgs(_Args):
    text: str = Field(max_length=MAX_TWEET_LENGTH)
    media: Optional[Annotated[list[DebugMediaItem], Field(max_length=MAX_MEDIA_ITEMS)]] = None


class SearchTweetsArgs(_Args):
    query: str = Field(min_length=1)
    count: int = Field(ge=MIN_SEARCH_RESULTS, le=MAX_SEARCH_RESULTS)


# =============================================================================
# Tool catalog
# =============================================================================
@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    input_schema: dict[str, Any]
    args_model: type[BaseModel]

    def to_dict(self) -> dict:
        return {"name": self.name, "description": self.description, "inputSchema": self.input_schema}


_TEXT_PROPERTY = {
    "type": "string",
    "description": "The content of your tweet",
    "maxLength": MAX_TWEET_LENGTH,
}


def _media_property(description: str, media_type_required: bool) -> dict:
    return {
        "type": "array",
        "description": "Optional media attachments (max 4 images or 1 video)",
        "items": {
            "type": "object",
            "properties": {
                "data": {"type": "string", "description": description},
                "mediaType": {
                    "type": "string",
                    "description": (
                        "MIME type of media (e.g., image/jpeg, video/mp4)"
                        if media_type_required else
                        "MIME type of media (e.g., image/jpeg, video/mp4). Optional if data is a file path."
                    ),
                },
            },
            "required": ["data", "mediaType"] if media_type_required else ["data"],
        },
        "maxItems": MAX_MEDIA_ITEMS,
    }


TOOL_CATALOG: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name=POST_TWEET,
        description="Post a new tweet to Twitter with optional media attachments",
        input_schema={
            "type": "object",
            "properties": {
                "text": _TEXT_PROPERTY,
                "media": _media_property("Base64 encoded media data or file path to an image", False),
            },
            "required": ["text"],
        },
        args_model=PostTweetArgs,
    ),
    ToolDescriptor(
        name=POST_TWEET_WITH_IMAGE,
        description="Post a tweet with a single image file",
        input_schema={
            "type": "object",
            "properties": {
                "text": _TEXT_PROPERTY,
                "imagePath": {
                    "type": "string",
                    "description": "Path to the image file (jpg, jpeg, png, gif, webp)",
                },
            },
            "required": ["text", "imagePath"],
        },
        args_model=PostTweetWithImageArgs,
    ),
    ToolDescriptor(
        name=POST_TWEET_DEBUG,
        description="Debug tool to log media information without posting to Twitter",
        input_schema={
            "type": "object",
            "properties": {
                "text": _TEXT_PROPERTY,
                "media": _media_property("Base64 encoded media data", True),
            },
            "required": ["text"],
        },
        args_model=PostTweetDebugArgs,
    ),
    ToolDescriptor(
        name=SEARCH_TWEETS,
        description="Search for tweets on Twitter",
        input_schema={
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Search query"},
                "count": {
                    "type": "number",
                    "description": "Number of tweets to return (10-100)",
                    "minimum": MIN_SEARCH_RESULTS,
                    "maximum": MAX_SEARCH_RESULTS,
                },
            },
            "required": ["query", "count"],
        },
        args_model=SearchTweetsArgs,
    ),
)
