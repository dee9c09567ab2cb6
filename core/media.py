# =============================================================================
# core/media.py  —  Media Resolver
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns whatever the agent sent as "media" into bytes + MIME type.
#
#   The agent's `data` field is ambiguous: it can be base64 bytes or a path
#   to a file.  classify_media() settles that once, using the same rule the
#   tool has always used: anything containing "/" or "\" is a path.  Base64
#   can legitimately contain "/", so a sender that wants to be unambiguous
#   should use post_tweet_with_image for files.
#
# SIZE LIMITS:
#   Twitter caps images at 5MB, GIFs at 15MB and video at 512MB.  We don't
#   enforce any of that here: files are read whole and handed on untouched,
#   and Twitter rejects what's too big.
# =============================================================================

import base64
import binascii
import os
import re
from pathlib import Path
from typing import Iterable, Optional

from core.errors import InvalidArguments, MediaFileNotFound, UnsupportedMediaFormat
from core.models import InlineSource, MediaSource, PathSource, ResolvedMedia

MIME_TYPES: dict[str, str] = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
}
SUPPORTED_MIME_TYPES = frozenset(MIME_TYPES.values())

# Inline data without a mediaType has always been uploaded as PNG.
DEFAULT_INLINE_MIME_TYPE = "image/png"

_BASE64_RE = re.compile(r"[A-Za-z0-9+/=]+")
_PATH_SEPARATORS = ("/", "\\")
_PROBE_CHARS = 100


def looks_like_path(data: str) -> bool:
    return any(sep in data for sep in _PATH_SEPARATORS)


def classify_media(data: str, media_type: Optional[str] = None) -> MediaSource:
    """Split the polymorphic `data` field into a path or an inline source."""
    if looks_like_path(data):
        return PathSource(data)
    return InlineSource(data, media_type)


def mime_type_for(path: str) -> str:
    ext = os.path.splitext(path)[1].lower()
    try:
        return MIME_TYPES[ext]
    except KeyError:
        raise UnsupportedMediaFormat(
            f"Unsupported image format: {ext or '(none)'}. "
            "Supported formats: jpg, jpeg, png, gif, webp"
        ) from None


def resolve_image_file(path: str) -> ResolvedMedia:
    """Read an image file and pair its bytes with the MIME type for its extension.

    Raises:
        MediaFileNotFound: the path does not exist.
        UnsupportedMediaFormat: the extension is not jpg/jpeg/png/gif/webp.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise MediaFileNotFound(path)
    mime_type = mime_type_for(path)
    data = file_path.read_bytes()
    if not data:
        raise InvalidArguments(f"Image file is empty: {path}")
    return ResolvedMedia(data=data, mime_type=mime_type)


def decode_inline(data: str, media_type: Optional[str] = None) -> ResolvedMedia:
    """Decode inline base64 media.  Never touches the filesystem."""
    mime_type = (media_type or DEFAULT_INLINE_MIME_TYPE).lower()
    if mime_type not in SUPPORTED_MIME_TYPES:
        raise UnsupportedMediaFormat(
            f"Unsupported media type: {media_type}. "
            f"Supported types: {', '.join(sorted(SUPPORTED_MIME_TYPES))}"
        )
    try:
        raw = base64.b64decode("".join(data.split()), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidArguments(f"Media data is not valid base64: {exc}") from exc
    if not raw:
        raise InvalidArguments("Media data is empty")
    return ResolvedMedia(data=raw, mime_type=mime_type)


def resolve_source(source: MediaSource) -> ResolvedMedia:
    if isinstance(source, PathSource):
        return resolve_image_file(source.path)
    return decode_inline(source.data, source.media_type)


# =============================================================================
# Debug report
# =============================================================================
# Used by post_tweet_debug to explain what the server *would* do with the
# media it was given, without posting.  Inline data is inspected purely in
# memory; only path-like data is looked up on disk.
# =============================================================================
def _describe_path(path: str) -> list[str]:
    lines = [f"- File path: {path}"]
    file_path = Path(path)
    try:
        exists = file_path.exists()
        lines.append(f"- File exists: {str(exists).lower()}")
        if not exists:
            return lines
        lines.append(f"- File size: {file_path.stat().st_size} bytes")
        lines.append(f"- File type: {file_path.suffix}")
    except OSError as exc:
        lines.append(f"- Error checking file: {exc}")
        return lines

    try:
        encoded = base64.b64encode(file_path.read_bytes())
    except OSError as exc:
        lines.append(f"- Error reading file: {exc}")
    else:
        lines.append("- Successfully read file and converted to base64")
        lines.append(f"- Base64 length: {len(encoded)} characters")
    return lines


def _describe_inline(data: str) -> list[str]:
    is_base64 = bool(_BASE64_RE.fullmatch(data))
    lines = [
        f"- Is base64 encoded: {str(is_base64).lower()}",
        f"- Data length: {len(data)} characters",
    ]
    if is_base64:
        probe = data[:_PROBE_CHARS]
        # Lenient decode of a prefix; padding is appended so a cut mid-quantum still decodes.
        try:
            decoded = base64.b64decode(probe + "=" * (-len(probe) % 4))
        except (binascii.Error, ValueError) as exc:
            lines.append(f"- Error decoding base64: {exc}")
        else:
            lines.append(f"- First {_PROBE_CHARS} chars decode to {len(decoded)} bytes")
    return lines


def describe_media_items(text: str, items: Iterable[tuple[str, Optional[str]]]) -> str:
    """Build the human-readable report for post_tweet_debug.

    `items` are (data, media_type) pairs in the order the agent sent them.
    """
    items = list(items)
    report = [f'Tweet text: "{text}"']
    if not items:
        report.append("")
        report.append("No media attached to this tweet.")
        return "\n".join(report)

    report.append("")
    report.append(f"Media items: {len(items)}")
    for index, (data, media_type) in enumerate(items, start=1):
        report.append("")
        report.append(f"Media item #{index}:")
        report.append(f"- Media type: {media_type}")
        is_path = looks_like_path(data)
        report.append(f"- Looks like a file path: {str(is_path).lower()}")
        report.extend(_describe_path(data) if is_path else _describe_inline(data))
    return "\n".join(report)
