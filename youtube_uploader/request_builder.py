"""
Request Builder

Side-effect free construction of YouTube API request bodies.
Nothing here touches the network, the filesystem or a logger.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from youtube_uploader.constants import (
    COMMENT_MODERATION_DISABLED,
    DEFAULT_CATEGORY_ID,
    DEFAULT_LANGUAGE,
    DEFAULT_PRIVACY_STATUS,
    DEFAULT_VIDEO_DESCRIPTION,
    DEFAULT_VIDEO_TITLE,
    PLAYLIST_ITEM_KIND_VIDEO,
)
from youtube_uploader.interfaces.uploader_interface import (
    InvalidMetadataError,
    UploadMetadata,
    UploadQuota,
)


def normalize_publish_at(value: Union[datetime, str]) -> str:
    """
    Convert a scheduled publish time to an absolute UTC timestamp.

    Naive datetimes and strings without offset are local time,
    date-only strings are midnight UTC.

    Args:
        value: datetime or ISO-8601 string ("Z" suffix allowed)

    Returns:
        "YYYY-MM-DDTHH:MM:SS.mmmZ"

    Raises:
        InvalidMetadataError: If value cannot be parsed

    Example:
        >>> normalize_publish_at("2025-06-01T12:00:00+02:00")
        '2025-06-01T10:00:00.000Z'
    """
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError as e:
            raise InvalidMetadataError(f"Invalid publish time: {value!r}") from e
        if "T" not in text and " " not in text:
            moment = moment.replace(tzinfo=timezone.utc)
    else:
        raise InvalidMetadataError(
            f"Publish time must be a datetime or ISO-8601 string, got {type(value).__name__}",
        )

    # astimezone() on a naive datetime assumes local time
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_video_body(
    metadata: Optional[UploadMetadata] = None,
    default_language: str = DEFAULT_LANGUAGE,
) -> Dict[str, Any]:
    """
    Build the videos.insert request body.

    Caller metadata is merged over fixed defaults. Empty strings for
    title and language count as missing.

    Args:
        metadata: Caller metadata, or None for all defaults
        default_language: Language used when metadata has none

    Returns:
        {"snippet": {...}, "status": {...}}
    """
    metadata = metadata or UploadMetadata()
    language = metadata.language or default_language

    body: Dict[str, Any] = {
        "snippet": {
            "title": metadata.title or DEFAULT_VIDEO_TITLE,
            "description": metadata.description or DEFAULT_VIDEO_DESCRIPTION,
            "tags": list(metadata.tags or []),
            "categoryId": metadata.category_id or DEFAULT_CATEGORY_ID,
            "defaultLanguage": language,
            "defaultAudioLanguage": language,
        },
        "status": {
            "privacyStatus": metadata.privacy or DEFAULT_PRIVACY_STATUS,
            "embeddable": metadata.embeddable is not False,
            "publicStatsViewable": metadata.public_stats_viewable is not False,
            "selfDeclaredMadeForKids": bool(metadata.made_for_kids),
        },
    }

    if metadata.publish_at:
        body["status"]["publishAt"] = normalize_publish_at(metadata.publish_at)

    # Only an explicit False disables comments, None keeps the channel default
    if metadata.allow_comments is False:
        body["status"]["commentModerationStatus"] = COMMENT_MODERATION_DISABLED

    return body


def build_playlist_item_body(video_id: str, playlist_id: str) -> Dict[str, Any]:
    """Build the playlistItems.insert request body."""
    return {
        "snippet": {
            "playlistId": playlist_id,
            "resourceId": {
                "kind": PLAYLIST_ITEM_KIND_VIDEO,
                "videoId": video_id,
            },
        },
    }


def extract_quota(channel: Dict[str, Any]) -> UploadQuota:
    """
    Pick the quota-related fields out of a channel resource.

    Missing statistics or content details become None.
    """
    statistics = channel.get("statistics") or {}
    content_details = channel.get("contentDetails") or {}

    return UploadQuota(
        channel_id=channel.get("id"),
        total_videos=statistics.get("videoCount"),
        quota_info=content_details.get("contentRatings"),
    )
