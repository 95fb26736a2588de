"""
Upload Constants

Centralized constants for the YouTube upload facade.
Environment-driven values live in youtube_uploader/settings.py.
"""

from enum import Enum

# =============================================================================
# YOUTUBE API CONFIGURATION
# =============================================================================

# OAuth 2.0 scopes required for YouTube operations
# https://developers.google.com/youtube/v3/guides/authentication
YOUTUBE_SCOPES = [
    "https://www.googleapis.com/auth/youtube.upload",
    "https://www.googleapis.com/auth/youtube",
]

# YouTube API service details
YOUTUBE_API_SERVICE_NAME = "youtube"
YOUTUBE_API_VERSION = "v3"

# Resource parts requested per endpoint
VIDEO_INSERT_PARTS = "snippet,status"
CATEGORY_LIST_PARTS = "snippet"
PLAYLIST_LIST_PARTS = "snippet"
PLAYLIST_ITEM_INSERT_PARTS = "snippet"
CHANNEL_LIST_PARTS = "contentDetails,statistics"

# Playlists are read as a single page
PLAYLIST_MAX_RESULTS = 50

PLAYLIST_ITEM_KIND_VIDEO = "youtube#video"

# =============================================================================
# UPLOAD CONFIGURATION
# =============================================================================

# Chunk size for resumable uploads (in bytes)
# YouTube requires multiples of 256 KB
UPLOAD_CHUNK_SIZE = 10 * 1024 * 1024  # 10 MB

# =============================================================================
# VIDEO METADATA DEFAULTS
# =============================================================================

DEFAULT_VIDEO_TITLE = "Untitled Video"
DEFAULT_VIDEO_DESCRIPTION = ""

# 22 = People & Blogs
# https://developers.google.com/youtube/v3/docs/videoCategories
DEFAULT_CATEGORY_ID = "22"

# Options: "public", "private", "unlisted"
DEFAULT_PRIVACY_STATUS = "private"

DEFAULT_LANGUAGE = "de"
DEFAULT_REGION_CODE = "DE"

COMMENT_MODERATION_DISABLED = "disabled"

# =============================================================================
# PROGRESS REPORTING
# =============================================================================

STATUS_UPLOADING = "Uploading"
STATUS_ALMOST_DONE = "Almost done"
STATUS_PROCESSING = "Processing"

# Percentage from which the upload is reported as "Almost done"
ALMOST_DONE_THRESHOLD = 95

ETA_CALCULATING = "Calculating..."
ETA_PROCESSING = "YouTube is processing your video..."

BYTES_PER_MEGABYTE = 1024 * 1024

# =============================================================================
# UPLOAD STATUS
# =============================================================================


class UploadStatus(Enum):
    """Operation status codes carried by UploaderError"""

    FAILED = "failed"
    NOT_FOUND = "not_found"
    INVALID_METADATA = "invalid_metadata"
    AUTH_ERROR = "auth_error"
    NETWORK_ERROR = "network_error"
    QUOTA_EXCEEDED = "quota_exceeded"
    CANCELLED = "cancelled"


# HTTP error reasons YouTube uses for exhausted quota
QUOTA_ERROR_REASONS = ("quotaExceeded", "uploadLimitExceeded", "rateLimitExceeded")
