"""
Uploader Interface

Abstract interface for the video platform facade.
High-level code depends on this abstraction, not on the concrete
YouTube API implementation.
"""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Union

from youtube_uploader.constants import UploadStatus


@dataclass
class UploadMetadata:
    """
    Caller-supplied metadata for a video upload.

    Every field is optional. Fields left as None fall back to the
    defaults in youtube_uploader.constants when the request is built.

    Attributes:
        title: Video title
        description: Video description
        tags: Ordered list of tags
        category_id: YouTube category ID
        language: Used for both default and default audio language
        privacy: "private", "unlisted" or "public"
        embeddable: False disables embedding
        public_stats_viewable: False hides public statistics
        made_for_kids: Self-declared made-for-kids flag
        publish_at: Scheduled publish time (datetime or ISO-8601 string)
        allow_comments: False disables comments
    """

    title: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    category_id: Optional[str] = None
    language: Optional[str] = None
    privacy: Optional[str] = None
    embeddable: Optional[bool] = None
    public_stats_viewable: Optional[bool] = None
    made_for_kids: Optional[bool] = None
    publish_at: Optional[Union[datetime, str]] = None
    allow_comments: Optional[bool] = None


@dataclass(frozen=True)
class UploadProgress:
    """
    Progress snapshot emitted while a video is streamed.

    Attributes:
        progress: Integer percentage (0-100)
        bytes_read: Bytes sent so far
        bytes_total: Size of the file in bytes
        status: "Uploading", "Almost done" or "Processing"
        time_remaining: Human readable remaining-time estimate
        speed_mb_s: Average throughput in MB/s, two decimals
    """

    progress: int
    bytes_read: int
    bytes_total: int
    status: str
    time_remaining: str
    speed_mb_s: float

    @property
    def speed(self) -> str:
        return f"{self.speed_mb_s} MB/s"

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["speed"] = self.speed
        return data


@dataclass(frozen=True)
class UploadQuota:
    """
    Subset of the authenticated channel's statistics.

    YouTube does not expose real quota units through the API,
    so this only surfaces what channels.list returns.
    """

    channel_id: str
    total_videos: Optional[str] = None
    quota_info: Optional[Dict[str, Any]] = field(default=None)


ProgressCallback = Callable[[UploadProgress], None]


class UploaderInterface(ABC):
    """
    Abstract base class for the video platform facade.

    Implementations: YouTubeUploader (real API), MockUploader (in memory).
    """

    @abstractmethod
    def upload_video(
        self,
        video_path: str,
        metadata: Optional[UploadMetadata] = None,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_token=None,
    ) -> Dict[str, Any]:
        """
        Upload a video file.

        Args:
            video_path: Path to video file to upload
            metadata: Video metadata (defaults applied to missing fields)
            progress_callback: Called with strictly increasing percentages
            cancel_token: CancellationToken checked before every chunk

        Returns:
            The created video resource as returned by the platform

        Raises:
            LocalFileNotFoundError: video_path does not exist
            UploadCancelledError: cancel_token was cancelled
            RemoteApiError: platform rejected or failed the request

        Example:
            video = uploader.upload_video(
                "/videos/talk.mp4",
                UploadMetadata(title="Talk", privacy="unlisted"),
                progress_callback=lambda p: print(p.progress),
            )
        """

    @abstractmethod
    def set_thumbnail(self, video_id: str, image_path: str) -> Dict[str, Any]:
        """
        Set a custom thumbnail for a video.

        Raises:
            LocalFileNotFoundError: image_path does not exist
            RemoteApiError: platform rejected or failed the request
        """

    @abstractmethod
    def get_video_categories(self, region_code: Optional[str] = None) -> List[dict]:
        """List video categories valid in a region, in platform order."""

    @abstractmethod
    def get_my_playlists(self) -> List[dict]:
        """List playlists owned by the authenticated account."""

    @abstractmethod
    def add_video_to_playlist(self, video_id: str, playlist_id: str) -> Dict[str, Any]:
        """Insert a playlist item linking the video to the playlist."""

    @abstractmethod
    def get_upload_quota(self) -> UploadQuota:
        """
        Read statistics of the authenticated channel.

        Raises:
            NoChannelFoundError: account has no channel
            RemoteApiError: platform rejected or failed the request
        """


class UploaderError(Exception):
    """
    Base exception for upload facade errors.

    Every error carries an UploadStatus so callers can branch
    without matching on exception types.
    """

    def __init__(self, message: str, status: UploadStatus = UploadStatus.FAILED):
        super().__init__(message)
        self.status = status


class LocalFileNotFoundError(UploaderError):
    """Referenced local file does not exist. Raised before any network call."""

    def __init__(self, path: str, kind: str = "File"):
        super().__init__(f"{kind} not found: {path}", status=UploadStatus.NOT_FOUND)
        self.path = path


class InvalidMetadataError(UploaderError):
    """Metadata could not be turned into a valid request."""

    def __init__(self, message: str):
        super().__init__(message, status=UploadStatus.INVALID_METADATA)


class RemoteApiError(UploaderError):
    """
    The remote service rejected or failed the request.

    Attributes:
        status_code: HTTP status, or None for transport failures
        reason: Short reason string
        error_body: Parsed JSON error body when the platform sent one
    """

    def __init__(
        self,
        message: str,
        status: UploadStatus = UploadStatus.FAILED,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
        error_body: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, status=status)
        self.status_code = status_code
        self.reason = reason
        self.error_body = error_body


class NoChannelFoundError(UploaderError):
    """The authenticated account has no channel."""

    def __init__(self, message: str = "No channel found for the authenticated account"):
        super().__init__(message, status=UploadStatus.NOT_FOUND)


class UploadCancelledError(UploaderError):
    """The upload was cancelled through its CancellationToken."""

    def __init__(self, message: str = "Upload cancelled"):
        super().__init__(message, status=UploadStatus.CANCELLED)
