"""
YouTube Uploader

Thin facade over the YouTube Data API v3: video upload with progress
and cancellation, thumbnails, categories, playlists and channel
statistics.

Public API:
    - YouTubeUploader: Real API facade
    - MockUploader: In-memory implementation for tests
    - UploadMetadata / UploadProgress / UploadQuota: Data types
    - CancellationToken: Cancels an in-flight upload
    - create_uploader: Factory function

Usage:
    from youtube_uploader import UploadMetadata, create_uploader

    uploader = create_uploader()
    video = uploader.upload_video(
        "/path/to/video.mp4",
        UploadMetadata(title="My video", privacy="unlisted"),
        progress_callback=lambda p: print(p.progress, p.time_remaining),
    )
"""

from youtube_uploader.auth.oauth_manager import OAuthManager, run_initial_auth
from youtube_uploader.cancellation import CancellationToken
from youtube_uploader.constants import UploadStatus
from youtube_uploader.factory import UploaderFactory, create_uploader
from youtube_uploader.implementations.mock_uploader import MockUploader
from youtube_uploader.implementations.youtube_uploader import YouTubeUploader
from youtube_uploader.interfaces.uploader_interface import (
    InvalidMetadataError,
    LocalFileNotFoundError,
    NoChannelFoundError,
    RemoteApiError,
    UploadCancelledError,
    UploaderError,
    UploaderInterface,
    UploadMetadata,
    UploadProgress,
    UploadQuota,
)
from youtube_uploader.observers import LoggingObserver, UploadObserver
from youtube_uploader.progress import ProgressTracker, estimate_progress

# Public API
__all__ = [
    "CancellationToken",
    "InvalidMetadataError",
    "LocalFileNotFoundError",
    "LoggingObserver",
    "MockUploader",
    "NoChannelFoundError",
    "OAuthManager",
    "ProgressTracker",
    "RemoteApiError",
    "UploadCancelledError",
    "UploadMetadata",
    "UploadObserver",
    "UploadProgress",
    "UploadQuota",
    "UploadStatus",
    "UploaderError",
    "UploaderFactory",
    "UploaderInterface",
    "YouTubeUploader",
    "create_uploader",
    "estimate_progress",
    "run_initial_auth",
]
