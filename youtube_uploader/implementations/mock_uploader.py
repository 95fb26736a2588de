"""
Mock Uploader Implementation

In-memory uploader for testing without the YouTube API.
Applies the same local checks, request building, progress and
cancellation rules as the real uploader.
"""

import logging
import os
import random
import time
from typing import Any, Callable, Dict, List, Optional
from uuid import uuid4

from youtube_uploader.cancellation import CancellationToken
from youtube_uploader.constants import (
    DEFAULT_LANGUAGE,
    PLAYLIST_MAX_RESULTS,
    UploadStatus,
)
from youtube_uploader.interfaces.uploader_interface import (
    LocalFileNotFoundError,
    NoChannelFoundError,
    ProgressCallback,
    RemoteApiError,
    UploaderInterface,
    UploadMetadata,
    UploadQuota,
)
from youtube_uploader.progress import ProgressTracker
from youtube_uploader.request_builder import (
    build_playlist_item_body,
    build_video_body,
    extract_quota,
)

DEFAULT_MOCK_CATEGORIES = [
    {"kind": "youtube#videoCategory", "id": "1", "snippet": {"title": "Film & Animation", "assignable": True}},
    {"kind": "youtube#videoCategory", "id": "10", "snippet": {"title": "Music", "assignable": True}},
    {"kind": "youtube#videoCategory", "id": "22", "snippet": {"title": "People & Blogs", "assignable": True}},
    {"kind": "youtube#videoCategory", "id": "27", "snippet": {"title": "Education", "assignable": True}},
]

MOCK_CHUNK_SIZE = 256 * 1024


class MockUploader(UploaderInterface):
    """
    Mock video platform for testing.

    Useful for:
    - Unit tests
    - Development without YouTube credentials
    - CI/CD pipelines
    """

    def __init__(
        self,
        simulate_timing: bool = False,
        fail_rate: float = 0.0,
        chunk_size: int = MOCK_CHUNK_SIZE,
        categories: Optional[List[dict]] = None,
        playlists: Optional[List[dict]] = None,
        channel_id: Optional[str] = "mock_channel",
        default_language: str = DEFAULT_LANGUAGE,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize mock uploader.

        Args:
            simulate_timing: If True, sleep as if uploading at ~5 MB/s
            fail_rate: Probability of a simulated remote failure (0.0 to 1.0)
            chunk_size: Bytes per simulated chunk
            categories: Categories served by get_video_categories()
            playlists: Playlists owned by the mock account
            channel_id: Channel of the mock account, None for no channel
            default_language: Language applied when metadata has none
            clock: Time source for throughput estimates

        Example:
            # Fast mock for unit tests
            uploader = MockUploader()

            # Account without a channel
            uploader = MockUploader(channel_id=None)

            # Test error handling
            uploader = MockUploader(fail_rate=1.0)
        """
        self.logger = logging.getLogger(__name__)
        self.simulate_timing = simulate_timing
        self.fail_rate = fail_rate
        self.chunk_size = chunk_size
        self.categories = list(DEFAULT_MOCK_CATEGORIES if categories is None else categories)
        self.playlists = list(playlists or [])
        self.channel_id = channel_id
        self.default_language = default_language
        self._clock = clock

        # Track calls for testing
        self.upload_history: list[dict] = []
        self.thumbnails: dict[str, str] = {}
        self.playlist_items: list[dict] = []

        self.logger.info(
            f"Mock Uploader initialized "
            f"(timing: {simulate_timing}, fail_rate: {fail_rate})",
        )

    def upload_video(
        self,
        video_path: str,
        metadata: Optional[UploadMetadata] = None,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Dict[str, Any]:
        """Simulate a chunked upload and return a fake video resource"""
        if not os.path.exists(video_path):
            raise LocalFileNotFoundError(video_path, "Video file")

        file_size = os.path.getsize(video_path)
        body = build_video_body(metadata, default_language=self.default_language)

        self.logger.info(f"[MOCK] Starting upload: {video_path} ({file_size} bytes)")

        self._maybe_fail("Simulated upload failure")

        tracker = None
        if progress_callback is not None:
            tracker = ProgressTracker(file_size, clock=self._clock)

        offsets = list(range(self.chunk_size, file_size, self.chunk_size)) + [file_size]
        for bytes_sent in offsets:
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()

            if self.simulate_timing:
                # Estimate: ~5 MB/s upload speed
                time.sleep(self.chunk_size / (5 * 1024 * 1024))

            if tracker is not None:
                snapshot = tracker.update(bytes_sent)
                if snapshot is not None:
                    progress_callback(snapshot)

        video_id = f"mock_{uuid4().hex[:11]}"
        video = {
            "kind": "youtube#video",
            "id": video_id,
            "snippet": body["snippet"],
            "status": {**body["status"], "uploadStatus": "uploaded"},
        }

        self.upload_history.append(
            {
                "video_id": video_id,
                "video_path": video_path,
                "title": body["snippet"]["title"],
                "body": body,
                "file_size": file_size,
                "timestamp": time.time(),
            },
        )

        self.logger.info(f"[MOCK] ✅ Upload successful: {video_id}")
        return video

    def set_thumbnail(self, video_id: str, image_path: str) -> Dict[str, Any]:
        if not os.path.exists(image_path):
            raise LocalFileNotFoundError(image_path, "Thumbnail file")

        self._maybe_fail("Simulated thumbnail failure")

        if not any(record["video_id"] == video_id for record in self.upload_history):
            raise self._not_found("videoNotFound", f"Video not found: {video_id}")

        self.thumbnails[video_id] = image_path
        url = f"https://i.ytimg.com/vi/{video_id}/default.jpg"

        return {
            "kind": "youtube#thumbnailSetResponse",
            "items": [{"default": {"url": url, "width": 120, "height": 90}}],
        }

    def get_video_categories(self, region_code: Optional[str] = None) -> List[dict]:
        self._maybe_fail("Simulated category listing failure")
        return list(self.categories)

    def get_my_playlists(self) -> List[dict]:
        self._maybe_fail("Simulated playlist listing failure")
        return list(self.playlists[:PLAYLIST_MAX_RESULTS])

    def add_video_to_playlist(self, video_id: str, playlist_id: str) -> Dict[str, Any]:
        self._maybe_fail("Simulated playlist insert failure")

        if not any(playlist.get("id") == playlist_id for playlist in self.playlists):
            raise self._not_found("playlistNotFound", f"Playlist not found: {playlist_id}")

        item = {
            "kind": "youtube#playlistItem",
            "id": f"mock_item_{uuid4().hex[:11]}",
            **build_playlist_item_body(video_id, playlist_id),
        }
        self.playlist_items.append(item)

        self.logger.info(f"[MOCK] Added video {video_id} to playlist {playlist_id}")
        return item

    def get_upload_quota(self) -> UploadQuota:
        self._maybe_fail("Simulated channel listing failure")

        if self.channel_id is None:
            raise NoChannelFoundError()

        return extract_quota(
            {
                "id": self.channel_id,
                "statistics": {"videoCount": str(len(self.upload_history))},
                "contentDetails": {"contentRatings": {}},
            },
        )

    def _maybe_fail(self, message: str) -> None:
        if random.random() < self.fail_rate:
            self.logger.warning(f"[MOCK] {message}")
            raise RemoteApiError(
                message,
                status=UploadStatus.NETWORK_ERROR,
                status_code=503,
                reason="backendError",
            )

    def _not_found(self, reason: str, message: str) -> RemoteApiError:
        error_body = {
            "error": {
                "code": 404,
                "message": message,
                "errors": [{"reason": reason, "message": message}],
            },
        }
        return RemoteApiError(
            message,
            status=UploadStatus.FAILED,
            status_code=404,
            reason=reason,
            error_body=error_body,
        )

    # =========================================================================
    # TESTING HELPER METHODS
    # =========================================================================

    def get_upload_history(self) -> list[dict]:
        return self.upload_history.copy()

    def clear_history(self) -> None:
        self.upload_history.clear()
        self.logger.debug("[MOCK] Upload history cleared")

    def get_last_upload(self) -> Optional[dict]:
        return self.upload_history[-1] if self.upload_history else None

    def was_uploaded(self, video_path: str) -> bool:
        return any(record["video_path"] == video_path for record in self.upload_history)
