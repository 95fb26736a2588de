"""
YouTube Uploader Implementation

Concrete implementation of UploaderInterface for YouTube Data API v3.
Videos are streamed with the resumable upload protocol, one chunk at a
time, so files are never loaded fully into memory.
"""

import json
import logging
import os
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional

import httplib2
from google.auth.exceptions import RefreshError, TransportError
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaFileUpload

from youtube_uploader import settings
from youtube_uploader.auth.oauth_manager import OAuthManager
from youtube_uploader.cancellation import CancellationToken
from youtube_uploader.constants import (
    CATEGORY_LIST_PARTS,
    CHANNEL_LIST_PARTS,
    PLAYLIST_ITEM_INSERT_PARTS,
    PLAYLIST_LIST_PARTS,
    PLAYLIST_MAX_RESULTS,
    QUOTA_ERROR_REASONS,
    VIDEO_INSERT_PARTS,
    YOUTUBE_API_SERVICE_NAME,
    YOUTUBE_API_VERSION,
    UploadStatus,
)
from youtube_uploader.interfaces.uploader_interface import (
    LocalFileNotFoundError,
    NoChannelFoundError,
    ProgressCallback,
    RemoteApiError,
    UploaderError,
    UploaderInterface,
    UploadMetadata,
    UploadQuota,
)
from youtube_uploader.observers import LoggingObserver, UploadObserver
from youtube_uploader.progress import ProgressTracker
from youtube_uploader.request_builder import (
    build_playlist_item_body,
    build_video_body,
    extract_quota,
)


class YouTubeUploader(UploaderInterface):
    """
    Facade over the YouTube Data API v3.

    Features:
    - Resumable, chunked video upload with progress snapshots
    - Cancellation at chunk boundaries
    - Thumbnails, categories, playlists and channel statistics
    - Typed errors (RemoteApiError carries the API error body)

    Holds no per-call state: the service handle and observer are
    only read after construction. Each request runs on its own HTTP
    transport, so one instance can serve concurrent threads.
    """

    def __init__(
        self,
        oauth_manager: Optional[OAuthManager] = None,
        service=None,
        observer: Optional[UploadObserver] = None,
        chunk_size: Optional[int] = None,
        default_language: Optional[str] = None,
        default_region: Optional[str] = None,
        clock: Callable[[], float] = time.monotonic,
        http_factory: Optional[Callable[[], Any]] = None,
    ):
        """
        Initialize YouTube uploader.

        Args:
            oauth_manager: OAuth manager used to build the API service
            service: Already built googleapiclient resource (skips OAuth)
            observer: Receives requests, progress, results and errors
            chunk_size: Resumable upload chunk size in bytes
            default_language: Language applied when metadata has none
            default_region: Region used by get_video_categories()
            clock: Monotonic time source for throughput estimates
            http_factory: Returns a new authorized transport per request;
                defaults to oauth_manager.authorized_http. Without one,
                requests use the service's own transport.

        Raises:
            ValueError: If neither oauth_manager nor service is given
            UploaderError: If service initialization fails

        Example:
            oauth = OAuthManager(client_secret_path, token_path)
            uploader = YouTubeUploader(oauth)
        """
        self.logger = logging.getLogger(__name__)

        if oauth_manager is None and service is None:
            raise ValueError("Either oauth_manager or service is required")

        self.oauth_manager = oauth_manager
        self.observer = observer or LoggingObserver()
        self.chunk_size = chunk_size or settings.YOUTUBE_UPLOAD_CHUNK_SIZE
        self.default_language = default_language or settings.YOUTUBE_DEFAULT_LANGUAGE
        self.default_region = default_region or settings.YOUTUBE_DEFAULT_REGION
        self._clock = clock

        if http_factory is None and oauth_manager is not None:
            http_factory = oauth_manager.authorized_http
        self._http_factory = http_factory

        self.youtube_service = service or self._initialize_service()

        self.logger.info("YouTube Uploader initialized")

    def _new_http(self):
        """Transport for one request; None falls back to the service's own"""
        if self._http_factory is None:
            return None
        return self._http_factory()

    def _initialize_service(self):
        """
        Build the YouTube API service with authenticated credentials.

        Raises:
            UploaderError: If service initialization fails
        """
        try:
            credentials = self.oauth_manager.get_credentials()

            service = build(
                YOUTUBE_API_SERVICE_NAME,
                YOUTUBE_API_VERSION,
                credentials=credentials,
            )

            self.logger.debug("YouTube API service initialized")
            return service

        except Exception as e:
            raise UploaderError(
                f"Failed to initialize YouTube service: {e}",
                status=UploadStatus.AUTH_ERROR,
            ) from e

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    def upload_video(
        self,
        video_path: str,
        metadata: Optional[UploadMetadata] = None,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Dict[str, Any]:
        """
        Upload video to YouTube.

        Upload happens in chunks of self.chunk_size. The cancel token is
        checked before each chunk; progress snapshots are emitted after
        each chunk whose percentage is higher than the last one reported.

        Returns:
            The created video resource (id, snippet, status, ...)
        """
        with self._reporting("upload_video"):
            if not os.path.exists(video_path):
                raise LocalFileNotFoundError(video_path, "Video file")

            file_size = os.path.getsize(video_path)
            body = build_video_body(metadata, default_language=self.default_language)

            self.observer.on_request(
                "upload_video",
                {"video_path": video_path, "file_size": file_size, "body": body},
            )

            media = MediaFileUpload(
                video_path,
                chunksize=self.chunk_size,
                resumable=True,
            )

            try:
                request = self.youtube_service.videos().insert(
                    part=VIDEO_INSERT_PARTS,
                    body=body,
                    media_body=media,
                )
                response = self._execute_upload(
                    request,
                    file_size,
                    progress_callback,
                    cancel_token,
                )
            finally:
                media.stream().close()

            self.observer.on_success("upload_video", response)
            return response

    def _execute_upload(
        self,
        request,
        file_size: int,
        progress_callback: Optional[ProgressCallback],
        cancel_token: Optional[CancellationToken],
    ) -> Dict[str, Any]:
        """
        Send chunks until the platform returns the created video.

        Raises:
            UploadCancelledError: If cancel_token is cancelled between chunks
            RemoteApiError: If the upload finishes without a video ID
        """
        tracker = None
        if progress_callback is not None:
            tracker = ProgressTracker(file_size, clock=self._clock)

        # One transport for every chunk of this upload session
        http = self._new_http()
        response = None

        while response is None:
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()

            status, response = request.next_chunk(http=http)

            if tracker is None:
                continue

            if response is not None:
                bytes_sent = file_size
            elif status is not None:
                bytes_sent = status.resumable_progress
            else:
                continue

            snapshot = tracker.update(bytes_sent)
            if snapshot is not None:
                self.observer.on_progress(snapshot)
                progress_callback(snapshot)

        if "id" not in response:
            raise RemoteApiError(
                f"Upload completed but no video ID returned: {response}",
                error_body=response,
            )

        return response

    def set_thumbnail(self, video_id: str, image_path: str) -> Dict[str, Any]:
        """Upload image_path as the custom thumbnail of video_id."""
        with self._reporting("set_thumbnail"):
            if not os.path.exists(image_path):
                raise LocalFileNotFoundError(image_path, "Thumbnail file")

            self.observer.on_request(
                "set_thumbnail",
                {"video_id": video_id, "image_path": image_path},
            )

            media = MediaFileUpload(image_path)
            try:
                response = self.youtube_service.thumbnails().set(
                    videoId=video_id,
                    media_body=media,
                ).execute(http=self._new_http())
            finally:
                media.stream().close()

            self.observer.on_success("set_thumbnail", response)
            return response

    def get_video_categories(self, region_code: Optional[str] = None) -> List[dict]:
        region = region_code or self.default_region

        with self._reporting("get_video_categories"):
            self.observer.on_request("get_video_categories", {"region_code": region})

            response = self.youtube_service.videoCategories().list(
                part=CATEGORY_LIST_PARTS,
                regionCode=region,
            ).execute(http=self._new_http())

            items = response.get("items", [])
            self.observer.on_success("get_video_categories", items)
            return items

    def get_my_playlists(self) -> List[dict]:
        with self._reporting("get_my_playlists"):
            self.observer.on_request(
                "get_my_playlists",
                {"max_results": PLAYLIST_MAX_RESULTS},
            )

            response = self.youtube_service.playlists().list(
                part=PLAYLIST_LIST_PARTS,
                mine=True,
                maxResults=PLAYLIST_MAX_RESULTS,
            ).execute(http=self._new_http())

            items = response.get("items", [])
            self.observer.on_success("get_my_playlists", items)
            return items

    def add_video_to_playlist(self, video_id: str, playlist_id: str) -> Dict[str, Any]:
        with self._reporting("add_video_to_playlist"):
            self.observer.on_request(
                "add_video_to_playlist",
                {"video_id": video_id, "playlist_id": playlist_id},
            )

            response = self.youtube_service.playlistItems().insert(
                part=PLAYLIST_ITEM_INSERT_PARTS,
                body=build_playlist_item_body(video_id, playlist_id),
            ).execute(http=self._new_http())

            self.observer.on_success("add_video_to_playlist", response)
            return response

    def get_upload_quota(self) -> UploadQuota:
        with self._reporting("get_upload_quota"):
            self.observer.on_request("get_upload_quota", {"mine": True})

            response = self.youtube_service.channels().list(
                part=CHANNEL_LIST_PARTS,
                mine=True,
            ).execute(http=self._new_http())

            channels = response.get("items") or []
            if not channels:
                raise NoChannelFoundError()

            quota = extract_quota(channels[0])
            self.observer.on_success("get_upload_quota", quota)
            return quota

    # =========================================================================
    # ERROR HANDLING
    # =========================================================================

    @contextmanager
    def _reporting(self, operation: str) -> Iterator[None]:
        """
        Translate failures into UploaderError subclasses and report them.

        Nothing is retried or swallowed: every error reaches the observer
        and is then re-raised to the caller.
        """
        try:
            yield
        except UploaderError as e:
            self.observer.on_error(operation, e)
            raise
        except HttpError as e:
            error = self._to_remote_error(e)
            self.observer.on_error(operation, error)
            raise error from e
        except RefreshError as e:
            error = RemoteApiError(
                f"Authentication failed: {e}",
                status=UploadStatus.AUTH_ERROR,
            )
            self.observer.on_error(operation, error)
            raise error from e
        except (
            TransportError,
            httplib2.HttpLib2Error,
            ConnectionError,
            TimeoutError,
        ) as e:
            error = RemoteApiError(
                f"Transport failure: {e}",
                status=UploadStatus.NETWORK_ERROR,
            )
            self.observer.on_error(operation, error)
            raise error from e
        except Exception as e:
            # Unexpected errors, including ones raised by progress callbacks,
            # are reported and re-raised unchanged
            self.observer.on_error(operation, e)
            raise

    def _to_remote_error(self, error: HttpError) -> RemoteApiError:
        """Wrap an HttpError, keeping the structured error body"""
        error_body = _parse_error_body(error.content)
        status_code = error.resp.status
        reason = error.reason

        return RemoteApiError(
            f"YouTube API error ({status_code}): {reason}",
            status=self._parse_http_error(status_code, error_body),
            status_code=status_code,
            reason=reason,
            error_body=error_body,
        )

    def _parse_http_error(
        self,
        status_code: int,
        error_body: Optional[Dict[str, Any]],
    ) -> UploadStatus:
        """
        Determine the UploadStatus of an HTTP error.

        YouTube reports exhausted quota as 403 with a quota reason,
        so the body is checked before the status code.
        """
        if any(reason in QUOTA_ERROR_REASONS for reason in _error_reasons(error_body)):
            return UploadStatus.QUOTA_EXCEEDED
        if status_code == 429:
            return UploadStatus.QUOTA_EXCEEDED
        if status_code in [401, 403]:
            return UploadStatus.AUTH_ERROR
        if status_code >= 500:
            return UploadStatus.NETWORK_ERROR
        return UploadStatus.FAILED


def _parse_error_body(content) -> Optional[Dict[str, Any]]:
    if not content:
        return None
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    try:
        parsed = json.loads(content)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def _error_reasons(error_body: Optional[Dict[str, Any]]) -> List[str]:
    if not error_body:
        return []
    error = error_body.get("error")
    if not isinstance(error, dict):
        return []
    return [item.get("reason") for item in error.get("errors", []) if isinstance(item, dict)]
