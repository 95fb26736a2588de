"""
Upload Observers

Injectable side channel for diagnostics.

The uploader reports what it does to an observer instead of logging
inline, so request building and API calls stay free of logging
concerns. LoggingObserver is the default; tests can pass a recorder.
"""

import logging
from typing import Any, Dict, Optional

from youtube_uploader.interfaces.uploader_interface import (
    RemoteApiError,
    UploadProgress,
)


class UploadObserver:
    """
    Base observer. Every hook is a no-op.

    Subclass and override only the hooks you need.
    """

    def on_request(self, operation: str, details: Dict[str, Any]) -> None:
        """Called before a request is sent."""

    def on_progress(self, progress: UploadProgress) -> None:
        """Called for each emitted upload progress snapshot."""

    def on_success(self, operation: str, result: Any) -> None:
        """Called with the platform's response."""

    def on_error(self, operation: str, error: Exception) -> None:
        """Called before an error is re-raised to the caller."""


class LoggingObserver(UploadObserver):
    """Writes operations to a standard library logger"""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def on_request(self, operation: str, details: Dict[str, Any]) -> None:
        self.logger.info(f"{operation}: starting {details}")

    def on_progress(self, progress: UploadProgress) -> None:
        self.logger.debug(
            f"Upload progress: {progress.progress}% "
            f"({progress.bytes_read}/{progress.bytes_total} bytes, "
            f"{progress.speed}, {progress.time_remaining})",
        )

    def on_success(self, operation: str, result: Any) -> None:
        if isinstance(result, list):
            self.logger.info(f"✅ {operation}: {len(result)} items loaded")
        else:
            self.logger.info(f"✅ {operation}: {result}")

    def on_error(self, operation: str, error: Exception) -> None:
        self.logger.error(f"❌ {operation} failed: {error}")
        if isinstance(error, RemoteApiError) and error.error_body:
            self.logger.error(f"API error response: {error.error_body}")
