"""
Cancellation Token

Explicit cancellation for in-flight uploads.

The caller owns the token and passes it into upload_video().
The uploader checks it before sending each chunk, so cancelling
stops the upload at the next chunk boundary.

Usage:
    token = CancellationToken()
    executor.submit(uploader.upload_video, path, metadata, None, token)
    ...
    token.cancel()
"""

import threading

from youtube_uploader.interfaces.uploader_interface import UploadCancelledError


class CancellationToken:
    """Thread-safe one-way cancellation flag"""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation. Idempotent."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """
        Raises:
            UploadCancelledError: If cancel() has been called
        """
        if self._event.is_set():
            raise UploadCancelledError()
