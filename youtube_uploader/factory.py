"""
Upload Factory

Factory pattern for creating uploader implementations.
Automatically configures from environment variables (see settings.py).
"""

import logging
from typing import Literal, Optional

from youtube_uploader import settings
from youtube_uploader.auth.oauth_manager import OAuthManager
from youtube_uploader.implementations.mock_uploader import MockUploader
from youtube_uploader.implementations.youtube_uploader import YouTubeUploader
from youtube_uploader.interfaces.uploader_interface import UploaderInterface
from youtube_uploader.observers import UploadObserver

# Type alias
UploaderMode = Literal["auto", "youtube", "mock"]


class UploaderFactory:
    """
    Factory for creating uploader implementations.

    Reads configuration from environment variables:
    - YOUTUBE_CLIENT_SECRET_PATH: Path to client_secret.json
    - YOUTUBE_TOKEN_PATH: Path to token.json
    - YOUTUBE_UPLOADER_MODE: Default mode ("youtube" unless set)

    Usage:
        # Real uploader; raises if credentials are missing
        uploader = UploaderFactory.create_uploader()

        # Real if credentials work, else mock
        uploader = UploaderFactory.create_uploader(mode="auto")

        # Force mock for testing
        uploader = UploaderFactory.create_uploader(mode="mock")
    """

    _logger = logging.getLogger(__name__)

    @classmethod
    def create_uploader(
        cls,
        mode: Optional[UploaderMode] = None,
        observer: Optional[UploadObserver] = None,
    ) -> UploaderInterface:
        """
        Create an uploader instance.

        Args:
            mode: "auto" (real if credentials work, else mock),
                  "youtube" (force real), "mock" (force in-memory).
                  None reads YOUTUBE_UPLOADER_MODE.
            observer: Observer passed to the real uploader

        Returns:
            UploaderInterface implementation

        Raises:
            RuntimeError: If mode="youtube" but credentials not available
            ValueError: If mode is unknown
        """
        mode = mode or settings.YOUTUBE_UPLOADER_MODE

        if mode == "mock":
            cls._logger.info("Creating Mock Uploader (forced)")
            return MockUploader()

        if mode == "youtube":
            try:
                uploader = cls._create_youtube_uploader(observer)
                cls._logger.info("Creating YouTube Uploader (forced)")
                return uploader
            except Exception as e:
                raise RuntimeError(
                    f"YouTube uploader requested but not available: {e}"
                ) from e

        if mode != "auto":
            raise ValueError(f"Unknown uploader mode: {mode!r}")

        try:
            uploader = cls._create_youtube_uploader(observer)
            cls._logger.info("Creating YouTube Uploader (auto-detected)")
            return uploader
        except Exception as e:
            cls._logger.warning(
                f"YouTube uploader not available ({e}), using Mock Uploader"
            )
            return MockUploader()

    @classmethod
    def _create_youtube_uploader(
        cls,
        observer: Optional[UploadObserver] = None,
    ) -> YouTubeUploader:
        """
        Create YouTube uploader from environment configuration.

        Raises:
            FileNotFoundError / RuntimeError: If OAuth initialization fails
        """
        oauth_manager = OAuthManager(
            client_secret_path=settings.YOUTUBE_CLIENT_SECRET_PATH,
            token_path=settings.YOUTUBE_TOKEN_PATH,
        )

        return YouTubeUploader(oauth_manager=oauth_manager, observer=observer)


# Convenience function for quick creation
def create_uploader(
    force_mock: bool = False,
    observer: Optional[UploadObserver] = None,
) -> UploaderInterface:
    """
    Quick uploader creation with simple mock override.

    Without force_mock the mode comes from YOUTUBE_UPLOADER_MODE, so
    missing credentials raise instead of silently mocking.

    Example:
        # Normal usage
        uploader = create_uploader()

        # Testing
        uploader = create_uploader(force_mock=True)
    """
    mode = "mock" if force_mock else None
    return UploaderFactory.create_uploader(mode=mode, observer=observer)
