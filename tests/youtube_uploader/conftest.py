"""
Upload Test Configuration and Fixtures

Shared fixtures for the youtube_uploader tests.
No test talks to the real YouTube API: the facade receives a MagicMock
service resource and a fake clock.

To use pytest:
    pip install -e .[test]
    pytest tests/youtube_uploader/
"""

import os
import tempfile
from unittest.mock import MagicMock

import pytest

from youtube_uploader.implementations.mock_uploader import MockUploader
from youtube_uploader.implementations.youtube_uploader import YouTubeUploader
from youtube_uploader.observers import UploadObserver

VIDEO_SIZE = 2 * 1024 * 1024  # 2 MB


class FakeClock:
    """Monotonic clock that advances by a fixed step on every call"""

    def __init__(self, step: float = 1.0):
        self.now = 0.0
        self.step = step

    def __call__(self) -> float:
        current = self.now
        self.now += self.step
        return current


class RecordingObserver(UploadObserver):
    """Keeps every observer event for assertions"""

    def __init__(self):
        self.events = []

    def on_request(self, operation, details):
        self.events.append(("request", operation, details))

    def on_progress(self, progress):
        self.events.append(("progress", "upload_video", progress))

    def on_success(self, operation, result):
        self.events.append(("success", operation, result))

    def on_error(self, operation, error):
        self.events.append(("error", operation, error))

    def kinds(self):
        return [event[0] for event in self.events]


# =============================================================================
# FILE FIXTURES
# =============================================================================


def _make_temp_file(suffix: str, size: int) -> str:
    with tempfile.NamedTemporaryFile(suffix=suffix, delete=False, mode="wb") as f:
        f.write(b"0" * size)
        return f.name


@pytest.fixture
def temp_video_file():
    """Create a temporary 2 MB video file"""
    temp_path = _make_temp_file(".mp4", VIDEO_SIZE)

    yield temp_path

    if os.path.exists(temp_path):
        os.unlink(temp_path)


@pytest.fixture
def temp_thumbnail_file():
    """Create a temporary thumbnail image"""
    temp_path = _make_temp_file(".jpg", 1024)

    yield temp_path

    if os.path.exists(temp_path):
        os.unlink(temp_path)


# =============================================================================
# UPLOADER FIXTURES
# =============================================================================


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def recording_observer():
    return RecordingObserver()


@pytest.fixture
def youtube_service():
    """
    MagicMock standing in for googleapiclient's youtube resource.

    Usage:
        youtube_service.channels().list().execute.return_value = {...}
    """
    return MagicMock()


@pytest.fixture
def uploader(youtube_service, recording_observer, fake_clock):
    """YouTubeUploader wired to the mocked service"""
    return YouTubeUploader(
        service=youtube_service,
        observer=recording_observer,
        default_language="de",
        default_region="DE",
        clock=fake_clock,
    )


@pytest.fixture
def mock_uploader():
    """Fast in-memory uploader with one playlist"""
    return MockUploader(
        playlists=[{"id": "PL1", "snippet": {"title": "Talks"}}],
    )
