"""
Implementations Package

Concrete uploader implementations.
"""

from youtube_uploader.implementations.mock_uploader import MockUploader
from youtube_uploader.implementations.youtube_uploader import YouTubeUploader

__all__ = [
    "MockUploader",
    "YouTubeUploader",
]
