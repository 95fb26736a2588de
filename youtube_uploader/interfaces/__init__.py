"""
Interfaces Package

Abstract interface, transient data types and errors.
"""

from youtube_uploader.interfaces.uploader_interface import (
    InvalidMetadataError,
    LocalFileNotFoundError,
    NoChannelFoundError,
    ProgressCallback,
    RemoteApiError,
    UploadCancelledError,
    UploaderError,
    UploaderInterface,
    UploadMetadata,
    UploadProgress,
    UploadQuota,
)

__all__ = [
    "InvalidMetadataError",
    "LocalFileNotFoundError",
    "NoChannelFoundError",
    "ProgressCallback",
    "RemoteApiError",
    "UploadCancelledError",
    "UploaderError",
    "UploaderInterface",
    "UploadMetadata",
    "UploadProgress",
    "UploadQuota",
]
