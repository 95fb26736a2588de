"""
Upload Progress

Percentage, throughput and remaining-time arithmetic for uploads.

estimate_progress() is a pure function so it can be tested without
network or filesystem. ProgressTracker adds the only state an upload
needs: the start time and the last percentage that was reported.
"""

import math
import time
from dataclasses import dataclass
from typing import Callable, Optional

from youtube_uploader.constants import (
    ALMOST_DONE_THRESHOLD,
    BYTES_PER_MEGABYTE,
    ETA_CALCULATING,
    ETA_PROCESSING,
    STATUS_ALMOST_DONE,
    STATUS_PROCESSING,
    STATUS_UPLOADING,
)
from youtube_uploader.interfaces.uploader_interface import UploadProgress


@dataclass(frozen=True)
class ProgressEstimate:
    """Result of estimate_progress()"""

    percentage: int
    rate_mb_s: float
    eta_text: str


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def status_label(percentage: int) -> str:
    """
    Map a percentage to the label shown to the user.

    Args:
        percentage: Integer upload percentage

    Returns:
        "Uploading" below 95, "Almost done" from 95 to 99, "Processing" at 100
    """
    if percentage >= 100:
        return STATUS_PROCESSING
    if percentage >= ALMOST_DONE_THRESHOLD:
        return STATUS_ALMOST_DONE
    return STATUS_UPLOADING


def format_remaining(seconds: float) -> str:
    minutes = int(seconds // 60)
    rest = int(seconds % 60)
    return f"{minutes} min {rest} sec remaining"


def estimate_progress(
    bytes_transferred: int,
    total_bytes: int,
    elapsed_seconds: float,
) -> ProgressEstimate:
    """
    Estimate percentage, rate and remaining time of an upload.

    Uses an average-throughput model: bytes sent so far divided by the
    elapsed time, projected over the bytes still to send.

    Args:
        bytes_transferred: Cumulative bytes sent
        total_bytes: Size of the upload
        elapsed_seconds: Time since the upload started

    Returns:
        ProgressEstimate with integer percentage (rounded half up),
        rate in MB/s (two decimals) and ETA text

    Example:
        >>> estimate_progress(50, 100, 10.0).percentage
        50
    """
    if total_bytes > 0:
        ratio = bytes_transferred / total_bytes
    else:
        ratio = 1.0
    percentage = int(_round_half_up(ratio * 100))

    if elapsed_seconds > 0:
        bytes_per_second = bytes_transferred / elapsed_seconds
    else:
        bytes_per_second = 0.0

    if percentage >= 100:
        eta_text = ETA_PROCESSING
    elif bytes_per_second > 0:
        remaining_bytes = max(total_bytes - bytes_transferred, 0)
        eta_text = format_remaining(remaining_bytes / bytes_per_second)
    else:
        eta_text = ETA_CALCULATING

    rate_mb_s = _round_half_up(bytes_per_second / BYTES_PER_MEGABYTE, 2)

    return ProgressEstimate(
        percentage=percentage,
        rate_mb_s=rate_mb_s,
        eta_text=eta_text,
    )


class ProgressTracker:
    """
    Turns cumulative byte counts into de-duplicated progress snapshots.

    A snapshot is produced only when the integer percentage is strictly
    greater than the last one produced, so consumers never see the same
    percentage twice or a percentage going backwards.
    """

    def __init__(
        self,
        total_bytes: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.total_bytes = total_bytes
        self._clock = clock
        self._start_time = clock()
        self.last_progress = 0

    def update(self, bytes_transferred: int) -> Optional[UploadProgress]:
        """
        Record a progress tick.

        Args:
            bytes_transferred: Cumulative bytes sent

        Returns:
            UploadProgress if the percentage increased, otherwise None
        """
        elapsed = self._clock() - self._start_time
        estimate = estimate_progress(bytes_transferred, self.total_bytes, elapsed)

        if estimate.percentage <= self.last_progress:
            return None

        self.last_progress = estimate.percentage

        return UploadProgress(
            progress=estimate.percentage,
            bytes_read=bytes_transferred,
            bytes_total=self.total_bytes,
            status=status_label(estimate.percentage),
            time_remaining=estimate.eta_text,
            speed_mb_s=estimate.rate_mb_s,
        )
