"""
Network download manager with progress tracking.

This module provides the downloading capabilities used to fetch toolchain
release archives:
- HTTP/HTTPS downloads with TLS verification
- Progress reporting (bytes, percentage, speed, ETA)
- Downloads land in a temporary ``.part`` file that is renamed into place,
  so an interrupted download never looks complete

A failed download is not retried.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import requests
from requests.exceptions import RequestException

from protokit.core.exceptions import DownloadError

logger = logging.getLogger(__name__)


@dataclass
class DownloadProgress:
    """Progress information for a download."""

    bytes_downloaded: int
    total_bytes: int
    percentage: float
    speed_bps: float  # bytes per second
    eta_seconds: float  # estimated time remaining

    @property
    def complete(self) -> bool:
        return self.total_bytes > 0 and self.bytes_downloaded >= self.total_bytes

    def __str__(self) -> str:
        """Format progress for display."""
        return format_progress(self)


def download_file(
    url: str,
    destination: Path,
    progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
    timeout: Optional[int] = 30,
) -> Path:
    """
    Download file from URL to destination.

    Args:
        url: URL to download from
        destination: Local path to save file
        progress_callback: Optional callback for progress updates
        timeout: Connect/read timeout in seconds (None waits forever)

    Returns:
        Path to downloaded file

    Raises:
        DownloadError: If download fails
        ValueError: If URL or destination is invalid

    Example:
        >>> from protokit.core.download import download_file
        >>> url = "https://example.com/protobuf-2.6.1.zip"
        >>> download_file(url, Path("cache/protobuf-2.6.1.zip"))
    """
    if not url:
        raise ValueError("URL cannot be empty")

    if not destination:
        raise ValueError("Destination path cannot be empty")

    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    partial = destination.with_name(destination.name + ".part")

    try:
        _download_with_progress(url, partial, progress_callback, timeout)
    except RequestException as e:
        partial.unlink(missing_ok=True)
        raise DownloadError(f"Download of {url} failed: {e}") from e

    partial.replace(destination)
    logger.info(f"Download complete: {destination}")
    return destination


def _download_with_progress(
    url: str,
    destination: Path,
    progress_callback: Optional[Callable[[DownloadProgress], None]],
    timeout: Optional[int],
) -> Path:
    """
    Perform download with streaming and progress updates.

    Raises:
        RequestException: If HTTP request fails
    """
    logger.debug(f"GET {url}")

    response = requests.get(url, stream=True, timeout=timeout, allow_redirects=True)
    response.raise_for_status()

    content_length = response.headers.get("content-length")
    total_size = int(content_length) if content_length else 0

    downloaded = 0
    start_time = time.time()
    last_progress_time = start_time

    with open(destination, "wb") as f:
        for chunk in response.iter_content(chunk_size=8192):
            if not chunk:
                continue
            f.write(chunk)
            downloaded += len(chunk)

            # Report progress (max once per 0.5 seconds to avoid spam)
            current_time = time.time()
            if progress_callback and (
                current_time - last_progress_time >= 0.5 or downloaded == total_size
            ):
                elapsed = current_time - start_time
                speed = downloaded / elapsed if elapsed > 0 else 0
                remaining = total_size - downloaded if total_size > 0 else 0
                eta = remaining / speed if speed > 0 else 0

                progress_callback(
                    DownloadProgress(
                        bytes_downloaded=downloaded,
                        total_bytes=total_size,
                        percentage=(downloaded / total_size * 100)
                        if total_size > 0
                        else 0,
                        speed_bps=speed,
                        eta_seconds=eta,
                    )
                )
                last_progress_time = current_time

    return destination


def format_progress(progress: DownloadProgress) -> str:
    """
    Format progress for display.

    Example:
        >>> progress = DownloadProgress(52428800, 104857600, 50.0, 1048576, 50)
        >>> print(format_progress(progress))
        50.0/100.0 MB (50.0%) at 1.0 MB/s ETA: 50s
    """
    mb_downloaded = progress.bytes_downloaded / 1024 / 1024
    mb_total = progress.total_bytes / 1024 / 1024
    speed_mbps = progress.speed_bps / 1024 / 1024

    if progress.total_bytes > 0:
        return (
            f"{mb_downloaded:.1f}/{mb_total:.1f} MB "
            f"({progress.percentage:.1f}%) "
            f"at {speed_mbps:.1f} MB/s "
            f"ETA: {progress.eta_seconds:.0f}s"
        )
    else:
        return f"{mb_downloaded:.1f} MB at {speed_mbps:.1f} MB/s"
