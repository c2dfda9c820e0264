"""
Unit tests for download module.

Tests download functionality with mocked network requests.
"""

import pytest
import responses

from protokit.core.download import (
    DownloadProgress,
    download_file,
    format_progress,
)
from protokit.core.exceptions import DownloadError

URL = "https://github.com/google/protobuf/releases/download/v2.6.1/protobuf-2.6.1.zip"


class TestDownloadFile:
    """Test download_file function."""

    @responses.activate
    def test_successful_download(self, tmp_path):
        """Test the body lands at the destination."""
        responses.add(responses.GET, URL, body=b"zip-bytes", status=200)
        dest = tmp_path / "cache" / "protobuf-2.6.1.zip"

        result = download_file(URL, dest)

        assert result == dest
        assert dest.read_bytes() == b"zip-bytes"
        assert not (tmp_path / "cache" / "protobuf-2.6.1.zip.part").exists()

    @responses.activate
    def test_http_error_leaves_nothing_behind(self, tmp_path):
        """Test a failed download never looks complete."""
        responses.add(responses.GET, URL, status=404)
        dest = tmp_path / "protobuf-2.6.1.zip"

        with pytest.raises(DownloadError, match="Download of"):
            download_file(URL, dest)

        assert not dest.exists()
        assert not (tmp_path / "protobuf-2.6.1.zip.part").exists()

    @responses.activate
    def test_no_retry(self, tmp_path):
        """Test a failed download is attempted exactly once."""
        responses.add(responses.GET, URL, status=500)

        with pytest.raises(DownloadError):
            download_file(URL, tmp_path / "a.zip")

        assert len(responses.calls) == 1

    @responses.activate
    def test_progress_callback(self, tmp_path):
        """Test progress is reported."""
        body = b"x" * 20000
        responses.add(
            responses.GET,
            URL,
            body=body,
            status=200,
            headers={"content-length": str(len(body))},
        )
        updates = []

        download_file(URL, tmp_path / "a.zip", progress_callback=updates.append)

        assert updates
        assert updates[-1].bytes_downloaded == len(body)
        assert updates[-1].complete

    def test_empty_url(self, tmp_path):
        """Test empty URL is rejected."""
        with pytest.raises(ValueError, match="URL cannot be empty"):
            download_file("", tmp_path / "a.zip")


class TestFormatProgress:
    """Test format_progress function."""

    def test_format_with_known_size(self):
        progress = DownloadProgress(
            bytes_downloaded=10485760,  # 10 MB
            total_bytes=104857600,  # 100 MB
            percentage=10.0,
            speed_bps=2097152,  # 2 MB/s
            eta_seconds=45,
        )

        result = format_progress(progress)

        assert "10.0/100.0 MB" in result
        assert "(10.0%)" in result
        assert "2.0 MB/s" in result
        assert "ETA: 45s" in result

    def test_format_with_unknown_size(self):
        progress = DownloadProgress(
            bytes_downloaded=10485760,
            total_bytes=0,
            percentage=0.0,
            speed_bps=1048576,
            eta_seconds=0,
        )

        assert format_progress(progress) == "10.0 MB at 1.0 MB/s"
        assert not progress.complete

    def test_str_uses_format(self):
        progress = DownloadProgress(52428800, 104857600, 50.0, 1048576, 50)
        assert str(progress) == format_progress(progress)
