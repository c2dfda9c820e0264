"""
File system utilities for protokit.

This module provides the file operations the toolchain cache relies on:
- Zip archive extraction with directory traversal protection
- Permission-bit helpers for unpacked build scripts
- Tree listing and hashing helpers
"""

import hashlib
import stat
import zipfile
from pathlib import Path
from typing import Iterator, Union

from protokit.core.exceptions import ProtoKitError


# ============================================================================
# Error Handling
# ============================================================================


class FilesystemError(ProtoKitError):
    """Base exception for filesystem operations."""

    pass


class ArchiveExtractionError(FilesystemError):
    """Failed to extract an archive."""

    pass


class UnsupportedArchiveFormat(ArchiveExtractionError):
    """Archive format is not supported."""

    pass


class InsecureArchiveError(ArchiveExtractionError):
    """Archive contains insecure paths (directory traversal attempt)."""

    pass


# ============================================================================
# Path Utilities
# ============================================================================


def is_relative_to(path: Path, parent: Path) -> bool:
    """
    Check if path is relative to parent.

    Args:
        path: Path to check
        parent: Potential parent path

    Returns:
        True if path is under parent
    """
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


def walk_tree(root: Union[str, Path]) -> Iterator[Path]:
    """
    Yield every entry below root (files and directories), excluding root itself.

    Entries are yielded in sorted order so callers get a stable traversal.
    """
    root = Path(root)
    for entry in sorted(root.rglob("*")):
        yield entry


def make_executable(path: Union[str, Path]) -> None:
    """
    Add execute permission bits (user, group, other) to a file.

    Zip archives do not carry POSIX permissions, so scripts unpacked from
    them must be marked executable before they can be run.
    """
    path = Path(path)
    mode = path.stat().st_mode
    path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


# ============================================================================
# Archive Extraction
# ============================================================================


def _validate_archive_path(path: str, destination: Path) -> None:
    """
    Validate that an archive member path is safe to extract.

    Raises:
        InsecureArchiveError: If path attempts directory traversal
    """
    member_path = (destination / path).resolve()

    if not is_relative_to(member_path, destination.resolve()):
        raise InsecureArchiveError(
            f"Archive member '{path}' attempts directory traversal. "
            "This is a security risk and extraction has been blocked."
        )


def extract_archive(
    archive_path: Union[str, Path],
    destination: Union[str, Path],
) -> None:
    """
    Extract a .zip archive to a destination directory.

    Every member path is validated before anything is written.

    Args:
        archive_path: Path to the archive file
        destination: Directory to extract to

    Raises:
        UnsupportedArchiveFormat: If the archive is not a .zip
        ArchiveExtractionError: If extraction fails
        InsecureArchiveError: If archive contains malicious paths

    Example:
        >>> extract_archive('protobuf-2.6.1.zip', '/tmp/cache')
    """
    archive_path = Path(archive_path)
    destination = Path(destination)

    if not archive_path.exists():
        raise ArchiveExtractionError(f"Archive not found: {archive_path}")

    if not archive_path.name.lower().endswith(".zip"):
        raise UnsupportedArchiveFormat(
            f"Unsupported archive format: {archive_path.suffix}. Supported: .zip"
        )

    destination.mkdir(parents=True, exist_ok=True)

    try:
        with zipfile.ZipFile(archive_path, "r") as zf:
            members = zf.namelist()
            for member in members:
                _validate_archive_path(member, destination)
            zf.extractall(destination)
    except (OSError, zipfile.BadZipFile) as e:
        raise ArchiveExtractionError(f"Failed to extract {archive_path}: {e}") from e


# ============================================================================
# File Hashing
# ============================================================================


def compute_tree_hash(root: Union[str, Path], chunk_size: int = 8192) -> str:
    """
    Compute a SHA256 digest over every file below root.

    Both relative paths and contents contribute, so renames and edits
    change the digest while timestamps do not. Missing root hashes as empty.
    """
    root = Path(root)
    hasher = hashlib.sha256()

    if root.is_file():
        entries = [root]
    elif root.is_dir():
        entries = [p for p in walk_tree(root) if p.is_file()]
    else:
        entries = []

    for entry in entries:
        rel = entry.name if entry == root else entry.relative_to(root).as_posix()
        hasher.update(rel.encode("utf-8"))
        hasher.update(b"\0")
        with open(entry, "rb") as f:
            while chunk := f.read(chunk_size):
                hasher.update(chunk)
        hasher.update(b"\0")

    return hasher.hexdigest()


__all__ = [
    # Exceptions
    "FilesystemError",
    "ArchiveExtractionError",
    "UnsupportedArchiveFormat",
    "InsecureArchiveError",
    # Path utilities
    "is_relative_to",
    "walk_tree",
    "make_executable",
    # Archive extraction
    "extract_archive",
    # Hashing
    "compute_tree_hash",
]
