"""
Directory structure management for protokit.

Directory Structure:
    Global home (~/.protokit/ or %USERPROFILE%\\.protokit\\, or $PROTOKIT_HOME):
        - cache/protobuf/                   : Version-keyed toolchain cache
          - protobuf-<version>.zip          : Downloaded release archive
          - protobuf-<version>/             : Unpacked (and built) source tree
          - lock/                           : Optional cache lock files
"""

import os
from pathlib import Path

from protokit.core.exceptions import ProtoKitError


class DirectoryError(ProtoKitError):
    """Base exception for directory-related errors."""

    pass


def get_global_cache_dir() -> Path:
    """
    Get the platform-specific protokit home directory path.

    Returns:
        Path: The protokit home directory path.
            - $PROTOKIT_HOME if set
            - Windows: %USERPROFILE%\\.protokit
            - Linux/macOS: ~/.protokit/

    Example:
        >>> cache_dir = get_global_cache_dir()
        >>> print(cache_dir)
        /home/user/.protokit  # on Linux
    """
    override = os.environ.get("PROTOKIT_HOME")
    if override:
        return Path(override)

    if os.name == "nt":  # Windows
        user_profile = os.environ.get("USERPROFILE")
        if not user_profile:
            raise DirectoryError(
                "USERPROFILE environment variable is not set. "
                "Cannot determine global cache directory."
            )
        return Path(user_profile) / ".protokit"
    else:  # Linux/macOS
        return Path.home() / ".protokit"


def get_cache_root() -> Path:
    """Get the directory holding downloaded and built protobuf releases."""
    return get_global_cache_dir() / "cache" / "protobuf"


def verify_directory_writable(path: Path) -> bool:
    """
    Verify that a directory exists and is writable.

    Args:
        path: Directory path to verify.

    Returns:
        bool: True if directory exists and is writable, False otherwise.
    """
    if not path.exists():
        return False

    if not path.is_dir():
        return False

    # Try to create a temporary file to test write permissions
    try:
        test_file = path / ".write_test"
        test_file.touch()
        test_file.unlink()
        return True
    except OSError:
        return False


__all__ = [
    "DirectoryError",
    "get_global_cache_dir",
    "get_cache_root",
    "verify_directory_writable",
]
