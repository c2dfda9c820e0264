"""
Concurrent access control for the protokit toolchain cache.

The version-keyed cache is shared by every project on the machine. Without
coordination two builds populating the same version can race on the archive
download or on ``make``. This module provides an opt-in file lock scoped to
one cache entry, built on the ``filelock`` library (cross-process, released
automatically when the holder dies).

Usage:
    from protokit.core.locking import LockManager

    lock_manager = LockManager(cache_root / "lock")
    with lock_manager.cache_entry_lock("2.6.1", timeout=600):
        # Safely download and build protobuf 2.6.1
        pass
"""

import logging
from contextlib import contextmanager, nullcontext
from pathlib import Path
from typing import Optional

from filelock import FileLock, Timeout as LockTimeout

from protokit.core.directory import get_cache_root

logger = logging.getLogger(__name__)


class LockManager:
    """
    Manages locks for protokit cache entries.

    Attributes:
        lock_dir: Directory where lock files are stored
    """

    def __init__(self, lock_dir: Optional[Path] = None):
        """
        Initialize lock manager.

        Args:
            lock_dir: Directory for lock files (default: <cache root>/lock)
        """
        if lock_dir is None:
            lock_dir = get_cache_root() / "lock"

        self.lock_dir = Path(lock_dir)
        self.lock_dir.mkdir(parents=True, exist_ok=True)

    def lock_path(self, version: str) -> Path:
        """Lock file guarding the cache entry for ``version``."""
        safe_version = version.replace("/", "-").replace("\\", "-").replace(":", "-")
        return self.lock_dir / f"protobuf-{safe_version}.lock"

    @contextmanager
    def cache_entry_lock(self, version: str, timeout: float = 600):
        """
        Acquire the lock for one version-keyed cache entry.

        Args:
            version: Toolchain version whose cache entry is being populated
            timeout: Maximum wait time in seconds (default: 600 for long builds)

        Yields:
            None

        Raises:
            LockTimeout: If lock can't be acquired within timeout
        """
        lock_path = self.lock_path(version)
        lock = FileLock(lock_path, timeout=timeout)

        try:
            with lock:
                logger.debug(f"Acquired cache lock: {lock_path}")
                yield
                logger.debug(f"Released cache lock: {lock_path}")
        except LockTimeout as e:
            logger.error(
                f"Could not acquire cache lock for protobuf {version} after {timeout}s. "
                "Another process may be building this version."
            )
            raise LockTimeout(
                f"Could not acquire cache lock for protobuf {version} after {timeout}s. "
                "Another process may be building this version."
            ) from e


def cache_lock(
    lock_manager: Optional[LockManager], version: str, timeout: float = 600
):
    """
    Return a context manager guarding ``version``'s cache entry.

    When ``lock_manager`` is None locking is disabled and a no-op context is
    returned.
    """
    if lock_manager is None:
        return nullcontext()
    return lock_manager.cache_entry_lock(version, timeout=timeout)


__all__ = [
    "LockManager",
    "LockTimeout",
    "cache_lock",
]
