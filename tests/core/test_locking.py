"""
Unit tests for the locking module.

Tests cover:
- Lock acquisition and release
- Timeout behavior
- Disabled locking
"""

from unittest.mock import patch

import pytest
from filelock import FileLock

from protokit.core.locking import LockManager, LockTimeout, cache_lock


class TestLockManager:
    """Tests for LockManager class."""

    def test_init_default_lock_dir(self, tmp_path):
        """Test initialization with default lock directory."""
        with patch("protokit.core.locking.get_cache_root", return_value=tmp_path):
            manager = LockManager()

        assert manager.lock_dir == tmp_path / "lock"
        assert (tmp_path / "lock").is_dir()

    def test_init_custom_lock_dir(self, tmp_path):
        """Test initialization with custom lock directory."""
        custom_dir = tmp_path / "custom_locks"
        manager = LockManager(lock_dir=custom_dir)

        assert manager.lock_dir == custom_dir
        assert custom_dir.exists()

    def test_lock_path_is_version_keyed(self, tmp_path):
        manager = LockManager(lock_dir=tmp_path)

        assert manager.lock_path("2.6.1") == tmp_path / "protobuf-2.6.1.lock"
        assert manager.lock_path("3.0.0") != manager.lock_path("2.6.1")

    def test_lock_path_sanitizes_separators(self, tmp_path):
        manager = LockManager(lock_dir=tmp_path)
        assert manager.lock_path("a/b:c").name == "protobuf-a-b-c.lock"

    def test_acquire_and_release(self, tmp_path):
        """Test the lock is held inside the block and free afterwards."""
        manager = LockManager(lock_dir=tmp_path)
        lock_file = manager.lock_path("2.6.1")

        with manager.cache_entry_lock("2.6.1", timeout=5):
            assert lock_file.exists()
            with pytest.raises(LockTimeout):
                FileLock(lock_file, timeout=0.1).acquire()

        other = FileLock(lock_file, timeout=0.1)
        other.acquire()
        other.release()

    def test_timeout_when_held_elsewhere(self, tmp_path):
        """Test waiting on a held lock gives up with a clear message."""
        manager = LockManager(lock_dir=tmp_path)
        holder = FileLock(manager.lock_path("2.6.1"))
        holder.acquire()
        try:
            with pytest.raises(LockTimeout, match="protobuf 2.6.1"):
                with manager.cache_entry_lock("2.6.1", timeout=0.1):
                    pass
        finally:
            holder.release()

    def test_released_after_exception(self, tmp_path):
        """Test an error inside the block still releases the lock."""
        manager = LockManager(lock_dir=tmp_path)

        with pytest.raises(RuntimeError):
            with manager.cache_entry_lock("2.6.1", timeout=5):
                raise RuntimeError("build failed")

        with manager.cache_entry_lock("2.6.1", timeout=0.1):
            pass

    def test_different_versions_do_not_block(self, tmp_path):
        manager = LockManager(lock_dir=tmp_path)

        with manager.cache_entry_lock("2.6.1", timeout=5):
            with manager.cache_entry_lock("3.0.0", timeout=0.1):
                pass


class TestCacheLock:
    """Tests for cache_lock helper."""

    def test_disabled_without_manager(self, tmp_path):
        with cache_lock(None, "2.6.1"):
            pass
        assert list(tmp_path.iterdir()) == []

    def test_uses_manager(self, tmp_path):
        manager = LockManager(lock_dir=tmp_path)
        with cache_lock(manager, "2.6.1", timeout=5):
            assert manager.lock_path("2.6.1").exists()
