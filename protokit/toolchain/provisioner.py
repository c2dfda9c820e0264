"""
Toolchain provisioning.

Ensures a usable ``protoc`` exists before anything is compiled. A compiler
configured by the user is trusted as-is. Otherwise the release archive for the
configured version is downloaded into the shared cache, unpacked, configured
and built with ``make``. Every step is skipped when its product is already on
disk, so provisioning is safe to call on every run.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional

from protokit.core.directory import (
    DirectoryError,
    get_cache_root,
    verify_directory_writable,
)
from protokit.core.download import DownloadProgress, download_file
from protokit.core.exceptions import ProvisioningError
from protokit.core.filesystem import extract_archive, make_executable
from protokit.core.locking import LockManager, cache_lock
from protokit.core.process import ProcessRunner, SubprocessRunner
from protokit.toolchain.cache import CacheEntry

if TYPE_CHECKING:
    from protokit.config.parser import ProjectConfig

logger = logging.getLogger(__name__)

# Scripts that lose their execute bit when unpacked from a zip
BUILD_SCRIPTS = ("configure", "install-sh")


class ToolchainProvisioner:
    """
    Locates or builds the protoc compiler for a project.

    Example:
        >>> provisioner = ToolchainProvisioner(config)
        >>> protoc = provisioner.ensure_compiler()
    """

    def __init__(
        self,
        config: "ProjectConfig",
        runner: Optional[ProcessRunner] = None,
        cache_root: Optional[Path] = None,
        lock_manager: Optional[LockManager] = None,
        progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
    ):
        """
        Initialize provisioner.

        Args:
            config: Project configuration
            runner: Process capability for configure/make (default: subprocess)
            cache_root: Cache root (default: config.cache_dir or global cache)
            lock_manager: Lock manager used when config.lock_cache is set
            progress_callback: Optional download progress callback
        """
        self.config = config
        self.runner = runner or SubprocessRunner()
        self.cache_root = Path(cache_root or config.cache_dir or get_cache_root())
        self.entry = CacheEntry(config.protobuf_version, self.cache_root)
        self.progress_callback = progress_callback

        if config.lock_cache and lock_manager is None:
            lock_manager = LockManager(self.cache_root / "lock")
        self.lock_manager = lock_manager if config.lock_cache else None

    def compiler_path(self) -> Path:
        """Configured protoc, or where the cached build puts it."""
        if self.config.protoc is not None:
            return Path(self.config.protoc)
        return self.entry.compiler_path

    def include_dir(self) -> Path:
        """Toolchain include root passed to protoc with -I."""
        return self.compiler_path().parent

    def ensure_compiler(self) -> Path:
        """
        Make sure a compiler executable exists and return its path.

        Raises:
            ProvisioningError: If configure or make exits non-zero
            DownloadError: If the archive cannot be downloaded
        """
        if self.config.protoc is not None:
            return Path(self.config.protoc)

        protoc = self.entry.compiler_path
        if protoc.exists():
            logger.debug(f"Using cached protoc: {protoc}")
            return protoc

        with cache_lock(self.lock_manager, self.entry.version):
            # Another process may have finished the build while we waited
            if protoc.exists():
                return protoc
            self._fetch()
            self._build()

        return protoc

    def fetch(self) -> CacheEntry:
        """
        Download and unpack the protobuf sources without building them.

        Returns:
            The cache entry for the configured version
        """
        with cache_lock(self.lock_manager, self.entry.version):
            self._fetch()
        return self.entry

    def _fetch(self) -> None:
        entry = self.entry
        self.cache_root.mkdir(parents=True, exist_ok=True)
        if not verify_directory_writable(self.cache_root):
            raise DirectoryError(f"Cache directory is not writable: {self.cache_root}")

        if not entry.archive_path.exists():
            logger.info(f"Downloading {entry.archive_path.name} to {entry.archive_path}")
            download_file(
                entry.url,
                entry.archive_path,
                progress_callback=self.progress_callback,
                timeout=None,
            )

        if not entry.source_dir.exists():
            logger.info(f"Unzipping {entry.archive_path} to {entry.source_dir}")
            extract_archive(entry.archive_path, self.cache_root)

    def _build(self) -> None:
        source_dir = self.entry.source_dir

        for script in BUILD_SCRIPTS:
            script_path = source_dir / script
            if script_path.exists():
                make_executable(script_path)

        logger.info("Configuring protoc")
        self._run_step("configure", ["./configure"], source_dir)

        logger.info("Running 'make'")
        self._run_step("make", ["make"], source_dir)

    def _run_step(self, step: str, args, cwd: Path) -> None:
        result = self.runner.run(args, cwd=cwd, stream_output=True)
        if result.returncode != 0:
            logger.error(f"{step} failed with exit code {result.returncode}")
            raise ProvisioningError(step, result.returncode, result.stderr)


__all__ = ["ToolchainProvisioner", "BUILD_SCRIPTS"]
