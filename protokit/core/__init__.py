"""
Core functionality for protokit.

This package contains the foundational modules that other components depend on.
"""

from .directory import (
    get_global_cache_dir,
    get_cache_root,
    verify_directory_writable,
    DirectoryError,
)

from .locking import (
    LockManager,
    LockTimeout,
    cache_lock,
)

from .process import (
    ProcessResult,
    ProcessRunner,
    SubprocessRunner,
)

from .staleness import (
    modtime,
    is_stale,
    StalenessChecker,
    TimestampStaleness,
    ContentHashStaleness,
    get_staleness_checker,
)

from .exceptions import (
    ProtoKitError,
    ConfigError,
    ToolchainError,
    DownloadError,
    ProvisioningError,
    CompilationError,
    DependencyError,
    UnresolvedImportError,
)

__all__ = [
    "get_global_cache_dir",
    "get_cache_root",
    "verify_directory_writable",
    "DirectoryError",
    "LockManager",
    "LockTimeout",
    "cache_lock",
    "ProcessResult",
    "ProcessRunner",
    "SubprocessRunner",
    "modtime",
    "is_stale",
    "StalenessChecker",
    "TimestampStaleness",
    "ContentHashStaleness",
    "get_staleness_checker",
    "ProtoKitError",
    "ConfigError",
    "ToolchainError",
    "DownloadError",
    "ProvisioningError",
    "CompilationError",
    "DependencyError",
    "UnresolvedImportError",
]
