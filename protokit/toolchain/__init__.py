"""
protoc toolchain management.

This package owns the version-keyed cache layout and the provisioner that
downloads and builds protoc on demand.
"""

from .cache import (
    DEFAULT_VERSION,
    CacheEntry,
    download_url,
    uses_java_archive,
)
from .provisioner import ToolchainProvisioner

__all__ = [
    "DEFAULT_VERSION",
    "CacheEntry",
    "download_url",
    "uses_java_archive",
    "ToolchainProvisioner",
]
