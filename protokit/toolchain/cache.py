"""
Version-keyed toolchain cache layout.

Every path of a cache entry is a pure function of the protobuf version and
the cache root. Nothing here touches the filesystem; callers only check the
returned paths for existence.
"""

import re
from dataclasses import dataclass
from pathlib import Path

DEFAULT_VERSION = "2.6.1"

RELEASE_URL = (
    "https://github.com/google/protobuf/releases/download/"
    "v{version}/protobuf{suffix}-{version}.zip"
)

_MAJOR_RE = re.compile(r"^\s*(\d+)")


def major_version(version: str) -> int:
    """Leading numeric component of a version string (0 if there is none)."""
    match = _MAJOR_RE.match(version)
    return int(match.group(1)) if match else 0


def uses_java_archive(version: str) -> bool:
    """Releases from 3.0 on ship the Java runtime in a separate ``-java`` zip."""
    return major_version(version) >= 3


def download_url(version: str) -> str:
    """
    Release archive URL for a protobuf version.

    Example:
        >>> download_url("2.6.1")
        'https://github.com/google/protobuf/releases/download/v2.6.1/protobuf-2.6.1.zip'
        >>> download_url("3.0.0")
        'https://github.com/google/protobuf/releases/download/v3.0.0/protobuf-java-3.0.0.zip'
    """
    suffix = "-java" if uses_java_archive(version) else ""
    return RELEASE_URL.format(version=version, suffix=suffix)


@dataclass(frozen=True)
class CacheEntry:
    """Location of one protobuf release inside the cache root."""

    version: str
    cache_root: Path

    @property
    def archive_path(self) -> Path:
        return self.cache_root / f"protobuf-{self.version}.zip"

    @property
    def source_dir(self) -> Path:
        return self.cache_root / f"protobuf-{self.version}"

    @property
    def compiler_path(self) -> Path:
        """Where ``make`` leaves the protoc executable."""
        return self.source_dir / "src" / "protoc"

    @property
    def include_dir(self) -> Path:
        return self.compiler_path.parent

    @property
    def url(self) -> str:
        return download_url(self.version)

    @property
    def java_source_dir(self) -> Path:
        """Java runtime sources inside the unpacked tree."""
        core = self.source_dir / "java" / "core" / "src" / "main" / "java"
        if core.is_dir():
            return core
        return self.source_dir / "java" / "src" / "main" / "java"


__all__ = [
    "DEFAULT_VERSION",
    "RELEASE_URL",
    "CacheEntry",
    "download_url",
    "major_version",
    "uses_java_archive",
]
