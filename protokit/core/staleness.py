"""
Incremental build decisions.

Staleness is decided by comparing an aggregate timestamp of an input tree
against an output tree. The aggregate of a directory is the newest
modification time over every entry below it (the directory itself excluded);
a plain file contributes its own modification time; a missing path or an
empty directory aggregates to 0.

Timestamp comparison is the default. A content-hash strategy can be
substituted where clock skew or timestamp-preserving copies make timestamps
unreliable; it keeps the same ``is_stale(input, output)`` contract.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

from protokit.core.exceptions import ConfigError
from protokit.core.filesystem import compute_tree_hash, walk_tree

logger = logging.getLogger(__name__)

DIGEST_FILENAME = ".protokit-digest"


def modtime(path: Union[str, Path]) -> float:
    """
    Aggregate modification time of a file or directory tree.

    Args:
        path: File or directory

    Returns:
        Newest mtime below a directory, the file's own mtime, or 0
    """
    path = Path(path)

    if path.is_dir():
        times = [entry.stat().st_mtime for entry in walk_tree(path)]
        return max(times) if times else 0
    if path.exists():
        return path.stat().st_mtime
    return 0


def is_stale(input_path: Union[str, Path], output_path: Union[str, Path]) -> bool:
    """True if anything under input_path is newer than everything under output_path."""
    return modtime(input_path) > modtime(output_path)


class StalenessChecker(ABC):
    """Strategy deciding whether outputs must be regenerated from inputs."""

    name: str = ""

    @abstractmethod
    def is_stale(self, input_path: Path, output_path: Path) -> bool:
        pass

    def record(self, input_path: Path, output_path: Path) -> None:
        """Remember that output_path is now fresh with respect to input_path."""
        pass


class TimestampStaleness(StalenessChecker):
    """Compare aggregate modification times."""

    name = "timestamp"

    def is_stale(self, input_path: Path, output_path: Path) -> bool:
        return is_stale(input_path, output_path)


class ContentHashStaleness(StalenessChecker):
    """
    Compare a digest of the input tree with the digest recorded in the output.

    The digest is written to ``<output>/.protokit-digest`` after a successful
    build. A missing digest file always means stale.
    """

    name = "content-hash"

    def is_stale(self, input_path: Path, output_path: Path) -> bool:
        digest_file = Path(output_path) / DIGEST_FILENAME
        if not digest_file.is_file():
            return True
        recorded = digest_file.read_text(encoding="utf-8").strip()
        return recorded != compute_tree_hash(input_path)

    def record(self, input_path: Path, output_path: Path) -> None:
        output_path = Path(output_path)
        output_path.mkdir(parents=True, exist_ok=True)
        digest = compute_tree_hash(input_path)
        (output_path / DIGEST_FILENAME).write_text(digest + "\n", encoding="utf-8")
        logger.debug(f"Recorded input digest {digest[:12]} in {output_path}")


_CHECKERS = {
    TimestampStaleness.name: TimestampStaleness,
    ContentHashStaleness.name: ContentHashStaleness,
}


def get_staleness_checker(name: str = "timestamp") -> StalenessChecker:
    """
    Look up a staleness strategy by its configuration name.

    Raises:
        ConfigError: If the name is unknown
    """
    try:
        return _CHECKERS[name]()
    except KeyError:
        raise ConfigError(
            f"Unknown staleness strategy: {name} (expected one of {sorted(_CHECKERS)})"
        )


__all__ = [
    "modtime",
    "is_stale",
    "StalenessChecker",
    "TimestampStaleness",
    "ContentHashStaleness",
    "get_staleness_checker",
    "DIGEST_FILENAME",
]
