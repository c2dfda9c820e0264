"""
Transitive import resolution for .proto files.

protoc needs every imported file on its include path. Imports that live in the
project's proto root are used directly. Anything else (typically the google
well-known types) is looked up in a resource set and copied into a
materialized-dependency directory, whose own imports are then resolved the
same way.

A path already present in the proto root or in the destination is treated as
resolved and is not scanned again. That check is what terminates import
cycles. Imports found nowhere, or that would escape a root, are skipped
unless strict mode is on.
"""

import logging
import re
from collections import deque
from importlib import resources
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from protokit.core.exceptions import UnresolvedImportError

logger = logging.getLogger(__name__)

IMPORT_RE = re.compile(r'^import\s+(?:(?:public|weak)\s+)?"([^"]+)"')

BUNDLED_PACKAGE = "protokit.resources"
BUNDLED_ROOT = "proto"


def is_safe_import_path(relative_path: str) -> bool:
    """
    True if an import path stays inside whatever root it is joined to.

    Absolute paths, empty segments, ``.`` and ``..`` are rejected.
    """
    if not relative_path or "\\" in relative_path or ":" in relative_path:
        return False
    return all(part not in ("", ".", "..") for part in relative_path.split("/"))


def parse_imports(proto_file: Union[str, Path]) -> List[str]:
    """
    Import paths declared by a .proto file, in file order.

    Only lines starting with ``import`` are considered. A missing file has no
    imports.
    """
    proto_file = Path(proto_file)
    if not proto_file.is_file():
        return []

    imports = []
    with open(proto_file, "r", encoding="utf-8") as f:
        for line in f:
            match = IMPORT_RE.match(line)
            if match:
                imports.append(match.group(1))
    return imports


class ResourceSet:
    """
    Fallback copies of .proto files, looked up by relative import path.

    The bundled well-known types shipped with protokit are searched first,
    followed by any extra directories in the order given.
    """

    def __init__(self, extra_paths: Iterable[Path] = (), include_bundled: bool = True):
        self.extra_paths = [Path(p) for p in extra_paths]
        self.include_bundled = include_bundled

    def open(self, relative_path: str) -> Optional[bytes]:
        """Contents of ``relative_path``, or None when no source has it."""
        if not is_safe_import_path(relative_path):
            return None

        if self.include_bundled:
            data = self._read_bundled(relative_path)
            if data is not None:
                return data

        for root in self.extra_paths:
            candidate = root / relative_path
            if candidate.is_file():
                return candidate.read_bytes()

        return None

    @staticmethod
    def _read_bundled(relative_path: str) -> Optional[bytes]:
        resource = resources.files(BUNDLED_PACKAGE).joinpath(BUNDLED_ROOT)
        for part in relative_path.split("/"):
            resource = resource.joinpath(part)
        if not resource.is_file():
            return None
        return resource.read_bytes()


def materialize_dependencies(
    proto_path: Path,
    protos: Sequence[str],
    dest: Path,
    resource_set: Optional[ResourceSet] = None,
    strict: bool = False,
) -> List[str]:
    """
    Copy every missing transitive import of ``protos`` into ``dest``.

    Args:
        proto_path: Primary proto root the requested files live in
        protos: Requested files, relative to proto_path
        dest: Directory receiving materialized copies
        resource_set: Where missing imports are looked up (default: bundled)
        strict: Raise instead of skipping imports that cannot be found

    Returns:
        Import paths copied into dest, in the order they were materialized

    Raises:
        UnresolvedImportError: In strict mode, for an import found nowhere
    """
    proto_path = Path(proto_path)
    dest = Path(dest)
    if resource_set is None:
        resource_set = ResourceSet()

    queue = deque()
    for proto in protos:
        queue.extend(parse_imports(proto_path / proto))

    materialized = []
    while queue:
        dep = queue.popleft()
        if not is_safe_import_path(dep):
            if strict:
                raise UnresolvedImportError(dep)
            logger.warning(f"Skipping import outside the search roots: {dep}")
            continue

        target = dest / dep

        if (proto_path / dep).exists() or target.exists():
            continue

        data = resource_set.open(dep)
        if data is None:
            if strict:
                raise UnresolvedImportError(dep)
            logger.debug(f"Skipping unresolved import: {dep}")
            continue

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        logger.debug(f"Materialized {dep} into {dest}")
        materialized.append(dep)
        queue.extend(parse_imports(target))

    return materialized


__all__ = [
    "ResourceSet",
    "is_safe_import_path",
    "materialize_dependencies",
    "parse_imports",
]
