"""YAML configuration parser for protokit.

This module provides parsing and validation for protokit.yaml project files.

Example protokit.yaml:

    name: my-service
    protobuf-version: "2.6.1"    # quote it: 2.10 would read as 2.1
    proto-path: resources/proto
    target-path: target
    strict-imports: false
    lock-cache: true
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from protokit.core.exceptions import ConfigError
from protokit.toolchain.cache import DEFAULT_VERSION

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "protokit.yaml"
DEFAULT_PROTO_PATH = "resources/proto"
DEFAULT_TARGET_PATH = "target"
BOOTSTRAP_PROJECT_NAME = "protobuf"

_KNOWN_KEYS = {
    "name",
    "protobuf-version",
    "protoc",
    "proto-path",
    "target-path",
    "output-language",
    "java-source-paths",
    "javac-options",
    "resource-paths",
    "strict-imports",
    "lock-cache",
    "staleness",
    "cache-dir",
}


@dataclass
class ProjectConfig:
    """Resolved project configuration. All paths are absolute."""

    project_root: Path
    name: str
    protobuf_version: str = DEFAULT_VERSION
    protoc: Optional[Path] = None
    proto_path: Path = None
    target_path: Path = None
    output_language: str = "java"
    java_source_paths: List[str] = field(default_factory=list)
    javac_options: List[str] = field(default_factory=list)
    resource_paths: List[Path] = field(default_factory=list)
    strict_imports: bool = False
    lock_cache: bool = False
    staleness: str = "timestamp"
    cache_dir: Optional[Path] = None

    def __post_init__(self):
        self.project_root = Path(self.project_root).resolve()
        if self.proto_path is None:
            self.proto_path = self.project_root / DEFAULT_PROTO_PATH
        if self.target_path is None:
            self.target_path = self.project_root / DEFAULT_TARGET_PATH

    @property
    def is_bootstrap(self) -> bool:
        """True when building protobuf's own Java runtime."""
        return self.name == BOOTSTRAP_PROJECT_NAME


def load_config(
    project_root: Path, config_file: Optional[Path] = None
) -> ProjectConfig:
    """
    Load project configuration.

    Args:
        project_root: Project root directory; relative paths resolve against it
        config_file: Explicit config file (default: <project_root>/protokit.yaml)

    Returns:
        Parsed and validated configuration. A missing default config file
        yields an all-defaults configuration.

    Raises:
        ConfigError: If configuration is invalid or an explicit file is missing
    """
    project_root = Path(project_root).resolve()

    if config_file is None:
        config_file = project_root / CONFIG_FILENAME
        if not config_file.exists():
            logger.debug(f"No {CONFIG_FILENAME} in {project_root}, using defaults")
            return parse_config_data({}, project_root)
    elif not Path(config_file).exists():
        raise ConfigError(f"Configuration file not found: {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax in {config_file}: {e}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"{config_file} must contain a mapping at top level")

    return parse_config_data(data, project_root)


def parse_config_data(data: Dict[str, Any], project_root: Path) -> ProjectConfig:
    """Validate a raw configuration mapping and build a ProjectConfig."""
    project_root = Path(project_root).resolve()

    for key in data:
        if key not in _KNOWN_KEYS:
            logger.warning(f"Ignoring unknown configuration key: {key}")

    def path_value(key: str) -> Optional[Path]:
        value = data.get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise ConfigError(f"{key} must be a path string")
        return (project_root / value).resolve()

    def list_value(key: str) -> List[str]:
        value = data.get(key, [])
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigError(f"{key} must be a list of strings")
        return list(value)

    def bool_value(key: str) -> bool:
        value = data.get(key, False)
        if not isinstance(value, bool):
            raise ConfigError(f"{key} must be true or false")
        return value

    version = data.get("protobuf-version", DEFAULT_VERSION)
    if isinstance(version, float):
        # YAML reads 2.10 as the float 2.1
        raise ConfigError(
            f"protobuf-version must be quoted; YAML read it as the number {version}"
        )
    if not isinstance(version, (str, int)) or isinstance(version, bool):
        raise ConfigError("protobuf-version must be a version string")

    name = data.get("name", project_root.name)
    if not isinstance(name, str):
        raise ConfigError("name must be a string")

    staleness = data.get("staleness", "timestamp")
    if staleness not in ("timestamp", "content-hash"):
        raise ConfigError(
            f"Invalid staleness: {staleness} (expected 'timestamp' or 'content-hash')"
        )

    language = data.get("output-language", "java")
    if not isinstance(language, str) or not language:
        raise ConfigError("output-language must be a non-empty string")

    return ProjectConfig(
        project_root=project_root,
        name=name,
        protobuf_version=str(version),
        protoc=path_value("protoc"),
        proto_path=path_value("proto-path"),
        target_path=path_value("target-path"),
        output_language=language,
        java_source_paths=list_value("java-source-paths"),
        javac_options=list_value("javac-options"),
        resource_paths=[(project_root / p).resolve() for p in list_value("resource-paths")],
        strict_imports=bool_value("strict-imports"),
        lock_cache=bool_value("lock-cache"),
        staleness=staleness,
        cache_dir=path_value("cache-dir"),
    )
