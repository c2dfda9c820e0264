"""
Project configuration for protokit.

Configuration is read from protokit.yaml in the project root.
"""

from .parser import (
    BOOTSTRAP_PROJECT_NAME,
    CONFIG_FILENAME,
    DEFAULT_PROTO_PATH,
    DEFAULT_TARGET_PATH,
    ProjectConfig,
    load_config,
    parse_config_data,
)
from protokit.core.exceptions import ConfigError

__all__ = [
    "BOOTSTRAP_PROJECT_NAME",
    "CONFIG_FILENAME",
    "DEFAULT_PROTO_PATH",
    "DEFAULT_TARGET_PATH",
    "ConfigError",
    "ProjectConfig",
    "load_config",
    "parse_config_data",
]
