"""
Shared utilities for CLI commands.
"""

import logging
import sys
from pathlib import Path
from typing import Callable, Optional

from protokit.config.parser import ProjectConfig, load_config
from protokit.core.download import DownloadProgress

logger = logging.getLogger(__name__)


def load_project_config(args) -> ProjectConfig:
    """
    Load the project configuration selected by the global CLI options.

    Args:
        args: Parsed arguments with project_root and config

    Raises:
        ConfigError: If the configuration is invalid
    """
    project_root = Path(args.project_root).resolve()
    config_file: Optional[Path] = Path(args.config) if args.config else None
    logger.debug(f"Loading configuration for {project_root}")
    return load_config(project_root, config_file)


def print_error(message: str, details: Optional[str] = None):
    """
    Print error message to stderr in consistent format.

    Args:
        message: Main error message
        details: Optional additional details
    """
    print(f"ERROR: {message}", file=sys.stderr)
    if details:
        print(f"  {details}", file=sys.stderr)


def show_download_progress(progress: DownloadProgress):
    """
    Print a single updating progress line for the toolchain download.

    Args:
        progress: Latest download progress
    """
    print(f"\r  Downloading: {progress}", end="", flush=True)
    if progress.complete:
        print()


def progress_reporter(args) -> Optional[Callable[[DownloadProgress], None]]:
    """Download progress callback for the CLI, or None in quiet mode."""
    if getattr(args, "quiet", False):
        return None
    return show_download_progress
