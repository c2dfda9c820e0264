"""
Fetch command implementation.

Downloads and unpacks the configured protobuf release without building it.
"""

import logging

from protokit.cli.utils import load_project_config, progress_reporter
from protokit.toolchain.provisioner import ToolchainProvisioner

logger = logging.getLogger(__name__)


def run(args) -> int:
    """Run the fetch command."""
    config = load_project_config(args)
    entry = ToolchainProvisioner(
        config, progress_callback=progress_reporter(args)
    ).fetch()
    logger.info(f"protobuf {entry.version} sources available in {entry.source_dir}")
    return 0
