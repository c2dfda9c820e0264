"""
Compile command implementation.

Provisions protoc and compiles the requested (or all discovered) .proto files.
"""

import logging

from protokit.cli.utils import load_project_config, progress_reporter
from protokit.compiler.task import ProtobufTask

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the compile command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    config = load_project_config(args)
    if getattr(args, "strict_imports", None):
        config.strict_imports = True

    logger.debug(f"Proto path: {config.proto_path}")
    logger.debug(f"Target path: {config.target_path}")

    task = ProtobufTask(config, progress_callback=progress_reporter(args))
    if task.run(args.files or None):
        logger.info(f"Generated sources written to {task.driver.layout().generated}")
    else:
        logger.info("Generated sources are up to date")
    return 0
