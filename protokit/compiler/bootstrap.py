"""
Self-compile of protobuf's own descriptor schema.

When the project being built is protobuf's Java runtime itself, the runtime
needs classes generated from ``google/protobuf/descriptor.proto`` before the
rest of the project can compile. The descriptor is taken from the fetched
source tree and its Java output goes straight into that tree's Java sources.
"""

import logging
import shutil
from pathlib import Path
from typing import Optional

from protokit.compiler.context import CompileContext
from protokit.compiler.driver import CompilationDriver
from protokit.core.staleness import modtime
from protokit.toolchain.provisioner import ToolchainProvisioner

logger = logging.getLogger(__name__)

DESCRIPTOR = "google/protobuf/descriptor.proto"


def compile_descriptor(
    provisioner: ToolchainProvisioner,
    driver: CompilationDriver,
    context: Optional[CompileContext] = None,
) -> bool:
    """
    Generate Java sources for descriptor.proto into the fetched source tree.

    Returns:
        True if protoc ran
    """
    context = (context or CompileContext()).suppressed()
    entry = provisioner.fetch()

    src = entry.source_dir / "src" / DESCRIPTOR
    dest = Path(driver.config.proto_path) / DESCRIPTOR
    dest.parent.mkdir(parents=True, exist_ok=True)

    if modtime(src) > modtime(dest):
        logger.info(f"Copying {DESCRIPTOR} into {driver.config.proto_path}")
        shutil.copyfile(src, dest)

    return driver.compile([DESCRIPTOR], dest=entry.java_source_dir, context=context)


__all__ = ["DESCRIPTOR", "compile_descriptor"]
