"""
The protobuf task: the public entry point tying provisioning, the optional
descriptor self-compile and the compilation driver together.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence

from protokit.compiler.bootstrap import compile_descriptor
from protokit.compiler.context import CompileContext
from protokit.compiler.dependencies import ResourceSet
from protokit.compiler.downstream import LanguageCompiler
from protokit.compiler.driver import CompilationDriver
from protokit.core.download import DownloadProgress
from protokit.core.process import ProcessRunner, SubprocessRunner
from protokit.toolchain.provisioner import ToolchainProvisioner

if TYPE_CHECKING:
    from protokit.config.parser import ProjectConfig

logger = logging.getLogger(__name__)

PROTO_SUFFIX = ".proto"


def is_proto_file(path: Path) -> bool:
    """A visible file ending in .proto."""
    name = Path(path).name
    return name.endswith(PROTO_SUFFIX) and not name.startswith(".")


def discover_proto_files(proto_path: Path) -> List[str]:
    """
    All .proto files below proto_path, as sorted relative POSIX paths.

    A missing proto_path yields no files.
    """
    proto_path = Path(proto_path)
    if not proto_path.is_dir():
        return []
    return sorted(
        p.relative_to(proto_path).as_posix()
        for p in proto_path.rglob("*")
        if p.is_file() and is_proto_file(p)
    )


class ProtobufTask:
    """
    Compile a project's .proto files.

    Example:
        >>> task = ProtobufTask(load_config(Path.cwd()))
        >>> task.run()                       # every .proto under proto-path
        >>> task.run(["addressbook.proto"])  # just one file
    """

    def __init__(
        self,
        config: "ProjectConfig",
        runner: Optional[ProcessRunner] = None,
        provisioner: Optional[ToolchainProvisioner] = None,
        downstream: Optional[LanguageCompiler] = None,
        resource_set: Optional[ResourceSet] = None,
        progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
    ):
        self.config = config
        self.runner = runner or SubprocessRunner()
        self.provisioner = provisioner or ToolchainProvisioner(
            config, self.runner, progress_callback=progress_callback
        )
        self.driver = CompilationDriver(
            config,
            self.provisioner,
            runner=self.runner,
            downstream=downstream,
            resource_set=resource_set,
        )

    def run(
        self,
        files: Optional[Sequence[str]] = None,
        context: Optional[CompileContext] = None,
    ) -> bool:
        """
        Provision protoc and compile ``files`` (default: all discovered).

        Returns:
            True if protoc ran for the requested files
        """
        context = context or CompileContext()
        if not context.compile_protobuf:
            logger.debug("Protobuf compilation suppressed for this context")
            return False

        files = list(files) if files else discover_proto_files(self.config.proto_path)
        if not files:
            logger.info(f"No .proto files found in {self.config.proto_path}")

        self.provisioner.ensure_compiler()

        if self.config.is_bootstrap:
            compile_descriptor(self.provisioner, self.driver, context)

        return self.driver.compile(files, context=context)

    def prep_hook(self, context: CompileContext) -> bool:
        """Downstream pre-compile hook; runs the task unless suppressed."""
        return self.run(context=context)


__all__ = ["ProtobufTask", "discover_proto_files", "is_proto_file"]
