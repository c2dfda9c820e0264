"""
protoc compilation driver.

Runs protoc once per requested .proto file and then hands the generated
sources to the downstream language compiler. Nothing happens when the
generated sources, and the compiled classes where the downstream step
produces any, are newer than the proto root.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Sequence

from protokit.compiler.context import CompileContext
from protokit.compiler.dependencies import ResourceSet, materialize_dependencies
from protokit.compiler.downstream import LanguageCompiler, get_language_compiler
from protokit.core.exceptions import CompilationError
from protokit.core.process import ProcessRunner, SubprocessRunner
from protokit.core.staleness import StalenessChecker, get_staleness_checker

if TYPE_CHECKING:
    from protokit.config.parser import ProjectConfig
    from protokit.toolchain.provisioner import ToolchainProvisioner

logger = logging.getLogger(__name__)

LINT_OPTIONS = ["-Xlint:none"]


@dataclass(frozen=True)
class TargetLayout:
    """Output directories of one compile run."""

    root: Path
    classes: Path
    proto: Path
    generated: Path

    @classmethod
    def for_target(cls, target_path: Path, generated: Optional[Path] = None) -> "TargetLayout":
        target_path = Path(target_path)
        return cls(
            root=target_path,
            classes=target_path / "classes",
            proto=target_path / "proto",
            generated=Path(generated) if generated else target_path / "protosrc",
        )

    def create(self) -> None:
        for directory in (self.root, self.classes, self.proto, self.generated):
            directory.mkdir(parents=True, exist_ok=True)


class CompilationDriver:
    """
    Compiles .proto files with protoc.

    Example:
        >>> driver = CompilationDriver(config, provisioner)
        >>> driver.compile(["addressbook.proto"])
        True
    """

    def __init__(
        self,
        config: "ProjectConfig",
        provisioner: "ToolchainProvisioner",
        runner: Optional[ProcessRunner] = None,
        downstream: Optional[LanguageCompiler] = None,
        resource_set: Optional[ResourceSet] = None,
        staleness: Optional[StalenessChecker] = None,
    ):
        self.config = config
        self.provisioner = provisioner
        self.runner = runner or SubprocessRunner()
        self.downstream = downstream or get_language_compiler(
            config.output_language, self.runner
        )
        self.resource_set = resource_set or ResourceSet(config.resource_paths)
        self.staleness = staleness or get_staleness_checker(config.staleness)

    def layout(self, dest: Optional[Path] = None) -> TargetLayout:
        return TargetLayout.for_target(self.config.target_path, dest)

    def output_dirs(self, layout: TargetLayout) -> List[Path]:
        """Directories whose freshness decides whether protoc must run."""
        if self.downstream.produces_artifacts:
            return [layout.generated, layout.classes]
        return [layout.generated]

    def needs_compile(self, layout: TargetLayout) -> bool:
        proto_path = self.config.proto_path
        return any(
            self.staleness.is_stale(proto_path, out) for out in self.output_dirs(layout)
        )

    def build_args(self, proto: str, layout: TargetLayout) -> List[str]:
        """protoc command line for one file."""
        protoc = self.provisioner.compiler_path()
        search_roots = [
            layout.proto,
            self.config.proto_path,
            self.provisioner.include_dir(),
        ]
        args = [
            str(protoc),
            proto,
            f"--{self.config.output_language}_out={layout.generated.absolute()}",
            "-I.",
        ]
        args.extend(f"-I{Path(root).absolute()}" for root in search_roots)
        return args

    def compile(
        self,
        protos: Sequence[str],
        dest: Optional[Path] = None,
        context: Optional[CompileContext] = None,
    ) -> bool:
        """
        Compile ``protos`` if the outputs are stale.

        Args:
            protos: Files relative to the proto root
            dest: Generated-source directory (default: <target>/protosrc)
            context: Compile context of the caller

        Returns:
            True if protoc ran, False if outputs were already fresh

        Raises:
            CompilationError: On the first file protoc rejects; later files
                are not attempted
        """
        context = context or CompileContext()
        layout = self.layout(dest)
        proto_path = self.config.proto_path

        if not self.needs_compile(layout):
            logger.debug(f"Generated sources in {layout.generated} are up to date")
            return False

        nested = context.suppressed()
        layout.create()

        materialize_dependencies(
            proto_path,
            protos,
            layout.proto,
            self.resource_set,
            strict=self.config.strict_imports,
        )

        for proto in protos:
            args = self.build_args(proto, layout)
            logger.info(f" > {' '.join(args)}")
            result = self.runner.run(args, cwd=proto_path)
            if result.returncode != 0:
                logger.error(f"protoc failed on {proto}")
                raise CompilationError(proto, result.returncode, result.stderr)

        self.downstream.compile(
            [self.config.project_root / p for p in self.config.java_source_paths]
            + [layout.generated],
            list(self.config.javac_options) + LINT_OPTIONS,
            layout.classes,
            nested,
        )

        for out in self.output_dirs(layout):
            self.staleness.record(proto_path, out)
        return True


__all__ = ["CompilationDriver", "TargetLayout", "LINT_OPTIONS"]
