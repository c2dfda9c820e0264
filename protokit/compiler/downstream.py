"""
Downstream language compile step.

After protoc has generated sources, they are handed to a language compiler
that turns them into build artifacts. For Java output that is ``javac``;
other output languages have no compile step here.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from protokit.compiler.context import CompileContext
from protokit.core.exceptions import CompilationError
from protokit.core.process import ProcessRunner, SubprocessRunner

logger = logging.getLogger(__name__)

PrepHook = Callable[[CompileContext], object]


class LanguageCompiler(ABC):
    """Compiles generated sources into artifacts."""

    #: False when compile() leaves nothing in output_dir
    produces_artifacts = True

    @abstractmethod
    def compile(
        self,
        source_paths: Sequence[Path],
        options: Sequence[str],
        output_dir: Path,
        context: CompileContext,
    ) -> None:
        """
        Compile everything under ``source_paths`` into ``output_dir``.

        Args:
            source_paths: Source roots, generated sources included
            options: Extra compiler options
            output_dir: Artifact destination
            context: Compile context; hooks consult it before re-entering
                protobuf compilation
        """
        pass


class JavacCompiler(LanguageCompiler):
    """
    Runs javac over every .java file found under the source paths.

    Pre-compile hooks are called with the context first, which mirrors a
    build tool running its prep tasks before javac.
    """

    def __init__(
        self,
        runner: Optional[ProcessRunner] = None,
        javac: str = "javac",
        hooks: Optional[List[PrepHook]] = None,
    ):
        self.runner = runner or SubprocessRunner()
        self.javac = javac
        self.hooks = list(hooks or [])

    def add_hook(self, hook: PrepHook) -> None:
        self.hooks.append(hook)

    def compile(
        self,
        source_paths: Sequence[Path],
        options: Sequence[str],
        output_dir: Path,
        context: CompileContext,
    ) -> None:
        for hook in self.hooks:
            hook(context)

        sources = []
        for root in source_paths:
            root = Path(root)
            if root.is_dir():
                sources.extend(sorted(root.rglob("*.java")))

        if not sources:
            logger.info("No Java sources to compile")
            return

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        logger.info(f"Compiling {len(sources)} source files to {output_dir}")
        args = [self.javac, "-d", str(output_dir), *options, *[str(s) for s in sources]]
        result = self.runner.run(args)
        if result.returncode != 0:
            raise CompilationError("javac", result.returncode, result.stderr)


class NullCompiler(LanguageCompiler):
    """No compile step; generated sources are the final product."""

    produces_artifacts = False

    def compile(
        self,
        source_paths: Sequence[Path],
        options: Sequence[str],
        output_dir: Path,
        context: CompileContext,
    ) -> None:
        logger.debug("No downstream compile step for this output language")


def get_language_compiler(
    language: str, runner: Optional[ProcessRunner] = None
) -> LanguageCompiler:
    """Downstream compiler for a protoc output language."""
    if language == "java":
        return JavacCompiler(runner)
    return NullCompiler()


__all__ = [
    "LanguageCompiler",
    "JavacCompiler",
    "NullCompiler",
    "get_language_compiler",
]
