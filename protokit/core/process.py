"""
External process execution for protokit.

Process spawning is modelled as an injectable capability so that the
toolchain provisioner and the compilation driver can be exercised with a
fake runner in tests. All invocations block until the child exits; there is
no timeout and no cancellation hook.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union

logger = logging.getLogger(__name__)


@dataclass
class ProcessResult:
    """Outcome of a finished external process."""

    returncode: int
    stdout: str = ""
    stderr: str = ""
    args: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ProcessRunner(ABC):
    """
    Abstract interface for running external commands.

    Implementations must block until the command exits and must never raise
    on a non-zero exit code; callers inspect ``ProcessResult.returncode``.
    """

    @abstractmethod
    def run(
        self,
        args: Sequence[Union[str, Path]],
        cwd: Optional[Path] = None,
        stream_output: bool = False,
    ) -> ProcessResult:
        """
        Run a command and wait for it to finish.

        Args:
            args: Command and arguments
            cwd: Working directory for the child process
            stream_output: If True, stdout goes straight to the user's
                terminal instead of being captured. stderr is always captured.

        Returns:
            ProcessResult with exit code and captured streams
        """
        pass


class SubprocessRunner(ProcessRunner):
    """ProcessRunner backed by the ``subprocess`` module."""

    def run(
        self,
        args: Sequence[Union[str, Path]],
        cwd: Optional[Path] = None,
        stream_output: bool = False,
    ) -> ProcessResult:
        cmd = [str(a) for a in args]
        logger.debug(f"Running {' '.join(cmd)} (cwd={cwd})")

        result = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd is not None else None,
            stdout=None if stream_output else subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )

        return ProcessResult(
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            args=cmd,
        )


__all__ = ["ProcessResult", "ProcessRunner", "SubprocessRunner"]
