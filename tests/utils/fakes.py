"""
Test doubles and file helpers shared across the protokit test suite.
"""

import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from protokit.core.process import ProcessResult, ProcessRunner


@dataclass
class RecordedCall:
    """One invocation seen by FakeRunner."""

    args: List[str]
    cwd: Optional[Path]
    stream_output: bool


class FakeRunner(ProcessRunner):
    """
    ProcessRunner that records invocations instead of spawning processes.

    ``handler(args, cwd)`` may be set to simulate side effects; it returns a
    ProcessResult, an exit code, or None (exit code 0).
    """

    def __init__(self, handler: Optional[Callable] = None):
        self.calls: List[RecordedCall] = []
        self.handler = handler

    def run(self, args, cwd=None, stream_output=False) -> ProcessResult:
        args = [str(a) for a in args]
        self.calls.append(RecordedCall(args, Path(cwd) if cwd else None, stream_output))

        outcome = self.handler(args, cwd) if self.handler else None
        if isinstance(outcome, ProcessResult):
            return outcome
        return ProcessResult(returncode=outcome or 0, args=args)

    def commands(self) -> List[str]:
        """Program name of every call, in order."""
        return [Path(call.args[0]).name for call in self.calls]


def write_proto(root: Path, relative: str, imports=(), age: float = 100) -> Path:
    """
    Write a .proto file importing ``imports``, dated ``age`` seconds ago.
    """
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = ['syntax = "proto2";', ""]
    lines.extend(f'import "{dep}";' for dep in imports)
    lines.append("")
    lines.append(f"message {path.stem.title().replace('_', '')} {{}}")
    path.write_text("\n".join(lines) + "\n")
    set_age(path, age)
    return path


def set_age(path: Path, age: float) -> None:
    """Set a path's mtime to ``age`` seconds in the past."""
    stamp = time.time() - age
    os.utime(path, (stamp, stamp))
