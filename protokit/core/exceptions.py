"""
Centralized exception hierarchy for protokit.

This module defines all custom exceptions used across the codebase
to eliminate duplication and provide clear exception semantics.
"""

from typing import Optional


# ============================================================================
# Base Exceptions
# ============================================================================


class ProtoKitError(Exception):
    """Base exception for all protokit errors."""

    pass


class ConfigError(ProtoKitError):
    """Configuration parsing or validation error."""

    pass


# ============================================================================
# Toolchain-related Exceptions
# ============================================================================


class ToolchainError(ProtoKitError):
    """Base exception for toolchain-related errors."""

    pass


class DownloadError(ToolchainError):
    """Raised when the toolchain archive cannot be downloaded."""

    pass


class ProvisioningError(ToolchainError):
    """Raised when a configure or build step of the toolchain fails."""

    def __init__(
        self,
        step: str,
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        self.step = step
        self.returncode = returncode
        self.stderr = stderr
        msg = f"{step} failed"
        if returncode is not None:
            msg += f" with exit code {returncode}"
        if stderr:
            msg += f"\n{stderr}"
        super().__init__(msg)


# ============================================================================
# Compilation Exceptions
# ============================================================================


class CompilationError(ProtoKitError):
    """Raised when the compiler exits non-zero for a requested file."""

    def __init__(self, source: str, returncode: int, stderr: str = ""):
        self.source = source
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(stderr.strip() or f"Compiling {source} failed")


class DependencyError(ProtoKitError):
    """Base exception for import resolution errors."""

    pass


class UnresolvedImportError(DependencyError):
    """Raised in strict mode when an import cannot be found anywhere."""

    def __init__(self, import_path: str):
        self.import_path = import_path
        super().__init__(f"Unresolved import: {import_path}")
