"""
protoc compilation pipeline.

Dependency materialization, the per-file protoc driver, the downstream
language compile step and the task entry point.
"""

from .context import CompileContext
from .dependencies import ResourceSet, materialize_dependencies, parse_imports
from .downstream import JavacCompiler, LanguageCompiler, NullCompiler
from .driver import CompilationDriver, TargetLayout
from .bootstrap import DESCRIPTOR, compile_descriptor
from .task import ProtobufTask, discover_proto_files

__all__ = [
    "CompileContext",
    "ResourceSet",
    "materialize_dependencies",
    "parse_imports",
    "JavacCompiler",
    "LanguageCompiler",
    "NullCompiler",
    "CompilationDriver",
    "TargetLayout",
    "DESCRIPTOR",
    "compile_descriptor",
    "ProtobufTask",
    "discover_proto_files",
]
