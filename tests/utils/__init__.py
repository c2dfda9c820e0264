"""
Test utilities for protokit testing.
"""

from .fakes import FakeRunner, RecordedCall, set_age, write_proto

__all__ = ["FakeRunner", "RecordedCall", "set_age", "write_proto"]
