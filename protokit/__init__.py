"""
protokit - protocol buffer compilation with an on-demand protoc toolchain.
"""

__version__ = "0.1.0"
