"""Bundled fallback copies of well-known .proto files."""
