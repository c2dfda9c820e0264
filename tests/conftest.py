"""
Pytest configuration and shared fixtures for protokit tests.
"""

from pathlib import Path

import pytest

from protokit.config.parser import ProjectConfig
from tests.utils.fakes import FakeRunner, set_age, write_proto


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Fake process runner; every command succeeds unless a handler says otherwise."""
    return FakeRunner()


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch) -> Path:
    """Create isolated protokit home directory for tests."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()

    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setenv("USERPROFILE", str(fake_home))
    monkeypatch.setenv("PROTOKIT_HOME", str(fake_home / ".protokit"))

    return fake_home


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Project directory with an empty proto root."""
    root = tmp_path / "project"
    (root / "resources" / "proto").mkdir(parents=True)
    return root


@pytest.fixture
def fake_protoc(tmp_path: Path) -> Path:
    """A pre-installed protoc stand-in inside its own include root."""
    protoc = tmp_path / "toolchain" / "bin" / "protoc"
    protoc.parent.mkdir(parents=True)
    protoc.write_text("#!/bin/sh\nexit 0\n")
    return protoc


@pytest.fixture
def project_config(project_root: Path, fake_protoc: Path, tmp_path: Path) -> ProjectConfig:
    """Configuration using fake_protoc and a private cache root."""
    return ProjectConfig(
        project_root=project_root,
        name="sample",
        protoc=fake_protoc,
        cache_dir=tmp_path / "cache",
    )


@pytest.fixture
def proto_writer():
    """Expose write_proto to tests."""
    return write_proto


@pytest.fixture
def aged():
    """Expose set_age to tests."""
    return set_age
