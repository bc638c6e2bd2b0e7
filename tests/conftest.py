"""Shared pytest fixtures for the express-scaffold test suite.

Provides reusable fixtures for:
- Output directories for generated projects
- Generator configs with installation switched on or off
- Recording / failing installer stubs
- Listening sockets that occupy a port
"""

from __future__ import annotations

import socket
from pathlib import Path

import pytest

from express_scaffold.config import GeneratorConfig
from express_scaffold.exceptions import DependencyInstallError


# ---------------------------------------------------------------------------
# Installer stubs
# ---------------------------------------------------------------------------


class RecordingInstaller:
    """Installer stub that remembers which project roots it was asked to install."""

    def __init__(self) -> None:
        self.calls: list[Path] = []

    async def install(self, project_root: Path) -> None:
        self.calls.append(project_root)


class FailingInstaller:
    """Installer stub that always fails like a broken ``npm install``."""

    def __init__(self, stderr: str = "npm ERR! network request failed") -> None:
        self.stderr = stderr
        self.calls: list[Path] = []

    async def install(self, project_root: Path) -> None:
        self.calls.append(project_root)
        raise DependencyInstallError("npm install", 1, self.stderr)


# ---------------------------------------------------------------------------
# Paths & Config
# ---------------------------------------------------------------------------


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Base directory that generated projects are created in (auto-cleanup)."""
    out = tmp_path / "output"
    out.mkdir()
    yield out


@pytest.fixture
def no_install_config() -> GeneratorConfig:
    """Config that prints install instructions instead of running npm."""
    return GeneratorConfig(install_dependencies=False)


@pytest.fixture
def install_config() -> GeneratorConfig:
    """Config with dependency installation enabled."""
    return GeneratorConfig(install_dependencies=True)


@pytest.fixture
def recording_installer() -> RecordingInstaller:
    return RecordingInstaller()


@pytest.fixture
def failing_installer() -> FailingInstaller:
    return FailingInstaller()


# ---------------------------------------------------------------------------
# Sockets
# ---------------------------------------------------------------------------


@pytest.fixture
def occupied_port() -> int:
    """A port held by a listening socket for the duration of the test."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("", 0))
    sock.listen(1)
    try:
        yield sock.getsockname()[1]
    finally:
        sock.close()


@pytest.fixture
def free_port() -> int:
    """A port that was free a moment ago (the OS handed it out and it was released)."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port
