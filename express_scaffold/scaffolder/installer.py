"""Dependency installation for generated projects.

The generator only talks to an ``Installer``; ``NpmInstaller`` is the real
one and shells out to the package manager inside the new project.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Protocol, Sequence

from rich.markup import escape

from express_scaffold.exceptions import DependencyInstallError
from express_scaffold.utils import format_duration, print_info, print_success, run_command


class Installer(Protocol):
    """Installs the dependencies declared by a generated project."""

    async def install(self, project_root: Path) -> None:
        """Install into *project_root*; raise ``DependencyInstallError`` on failure."""
        ...


class NpmInstaller:
    """Runs ``npm install`` (or a configured equivalent) in the project root."""

    def __init__(
        self,
        command: Sequence[str] = ("npm", "install"),
        timeout: int = 600,
    ) -> None:
        self.command = list(command)
        self.timeout = timeout

    async def install(self, project_root: Path) -> None:
        display = " ".join(self.command)
        print_info(f"Installing dependencies ({escape(display)})...")
        started = time.monotonic()

        try:
            returncode, _stdout, stderr = await run_command(
                self.command, cwd=project_root, timeout=self.timeout
            )
        except OSError as exc:
            # missing or non-executable package manager
            raise DependencyInstallError(display, -1, str(exc)) from exc

        if returncode != 0:
            raise DependencyInstallError(display, returncode, stderr)

        print_success(
            f"Dependencies installed successfully! ({format_duration(time.monotonic() - started)})"
        )
