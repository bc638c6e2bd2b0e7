"""Errors raised while scaffolding a project."""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for express-scaffold errors."""


class FileSystemError(ScaffoldError):
    """Raised when a directory or file of the generated project cannot be written.

    Generation stops at the failing path.  Anything written before it stays
    on disk.
    """

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot write {self.path}: {reason}")


class DependencyInstallError(ScaffoldError):
    """Raised when the dependency install command fails.

    The generator reports it and carries on; the project files are complete.
    """

    def __init__(self, command: str, returncode: int, stderr: str) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip() or f"exit status {returncode}"
        super().__init__(f"Error installing dependencies ({command}): {detail}")
