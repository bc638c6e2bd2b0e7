"""Main scaffolding orchestrator.

Takes a ``ProjectSpec`` and generates an Express + MongoDB backend skeleton:
a ``package.json`` manifest, a server entry point with an available-port
finder, a Mongoose connection module, and a users route tree.  Installation
of the declared dependencies is delegated to an ``Installer``.
"""

from __future__ import annotations

import asyncio
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from rich.markup import escape

from express_scaffold.config import GeneratorConfig
from express_scaffold.exceptions import DependencyInstallError, FileSystemError
from express_scaffold.utils import (
    print_error,
    print_info,
    print_success,
    print_summary_table,
)

from .installer import Installer, NpmInstaller
from .manifest import ManifestDescriptor
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Project layout
# ---------------------------------------------------------------------------

MANIFEST_FILE = "package.json"

DIRECTORY_PLAN: tuple[str, ...] = (
    "public",
    "src",
    "src/config",
    "src/controllers",
    "src/models",
    "src/routes",
    "src/utils",
)


@dataclass(frozen=True)
class TemplateFile:
    """A generated file and the Jinja2 template it is rendered from."""

    relative_path: str
    template: str


TEMPLATE_FILES: tuple[TemplateFile, ...] = (
    TemplateFile("server.js", "server.js.j2"),
    TemplateFile("src/config/db.js", "src/config/db.js.j2"),
    TemplateFile("src/routes/index.js", "src/routes/index.js.j2"),
    TemplateFile("src/routes/userRoutes.js", "src/routes/userRoutes.js.j2"),
)


def missing_parent_dirs(
    template_files: tuple[TemplateFile, ...] = TEMPLATE_FILES,
    directory_plan: tuple[str, ...] = DIRECTORY_PLAN,
) -> list[str]:
    """Return template paths whose parent directory is not in the plan."""
    planned = set(directory_plan)
    missing = []
    for tf in template_files:
        parent = Path(tf.relative_path).parent.as_posix()
        if parent != "." and parent not in planned:
            missing.append(tf.relative_path)
    return missing


# ---------------------------------------------------------------------------
# Project spec
# ---------------------------------------------------------------------------


class ProjectSpec(BaseModel):
    """Pydantic model describing the project to scaffold."""

    name: str = Field(..., description="Project name, used verbatim as directory and package name")
    base_dir: Path = Field(
        default=Path("."), description="Directory the project folder is created in"
    )

    @property
    def target_dir(self) -> Path:
        return self.base_dir / self.name


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Main scaffolding orchestrator.

    Given a ``ProjectSpec``, writes into ``<base_dir>/<name>``:
    - ``package.json`` declaring express, cors, dotenv, mongoose and nodemon
    - ``server.js`` that picks the first free port at or above ``PORT``
    - ``src/config/db.js`` Mongoose connection helper
    - ``src/routes/index.js`` and ``src/routes/userRoutes.js``
    - empty ``public/``, ``src/controllers/``, ``src/models/``, ``src/utils/``

    Existing files are overwritten.  Every step runs to completion before
    the next one starts.
    """

    def __init__(
        self,
        spec: ProjectSpec,
        config: GeneratorConfig | None = None,
        installer: Installer | None = None,
    ) -> None:
        self.spec = spec
        self.config = config or GeneratorConfig()
        self.renderer = TemplateRenderer()
        self.installer = installer or NpmInstaller(
            self.config.install_command, timeout=self.config.install_timeout
        )

    # -- Public API --------------------------------------------------------

    async def generate(self) -> Path:
        """Generate the project.

        Returns:
            Path to the generated project root.

        Raises:
            FileSystemError: If a directory or file cannot be written.
        """
        project_root = self.spec.target_dir
        context = self.config.template_context(self.spec.name)

        # 1. Directory tree
        await self._create_directory_structure(project_root)

        # 2. package.json
        await self._write_manifest(project_root)

        # 3. Source templates
        await self._render_templates(project_root, context)

        print_success(f"Project {escape(self.spec.name)} created successfully!")
        print_summary_table(
            {
                "Project": escape(self.spec.name),
                "Location": escape(str(project_root)),
                "Files": str(len(TEMPLATE_FILES) + 1),
                "Directories": str(len(DIRECTORY_PLAN)),
            },
            title="Scaffold",
        )

        # 4. Dependencies
        await self._install_dependencies(project_root)

        return project_root

    # -- Directory structure -----------------------------------------------

    async def _create_directory_structure(self, root: Path) -> None:
        """Create the project root and every planned directory, in order."""
        for path in (root, *(root / d for d in DIRECTORY_PLAN)):
            await _guarded(path, path.mkdir, parents=True, exist_ok=True)

    # -- Manifest ----------------------------------------------------------

    async def _write_manifest(self, root: Path) -> None:
        manifest = ManifestDescriptor(name=self.spec.name)
        path = root / MANIFEST_FILE
        await _guarded(path, path.write_text, manifest.to_json(), encoding="utf-8")

    # -- Templates ---------------------------------------------------------

    async def _render_templates(self, root: Path, ctx: dict[str, Any]) -> None:
        for tf in TEMPLATE_FILES:
            out = root / tf.relative_path
            try:
                await self.renderer.render_to_file(tf.template, out, ctx)
            except OSError as exc:
                raise FileSystemError(out, exc.strerror or str(exc)) from exc

    # -- Dependencies ------------------------------------------------------

    async def _install_dependencies(self, root: Path) -> None:
        if not self.config.install_dependencies:
            print_info("Next steps:")
            print_info(f"  cd {escape(shlex.quote(self.spec.name))}")
            print_info(f"  {escape(self.config.install_command_display)}")
            return

        try:
            await self.installer.install(root)
        except DependencyInstallError as exc:
            print_error(escape(str(exc)))


# ---------------------------------------------------------------------------
# Convenience entry point
# ---------------------------------------------------------------------------


async def generate(
    name: str,
    base_dir: str | Path = ".",
    config: GeneratorConfig | None = None,
    installer: Installer | None = None,
) -> Path:
    """Scaffold project *name* inside *base_dir* and return its root."""
    spec = ProjectSpec(name=name, base_dir=Path(base_dir))
    return await ProjectGenerator(spec, config, installer).generate()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _guarded(path: Path, func: Any, *args: Any, **kwargs: Any) -> Any:
    """Run a blocking filesystem call in a thread, re-raising ``OSError`` as
    ``FileSystemError`` for *path*."""
    try:
        return await asyncio.to_thread(func, *args, **kwargs)
    except OSError as exc:
        raise FileSystemError(path, exc.strerror or str(exc)) from exc
