"""Command-line interface.

Usage::

    express-scaffold create my-service
    python -m express_scaffold create my-service
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.markup import escape

from express_scaffold.config import GeneratorConfig
from express_scaffold.exceptions import FileSystemError
from express_scaffold.scaffolder import ProjectGenerator, ProjectSpec
from express_scaffold.utils import console


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="express-scaffold",
        description="Scaffold a Node.js backend project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  express-scaffold create my-service\n"
            "  EXPRESS_SCAFFOLD_INSTALL=0 express-scaffold create my-service\n"
        ),
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser(
        "create",
        help=(
            "Create a new Node.js project with Express, CORS, dotenv, Mongoose, "
            "and default user routes"
        ),
    )
    create.add_argument("project_name", metavar="project-name", help="Name of the project directory")
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``express-scaffold``."""
    args = build_parser().parse_args(argv)

    try:
        config = GeneratorConfig.from_env()
    except ValidationError as exc:
        console.print(f"[bold red]Error:[/bold red] Invalid configuration: {escape(str(exc))}")
        sys.exit(1)

    # The working directory is read once here and passed down explicitly.
    spec = ProjectSpec(name=args.project_name, base_dir=Path.cwd())
    generator = ProjectGenerator(spec, config)

    try:
        asyncio.run(generator.generate())
    except FileSystemError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        sys.exit(1)


if __name__ == "__main__":
    main()
