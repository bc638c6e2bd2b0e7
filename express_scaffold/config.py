"""express-scaffold configuration.

Typed settings for the project generator.  Everything uses Pydantic v2 models
so values are validated at construction time, whether they come from keyword
arguments or from ``EXPRESS_SCAFFOLD_*`` environment variables.
"""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, Field


_FALSE_VALUES = {"0", "false", "no", "off"}


class GeneratorConfig(BaseModel):
    """Settings for one generator run.

    ``default_port`` and ``mongo_uri`` are baked into the generated templates
    as the fallbacks used when ``PORT`` / ``MONGO_URI`` are unset in the
    generated service's environment.
    """

    install_dependencies: bool = Field(
        default=True, description="Run the install command after writing files"
    )
    install_command: list[str] = Field(
        default_factory=lambda: ["npm", "install"],
        min_length=1,
        description="Command used to install the generated project's dependencies",
    )
    install_timeout: int = Field(
        default=600, ge=10, description="Install command timeout in seconds"
    )
    default_port: int = Field(default=3000, ge=1, le=65535)
    mongo_uri: str = Field(default="mongodb://localhost:27017/mydatabase")
    api_prefix: str = Field(default="/api")

    def template_context(self, project_name: str) -> dict[str, Any]:
        """Build the Jinja2 template context for *project_name*."""
        return {
            "project_name": project_name,
            "default_port": self.default_port,
            "mongo_uri": self.mongo_uri,
            "api_prefix": self.api_prefix,
            "users_path": "/users",
        }

    @property
    def install_command_display(self) -> str:
        """The install command as a single shell-style string."""
        return " ".join(self.install_command)

    @classmethod
    def from_env(cls) -> "GeneratorConfig":
        """Build a ``GeneratorConfig`` from environment variables.

        Recognised variables (all optional):
            EXPRESS_SCAFFOLD_INSTALL, EXPRESS_SCAFFOLD_INSTALL_COMMAND,
            EXPRESS_SCAFFOLD_INSTALL_TIMEOUT, EXPRESS_SCAFFOLD_DEFAULT_PORT,
            EXPRESS_SCAFFOLD_MONGO_URI.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("EXPRESS_SCAFFOLD_INSTALL"):
            flag = os.environ["EXPRESS_SCAFFOLD_INSTALL"].strip().lower()
            kwargs["install_dependencies"] = flag not in _FALSE_VALUES
        if os.environ.get("EXPRESS_SCAFFOLD_INSTALL_COMMAND"):
            kwargs["install_command"] = os.environ["EXPRESS_SCAFFOLD_INSTALL_COMMAND"].split()
        if os.environ.get("EXPRESS_SCAFFOLD_INSTALL_TIMEOUT"):
            kwargs["install_timeout"] = os.environ["EXPRESS_SCAFFOLD_INSTALL_TIMEOUT"]
        if os.environ.get("EXPRESS_SCAFFOLD_DEFAULT_PORT"):
            kwargs["default_port"] = os.environ["EXPRESS_SCAFFOLD_DEFAULT_PORT"]
        if os.environ.get("EXPRESS_SCAFFOLD_MONGO_URI"):
            kwargs["mongo_uri"] = os.environ["EXPRESS_SCAFFOLD_MONGO_URI"]

        return cls(**kwargs)
