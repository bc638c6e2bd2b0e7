"""``package.json`` manifest for generated projects."""

from __future__ import annotations

import json

from pydantic import BaseModel, ConfigDict, Field


class ManifestDescriptor(BaseModel):
    """The generated project's ``package.json``.

    Everything except ``name`` is fixed.  Field aliases carry the npm key
    names, and field order is the key order of the written file.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    version: str = "1.0.0"
    entry_point: str = Field(default="server.js", alias="main")
    module_type: str = Field(default="module", alias="type")
    scripts: dict[str, str] = Field(
        default_factory=lambda: {
            "start": "node server.js",
            "run": "nodemon server.js",
        }
    )
    dependencies: dict[str, str] = Field(
        default_factory=lambda: {
            "express": "^4.17.1",
            "cors": "^2.8.5",
            "dotenv": "^10.0.0",
            "mongoose": "^6.0.0",
        }
    )
    dev_dependencies: dict[str, str] = Field(
        default_factory=lambda: {"nodemon": "^3.1.7"},
        alias="devDependencies",
    )

    def to_json(self) -> str:
        """Serialise with two-space indentation and no trailing newline.

        Non-ASCII characters in the project name are written as-is.
        """
        return json.dumps(self.model_dump(by_alias=True), indent=2, ensure_ascii=False)
