"""express-scaffold scaffolder -- generates Express + MongoDB project skeletons.

Quick usage::

    from express_scaffold.scaffolder import ProjectGenerator, ProjectSpec

    spec = ProjectSpec(name="demo", base_dir="/tmp/output")
    project_path = await ProjectGenerator(spec).generate()
"""

from express_scaffold.scaffolder.generator import (
    DIRECTORY_PLAN,
    TEMPLATE_FILES,
    ProjectGenerator,
    ProjectSpec,
    TemplateFile,
    generate,
)
from express_scaffold.scaffolder.installer import Installer, NpmInstaller
from express_scaffold.scaffolder.manifest import ManifestDescriptor
from express_scaffold.scaffolder.templates import TemplateRenderer

__all__ = [
    "DIRECTORY_PLAN",
    "TEMPLATE_FILES",
    "Installer",
    "ManifestDescriptor",
    "NpmInstaller",
    "ProjectGenerator",
    "ProjectSpec",
    "TemplateFile",
    "TemplateRenderer",
    "generate",
]
