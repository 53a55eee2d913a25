"""EasyStack scaffolder -- creates and wires a Vite React project.

Quick usage::

    from easystack.config import ProjectConfig, ToolConfig
    from easystack.scaffolder import ScaffoldInvoker, FeatureInstaller

    config = ProjectConfig(project_name="demo", css_framework="Tailwind CSS")
    tools = ToolConfig.from_env()
    await ScaffoldInvoker(tools).create_project(config)
    await FeatureInstaller(tools).install_css(config)
"""

from easystack.scaffolder.entry_patch import EntryPatchError, EntryPointPatcher, Wrapper
from easystack.scaffolder.features import FeatureInstaller
from easystack.scaffolder.invoker import ScaffoldError, ScaffoldInvoker
from easystack.scaffolder.materializer import FolderMaterializer
from easystack.scaffolder.npm import NpmCommandError, NpmRunner
from easystack.scaffolder.templates import TemplateRenderer

__all__ = [
    "EntryPatchError",
    "EntryPointPatcher",
    "FeatureInstaller",
    "FolderMaterializer",
    "NpmCommandError",
    "NpmRunner",
    "ScaffoldError",
    "ScaffoldInvoker",
    "TemplateRenderer",
    "Wrapper",
]
