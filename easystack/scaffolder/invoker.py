"""Base project creation: the only fatal stage of a run.

The Vite scaffold and the base ``npm install`` either both succeed or the run
stops.  A half-created directory is left as-is for the user to inspect.
"""

from __future__ import annotations

from pathlib import Path

from easystack.config import ProjectConfig, ToolConfig
from easystack.utils import print_success

from .npm import NpmCommandError, NpmRunner


class ScaffoldError(Exception):
    """Raised when the base project cannot be created or installed."""

    def __init__(self, message: str, command: str = ""):
        self.command = command
        super().__init__(message)


class ScaffoldInvoker:
    """Creates the Vite React skeleton and installs its dependencies."""

    def __init__(self, tools: ToolConfig, npm: NpmRunner | None = None) -> None:
        self.tools = tools
        self.npm = npm or NpmRunner(tools)

    async def create_project(self, config: ProjectConfig) -> Path:
        """Scaffold ``<output_dir>/<project_name>`` and run ``npm install`` in it.

        Returns:
            Path to the generated project root.

        Raises:
            ScaffoldError: If either command fails.
        """
        project_path = self.tools.project_path(config.project_name)

        try:
            await self.npm.create_vite_app(config.project_name)
        except NpmCommandError as exc:
            raise ScaffoldError(
                f"Failed to create Vite React app: {exc}", command=exc.command
            ) from exc

        if not project_path.is_dir():
            raise ScaffoldError(
                f"Failed to create Vite React app: {project_path} was not created"
            )

        try:
            await self.npm.install(project_path)
        except NpmCommandError as exc:
            raise ScaffoldError(
                f"Failed to install dependencies: {exc}", command=exc.command
            ) from exc

        print_success("Dependencies installed.")
        return project_path
