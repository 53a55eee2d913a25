"""Thin async wrapper around the ``npm`` command line.

Every external process EasyStack starts goes through ``NpmRunner`` so the
command shape, the working directory and the failure semantics live in one
place.  The child's output is passed straight through to the terminal.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from easystack.config import ToolConfig
from easystack.utils import console, resolve_executable, run_command


class NpmCommandError(Exception):
    """Raised when an npm invocation exits non-zero or cannot be started."""

    def __init__(self, message: str, command: str = "", returncode: Optional[int] = None):
        self.command = command
        self.returncode = returncode
        super().__init__(message)


class NpmRunner:
    """Runs ``npm`` sub-commands for a single scaffolding run."""

    def __init__(self, tools: ToolConfig) -> None:
        self.tools = tools

    async def run(self, args: list[str], cwd: Path) -> None:
        """Run ``npm <args>`` in *cwd* and wait for it to finish.

        Raises:
            NpmCommandError: On a non-zero exit or timeout, or if npm is not
                installed.
        """
        cmd = [resolve_executable(self.tools.npm_command), *args]
        cmd_str = " ".join([self.tools.npm_command, *args])
        console.print(f"  [dim]$ {cmd_str}[/dim]")

        try:
            returncode = await run_command(
                cmd, cwd=cwd, timeout=self.tools.command_timeout
            )
        except TimeoutError as exc:
            raise NpmCommandError(
                f"Command '{cmd_str}' timed out after {self.tools.command_timeout}s",
                command=cmd_str,
            ) from exc
        except OSError as exc:
            raise NpmCommandError(
                f"Could not run '{cmd_str}': {exc}", command=cmd_str
            ) from exc

        if returncode != 0:
            raise NpmCommandError(
                f"Command '{cmd_str}' failed with exit code {returncode}",
                command=cmd_str,
                returncode=returncode,
            )

    async def create_vite_app(self, project_name: str) -> None:
        """``npm create vite@latest <name> -- --template react`` in the output dir."""
        await self.run(
            [
                "create",
                self.tools.vite_package,
                project_name,
                "--",
                "--template",
                self.tools.vite_template,
            ],
            cwd=self.tools.output_dir,
        )

    async def install(self, project_path: Path, packages: list[str] | None = None) -> None:
        """``npm install [packages...]`` inside the generated project."""
        await self.run(["install", *(packages or [])], cwd=project_path)
