"""Fixed source layout, pages and global stylesheet for a new project."""

from __future__ import annotations

import asyncio
from pathlib import Path

from easystack.config import ProjectConfig, ToolConfig
from easystack.utils import console, ensure_dir, print_success

from .templates import TemplateRenderer

SOURCE_FOLDERS = ("components", "pages", "assets", "hooks", "utils", "services")


class FolderMaterializer:
    """Creates ``src/`` sub-folders and writes the page and component files.

    All writes overwrite whatever the scaffold left behind.  Only the Router
    flag changes which files are written and what ``App.jsx`` renders; the
    stylesheet additionally picks up the Tailwind import.
    """

    def __init__(self, tools: ToolConfig, renderer: TemplateRenderer | None = None) -> None:
        self.tools = tools
        self.renderer = renderer or TemplateRenderer()

    def _files_for(self, config: ProjectConfig) -> list[tuple[str, str]]:
        """Return ``(template, path relative to src/)`` pairs to render."""
        files = [("src/App.jsx.j2", "App.jsx")]
        if config.use_router:
            files.append(("src/components/Navbar.jsx.j2", "components/Navbar.jsx"))
        files.extend([
            ("src/pages/Home.jsx.j2", "pages/Home.jsx"),
            ("src/pages/About.jsx.j2", "pages/About.jsx"),
            ("src/index.css.j2", "index.css"),
        ])
        return files

    async def create_folders(self, src_dir: Path) -> list[Path]:
        """Create every folder in ``SOURCE_FOLDERS``; existing ones are kept."""
        return [
            await asyncio.to_thread(ensure_dir, src_dir / folder)
            for folder in SOURCE_FOLDERS
        ]

    async def materialize(self, config: ProjectConfig) -> str:
        console.print("\nCreating folder structure and pages...")
        src_dir = self.tools.src_dir(config.project_name)
        await self.create_folders(src_dir)

        ctx = config.template_context()
        written: list[Path] = []
        for template_name, rel_path in self._files_for(config):
            written.append(
                await self.renderer.render_to_file(template_name, src_dir / rel_path, ctx)
            )

        print_success("Folder structure and pages created.")
        return f"{len(SOURCE_FOLDERS)} folders, {len(written)} files"
