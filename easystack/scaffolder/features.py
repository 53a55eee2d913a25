"""Optional feature axes: CSS framework, Redux and React Router.

Each ``install_*`` coroutine installs the packages for one axis and writes or
patches the files that axis owns.  The axes are independent of each other;
the pipeline runs them one after another and records a failure in one
without stopping the rest.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from easystack.config import BootstrapMode, CssFramework, ProjectConfig, ToolConfig
from easystack.utils import console, ensure_dir, inject_before, print_success

from .npm import NpmRunner
from .templates import TemplateRenderer

HEAD_CLOSE_MARKER = "</head>"

BOOTSTRAP_CSS_IMPORT = "import 'bootstrap/dist/css/bootstrap.min.css';"

TAILWIND_PACKAGES = ["tailwindcss", "@tailwindcss/vite"]
BOOTSTRAP_PACKAGES = ["bootstrap"]
REDUX_PACKAGES = ["redux", "react-redux"]
ROUTER_PACKAGES = ["react-router-dom"]

# Template name -> file name inside ``src/store``
REDUX_STORE_FILES: dict[str, str] = {
    "redux/ActionsTypes.js.j2": "ActionsTypes.js",
    "redux/Actions.js.j2": "Actions.js",
    "redux/reducer.js.j2": "reducer.js",
}


def inject_into_head(html_path: Path, snippet: str) -> None:
    """Insert *snippet* right before the first ``</head>`` of *html_path*.

    Not idempotent: calling it twice leaves two copies of the snippet.
    """
    html = html_path.read_text(encoding="utf-8")
    html_path.write_text(inject_before(html, HEAD_CLOSE_MARKER, snippet), encoding="utf-8")


def prepend_line(path: Path, line: str) -> None:
    """Read-modify-write *path* so that *line* becomes its first line."""
    content = path.read_text(encoding="utf-8")
    path.write_text(f"{line}\n{content}", encoding="utf-8")


class FeatureInstaller:
    """Applies the CSS, Redux and Router choices to a scaffolded project."""

    def __init__(
        self,
        tools: ToolConfig,
        renderer: TemplateRenderer | None = None,
        npm: NpmRunner | None = None,
    ) -> None:
        self.tools = tools
        self.renderer = renderer or TemplateRenderer()
        self.npm = npm or NpmRunner(tools)

    # -- CSS framework -----------------------------------------------------

    async def install_css(self, config: ProjectConfig) -> str:
        """Dispatch to the installer for the selected CSS framework."""
        if config.css_framework is CssFramework.TAILWIND:
            return await self.install_tailwind(config)
        if config.css_framework is CssFramework.BOOTSTRAP:
            if config.bootstrap_mode is BootstrapMode.NPM:
                return await self.install_bootstrap_npm(config)
            return await self.install_bootstrap_cdn(config)
        return "No CSS framework selected"

    async def install_tailwind(self, config: ProjectConfig) -> str:
        """Install Tailwind, register its Vite plugin and import it globally."""
        name = config.project_name
        ctx = config.template_context()
        console.print("\nInstalling Tailwind CSS...")
        await self.npm.install(self.tools.project_path(name), TAILWIND_PACKAGES)

        await self.renderer.render_to_file(
            "tailwind/vite.config.js.j2", self.tools.vite_config_path(name), ctx
        )
        await self.renderer.render_to_file(
            "tailwind/index.css.j2", self.tools.stylesheet_path(name), ctx
        )
        snippet = self.renderer.render("html/tailwind_head.html.j2", ctx)
        await asyncio.to_thread(inject_into_head, self.tools.index_html_path(name), snippet)

        print_success("Tailwind CSS installed and configured.")
        return "Tailwind CSS installed and configured"

    async def install_bootstrap_npm(self, config: ProjectConfig) -> str:
        """Install Bootstrap from npm and import its stylesheet in the entry file."""
        name = config.project_name
        console.print("\nInstalling Bootstrap via npm...")
        await self.npm.install(self.tools.project_path(name), BOOTSTRAP_PACKAGES)
        print_success("Bootstrap installed via npm.")

        await asyncio.to_thread(
            prepend_line, self.tools.entry_path(name), BOOTSTRAP_CSS_IMPORT
        )
        return "Bootstrap installed via npm"

    async def install_bootstrap_cdn(self, config: ProjectConfig) -> str:
        """Link the Bootstrap CDN stylesheet and bundle from ``index.html``."""
        console.print("\nAdding Bootstrap CDN to index.html...")
        snippet = self.renderer.render("html/bootstrap_cdn.html.j2", config.template_context())
        await asyncio.to_thread(
            inject_into_head, self.tools.index_html_path(config.project_name), snippet
        )
        print_success("Bootstrap CDN added to index.html.")
        return "Bootstrap CDN added to index.html"

    # -- Redux -------------------------------------------------------------

    async def install_redux(self, config: ProjectConfig) -> str:
        """Install Redux and write the counter store under ``src/store``."""
        name = config.project_name
        console.print("\nInstalling Redux...")
        await self.npm.install(self.tools.project_path(name), REDUX_PACKAGES)
        print_success("Redux installed.")

        store_dir = await asyncio.to_thread(ensure_dir, self.tools.store_dir(name))
        ctx = config.template_context()
        for template_name, file_name in REDUX_STORE_FILES.items():
            await self.renderer.render_to_file(template_name, store_dir / file_name, ctx)

        print_success("Redux store configured.")
        return f"Redux store written to {store_dir}"

    # -- Router ------------------------------------------------------------

    async def install_router(self, config: ProjectConfig) -> str:
        """Install React Router; its pages are written by the materializer."""
        console.print("\nInstalling React Router...")
        await self.npm.install(self.tools.project_path(config.project_name), ROUTER_PACKAGES)
        print_success("React Router installed.")
        return "react-router-dom installed"
