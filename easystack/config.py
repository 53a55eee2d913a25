"""EasyStack configuration.

Typed configuration for a scaffolding run. ``ProjectConfig`` is the immutable
record of the user's answers; ``ToolConfig`` describes the external tools and
where the project is created. Both use Pydantic v2 models so invalid input is
rejected at construction time, before any file or process is touched.
"""

from __future__ import annotations

import os
import re
from enum import Enum
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from easystack import __version__

PROJECT_NAME_PATTERN = re.compile(r"[a-zA-Z0-9_-]+")

PROJECT_NAME_ERROR = (
    "Project name must only include letters, numbers, underscores, and dashes."
)

DEFAULT_PROJECT_NAME = "my-easystack-app"


class CssFramework(str, Enum):
    """CSS framework choices, valued by their prompt labels."""

    TAILWIND = "Tailwind CSS"
    BOOTSTRAP = "Bootstrap"
    NONE = "None"


class BootstrapMode(str, Enum):
    """How Bootstrap is delivered to the page."""

    CDN = "CDN"
    NPM = "npm"


def validate_project_name(value: str) -> Optional[str]:
    """Return ``None`` if *value* is a usable project name, else the error message."""
    if PROJECT_NAME_PATTERN.fullmatch(value):
        return None
    return PROJECT_NAME_ERROR


class ProjectConfig(BaseModel):
    """The answers collected from the user.

    Frozen once built: every pipeline stage reads it and none may change it.
    ``bootstrap_mode`` is set if and only if Bootstrap is the CSS framework.
    """

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., description="Directory name passed to the scaffolder")
    css_framework: CssFramework = Field(default=CssFramework.NONE)
    bootstrap_mode: Optional[BootstrapMode] = Field(default=None)
    use_redux: bool = Field(default=True)
    use_router: bool = Field(default=True)

    @field_validator("project_name")
    @classmethod
    def check_name(cls, value: str) -> str:
        error = validate_project_name(value)
        if error:
            raise ValueError(error)
        return value

    @model_validator(mode="after")
    def check_bootstrap_mode(self) -> "ProjectConfig":
        if self.css_framework is CssFramework.BOOTSTRAP and self.bootstrap_mode is None:
            raise ValueError("bootstrap_mode is required when Bootstrap is selected")
        if self.css_framework is not CssFramework.BOOTSTRAP and self.bootstrap_mode is not None:
            raise ValueError("bootstrap_mode is only valid when Bootstrap is selected")
        return self

    @property
    def use_tailwind(self) -> bool:
        return self.css_framework is CssFramework.TAILWIND

    @property
    def use_bootstrap(self) -> bool:
        return self.css_framework is CssFramework.BOOTSTRAP

    def template_context(self) -> dict[str, Any]:
        """Build the Jinja2 context shared by every scaffold template."""
        return {
            "project_name": self.project_name,
            "css_framework": self.css_framework.value,
            "bootstrap_mode": self.bootstrap_mode.value if self.bootstrap_mode else None,
            "use_tailwind": self.use_tailwind,
            "use_bootstrap": self.use_bootstrap,
            "use_redux": self.use_redux,
            "use_router": self.use_router,
        }


class ToolConfig(BaseModel):
    """External tools and output location for a run.

    Instances are created once by the CLI entry point and passed to the
    pipeline. Every derived path hangs off ``output_dir / project_name``.
    """

    npm_command: str = Field(default="npm")
    vite_package: str = Field(default="vite@latest")
    vite_template: str = Field(default="react")
    output_dir: Path = Field(default_factory=Path.cwd)
    command_timeout: Optional[int] = Field(
        default=None, ge=1, description="Seconds before an npm call is killed; None waits forever"
    )

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    def project_path(self, project_name: str) -> Path:
        """Root of the generated project."""
        return self.output_dir / project_name

    def src_dir(self, project_name: str) -> Path:
        return self.project_path(project_name) / "src"

    def entry_path(self, project_name: str) -> Path:
        """The ``src/main.jsx`` file that mounts ``<App />``."""
        return self.src_dir(project_name) / "main.jsx"

    def index_html_path(self, project_name: str) -> Path:
        return self.project_path(project_name) / "index.html"

    def vite_config_path(self, project_name: str) -> Path:
        return self.project_path(project_name) / "vite.config.js"

    def stylesheet_path(self, project_name: str) -> Path:
        return self.src_dir(project_name) / "index.css"

    def store_dir(self, project_name: str) -> Path:
        return self.src_dir(project_name) / "store"

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, output_dir: Path | None = None) -> "ToolConfig":
        """Build a ``ToolConfig`` from environment variables.

        Recognised variables (all optional):
            EASYSTACK_NPM, EASYSTACK_VITE_PACKAGE, EASYSTACK_VITE_TEMPLATE,
            EASYSTACK_OUTPUT_DIR.

        An explicit *output_dir* (from the command line) wins over the
        environment.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("EASYSTACK_NPM"):
            kwargs["npm_command"] = os.environ["EASYSTACK_NPM"]
        if os.environ.get("EASYSTACK_VITE_PACKAGE"):
            kwargs["vite_package"] = os.environ["EASYSTACK_VITE_PACKAGE"]
        if os.environ.get("EASYSTACK_VITE_TEMPLATE"):
            kwargs["vite_template"] = os.environ["EASYSTACK_VITE_TEMPLATE"]

        if output_dir is not None:
            kwargs["output_dir"] = Path(output_dir)
        elif os.environ.get("EASYSTACK_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["EASYSTACK_OUTPUT_DIR"])

        return cls(**kwargs)


def load_version() -> str:
    """Return the installed distribution version, or the source tree's."""
    try:
        return version("easystack")
    except PackageNotFoundError:
        return __version__
