"""EasyStack pipeline orchestrator.

Runs a scaffolding session end to end:

Stage 1: CREATE       -- ``npm create vite`` and ``npm install`` (fatal on failure).
Stage 2: CSS          -- Tailwind, Bootstrap (npm or CDN) or nothing.
Stage 3: REDUX        -- counter store under ``src/store``.
Stage 4: ROUTER       -- ``react-router-dom``.
Stage 5: ENTRY POINT  -- imports and root wrappers in ``src/main.jsx``.
Stage 6: PAGES        -- folder layout, ``App.jsx``, pages, stylesheet.

Stages 2-6 are best-effort: each returns a :class:`StageOutcome`, a failure is
reported and the next stage still runs.  The summary table at the end is the
only place the outcomes are gathered.

Usage::

    python -m easystack
    python -m easystack --output ~/code
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
from collections.abc import Awaitable, Callable
from pathlib import Path

from pydantic import BaseModel, Field, computed_field
from rich.markup import escape

from easystack.config import CssFramework, ProjectConfig, ToolConfig, load_version
from easystack.prompts import AnswerCollector
from easystack.scaffolder import (
    EntryPointPatcher,
    FeatureInstaller,
    FolderMaterializer,
    ScaffoldError,
    ScaffoldInvoker,
    TemplateRenderer,
)
from easystack.utils import (
    console,
    format_duration,
    print_banner,
    print_error,
    print_step,
    print_success,
    print_summary_table,
    print_warning,
)

StageFn = Callable[[ProjectConfig], Awaitable[str]]

EXIT_OK = 0
EXIT_SCAFFOLD_FAILED = 1
EXIT_INTERRUPTED = 130


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class StageOutcome(BaseModel):
    """Result of a single pipeline stage."""

    name: str
    success: bool = Field(default=True)
    skipped: bool = Field(default=False)
    message: str = Field(default="")
    duration_seconds: float = Field(default=0.0, ge=0.0)

    @property
    def status_label(self) -> str:
        if self.skipped:
            return "[dim]skipped[/dim]"
        if self.success:
            return "[green]ok[/green]"
        return "[red]failed[/red]"


class PipelineResult(BaseModel):
    """Everything a run produced, in stage order."""

    project_name: str
    project_path: str = Field(default="")
    outcomes: list[StageOutcome] = Field(default_factory=list)
    fatal_error: str = Field(default="")

    @computed_field  # type: ignore[misc]
    @property
    def exit_code(self) -> int:
        """1 when project creation failed; recoverable failures still exit 0."""
        return EXIT_SCAFFOLD_FAILED if self.fatal_error else EXIT_OK

    @property
    def failed_stages(self) -> list[str]:
        return [o.name for o in self.outcomes if not o.success]


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class Pipeline:
    """Drives one scaffolding run for an already-collected ``ProjectConfig``.

    Attributes:
        tools: External tool and output-directory configuration.
        invoker: Creates the base project.
        installer: Applies the CSS, Redux and Router axes.
        patcher: Rewrites ``src/main.jsx``.
        materializer: Writes the folder layout and pages.
    """

    def __init__(
        self,
        tools: ToolConfig,
        invoker: ScaffoldInvoker | None = None,
        installer: FeatureInstaller | None = None,
        patcher: EntryPointPatcher | None = None,
        materializer: FolderMaterializer | None = None,
    ) -> None:
        renderer = TemplateRenderer() if installer is None or materializer is None else None
        self.tools = tools
        self.invoker = invoker or ScaffoldInvoker(tools)
        self.installer = installer or FeatureInstaller(tools, renderer)
        self.patcher = patcher or EntryPointPatcher(tools)
        self.materializer = materializer or FolderMaterializer(tools, renderer)

    def _stages(self, config: ProjectConfig) -> list[tuple[str, StageFn, bool]]:
        """Return ``(name, coroutine function, enabled)`` for every best-effort stage."""
        return [
            ("CSS framework", self.installer.install_css,
             config.css_framework is not CssFramework.NONE),
            ("Redux", self.installer.install_redux, config.use_redux),
            ("React Router", self.installer.install_router, config.use_router),
            ("Entry point", self.patcher.patch, True),
            ("Folders & pages", self.materializer.materialize, True),
        ]

    async def _run_stage(
        self, name: str, stage: StageFn, config: ProjectConfig, enabled: bool
    ) -> StageOutcome:
        if not enabled:
            return StageOutcome(name=name, skipped=True, message="not selected")

        print_step(name)
        start = time.monotonic()
        try:
            message = await stage(config)
        except Exception as exc:
            elapsed = time.monotonic() - start
            print_error(f"Failed to set up {name}: {escape(str(exc))}")
            return StageOutcome(
                name=name, success=False, message=str(exc), duration_seconds=elapsed
            )
        return StageOutcome(
            name=name, message=message, duration_seconds=time.monotonic() - start
        )

    async def run(self, config: ProjectConfig) -> PipelineResult:
        """Create the project and apply every selected feature.

        Returns:
            The collected outcomes.  ``exit_code`` is non-zero only when the
            base project could not be created.
        """
        result = PipelineResult(project_name=config.project_name)
        pipeline_start = time.monotonic()

        css_label = config.css_framework.value
        if config.bootstrap_mode:
            css_label += f" ({config.bootstrap_mode.value})"
        print_banner(
            "EasyStack",
            f"Project   : {config.project_name}\n"
            f"Output    : {self.tools.project_path(config.project_name).resolve()}\n"
            f"CSS       : {css_label}\n"
            f"Redux     : {'yes' if config.use_redux else 'no'}\n"
            f"Router    : {'yes' if config.use_router else 'no'}",
        )
        console.print(f'\nInitializing your project: "{config.project_name}"...\n')

        print_step("Create project")
        start = time.monotonic()
        try:
            project_path = await self.invoker.create_project(config)
        except ScaffoldError as exc:
            print_error(escape(str(exc)))
            result.fatal_error = str(exc)
            result.outcomes.append(
                StageOutcome(
                    name="Create project",
                    success=False,
                    message=str(exc),
                    duration_seconds=time.monotonic() - start,
                )
            )
            return result

        result.project_path = str(project_path)
        result.outcomes.append(
            StageOutcome(
                name="Create project",
                message=str(project_path),
                duration_seconds=time.monotonic() - start,
            )
        )

        for name, stage, enabled in self._stages(config):
            result.outcomes.append(await self._run_stage(name, stage, config, enabled))

        self._print_final_summary(result, time.monotonic() - pipeline_start)
        return result

    def _print_final_summary(self, result: PipelineResult, elapsed: float) -> None:
        console.print()
        print_summary_table(
            [(o.name, o.status_label, escape(o.message)) for o in result.outcomes],
            title=f"EasyStack run ({format_duration(elapsed)})",
        )
        if result.failed_stages:
            print_warning(
                f"Some steps failed: {', '.join(result.failed_stages)}. "
                "See the messages above for details."
            )
        print_success("EasyStack setup complete! Happy coding!")


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser(version: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="easystack",
        description="EasyStack -- scaffold a Vite + React project interactively",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  easystack\n"
            "  easystack --output ~/code\n"
            "  EASYSTACK_NPM=pnpm easystack\n"
        ),
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"easystack {version}",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Directory the project folder is created in (default: current directory)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``easystack`` and ``python -m easystack``."""
    parser = build_parser(load_version())
    args = parser.parse_args(argv)

    tools = ToolConfig.from_env(
        output_dir=Path(args.output) if args.output else None
    )

    console.print("[bold bright_cyan]Welcome to EasyStack with Vite![/bold bright_cyan]")
    try:
        config = AnswerCollector().collect()
        result = asyncio.run(Pipeline(tools).run(config))
    except KeyboardInterrupt:
        print_warning("\nAborted.")
        sys.exit(EXIT_INTERRUPTED)

    if result.exit_code != EXIT_OK:
        sys.exit(result.exit_code)


if __name__ == "__main__":
    main()
