"""Interactive questions that produce a ``ProjectConfig``.

Nothing here touches the filesystem: an invalid project name is reported and
asked again, and the record is only built once every answer is in.
"""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.prompt import Confirm, Prompt

from easystack.config import (
    DEFAULT_PROJECT_NAME,
    BootstrapMode,
    CssFramework,
    ProjectConfig,
    validate_project_name,
)
from easystack.utils import console as default_console

CSS_CHOICES = [member.value for member in CssFramework]
BOOTSTRAP_CHOICES = [member.value for member in BootstrapMode]


class AnswerCollector:
    """Asks the five setup questions in a fixed order.

    The Bootstrap delivery question is only asked when Bootstrap is the
    chosen CSS framework.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or default_console

    def ask_project_name(self) -> str:
        while True:
            name = Prompt.ask(
                "Enter your project name:",
                default=DEFAULT_PROJECT_NAME,
                console=self.console,
            ).strip()
            error = validate_project_name(name)
            if error is None:
                return name
            self.console.print(f"[bold red]{error}[/bold red]")

    def ask_css_framework(self) -> CssFramework:
        answer = Prompt.ask(
            "Choose a CSS framework:",
            choices=CSS_CHOICES,
            default=CssFramework.TAILWIND.value,
            console=self.console,
        )
        return CssFramework(answer)

    def ask_bootstrap_mode(self) -> BootstrapMode:
        answer = Prompt.ask(
            "Do you want to use Bootstrap via CDN or npm?",
            choices=BOOTSTRAP_CHOICES,
            default=BootstrapMode.CDN.value,
            console=self.console,
        )
        return BootstrapMode(answer)

    def collect(self) -> ProjectConfig:
        """Run the prompt sequence and return the validated answers."""
        project_name = self.ask_project_name()
        css_framework = self.ask_css_framework()

        bootstrap_mode: Optional[BootstrapMode] = None
        if css_framework is CssFramework.BOOTSTRAP:
            bootstrap_mode = self.ask_bootstrap_mode()

        use_redux = Confirm.ask(
            "Do you want to include Redux?", default=True, console=self.console
        )
        use_router = Confirm.ask(
            "Do you want to include React Router?", default=True, console=self.console
        )

        return ProjectConfig(
            project_name=project_name,
            css_framework=css_framework,
            bootstrap_mode=bootstrap_mode,
            use_redux=use_redux,
            use_router=use_router,
        )
