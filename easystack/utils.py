"""Shared utility functions for EasyStack.

Provides async command execution, file-system helpers and Rich-based console
reporting. Every stage of the pipeline reports through the module-level
``console`` so output stays consistent and is easy to capture in tests.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


def resolve_executable(name: str) -> str:
    """Return the full path of *name* on ``PATH``, or *name* unchanged.

    On Windows ``npm`` is installed as ``npm.cmd``; ``shutil.which`` honours
    ``PATHEXT`` so the same lookup works on every platform.
    """
    return shutil.which(name) or name


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: Optional[int] = None,
) -> int:
    """Run a command asynchronously and wait for it to exit.

    The child inherits the parent's stdout and stderr, so npm's progress
    output reaches the terminal as it is produced.

    Args:
        cmd: Program and arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
            ``None`` waits for as long as the child runs.

    Returns:
        The child's exit code.

    Raises:
        FileNotFoundError: If the program does not exist.
        TimeoutError: If *timeout* elapsed; the child has been killed.
    """
    process = await asyncio.create_subprocess_exec(
        *cmd, cwd=str(cwd) if cwd else None
    )

    try:
        await asyncio.wait_for(process.wait(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        raise TimeoutError(f"Command timed out after {timeout}s: {' '.join(cmd)}") from None

    return process.returncode or 0


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Returns:
        The resolved ``Path`` object.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path.resolve()


def write_text(path: str | Path, content: str) -> Path:
    """Overwrite *path* with *content*, creating parent directories."""
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content, encoding="utf-8")
    return file_path


def inject_before(text: str, marker: str, snippet: str) -> str:
    """Insert *snippet* in front of the first *marker* in *text*.

    Raises:
        ValueError: If *marker* does not occur in *text*.
    """
    if marker not in text:
        raise ValueError(f"marker {marker!r} not found")
    return text.replace(marker, snippet + marker, 1)


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(3.7)    -> "3.7s"
        format_duration(65.2)   -> "1m 5s"
    """
    if seconds < 0:
        return "0.0s"

    minutes = int(seconds // 60)
    secs = seconds % 60
    if minutes > 0:
        return f"{minutes}m {int(secs)}s"
    return f"{secs:.1f}s"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_banner(title: str, body: str) -> None:
    """Print the start-of-run panel."""
    console.print(
        Panel(body, title=f"[bold]{title}[/bold]", border_style="bright_cyan")
    )


def print_step(name: str) -> None:
    """Print a rule announcing the next pipeline stage."""
    console.print()
    console.print(Rule(f"[bold bright_cyan] {name} [/bold bright_cyan]", style="bright_cyan"))


def print_summary_table(rows: list[tuple[str, str, str]], title: str = "Summary") -> None:
    """Print a three-column stage/status/detail table.

    Args:
        rows: ``(stage, status, detail)`` tuples. The status cell accepts
            Rich markup.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Stage", style="dim", no_wrap=True)
    table.add_column("Status")
    table.add_column("Detail")

    for stage, status, detail in rows:
        table.add_row(stage, status, detail)

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
