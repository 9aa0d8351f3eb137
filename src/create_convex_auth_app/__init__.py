#!/usr/bin/env python3
"""
create-convex-auth-app - scaffold a Convex project with GitHub OAuth.

Usage:
    create-convex-auth-app
    create-convex-auth-app check
    create-convex-auth-app --debug
"""

from __future__ import annotations

import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Optional

import typer
from rich.align import Align
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text
from typer.core import TyperGroup

from create_convex_auth_app.cli.ui import StepTracker, prompt_required
from create_convex_auth_app.core.config import DEFAULT_PROJECT_NAME, REQUIRED_TOOLS, ScaffoldConfig
from create_convex_auth_app.core.errors import CommandError, PromptCancelled, ScaffoldError
from create_convex_auth_app.core.process import check_tool
from create_convex_auth_app.scaffold import Scaffolder

try:
    __version__ = version("create-convex-auth-app")
except PackageNotFoundError:
    __version__ = "0.0.0"

BANNER = r"""
                       _
  ___ ___  _ ____   _____  __   __ _ _   _| |_| |__
 / __/ _ \| '_ \ \ / / _ \ \/ /  / _` | | | | __| '_ \
| (_| (_) | | | \ V /  __/>  <  | (_| | |_| | |_| | | |
 \___\___/|_| |_|\_/ \___/_/\_\  \__,_|\__,_|\__|_| |_|
"""

TAGLINE = "create-convex-auth-app - Convex + Convex Auth + GitHub OAuth in one go"

console = Console()


class BannerGroup(TyperGroup):
    """Custom group that shows banner before help."""

    def format_help(self, ctx, formatter):
        show_banner()
        super().format_help(ctx, formatter)


app = typer.Typer(
    name="create-convex-auth-app",
    help="Create a Convex app with GitHub sign-in from the Convex Auth template",
    add_completion=False,
    invoke_without_command=True,
    cls=BannerGroup,
)


def show_banner():
    """Display the ASCII art banner."""
    banner_lines = BANNER.strip("\n").split("\n")
    colors = ["bright_red", "red", "bright_magenta", "magenta", "bright_white"]

    styled_banner = Text()
    for i, line in enumerate(banner_lines):
        styled_banner.append(line + "\n", style=colors[i % len(colors)])

    console.print(Align.center(styled_banner))
    console.print(Align.center(Text(TAGLINE, style="italic bright_yellow")))
    console.print()


def configure_logging(debug: bool) -> None:
    """Route package logs through Rich on stderr; DEBUG only with --debug."""
    package_logger = logging.getLogger("create_convex_auth_app")
    package_logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(
            RichHandler(console=Console(stderr=True), show_path=False, markup=False)
        )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"create-convex-auth-app {__version__}")
        raise typer.Exit()


def _cancelled() -> None:
    console.print("[yellow]Operation cancelled.[/yellow]")
    raise typer.Exit(0)


def _report_failure(error: Exception, debug: bool) -> None:
    if isinstance(error, CommandError):
        console.print(f"[red]Error executing command:[/red] {escape(' '.join(error.command))}", highlight=False)
        console.print(f"[red]Exit code:[/red] {error.returncode}")
        if error.stdout.strip():
            console.print("[red]Command output:[/red]")
            console.print(error.stdout.rstrip(), markup=False, highlight=False)
        if error.stderr.strip():
            console.print("[red]Command error output:[/red]")
            console.print(error.stderr.rstrip(), markup=False, highlight=False)

    console.print(Panel(Text(f"Scaffolding failed: {error}"), title="Failure", border_style="red"))
    if debug:
        env_pairs = [
            ("Python", sys.version.split()[0]),
            ("Platform", sys.platform),
            ("CWD", str(Path.cwd())),
        ]
        label_width = max(len(k) for k, _ in env_pairs)
        env_lines = [f"{k.ljust(label_width)} → [bright_black]{escape(v)}[/bright_black]" for k, v in env_pairs]
        console.print(Panel("\n".join(env_lines), title="Debug Environment", border_style="magenta"))


def create_project(debug: bool = False) -> None:
    """Prompt for a project name and run every scaffold step."""
    show_banner()

    try:
        project_name = prompt_required(
            f"Project name (e.g. {DEFAULT_PROJECT_NAME})",
            "Name is required!",
        )
    except PromptCancelled:
        _cancelled()

    base_dir = Path.cwd()
    project_path = base_dir / project_name
    if project_path.exists():
        error_panel = Panel(
            f"Directory '[cyan]{escape(project_name)}[/cyan]' already exists\n"
            "Please choose a different project name or remove the existing directory.",
            title="[red]Directory Conflict[/red]",
            border_style="red",
            padding=(1, 2),
        )
        console.print()
        console.print(error_panel)
        raise typer.Exit(1)

    try:
        config = ScaffoldConfig.load()
    except ScaffoldError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    setup_lines = [
        "[cyan]Convex Auth Project Setup[/cyan]",
        "",
        f"{'Project':<15} [green]{escape(project_name)}[/green]",
        f"{'Template':<15} [dim]{escape(config.template_repo)}[/dim]",
        f"{'Target Path':<15} [dim]{escape(str(project_path))}[/dim]",
    ]
    console.print(Panel("\n".join(setup_lines), border_style="cyan", padding=(1, 2)))

    scaffolder = Scaffolder(project_name, base_dir=base_dir, config=config, console=console)
    try:
        scaffolder.run()
    except PromptCancelled:
        _cancelled()
    except (ScaffoldError, OSError) as e:
        step = scaffolder.tracker.running
        if step is not None:
            scaffolder.tracker.error(step.key, "failed")
        console.print(scaffolder.tracker.render())
        _report_failure(e, debug)
        raise typer.Exit(1)

    console.print(scaffolder.tracker.render())
    next_steps = [
        f"1. [cyan]cd {escape(project_name)}[/cyan]",
        "2. [cyan]npm run dev[/cyan]",
    ]
    console.print(Panel("\n".join(next_steps), title="Next Steps", border_style="cyan", padding=(1, 2)))
    console.print("[bold green]You're all set![/bold green]")


@app.callback()
def callback(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show debug logs and diagnostic output on failure"),
    show_version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
):
    """Create a new project when no subcommand is given."""
    configure_logging(debug)
    if ctx.invoked_subcommand is None:
        create_project(debug=debug)


@app.command()
def check():
    """Check that git, npm and npx are installed."""
    show_banner()
    console.print("[bold]Checking for installed tools...[/bold]\n")

    tracker = StepTracker("Check Available Tools")
    missing: list[tuple[str, str]] = []
    for tool, url in REQUIRED_TOOLS.items():
        tracker.add(tool, tool)
        if check_tool(tool):
            tracker.complete(tool, "available")
        else:
            tracker.error(tool, "not found")
            missing.append((tool, url))

    console.print(tracker.render())

    if missing:
        for tool, url in missing:
            console.print(f"[dim]Install {tool}: {url}[/dim]")
        raise typer.Exit(1)

    console.print("\n[bold green]create-convex-auth-app is ready to use![/bold green]")


def main():
    app()


if __name__ == "__main__":
    main()
