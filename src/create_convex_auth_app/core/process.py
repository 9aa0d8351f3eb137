"""Subprocess helpers for the external tools the scaffolder drives."""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from pathlib import Path

from .errors import CommandError

logger = logging.getLogger(__name__)

REDACTED = "********"

__all__ = [
    "REDACTED",
    "check_tool",
    "npm_command",
    "npx_command",
    "run_command",
    "run_interactive_command",
]


def _is_windows() -> bool:
    return sys.platform == "win32"


def npm_command() -> str:
    """Return the npm executable name for this platform."""
    return "npm.cmd" if _is_windows() else "npm"


def npx_command() -> str:
    """Return the npx executable name for this platform."""
    return "npx.cmd" if _is_windows() else "npx"


def check_tool(tool: str) -> bool:
    """Check if a tool is installed."""
    return shutil.which(tool) is not None


def run_command(
    cmd: list[str],
    cwd: Path,
    *,
    display: list[str] | None = None,
) -> str:
    """Run a command with captured output and return its stdout.

    ``display`` replaces ``cmd`` in logs and errors when the arguments carry
    values that must not be shown.
    """
    shown = display or cmd
    logger.debug("Running %s in %s", " ".join(shown), cwd)
    try:
        completed = subprocess.run(
            cmd,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except FileNotFoundError as e:
        raise CommandError(shown, 127, stderr=f"{cmd[0]} executable not found on PATH") from e

    stdout = completed.stdout or ""
    stderr = completed.stderr or ""
    if completed.returncode != 0:
        raise CommandError(shown, completed.returncode, stdout=stdout, stderr=stderr)

    if stdout.strip():
        logger.debug("Command output:\n%s", stdout.rstrip())
    return stdout


def run_interactive_command(
    cmd: list[str],
    cwd: Path,
    *,
    display: list[str] | None = None,
) -> None:
    """Run a command attached to this terminal so it can prompt the user itself."""
    shown = display or cmd
    logger.debug("Running interactively %s in %s", " ".join(shown), cwd)
    try:
        completed = subprocess.run(cmd, cwd=str(cwd), check=False)
    except FileNotFoundError as e:
        raise CommandError(shown, 127, stderr=f"{cmd[0]} executable not found on PATH") from e

    if completed.returncode != 0:
        raise CommandError(shown, completed.returncode)
