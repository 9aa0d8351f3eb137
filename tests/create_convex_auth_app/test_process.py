"""Tests for the subprocess wrappers."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from create_convex_auth_app.core import process
from create_convex_auth_app.core.errors import CommandError


def test_run_command_returns_stdout(tmp_path: Path) -> None:
    out = process.run_command([sys.executable, "-c", "import os; print(os.getcwd())"], tmp_path)
    assert Path(out.strip()).resolve() == tmp_path.resolve()


def test_run_command_nonzero_exit_carries_output(tmp_path: Path) -> None:
    script = "import sys; print('halfway'); sys.stderr.write('boom'); sys.exit(3)"
    with pytest.raises(CommandError) as exc_info:
        process.run_command([sys.executable, "-c", script], tmp_path)

    error = exc_info.value
    assert error.returncode == 3
    assert "halfway" in error.stdout
    assert error.stderr == "boom"


def test_run_command_missing_executable(tmp_path: Path) -> None:
    with pytest.raises(CommandError) as exc_info:
        process.run_command(["create-convex-auth-app-no-such-tool"], tmp_path)

    assert exc_info.value.returncode == 127
    assert "not found on PATH" in exc_info.value.stderr


def test_display_hides_arguments_in_errors(tmp_path: Path) -> None:
    cmd = [sys.executable, "-c", "import sys; sys.exit(1)", "s3cr3t"]
    display = [sys.executable, "-c", "...", process.REDACTED]
    with pytest.raises(CommandError) as exc_info:
        process.run_interactive_command(cmd, tmp_path, display=display)

    assert exc_info.value.command == display
    assert "s3cr3t" not in str(exc_info.value)


def test_run_interactive_command_success(tmp_path: Path) -> None:
    script = "open('marker', 'w').write('ok')"
    process.run_interactive_command([sys.executable, "-c", script], tmp_path)
    assert (tmp_path / "marker").read_text() == "ok"


def test_run_interactive_command_missing_executable(tmp_path: Path) -> None:
    with pytest.raises(CommandError) as exc_info:
        process.run_interactive_command(["create-convex-auth-app-no-such-tool"], tmp_path)
    assert exc_info.value.returncode == 127


@pytest.mark.parametrize(
    ("platform", "npm", "npx"),
    [("win32", "npm.cmd", "npx.cmd"), ("linux", "npm", "npx"), ("darwin", "npm", "npx")],
)
def test_platform_command_names(monkeypatch: pytest.MonkeyPatch, platform: str, npm: str, npx: str) -> None:
    monkeypatch.setattr(process.sys, "platform", platform)
    assert process.npm_command() == npm
    assert process.npx_command() == npx


def test_check_tool(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(process.shutil, "which", lambda tool: "/usr/bin/git" if tool == "git" else None)
    assert process.check_tool("git")
    assert not process.check_tool("npx")
