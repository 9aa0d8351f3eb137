from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

import pytest

import create_convex_auth_app.scaffold as scaffold_module
from create_convex_auth_app.core.config import HOME_ENV_VAR, TEMPLATE_REPO_ENV_VAR
from create_convex_auth_app.core.errors import CommandError

TEMPLATE_MANIFEST = {
    "name": "rdn-convex-auth",
    "private": True,
    "version": "0.0.0",
    "type": "module",
    "scripts": {"dev": "npm-run-all --parallel dev:frontend dev:backend"},
    "dependencies": {"@convex-dev/auth": "^0.0.71", "convex": "^1.16.0"},
}

ENV_LOCAL = (
    "# Deployment used by `npx convex dev`\n"
    'CONVEX_DEPLOYMENT="dev:happy-otter-123 (dev)"\n'
    "\n"
    "VITE_CONVEX_URL=https://happy-otter-123.convex.cloud\n"
)


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "config-home"
    monkeypatch.setenv(HOME_ENV_VAR, str(home))
    monkeypatch.delenv(TEMPLATE_REPO_ENV_VAR, raising=False)
    return home


@dataclass
class FakeToolchain:
    """Stand-in for git, npm and npx that records every invocation.

    ``fail_on`` names the first matching command (by joined argv prefix)
    that should exit non-zero.
    """

    calls: list[tuple[str, list[str]]] = field(default_factory=list)
    displays: list[list[str]] = field(default_factory=list)
    fail_on: str | None = None
    write_env: bool = True
    manifest_bytes: bytes | None = None
    env_bytes: bytes | None = None

    def _maybe_fail(self, cmd: list[str], display: list[str] | None) -> None:
        if self.fail_on and " ".join(cmd).startswith(self.fail_on):
            raise CommandError(display or cmd, 1, stdout="partial output", stderr="something broke")

    def run_command(self, cmd: list[str], cwd: Path, *, display: list[str] | None = None) -> str:
        self.calls.append(("captured", cmd))
        self.displays.append(display or cmd)
        self._maybe_fail(cmd, display)
        if cmd[:2] == ["git", "clone"]:
            project = cwd / cmd[3]
            project.mkdir()
            (project / "package.json").write_text(json.dumps(TEMPLATE_MANIFEST, indent=2), encoding="utf-8")
            if self.manifest_bytes is not None:
                (project / "package.json").write_bytes(self.manifest_bytes)
        return ""

    def run_interactive_command(self, cmd: list[str], cwd: Path, *, display: list[str] | None = None) -> None:
        self.calls.append(("interactive", cmd))
        self.displays.append(display or cmd)
        self._maybe_fail(cmd, display)
        if cmd[1:3] == ["convex", "dev"] and self.write_env:
            (cwd / ".env.local").write_text(ENV_LOCAL, encoding="utf-8")
            if self.env_bytes is not None:
                (cwd / ".env.local").write_bytes(self.env_bytes)

    @property
    def commands(self) -> list[str]:
        return [" ".join(cmd) for _, cmd in self.calls]


@pytest.fixture()
def toolchain(monkeypatch: pytest.MonkeyPatch) -> FakeToolchain:
    fake = FakeToolchain()
    monkeypatch.setattr(scaffold_module, "run_command", fake.run_command)
    monkeypatch.setattr(scaffold_module, "run_interactive_command", fake.run_interactive_command)
    monkeypatch.setattr(scaffold_module, "npm_command", lambda: "npm")
    monkeypatch.setattr(scaffold_module, "npx_command", lambda: "npx")
    return fake


@pytest.fixture()
def template_manifest() -> dict[str, object]:
    return json.loads(json.dumps(TEMPLATE_MANIFEST))
