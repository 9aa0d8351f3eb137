"""Exception types raised while scaffolding a project."""

from __future__ import annotations


class ScaffoldError(Exception):
    """Base class for failures that abort the run with exit code 1."""


class ConfigError(ScaffoldError):
    """The user configuration file could not be used."""


class ManifestError(ScaffoldError):
    """The project manifest could not be read or rewritten."""


class DeploymentNotFoundError(ScaffoldError):
    """No deployment identifier could be read from the env file."""


class CommandError(ScaffoldError):
    """An external command could not be started or exited non-zero."""

    def __init__(
        self,
        command: list[str],
        returncode: int,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self.command = command
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(f"Command failed with exit code {returncode}: {' '.join(command)}")


class PromptCancelled(Exception):
    """The user cancelled a prompt (Ctrl-C or end of input)."""


__all__ = [
    "CommandError",
    "ConfigError",
    "DeploymentNotFoundError",
    "ManifestError",
    "PromptCancelled",
    "ScaffoldError",
]
