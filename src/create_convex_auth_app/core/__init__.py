"""Core utilities and configuration exports."""

from .config import ScaffoldConfig
from .deployment import callback_url, parse_deployment_name, read_deployment_name
from .errors import (
    CommandError,
    ConfigError,
    DeploymentNotFoundError,
    ManifestError,
    PromptCancelled,
    ScaffoldError,
)
from .manifest import set_manifest_name
from .process import check_tool, npm_command, npx_command, run_command, run_interactive_command

__all__ = [
    "CommandError",
    "ConfigError",
    "DeploymentNotFoundError",
    "ManifestError",
    "PromptCancelled",
    "ScaffoldConfig",
    "ScaffoldError",
    "callback_url",
    "check_tool",
    "npm_command",
    "npx_command",
    "parse_deployment_name",
    "read_deployment_name",
    "run_command",
    "run_interactive_command",
    "set_manifest_name",
]
