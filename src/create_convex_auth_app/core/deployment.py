"""Read the Convex deployment identifier written by ``convex dev``."""

from __future__ import annotations

import re
from pathlib import Path

from .config import CALLBACK_URL_TEMPLATE, DEPLOYMENT_ENV_KEY, ENV_FILENAME
from .errors import DeploymentNotFoundError

_DEPLOYMENT_LINE = re.compile(
    rf'^[ \t]*{DEPLOYMENT_ENV_KEY}="?(.+?)"?[ \t\r]*$',
    re.MULTILINE,
)
_DEV_PREFIX = "dev:"


def parse_deployment_name(env_text: str) -> str:
    """Extract the deployment identifier from ``.env`` style text.

    ``CONVEX_DEPLOYMENT="dev:happy-otter-123 (dev)"`` yields
    ``happy-otter-123``: the ``dev:`` prefix and everything after the first
    space are dropped.
    """
    match = _DEPLOYMENT_LINE.search(env_text)
    if match is None:
        raise DeploymentNotFoundError(f"{DEPLOYMENT_ENV_KEY} is not set")

    value = match.group(1).strip().strip('"')
    if value.startswith(_DEV_PREFIX):
        value = value[len(_DEV_PREFIX):]
    deployment = value.split(" ")[0]
    if not deployment:
        raise DeploymentNotFoundError(f"{DEPLOYMENT_ENV_KEY} has no deployment name")
    return deployment


def read_deployment_name(project_path: Path) -> str:
    env_path = project_path / ENV_FILENAME
    try:
        env_text = env_path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise DeploymentNotFoundError(f"{env_path} was not created by convex dev") from e
    except UnicodeDecodeError as e:
        raise DeploymentNotFoundError(f"{env_path} is not valid UTF-8: {e}") from e
    return parse_deployment_name(env_text)


def callback_url(deployment: str) -> str:
    """Return the GitHub OAuth callback URL served by the deployment."""
    return CALLBACK_URL_TEMPLATE.format(deployment=deployment)


__all__ = ["callback_url", "parse_deployment_name", "read_deployment_name"]
