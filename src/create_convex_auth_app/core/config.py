"""Constants and user configuration for create-convex-auth-app.

Resolution order for the template repository URL:
1. CREATE_CONVEX_AUTH_APP_TEMPLATE_REPO environment variable
2. ``[template] repo_url`` in ``<config home>/config.toml``
3. TEMPLATE_REPO_URL
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import toml  # type: ignore[import-untyped]

from .errors import ConfigError

logger = logging.getLogger(__name__)

TEMPLATE_REPO_URL = "https://github.com/realdealneill/rdn-convex-auth.git"
DEFAULT_PROJECT_NAME = "convex-auth-app"

MANIFEST_FILENAME = "package.json"
ENV_FILENAME = ".env.local"

DEPLOYMENT_ENV_KEY = "CONVEX_DEPLOYMENT"
GITHUB_ID_ENV_KEY = "AUTH_GITHUB_ID"
GITHUB_SECRET_ENV_KEY = "AUTH_GITHUB_SECRET"

CALLBACK_URL_TEMPLATE = "https://{deployment}.convex.site/api/auth/callback/github"
OAUTH_APPS_URL = "https://github.com/settings/developers"

HOME_ENV_VAR = "CREATE_CONVEX_AUTH_APP_HOME"
TEMPLATE_REPO_ENV_VAR = "CREATE_CONVEX_AUTH_APP_TEMPLATE_REPO"
CONFIG_FILENAME = "config.toml"

REQUIRED_TOOLS: dict[str, str] = {
    "git": "https://git-scm.com/downloads",
    "npm": "https://nodejs.org/en/download",
    "npx": "https://nodejs.org/en/download",
}


def get_config_home() -> Path:
    """Return the directory holding ``config.toml``.

    ``CREATE_CONVEX_AUTH_APP_HOME`` wins on every platform; otherwise
    ``~/.create-convex-auth-app`` on macOS/Linux and the platformdirs user
    data directory on Windows.
    """
    if env_home := os.environ.get(HOME_ENV_VAR):
        return Path(env_home)

    if os.name == "nt":
        from platformdirs import user_data_dir

        return Path(user_data_dir("create-convex-auth-app"))

    return Path.home() / ".create-convex-auth-app"


@dataclass(frozen=True)
class ScaffoldConfig:
    """Settings resolved once per run."""

    template_repo: str = TEMPLATE_REPO_URL

    @classmethod
    def load(cls, config_file: Path | None = None) -> "ScaffoldConfig":
        config_file = config_file or get_config_home() / CONFIG_FILENAME
        template_repo = TEMPLATE_REPO_URL

        file_repo = _read_template_repo(config_file)
        if file_repo:
            template_repo = file_repo

        env_repo = os.environ.get(TEMPLATE_REPO_ENV_VAR, "").strip()
        if env_repo:
            logger.debug("Template repository overridden by %s", TEMPLATE_REPO_ENV_VAR)
            template_repo = env_repo

        return cls(template_repo=template_repo)


def _read_template_repo(config_file: Path) -> str | None:
    if not config_file.exists():
        return None

    try:
        config: dict[str, Any] = toml.load(config_file)
    except (OSError, toml.TomlDecodeError) as e:
        raise ConfigError(f"Could not read {config_file}: {e}") from e

    section = config.get("template")
    if not isinstance(section, dict):
        return None
    repo_url = section.get("repo_url")
    if repo_url is None:
        return None
    if not isinstance(repo_url, str) or not repo_url.strip():
        raise ConfigError(f"{config_file}: [template] repo_url must be a non-empty string")

    logger.debug("Template repository read from %s", config_file)
    return repo_url.strip()


__all__ = [
    "CALLBACK_URL_TEMPLATE",
    "CONFIG_FILENAME",
    "DEFAULT_PROJECT_NAME",
    "DEPLOYMENT_ENV_KEY",
    "ENV_FILENAME",
    "GITHUB_ID_ENV_KEY",
    "GITHUB_SECRET_ENV_KEY",
    "HOME_ENV_VAR",
    "MANIFEST_FILENAME",
    "OAUTH_APPS_URL",
    "REQUIRED_TOOLS",
    "ScaffoldConfig",
    "TEMPLATE_REPO_ENV_VAR",
    "TEMPLATE_REPO_URL",
    "get_config_home",
]
