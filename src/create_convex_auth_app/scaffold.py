"""Ordered scaffold steps for a new Convex Auth project.

Each step either completes or raises; the first failure stops the run and
nothing already created is rolled back.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from create_convex_auth_app.cli.ui import StepTracker, prompt_required
from create_convex_auth_app.core.config import (
    GITHUB_ID_ENV_KEY,
    GITHUB_SECRET_ENV_KEY,
    OAUTH_APPS_URL,
    ScaffoldConfig,
)
from create_convex_auth_app.core.deployment import callback_url, read_deployment_name
from create_convex_auth_app.core.manifest import set_manifest_name
from create_convex_auth_app.core.process import (
    REDACTED,
    npm_command,
    npx_command,
    run_command,
    run_interactive_command,
)

logger = logging.getLogger(__name__)

STEPS: list[tuple[str, str]] = [
    ("clone", "Clone template repository"),
    ("manifest", "Update package.json"),
    ("install", "Install dependencies"),
    ("convex", "Initialize Convex"),
    ("auth", "Set up Convex Auth"),
    ("deployment", "Retrieve deployment information"),
    ("credentials", "Collect GitHub OAuth credentials"),
    ("env", "Set GitHub client ID and secret"),
]


class Scaffolder:
    """Create ``project_name`` under ``base_dir`` and wire up GitHub OAuth."""

    def __init__(
        self,
        project_name: str,
        *,
        base_dir: Path,
        config: ScaffoldConfig,
        console: Console,
    ) -> None:
        self.project_name = project_name
        self.base_dir = base_dir
        self.project_path = base_dir / project_name
        self.config = config
        self.console = console
        self.tracker = StepTracker("Create Convex Auth App")
        for key, label in STEPS:
            self.tracker.add(key, label)

    def run(self) -> str:
        """Run every step in order and return the OAuth callback URL."""
        self.clone_template()
        self.update_manifest()
        self.install_dependencies()
        self.initialize_convex()
        self.setup_auth()
        self.show_oauth_instructions()
        url = self.show_callback_url()
        client_id, client_secret = self.collect_credentials()
        self.push_credentials(client_id, client_secret)
        return url

    def clone_template(self) -> None:
        self.tracker.start("clone", self.config.template_repo)
        with self.console.status("Cloning repository"):
            run_command(
                ["git", "clone", self.config.template_repo, self.project_name],
                self.base_dir,
            )
        self.tracker.complete("clone", self.project_name)
        self.console.print("[green]✓[/green] Repository cloned successfully")

    def update_manifest(self) -> None:
        self.tracker.start("manifest")
        set_manifest_name(self.project_path, self.project_name)
        self.tracker.complete("manifest", f"name = {self.project_name}")
        self.console.print("[green]✓[/green] package.json updated")

    def install_dependencies(self) -> None:
        self.tracker.start("install")
        with self.console.status("Installing dependencies"):
            run_command([npm_command(), "install"], self.project_path)
        self.tracker.complete("install")
        self.console.print("[green]✓[/green] Dependencies installed")

    def initialize_convex(self) -> None:
        self.tracker.start("convex")
        self.console.print("[cyan]Initializing Convex (this will be interactive)[/cyan]")
        run_interactive_command([npx_command(), "convex", "dev", "--once"], self.project_path)
        self.tracker.complete("convex")
        self.console.print("[green]✓[/green] Convex initialized")

    def setup_auth(self) -> None:
        self.tracker.start("auth")
        self.console.print("[cyan]Setting up Convex Auth (this will be interactive)[/cyan]")
        run_interactive_command([npx_command(), "@convex-dev/auth"], self.project_path)
        self.tracker.complete("auth")
        self.console.print("[green]✓[/green] Convex Auth setup complete")

    def show_oauth_instructions(self) -> None:
        self.console.print()
        self.console.print(
            "Please go to GitHub [bold]Settings > Developer settings > OAuth Apps[/bold] "
            f"([cyan]{OAUTH_APPS_URL}[/cyan]) to add a new OAuth app."
        )

    def show_callback_url(self) -> str:
        self.tracker.start("deployment")
        deployment = read_deployment_name(self.project_path)
        self.tracker.complete("deployment", deployment)

        url = callback_url(deployment)
        self.console.print()
        self.console.print("Use this callback URL for your GitHub OAuth app:")
        self.console.print(f"[bold cyan]{escape(url)}[/bold cyan]", soft_wrap=True)
        return url

    def collect_credentials(self) -> tuple[str, str]:
        self.tracker.start("credentials")
        client_id = prompt_required(
            "Enter your GitHub Client ID",
            "GitHub Client ID is required!",
        )
        client_secret = prompt_required(
            "Enter your GitHub Client Secret",
            "GitHub Client Secret is required!",
            hide_input=True,
        )
        self.tracker.complete("credentials")
        return client_id, client_secret

    def push_credentials(self, client_id: str, client_secret: str) -> None:
        self.tracker.start("env")
        for key, value in ((GITHUB_ID_ENV_KEY, client_id), (GITHUB_SECRET_ENV_KEY, client_secret)):
            base = [npx_command(), "convex", "env", "set", key]
            run_interactive_command([*base, value], self.project_path, display=[*base, REDACTED])
            logger.debug("Set %s on the Convex deployment", key)
        self.tracker.complete("env", f"{GITHUB_ID_ENV_KEY}, {GITHUB_SECRET_ENV_KEY}")
        self.console.print("[green]✓[/green] GitHub Client ID and Secret set")


__all__ = ["STEPS", "Scaffolder"]
