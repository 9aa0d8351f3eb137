"""Terminal UI helpers: step tree and required-value prompts."""

from __future__ import annotations

from dataclasses import dataclass

import typer
from rich.markup import escape
from rich.tree import Tree

from create_convex_auth_app.core.errors import PromptCancelled

_SYMBOLS = {
    "pending": "[green dim]○[/green dim]",
    "running": "[cyan]○[/cyan]",
    "done": "[green]●[/green]",
    "error": "[red]●[/red]",
}


@dataclass
class Step:
    key: str
    label: str
    status: str = "pending"
    detail: str = ""


class StepTracker:
    """Track scaffold steps and render them as a Rich tree."""

    def __init__(self, title: str):
        self.title = title
        self.steps: list[Step] = []

    def add(self, key: str, label: str) -> None:
        if self.get(key) is None:
            self.steps.append(Step(key, label))

    def get(self, key: str) -> Step | None:
        for step in self.steps:
            if step.key == key:
                return step
        return None

    def start(self, key: str, detail: str = "") -> None:
        self._update(key, "running", detail)

    def complete(self, key: str, detail: str = "") -> None:
        self._update(key, "done", detail)

    def error(self, key: str, detail: str = "") -> None:
        self._update(key, "error", detail)

    @property
    def running(self) -> Step | None:
        """The step currently in progress, if any."""
        for step in self.steps:
            if step.status == "running":
                return step
        return None

    def _update(self, key: str, status: str, detail: str) -> None:
        step = self.get(key)
        if step is None:
            step = Step(key, key)
            self.steps.append(step)
        step.status = status
        if detail:
            step.detail = detail

    def render(self) -> Tree:
        tree = Tree(f"[cyan]{escape(self.title)}[/cyan]", guide_style="grey50")
        for step in self.steps:
            symbol = _SYMBOLS.get(step.status, " ")
            label = escape(step.label)
            detail = escape(step.detail.strip())
            if step.status == "pending":
                text = f"{label} ({detail})" if detail else label
                tree.add(f"{symbol} [bright_black]{text}[/bright_black]")
            elif detail:
                tree.add(f"{symbol} [white]{label}[/white] [bright_black]({detail})[/bright_black]")
            else:
                tree.add(f"{symbol} [white]{label}[/white]")
        return tree


def prompt_required(message: str, error_message: str, *, hide_input: bool = False) -> str:
    """Prompt until the user enters a non-blank value.

    Blank input prints ``error_message`` and asks again. Ctrl-C or end of
    input raises ``PromptCancelled``.
    """
    while True:
        try:
            value = typer.prompt(message, default="", show_default=False, hide_input=hide_input)
        except typer.Abort as e:
            raise PromptCancelled(message) from e
        if value.strip():
            return value
        typer.secho(f"Error: {error_message}", fg=typer.colors.RED)


__all__ = ["Step", "StepTracker", "prompt_required"]
