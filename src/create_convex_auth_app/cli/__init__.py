"""CLI helpers exposed for other modules."""

from .ui import StepTracker, prompt_required

__all__ = ["StepTracker", "prompt_required"]
