"""Rename the project recorded in the cloned ``package.json``."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .config import MANIFEST_FILENAME
from .errors import ManifestError

logger = logging.getLogger(__name__)


def set_manifest_name(project_path: Path, project_name: str) -> Path:
    """Overwrite the ``name`` field of the project's manifest.

    Every other key keeps its value and position. Returns the manifest path.
    """
    manifest_path = project_path / MANIFEST_FILENAME
    try:
        raw = manifest_path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ManifestError(f"{MANIFEST_FILENAME} not found in {project_path}") from e
    except UnicodeDecodeError as e:
        raise ManifestError(f"{manifest_path} is not valid UTF-8: {e}") from e

    try:
        manifest = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ManifestError(f"{manifest_path} is not valid JSON: {e}") from e

    if not isinstance(manifest, dict):
        raise ManifestError(f"{manifest_path} must contain a JSON object")

    logger.debug("Renaming manifest %r -> %r", manifest.get("name"), project_name)
    manifest["name"] = project_name
    manifest_path.write_text(
        json.dumps(manifest, indent=2, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
    return manifest_path


__all__ = ["set_manifest_name"]
