"""YAML configuration loading."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

log = logging.getLogger(__name__)


def load_yaml(path: str | Path, *, required: bool = True) -> dict[str, Any]:
    """Read a YAML file and return its mapping.

    Args:
        path: File path.
        required: When False a missing file yields ``{}`` instead of raising.

    Returns:
        File contents as a dict (empty for an empty document).

    Raises:
        FileNotFoundError: The file is missing and *required* is set.
        ValueError: The document is not a mapping.
    """
    p = Path(path)
    if not p.exists():
        if required:
            raise FileNotFoundError(f"Config not found: {p}")
        log.warning("Config %s not found, using defaults", p)
        return {}
    with p.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    if data is not None and not isinstance(data, dict):
        raise ValueError(f"Config {p} must be a mapping, got {type(data).__name__}")
    log.debug("Loaded config %s (%d top-level keys)", p.name, len(data or {}))
    return data or {}
