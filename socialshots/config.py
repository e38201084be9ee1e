#!/usr/bin/env python3
"""Config management for SocialShots - saved defaults for batches.

Stores configuration in ~/.socialshots/config.yaml.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from .compositor import DEFAULT_BACKGROUND
from .jobs import RESIZE_QUALITY

CONFIG_PATH = Path.home() / ".socialshots" / "config.yaml"

DEFAULTS = {
    "background": DEFAULT_BACKGROUND,
    "workers": None,
    "resize_quality": RESIZE_QUALITY,
    "output_dir": None,
}

ENV_VARS = {
    "background": "SOCIALSHOTS_BACKGROUND",
    "workers": "SOCIALSHOTS_WORKERS",
    "resize_quality": "SOCIALSHOTS_RESIZE_QUALITY",
    "output_dir": "SOCIALSHOTS_OUTPUT_DIR",
}

_CASTS = {
    "workers": int,
    "resize_quality": float,
}


@dataclass(frozen=True)
class Settings:
    background: str = DEFAULT_BACKGROUND
    workers: Optional[int] = None
    resize_quality: float = RESIZE_QUALITY
    output_dir: Optional[str] = None


def load_config(path: Optional[Path] = None) -> dict:
    """Load saved config from ~/.socialshots/config.yaml.

    Returns an empty dict if the file doesn't exist or is invalid.
    """
    path = Path(path) if path else CONFIG_PATH
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as exc:
        print(f"⚠️  Ignoring unreadable config {path}: {exc}")
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict, path: Optional[Path] = None) -> Path:
    """Save config as YAML (creates parent dirs)."""
    path = Path(path) if path else CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, sort_keys=False))
    return path


def _from_env(key: str):
    value = os.environ.get(ENV_VARS[key])
    if value in (None, ""):
        return None
    cast = _CASTS.get(key)
    if cast is None:
        return value
    try:
        return cast(value)
    except ValueError:
        print(f"⚠️  Ignoring {ENV_VARS[key]}={value!r}")
        return None


def resolve_settings(overrides: Optional[dict] = None, path: Optional[Path] = None) -> Settings:
    """Resolve each setting from args → saved config → env vars → defaults.

    Priority order:
      1. Explicit overrides (CLI flags); None means "not given"
      2. Config file (~/.socialshots/config.yaml or ``path``)
      3. Environment variables (SOCIALSHOTS_*)
      4. Built-in defaults
    """
    overrides = overrides or {}
    saved = load_config(path)
    values = {}
    for key, default in DEFAULTS.items():
        for candidate in (overrides.get(key), saved.get(key), _from_env(key)):
            if candidate is not None:
                values[key] = candidate
                break
        else:
            values[key] = default
    return Settings(**values)


def write_default_config(path: Optional[Path] = None) -> Path:
    """Write a starter config with every key at its default."""
    return save_config(dict(DEFAULTS), path)
