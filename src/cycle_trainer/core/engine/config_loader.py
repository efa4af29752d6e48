"""
YAML -> defaults loader.

Loads user-tunable defaults from defaults.yaml (bundled with the package)
and optionally merges user overrides from ~/.cycle-trainer/config.yaml.

Usage:
    from cycle_trainer.core.engine.config_loader import load_defaults
    cfg = load_defaults()
    lookback = cfg.get("analytics", {}).get("streak_lookback_days", 30)

If the user override file exists but cannot be parsed, a warning is
emitted and the file is ignored.
"""

from __future__ import annotations

import os
import warnings
from pathlib import Path
from typing import Any

import yaml

from ..config import (
    DEFAULT_CYCLE_LENGTH,
    DEFAULT_FOCUS,
    DEFAULT_INCLUDE_MOBILITY,
    DEFAULT_REST_DAYS,
    DEFAULT_TIMEZONE,
    STREAK_LOOKBACK_DAYS,
    WEEK_START_DAY,
)

# Used when the bundled file is missing from an installation
_FALLBACK_DEFAULTS: dict[str, Any] = {
    "cycle": {"cycle_length": DEFAULT_CYCLE_LENGTH, "timezone": DEFAULT_TIMEZONE},
    "preferences": {
        "focus": DEFAULT_FOCUS,
        "rest_days": DEFAULT_REST_DAYS,
        "include_mobility": DEFAULT_INCLUDE_MOBILITY,
    },
    "analytics": {
        "streak_lookback_days": STREAK_LOOKBACK_DAYS,
        "week_start_day": WEEK_START_DAY,
    },
}


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; warn and return {} if it cannot be read."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"cycle-trainer: ignoring {path} ({exc})", stacklevel=2)
        return {}
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_user_dir() -> Path:
    """Return ~/.cycle-trainer (honours $HOME)."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    return home / ".cycle-trainer"


def get_bundled_yaml_path() -> Path | None:
    """Return the path to the bundled defaults.yaml, or None if not found."""
    candidate = Path(__file__).parent.parent.parent / "defaults.yaml"
    return candidate if candidate.exists() else None


def get_user_yaml_path() -> Path | None:
    """Return ~/.cycle-trainer/config.yaml if it exists, else None."""
    p = get_user_dir() / "config.yaml"
    return p if p.exists() else None


def load_defaults() -> dict[str, Any]:
    """
    Load and merge defaults from YAML sources.

    Load order (later overrides earlier):
    1. Built-in constants from core/config.py
    2. Bundled src/cycle_trainer/defaults.yaml
    3. User override at ~/.cycle-trainer/config.yaml

    Returns:
        Merged dict with "cycle", "preferences" and "analytics" sections.
    """
    config = dict(_FALLBACK_DEFAULTS)

    bundled = get_bundled_yaml_path()
    if bundled is not None:
        config = _deep_merge(config, load_yaml_file(bundled))

    user = get_user_yaml_path()
    if user is not None:
        config = _deep_merge(config, load_yaml_file(user))

    return config
