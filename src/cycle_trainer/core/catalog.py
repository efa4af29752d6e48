"""
YAML -> Catalog loader.

Loads the workout catalog from the bundled ``src/cycle_trainer/catalog.yaml``.
A user file at ``~/.cycle-trainer/catalog.yaml`` replaces the bundled
catalog section by section (weights / cardio / mobility), so a user can
swap in their own cardio templates without restating the weights days.

Entries missing an ``id`` or ``name`` are skipped with a warning; the
rest of the catalog still loads.
"""

from __future__ import annotations

import warnings
from pathlib import Path

from .config import WORKOUT_KINDS
from .engine.config_loader import get_user_dir, load_yaml_file
from .models import Catalog, CatalogEntry

_REQUIRED_ENTRY_FIELDS: frozenset[str] = frozenset({"id", "name"})


def entry_from_dict(d: dict) -> CatalogEntry:
    """Convert a raw dict (from YAML) to a CatalogEntry.

    Raises ValueError if a required field is absent.
    """
    missing = _REQUIRED_ENTRY_FIELDS - set(d)
    if missing:
        raise ValueError(f"catalog entry missing fields: {sorted(missing)}")
    category = d.get("category")
    return CatalogEntry(
        id=str(d["id"]),
        name=str(d["name"]),
        category=str(category) if category is not None else None,
    )


def catalog_from_dict(data: dict) -> Catalog:
    """Build a Catalog from a {kind: [entry, ...]} mapping."""
    sections: dict[str, list[CatalogEntry]] = {}
    for kind in WORKOUT_KINDS:
        entries: list[CatalogEntry] = []
        for raw in data.get(kind) or []:
            if not isinstance(raw, dict):
                warnings.warn(f"cycle-trainer: skipping {kind} entry {raw!r}", stacklevel=2)
                continue
            try:
                entries.append(entry_from_dict(raw))
            except ValueError as exc:
                warnings.warn(f"cycle-trainer: skipping {kind} entry: {exc}", stacklevel=2)
        sections[kind] = entries
    return Catalog(**sections)


def get_bundled_catalog_path() -> Path:
    # catalog.py lives at src/cycle_trainer/core/catalog.py
    return Path(__file__).parent.parent / "catalog.yaml"


def get_user_catalog_path() -> Path | None:
    """Return ~/.cycle-trainer/catalog.yaml if it exists, else None."""
    p = get_user_dir() / "catalog.yaml"
    return p if p.exists() else None


def load_catalog(path: Path | None = None) -> Catalog:
    """
    Load the workout catalog.

    Args:
        path: Explicit catalog file; when given, bundled and user files
            are ignored

    Returns:
        Catalog with ordered weights / cardio / mobility lists
    """
    if path is not None:
        return catalog_from_dict(load_yaml_file(path))

    data = load_yaml_file(get_bundled_catalog_path())
    user = get_user_catalog_path()
    if user is not None:
        user_data = load_yaml_file(user)
        data = {**data, **{k: v for k, v in user_data.items() if k in WORKOUT_KINDS}}
    return catalog_from_dict(data)
