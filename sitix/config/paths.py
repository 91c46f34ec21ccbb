from __future__ import annotations

from pathlib import Path

# Single source of truth for project structure.
CFG_FILE = "sitix.yaml"
TEMPLATES_DIR = "_templates"
OUTPUT_DIR = "output"
DEFAULT_TEMPLATE = "default"


def cfg_path(root: Path) -> Path:
    """Path to the optional project configuration file sitix.yaml."""
    return (root / CFG_FILE).resolve()


def resolve_dir(root: Path, value: str | Path) -> Path:
    """
    Absolute path for a configured directory.
    Relative values are taken relative to the project root.
    """
    p = Path(value)
    if not p.is_absolute():
        p = root / p
    return p.resolve()
