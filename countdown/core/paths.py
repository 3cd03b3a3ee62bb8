#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants for the countdown project.

The project structure:
    ROOT/
    ├── countdown/     # Package code
    ├── data/          # Deployment configuration (conferences.yml, types.yml)
    ├── var/           # Local key-value store (SQLite)
    └── logs/          # Application logs

Environment overrides (COUNTDOWN_DATA_DIR, COUNTDOWN_STORE_PATH, ...) are
applied by countdown.core.settings; these are the defaults.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path


def _get_project_root() -> Path:
    """
    Determine project root directory.

    Assumes this file is at ROOT/countdown/core/paths.py.

    Raises:
        RuntimeError: If the computed root does not contain the package
    """
    current_file = Path(__file__).resolve()
    root = current_file.parent.parent.parent

    if not (root / "countdown").is_dir():
        raise RuntimeError(
            f"Cannot determine valid project root. "
            f"Expected {root / 'countdown'} to exist. "
            f"Current file: {current_file}"
        )

    return root


# ----- Project directory -----
ROOT: Path = _get_project_root()

# ---- Configuration ----
DATA_DIR = ROOT / "data"
CONFERENCES_PATH = DATA_DIR / "conferences.yml"
TYPES_PATH = DATA_DIR / "types.yml"

# ---- Local store ----
VAR_DIR = ROOT / "var"
STORE_PATH = VAR_DIR / "countdown.db"

# ---- Logs ----
LOG_DIR = ROOT / "logs"
