#!/usr/bin/env python3
"""
settings.py
-------------------
Runtime settings resolved from environment variables.

Variables:
    COUNTDOWN_API_URL     Base URL of the remote deadline store (unset = local only)
    COUNTDOWN_API_TOKEN   Bearer token sent to the remote store
    COUNTDOWN_NAMESPACE   Deployment namespace for local storage keys
    COUNTDOWN_TIMEOUT     Remote fetch timeout in seconds (default: 10)
    COUNTDOWN_TIMEZONE    Zone for naive user-submitted datetimes (default: host zone)
    COUNTDOWN_DATA_DIR    Directory holding conferences.yml and types.yml
    COUNTDOWN_STORE_PATH  SQLite file backing the local store
    COUNTDOWN_LOG_DIR     Directory for log files
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import copy
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Optional

# --- Local imports ---
from countdown.core.paths import DATA_DIR, LOG_DIR, STORE_PATH


DEFAULT_NAMESPACE = "countdown.local"
DEFAULT_TIMEOUT = 10.0


@dataclass
class Settings:
    """Runtime configuration, environment first, project defaults second."""

    api_url: Optional[str] = None
    api_token: Optional[str] = None
    namespace: str = DEFAULT_NAMESPACE
    timeout: float = DEFAULT_TIMEOUT
    timezone: Optional[str] = None
    data_dir: Path = field(default_factory=lambda: DATA_DIR)
    store_path: Path = field(default_factory=lambda: STORE_PATH)
    log_dir: Path = field(default_factory=lambda: LOG_DIR)

    def __post_init__(self) -> None:
        env = os.environ
        if env.get("COUNTDOWN_API_URL"):
            self.api_url = env["COUNTDOWN_API_URL"].rstrip("/")
        if env.get("COUNTDOWN_API_TOKEN"):
            self.api_token = env["COUNTDOWN_API_TOKEN"]
        if env.get("COUNTDOWN_NAMESPACE"):
            self.namespace = env["COUNTDOWN_NAMESPACE"]
        if env.get("COUNTDOWN_TIMEOUT"):
            try:
                self.timeout = float(env["COUNTDOWN_TIMEOUT"])
            except ValueError:
                raise ValueError(
                    f"COUNTDOWN_TIMEOUT must be a number, got {env['COUNTDOWN_TIMEOUT']!r}"
                )
        if env.get("COUNTDOWN_TIMEZONE"):
            self.timezone = env["COUNTDOWN_TIMEZONE"]
        if env.get("COUNTDOWN_DATA_DIR"):
            self.data_dir = Path(env["COUNTDOWN_DATA_DIR"]).expanduser()
        if env.get("COUNTDOWN_STORE_PATH"):
            self.store_path = Path(env["COUNTDOWN_STORE_PATH"]).expanduser()
        if env.get("COUNTDOWN_LOG_DIR"):
            self.log_dir = Path(env["COUNTDOWN_LOG_DIR"]).expanduser()

        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    def with_overrides(self, **changes) -> "Settings":
        """
        Copy of these settings with the given fields replaced.

        None values are ignored. The environment is not read again, and the
        receiver is left untouched.
        """
        updated = copy.copy(self)
        for name, value in changes.items():
            if value is None:
                continue
            if not hasattr(updated, name):
                raise AttributeError(f"Unknown setting: {name}")
            setattr(updated, name, value)
        return updated

    @property
    def conferences_path(self) -> Path:
        return self.data_dir / "conferences.yml"

    @property
    def types_path(self) -> Path:
        return self.data_dir / "types.yml"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()
