#!/usr/bin/env python3
"""
cli.py
------
Shared CLI helpers for countdown commands.

Functions:
    setup_logger: Initialize a CountdownLogger for a CLI component

Classes:
    RenderStats: Counters collected over one render cycle
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

# --- Local imports ---
from countdown.core.logging_manager import CountdownLogger


def setup_logger(log_dir: Path, component_name: str) -> CountdownLogger:
    """
    Setup logging for CLI operations.

    Args:
        log_dir: Base log directory (typically from paths.LOG_DIR)
        component_name: Component identifier for logging (e.g. 'cli', 'board')

    Returns:
        Configured CountdownLogger instance
    """
    operations_log_dir = Path(log_dir) / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return CountdownLogger(operations_log_dir, component_name=component_name)


@dataclass
class RenderStats:
    """
    Counters for a single render cycle.

    Attributes:
        config_entries: Entries normalized from the configuration
        dynamic_entries: Entries contributed by the remote or local store
        dynamic_source: 'remote', 'local' or 'none'
        unspecified: Entries without a known instant (TBA or unparseable)
        visible: Entries left after tag filtering
        start_time: Render start timestamp
    """

    config_entries: int = 0
    dynamic_entries: int = 0
    dynamic_source: str = "none"
    unspecified: int = 0
    visible: int = 0
    start_time: datetime = field(default_factory=datetime.now)
    _duration_cached: Optional[float] = field(default=None, init=False, repr=False)

    @property
    def total(self) -> int:
        return self.config_entries + self.dynamic_entries

    def duration(self) -> float:
        """Elapsed seconds since start_time (cached after first call)."""
        if self._duration_cached is None:
            self._duration_cached = (datetime.now() - self.start_time).total_seconds()
        return self._duration_cached

    def summary(self) -> str:
        return (
            f"{self.visible}/{self.total} deadlines shown "
            f"({self.config_entries} configured, {self.dynamic_entries} {self.dynamic_source}, "
            f"{self.unspecified} TBA), {self.duration():.2f}s"
        )
