#!/usr/bin/env python3
"""
models.py
---------
Canonical deadline entry.

An Entry is one deadline occurrence: a configured conference round or a
user-contributed deadline. Entries are immutable once built; the instant
they carry has already been boundary-corrected.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from datetime import datetime
from typing import FrozenSet, Optional, Tuple

SOURCE_CONFIG = "config"
SOURCE_REMOTE = "remote"
SOURCE_LOCAL = "local"


@dataclass(frozen=True)
class Entry:
    """
    One deadline occurrence.

    Attributes:
        id: Deterministic identifier (see countdown.utils.slugify)
        name: Display label, never empty
        instant: Timezone-aware deadline, or None when unspecified (TBA)
        details: Optional free text
        tags: Tags in display order
        source: Where the entry came from ('config', 'remote', 'local')
        year: Edition year of a configured item
        link: Optional URL of the item
        place: Optional venue of the item
        timezone: Zone name the deadline was stated in, if any
    """

    id: str
    name: str
    instant: Optional[datetime] = None
    details: Optional[str] = None
    tags: Tuple[str, ...] = field(default_factory=tuple)
    source: str = SOURCE_CONFIG
    year: Optional[int] = None
    link: Optional[str] = None
    place: Optional[str] = None
    timezone: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Entry id must not be empty")
        if not self.name:
            raise ValueError("Entry name must not be empty")
        if self.instant is not None and self.instant.tzinfo is None:
            raise ValueError(f"Entry {self.id!r} instant must be timezone-aware")

    @property
    def is_unspecified(self) -> bool:
        return self.instant is None

    @property
    def tag_set(self) -> FrozenSet[str]:
        return frozenset(self.tags)

    @property
    def title(self) -> str:
        """Name with the edition year, as shown on the board."""
        if self.year is not None:
            return f"{self.name} {self.year}"
        return self.name

    def seconds_until(self, now: datetime) -> Optional[float]:
        """Seconds from now until the deadline (negative once passed)."""
        if self.instant is None:
            return None
        return (self.instant - now).total_seconds()

    def is_past(self, now: datetime) -> bool:
        """True once the deadline is reached (due exactly now counts). Unspecified is never past."""
        if self.instant is None:
            return False
        return (now - self.instant).total_seconds() >= 0
