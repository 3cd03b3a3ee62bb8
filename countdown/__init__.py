"""
Countdown
=========

Conference and personal deadline board.

Configured deadlines (conferences.yml) and user-contributed deadlines
(remote store, or the local store as fallback) are normalized to Entry
values with boundary-corrected, timezone-aware instants, merged into one
collection with stable ids, ordered chronologically (upcoming, overdue,
TBA) and filtered by the user's tag selection.

Main Components:
    - deadlines: parsing, normalization, sources, ordering, tag filter
    - storage: SQLite key-value store for local state
    - core: logging, exceptions, paths, settings
    - utils: deterministic id slugs

Primary Interfaces:
    - countdown.cli: Command-line board
    - countdown.deadlines.board.DeadlineBoard: One render cycle

Example Usage:
    >>> import asyncio
    >>> from countdown.core.settings import get_settings
    >>> from countdown.storage import KeyValueStore
    >>> from countdown.deadlines.board import DeadlineBoard
    >>> settings = get_settings()
    >>> board = DeadlineBoard.from_settings(settings, KeyValueStore(settings.store_path))
    >>> view = asyncio.run(board.refresh())
"""

__version__ = "1.0.0"

from countdown.deadlines import (
    Entry,
    SourceMerger,
    TagSelectionStore,
    is_visible,
    order_entries,
    parse_expression,
)

__all__ = [
    "Entry",
    "SourceMerger",
    "TagSelectionStore",
    "is_visible",
    "order_entries",
    "parse_expression",
]
