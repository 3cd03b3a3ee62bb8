#!/usr/bin/env python3
"""
ordering.py
-----------
Chronological ordering of the board.

With diff = now - instant (seconds):

    1. not yet due (diff < 0), soonest first
    2. overdue or due exactly now (diff >= 0), most overdue first
    3. unspecified (TBA), in their original order

Within groups 1 and 2 entries are sorted by diff descending, which is the
pairwise rule "a before b when a is due and b is overdue, otherwise by
diff(b) - diff(a)". Unspecified entries take a diff of 0, placing them next
to "now" at the tail of the board, after every known instant.

The ordering is a pure function of (entries, now) and uses Python's stable
sort, so entries the key considers equal keep their input order.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime
from typing import Iterable, List, Tuple

# --- Local imports ---
from .models import Entry

GROUP_UPCOMING = 0
GROUP_PAST = 1
GROUP_UNSPECIFIED = 2


def entry_diff(entry: Entry, now: datetime) -> float:
    """now - instant in seconds; 0 for an unspecified entry."""
    if entry.instant is None:
        return 0.0
    return (now - entry.instant).total_seconds()


def order_key(entry: Entry, now: datetime) -> Tuple[int, float]:
    """Sort key: (group, -diff)."""
    if entry.instant is None:
        return (GROUP_UNSPECIFIED, 0.0)
    diff = entry_diff(entry, now)
    group = GROUP_UPCOMING if diff < 0 else GROUP_PAST
    return (group, -diff)


def order_entries(entries: Iterable[Entry], now: datetime) -> List[Entry]:
    """
    Order entries for display.

    Args:
        entries: Unified collection (not modified)
        now: Aware reference time

    Returns:
        New list: upcoming soonest-first, then overdue, then TBA
    """
    return sorted(entries, key=lambda entry: order_key(entry, now))


def split_due(
    entries: Iterable[Entry], now: datetime
) -> Tuple[List[Entry], List[Entry], List[Entry]]:
    """
    Partition ordered entries into (upcoming, past, unspecified).

    Entries due exactly now count as past, matching their place in the order.
    """
    upcoming: List[Entry] = []
    past: List[Entry] = []
    unspecified: List[Entry] = []
    for entry in order_entries(entries, now):
        group = order_key(entry, now)[0]
        if group == GROUP_UPCOMING:
            upcoming.append(entry)
        elif group == GROUP_PAST:
            past.append(entry)
        else:
            unspecified.append(entry)
    return upcoming, past, unspecified
