#!/usr/bin/env python3
"""
render.py
---------
Plain-text rendering of board entries.

Upcoming deadlines show a running countdown ("12 days 04h 05m 06s"),
passed ones a relative time ("3 days ago"), and TBA entries "TBA". The
deadline itself is shown in the viewer's zone as "15 Mar 2026, 11:59:59 pm".
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime, tzinfo
from typing import List, Optional, Sequence

# --- Local imports ---
from .models import Entry

TBA_TEXT = "TBA"

# (upper bound in seconds, singular text, unit seconds for plural, plural unit)
_RELATIVE_STEPS = (
    (45, "a few seconds", None, None),
    (90, "a minute", None, None),
    (45 * 60, None, 60, "minutes"),
    (90 * 60, "an hour", None, None),
    (22 * 3600, None, 3600, "hours"),
    (36 * 3600, "a day", None, None),
    (26 * 86400, None, 86400, "days"),
    (45 * 86400, "a month", None, None),
    (320 * 86400, None, 30 * 86400, "months"),
    (548 * 86400, "a year", None, None),
)


def format_countdown(seconds: float) -> str:
    """
    Countdown text for a positive number of seconds.

    Examples:
        >>> format_countdown(3 * 86400 + 4 * 3600 + 5 * 60 + 6)
        '03 days 04h 05m 06s'
    """
    remaining = max(int(seconds), 0)
    days, remaining = divmod(remaining, 86400)
    hours, remaining = divmod(remaining, 3600)
    minutes, secs = divmod(remaining, 60)
    return f"{days:02d} days {hours:02d}h {minutes:02d}m {secs:02d}s"


def format_relative(seconds_ago: float) -> str:
    """
    Human relative time for a moment seconds_ago in the past.

    Examples:
        >>> format_relative(30)
        'a few seconds ago'
        >>> format_relative(5 * 86400)
        '5 days ago'
    """
    elapsed = abs(seconds_ago)
    for bound, singular, unit, plural in _RELATIVE_STEPS:
        if elapsed < bound:
            if singular is not None:
                return f"{singular} ago"
            return f"{max(round(elapsed / unit), 2)} {plural} ago"
    return f"{max(round(elapsed / (365 * 86400)), 2)} years ago"


def format_deadline(instant: Optional[datetime], zone: Optional[tzinfo] = None) -> str:
    """
    Deadline timestamp in the viewer's zone (host zone when zone is None).

    Examples:
        >>> from datetime import timezone
        >>> format_deadline(datetime(2026, 3, 15, 23, 59, 59, tzinfo=timezone.utc), timezone.utc)
        '15 Mar 2026, 11:59:59 pm'
    """
    if instant is None:
        return TBA_TEXT
    local = instant.astimezone(zone)
    hour = local.hour % 12 or 12
    meridiem = "am" if local.hour < 12 else "pm"
    return (
        f"{local.day} {local.strftime('%b')} {local.year}, "
        f"{hour}:{local.minute:02d}:{local.second:02d} {meridiem}"
    )


def timer_text(entry: Entry, now: datetime) -> str:
    """Countdown for upcoming entries, relative time once reached, TBA otherwise."""
    if entry.instant is None:
        return TBA_TEXT
    diff = (now - entry.instant).total_seconds()
    if diff < 0:
        return format_countdown(-diff)
    return format_relative(diff)


def render_entry(
    entry: Entry,
    now: datetime,
    zone: Optional[tzinfo] = None,
    show_tags: bool = True,
) -> List[str]:
    """Lines for one entry: title, timer, deadline, then optional details and tags."""
    lines = [
        entry.title,
        f"  {timer_text(entry, now)}",
        f"  Deadline: {format_deadline(entry.instant, zone)}",
    ]
    meta = " | ".join(part for part in (entry.details, entry.place) if part)
    if meta:
        lines.append(f"  {meta}")
    if show_tags and entry.tags:
        lines.append(f"  Tags: {', '.join(entry.tags)}")
    return lines


def render_board(
    entries: Sequence[Entry], now: datetime, zone: Optional[tzinfo] = None
) -> List[str]:
    """Lines for an already ordered and filtered board, entries separated by a rule."""
    lines: List[str] = []
    for entry in entries:
        lines.extend(render_entry(entry, now, zone))
        lines.append("-" * 40)
    return lines
