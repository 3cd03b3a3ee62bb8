#!/usr/bin/env python3
"""
timeparse.py
------------
Raw deadline expressions to normalized instants.

A configured deadline is written as a naive local timestamp, optionally with
year placeholders, in the conference's timezone:

    "%y-03-15 23:59"      -> year
    "%Y-12-01 12:00"      -> year - 1
    "TBA"                 -> unspecified

Without a timezone the deadline is read as Anywhere on Earth (UTC-12:00).

Every parsed instant goes through correct_boundary() once: a deadline stated
on the hour is moved one second earlier, and one stated at minute 59 is
pushed to second 59, so that "23:59" and "24:00" both mean the last second of
the day.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime, timedelta, timezone as dt_timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

# --- Third party imports ---
from dateutil.parser import isoparse

# --- Local imports ---
from countdown.core.exceptions import ParseError

TBA = "TBA"
ANYWHERE_ON_EARTH = "Etc/GMT+12"


def substitute_year(raw: str, year: int) -> str:
    """
    Replace the year placeholders of a raw expression.

    '%y' becomes the edition year and '%Y' the year before it. The two
    tokens never overlap, so the order of replacement does not matter.

    Examples:
        >>> substitute_year("%y-03-15 23:59", 2026)
        '2026-03-15 23:59'
        >>> substitute_year("%Y-12-01", 2026)
        '2025-12-01'
    """
    return raw.replace("%y", str(year)).replace("%Y", str(year - 1))


def resolve_zone(name: Optional[str]) -> tzinfo:
    """
    Look up a zone by IANA name, defaulting to Anywhere on Earth.

    Raises:
        ParseError: If the name is not a known zone
    """
    key = name or ANYWHERE_ON_EARTH
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ParseError(f"Unknown timezone: {key!r}") from e


def localize(value: datetime, zone: tzinfo) -> datetime:
    """Attach zone to a naive value; express an aware value in zone."""
    if value.tzinfo is None:
        return value.replace(tzinfo=zone)
    return value.astimezone(zone)


def parse_timestamp(text: str) -> datetime:
    """
    Parse an ISO-8601 style timestamp.

    Accepts a date alone, or a date and time separated by 'T' or a space,
    with or without seconds and offset.

    Raises:
        ParseError: If text is not a timestamp
    """
    if not isinstance(text, str):
        raise ParseError(f"Deadline must be a string, got {type(text).__name__}")
    try:
        return isoparse(text.strip())
    except (ValueError, OverflowError) as e:
        raise ParseError(f"Invalid timestamp: {text!r}") from e


def parse_expression(
    raw: str, year: int, timezone: Optional[str] = None
) -> Optional[datetime]:
    """
    Convert one raw deadline expression into an uncorrected instant.

    Args:
        raw: Raw expression, possibly with %y/%Y placeholders, or "TBA"
        year: Edition year used for placeholder substitution
        timezone: IANA zone name; None means Anywhere on Earth

    Returns:
        Timezone-aware datetime, or None for "TBA"

    Raises:
        ParseError: If the expression or the timezone cannot be parsed
    """
    if raw == TBA:
        return None
    if not isinstance(raw, str):
        raise ParseError(f"Deadline must be a string, got {type(raw).__name__}")

    zone = resolve_zone(timezone)
    return localize(parse_timestamp(substitute_year(raw, year)), zone)


def correct_boundary(instant: datetime) -> datetime:
    """
    Apply the minute-boundary correction.

    - minute 0: one second earlier (12:00:00 -> 11:59:59)
    - minute 59: second set to 59 (23:59:00 -> 23:59:59)
    - otherwise unchanged

    The subtraction happens on the absolute timeline so a correction across
    a DST transition stays exactly one second.

    Examples:
        >>> correct_boundary(datetime(2026, 3, 16, 0, 0, tzinfo=dt_timezone.utc))
        datetime.datetime(2026, 3, 15, 23, 59, 59, tzinfo=datetime.timezone.utc)
    """
    if instant.minute == 0:
        zone = instant.tzinfo
        if zone is None:
            return instant - timedelta(seconds=1)
        return (instant.astimezone(dt_timezone.utc) - timedelta(seconds=1)).astimezone(zone)
    if instant.minute == 59:
        return instant.replace(second=59)
    return instant


def parse_deadline(
    raw: str, year: int, timezone: Optional[str] = None
) -> Optional[datetime]:
    """parse_expression() followed by correct_boundary()."""
    instant = parse_expression(raw, year, timezone)
    if instant is None:
        return None
    return correct_boundary(instant)
