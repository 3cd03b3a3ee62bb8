#!/usr/bin/env python3
"""
normalizer.py
-------------
Raw records to canonical Entry values.

Two record shapes reach the normalizer:

Configuration records (conferences.yml), one item with one or more rounds:
    {name, year, deadline: str | [str, ...], timezone, description, link, place, tags}

Dynamic records (remote store or local store), one user-contributed deadline:
    {name, details, datetime, tags: [str, ...] | "<json list>"}

A bad deadline string, a bad datetime, or a bad tag field never fails the
batch: the affected entry is kept with an unspecified instant or no tags.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional, Tuple

# --- Third party imports ---
from dateutil import tz

# --- Local imports ---
from countdown.core.exceptions import MalformedTagError, ParseError, ValidationError
from countdown.core.logging_manager import CountdownLogger, safe_logger
from countdown.utils.slugify import config_entry_id, dynamic_entry_id
from .models import SOURCE_CONFIG, SOURCE_LOCAL, Entry
from .timeparse import (
    TBA,
    correct_boundary,
    localize,
    parse_deadline,
    parse_timestamp,
    resolve_zone,
)

UNTITLED = "Untitled"


# ----- Tags -----

def _clean_tags(values: Iterable[Any]) -> Tuple[str, ...]:
    tags: List[str] = []
    for value in values:
        tag = str(value).strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tuple(tags)


def parse_tags(value: Any) -> Tuple[str, ...]:
    """
    Decode a tag field.

    Args:
        value: None, a list of tags, or a JSON-encoded list

    Returns:
        Tags in their original order, stripped and de-duplicated

    Raises:
        MalformedTagError: If the value is neither a list nor a JSON list
    """
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return _clean_tags(value)
    if isinstance(value, str):
        if not value.strip():
            return ()
        try:
            decoded = json.loads(value)
        except json.JSONDecodeError as e:
            raise MalformedTagError(f"Tags JSON did not decode: {value!r}") from e
        if not isinstance(decoded, list):
            raise MalformedTagError(f"Tags JSON is not a list: {value!r}")
        return _clean_tags(decoded)
    raise MalformedTagError(f"Unsupported tags value: {type(value).__name__}")


def decode_tags(
    value: Any, logger: Optional[CountdownLogger] = None, record_name: str = ""
) -> Tuple[str, ...]:
    """parse_tags() that recovers from MalformedTagError with an empty tag set."""
    try:
        return parse_tags(value)
    except MalformedTagError as e:
        safe_logger(logger).log_warning(
            "Malformed tags, using none", {"record": record_name, "error": str(e)}
        )
        return ()


def _config_tags(record: Mapping[str, Any]) -> Tuple[str, ...]:
    value = record.get("tags", record.get("sub"))
    if isinstance(value, str) and not value.lstrip().startswith("["):
        return _clean_tags([value])
    return parse_tags(value)


# ----- Configuration records -----

def _require_name(record: Mapping[str, Any]) -> str:
    name = record.get("name")
    if name is None or not str(name).strip():
        raise ValidationError("Configuration record missing 'name'")
    return str(name).strip()


def _require_year(record: Mapping[str, Any], name: str) -> int:
    year = record.get("year")
    if isinstance(year, bool):
        raise ValidationError(f"Invalid year for {name!r}: {year!r}")
    try:
        return int(year)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid year for {name!r}: {year!r}")


def normalize_config_record(
    record: Mapping[str, Any], logger: Optional[CountdownLogger] = None
) -> List[Entry]:
    """
    Turn one configured item into one Entry per deadline round.

    A deadline list starting with "TBA" yields a single unspecified Entry
    at index 0. Otherwise each raw expression maps to the Entry with the
    same index; an expression that cannot be parsed yields an unspecified
    Entry and a warning.

    Args:
        record: Configuration record
        logger: Optional logger

    Returns:
        Entries in deadline-list order

    Raises:
        ValidationError: If the record has no name or no integer year
    """
    log = safe_logger(logger)

    if not isinstance(record, Mapping):
        raise ValidationError(f"Configuration record must be a mapping, got {type(record).__name__}")

    name = _require_name(record)
    year = _require_year(record, name)
    timezone = record.get("timezone") or None

    raw_deadlines = record.get("deadline")
    if raw_deadlines is None:
        raw_deadlines = [TBA]
    elif not isinstance(raw_deadlines, (list, tuple)):
        raw_deadlines = [raw_deadlines]

    try:
        tags = _config_tags(record)
    except MalformedTagError as e:
        log.log_warning("Malformed tags, using none", {"record": name, "error": str(e)})
        tags = ()

    common = dict(
        name=name,
        details=record.get("description") or record.get("details") or None,
        tags=tags,
        source=SOURCE_CONFIG,
        year=year,
        link=record.get("link") or None,
        place=record.get("place") or None,
        timezone=timezone,
    )

    if not raw_deadlines or raw_deadlines[0] == TBA:
        return [Entry(id=config_entry_id(name, year, 0), instant=None, **common)]

    entries: List[Entry] = []
    for index, raw in enumerate(raw_deadlines):
        try:
            instant = parse_deadline(raw, year, timezone)
        except ParseError as e:
            log.log_warning(
                "Unparseable deadline, marking as TBA",
                {"record": name, "year": year, "index": index, "error": str(e)},
            )
            instant = None
        entries.append(Entry(id=config_entry_id(name, year, index), instant=instant, **common))

    return entries


def normalize_config_records(
    records: Iterable[Mapping[str, Any]], logger: Optional[CountdownLogger] = None
) -> List[Entry]:
    """
    Normalize a whole configuration list, skipping invalid records.

    Returns:
        Entries of every valid record, in configuration order
    """
    log = safe_logger(logger)
    entries: List[Entry] = []
    skipped = 0

    for position, record in enumerate(records):
        try:
            entries.extend(normalize_config_record(record, logger))
        except ValidationError as e:
            skipped += 1
            log.log_warning("Skipping configuration record", {"position": position, "error": str(e)})

    log.log_operation("normalize_config", {"entries": len(entries), "skipped": skipped})
    return entries


# ----- Dynamic records -----

def parse_user_datetime(
    value: Optional[str], timezone: Optional[str] = None
) -> Optional[datetime]:
    """
    Permissively parse a user-submitted datetime.

    Tries the value as-is, then with ':00' appended (a truncated 'HH:mm'
    value), and gives up with None. Naive values are read in timezone, or
    in the host's local zone when timezone is None. The result is
    boundary-corrected like any configured deadline.

    Examples:
        >>> parse_user_datetime("2026-05-01 10:30", "UTC").isoformat()
        '2026-05-01T10:30:00+00:00'
        >>> parse_user_datetime("soon") is None
        True
    """
    if not value or not isinstance(value, str):
        return None

    parsed: Optional[datetime] = None
    for candidate in (value, f"{value}:00"):
        try:
            parsed = parse_timestamp(candidate)
            break
        except ParseError:
            continue
    if parsed is None:
        return None

    if timezone:
        try:
            zone = resolve_zone(timezone)
        except ParseError:
            return None
    else:
        zone = tz.tzlocal()
    return correct_boundary(localize(parsed, zone))


def normalize_dynamic_record(
    record: Mapping[str, Any],
    index: int,
    source: str = SOURCE_LOCAL,
    timezone: Optional[str] = None,
    logger: Optional[CountdownLogger] = None,
) -> Entry:
    """
    Turn one user-contributed record into exactly one Entry.

    Args:
        record: Dynamic record ({name, details, datetime, tags})
        index: Position of the record in its source list
        source: 'remote' or 'local'
        timezone: Zone for naive datetimes (None = host zone)
        logger: Optional logger
    """
    log = safe_logger(logger)

    name = str(record.get("name") or "").strip() or UNTITLED
    raw_datetime = record.get("datetime")
    datetime_text = str(raw_datetime).strip() if raw_datetime else ""

    instant = parse_user_datetime(datetime_text, timezone) if datetime_text else None
    if datetime_text and instant is None:
        log.log_warning(
            "Unparseable user datetime, marking as TBA",
            {"record": name, "datetime": datetime_text},
        )

    return Entry(
        id=dynamic_entry_id(name, datetime_text, index),
        name=name,
        details=record.get("details") or None,
        instant=instant,
        tags=decode_tags(record.get("tags"), logger, name),
        source=source,
        timezone=timezone,
    )


def normalize_dynamic_records(
    records: Iterable[Any],
    source: str,
    timezone: Optional[str] = None,
    logger: Optional[CountdownLogger] = None,
) -> List[Entry]:
    """Normalize a dynamic list; non-mapping items are skipped but keep their index."""
    log = safe_logger(logger)
    entries: List[Entry] = []
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            log.log_warning("Skipping non-object deadline record", {"source": source, "index": index})
            continue
        entries.append(normalize_dynamic_record(record, index, source, timezone, logger))
    return entries
