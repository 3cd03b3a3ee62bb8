#!/usr/bin/env python3
"""
slugify.py
----------
Deterministic slugs for entry identifiers.

Entry ids are pure functions of an entry's identifying fields, so the same
configuration or stored record always yields the same id, independent of how
the board is rendered.

Usage:
    from countdown.utils.slugify import config_entry_id, dynamic_entry_id

    config_entry_id("ConfX", 2026, 0)                   # "confx2026-0"
    dynamic_entry_id("My Paper", "2026-03-01 12:00", 2)  # "my-paper-2026-03-01-12-00-2"
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
import unicodedata
from typing import Optional

_NON_ALNUM = re.compile(r"[^a-z0-9]+")

# Bound on the name part of an entry id. Year, datetime and index are never cut.
NAME_MAX_LENGTH = 200


def slugify(text: Optional[str], max_length: Optional[int] = 200) -> str:
    """
    Convert text to an id-safe slug.

    Accents are folded to ASCII, the text is lowercased, and every run of
    characters outside [a-z0-9] becomes a single hyphen. Leading and
    trailing hyphens are stripped.

    Args:
        text: Input text to slugify
        max_length: Maximum slug length (default 200, None for no limit)

    Returns:
        Slug string (empty for empty input)

    Examples:
        >>> slugify("ICML 2026-0")
        'icml-2026-0'
        >>> slugify("Café (Montréal)")
        'cafe-montreal'
        >>> slugify("  --ACL--  ")
        'acl'
    """
    if not text:
        return ""

    text = unicodedata.normalize("NFKD", text)
    text = text.encode("ascii", "ignore").decode("ascii")
    text = _NON_ALNUM.sub("-", text.lower()).strip("-")

    if max_length is not None and len(text) > max_length:
        text = text[:max_length].rstrip("-")

    return text


def config_entry_id(name: str, year: int, index: int) -> str:
    """
    Id of the index-th deadline of a configured item.

    Examples:
        >>> config_entry_id("ConfX", 2026, 0)
        'confx2026-0'
    """
    return slugify(f"{slugify(name, NAME_MAX_LENGTH)}{year}-{index}", max_length=None)


def dynamic_entry_id(name: str, datetime_text: Optional[str], index: int) -> str:
    """
    Id of the index-th user-contributed deadline.

    Examples:
        >>> dynamic_entry_id("Thesis draft", "2026-05-01T09:30", 0)
        'thesis-draft-2026-05-01t09-30-0'
        >>> dynamic_entry_id("Untitled", None, 3)
        'untitled-3'
    """
    return slugify(
        f"{slugify(name, NAME_MAX_LENGTH)}-{datetime_text or ''}-{index}", max_length=None
    )
