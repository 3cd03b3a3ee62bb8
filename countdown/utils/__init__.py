"""
Utilities package for countdown.

- slugify: deterministic entry identifiers
"""

from .slugify import config_entry_id, dynamic_entry_id, slugify

__all__ = [
    "slugify",
    "config_entry_id",
    "dynamic_entry_id",
]
