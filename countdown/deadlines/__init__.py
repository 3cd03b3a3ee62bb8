"""
Deadline engine.

Modules:
    - timeparse: raw expressions to instants, boundary correction
    - normalizer: configuration and dynamic records to Entry values
    - sources: remote/local dynamic sources and the merge
    - ordering: chronological board order
    - tags: tag selection and visibility filter
    - config: YAML configuration loaders
    - render: plain-text rendering
    - board: one full render cycle
"""

from .models import Entry
from .normalizer import (
    decode_tags,
    normalize_config_record,
    normalize_config_records,
    normalize_dynamic_record,
    parse_user_datetime,
)
from .ordering import order_entries, order_key, split_due
from .sources import (
    FetchResult,
    LocalDeadlineStore,
    MergeResult,
    RemoteDeadlineStore,
    SourceMerger,
    merge_entries,
    resolve_dynamic_records,
)
from .tags import TagSelectionStore, filter_entries, is_visible, toggle
from .timeparse import correct_boundary, parse_deadline, parse_expression, substitute_year

__all__ = [
    "Entry",
    "parse_expression",
    "parse_deadline",
    "substitute_year",
    "correct_boundary",
    "decode_tags",
    "normalize_config_record",
    "normalize_config_records",
    "normalize_dynamic_record",
    "parse_user_datetime",
    "FetchResult",
    "MergeResult",
    "RemoteDeadlineStore",
    "LocalDeadlineStore",
    "SourceMerger",
    "merge_entries",
    "resolve_dynamic_records",
    "order_entries",
    "order_key",
    "split_due",
    "is_visible",
    "toggle",
    "filter_entries",
    "TagSelectionStore",
]
