#!/usr/bin/env python3
"""
tags.py
-------
Tag selection and the board's visibility filter.

The selection maps every known tag to a checked flag. The filter is
conjunctive: an entry is shown when it carries every checked tag. With no
tag checked every entry is shown.

The selection is persisted in the local key-value store under the
deployment namespace as the list of checked tags, and is re-persisted after
every toggle.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import AbstractSet, Dict, Iterable, List, Mapping, Optional, Sequence

# --- Local imports ---
from countdown.core.exceptions import StorageError
from countdown.core.logging_manager import CountdownLogger, safe_logger
from countdown.storage.store import KeyValueStore
from .models import Entry

TagSelection = Dict[str, bool]


def is_visible(
    entry_tags: AbstractSet[str],
    selection: Mapping[str, bool],
    all_tags: Sequence[str],
) -> bool:
    """
    Whether an entry with entry_tags passes the current selection.

    Examples:
        >>> is_visible({"nlp"}, {"nlp": True, "vision": False}, ["nlp", "vision"])
        True
        >>> is_visible({"vision"}, {"nlp": True, "vision": False}, ["nlp", "vision"])
        False
    """
    return all(tag in entry_tags for tag in all_tags if selection.get(tag, False))


def toggle(tag: str, selection: Mapping[str, bool]) -> TagSelection:
    """Return a copy of selection with tag flipped (an unknown tag becomes checked)."""
    updated = dict(selection)
    updated[tag] = not selection.get(tag, False)
    return updated


def initial_selection(all_tags: Iterable[str]) -> TagSelection:
    """Nothing checked: every entry visible."""
    return {tag: False for tag in all_tags}


def selection_from_tags(selected: Iterable[str], all_tags: Sequence[str]) -> TagSelection:
    """Selection with exactly the known tags of selected checked."""
    chosen = set(selected)
    return {tag: tag in chosen for tag in all_tags}


def selected_tags(selection: Mapping[str, bool], all_tags: Sequence[str]) -> List[str]:
    """Checked tags in all_tags order."""
    return [tag for tag in all_tags if selection.get(tag, False)]


def filter_entries(
    entries: Iterable[Entry], selection: Mapping[str, bool], all_tags: Sequence[str]
) -> List[Entry]:
    return [entry for entry in entries if is_visible(entry.tag_set, selection, all_tags)]


def collect_tags(entries: Iterable[Entry]) -> List[str]:
    """Every tag used by entries, in first-seen order."""
    seen: Dict[str, None] = {}
    for entry in entries:
        for tag in entry.tags:
            seen.setdefault(tag, None)
    return list(seen)


class TagSelectionStore:
    """
    Persisted tag selection.

    Usage:
        selections = TagSelectionStore(store, "ddl.example.org")
        selection = selections.load(all_tags)
        selection = selections.toggle("nlp", all_tags)
    """

    def __init__(
        self,
        store: KeyValueStore,
        namespace: str,
        logger: Optional[CountdownLogger] = None,
    ) -> None:
        self.store = store
        self.namespace = namespace
        self.logger = safe_logger(logger)

    @property
    def key(self) -> str:
        return self.namespace

    def _read(self) -> Optional[List[str]]:
        payload = self.store.get_json(self.key)
        if payload is None:
            return None
        if not isinstance(payload, list) or not all(isinstance(tag, str) for tag in payload):
            raise StorageError(f"Stored tag selection for {self.key!r} is not a list of tags")
        return payload

    def load(self, all_tags: Sequence[str]) -> TagSelection:
        """
        Selection for this session.

        First run (nothing stored) starts with nothing checked and persists
        that. An unreadable stored value is treated as absent for the session.
        Stored tags that are no longer known are ignored.
        """
        try:
            stored = self._read()
        except StorageError as e:
            self.logger.log_warning("Tag selection unreadable, resetting", {"error": str(e)})
            return initial_selection(all_tags)

        if stored is None:
            selection = initial_selection(all_tags)
            self._persist(selection, all_tags)
            return selection

        return selection_from_tags(stored, all_tags)

    def save(self, selection: Mapping[str, bool], all_tags: Sequence[str]) -> None:
        self._persist(selection, all_tags)

    def _persist(self, selection: Mapping[str, bool], all_tags: Sequence[str]) -> None:
        try:
            self.store.set_json(self.key, selected_tags(selection, all_tags))
        except StorageError as e:
            self.logger.log_warning("Tag selection not saved", {"error": str(e)})

    def toggle(self, tag: str, all_tags: Sequence[str]) -> TagSelection:
        """
        Flip one tag and persist the result.

        Raises:
            KeyError: If tag is not one of all_tags
        """
        if tag not in all_tags:
            raise KeyError(f"Unknown tag: {tag!r}")
        selection = toggle(tag, self.load(all_tags))
        self._persist(selection, all_tags)
        self.logger.log_operation("toggle_tag", {"tag": tag, "checked": selection[tag]})
        return selection
