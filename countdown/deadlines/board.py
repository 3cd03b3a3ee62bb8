#!/usr/bin/env python3
"""
board.py
--------
One render cycle of the deadline board.

    conferences.yml --normalize--> configured entries --+
                                                        +--merge--> unified --order--> filter --> BoardView
    remote store / local store --normalize--> dynamic --+

The configuration is re-read on every refresh and is immutable for that
cycle. A refresh superseded by a newer one while waiting on the remote store
returns None.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from datetime import datetime, timezone as dt_timezone
from pathlib import Path
from typing import Dict, List, Optional, Tuple

# --- Third party imports ---
import httpx

# --- Local imports ---
from countdown.core.cli import RenderStats
from countdown.core.logging_manager import CountdownLogger, safe_logger
from countdown.core.settings import Settings
from countdown.storage.store import KeyValueStore
from .config import TagType, load_conferences, load_tag_types
from .models import Entry
from .normalizer import normalize_config_records
from .ordering import order_entries
from .sources import LocalDeadlineStore, RemoteDeadlineStore, SourceMerger
from .tags import TagSelectionStore, collect_tags, filter_entries, initial_selection


@dataclass(frozen=True)
class BoardView:
    """
    Result of one refresh.

    Attributes:
        entries: Ordered entries passing the tag filter
        ordered: Ordered entries before filtering
        selection: Tag selection applied
        tag_types: Filterable tags in display order
        now: Reference time of the ordering
        stats: Counters for the cycle
    """

    entries: Tuple[Entry, ...]
    ordered: Tuple[Entry, ...]
    selection: Dict[str, bool]
    tag_types: Tuple[TagType, ...]
    now: datetime
    stats: RenderStats = field(default_factory=RenderStats)

    @property
    def all_tags(self) -> List[str]:
        return [tag_type.tag for tag_type in self.tag_types]


class DeadlineBoard:
    """
    Wires configuration, sources, ordering and tag filtering together.

    Usage:
        board = DeadlineBoard.from_settings(settings, store, logger)
        view = await board.refresh()
    """

    def __init__(
        self,
        conferences_path: Path,
        types_path: Optional[Path],
        merger: SourceMerger,
        selections: Optional[TagSelectionStore] = None,
        logger: Optional[CountdownLogger] = None,
    ) -> None:
        self.conferences_path = Path(conferences_path)
        self.types_path = Path(types_path) if types_path else None
        self.merger = merger
        self.selections = selections
        self.logger = logger

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        store: KeyValueStore,
        logger: Optional[CountdownLogger] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> "DeadlineBoard":
        remote = None
        if settings.api_url:
            remote = RemoteDeadlineStore(
                settings.api_url,
                token=settings.api_token,
                timeout=settings.timeout,
                client=client,
                logger=logger,
            )
        local = LocalDeadlineStore(store, settings.namespace, logger)
        merger = SourceMerger(remote, local, timezone=settings.timezone, logger=logger)
        return cls(
            settings.conferences_path,
            settings.types_path,
            merger,
            selections=TagSelectionStore(store, settings.namespace, logger),
            logger=logger,
        )

    def _tag_types(self, entries: List[Entry]) -> List[TagType]:
        if self.types_path is not None and self.types_path.is_file():
            return load_tag_types(self.types_path)
        return [TagType(tag=tag, name=tag) for tag in collect_tags(entries)]

    async def refresh(
        self, now: Optional[datetime] = None, apply_filter: bool = True
    ) -> Optional[BoardView]:
        """
        Run one render cycle.

        Args:
            now: Reference time (default: current UTC time)
            apply_filter: Apply the persisted tag selection

        Returns:
            BoardView, or None if a newer refresh superseded this one

        Raises:
            ConfigError: If the configuration files cannot be loaded
        """
        log = safe_logger(self.logger)
        stats = RenderStats()
        now = now or datetime.now(dt_timezone.utc)

        config_entries = normalize_config_records(
            load_conferences(self.conferences_path), self.logger
        )
        result = await self.merger.merge(config_entries)
        if result is None:
            return None

        ordered = order_entries(result.entries, now)
        tag_types = self._tag_types(ordered)
        all_tags = [tag_type.tag for tag_type in tag_types]

        if apply_filter and self.selections is not None:
            selection = self.selections.load(all_tags)
        else:
            selection = initial_selection(all_tags)
        visible = filter_entries(ordered, selection, all_tags)

        stats.config_entries = len(config_entries)
        stats.dynamic_entries = result.dynamic_count
        stats.dynamic_source = result.source
        stats.unspecified = sum(1 for entry in ordered if entry.is_unspecified)
        stats.visible = len(visible)
        log.log_operation("refresh", {"summary": stats.summary(), "generation": result.generation})

        return BoardView(
            entries=tuple(visible),
            ordered=tuple(ordered),
            selection=selection,
            tag_types=tuple(tag_types),
            now=now,
            stats=stats,
        )
