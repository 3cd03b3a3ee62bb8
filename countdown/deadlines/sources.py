#!/usr/bin/env python3
"""
sources.py
----------
Dynamic deadline sources and the merge into one board collection.

Resolution is a two-stage data flow over FetchResult values:

    remote.fetch() --ok--> remote records
          |
          err
          v
    local.load()  --ok--> local records
          |
          err
          v
    no dynamic records (configured entries only)

Exactly one of remote/local contributes; they are never combined. The
unified collection is configured entries followed by dynamic entries,
de-duplicated by id with the later entry winning.

The remote fetch is the only suspension point. SourceMerger tags each merge
with a generation number and drops results that were superseded by a newer
merge while their fetch was in flight.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

# --- Third party imports ---
import httpx

# --- Local imports ---
from countdown.core.exceptions import CountdownError, FetchError, StorageError
from countdown.core.logging_manager import CountdownLogger, safe_logger
from countdown.storage.store import KeyValueStore
from .models import SOURCE_LOCAL, SOURCE_REMOTE, Entry
from .normalizer import normalize_dynamic_records

SOURCE_NONE = "none"
DEADLINES_ENDPOINT = "/api/deadlines"


@dataclass(frozen=True)
class FetchResult:
    """
    Outcome of reading a dynamic source: records, or the error that prevented it.

    Attributes:
        records: Raw dynamic records (empty on error)
        error: The failure, or None on success
    """

    records: Tuple[Dict[str, Any], ...] = ()
    error: Optional[CountdownError] = None

    @classmethod
    def ok(cls, records: Iterable[Dict[str, Any]]) -> "FetchResult":
        return cls(records=tuple(records))

    @classmethod
    def err(cls, error: CountdownError) -> "FetchResult":
        return cls(error=error)

    def is_err(self) -> bool:
        return self.error is not None


def _object_items(payload: Any) -> List[Dict[str, Any]]:
    return [dict(item) for item in payload if isinstance(item, Mapping)]


class RemoteDeadlineStore:
    """
    Client for the remote deadline store.

    Reads GET {base_url}/api/deadlines. Authentication is a bearer token
    supplied by the caller; session handling is the server's concern.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
        logger: Optional[CountdownLogger] = None,
    ) -> None:
        """
        Args:
            base_url: Server root, e.g. "https://ddl.example.org"
            token: Optional bearer token
            timeout: Request timeout in seconds
            client: Optional shared AsyncClient (not closed by this class)
            logger: Optional logger
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._client = client
        self.logger = safe_logger(logger)

    @property
    def url(self) -> str:
        return f"{self.base_url}{DEADLINES_ENDPOINT}"

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _get(self, client: httpx.AsyncClient) -> httpx.Response:
        response = await client.get(self.url, headers=self._headers(), timeout=self.timeout)
        response.raise_for_status()
        return response

    async def fetch(self) -> FetchResult:
        """
        Fetch the user's deadlines.

        Returns:
            FetchResult.ok(records) on a 2xx JSON list, FetchResult.err(FetchError)
            on timeout, network error, an invalid URL, non-2xx status or a
            malformed body.
        """
        try:
            if self._client is not None:
                response = await self._get(self._client)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await self._get(client)
            payload = response.json()
        except httpx.TimeoutException as e:
            return self._failed(FetchError(f"Remote store timed out after {self.timeout}s: {e}"))
        except httpx.HTTPStatusError as e:
            return self._failed(
                FetchError(f"Remote store returned HTTP {e.response.status_code}")
            )
        except httpx.RequestError as e:
            return self._failed(FetchError(f"Remote store unreachable: {e}"))
        except httpx.InvalidURL as e:
            return self._failed(FetchError(f"Remote store has an invalid URL {self.url!r}: {e}"))
        except ValueError as e:
            return self._failed(FetchError(f"Remote store returned invalid JSON: {e}"))

        if not isinstance(payload, list):
            return self._failed(
                FetchError(f"Remote store returned {type(payload).__name__}, expected a list")
            )

        records = _object_items(payload)
        self.logger.log_operation(
            "remote_fetch", {"url": self.url, "records": len(records), "skipped": len(payload) - len(records)}
        )
        return FetchResult.ok(records)

    def _failed(self, error: FetchError) -> FetchResult:
        self.logger.log_warning("Remote fetch failed", {"url": self.url, "error": str(error)})
        return FetchResult.err(error)


class LocalDeadlineStore:
    """
    User-contributed deadlines kept in the local key-value store.

    Stored under "<namespace>:custom_deadlines" as a JSON list of
    {name, details, datetime, tags} records.
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
        return f"{self.namespace}:custom_deadlines"

    def load(self) -> FetchResult:
        """
        Read the stored list.

        Returns:
            ok([]) when nothing is stored, ok(records) for a stored list,
            err(StorageError) when the store fails or holds something else.
        """
        try:
            payload = self.store.get_json(self.key, default=[])
        except StorageError as e:
            self.logger.log_warning("Local deadlines unreadable", {"key": self.key, "error": str(e)})
            return FetchResult.err(e)

        if not isinstance(payload, list):
            error = StorageError(f"Stored value for {self.key!r} is not a list")
            self.logger.log_warning("Local deadlines malformed", {"key": self.key})
            return FetchResult.err(error)

        return FetchResult.ok(_object_items(payload))

    def records(self) -> List[Dict[str, Any]]:
        """Stored records, or an empty list if the stored value is unusable."""
        result = self.load()
        return list(result.records)

    def save(self, records: Sequence[Mapping[str, Any]]) -> None:
        self.store.set_json(self.key, [dict(record) for record in records])
        self.logger.log_operation("local_save", {"key": self.key, "records": len(records)})

    def append(self, record: Mapping[str, Any]) -> int:
        """Append one record. Returns its index."""
        records = self.records()
        records.append(dict(record))
        self.save(records)
        return len(records) - 1

    def remove(self, index: int) -> Dict[str, Any]:
        """
        Remove the record at index.

        Raises:
            IndexError: If no record has that index
        """
        records = self.records()
        if not 0 <= index < len(records):
            raise IndexError(f"No local deadline at index {index}")
        removed = records.pop(index)
        self.save(records)
        return removed


async def resolve_dynamic_records(
    remote: Optional[RemoteDeadlineStore],
    local: Optional[LocalDeadlineStore],
    logger: Optional[CountdownLogger] = None,
) -> Tuple[List[Dict[str, Any]], str]:
    """
    Pick the dynamic records for this render.

    Args:
        remote: Remote store, or None when no server is configured
        local: Local store, or None to disable the fallback
        logger: Optional logger

    Returns:
        (records, source) where source is 'remote', 'local' or 'none'
    """
    log = safe_logger(logger)

    if remote is not None:
        result = await remote.fetch()
        if not result.is_err():
            return list(result.records), SOURCE_REMOTE
        log.log_info("Falling back to local deadlines", {"error": str(result.error)})

    if local is not None:
        result = local.load()
        if not result.is_err():
            return list(result.records), SOURCE_LOCAL

    return [], SOURCE_NONE


def merge_entries(
    config_entries: Iterable[Entry], dynamic_entries: Iterable[Entry]
) -> List[Entry]:
    """
    Union of configured and dynamic entries, unique by id.

    On an id collision the later entry replaces the earlier one in the
    earlier one's position.
    """
    unified: Dict[str, Entry] = {}
    for entry in list(config_entries) + list(dynamic_entries):
        unified[entry.id] = entry
    return list(unified.values())


@dataclass(frozen=True)
class MergeResult:
    """
    Unified collection produced by one merge.

    Attributes:
        entries: Configured + dynamic entries, unique by id
        source: Which dynamic source contributed ('remote', 'local', 'none')
        generation: Merge generation that produced this result
        dynamic_count: Number of dynamic entries before de-duplication
    """

    entries: Tuple[Entry, ...] = field(default_factory=tuple)
    source: str = SOURCE_NONE
    generation: int = 0
    dynamic_count: int = 0


class SourceMerger:
    """
    Merges configured entries with the dynamic source of the moment.

    Usage:
        merger = SourceMerger(remote, local, timezone="Europe/Paris")
        result = await merger.merge(config_entries)
        if result is not None:
            board = result.entries
    """

    def __init__(
        self,
        remote: Optional[RemoteDeadlineStore],
        local: Optional[LocalDeadlineStore],
        timezone: Optional[str] = None,
        logger: Optional[CountdownLogger] = None,
    ) -> None:
        self.remote = remote
        self.local = local
        self.timezone = timezone
        self.logger = logger
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    async def merge(self, config_entries: Sequence[Entry]) -> Optional[MergeResult]:
        """
        Build the unified collection.

        Returns:
            MergeResult, or None if a newer merge started while this one was
            waiting on the remote store.
        """
        self._generation += 1
        generation = self._generation
        log = safe_logger(self.logger)

        records, source = await resolve_dynamic_records(self.remote, self.local, self.logger)

        if generation != self._generation:
            log.log_info(
                "Discarding stale merge", {"generation": generation, "current": self._generation}
            )
            return None

        dynamic_source = source if source != SOURCE_NONE else SOURCE_LOCAL
        dynamic_entries = normalize_dynamic_records(
            records, dynamic_source, self.timezone, self.logger
        )
        entries = merge_entries(config_entries, dynamic_entries)

        log.log_operation(
            "merge",
            {
                "generation": generation,
                "source": source,
                "config": len(config_entries),
                "dynamic": len(dynamic_entries),
                "unified": len(entries),
            },
        )
        return MergeResult(
            entries=tuple(entries),
            source=source,
            generation=generation,
            dynamic_count=len(dynamic_entries),
        )
