#!/usr/bin/env python3
"""
store.py
--------------------
SQLite-backed key-value store for countdown.

Holds the two pieces of client-side state the board keeps between runs:
the user-contributed deadline list and the tag selection. Values are JSON.

Key Features:
    - Transaction management with automatic rollback
    - Schema created on first open
    - Every SQLAlchemy or JSON failure surfaces as StorageError

Usage:
    store = KeyValueStore(STORE_PATH)
    store.set_json("site:custom_deadlines", [{"name": "Draft", ...}])
    records = store.get_json("site:custom_deadlines", default=[])
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Iterator, List, Optional, Union

# --- Third party ---
from sqlalchemy import Engine, create_engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

# --- Local imports ---
from countdown.core.exceptions import StorageError
from countdown.core.logging_manager import CountdownLogger, safe_logger
from .models import Base, KeyValue

_MISSING = object()


class KeyValueStore:
    """
    Namespaced JSON values in a single SQLite table.

    Attributes:
        db_path: Resolved path of the SQLite file
        engine: SQLAlchemy engine
        SessionLocal: Session factory
    """

    def __init__(
        self,
        db_path: Union[str, Path],
        logger: Optional[CountdownLogger] = None,
    ) -> None:
        """
        Open (and create if needed) the store.

        Args:
            db_path: Path to the SQLite file
            logger: Optional logger

        Raises:
            StorageError: If the database cannot be opened or created
        """
        self.db_path = Path(db_path).expanduser().resolve()
        self.logger = safe_logger(logger)
        self._setup_engine()

    def _setup_engine(self) -> None:
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self.engine: Engine = create_engine(
                f"sqlite:///{self.db_path}",
                echo=False,
                future=True,
            )
            self.SessionLocal: sessionmaker = sessionmaker(
                bind=self.engine,
                expire_on_commit=False,
                future=True,
            )
            Base.metadata.create_all(self.engine)
            self.logger.log_debug("store_open", {"db_path": str(self.db_path)})
        except (OSError, SQLAlchemyError) as e:
            self.logger.log_error(e, {"operation": "store_open"})
            raise StorageError(f"Cannot open local store {self.db_path}: {e}") from e

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Provide a transactional scope around store operations.

        Commits on success, rolls back on any error. SQLAlchemy errors are
        re-raised as StorageError.
        """
        session = self.SessionLocal()
        session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            self.logger.log_error(
                e, {"operation": "session_rollback", "session_id": session_id}
            )
            raise StorageError(f"Local store operation failed: {e}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        self.engine.dispose()

    # ---- Raw access ----
    def get(self, key: str) -> Optional[str]:
        with self.session_scope() as session:
            row = session.get(KeyValue, key)
            return row.value if row is not None else None

    def set(self, key: str, value: str) -> None:
        with self.session_scope() as session:
            row = session.get(KeyValue, key)
            if row is None:
                session.add(KeyValue(key=key, value=value))
            else:
                row.value = value

    def delete(self, key: str) -> bool:
        """Remove a key. Returns True if it existed."""
        with self.session_scope() as session:
            row = session.get(KeyValue, key)
            if row is None:
                return False
            session.delete(row)
            return True

    def keys(self) -> List[str]:
        with self.session_scope() as session:
            return list(session.scalars(select(KeyValue.key).order_by(KeyValue.key)))

    # ---- JSON access ----
    def get_json(self, key: str, default: Any = None) -> Any:
        """
        Read and decode a JSON value.

        Args:
            key: Store key
            default: Returned when the key is absent

        Raises:
            StorageError: If the stored text is not valid JSON
        """
        raw = self.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Stored value for {key!r} is not valid JSON: {e}") from e

    def set_json(self, key: str, value: Any) -> None:
        try:
            encoded = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Value for {key!r} is not JSON serializable: {e}") from e
        self.set(key, encoded)
        self.logger.log_debug("store_write", {"key": key})
