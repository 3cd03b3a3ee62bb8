"""
Key-Value Models
----------------

ORM model for the local key-value store.

Classes:
    - Base: Declarative base for the store
    - KeyValue: One namespaced JSON value
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime, timezone

# --- Third party ---
from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class KeyValue(Base):
    """
    A single stored value.

    Keys are namespaced by the caller ("<namespace>" for tag selections,
    "<namespace>:custom_deadlines" for user-contributed deadlines). Values
    are JSON text; decoding happens in the store.
    """

    __tablename__ = "key_values"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<KeyValue(key={self.key!r})>"
