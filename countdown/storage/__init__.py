"""
Local key-value storage for countdown.

Exports:
    - KeyValueStore: SQLite-backed JSON store
    - KeyValue, Base: ORM model and declarative base
"""

from .models import Base, KeyValue
from .store import KeyValueStore

__all__ = ["Base", "KeyValue", "KeyValueStore"]
