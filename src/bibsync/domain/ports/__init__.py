"""Domain port definitions for adapters."""

from __future__ import annotations

from .feed import LibraryFeed, LibraryInfo, Removals
from .local_store import GroupRef, LocalStore, RecordId, RecordQuery

__all__ = [
    "GroupRef",
    "LibraryFeed",
    "LibraryInfo",
    "LocalStore",
    "RecordId",
    "RecordQuery",
    "Removals",
]
