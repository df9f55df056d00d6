"""Port for the local bibliographic store.

Implementations raise ``TransientError`` for timeouts, ``NotFoundError`` for
missing records or groups and ``FatalError`` for anything else, each carrying
the command that failed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from bibsync.domain.types import Record, RecordView

type RecordId = int


@dataclass(frozen=True, slots=True)
class GroupRef:
    """Handle of a group (a named set of records) in the local store."""

    id: int
    name: str


@dataclass(frozen=True, slots=True)
class RecordQuery:
    """Exact match of one record property."""

    field: str
    value: str


@runtime_checkable
class LocalStore(Protocol):
    """Typed command/query capability against the local store."""

    def search(self, query: RecordQuery) -> list[Record]:
        """Return matching records; each carries its store ``id``."""
        ...

    def insert(self, record: RecordView, group: GroupRef) -> RecordId: ...

    def update(self, record_id: RecordId, changes: RecordView) -> None: ...

    def delete(self, record_id: RecordId) -> None: ...

    def find_group(self, pattern: str) -> GroupRef | None:
        """Return the first group whose name contains ``pattern``."""
        ...

    def create_group(self, name: str) -> GroupRef: ...

    def rename_group(self, group: GroupRef, new_name: str) -> GroupRef: ...

    def delete_group(self, group: GroupRef) -> None: ...


__all__ = ["GroupRef", "LocalStore", "RecordId", "RecordQuery"]
