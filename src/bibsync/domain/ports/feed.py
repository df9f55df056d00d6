"""Port for the remote library change feed."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from bibsync.domain.types import Record


@dataclass(frozen=True, slots=True)
class LibraryInfo:
    """Identity and current version of a remote library."""

    prefix: str
    name: str
    version: int


@dataclass(frozen=True, slots=True)
class Removals:
    """Keys deleted remotely since a given library version."""

    items: tuple[str, ...] = field(default_factory=tuple)
    collections: tuple[str, ...] = field(default_factory=tuple)


@runtime_checkable
class LibraryFeed(Protocol):
    """Ordered change stream per library.

    ``items`` must replay in the same order for the same ``since`` version;
    resuming an interrupted session relies on it.
    """

    def libraries(self) -> Sequence[LibraryInfo]: ...

    def removals(self, library: LibraryInfo, *, since: int) -> Removals: ...

    def collections(self, library: LibraryInfo, *, since: int) -> Iterable[Record]: ...

    def items(self, library: LibraryInfo, *, since: int) -> Iterable[Record]: ...


__all__ = ["LibraryFeed", "LibraryInfo", "Removals"]
