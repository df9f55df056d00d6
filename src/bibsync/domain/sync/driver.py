"""Feed consumer: drives one session per remote library."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .library import describe_item

if TYPE_CHECKING:
    from collections.abc import Collection

    from bibsync.domain.ports.feed import LibraryFeed, LibraryInfo

    from .library import LibrarySession, SessionStats
    from .store import Store

log = getLogger(__name__)


class SyncError(RuntimeError):
    """A library could not be synchronised."""

    def __init__(
        self,
        prefix: str,
        message: str,
        *,
        item: str | None = None,
        command: str | None = None,
    ) -> None:
        parts = [f"Syncing library {prefix} failed: {message}"]
        if item is not None:
            parts.append(f"while processing {item}")
        if command is not None:
            parts.append(f"last command: {command}")
        super().__init__("; ".join(parts))
        self.prefix = prefix
        self.item = item
        self.command = command


@dataclass(slots=True)
class LibraryResult:
    prefix: str
    name: str
    version: int
    up_to_date: bool = False
    inserted: int = 0
    updated: int = 0
    unchanged: int = 0
    skipped: int = 0
    removed: int = 0

    def record(self, stats: SessionStats) -> None:
        self.inserted = stats.inserted
        self.updated = stats.updated
        self.unchanged = stats.unchanged
        self.skipped = stats.skipped
        self.removed = stats.removed


@dataclass(slots=True)
class SyncSummary:
    libraries: list[LibraryResult] = field(default_factory=list)

    @property
    def synced(self) -> int:
        return sum(1 for result in self.libraries if not result.up_to_date)

    @property
    def inserted(self) -> int:
        return sum(result.inserted for result in self.libraries)

    @property
    def updated(self) -> int:
        return sum(result.updated for result in self.libraries)

    @property
    def removed(self) -> int:
        return sum(result.removed for result in self.libraries)


def sync_libraries(
    feed: LibraryFeed,
    store: Store,
    *,
    only: Collection[str] | None = None,
) -> SyncSummary:
    """Bring every (or every selected) remote library up to date locally."""

    summary = SyncSummary()
    for library in feed.libraries():
        if only is not None and library.prefix not in only:
            log.debug("Skipping library %s", library.prefix)
            continue
        summary.libraries.append(_sync_library(feed, store, library))
    return summary


def _sync_library(feed: LibraryFeed, store: Store, library: LibraryInfo) -> LibraryResult:
    result = LibraryResult(prefix=library.prefix, name=library.name, version=library.version)
    session: LibrarySession | None = None
    current: str | None = None
    try:
        session = store.get(library.prefix)
        if session.version == library.version and not session.is_new:
            log.info("Library %s '%s' is up to date", library.prefix, library.name)
            result.up_to_date = True
            return result

        since = session.version
        log.info(
            "Syncing library %s '%s' from version %s to %s",
            library.prefix,
            library.name,
            since,
            library.version,
        )
        removals = feed.removals(library, since=since)
        session.remove_collections(removals.collections)
        session.remove(removals.items)
        for collection in feed.collections(library, since=since):
            session.add_collection(collection)
        for item in feed.items(library, since=since):
            current = describe_item(item)
            session.add(item)
        current = None
        session.save(library.name, library.version)
    except KeyboardInterrupt:
        if session is not None:
            session.interrupt()
        raise
    except Exception as exc:
        command = session.last_command if session is not None else None
        raise SyncError(library.prefix, str(exc), item=current, command=command) from exc

    result.record(session.stats)
    log.info(
        "Library %s: %s added, %s updated, %s removed",
        library.prefix,
        result.inserted,
        result.updated,
        result.removed,
    )
    return result
