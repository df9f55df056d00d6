"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from bibsync.adapters.sqlalchemy import get_local_store, is_started, startup
from bibsync.adapters.zotero import ZoteroFeed
from bibsync.config.sync import get_sync_config
from bibsync.domain.sync import Store, SyncSummary, sync_libraries

if TYPE_CHECKING:
    from collections.abc import Collection

    from bibsync.config.sync import SyncConfig
    from bibsync.domain.ports import LibraryFeed, LocalStore


log = getLogger(__name__)


def _resolve_local_store(local_store: LocalStore | None) -> LocalStore:
    if local_store is not None:
        return local_store
    if not is_started():
        startup()
    return get_local_store()


def sync_zotero_libraries(
    *,
    feed: LibraryFeed | None = None,
    local_store: LocalStore | None = None,
    sync_config: SyncConfig | None = None,
    only: Collection[str] | None = None,
) -> SyncSummary:
    """Synchronise Zotero libraries into the local store using the configured adapters."""

    config = sync_config or get_sync_config()
    channel = _resolve_local_store(local_store)
    effective_feed = feed or ZoteroFeed()
    log.info(
        "Starting Zotero sync: max_tries=%s, checkpoint_interval=%s, libraries=%s",
        config.max_tries,
        config.checkpoint_interval,
        ",".join(only) if only else "all",
    )

    store = Store(
        channel,
        max_tries=config.max_tries,
        checkpoint_interval=config.checkpoint_interval,
    )
    summary = sync_libraries(effective_feed, store, only=only)

    log.info(
        f"Finished Zotero sync: libraries={len(summary.libraries)}, synced={summary.synced}, "
        f"added={summary.inserted}, updated={summary.updated}, removed={summary.removed}"
    )
    return summary


def remove_library(prefix: str, *, local_store: LocalStore | None = None) -> None:
    """Forget a synced library; its records stay in the local store."""

    store = Store(_resolve_local_store(local_store))
    store.remove(prefix)
