"""Zotero change feed implementing the ``LibraryFeed`` port."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from bibsync.config.zotero import get_zotero_config
from bibsync.domain.ports.feed import LibraryInfo, Removals

from .client import ZoteroClient

if TYPE_CHECKING:
    from bibsync.config.zotero import ZoteroConfig
    from bibsync.domain.ports.feed import LibraryFeed
    from bibsync.domain.types import Record

log = getLogger(__name__)


def user_prefix(user_id: int) -> str:
    return f"/users/{user_id}"


def group_prefix(group_id: int) -> str:
    return f"/groups/{group_id}"


class ZoteroFeed:
    """Reads the user library and every group library the API key can access."""

    def __init__(
        self, config: ZoteroConfig | None = None, client: ZoteroClient | None = None
    ) -> None:
        self.config = config if config is not None else get_zotero_config()
        self.client = client if client is not None else ZoteroClient(config=self.config)

    def libraries(self) -> list[LibraryInfo]:
        user_id = self.config.user_id
        if user_id is None:
            key_info = self.client.current_key()
            user_id = key_info.user_id
            log.debug("API key belongs to user %s (%s)", user_id, key_info.username)

        prefix = user_prefix(user_id)
        # an empty name makes the session fall back to its default label
        libraries = [
            LibraryInfo(prefix=prefix, name="", version=self.client.library_version(prefix))
        ]
        for group in self.client.groups(user_id):
            prefix = group_prefix(group.id)
            libraries.append(
                LibraryInfo(
                    prefix=prefix,
                    name=group.data.name,
                    version=self.client.library_version(prefix),
                )
            )
        return libraries

    def removals(self, library: LibraryInfo, *, since: int) -> Removals:
        deleted = self.client.deleted(library.prefix, since=since)
        return Removals(items=tuple(deleted.items), collections=tuple(deleted.collections))

    def collections(self, library: LibraryInfo, *, since: int) -> list[Record]:
        return [entry.record() for entry in self.client.collections(library.prefix, since=since)]

    def items(self, library: LibraryInfo, *, since: int) -> list[Record]:
        entries = self.client.items(library.prefix, since=since)
        log.info("%s changed items in library %s", len(entries), library.prefix)
        return [entry.record() for entry in entries]


if TYPE_CHECKING:
    _feed_check: LibraryFeed = ZoteroFeed()
