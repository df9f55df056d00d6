"""In-memory change feed and item builders."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from bibsync.domain.ports.feed import LibraryFeed, LibraryInfo, Removals

if TYPE_CHECKING:
    from collections.abc import Iterable

    from bibsync.domain.types import Record, Value


def make_item(
    key: str,
    title: str | None = None,
    *,
    item_type: str = "journalArticle",
    **fields: Value,
) -> Record:
    """Create a Zotero item payload with a single author."""

    item: Record = {
        "key": key,
        "version": 1,
        "itemType": item_type,
        "title": title or f"Title of {key}",
        "creators": [{"creatorType": "author", "lastName": "Smith", "firstName": "John"}],
    }
    item.update(fields)
    return item


def make_items(count: int, *, prefix: str = "ITEM") -> list[Record]:
    return [make_item(f"{prefix}{index:04d}") for index in range(count)]


@dataclass
class FakeFeed(LibraryFeed):
    """Serves fixed libraries and records every request it receives."""

    library_list: list[LibraryInfo] = field(default_factory=list)
    item_lists: dict[str, list[Record]] = field(default_factory=dict)
    collection_lists: dict[str, list[Record]] = field(default_factory=dict)
    removal_map: dict[str, Removals] = field(default_factory=dict)
    requests: list[tuple[str, str, int]] = field(default_factory=list)

    def add_library(
        self,
        prefix: str,
        *,
        name: str = "",
        version: int = 1,
        items: Iterable[Record] = (),
        removals: Removals | None = None,
    ) -> LibraryInfo:
        library = LibraryInfo(prefix=prefix, name=name, version=version)
        self.library_list.append(library)
        self.item_lists[prefix] = list(items)
        if removals is not None:
            self.removal_map[prefix] = removals
        return library

    def libraries(self) -> list[LibraryInfo]:
        return list(self.library_list)

    def removals(self, library: LibraryInfo, *, since: int) -> Removals:
        self.requests.append(("removals", library.prefix, since))
        return self.removal_map.get(library.prefix, Removals())

    def collections(self, library: LibraryInfo, *, since: int) -> list[Record]:
        self.requests.append(("collections", library.prefix, since))
        return list(self.collection_lists.get(library.prefix, []))

    def items(self, library: LibraryInfo, *, since: int) -> list[Record]:
        self.requests.append(("items", library.prefix, since))
        return list(self.item_lists.get(library.prefix, []))
