from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from bibsync.adapters.zotero import ZoteroClient, ZoteroFeed, group_prefix, user_prefix
from bibsync.config.zotero import ZoteroConfig
from bibsync.domain.ports.feed import LibraryFeed, LibraryInfo, Removals
from tests.helpers.http import make_client_factory

if TYPE_CHECKING:
    from tests.helpers.http import Handler


def _feed(config: ZoteroConfig, handler: Handler) -> ZoteroFeed:
    client = ZoteroClient(config=config, client_factory=make_client_factory(handler))
    return ZoteroFeed(config=config, client=client)


def _routes(request: httpx.Request) -> httpx.Response:
    match request.url.path:
        case "/keys/current":
            return httpx.Response(200, json={"userID": 1, "username": "reader"})
        case "/users/1/groups":
            return httpx.Response(
                200, json=[{"id": 5, "version": 1, "data": {"id": 5, "name": "Lab"}}]
            )
        case "/users/1/items":
            return httpx.Response(200, json=[], headers={"Last-Modified-Version": "40"})
        case "/groups/5/items":
            return httpx.Response(
                200,
                json=[{"key": "A", "version": 3, "data": {"itemType": "book", "title": "T"}}],
                headers={"Last-Modified-Version": "12", "Total-Results": "1"},
            )
        case "/groups/5/deleted":
            return httpx.Response(200, json={"items": ["X"], "collections": ["C"]})
    return httpx.Response(404)


def test_prefixes() -> None:
    assert user_prefix(1) == "/users/1"
    assert group_prefix(5) == "/groups/5"


def test_feed_satisfies_port(zotero_config: ZoteroConfig) -> None:
    assert isinstance(_feed(zotero_config, _routes), LibraryFeed)


def test_libraries_resolve_user_from_key(zotero_config: ZoteroConfig) -> None:
    libraries = _feed(zotero_config, _routes).libraries()

    assert libraries == [
        LibraryInfo(prefix="/users/1", name="", version=40),
        LibraryInfo(prefix="/groups/5", name="Lab", version=12),
    ]


def test_configured_user_id_skips_key_lookup(zotero_config: ZoteroConfig) -> None:
    paths: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        return _routes(request)

    config = ZoteroConfig(api_key="secret", resilience=zotero_config.resilience, user_id=1)

    _feed(config, handler).libraries()

    assert "/keys/current" not in paths


def test_items_and_removals_are_plain_records(zotero_config: ZoteroConfig) -> None:
    feed = _feed(zotero_config, _routes)
    library = LibraryInfo(prefix="/groups/5", name="Lab", version=12)

    items = feed.items(library, since=0)
    removals = feed.removals(library, since=0)

    assert items == [{"itemType": "book", "title": "T", "key": "A", "version": 3}]
    assert removals == Removals(items=("X",), collections=("C",))


def test_feed_builds_its_own_client(zotero_config: ZoteroConfig) -> None:
    feed = ZoteroFeed(config=zotero_config)

    assert feed.config is zotero_config
    assert isinstance(feed.client, ZoteroClient)
