from __future__ import annotations

from bibsync.domain.sync import SessionState, Store, anchor_pattern
from tests.helpers.feed import make_item
from tests.helpers.local_store import FakeLocalStore


def test_get_initialises_sessions_and_tracks_prefixes() -> None:
    channel = FakeLocalStore()
    store = Store(channel, checkpoint_interval=5, max_tries=4)

    session = store.get("/users/1")
    store.get("/groups/9")
    store.get("/users/1")

    assert session.state is SessionState.SYNCING
    assert session.checkpoint_interval == 5
    assert session.max_tries == 4
    assert store.libraries == ["/users/1", "/groups/9"]
    assert channel.mutations == ["create_group", "create_group"]


def test_remove_deletes_anchor_but_keeps_records() -> None:
    channel = FakeLocalStore()
    store = Store(channel)
    store.get("/users/1").add(make_item("A"))

    store.remove("/users/1")

    assert store.libraries == []
    assert channel.find_group(anchor_pattern("/users/1")) is None
    assert len(channel.records) == 1


def test_remove_of_unknown_library_leaves_no_anchor() -> None:
    channel = FakeLocalStore()
    store = Store(channel)

    store.remove("/users/1")

    assert channel.groups == {}
    assert store.libraries == []
