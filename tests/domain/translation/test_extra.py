from __future__ import annotations

import pytest

from bibsync.domain.translation import pack, unpack


def test_pack_writes_key_value_lines() -> None:
    packed = pack({"zotero-key": "ABCD", "citationKey": "smith2020", "tags": ["a", "b"]})

    assert packed == "zotero-key:ABCD\ncitationKey:smith2020\ntags:a; b"


def test_unpack_splits_on_first_colon() -> None:
    bag = unpack("url:https://example.org/a\nnote:ratio 1:2")

    assert bag == {"url": "https://example.org/a", "note": "ratio 1:2"}


def test_unpack_tolerates_blank_lines_and_missing_colon() -> None:
    assert unpack("\nfirst:1\n\nflag\n") == {"first": "1", "flag": ""}


def test_unpack_rejects_non_strings() -> None:
    with pytest.raises(TypeError):
        unpack(42)  # type: ignore[arg-type]


def test_bag_round_trips_without_newlines() -> None:
    bag = {"a": "1", "b": "two words", "c": "x:y"}

    assert unpack(pack(bag)) == bag
