from __future__ import annotations

from bibsync.domain.translation import (
    BOOKENDS,
    ZOTERO,
    Translator,
    from_canonical,
    to_canonical,
    translate,
)
from bibsync.domain.translation.translator import append


def test_append_sets_joins_and_extends() -> None:
    target: dict[str, object] = {}

    append(target, "title", "First")
    append(target, "title", "Second")
    append(target, "tags", ["a"])
    append(target, "tags", ["b"])
    append(target, "tags", "c")
    append(target, "empty", "")
    append(target, "missing", None)

    assert target == {"title": "First; Second", "tags": ["a", "b", "c"]}


def test_append_keeps_content_next_to_numeric_values() -> None:
    target: dict[str, object] = {"numPages": 120, "count": 0}

    append(target, "numPages", "xii")
    append(target, "zero", 0)

    assert target == {"numPages": "120; xii", "count": 0, "zero": 0}


def test_append_does_not_mutate_shared_lists() -> None:
    shared = ["a"]
    target: dict[str, object] = {"tags": shared}

    append(target, "tags", "b")

    assert shared == ["a"]
    assert target["tags"] == ["a", "b"]


def test_creators_round_trip_through_canonical_authors() -> None:
    canonical = {"authors": "Smith, John; Doe, Jane"}

    zotero = from_canonical(ZOTERO, canonical)

    assert zotero == {
        "creators": [
            {"creatorType": "author", "lastName": "Smith", "firstName": "John"},
            {"creatorType": "author", "lastName": "Doe", "firstName": "Jane"},
        ]
    }
    assert to_canonical(ZOTERO, zotero) == canonical


def test_single_field_creator_names_are_kept_whole() -> None:
    zotero = from_canonical(ZOTERO, {"authors": "UNESCO", "editors": "Miller, Ann"})

    assert zotero["creators"] == [
        {"creatorType": "author", "name": "UNESCO"},
        {"creatorType": "editor", "lastName": "Miller", "firstName": "Ann"},
    ]
    assert to_canonical(ZOTERO, zotero) == {"authors": "UNESCO", "editors": "Miller, Ann"}


def test_volume_and_issue_fold_into_bookends_volume() -> None:
    canonical = {"itemType": "journalArticle", "volume": "12", "issue": "3"}

    bookends = from_canonical(BOOKENDS, canonical)

    assert bookends == {"type": "Journal article", "volume": "12(3)"}
    assert to_canonical(BOOKENDS, bookends) == canonical


def test_issue_without_volume_is_kept_in_parentheses() -> None:
    bookends = from_canonical(BOOKENDS, {"itemType": "journalArticle", "issue": "3"})

    assert bookends == {"type": "Journal article", "volume": "(3)"}


def test_book_chapter_volume_carries_book_title() -> None:
    canonical = {"itemType": "bookSection", "bookTitle": "Handbook of Tests"}

    bookends = from_canonical(BOOKENDS, canonical)

    assert bookends == {"type": "Book chapter", "volume": "Handbook of Tests"}
    assert to_canonical(BOOKENDS, bookends) == canonical


def test_unmapped_fields_survive_a_same_dialect_round_trip() -> None:
    zotero_record = {"itemType": "journalArticle", "title": "T", "customThing": "value"}
    bookends_record = {"type": "Journal article", "title": "T", "customThing": "value"}

    assert translate(zotero_record, ZOTERO, ZOTERO) == zotero_record
    assert translate(bookends_record, BOOKENDS, BOOKENDS) == bookends_record


def test_unmapped_scalars_are_packed_into_canonical_extra() -> None:
    canonical = to_canonical(ZOTERO, {"title": "T", "customThing": "value", "nested": ["x"]})

    assert canonical == {"title": "T", "extra": "field.customThing:value"}


def test_existing_zotero_extra_seeds_the_bag() -> None:
    canonical = to_canonical(ZOTERO, {"key": "ABCD", "extra": "original:1"})

    assert canonical == {"extra": "original:1\nzotero-key:ABCD"}


def test_carrier_keys_stay_in_the_zotero_extra_field() -> None:
    canonical = to_canonical(ZOTERO, {"key": "ABCD", "title": "T"})

    assert canonical == {"title": "T", "extra": "zotero-key:ABCD"}
    assert from_canonical(ZOTERO, canonical) == {"title": "T", "extra": "zotero-key:ABCD"}


def test_bag_is_dropped_for_dialects_without_extra_field() -> None:
    assert from_canonical(BOOKENDS, {"title": "T", "extra": "zotero-key:ABCD"}) == {"title": "T"}


def test_empty_and_dropped_values_are_skipped() -> None:
    canonical = to_canonical(ZOTERO, {"title": "T", "pages": "", "date": None, "version": 9})

    assert canonical == {"title": "T"}


def test_carrier_policy_is_configurable() -> None:
    translator = Translator(carrier_prefixes=("zotero",), carrier_names=frozenset())

    assert translator.is_carrier("zotero-key")
    assert not translator.is_carrier("bookends-uniqueId")
    assert not translator.is_carrier("citationKey")
    assert Translator().is_carrier("citationKey")


def test_zotero_extra_lines_survive_a_round_trip() -> None:
    item = {"title": "T", "customThing": "value", "extra": "PMID:123\nOriginal Date:1901"}

    canonical = to_canonical(ZOTERO, item)

    assert from_canonical(ZOTERO, canonical) == item


def test_extra_lines_become_fields_for_dialects_without_extra_field() -> None:
    canonical = {"title": "T", "extra": "PMID:123\nfield.customThing:value"}

    assert from_canonical(BOOKENDS, canonical) == {
        "title": "T",
        "PMID": "123",
        "customThing": "value",
    }
