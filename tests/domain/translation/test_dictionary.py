from __future__ import annotations

import pytest

from bibsync.domain.errors import ValidationError
from bibsync.domain.translation import BOOKENDS, DROP, ZOTERO, Compute, Dictionary, Rename, TypeMap
from bibsync.domain.types import Direction


def test_type_map_resolves_strings_callables_and_fallbacks() -> None:
    types = TypeMap(
        {
            "book": "Book",
            "thesis": lambda record: "Dissertation" if record.get("university") else None,
            "software": False,
        },
        default="Journal article",
    )

    assert types.resolve("book", {}) == "Book"
    assert types.resolve("thesis", {"university": "MIT"}) == "Dissertation"
    assert types.resolve("thesis", {}) == "Journal article"
    assert types.resolve("software", {}) == "Journal article"
    assert types.resolve("unknown", {}) == "Journal article"
    assert types.resolve(None, {}) == "Journal article"


def test_type_map_rejects_invalid_entries() -> None:
    with pytest.raises(ValidationError):
        TypeMap({"book": 3}, default="Book")  # type: ignore[dict-item]


def test_dictionary_tables_are_read_only() -> None:
    with pytest.raises(TypeError):
        ZOTERO.to_canonical["title"] = DROP  # type: ignore[index]


def test_dictionary_knows_fields_from_both_directions() -> None:
    types = TypeMap({}, default="journalArticle")
    dictionary = Dictionary.build(
        "sample",
        fields_to_canonical={"heading": "title", "pages": False},
        fields_from_canonical={"title": Compute(name="heading")},
        types_to_canonical=types,
        types_from_canonical=types,
    )

    assert dictionary.knows("heading")
    assert dictionary.knows("title")
    assert dictionary.knows("pages")
    assert not dictionary.knows("volume")
    assert dictionary.rules(Direction.TO_CANONICAL)["heading"] == Rename("title")
    assert dictionary.rules(Direction.TO_CANONICAL)["pages"] is DROP
    assert dictionary.types_from_canonical is types


def test_shipped_dialects_declare_their_extra_field() -> None:
    assert ZOTERO.extra_field == "extra"
    assert BOOKENDS.extra_field is None
