from __future__ import annotations

import pytest

from bibsync.domain.errors import ValidationError
from bibsync.domain.translation import DROP, Compute, Dictionary, Rename, TypeMap, coerce_rule


def _content(record: dict[str, object]) -> str:
    return str(record.get("title", "")).upper()


class _FieldObject:
    def translate_name(self, record: dict[str, object]) -> str:
        return "heading"

    def translate_content(self, record: dict[str, object]) -> str:
        return "content"


def test_coerce_rule_handles_supported_shapes() -> None:
    existing = Rename("other")

    assert coerce_rule("title", None) is None
    assert coerce_rule("title", False) is DROP
    assert coerce_rule("title", "heading") == Rename("heading")
    assert coerce_rule("title", existing) is existing
    assert coerce_rule("title", _content) == Compute(name=_content)


def test_coerce_rule_reads_translate_name_objects() -> None:
    field_object = _FieldObject()

    rule = coerce_rule("title", field_object)

    assert isinstance(rule, Compute)
    assert rule.resolve_name({}) == "heading"
    assert rule.resolve_content("title", {"title": "x"}) == "content"
    assert rule.default is None


@pytest.mark.parametrize("entry", [True, 3, ["a"], {"name": "x"}, ""])
def test_coerce_rule_rejects_malformed_entries(entry: object) -> None:
    with pytest.raises(ValidationError) as exc:
        coerce_rule("title", entry)

    assert exc.value.field == "title"


def test_coerce_rule_rejects_non_callable_content() -> None:
    class Broken:
        translate_content = "not callable"

        def translate_name(self, record: dict[str, object]) -> str:
            return "x"

    with pytest.raises(ValidationError):
        coerce_rule("title", Broken())


def test_compute_content_defaults_to_field_value() -> None:
    rule = Compute(name="heading")

    assert rule.resolve_content("title", {"title": "On Testing"}) == "On Testing"


def test_dictionary_build_fails_on_malformed_table() -> None:
    types = TypeMap({}, default="journalArticle")

    with pytest.raises(ValidationError) as exc:
        Dictionary.build(
            "broken",
            fields_to_canonical={"title": "title", "pages": True},
            fields_from_canonical={},
            types_to_canonical=types,
            types_from_canonical=types,
        )

    assert exc.value.field == "pages"
