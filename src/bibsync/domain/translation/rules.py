"""Mapping rules and their load-time validation.

Dialect tables are written with a handful of convenient shapes (a target name,
``False``, a function, or an object exposing ``translate_name``). They are
normalised into one of three explicit variants when a dictionary is built.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from bibsync.domain.errors import ValidationError

if TYPE_CHECKING:
    from bibsync.domain.types import RecordView, Value

type ResolvedName = str | Literal[False] | None
type NameFn = Callable[[RecordView], ResolvedName]
type ContentFn = Callable[[RecordView], Value | None]
type DefaultFn = Callable[[], Value]


@dataclass(frozen=True, slots=True)
class Drop:
    """The field has no equivalent and is discarded."""


@dataclass(frozen=True, slots=True)
class Rename:
    """The value passes through unchanged under another name."""

    name: str


@dataclass(frozen=True, slots=True)
class Compute:
    """Destination name and/or content are derived from the whole record.

    ``name`` may be a fixed target, ``False`` when the content is a mapping of
    target fields, or a function of the record returning either (``None``
    skips the field). ``content`` defaults to the field's own value.
    ``default`` seeds the destination once, before the first append.
    """

    name: str | Literal[False] | NameFn
    content: ContentFn | None = None
    default: DefaultFn | None = None

    def resolve_name(self, record: RecordView) -> ResolvedName:
        if callable(self.name):
            return self.name(record)
        return self.name

    def resolve_content(self, field: str, record: RecordView) -> Value | None:
        if self.content is None:
            return record.get(field)
        return self.content(record)


type MappingRule = Drop | Rename | Compute

DROP = Drop()


def coerce_rule(field: str, entry: object) -> MappingRule | None:
    """Normalise a dialect table entry into a mapping rule.

    Returns ``None`` for an absent entry. Raises ``ValidationError`` for any
    shape that is not one of the supported variants.
    """

    if entry is None:
        return None
    if isinstance(entry, (Drop, Rename, Compute)):
        return entry
    if entry is False:
        return DROP
    if isinstance(entry, str):
        if not entry:
            raise ValidationError(f"Empty target name for field '{field}'", field=field)
        return Rename(entry)
    if isinstance(entry, bool):
        raise ValidationError(f"Invalid field definition for '{field}': True", field=field)
    if callable(entry) and not hasattr(entry, "translate_name"):
        return Compute(name=entry)
    translate_name = getattr(entry, "translate_name", None)
    if callable(translate_name):
        translate_content = getattr(entry, "translate_content", None)
        default = getattr(entry, "default", None)
        if translate_content is not None and not callable(translate_content):
            raise ValidationError(
                f"translate_content of field '{field}' is not callable", field=field
            )
        if default is not None and not callable(default):
            raise ValidationError(f"default of field '{field}' is not callable", field=field)
        return Compute(name=translate_name, content=translate_content, default=default)
    raise ValidationError(
        f"Invalid field definition for '{field}': {type(entry).__name__}", field=field
    )
