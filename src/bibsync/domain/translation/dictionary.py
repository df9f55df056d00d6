"""Per-dialect translation dictionaries."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Literal

from bibsync.domain.errors import ValidationError
from bibsync.domain.types import Direction

from .rules import coerce_rule

if TYPE_CHECKING:
    from bibsync.domain.types import RecordView

    from .rules import MappingRule

type TypeEntry = str | Literal[False] | Callable[[RecordView], str | None]


@dataclass(frozen=True, slots=True)
class TypeMap:
    """Lookup of item types with a fixed fallback for one direction.

    Unknown types and types explicitly marked unsupported (``False``) resolve
    to ``default`` instead of failing the translation.
    """

    table: Mapping[str, TypeEntry]
    default: str

    def __post_init__(self) -> None:
        for name, entry in self.table.items():
            if entry is False or isinstance(entry, str) or callable(entry):
                continue
            raise ValidationError(f"Invalid type mapping for '{name}'", field=name)
        object.__setattr__(self, "table", MappingProxyType(dict(self.table)))

    def resolve(self, type_name: object, record: RecordView) -> str:
        entry = self.table.get(type_name) if isinstance(type_name, str) else None
        if callable(entry):
            entry = entry(record)
        return entry or self.default


def _freeze_rules(table: Mapping[str, object]) -> Mapping[str, MappingRule]:
    rules: dict[str, MappingRule] = {}
    for name, entry in table.items():
        rule = coerce_rule(name, entry)
        if rule is not None:
            rules[name] = rule
    return MappingProxyType(rules)


@dataclass(frozen=True, slots=True)
class Dictionary:
    """Field and type maps of one dialect, usable in both directions.

    Built once at import time; the maps are read-only afterwards.
    """

    name: str
    to_canonical: Mapping[str, MappingRule]
    from_canonical: Mapping[str, MappingRule]
    types_to_canonical: TypeMap
    types_from_canonical: TypeMap
    extra_field: str | None = None
    _known: frozenset[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "_known", frozenset(self.to_canonical) | frozenset(self.from_canonical)
        )

    @classmethod
    def build(
        cls,
        name: str,
        *,
        fields_to_canonical: Mapping[str, object],
        fields_from_canonical: Mapping[str, object],
        types_to_canonical: TypeMap,
        types_from_canonical: TypeMap,
        extra_field: str | None = None,
    ) -> Dictionary:
        """Validate raw dialect tables and return an immutable dictionary."""

        return cls(
            name=name,
            to_canonical=_freeze_rules(fields_to_canonical),
            from_canonical=_freeze_rules(fields_from_canonical),
            types_to_canonical=types_to_canonical,
            types_from_canonical=types_from_canonical,
            extra_field=extra_field,
        )

    def rules(self, direction: Direction) -> Mapping[str, MappingRule]:
        if direction is Direction.TO_CANONICAL:
            return self.to_canonical
        return self.from_canonical

    def knows(self, field_name: str) -> bool:
        """Return whether the field has a rule in either direction."""

        return field_name in self._known
