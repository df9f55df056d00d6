"""Dictionary-driven translation between dialects and the canonical schema.

A record is never translated directly from one dialect to another: it is
first lifted into the flat canonical schema with the source dictionary, then
lowered into the target dialect with the target dictionary. Content without a
home on the other side travels in the packed ``extra`` field.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from bibsync.domain.types import EXTRA_FIELD, Direction, is_empty, is_scalar

from .extra import pack, unpack
from .rules import Compute, Drop, Rename

if TYPE_CHECKING:
    from bibsync.domain.types import Record, RecordView, Value

    from .dictionary import Dictionary
    from .rules import MappingRule, ResolvedName

log = getLogger(__name__)

DEFAULT_CARRIER_PREFIXES: tuple[str, ...] = ("zotero", "bookends")
DEFAULT_CARRIER_NAMES: frozenset[str] = frozenset({"citationKey"})
# marks extra lines that hold an unmapped top-level field of the source record
FIELD_TAG = "field."


def append(target: Record, field: str, content: Value | None, separator: str = "; ") -> None:
    """Merge ``content`` into ``target[field]`` according to the existing value."""

    if is_empty(content) or content == []:
        return
    existing = target.get(field)
    if existing is None or existing == "":
        target[field] = content
        return
    if isinstance(existing, list):
        if isinstance(content, list):
            target[field] = existing + content
        else:
            target[field] = [*existing, content]
    else:
        target[field] = f"{existing}{separator}{content}"


@dataclass(frozen=True, slots=True)
class Translator:
    """Stateless translation engine.

    ``carrier_prefixes`` and ``carrier_names`` mark target names that hold
    foreign-system metadata (provenance identifiers and the like). Content
    resolved to such a name is stashed in the extra bag instead of becoming a
    real field.
    """

    carrier_prefixes: tuple[str, ...] = DEFAULT_CARRIER_PREFIXES
    carrier_names: frozenset[str] = DEFAULT_CARRIER_NAMES

    def translate(self, record: RecordView, source: Dictionary, target: Dictionary) -> Record:
        """Translate ``record`` from the ``source`` dialect into the ``target`` dialect."""

        canonical = self.to_canonical(source, record)
        return self.from_canonical(target, canonical)

    def to_canonical(self, dictionary: Dictionary, record: RecordView) -> Record:
        return self._translate(dictionary, record, Direction.TO_CANONICAL)

    def from_canonical(self, dictionary: Dictionary, record: RecordView) -> Record:
        return self._translate(dictionary, record, Direction.FROM_CANONICAL)

    def is_carrier(self, name: str) -> bool:
        return name in self.carrier_names or name.startswith(self.carrier_prefixes)

    def _translate(
        self, dictionary: Dictionary, record: RecordView, direction: Direction
    ) -> Record:
        rules = dictionary.rules(direction)
        output: Record = {}
        extra = self._initial_extra(dictionary, record, direction)

        for field, value in record.items():
            if is_empty(value):
                continue
            if direction is Direction.TO_CANONICAL and field == dictionary.extra_field:
                continue
            if direction is Direction.FROM_CANONICAL and field == EXTRA_FIELD:
                self._restore_extra(dictionary, value, output, extra)
                continue

            rule = rules.get(field)
            if rule is None:
                if direction is Direction.TO_CANONICAL and is_scalar(value):
                    append(extra, FIELD_TAG + field, value)
                else:
                    log.debug("No %s rule for field %s in %s", direction, field, dictionary.name)
                continue
            self._apply_rule(dictionary, rule, field, record, output, extra)

        return self._finish(dictionary, output, extra, direction)

    def _initial_extra(
        self, dictionary: Dictionary, record: RecordView, direction: Direction
    ) -> Record:
        if direction is Direction.FROM_CANONICAL or dictionary.extra_field is None:
            return {}
        packed = record.get(dictionary.extra_field)
        if isinstance(packed, str) and packed:
            return unpack(packed)
        return {}

    def _apply_rule(
        self,
        dictionary: Dictionary,
        rule: MappingRule,
        field: str,
        record: RecordView,
        output: Record,
        extra: Record,
    ) -> None:
        name, content = self._resolve(rule, field, record)
        if name is None:
            return

        if name is False:
            if isinstance(content, Mapping):
                for key, sub_content in content.items():
                    destination = output if dictionary.knows(key) else extra
                    append(destination, key, sub_content)
            return

        if self.is_carrier(name):
            append(extra, name, content)
            return

        if isinstance(rule, Compute) and rule.default is not None and name not in output:
            output[name] = rule.default()
        append(output, name, content)

    @staticmethod
    def _resolve(
        rule: MappingRule, field: str, record: RecordView
    ) -> tuple[ResolvedName, Value | None]:
        match rule:
            case Drop():
                return None, None
            case Rename(name=name):
                return name, record.get(field)
            case Compute():
                name = rule.resolve_name(record)
                if name is None:
                    return None, None
                return name, rule.resolve_content(field, record)

    def _restore_extra(
        self, dictionary: Dictionary, packed: Value, output: Record, extra: Record
    ) -> None:
        if not isinstance(packed, str):
            log.debug("Ignoring non-string canonical extra field in %s", dictionary.name)
            return
        for key, value in unpack(packed).items():
            if key.startswith(FIELD_TAG):
                append(output, key.removeprefix(FIELD_TAG), value)
            elif (
                self.is_carrier(key)
                or dictionary.knows(key)
                or dictionary.extra_field is not None
            ):
                append(extra, key, value)
            else:
                append(output, key, value)

    @staticmethod
    def _finish(
        dictionary: Dictionary, output: Record, extra: Record, direction: Direction
    ) -> Record:
        if not extra:
            return output
        if direction is Direction.TO_CANONICAL:
            output[EXTRA_FIELD] = pack(extra)
        elif dictionary.extra_field is not None:
            append(output, dictionary.extra_field, pack(extra), separator="\n")
        else:
            log.debug(
                "Dropping extra fields %s: %s has no extra field", list(extra), dictionary.name
            )
        return output


_DEFAULT = Translator()


def translate(record: RecordView, source: Dictionary, target: Dictionary) -> Record:
    return _DEFAULT.translate(record, source, target)


def to_canonical(dictionary: Dictionary, record: RecordView) -> Record:
    return _DEFAULT.to_canonical(dictionary, record)


def from_canonical(dictionary: Dictionary, record: RecordView) -> Record:
    return _DEFAULT.from_canonical(dictionary, record)
