"""Record shapes exchanged between dialects, the canonical schema and the stores."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum

type Scalar = str | int | float
type Value = Scalar | list[Value] | dict[str, Value]
type Record = dict[str, Value]
type RecordView = Mapping[str, Value]

EXTRA_FIELD = "extra"


class Direction(StrEnum):
    """Which way a dictionary is applied."""

    TO_CANONICAL = "to_canonical"
    FROM_CANONICAL = "from_canonical"


def is_empty(value: object) -> bool:
    """Return whether a field value counts as absent."""

    return value is None or value == ""


def is_scalar(value: object) -> bool:
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)
