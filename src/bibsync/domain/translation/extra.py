"""Codec for the packed ``extra`` bag.

The bag is written as ``key:value`` lines, in the style of HTTP headers. A
value containing a newline, or a key containing ``:``, does not survive
unpacking.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from bibsync.domain.types import Value


def pack(bag: Mapping[str, Value]) -> str:
    return "\n".join(f"{key}:{_flatten(value)}" for key, value in bag.items())


def unpack(packed: str) -> dict[str, Value]:
    if not isinstance(packed, str):
        raise TypeError("Argument must be a string")
    bag: dict[str, Value] = {}
    for line in packed.split("\n"):
        if not line:
            continue
        key, _, value = line.partition(":")
        bag[key] = value
    return bag


def _flatten(value: Value) -> str:
    if isinstance(value, list):
        return "; ".join(_flatten(item) for item in value)
    return str(value)
