"""Resumable progress markers and deterministic record keys.

The local store offers no per-library metadata, so a library's cursor lives
in the display name of its anchor group::

    My Library                                         {"prefix": "/users/1", ...}
"""

from __future__ import annotations

import json
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from bibsync.domain.errors import CursorFormatError

LABEL_WIDTH = 50
PAYLOAD_START = '{"prefix"'
KEY_BASE_URL = "https://api.zotero.org"


class CursorPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    prefix: str
    version: int = 0
    last_index: int = Field(default=0, alias="lastIndex")


@dataclass(frozen=True, slots=True)
class Cursor:
    prefix: str
    version: int = 0
    last_index: int = 0


def encode_anchor_name(label: str, cursor: Cursor) -> str:
    payload = CursorPayload(
        prefix=cursor.prefix, version=cursor.version, last_index=cursor.last_index
    )
    return f"{label.ljust(LABEL_WIDTH)} {payload.model_dump_json(by_alias=True)}"


def decode_anchor_name(anchor_name: str) -> tuple[str, Cursor]:
    """Split an anchor name into its label and cursor."""

    if not anchor_name:
        raise CursorFormatError("Missing anchor name")
    # labels are free text and may contain braces; the payload is always last
    position = anchor_name.rfind(PAYLOAD_START)
    if position < 0:
        raise CursorFormatError(f"No cursor in anchor name '{anchor_name}'")
    label = anchor_name[:position].strip()
    try:
        payload = CursorPayload.model_validate_json(anchor_name[position:])
    except ValidationError as exc:
        raise CursorFormatError(f"Malformed cursor in anchor name '{anchor_name}'") from exc
    return label, Cursor(
        prefix=payload.prefix, version=payload.version, last_index=payload.last_index
    )


def anchor_pattern(prefix: str) -> str:
    """Substring that only the anchor of ``prefix`` contains.

    Quoting the prefix keeps ``/users/1`` from matching ``/users/12``.
    """

    return f'"prefix":{json.dumps(prefix, ensure_ascii=False)}'


def deterministic_key(prefix: str, item_key: str) -> str:
    return f"{KEY_BASE_URL}{prefix}/items/{item_key}"
