"""Incremental reconciliation of remote libraries into the local store."""

from __future__ import annotations

from .cursor import (
    Cursor,
    anchor_pattern,
    decode_anchor_name,
    deterministic_key,
    encode_anchor_name,
)
from .driver import LibraryResult, SyncError, SyncSummary, sync_libraries
from .library import LibrarySession, SessionState, SessionStats, UpsertResult, describe_item
from .retry import ErrorKind, Failure, Success, classify_error, retry_bounded
from .store import Store

__all__ = [
    "Cursor",
    "ErrorKind",
    "Failure",
    "LibraryResult",
    "LibrarySession",
    "SessionState",
    "SessionStats",
    "Store",
    "Success",
    "SyncError",
    "SyncSummary",
    "UpsertResult",
    "anchor_pattern",
    "classify_error",
    "decode_anchor_name",
    "describe_item",
    "deterministic_key",
    "encode_anchor_name",
    "retry_bounded",
]
