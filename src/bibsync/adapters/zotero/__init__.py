"""Public interface for the Zotero adapter."""

from __future__ import annotations

from .client import ZoteroAPIError, ZoteroClient
from .feed import ZoteroFeed, group_prefix, user_prefix
from .schema import DeletedPayload, GroupPayload, ItemPayload, KeyInfo

__all__ = [
    "DeletedPayload",
    "GroupPayload",
    "ItemPayload",
    "KeyInfo",
    "ZoteroAPIError",
    "ZoteroClient",
    "ZoteroFeed",
    "group_prefix",
    "user_prefix",
]
