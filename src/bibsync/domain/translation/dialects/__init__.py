"""Shipped dialect dictionaries."""

from __future__ import annotations

from .bookends import BOOKENDS
from .zotero import ZOTERO

__all__ = ["BOOKENDS", "ZOTERO"]
