"""Dictionary-driven schema translation."""

from __future__ import annotations

from .dialects import BOOKENDS, ZOTERO
from .dictionary import Dictionary, TypeMap
from .extra import pack, unpack
from .rules import DROP, Compute, Drop, MappingRule, Rename, coerce_rule
from .translator import Translator, from_canonical, to_canonical, translate

__all__ = [
    "BOOKENDS",
    "DROP",
    "ZOTERO",
    "Compute",
    "Dictionary",
    "Drop",
    "MappingRule",
    "Rename",
    "Translator",
    "TypeMap",
    "coerce_rule",
    "from_canonical",
    "pack",
    "to_canonical",
    "translate",
    "unpack",
]
