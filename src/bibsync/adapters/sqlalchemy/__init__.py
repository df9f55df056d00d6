"""SQLAlchemy adapter package for bibsync."""

from __future__ import annotations

from .engine import (
    StartupError,
    configured_engine,
    get_local_store,
    is_started,
    shutdown,
    startup,
)
from .store import SqlAlchemyLocalStore
from .tables import (
    create_all_tables,
    group_publications_table,
    groups_table,
    metadata,
    publications_table,
)

__all__ = [
    "SqlAlchemyLocalStore",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "get_local_store",
    "group_publications_table",
    "groups_table",
    "is_started",
    "metadata",
    "publications_table",
    "shutdown",
    "startup",
]
