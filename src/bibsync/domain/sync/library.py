"""Per-library reconciliation session.

A session applies one remote library's change feed to the local store. Every
synced record carries a deterministic key derived from the library prefix and
the remote item key, so re-delivered items update in place instead of
duplicating. Progress is checkpointed into the library's anchor group name
and an interrupted session fast-forwards past already committed items.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING, NoReturn

from bibsync.domain.errors import NotFoundError, SessionStateError
from bibsync.domain.ports.local_store import RecordQuery
from bibsync.domain.translation import BOOKENDS, ZOTERO, Translator
from bibsync.domain.translation.dialects.bookends import KEY_FIELD
from bibsync.domain.translation.dialects.zotero import EXCLUDED_TYPES

from .cursor import (
    Cursor,
    anchor_pattern,
    decode_anchor_name,
    deterministic_key,
    encode_anchor_name,
)
from .retry import Failure, retry_bounded

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from bibsync.domain.ports.local_store import GroupRef, LocalStore
    from bibsync.domain.translation import Dictionary
    from bibsync.domain.types import Record, RecordView

log = getLogger(__name__)

DEFAULT_MAX_TRIES = 3
DEFAULT_CHECKPOINT_INTERVAL = 10
SYNCHRONIZING_LABEL = "Synchronizing..."
DEFAULT_LIBRARY_NAME = "User Library"


class SessionState(StrEnum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    FAST_FORWARDING = "fast_forwarding"
    SYNCING = "syncing"
    CHECKPOINTING = "checkpointing"
    FINALIZING = "finalizing"
    FAILED = "failed"


_ACTIVE_STATES = frozenset({SessionState.FAST_FORWARDING, SessionState.SYNCING})


class UpsertResult(StrEnum):
    INSERTED = "inserted"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


@dataclass(slots=True)
class SessionStats:
    inserted: int = 0
    updated: int = 0
    unchanged: int = 0
    skipped: int = 0
    fast_forwarded: int = 0
    removed: int = 0


def describe_item(item: RecordView) -> str:
    """Short human-readable identification of a feed item."""

    item_type = item.get("itemType", "item")
    title = item.get("title")
    key = item.get("key", "?")
    if title:
        return f"{item_type} '{title}' ({key})"
    return f"{item_type} {key}"


class LibrarySession:
    """Reconciles one remote library into the local store."""

    def __init__(
        self,
        channel: LocalStore,
        prefix: str,
        *,
        translator: Translator | None = None,
        source: Dictionary = ZOTERO,
        target: Dictionary = BOOKENDS,
        key_field: str = KEY_FIELD,
        max_tries: int = DEFAULT_MAX_TRIES,
        checkpoint_interval: int = DEFAULT_CHECKPOINT_INTERVAL,
        excluded_types: Iterable[str] = EXCLUDED_TYPES,
    ) -> None:
        if checkpoint_interval < 1:
            raise ValueError("checkpoint_interval must be at least 1")
        self.channel = channel
        self.prefix = prefix
        self.translator = translator or Translator()
        self.source = source
        self.target = target
        self.key_field = key_field
        self.max_tries = max_tries
        self.checkpoint_interval = checkpoint_interval
        self.excluded_types = frozenset(excluded_types)

        self.name = ""
        self.version = 0
        self.state = SessionState.UNINITIALIZED
        self.stats = SessionStats()
        self.last_command: str | None = None

        self._group: GroupRef | None = None
        self._fast_forward_to = 0
        self._last_index = 0
        self._is_new = False

    @property
    def cursor(self) -> Cursor:
        return Cursor(prefix=self.prefix, version=self.version, last_index=self._last_index)

    @property
    def last_index(self) -> int:
        return self._last_index

    @property
    def is_new(self) -> bool:
        """Whether nothing can have been synced into the local store yet."""

        return self._is_new

    @property
    def group(self) -> GroupRef | None:
        return self._group

    def init(self) -> LibrarySession:
        """Locate or create the anchor group and load the stored cursor."""

        self.state = SessionState.INITIALIZING
        self._last_index = 0
        pattern = anchor_pattern(self.prefix)
        try:
            group = self._run(f"find_group({pattern!r})", self.channel.find_group, pattern)
            if group is not None:
                self.name, cursor = decode_anchor_name(group.name)
                self.version = cursor.version
                # version 0 means the first sync never finished
                self._is_new = cursor.version == 0
                self._fast_forward_to = cursor.last_index
                self._group = group
            else:
                self._is_new = True
                self.name = SYNCHRONIZING_LABEL
                anchor_name = encode_anchor_name(self.name, self.cursor)
                self._group = self._run(
                    f"create_group({anchor_name!r})", self.channel.create_group, anchor_name
                )
        except Exception:
            self.state = SessionState.FAILED
            raise

        log.debug(
            "Initialised library %s: version=%s, new=%s, resume_at=%s",
            self.prefix,
            self.version,
            self._is_new,
            self._fast_forward_to,
        )
        self.state = (
            SessionState.FAST_FORWARDING if self._fast_forward_to > 0 else SessionState.SYNCING
        )
        return self

    def add(self, item: RecordView) -> UpsertResult | None:
        """Insert or update one remote item.

        Returns ``None`` when the item was fast-forwarded or is of a kind that
        is not stored.
        """

        self._require_active("add")
        if self._last_index < self._fast_forward_to:
            if self._last_index == 0:
                log.info("Fast-forwarding %s, skipping previously synchronized items", self.prefix)
            self.state = SessionState.FAST_FORWARDING
            self._last_index += 1
            self.stats.fast_forwarded += 1
            return None

        self.state = SessionState.SYNCING
        if item.get("itemType") in self.excluded_types:
            log.debug("Skipping %s", describe_item(item))
            self.stats.skipped += 1
            self._advance()
            return None

        key = deterministic_key(self.prefix, str(item.get("key")))
        outcome = retry_bounded(
            lambda: self._upsert(item, key),
            max_tries=self.max_tries,
            on_retry=lambda error, attempt: log.warning(
                "Local store timed out on %s (attempt %s/%s): %s",
                describe_item(item),
                attempt,
                self.max_tries,
                error,
            ),
        )
        if isinstance(outcome, Failure):
            self._fail(outcome.error)
        result = outcome.value
        match result:
            case UpsertResult.INSERTED:
                self.stats.inserted += 1
            case UpsertResult.UPDATED:
                self.stats.updated += 1
            case UpsertResult.UNCHANGED:
                self.stats.unchanged += 1
        self._advance()
        return result

    def remove(self, keys: Iterable[str]) -> int:
        """Delete the local records of remotely deleted items; returns how many."""

        self._require_active("remove")
        if self._is_new:
            return 0
        removed = 0
        for item_key in keys:
            key = deterministic_key(self.prefix, item_key)
            outcome = retry_bounded(
                lambda key=key: self._delete_by_key(key), max_tries=self.max_tries
            )
            if isinstance(outcome, Failure):
                self._fail(outcome.error)
            if outcome.value:
                removed += 1
        self.stats.removed += removed
        return removed

    def add_collection(self, collection: RecordView) -> None:
        """Collections are accepted but not persisted."""

        log.debug("Ignoring collection %s", collection.get("key"))

    def remove_collections(self, keys: Iterable[str]) -> None:
        """Collections are accepted but not persisted."""

        log.debug("Ignoring removal of collections %s", list(keys))

    def save(self, name: str, version: int) -> None:
        """Seal a completed session with the library's name and version."""

        self._require_active("save")
        self.state = SessionState.FINALIZING
        self.name = name or DEFAULT_LIBRARY_NAME
        self.version = version
        self._last_index = 0
        self._fast_forward_to = 0
        try:
            self._persist_cursor()
        except Exception:
            self.state = SessionState.FAILED
            raise
        self._is_new = False
        log.info("Saved library %s '%s' at version %s", self.prefix, self.name, version)

    def interrupt(self) -> None:
        """Stop an active session, saving the cursor so the next run resumes here."""

        if self.state not in _ACTIVE_STATES:
            return
        log.info("Interrupted library %s after %s items", self.prefix, self._last_index)
        self._save_progress("an interruption")

    def delete(self) -> None:
        """Remove the library's anchor group from the local store."""

        if self._group is None:
            raise SessionStateError(
                "Cannot delete library - anchor group has not been determined yet."
            )
        group = self._group
        self._run(f"delete_group({group.id})", self.channel.delete_group, group)
        self._group = None
        self.state = SessionState.UNINITIALIZED

    def _require_active(self, operation: str) -> None:
        if self.state not in _ACTIVE_STATES:
            raise SessionStateError(
                f"Cannot {operation} on library {self.prefix} in state {self.state}"
            )

    def _run[**P, T](
        self, command: str, func: Callable[P, T], *args: P.args, **kwargs: P.kwargs
    ) -> T:
        self.last_command = command
        return func(*args, **kwargs)

    def _upsert(self, item: RecordView, key: str) -> UpsertResult:
        stored = self._find_by_key(key)
        data = self._translate(item, key)
        if stored is None:
            log.debug("Adding item '%s' ...", data.get("title"))
            if self._group is None:
                raise SessionStateError(f"Cannot insert into library {self.prefix} without a group")
            self._run(f"insert({key!r})", self.channel.insert, data, self._group)
            return UpsertResult.INSERTED

        changes = {field: value for field, value in data.items() if stored.get(field) != value}
        if not changes:
            return UpsertResult.UNCHANGED
        record_id = int(stored["id"])
        log.debug("Updating item '%s', properties %s", data.get("title"), ",".join(changes))
        self._run(
            f"update({record_id}, {sorted(changes)})", self.channel.update, record_id, changes
        )
        return UpsertResult.UPDATED

    def _delete_by_key(self, key: str) -> bool:
        stored = self._find_by_key(key)
        if stored is None:
            return False
        record_id = int(stored["id"])
        log.debug("Deleting '%s' ...", stored.get("title"))
        try:
            self._run(f"delete({record_id})", self.channel.delete, record_id)
        except NotFoundError:
            log.debug("Record %s vanished before it could be deleted", record_id)
            return False
        return True

    def _find_by_key(self, key: str) -> Record | None:
        query = RecordQuery(field=self.key_field, value=key)
        records = self._run(f"search({self.key_field}={key!r})", self.channel.search, query)
        return records[0] if records else None

    def _translate(self, item: RecordView, key: str) -> Record:
        data = self.translator.translate(item, self.source, self.target)
        data[self.key_field] = key
        return data

    def _advance(self) -> None:
        self._last_index += 1
        if self._last_index % self.checkpoint_interval == 0:
            self._checkpoint()

    def _checkpoint(self) -> None:
        previous = self.state
        self.state = SessionState.CHECKPOINTING
        outcome = retry_bounded(self._persist_cursor, max_tries=self.max_tries)
        if isinstance(outcome, Failure):
            self.state = SessionState.FAILED
            raise outcome.error
        self.state = previous

    def _persist_cursor(self) -> None:
        if self._group is None:
            raise NotFoundError(f"Cannot find group for prefix {self.prefix}")
        new_name = encode_anchor_name(self.name, self.cursor)
        self._group = self._run(
            f"rename_group({self._group.id}, {new_name!r})",
            self.channel.rename_group,
            self._group,
            new_name,
        )

    def _fail(self, error: Exception) -> NoReturn:
        self._save_progress("a failure")
        raise error

    def _save_progress(self, reason: str) -> None:
        # keep the failing command; the checkpoint below overwrites last_command
        failed_command = self.last_command
        try:
            self._persist_cursor()
        except Exception:  # noqa: BLE001
            log.warning(
                "Could not save the cursor of %s after %s", self.prefix, reason, exc_info=True
            )
        self.last_command = failed_command
        self.state = SessionState.FAILED
