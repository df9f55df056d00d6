"""Registry of library sessions sharing one local store."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .library import DEFAULT_CHECKPOINT_INTERVAL, DEFAULT_MAX_TRIES, LibrarySession

if TYPE_CHECKING:
    from bibsync.domain.ports.local_store import LocalStore
    from bibsync.domain.translation import Translator

log = getLogger(__name__)


class Store:
    """Hands out initialised sessions and remembers which libraries were opened."""

    def __init__(
        self,
        channel: LocalStore,
        *,
        translator: Translator | None = None,
        max_tries: int = DEFAULT_MAX_TRIES,
        checkpoint_interval: int = DEFAULT_CHECKPOINT_INTERVAL,
    ) -> None:
        self.channel = channel
        self.translator = translator
        self.max_tries = max_tries
        self.checkpoint_interval = checkpoint_interval
        self.libraries: list[str] = []

    def get(self, prefix: str) -> LibrarySession:
        session = LibrarySession(
            self.channel,
            prefix,
            translator=self.translator,
            max_tries=self.max_tries,
            checkpoint_interval=self.checkpoint_interval,
        ).init()
        if prefix not in self.libraries:
            self.libraries.append(prefix)
        return session

    def remove(self, prefix: str) -> None:
        """Delete the anchor group of ``prefix``; its records stay in the store."""

        session = self.get(prefix)
        session.delete()
        self.libraries.remove(prefix)
        log.info("Removed library %s", prefix)
