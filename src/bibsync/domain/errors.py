"""Error taxonomy shared by the translation and synchronisation layers."""

from __future__ import annotations


class ValidationError(ValueError):
    """Raised when a dictionary rule has a shape the translator cannot interpret."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class LocalStoreError(RuntimeError):
    """Base class for failures reported by the local-store channel.

    ``command`` describes the low-level operation that failed so callers can
    report it without reproducing the session.
    """

    def __init__(self, message: str, *, command: str | None = None) -> None:
        super().__init__(message)
        self.command = command


class NotFoundError(LocalStoreError):
    """The referenced record or group does not exist in the local store."""


class TransientError(LocalStoreError):
    """The local store timed out; repeating the operation may succeed."""


class FatalError(LocalStoreError):
    """Any other local-store failure. Never retried."""


class CursorFormatError(ValueError):
    """Raised when an anchor name does not contain a decodable cursor."""


class SessionStateError(RuntimeError):
    """Raised when a library session is used outside its lifecycle."""
