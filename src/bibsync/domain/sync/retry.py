"""Bounded retry for local-store operations.

Errors are classified rather than matched by message; the outcome comes back
as a value so the caller decides what a final failure means.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from bibsync.domain.errors import TransientError

if TYPE_CHECKING:
    from collections.abc import Callable

log = getLogger(__name__)


class ErrorKind(StrEnum):
    RETRYABLE = "retryable"
    FATAL = "fatal"


def classify_error(error: Exception) -> ErrorKind:
    if isinstance(error, TransientError):
        return ErrorKind.RETRYABLE
    return ErrorKind.FATAL


@dataclass(frozen=True, slots=True)
class Success[T]:
    value: T
    attempts: int


@dataclass(frozen=True, slots=True)
class Failure:
    error: Exception
    attempts: int
    kind: ErrorKind


type Outcome[T] = Success[T] | Failure


def retry_bounded[T](
    operation: Callable[[], T],
    *,
    max_tries: int,
    classify: Callable[[Exception], ErrorKind] = classify_error,
    on_retry: Callable[[Exception, int], None] | None = None,
) -> Outcome[T]:
    """Run ``operation`` until it succeeds, fails fatally, or ``max_tries`` is reached."""

    if max_tries < 1:
        raise ValueError("max_tries must be at least 1")
    attempt = 0
    while True:
        attempt += 1
        try:
            return Success(operation(), attempts=attempt)
        except Exception as exc:  # noqa: BLE001
            kind = classify(exc)
            if kind is ErrorKind.FATAL or attempt >= max_tries:
                return Failure(exc, attempts=attempt, kind=kind)
            log.debug("Attempt %s/%s failed with %s, retrying", attempt, max_tries, exc)
            if on_retry is not None:
                on_retry(exc, attempt)
