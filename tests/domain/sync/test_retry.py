from __future__ import annotations

import pytest

from bibsync.domain.errors import FatalError, NotFoundError, TransientError
from bibsync.domain.sync import ErrorKind, Failure, Success, classify_error, retry_bounded


class _Flaky:
    def __init__(self, failures: list[Exception]) -> None:
        self.failures = failures
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        if self.failures:
            raise self.failures.pop(0)
        return "done"


def test_classify_error_only_retries_transient_errors() -> None:
    assert classify_error(TransientError("timeout")) is ErrorKind.RETRYABLE
    assert classify_error(FatalError("broken")) is ErrorKind.FATAL
    assert classify_error(NotFoundError("gone")) is ErrorKind.FATAL
    assert classify_error(ValueError("bad")) is ErrorKind.FATAL


def test_retry_bounded_recovers_from_transient_errors() -> None:
    operation = _Flaky([TransientError("timeout"), TransientError("timeout")])
    retries: list[int] = []

    outcome = retry_bounded(
        operation, max_tries=3, on_retry=lambda error, attempt: retries.append(attempt)
    )

    assert outcome == Success("done", attempts=3)
    assert retries == [1, 2]


def test_retry_bounded_stops_after_max_tries() -> None:
    operation = _Flaky([TransientError("t1"), TransientError("t2"), TransientError("t3")])

    outcome = retry_bounded(operation, max_tries=2)

    assert isinstance(outcome, Failure)
    assert outcome.attempts == 2
    assert outcome.kind is ErrorKind.RETRYABLE
    assert str(outcome.error) == "t2"
    assert operation.calls == 2


def test_retry_bounded_does_not_retry_fatal_errors() -> None:
    operation = _Flaky([FatalError("broken")])

    outcome = retry_bounded(operation, max_tries=5)

    assert isinstance(outcome, Failure)
    assert outcome.kind is ErrorKind.FATAL
    assert operation.calls == 1


def test_retry_bounded_requires_positive_max_tries() -> None:
    with pytest.raises(ValueError, match="max_tries"):
        retry_bounded(lambda: None, max_tries=0)
