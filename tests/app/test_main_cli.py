from __future__ import annotations

import logging
import signal

import pytest

from bibsync.domain.sync import LibraryResult, SyncSummary
from bibsync.ui import cli


def _capture_sync(
    monkeypatch: pytest.MonkeyPatch, summary: SyncSummary | None = None
) -> dict[str, object]:
    captured: dict[str, object] = {}

    def fake_sync(**kwargs: object) -> SyncSummary:
        captured.update(kwargs)
        return summary or SyncSummary()

    monkeypatch.setattr(cli, "sync_zotero_libraries", fake_sync)
    return captured


def test_sync_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("BIBSYNC_MAX_TRIES", raising=False)
    monkeypatch.delenv("BIBSYNC_CHECKPOINT_INTERVAL", raising=False)
    captured = _capture_sync(monkeypatch)

    cli.main(["sync"])

    config = captured["sync_config"]
    assert getattr(config, "max_tries") == 3
    assert getattr(config, "checkpoint_interval") == 10
    assert captured["only"] is None


def test_sync_with_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = _capture_sync(monkeypatch)

    cli.main(
        [
            "sync",
            "--library",
            "/users/1",
            "--library",
            "/groups/5",
            "--max-tries",
            "5",
            "--checkpoint-interval",
            "2",
        ]
    )

    config = captured["sync_config"]
    assert getattr(config, "max_tries") == 5
    assert getattr(config, "checkpoint_interval") == 2
    assert captured["only"] == ["/users/1", "/groups/5"]


def test_sync_logs_per_library_counts(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    summary = SyncSummary(
        libraries=[
            LibraryResult(prefix="/users/1", name="", version=3, inserted=2, removed=1),
            LibraryResult(prefix="/groups/5", name="Lab", version=8, up_to_date=True),
        ]
    )
    _capture_sync(monkeypatch, summary)

    with caplog.at_level(logging.INFO, logger=cli.__name__):
        cli.main(["sync"])

    messages = [record.getMessage() for record in caplog.records if record.name == cli.__name__]
    assert messages == ["/users/1: 2 added, 0 updated, 0 unchanged, 0 skipped, 1 removed"]


@pytest.mark.parametrize("value", ["0", "many"])
def test_invalid_numbers_exit_with_usage_error(
    monkeypatch: pytest.MonkeyPatch, value: str
) -> None:
    _capture_sync(monkeypatch)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["sync", "--checkpoint-interval", value])

    assert excinfo.value.code == 2


def test_invalid_environment_exits_with_usage_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BIBSYNC_MAX_TRIES", "never")
    _capture_sync(monkeypatch)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["sync"])

    assert excinfo.value.code == 2


def test_sync_failure_exits_with_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_sync(**_: object) -> SyncSummary:
        raise RuntimeError("store unreachable")

    monkeypatch.setattr(cli, "sync_zotero_libraries", failing_sync)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["sync"])

    assert excinfo.value.code == 1


def test_remove_library(monkeypatch: pytest.MonkeyPatch) -> None:
    removed: list[str] = []
    monkeypatch.setattr(cli, "remove_library", removed.append)

    cli.main(["remove-library", "/groups/5"])

    assert removed == ["/groups/5"]


def test_verbose_switches_to_debug(monkeypatch: pytest.MonkeyPatch) -> None:
    _capture_sync(monkeypatch)
    levels: list[int] = []

    def fake_configure(*, level: int = logging.INFO, force: bool = False) -> None:
        levels.append(level)

    monkeypatch.setattr(cli, "configure_logging", fake_configure)

    cli.main(["--verbose", "sync"])

    assert levels == [logging.INFO, logging.DEBUG]


def test_interrupted_sync_exits_with_sigint_code(monkeypatch: pytest.MonkeyPatch) -> None:
    def interrupted_sync(**_: object) -> SyncSummary:
        cli.sigint_handler(signal.SIGINT, None)
        return SyncSummary()

    monkeypatch.setattr(cli, "sync_zotero_libraries", interrupted_sync)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["sync"])

    assert excinfo.value.code == cli.INTERRUPTED_EXIT_CODE
    assert excinfo.value.code != 0
