"""Reconciliation defaults."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .env import positive_int_env_var

DEFAULT_MAX_TRIES = 3
DEFAULT_CHECKPOINT_INTERVAL = 10


@dataclass(frozen=True, slots=True)
class SyncConfig:
    max_tries: int = DEFAULT_MAX_TRIES
    checkpoint_interval: int = DEFAULT_CHECKPOINT_INTERVAL

    def override(
        self, *, max_tries: int | None = None, checkpoint_interval: int | None = None
    ) -> SyncConfig:
        """Apply command-line values on top of the environment."""

        return replace(
            self,
            max_tries=self.max_tries if max_tries is None else max_tries,
            checkpoint_interval=(
                self.checkpoint_interval if checkpoint_interval is None else checkpoint_interval
            ),
        )


def get_sync_config() -> SyncConfig:
    return SyncConfig(
        max_tries=positive_int_env_var("BIBSYNC_MAX_TRIES", DEFAULT_MAX_TRIES),
        checkpoint_interval=positive_int_env_var(
            "BIBSYNC_CHECKPOINT_INTERVAL", DEFAULT_CHECKPOINT_INTERVAL
        ),
    )
