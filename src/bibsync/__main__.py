from __future__ import annotations

from bibsync.ui.cli import run

run()
