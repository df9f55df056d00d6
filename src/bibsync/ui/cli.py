from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from bibsync.app import remove_library, sync_zotero_libraries
from bibsync.config import ConfigurationError, configure_logging, get_sync_config

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from bibsync.config import SyncConfig

log = logging.getLogger(__name__)

# 128 + SIGINT, as shells report a Ctrl+C
INTERRUPTED_EXIT_CODE = 130


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Not an integer: {value}") from exc
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"Must be at least 1: {value}")
    return parsed


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Synchronise Zotero libraries into the local bibliographic store"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every added, updated and deleted item",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync = subparsers.add_parser("sync", help="Sync the user library and all group libraries")
    sync.add_argument(
        "--library",
        action="append",
        dest="libraries",
        metavar="PREFIX",
        help="Only sync this library prefix, e.g. /users/123 (repeatable)",
    )
    sync.add_argument(
        "--max-tries",
        type=_positive_int,
        help="Attempts per item when the local store times out (defaults to config)",
    )
    sync.add_argument(
        "--checkpoint-interval",
        type=_positive_int,
        help="Persist progress every N items (defaults to config)",
    )

    remove = subparsers.add_parser(
        "remove-library", help="Forget a synced library; its records are kept"
    )
    remove.add_argument("prefix", help="Library prefix, e.g. /groups/456")

    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    sync_config: SyncConfig | None = None
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.command == "sync":
            sync_config = get_sync_config().override(
                max_tries=parsed_args.max_tries,
                checkpoint_interval=parsed_args.checkpoint_interval,
            )
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    if parsed_args.verbose:
        configure_logging(level=logging.DEBUG, force=True)

    try:
        if parsed_args.command == "sync":
            summary = sync_zotero_libraries(sync_config=sync_config, only=parsed_args.libraries)
            for result in summary.libraries:
                if result.up_to_date:
                    continue
                log.info(
                    "%s: %s added, %s updated, %s unchanged, %s skipped, %s removed",
                    result.prefix,
                    result.inserted,
                    result.updated,
                    result.unchanged,
                    result.skipped,
                    result.removed,
                )
        elif parsed_args.command == "remove-library":
            remove_library(parsed_args.prefix)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except KeyboardInterrupt:
        log.info("Closed by user (Ctrl+C)")
        sys.exit(INTERRUPTED_EXIT_CODE)
    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Interrupt the running sync so the active library saves its progress."""
    raise KeyboardInterrupt


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
