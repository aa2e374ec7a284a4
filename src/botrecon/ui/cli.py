from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from botrecon.app import classify_address, reconcile_persons
from botrecon.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Not an integer: {value}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"Must be positive: {value}")
    return parsed


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Tag PostHog persons as bots or datacenter traffic")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log per-record classification details",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    reconcile = subparsers.add_parser("reconcile", help="Classify persons and push updates")
    reconcile.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute and log updates without sending them",
    )
    reconcile.add_argument(
        "--page-size",
        type=_positive_int,
        default=None,
        help="Number of persons to request per query (defaults to config)",
    )
    reconcile.add_argument(
        "--batch-size",
        type=_positive_int,
        default=None,
        help="Number of events per delivery batch (defaults to config)",
    )

    classify = subparsers.add_parser("classify", help="Classify a single address")
    classify.add_argument("address", type=str, help="IPv4 address to look up")
    classify.add_argument(
        "--user-agent",
        type=str,
        help="Optional user-agent string to check against bot signatures",
    )

    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
    except SystemExit as exc:
        sys.exit(2 if exc.code else 0)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "reconcile":
            stats = reconcile_persons(
                dry_run=parsed_args.dry_run,
                page_size=parsed_args.page_size,
                batch_size=parsed_args.batch_size,
            )
            if stats.aborted:
                sys.exit(1)
        elif parsed_args.command == "classify":
            result = classify_address(parsed_args.address, parsed_args.user_agent)
            log.info("Classification for %s: %s", parsed_args.address, result)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during run")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
