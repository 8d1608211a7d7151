"""Command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from .config import ConfigBootstrapped, load_config
from .process import wait_for_process_exit
from .snapshot import run_snapshot
from .verify import verify_snapshot

log = logging.getLogger("gd_backup")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gd-backup",
        description="Snapshot Geometry Dash program files and saves, "
        "or re-verify an existing snapshot.",
    )
    parser.add_argument(
        "--verify",
        type=Path,
        metavar="FOLDER",
        help="Re-verify progress files in an existing snapshot folder "
        "instead of taking a new snapshot.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Settings file to use (default: appsettings.json next to "
        "the executable).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    result = load_config(args.config)
    if isinstance(result, ConfigBootstrapped):
        sys.exit(0)

    # Verify-only mode
    if args.verify is not None:
        verify_snapshot(args.verify)
        return

    wait_for_process_exit()

    snapshot_dir, _, _ = run_snapshot(result.config)

    # Re-read the fresh snapshot from disk
    verify_snapshot(snapshot_dir)


if __name__ == "__main__":
    main()
