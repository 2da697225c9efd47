"""hfstream CLI entry points.
This module exposes commands for listing and previewing dataset files.
It maps argparse commands onto session calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
import json
from typing import Any, Callable, Sequence

from core.config import StreamConfig
from core.constants import DEFAULT_HEAD_LIMIT, SUPPORTED_LOG_LEVELS
from core.logging_config import configure_logging
from store.dataset_session import DatasetSession, create_session


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="hfstream",
        description="Stream records from Hugging Face dataset files",
    )
    parser.add_argument("--revision", help="Dataset revision (default: main)")
    parser.add_argument("--token", help="Access token; overrides HF_TOKEN")
    parser.add_argument(
        "--log-level",
        choices=SUPPORTED_LOG_LEVELS,
        help="Override HFSTREAM_LOG_LEVEL for this command",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_files_command(subparsers)
    _add_head_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the hfstream CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    handler = _COMMAND_HANDLERS.get(args.command)
    if handler is None:
        parser.error(f"Unsupported command: {args.command}")
    config = _build_config(args.log_level)
    configure_logging(config.log_level)
    session = create_session(
        args.dataset,
        token=args.token,
        revision=args.revision,
        config=config,
    )
    with session:
        return handler(session, args)


def _build_config(log_level: str | None) -> StreamConfig:
    """Build config with optional log-level override."""
    config = StreamConfig.from_env()
    if log_level:
        config = replace(config, log_level=log_level)
    return config


def _run_files_command(session: DatasetSession, args: argparse.Namespace) -> int:
    """Handle files command.

    Args:
        session: Prepared dataset session.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    for entry in session.list_files():
        print(f"{entry.path}\t{entry.file_type}\t{str(entry.compressed).lower()}")
    return 0


def _run_head_command(session: DatasetSession, args: argparse.Namespace) -> int:
    """Handle head command.

    Args:
        session: Prepared dataset session.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    if args.limit <= 0:
        return 0
    with session.iterate() as records:
        for index, record in enumerate(records, 1):
            print(json.dumps(record, default=str, ensure_ascii=False))
            if index >= args.limit:
                break
    return 0


def _add_files_command(subparsers: Any) -> None:
    """Register files subcommand."""
    parser = subparsers.add_parser("files", help="List supported data files in a dataset")
    parser.add_argument("dataset", help="Dataset id, e.g. owner/name")


def _add_head_command(subparsers: Any) -> None:
    """Register head subcommand."""
    parser = subparsers.add_parser("head", help="Print the first records as JSON lines")
    parser.add_argument("dataset", help="Dataset id, e.g. owner/name")
    parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_HEAD_LIMIT,
        help="Number of records to print",
    )


_COMMAND_HANDLERS: dict[str, Callable[[DatasetSession, argparse.Namespace], int]] = {
    "files": _run_files_command,
    "head": _run_head_command,
}
