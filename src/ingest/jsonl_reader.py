"""JSONL record streaming.

This module decodes one JSON value per non-blank line. Lines that fail
to decode are logged and skipped; the rest of the file still streams.
"""

from __future__ import annotations

import io
import json
from typing import Any, BinaryIO, Iterator

from core.constants import TEXT_ENCODING
from core.errors import MalformedRecordError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


def iter_jsonl_records(source: BinaryIO, relative_path: str) -> Iterator[Any]:
    """Stream decoded JSON values from line-delimited bytes.

    Args:
        source: Binary source of logical (decompressed) bytes.
        relative_path: Snapshot-relative path, for log context.

    Yields:
        Decoded JSON value per well-formed line, in file order.
    """
    with io.TextIOWrapper(source, encoding=TEXT_ENCODING, errors="replace") as text_stream:
        for line_number, line in enumerate(text_stream, 1):
            stripped = line.strip()
            if not stripped:
                continue
            try:
                value = _parse_jsonl_line(relative_path, stripped, line_number)
            except MalformedRecordError as error:
                _LOGGER.warning(
                    "jsonl_record_skipped",
                    path=error.path,
                    line_number=error.line_number,
                    reason=str(error),
                )
                continue
            yield value


def _parse_jsonl_line(relative_path: str, line: str, line_number: int) -> Any:
    """Parse one JSONL line.

    Args:
        relative_path: Parent file path for context.
        line: Stripped JSON text line.
        line_number: One-based line number.

    Returns:
        Decoded JSON value.

    Raises:
        MalformedRecordError: If the line is not valid JSON, including
            the non-standard ``NaN`` and ``Infinity`` literals.
    """
    try:
        return json.loads(line, parse_constant=_reject_constant)
    except ValueError as error:
        reason = error.msg if isinstance(error, json.JSONDecodeError) else str(error)
        raise MalformedRecordError(
            f"Failed to parse JSONL record at {relative_path}:{line_number}: {reason}.",
            path=relative_path,
            line_number=line_number,
        ) from error


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant {name}")
