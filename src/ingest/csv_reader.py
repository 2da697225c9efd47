"""CSV record streaming.

This module maps each CSV data row onto the header's field names.
Rows whose width differs from the header abort the file.
"""

from __future__ import annotations

import csv
import io
from typing import BinaryIO, Iterator

from core.constants import DEFAULT_CSV_DELIMITER, TEXT_ENCODING
from core.errors import MalformedRowError
from core.types import Record


def iter_csv_records(
    source: BinaryIO,
    relative_path: str,
    delimiter: str = DEFAULT_CSV_DELIMITER,
) -> Iterator[Record]:
    """Stream header-keyed records from CSV bytes.

    Args:
        source: Binary source of logical (decompressed) bytes.
        relative_path: Snapshot-relative path, for error context.
        delimiter: Field delimiter character.

    Yields:
        One dict per data row with trimmed text values.

    Raises:
        MalformedRowError: If a row's field count differs from the header.
    """
    with io.TextIOWrapper(source, encoding=TEXT_ENCODING, newline="") as text_stream:
        reader = csv.reader(text_stream, delimiter=delimiter)
        header: list[str] | None = None
        for row in reader:
            if _is_blank_line(row, header):
                continue
            fields = [value.strip() for value in row]
            if header is None:
                header = fields
                continue
            if len(fields) != len(header):
                raise MalformedRowError(
                    f"Malformed CSV row in {relative_path} at line {reader.line_num}: "
                    f"expected {len(header)} fields, got {len(fields)}. "
                    "Fix the row or remove the file from the dataset.",
                    path=relative_path,
                    row_number=reader.line_num,
                )
            yield dict(zip(header, fields))


def _is_blank_line(row: list[str], header: list[str] | None) -> bool:
    """Return whether a parsed row came from an empty or whitespace-only line.

    Rows of empty fields such as ``,`` are data, not blank lines.
    """
    if not row:
        return True
    if len(row) > 1 or row[0].strip():
        return False
    return header is None or len(header) > 1
