"""Parquet record streaming.

This module forwards rows decoded by ``pyarrow`` as plain dict records.
Rows are decoded batch by batch, never as a whole table.
"""

from __future__ import annotations

from typing import Any, BinaryIO, Iterator

from core.constants import DEFAULT_PARQUET_BATCH_SIZE
from core.errors import HFStreamDependencyError
from core.types import Record


def iter_parquet_records(
    source: BinaryIO,
    relative_path: str,
    batch_size: int = DEFAULT_PARQUET_BATCH_SIZE,
) -> Iterator[Record]:
    """Stream rows from a Parquet file.

    Args:
        source: Seekable, uncompressed binary source.
        relative_path: Snapshot-relative path, for error context.
        batch_size: Rows decoded per batch.

    Yields:
        One dict per row, keyed by column name.

    Raises:
        HFStreamDependencyError: If pyarrow is not installed.
    """
    parquet_module = _import_parquet(relative_path)
    parquet_file = parquet_module.ParquetFile(source)
    try:
        for batch in parquet_file.iter_batches(batch_size=batch_size):
            yield from batch.to_pylist()
    finally:
        parquet_file.close()


def _import_parquet(relative_path: str) -> Any:
    """Import ``pyarrow.parquet`` with a clear error on failure."""
    try:
        import pyarrow.parquet as parquet_module
    except ImportError as error:
        raise HFStreamDependencyError(
            f"Reading {relative_path} requires pyarrow, but it is not installed. "
            "Install with: pip install pyarrow"
        ) from error
    return parquet_module
