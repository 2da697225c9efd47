"""Record dispatch across classified snapshot files.

This module walks a file registry in path order and chains each file's
reader output into one lazy record sequence.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Iterator

from core.constants import DEFAULT_CSV_DELIMITER, DEFAULT_PARQUET_BATCH_SIZE
from core.errors import HFStreamError, UnsupportedCombinationError
from core.logging_config import get_logger
from core.types import FileEntry, FileRegistry
from ingest.csv_reader import iter_csv_records
from ingest.decompression import open_byte_source
from ingest.jsonl_reader import iter_jsonl_records
from ingest.parquet_reader import iter_parquet_records

_LOGGER = get_logger(__name__)


def sorted_entries(registry: FileRegistry) -> tuple[FileEntry, ...]:
    """Return registry entries in ascending path order."""
    return tuple(registry[path] for path in sorted(registry))


def iter_registry_records(
    root_dir: Path,
    registry: FileRegistry,
    ensure_active: Callable[[], None],
    parquet_batch_size: int = DEFAULT_PARQUET_BATCH_SIZE,
    csv_delimiter: str = DEFAULT_CSV_DELIMITER,
) -> Iterator[Any]:
    """Stream records from every registry file, one file at a time.

    Args:
        root_dir: Snapshot root the registry paths are relative to.
        registry: Classified files to read.
        ensure_active: Guard called before each file and each record;
            raises to stop the pass.
        parquet_batch_size: Rows decoded per Parquet batch.
        csv_delimiter: CSV field delimiter.

    Yields:
        Records in path order, then file order.

    Raises:
        UnsupportedCombinationError: If a gzip-compressed Parquet file is
            reached. Records of earlier files are already delivered.
    """
    for entry in sorted_entries(registry):
        ensure_active()
        if entry.file_type == "parquet" and entry.compressed:
            raise UnsupportedCombinationError(
                f"Gzipped parquet is not supported: {entry.path}. "
                "Provide plain .parquet (not .parquet.gz)."
            )
        _LOGGER.debug(
            "file_stream_started",
            path=entry.path,
            file_type=entry.file_type,
            compressed=entry.compressed,
        )
        with open_byte_source(root_dir / entry.path, entry.compressed) as source:
            records = _open_reader(entry, source, parquet_batch_size, csv_delimiter)
            try:
                for record in records:
                    ensure_active()
                    yield record
            finally:
                records.close()


def _open_reader(
    entry: FileEntry,
    source: Any,
    parquet_batch_size: int,
    csv_delimiter: str,
) -> Any:
    """Select the reader generator for an entry's file type.

    Raises:
        HFStreamError: If the entry carries an unknown file type.
    """
    if entry.file_type == "parquet":
        return iter_parquet_records(source, entry.path, batch_size=parquet_batch_size)
    if entry.file_type == "csv":
        return iter_csv_records(source, entry.path, delimiter=csv_delimiter)
    if entry.file_type == "jsonl":
        return iter_jsonl_records(source, entry.path)
    raise HFStreamError(f"No reader registered for file type '{entry.file_type}': {entry.path}.")
