"""File type classification for snapshot files.

This module maps a relative path onto a logical file type and a
compression flag using extensions only; file contents are never read.
"""

from __future__ import annotations

from pathlib import PurePosixPath

from core.constants import (
    COMPRESSION_SUFFIX,
    CSV_EXTENSION,
    JSONL_EXTENSION,
    PARQUET_EXTENSION,
)
from core.types import FileEntry, FileType

_EXTENSION_FILE_TYPES: dict[str, FileType] = {
    PARQUET_EXTENSION: "parquet",
    CSV_EXTENSION: "csv",
    JSONL_EXTENSION: "jsonl",
}


def classify_path(relative_path: str) -> FileEntry | None:
    """Classify a relative file path by extension.

    A trailing ``.gz`` marks the file compressed and the extension
    before it decides the type, so ``train.csv.gz`` is compressed CSV.

    Args:
        relative_path: Path relative to the snapshot root.

    Returns:
        Classified entry, or ``None`` for unsupported extensions.
    """
    normalized_path = normalize_relative_path(relative_path)
    name = PurePosixPath(normalized_path).name
    extension = PurePosixPath(name).suffix.lower()
    compressed = extension == COMPRESSION_SUFFIX
    if compressed:
        extension = PurePosixPath(name[: -len(COMPRESSION_SUFFIX)]).suffix.lower()
    file_type = _EXTENSION_FILE_TYPES.get(extension)
    if file_type is None:
        return None
    return FileEntry(path=normalized_path, file_type=file_type, compressed=compressed)


def normalize_relative_path(relative_path: str) -> str:
    """Return a registry key with forward slashes on every platform."""
    return relative_path.replace("\\", "/")
