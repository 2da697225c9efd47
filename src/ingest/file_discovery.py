"""Snapshot file discovery.

This module walks a materialized snapshot directory and builds the
read-only registry of supported data files used for every pass.
"""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType

from core.logging_config import get_logger
from core.types import FileEntry, FileRegistry
from ingest.file_classifier import classify_path

_LOGGER = get_logger(__name__)


def discover_files(root_dir: Path) -> FileRegistry:
    """Classify every regular file under a snapshot root.

    Args:
        root_dir: Local snapshot directory.

    Returns:
        Read-only mapping from relative path to classified entry.
        Unsupported files are left out.
    """
    entries: dict[str, FileEntry] = {}
    for file_path in sorted(root_dir.rglob("*")):
        # Snapshot files are usually symlinks into a blob cache.
        if not file_path.is_file():
            continue
        relative_path = file_path.relative_to(root_dir).as_posix()
        entry = classify_path(relative_path)
        if entry is None:
            _LOGGER.debug("file_skipped", path=relative_path)
            continue
        entries[entry.path] = entry
        _LOGGER.debug(
            "file_discovered",
            path=entry.path,
            file_type=entry.file_type,
            compressed=entry.compressed,
        )
    return MappingProxyType(entries)
