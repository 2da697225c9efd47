"""Shared typed models.

This module defines immutable data models used by discovery, dispatch,
and session layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping

from core.constants import DEFAULT_REVISION

FileType = Literal["parquet", "csv", "jsonl"]

Record = dict[str, Any]


@dataclass(frozen=True)
class DatasetHandle:
    """Identity of a remote dataset snapshot.

    Attributes:
        dataset_name: Hub dataset id, e.g. ``owner/name``.
        token: Optional access token for gated or private datasets.
        revision: Branch, tag, or commit to materialize.
    """

    dataset_name: str
    token: str | None = field(default=None, repr=False)
    revision: str = DEFAULT_REVISION

    @property
    def label(self) -> str:
        """Return ``name@revision`` for messages and log fields."""
        return f"{self.dataset_name}@{self.revision}"


@dataclass(frozen=True)
class FileEntry:
    """One classified data file inside a snapshot.

    Attributes:
        path: POSIX relative path under the snapshot root.
        file_type: Logical file format.
        compressed: Whether the file bytes are gzip-compressed.
    """

    path: str
    file_type: FileType
    compressed: bool


FileRegistry = Mapping[str, FileEntry]
