"""Public SDK surface for hfstream.

This module provides a stable import path for library users.
It re-exports session creation, typed models, and error types.
"""

from __future__ import annotations

from core.config import StreamConfig
from core.errors import (
    DiscoveryEmptyError,
    DisposedSessionError,
    HFStreamConfigError,
    HFStreamDependencyError,
    HFStreamError,
    MalformedRecordError,
    MalformedRowError,
    SessionNotPreparedError,
    UnsupportedCombinationError,
)
from core.types import DatasetHandle, FileEntry, FileType, Record
from ingest.file_classifier import classify_path
from store.dataset_session import DatasetSession, RecordStream, create_session
from store.snapshot_fetch import SnapshotFetcher, fetch_dataset_snapshot

create = create_session

__all__ = [
    "DatasetHandle",
    "DatasetSession",
    "DiscoveryEmptyError",
    "DisposedSessionError",
    "FileEntry",
    "FileType",
    "HFStreamConfigError",
    "HFStreamDependencyError",
    "HFStreamError",
    "MalformedRecordError",
    "MalformedRowError",
    "Record",
    "RecordStream",
    "SessionNotPreparedError",
    "SnapshotFetcher",
    "StreamConfig",
    "UnsupportedCombinationError",
    "classify_path",
    "create",
    "create_session",
    "fetch_dataset_snapshot",
]
