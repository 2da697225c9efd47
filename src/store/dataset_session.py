"""Dataset session lifecycle.

This module owns one dataset snapshot from preparation to disposal:
it materializes the snapshot, builds the file registry once, and hands
out independent record passes over it.
"""

from __future__ import annotations

from concurrent.futures import Future
from pathlib import Path
import threading
from typing import Any, Generator

from core.config import StreamConfig
from core.constants import DEFAULT_REVISION, SUPPORTED_DATA_EXTENSIONS
from core.errors import DiscoveryEmptyError, DisposedSessionError, SessionNotPreparedError
from core.logging_config import get_logger
from core.types import DatasetHandle, FileEntry, FileRegistry
from ingest.file_discovery import discover_files
from store.record_dispatch import iter_registry_records, sorted_entries
from store.snapshot_fetch import (
    SnapshotFetcher,
    build_snapshot_fetcher,
    fetch_snapshot_once_retrying,
)

_LOGGER = get_logger(__name__)


class RecordStream:
    """One pass over a session's records.

    Iterate it like any iterator. Call ``close()`` or use it as a context
    manager to stop early; the open file and decompressor are released
    immediately.
    """

    def __init__(self, records: Generator[Any, None, None]) -> None:
        self._records = records

    def __iter__(self) -> "RecordStream":
        return self

    def __next__(self) -> Any:
        return next(self._records)

    def close(self) -> None:
        """Abandon the pass and release its file handles."""
        self._records.close()

    def __enter__(self) -> "RecordStream":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class DatasetSession:
    """Prepared, repeatable record source over one dataset snapshot.

    Preparation runs at most once at a time; concurrent callers share
    the in-flight attempt. A failed attempt leaves the session
    unprepared so a later call retries from scratch. Disposal is
    terminal.
    """

    def __init__(
        self,
        handle: DatasetHandle,
        config: StreamConfig | None = None,
        fetch_snapshot: SnapshotFetcher | None = None,
    ) -> None:
        """Create an unprepared session.

        Args:
            handle: Dataset identity and credentials.
            config: Optional runtime configuration.
            fetch_snapshot: Optional snapshot fetch collaborator; defaults
                to the Hugging Face Hub download.
        """
        self._handle = handle
        self._config = config or StreamConfig.from_env()
        self._fetch_snapshot = fetch_snapshot or build_snapshot_fetcher(self._config)
        self._lock = threading.Lock()
        self._pending: Future[None] | None = None
        self._root_dir: Path | None = None
        self._registry: FileRegistry | None = None
        self._disposed = threading.Event()

    @property
    def handle(self) -> DatasetHandle:
        return self._handle

    @property
    def dataset_name(self) -> str:
        return self._handle.dataset_name

    @property
    def revision(self) -> str:
        return self._handle.revision

    @property
    def is_prepared(self) -> bool:
        return self._registry is not None

    @property
    def is_disposed(self) -> bool:
        return self._disposed.is_set()

    def prepare(self) -> None:
        """Materialize the snapshot and discover its files.

        No-op once prepared. Callers arriving while another thread is
        preparing wait for that attempt and share its outcome.

        Raises:
            DisposedSessionError: If the session was disposed.
            DiscoveryEmptyError: If no supported files were found.
        """
        self._ensure_not_disposed()
        with self._lock:
            if self._registry is not None:
                return
            pending = self._pending
            owns_attempt = pending is None
            if pending is None:
                pending = Future()
                self._pending = pending
        if owns_attempt:
            self._run_preparation(pending)
        pending.result()

    def iterate(self) -> RecordStream:
        """Start a new independent pass over all records.

        Returns:
            Lazy record stream; files are opened only as it is consumed.

        Raises:
            DisposedSessionError: If the session was disposed, including
                mid-pass on the next pull.
        """
        self.prepare()
        root_dir, registry = self._prepared_state()
        records = iter_registry_records(
            root_dir,
            registry,
            ensure_active=self._ensure_not_disposed,
            parquet_batch_size=self._config.parquet_batch_size,
            csv_delimiter=self._config.csv_delimiter,
        )
        return RecordStream(records)

    def __iter__(self) -> RecordStream:
        return self.iterate()

    def list_files(self) -> tuple[FileEntry, ...]:
        """Return discovered files sorted by path, without any I/O.

        Raises:
            DisposedSessionError: If the session was disposed.
            SessionNotPreparedError: If preparation has not succeeded.
        """
        self._ensure_not_disposed()
        _, registry = self._prepared_state()
        return sorted_entries(registry)

    def dispose(self) -> None:
        """Mark the session disposed. Safe to call more than once."""
        if self._disposed.is_set():
            return
        self._disposed.set()
        _LOGGER.info("session_disposed", dataset=self._handle.label)

    def __enter__(self) -> "DatasetSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()

    def _run_preparation(self, pending: Future[None]) -> None:
        """Run fetch and discovery, publishing the outcome on ``pending``."""
        try:
            root_dir = fetch_snapshot_once_retrying(self._fetch_snapshot, self._handle)
            registry = discover_files(root_dir)
            if not registry:
                raise DiscoveryEmptyError(
                    f"No supported files ({'/'.join(SUPPORTED_DATA_EXTENSIONS)}) "
                    f"found in {self._handle.label}. "
                    "Check the dataset name and revision."
                )
        except BaseException as error:
            with self._lock:
                self._pending = None
            _LOGGER.warning(
                "session_prepare_failed",
                dataset=self._handle.label,
                error_type=type(error).__name__,
            )
            pending.set_exception(error)
            if not isinstance(error, Exception):
                raise
            return
        with self._lock:
            self._root_dir = root_dir
            self._registry = registry
        _LOGGER.info(
            "session_prepared",
            dataset=self._handle.label,
            root_dir=str(root_dir),
            file_count=len(registry),
        )
        pending.set_result(None)

    def _prepared_state(self) -> tuple[Path, FileRegistry]:
        """Return root and registry, failing if preparation is incomplete."""
        root_dir = self._root_dir
        registry = self._registry
        if root_dir is None or registry is None:
            raise SessionNotPreparedError(
                f"Dataset session {self._handle.label} is not prepared. "
                "Call prepare() or create the session with create_session()."
            )
        return root_dir, registry

    def _ensure_not_disposed(self) -> None:
        if self._disposed.is_set():
            raise DisposedSessionError(
                f"Dataset session {self._handle.label} has been disposed. "
                "Create a new session to read this dataset again."
            )


def create_session(
    dataset_name: str,
    token: str | None = None,
    revision: str | None = None,
    config: StreamConfig | None = None,
    fetch_snapshot: SnapshotFetcher | None = None,
) -> DatasetSession:
    """Create and prepare a dataset session.

    Args:
        dataset_name: Hub dataset id.
        token: Optional access token; falls back to ``HF_TOKEN``.
        revision: Optional revision; defaults to ``main``.
        config: Optional runtime configuration.
        fetch_snapshot: Optional snapshot fetch collaborator.

    Returns:
        Prepared session.

    Raises:
        DiscoveryEmptyError: If the snapshot has no supported files.
    """
    resolved_config = config or StreamConfig.from_env()
    handle = DatasetHandle(
        dataset_name=dataset_name,
        token=token or resolved_config.token,
        revision=revision or DEFAULT_REVISION,
    )
    session = DatasetSession(handle, resolved_config, fetch_snapshot)
    session.prepare()
    return session
