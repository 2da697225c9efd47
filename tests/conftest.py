"""Pytest configuration and shared fixtures for repository test runs."""

from __future__ import annotations

import gzip
from pathlib import Path
import sys
from typing import Any, Callable

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


class FakeFetcher:
    """Snapshot fetcher returning a local directory and recording calls.

    Exceptions queued on ``failures`` are raised by the next calls.
    """

    def __init__(self, root_dir: Path) -> None:
        self.root_dir = root_dir
        self.calls: list[tuple[str, str, str | None]] = []
        self.failures: list[BaseException] = []

    def __call__(self, repo_id: str, revision: str, token: str | None) -> Path:
        self.calls.append((repo_id, revision, token))
        if self.failures:
            raise self.failures.pop(0)
        return self.root_dir


@pytest.fixture
def snapshot_dir(tmp_path: Path) -> Path:
    """Empty directory standing in for a materialized snapshot."""
    root_dir = tmp_path / "snapshot"
    root_dir.mkdir()
    return root_dir


@pytest.fixture
def write_data_file(snapshot_dir: Path) -> Callable[..., Path]:
    """Return a helper writing text files, optionally gzip-compressed."""

    def _write(relative_path: str, text: str, compressed: bool = False) -> Path:
        file_path = snapshot_dir / relative_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        payload = text.encode("utf-8")
        file_path.write_bytes(gzip.compress(payload) if compressed else payload)
        return file_path

    return _write


@pytest.fixture
def write_parquet_file(snapshot_dir: Path) -> Callable[[str, list[dict[str, Any]]], Path]:
    """Return a helper writing rows into a Parquet file."""
    pa = pytest.importorskip("pyarrow")
    pq = pytest.importorskip("pyarrow.parquet")

    def _write(relative_path: str, rows: list[dict[str, Any]]) -> Path:
        file_path = snapshot_dir / relative_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        pq.write_table(pa.Table.from_pylist(rows), file_path)
        return file_path

    return _write


@pytest.fixture
def fake_fetcher(snapshot_dir: Path) -> FakeFetcher:
    """Fetcher that materializes the test snapshot directory."""
    return FakeFetcher(snapshot_dir)


@pytest.fixture
def stream_config() -> Any:
    """Deterministic config independent of the process environment."""
    from core.config import StreamConfig

    return StreamConfig(
        token=None,
        cache_dir=None,
        parquet_batch_size=2,
        csv_delimiter=",",
        log_level="INFO",
    )


@pytest.fixture
def make_session(stream_config: Any, fake_fetcher: FakeFetcher) -> Callable[..., Any]:
    """Return a factory for unprepared sessions over the test snapshot."""
    from core.types import DatasetHandle
    from store.dataset_session import DatasetSession

    def _make(dataset_name: str = "owner/demo", revision: str = "main") -> Any:
        handle = DatasetHandle(dataset_name=dataset_name, revision=revision)
        return DatasetSession(handle, stream_config, fake_fetcher)

    return _make
