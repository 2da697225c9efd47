"""Dataset snapshot materialization.

This module binds the Hugging Face Hub snapshot download to the
session layer and owns the single retry for empty marker files.
"""

from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import Any, Callable

from core.config import StreamConfig
from core.constants import (
    DATASET_REPO_TYPE,
    EMPTY_MARKER_URL_FRAGMENT,
    RANGE_NOT_SATISFIABLE_STATUS,
)
from core.errors import HFStreamDependencyError
from core.logging_config import get_logger
from core.types import DatasetHandle

_LOGGER = get_logger(__name__)

SnapshotFetcher = Callable[[str, str, str | None], Path]


def fetch_dataset_snapshot(
    repo_id: str,
    revision: str,
    token: str | None,
    cache_dir: Path | None = None,
) -> Path:
    """Download a dataset snapshot and return its local directory.

    Args:
        repo_id: Hub dataset id.
        revision: Branch, tag, or commit.
        token: Optional access token.
        cache_dir: Optional hub cache directory.

    Returns:
        Local snapshot directory.

    Raises:
        HFStreamDependencyError: If huggingface_hub is not installed.
    """
    hub_module = _import_huggingface_hub()
    local_dir = hub_module.snapshot_download(
        repo_id=repo_id,
        repo_type=DATASET_REPO_TYPE,
        revision=revision,
        token=token,
        cache_dir=str(cache_dir) if cache_dir is not None else None,
    )
    return Path(local_dir)


def build_snapshot_fetcher(config: StreamConfig) -> SnapshotFetcher:
    """Bind the default hub fetcher to configured cache settings."""
    return partial(fetch_dataset_snapshot, cache_dir=config.cache_dir)


def fetch_snapshot_once_retrying(fetcher: SnapshotFetcher, handle: DatasetHandle) -> Path:
    """Run the fetcher, retrying once for the empty marker file quirk.

    Some dataset repos carry an empty ``git`` marker file that the hub
    answers with HTTP 416. That one failure is retried exactly once with
    identical arguments; the retry is not guaranteed to succeed.

    Args:
        fetcher: Snapshot fetch collaborator.
        handle: Dataset identity and credentials.

    Returns:
        Local snapshot directory.
    """
    try:
        return fetcher(handle.dataset_name, handle.revision, handle.token)
    except Exception as error:
        if not is_empty_marker_range_error(error):
            raise
        _LOGGER.warning(
            "snapshot_fetch_retry",
            dataset=handle.label,
            status=RANGE_NOT_SATISFIABLE_STATUS,
            reason=str(error),
        )
    return fetcher(handle.dataset_name, handle.revision, handle.token)


def is_empty_marker_range_error(error: BaseException) -> bool:
    """Return whether an error is a 416 for a ``/git`` marker URL."""
    response = getattr(error, "response", None)
    status_code = getattr(response, "status_code", None)
    if status_code is None:
        status_code = getattr(error, "status_code", None)
    url = getattr(response, "url", None) or getattr(error, "url", None) or ""
    return status_code == RANGE_NOT_SATISFIABLE_STATUS and EMPTY_MARKER_URL_FRAGMENT in str(url)


def _import_huggingface_hub() -> Any:
    """Import huggingface_hub with a clear error on failure."""
    try:
        import huggingface_hub
    except ImportError as error:
        raise HFStreamDependencyError(
            "Fetching datasets requires huggingface_hub, but it is not installed. "
            "Install with: pip install huggingface_hub"
        ) from error
    return huggingface_hub
