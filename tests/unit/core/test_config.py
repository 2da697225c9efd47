"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import StreamConfig
from core.errors import HFStreamConfigError


def test_from_env_reads_token_fallback(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should pick the access token from HF_TOKEN."""
    monkeypatch.setenv("HF_TOKEN", "hf_secret")

    config = StreamConfig.from_env()

    assert config.token == "hf_secret"


def test_from_env_uses_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unset variables should resolve to documented defaults."""
    for name in (
        "HF_TOKEN",
        "HFSTREAM_CACHE_DIR",
        "HFSTREAM_PARQUET_BATCH_SIZE",
        "HFSTREAM_CSV_DELIMITER",
        "HFSTREAM_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    config = StreamConfig.from_env()

    assert (config.token, config.cache_dir, config.parquet_batch_size) == (None, None, 1024)
    assert (config.csv_delimiter, config.log_level) == (",", "INFO")


def test_from_env_resolves_cache_dir(monkeypatch: pytest.MonkeyPatch) -> None:
    """Cache directory should be resolved to an absolute path."""
    monkeypatch.setenv("HFSTREAM_CACHE_DIR", "./.tmp-hub-cache")

    config = StreamConfig.from_env()

    assert config.cache_dir is not None and config.cache_dir.is_absolute()
    assert config.cache_dir.name == ".tmp-hub-cache"


@pytest.mark.parametrize("raw_value", ["not-a-number", "0", "-5"])
def test_from_env_raises_for_invalid_batch_size(
    monkeypatch: pytest.MonkeyPatch, raw_value: str
) -> None:
    """Config should fail for non-positive or non-numeric batch sizes."""
    monkeypatch.setenv("HFSTREAM_PARQUET_BATCH_SIZE", raw_value)

    with pytest.raises(HFStreamConfigError):
        StreamConfig.from_env()


def test_from_env_raises_for_multi_character_delimiter(monkeypatch: pytest.MonkeyPatch) -> None:
    """CSV delimiter must be exactly one character."""
    monkeypatch.setenv("HFSTREAM_CSV_DELIMITER", "::")

    with pytest.raises(HFStreamConfigError):
        StreamConfig.from_env()


def test_from_env_normalizes_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """Log level should be case-insensitive and validated."""
    monkeypatch.setenv("HFSTREAM_LOG_LEVEL", " debug ")
    assert StreamConfig.from_env().log_level == "DEBUG"

    monkeypatch.setenv("HFSTREAM_LOG_LEVEL", "chatty")
    with pytest.raises(HFStreamConfigError):
        StreamConfig.from_env()
