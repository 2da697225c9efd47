"""Runtime configuration model for hfstream.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    CACHE_DIR_ENV_VAR,
    CSV_DELIMITER_ENV_VAR,
    DEFAULT_CSV_DELIMITER,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PARQUET_BATCH_SIZE,
    LOG_LEVEL_ENV_VAR,
    PARQUET_BATCH_SIZE_ENV_VAR,
    SUPPORTED_LOG_LEVELS,
    TOKEN_ENV_VAR,
)
from core.errors import HFStreamConfigError


@dataclass(frozen=True)
class StreamConfig:
    """Validated runtime configuration.

    Attributes:
        token: Fallback access token when a caller supplies none.
        cache_dir: Optional snapshot cache directory for the hub client.
        parquet_batch_size: Rows decoded per Parquet batch.
        csv_delimiter: Single-character CSV field delimiter.
        log_level: Minimum structured log level.
    """

    token: str | None
    cache_dir: Path | None
    parquet_batch_size: int
    csv_delimiter: str
    log_level: str

    @classmethod
    def from_env(cls) -> "StreamConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            HFStreamConfigError: If environment values are invalid.
        """
        cache_dir_value = os.getenv(CACHE_DIR_ENV_VAR)
        return cls(
            token=os.getenv(TOKEN_ENV_VAR) or None,
            cache_dir=Path(cache_dir_value).expanduser().resolve() if cache_dir_value else None,
            parquet_batch_size=_parse_batch_size(
                os.getenv(PARQUET_BATCH_SIZE_ENV_VAR, str(DEFAULT_PARQUET_BATCH_SIZE))
            ),
            csv_delimiter=_parse_delimiter(os.getenv(CSV_DELIMITER_ENV_VAR, DEFAULT_CSV_DELIMITER)),
            log_level=_parse_log_level(os.getenv(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL)),
        )


def _parse_batch_size(raw_value: str) -> int:
    """Parse the Parquet batch size environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed positive integer.

    Raises:
        HFStreamConfigError: If value is not a positive integer.
    """
    try:
        batch_size = int(raw_value)
    except ValueError as error:
        raise HFStreamConfigError(
            f"Invalid {PARQUET_BATCH_SIZE_ENV_VAR} value: "
            f"expected integer, got '{raw_value}'. "
            f"Set {PARQUET_BATCH_SIZE_ENV_VAR} to a positive number."
        ) from error
    if batch_size <= 0:
        raise HFStreamConfigError(
            f"Invalid {PARQUET_BATCH_SIZE_ENV_VAR} value: "
            f"expected a positive integer, got {batch_size}."
        )
    return batch_size


def _parse_delimiter(raw_value: str) -> str:
    """Validate the CSV delimiter environment value."""
    if len(raw_value) != 1:
        raise HFStreamConfigError(
            f"Invalid {CSV_DELIMITER_ENV_VAR} value: "
            f"expected a single character, got '{raw_value}'."
        )
    return raw_value


def _parse_log_level(raw_value: str) -> str:
    """Normalize and validate the log level environment value."""
    level_name = raw_value.strip().upper()
    if level_name not in SUPPORTED_LOG_LEVELS:
        raise HFStreamConfigError(
            f"Invalid {LOG_LEVEL_ENV_VAR} value '{raw_value}'. "
            f"Use one of: {', '.join(SUPPORTED_LOG_LEVELS)}."
        )
    return level_name
