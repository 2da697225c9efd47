"""Core constants used across hfstream modules.

This module centralizes extensions, defaults, and environment names.
Keeping values here avoids magic literals in streaming logic.
"""

from __future__ import annotations

DEFAULT_REVISION = "main"
DATASET_REPO_TYPE = "dataset"
COMPRESSION_SUFFIX = ".gz"
PARQUET_EXTENSION = ".parquet"
CSV_EXTENSION = ".csv"
JSONL_EXTENSION = ".jsonl"
SUPPORTED_DATA_EXTENSIONS = (PARQUET_EXTENSION, CSV_EXTENSION, JSONL_EXTENSION)
TEXT_ENCODING = "utf-8-sig"
DEFAULT_PARQUET_BATCH_SIZE = 1024
DEFAULT_CSV_DELIMITER = ","
DEFAULT_LOG_LEVEL = "INFO"
SUPPORTED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
DEFAULT_HEAD_LIMIT = 10
TOKEN_ENV_VAR = "HF_TOKEN"
CACHE_DIR_ENV_VAR = "HFSTREAM_CACHE_DIR"
PARQUET_BATCH_SIZE_ENV_VAR = "HFSTREAM_PARQUET_BATCH_SIZE"
CSV_DELIMITER_ENV_VAR = "HFSTREAM_CSV_DELIMITER"
LOG_LEVEL_ENV_VAR = "HFSTREAM_LOG_LEVEL"
RANGE_NOT_SATISFIABLE_STATUS = 416
EMPTY_MARKER_URL_FRAGMENT = "/git"
