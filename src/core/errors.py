"""hfstream exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each stage of discovery, dispatch, and iteration raises its own type.
"""

from __future__ import annotations


class HFStreamError(Exception):
    """Base exception for all hfstream failures."""


class HFStreamConfigError(HFStreamError):
    """Raised for invalid runtime configuration."""


class HFStreamDependencyError(HFStreamError):
    """Raised when an optional runtime dependency is missing."""


class DiscoveryEmptyError(HFStreamError):
    """Raised when a dataset snapshot holds no supported data files."""


class UnsupportedCombinationError(HFStreamError):
    """Raised when a file's type and compression cannot be streamed together."""


class MalformedRowError(HFStreamError):
    """Raised when a CSV row does not match its header width.

    Attributes:
        path: Relative path of the offending file.
        row_number: One-based physical line number of the row.
    """

    def __init__(self, message: str, path: str, row_number: int) -> None:
        super().__init__(message)
        self.path = path
        self.row_number = row_number


class MalformedRecordError(HFStreamError):
    """Raised when a JSONL line cannot be decoded.

    The JSONL reader treats this as recoverable and skips the line.
    """

    def __init__(self, message: str, path: str, line_number: int) -> None:
        super().__init__(message)
        self.path = path
        self.line_number = line_number


class DisposedSessionError(HFStreamError):
    """Raised for any session operation after disposal."""


class SessionNotPreparedError(HFStreamError):
    """Raised when session state is read before preparation succeeded."""
