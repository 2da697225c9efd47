"""Transparent decompression for snapshot byte streams.

This module wraps raw file handles with a gzip reader when needed.
Corrupt data is reported lazily, when a read reaches the bad block.
"""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
import gzip
from pathlib import Path
from typing import BinaryIO, Iterator, cast


def wrap_decompression(raw_source: BinaryIO, compressed: bool) -> BinaryIO:
    """Return a byte source yielding the logical file bytes.

    Args:
        raw_source: Open binary handle over the stored bytes.
        compressed: Whether the stored bytes are gzip-compressed.

    Returns:
        ``raw_source`` itself when uncompressed, else a gzip reader over it.
        The gzip reader does not close ``raw_source``.
    """
    if not compressed:
        return raw_source
    return cast(BinaryIO, gzip.GzipFile(fileobj=raw_source, mode="rb"))


@contextmanager
def open_byte_source(file_path: Path, compressed: bool) -> Iterator[BinaryIO]:
    """Open a file as a logical byte source.

    Both the decompressor and the raw handle are closed on every exit
    path, including generator close during early abandonment.

    Args:
        file_path: Absolute file path.
        compressed: Whether to decompress on read.

    Yields:
        Binary stream of logical bytes.
    """
    with ExitStack() as stack:
        raw_source = stack.enter_context(file_path.open("rb"))
        source = wrap_decompression(raw_source, compressed)
        if source is not raw_source:
            stack.enter_context(source)
        yield source
