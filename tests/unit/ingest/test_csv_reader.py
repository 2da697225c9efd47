"""Unit tests for the CSV reader."""

from __future__ import annotations

import gzip
import io

import pytest

from core.errors import MalformedRowError
from ingest.csv_reader import iter_csv_records
from ingest.decompression import wrap_decompression


def _source(text: str) -> io.BytesIO:
    return io.BytesIO(text.encode("utf-8"))


def test_iter_csv_records_maps_header_in_row_order() -> None:
    """Each data row should map header names to text values in order."""
    records = list(iter_csv_records(_source("a,b\n1,2\n3,4\n"), "rows.csv"))

    assert records == [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}]
    assert all(list(record) == ["a", "b"] for record in records)


def test_iter_csv_records_raises_for_short_row() -> None:
    """A row narrower than the header should fail with its position."""
    records = iter_csv_records(_source("a,b,c\n1,2\n"), "bad.csv")

    with pytest.raises(MalformedRowError) as error_info:
        next(records)

    assert (error_info.value.path, error_info.value.row_number) == ("bad.csv", 2)


def test_iter_csv_records_skips_blank_lines_and_trims() -> None:
    """Blank lines are skipped and whitespace around fields is trimmed."""
    text = "\n name , score \n\n alice , 10 \n   \nbob,7\n"

    records = list(iter_csv_records(_source(text), "scores.csv"))

    assert records == [{"name": "alice", "score": "10"}, {"name": "bob", "score": "7"}]


def test_iter_csv_records_keeps_rows_of_empty_values() -> None:
    """A row of empty fields is data and should map to empty strings."""
    records = list(iter_csv_records(_source("a,b\n1,2\n,\n3,4\n"), "gaps.csv"))

    assert records == [{"a": "1", "b": "2"}, {"a": "", "b": ""}, {"a": "3", "b": "4"}]


def test_iter_csv_records_handles_quotes_bom_and_delimiter() -> None:
    """Quoted delimiters, a UTF-8 BOM, and custom delimiters are honored."""
    text = '\ufeffid;note\n1;"semi;colon"\n'

    records = list(iter_csv_records(_source(text), "notes.csv", delimiter=";"))

    assert records == [{"id": "1", "note": "semi;colon"}]


def test_iter_csv_records_reads_gzipped_source() -> None:
    """CSV should stream through the decompression shim."""
    raw_source = io.BytesIO(gzip.compress(b"x\n42\n"))

    records = list(iter_csv_records(wrap_decompression(raw_source, True), "x.csv.gz"))

    assert records == [{"x": "42"}]


def test_iter_csv_records_empty_file_yields_nothing() -> None:
    """A file without a header yields no records."""
    assert list(iter_csv_records(_source(""), "empty.csv")) == []


def test_iter_csv_records_close_releases_source() -> None:
    """Closing the generator early should close the byte source."""
    source = _source("a\n1\n2\n3\n")
    records = iter_csv_records(source, "a.csv")

    assert next(records) == {"a": "1"}
    records.close()

    assert source.closed
