"""Tests for textchunker.csv_chunker."""

import math

import pytest

from textchunker.csv_chunker import (
    ParsedCSV,
    chunk_rows,
    count_rows,
    estimate_rows_per_chunk,
    is_csv_content,
    parse_csv,
)
from textchunker.exceptions import CSVParseError, NoHeadersFoundError


def _make_csv(rows: int) -> str:
    """Header "a,b" plus ``rows`` data rows of exactly 9 chars (10 with newline)."""
    lines = ["a,b"] + [f"{i:04d},abcd" for i in range(rows)]
    return "\n".join(lines) + "\n"


class TestParseCSV:
    def test_headers_and_rows(self, csv_content):
        parsed = parse_csv(csv_content)
        assert parsed.headers == ["id", "product_name", "price"]
        assert parsed.row_count == 4
        assert parsed.rows[0] == {"id": "1", "product_name": "Apple", "price": "1.50"}

    def test_values_stay_strings(self):
        parsed = parse_csv("code,date\n007,2024-01-05")
        assert parsed.rows[0] == {"code": "007", "date": "2024-01-05"}

    def test_quoted_fields(self):
        parsed = parse_csv('name,desc\nWidget,"small, blue"\nGadget,"says ""hi"""')
        assert parsed.rows[0]["desc"] == "small, blue"
        assert parsed.rows[1]["desc"] == 'says "hi"'

    def test_multiline_quoted_field(self):
        parsed = parse_csv('name,notes\nWidget,"line one\nline two"')
        assert parsed.rows[0]["notes"] == "line one\nline two"

    def test_bom_stripped(self):
        assert parse_csv("\ufeffa,b\n1,2").headers == ["a", "b"]

    def test_crlf(self):
        parsed = parse_csv("a,b\r\n1,2\r\n3,4\r\n")
        assert parsed.rows == [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}]

    def test_leading_blank_lines(self):
        assert parse_csv("\n\na,b\n1,2").headers == ["a", "b"]

    def test_blank_rows_skipped(self):
        assert parse_csv("a,b\n1,2\n\n,\n3,4").row_count == 2

    def test_header_names_cleaned(self):
        assert parse_csv(" a ,,a\n1,2,3").headers == ["a", "column_2", "a_1"]

    def test_wide_rows_truncated(self, caplog):
        with caplog.at_level("DEBUG", logger="textchunker"):
            parsed = parse_csv("a,b\n1,2\n3,4,5,6")
        assert parsed.row_count == 2
        assert parsed.rows[1] == {"a": "3", "b": "4"}
        assert "dropping 2 cell(s)" in caplog.text

    def test_short_rows_padded(self):
        parsed = parse_csv("a,b,c\n1")
        assert parsed.rows[0] == {"a": "1", "b": "", "c": ""}

    def test_header_only(self):
        parsed = parse_csv("a,b,c")
        assert parsed.headers == ["a", "b", "c"]
        assert parsed.rows == []
        assert parsed.column_count == 3


class TestParseErrors:
    def test_empty_content(self):
        with pytest.raises(NoHeadersFoundError):
            parse_csv("")

    def test_none_content(self):
        with pytest.raises(NoHeadersFoundError):
            parse_csv(None)

    def test_blank_header_row(self):
        with pytest.raises(NoHeadersFoundError) as exc_info:
            parse_csv(",,\n1,2,3")
        assert str(exc_info.value).startswith("No headers found in CSV data")

    def test_field_over_size_limit(self):
        with pytest.raises(CSVParseError) as exc_info:
            parse_csv("a,b\n" + "x" * 200_000 + ",1")
        assert "size limit" in exc_info.value.message
        assert exc_info.value.line_number == 2
        assert exc_info.value.original_error is not None

    def test_malformed_quotes(self):
        with pytest.raises(CSVParseError) as exc_info:
            parse_csv('a,b\n"x"y,1')
        assert exc_info.value.original_error is not None
        assert exc_info.value.details


class TestRowsPerChunk:
    def test_estimate(self):
        parsed = parse_csv(_make_csv(250))
        assert estimate_rows_per_chunk(parsed, 100) == 9

    def test_minimum_one_row(self):
        parsed = parse_csv("a,b\n" + "x" * 200 + ",y")
        assert estimate_rows_per_chunk(parsed, 50) == 1

    def test_target_smaller_than_header(self):
        parsed = parse_csv("long_header_name,other_header\n1,2")
        assert estimate_rows_per_chunk(parsed, 5) == 1

    def test_sample_is_first_hundred_rows(self):
        short = [f"{i:04d},abcd" for i in range(100)]
        wide = ["x" * 500 + ",y" for _ in range(50)]
        parsed = parse_csv("\n".join(["a,b"] + short + wide))
        assert estimate_rows_per_chunk(parsed, 100) == 9


class TestChunkRows:
    def test_two_hundred_fifty_rows(self):
        parsed = parse_csv(_make_csv(250))
        chunks = chunk_rows(parsed, 100)
        assert len(chunks) == math.ceil(250 / 9) == 28
        assert all(chunk.startswith("a,b\n") for chunk in chunks)

    def test_every_chunk_reparses_with_document_header(self):
        parsed = parse_csv(_make_csv(250))
        chunks = chunk_rows(parsed, 100)
        for chunk in chunks:
            assert parse_csv(chunk).headers == parsed.headers
        assert sum(count_rows(chunk) for chunk in chunks) == 250
        assert count_rows(chunks[-1]) == 250 - 27 * 9

    def test_rows_in_order(self):
        parsed = parse_csv(_make_csv(30))
        chunks = chunk_rows(parsed, 100)
        rows = [row for chunk in chunks for row in parse_csv(chunk).rows]
        assert rows == parsed.rows

    def test_no_trailing_newline(self):
        chunks = chunk_rows(parse_csv(_make_csv(20)), 100)
        assert not any(chunk.endswith("\n") for chunk in chunks)

    def test_quoted_values_survive(self):
        parsed = parse_csv('name,desc\nWidget,"small, blue"')
        chunks = chunk_rows(parsed, 100)
        assert chunks == ['name,desc\nWidget,"small, blue"']
        assert parse_csv(chunks[0]).rows == parsed.rows

    def test_zero_rows(self):
        assert chunk_rows(parse_csv("a,b"), 100) == []

    def test_zero_headers(self):
        with pytest.raises(NoHeadersFoundError):
            chunk_rows(ParsedCSV(), 100)


class TestDetection:
    def test_product_table(self, csv_content):
        assert is_csv_content(csv_content)

    def test_quoted_field_with_comma(self):
        assert is_csv_content('x,y\n"a, b",c')

    def test_prose_with_commas(self):
        text = "Hello, world. This is text, really.\nAnother line, here."
        assert not is_csv_content(text)

    def test_single_line(self):
        assert not is_csv_content("a,b,c")

    def test_no_commas(self):
        assert not is_csv_content("one\ntwo\nthree")

    def test_inconsistent_commas(self):
        assert not is_csv_content("name,price\nApple,1,2,3,4")

    def test_empty(self):
        assert not is_csv_content("")

    def test_mime_type_relaxes_content_check(self):
        assert not is_csv_content("a,b\nc,d")
        assert is_csv_content("a,b\nc,d", mime_type="text/csv")
        assert is_csv_content("a,b\nc,d", mime_type="application/vnd.ms-excel")

    def test_mime_type_still_needs_commas(self):
        assert not is_csv_content("just words\nmore words", mime_type="text/csv")
