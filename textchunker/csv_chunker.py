"""
CSV Parser & Row Chunker - tabular path of the chunking engine

Partitions CSV rows (not characters) into size-bounded groups. Every
chunk is re-serialized with the header row, so each one is independently
parseable and self-describing.

Algorithm:
1. Parse with the first non-empty record as header row; every value
   stays a string.
2. Estimate the average serialized row size from up to 100 sample rows.
3. rows_per_chunk = max(1, floor((target - header_size) / avg_row_size)).
4. Partition rows sequentially and serialize each group under the header.

Usage:
    from textchunker.csv_chunker import parse_csv, chunk_rows

    parsed = parse_csv(content)
    chunks = chunk_rows(parsed, target_chunk_size=768)
"""

import csv
import io
import logging
import math
import re
from dataclasses import dataclass, field
from typing import Optional

from .exceptions import CSVParseError, NoHeadersFoundError

logger = logging.getLogger(__name__)

ROW_SAMPLE_SIZE = 100
DEFAULT_ROW_SIZE = 100
DETECTION_LINES = 10

_CSV_MIME_MARKERS = ("csv", "comma-separated-values", "application/vnd.ms-excel")
_QUOTED_FIELD_WITH_COMMA = re.compile(r"\"[^\"\n]*,[^\"\n]*\"|'[^'\n]*,[^'\n]*'")
_HEADER_WORD = re.compile(r"[^\W\d_]{3,}")
_NUMBER = re.compile(r"\d+")


@dataclass(frozen=True)
class ParsedCSV:
    """Header names plus rows keyed by header, all values as strings."""
    headers: list[str] = field(default_factory=list)
    rows: list[dict[str, str]] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.headers)


# -----------------------------------------------------------------------------
# Detection
# -----------------------------------------------------------------------------


def _non_empty_lines(text: str, limit: int) -> list[str]:
    lines = [line for line in text.split("\n") if line.strip()]
    return lines[:limit]


def _has_consistent_commas(lines: list[str]) -> bool:
    counts = [line.count(",") for line in lines]
    if counts[0] == 0:
        return False
    return all(abs(count - counts[0]) <= 1 for count in counts[1:])


def is_csv_content(text: str, mime_type: Optional[str] = None) -> bool:
    """
    Guess whether extracted text is CSV.

    A CSV MIME type only needs consistent comma counts over the first ten
    non-empty lines. Otherwise the content must also show quoted fields
    containing commas, or a textual header above rows with more numbers.
    """
    if not text or not text.strip():
        return False

    lines = _non_empty_lines(text, DETECTION_LINES)
    if len(lines) < 2 or not _has_consistent_commas(lines):
        return False

    if mime_type and any(marker in mime_type.lower() for marker in _CSV_MIME_MARKERS):
        return True

    if _QUOTED_FIELD_WITH_COMMA.search(text):
        return True

    header = lines[0]
    header_numbers = len(_NUMBER.findall(header))
    header_has_text = _HEADER_WORD.search(header) is not None
    data_has_numbers = any(
        len(_NUMBER.findall(line)) > header_numbers for line in lines[1:]
    )
    return header_has_text and data_has_numbers


# -----------------------------------------------------------------------------
# Parsing
# -----------------------------------------------------------------------------


def _header_names(record: list[str]) -> list[str]:
    """Strip header cells, name blank ones and suffix duplicates."""
    headers: list[str] = []
    taken: set[str] = set()
    for index, cell in enumerate(record):
        base = cell.strip() or f"column_{index + 1}"
        name = base
        suffix = 0
        while name in taken:
            suffix += 1
            name = f"{base}_{suffix}"
        taken.add(name)
        headers.append(name)
    return headers


def parse_csv(content: Optional[str]) -> ParsedCSV:
    """
    Parse CSV content with header-row detection.

    Args:
        content: Raw CSV text.

    Returns:
        ParsedCSV with string values. Blank records are skipped, short
        records are padded with "" and cells beyond the header width are
        dropped.

    Raises:
        NoHeadersFoundError: No non-blank header record exists.
        CSVParseError: Malformed syntax, or a single field longer than the
            csv module's field size limit (csv.field_size_limit(), 131072
            characters by default). The limit is a size cap, not a syntax
            problem; the message says which one applies.
    """
    text = (content or "").lstrip("\ufeff")
    reader = csv.reader(io.StringIO(text, newline=""), strict=True)

    headers: Optional[list[str]] = None
    rows: list[dict[str, str]] = []
    try:
        for record in reader:
            if not record or record == [""]:
                continue

            if headers is None:
                if not any(cell.strip() for cell in record):
                    raise NoHeadersFoundError(
                        "No headers found in CSV data: header row has no column names"
                    )
                headers = _header_names(record)
                continue

            if not any(cell.strip() for cell in record):
                continue
            if len(record) > len(headers):
                logger.debug(
                    f"Line {reader.line_num}: dropping {len(record) - len(headers)} "
                    f"cell(s) beyond the {len(headers)} header columns"
                )
                record = record[:len(headers)]
            record = record + [""] * (len(headers) - len(record))
            rows.append(dict(zip(headers, record)))
    except csv.Error as exc:
        logger.error(f"Error parsing CSV content: {exc}")
        if "field larger than field limit" in str(exc):
            raise CSVParseError(
                f"CSV field exceeds the size limit of {csv.field_size_limit()} characters",
                line_number=reader.line_num,
                original_error=exc,
            ) from exc
        raise CSVParseError(line_number=reader.line_num, original_error=exc) from exc

    if not headers:
        raise NoHeadersFoundError()

    logger.debug(f"Parsed CSV with {len(rows)} rows and {len(headers)} columns")
    return ParsedCSV(headers=headers, rows=rows)


def serialize_rows(
    headers: list[str],
    rows: list[dict[str, str]],
    include_header: bool = True,
) -> str:
    """Serialize rows as CSV with "\\n" line endings (trailing newline kept)."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=headers, lineterminator="\n")
    if include_header:
        writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue()


# -----------------------------------------------------------------------------
# Chunking
# -----------------------------------------------------------------------------


def estimate_rows_per_chunk(parsed: ParsedCSV, target_chunk_size: int) -> int:
    """
    Estimate how many rows fit into one chunk of target_chunk_size chars.

    Samples up to the first 100 rows, serializing each on its own (header
    excluded). Never returns less than 1.
    """
    header_size = len(serialize_rows(parsed.headers, []))
    sample = parsed.rows[:ROW_SAMPLE_SIZE]
    if sample:
        total = sum(
            len(serialize_rows(parsed.headers, [row], include_header=False))
            for row in sample
        )
        avg_row_size = total / len(sample)
    else:
        avg_row_size = DEFAULT_ROW_SIZE

    logger.debug(f"Average row size: {avg_row_size:.1f} chars, header size: {header_size} chars")
    return max(1, math.floor((target_chunk_size - header_size) / avg_row_size))


def chunk_rows(parsed: ParsedCSV, target_chunk_size: int) -> list[str]:
    """
    Partition parsed rows into CSV chunks that each start with the header.

    Args:
        parsed: Output of parse_csv().
        target_chunk_size: Approximate characters per chunk.

    Returns:
        CSV strings without trailing newline. No rows returns [].

    Raises:
        NoHeadersFoundError: parsed has no headers.
    """
    if not parsed.headers:
        raise NoHeadersFoundError()
    if not parsed.rows:
        logger.debug("No CSV rows to chunk")
        return []

    rows_per_chunk = estimate_rows_per_chunk(parsed, target_chunk_size)
    logger.info(
        f"Chunking CSV with {parsed.row_count} rows into chunks of ~{rows_per_chunk} rows "
        f"(target: ~{target_chunk_size} chars)"
    )

    chunks = []
    for start in range(0, parsed.row_count, rows_per_chunk):
        group = parsed.rows[start:start + rows_per_chunk]
        chunks.append(serialize_rows(parsed.headers, group).removesuffix("\n"))
    return chunks


def count_rows(chunk: str) -> int:
    """Re-parse a CSV chunk and count its data rows."""
    return parse_csv(chunk).row_count
