"""
Metadata Enricher - attaches positional, structural and language metadata

Both chunking paths end here. Prose chunks get TextChunkMetadata with a
per-chunk language detection; CSV chunks get CSVChunkMetadata with row
counts, dataset segment percentages and a best-effort product sample.
"""

import re
from typing import Optional, Sequence, Union

from .csv_chunker import ParsedCSV, parse_csv
from .language import detect_language, text_direction, validate_language_detection
from .models import ChunkWithMetadata, CSVChunkMetadata, TextChunkMetadata
from .text_splitter import ChunkPiece

MAX_PRODUCTS = 10

_PRODUCT_COLUMN = re.compile(r"name|product|title", re.IGNORECASE)


def word_count(text: str) -> int:
    return len(text.split())


def _text_position(chunk: Union[ChunkPiece, str], source_text: Optional[str]) -> Optional[int]:
    if isinstance(chunk, ChunkPiece):
        return chunk.start
    if source_text:
        found = source_text.find(chunk)
        if found >= 0:
            return found
    return None


def enrich_text_chunks(
    chunks: Sequence[Union[ChunkPiece, str]],
    document_id: str,
    source_text: Optional[str] = None,
) -> list[ChunkWithMetadata]:
    """
    Build TextChunkMetadata for every prose chunk.

    Args:
        chunks: ChunkPieces from TextSplitter.split(), or plain strings.
        document_id: Opaque document identifier.
        source_text: Preprocessed text; used to locate plain-string chunks.

    Returns:
        One ChunkWithMetadata per chunk, in order.
    """
    count = len(chunks)
    enriched = []
    for index, chunk in enumerate(chunks):
        text = chunk.text if isinstance(chunk, ChunkPiece) else chunk
        language = detect_language(text)
        metadata = TextChunkMetadata(
            document_id=document_id,
            chunk_index=index,
            chunk_count=count,
            character_count=len(text),
            position=_text_position(chunk, source_text),
            word_count=word_count(text),
            language=None if language == "auto" else language,
            direction=text_direction(language),
            language_reliable=validate_language_detection(text, language),
        )
        enriched.append(ChunkWithMetadata(text=text, metadata=metadata))
    return enriched


# -----------------------------------------------------------------------------
# CSV
# -----------------------------------------------------------------------------


def segment_percentages(index: int, count: int) -> tuple[int, int]:
    """Floor-based [start, end) percentage of chunk ``index`` out of ``count``."""
    return index * 100 // count, (index + 1) * 100 // count


def product_column(headers: list[str]) -> Optional[str]:
    """First header that looks like a product/name column, else the first header."""
    for header in headers:
        if _PRODUCT_COLUMN.search(header):
            return header
    return headers[0] if headers else None


def sample_products(parsed: ParsedCSV) -> tuple[Optional[int], Optional[list[str]]]:
    """
    Collect distinct non-empty values of the guessed product column.

    Returns:
        (distinct count, up to MAX_PRODUCTS values in first-seen order), or
        (None, None) when there is no column to look at.
    """
    column = product_column(parsed.headers)
    if column is None:
        return None, None

    distinct: list[str] = []
    seen = set()
    for row in parsed.rows:
        value = row.get(column, "").strip()
        if value and value not in seen:
            seen.add(value)
            distinct.append(value)
    return len(distinct), distinct[:MAX_PRODUCTS]


def enrich_csv_chunks(
    chunks: Sequence[str],
    parsed: ParsedCSV,
    document_id: str,
) -> list[ChunkWithMetadata]:
    """
    Build CSVChunkMetadata for every tabular chunk.

    Args:
        chunks: CSV strings from chunk_rows(), header line included.
        parsed: The parsed source document. Products are sampled from each
            chunk's own rows, not from the whole document.
        document_id: Opaque document identifier.

    Returns:
        One ChunkWithMetadata per chunk, in order.
    """
    count = len(chunks)

    enriched = []
    offset = 0
    for index, chunk in enumerate(chunks):
        start, end = segment_percentages(index, count)
        chunk_parsed = parse_csv(chunk)
        rows = chunk_parsed.row_count
        product_count, products = sample_products(chunk_parsed)
        metadata = CSVChunkMetadata(
            document_id=document_id,
            chunk_index=index,
            chunk_count=count,
            character_count=len(chunk),
            position=offset,
            word_count=word_count(chunk),
            row_count=rows,
            total_rows=parsed.row_count,
            column_count=parsed.column_count,
            column_headers=list(parsed.headers),
            data_segment=f"{start}%-{end}%",
            position_percent=f"{start}%",
            product_count=product_count,
            products=products,
        )
        enriched.append(ChunkWithMetadata(text=chunk, metadata=metadata))
        offset += rows
    return enriched
