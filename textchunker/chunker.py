"""
Document Chunker - Core orchestration of the chunking engine

Takes already-extracted document text and produces a ChunkingResult with
bounded chunks, discriminated metadata, document keywords and statistics.

Algorithm:
1. Pick the path: tabular when the caller says so or the content looks
   like CSV, prose otherwise.
2. Tabular: parse rows, partition them under the header, enrich with
   CSVChunkMetadata.
3. Prose: preprocess, split into structure-aware overlapping chunks,
   enrich with per-chunk language metadata.
4. Detect the whole-document language, extract keywords, compute stats.

Usage:
    from textchunker import DocumentChunker, ChunkingOptions

    chunker = DocumentChunker(ChunkingOptions(chunk_size=512))
    result = chunker.chunk(text, document_id="doc-1")
    result.save("chunks.json")
"""

import logging
from pathlib import Path
from typing import Optional

from .csv_chunker import chunk_rows, is_csv_content, parse_csv
from .keywords import extract_keywords
from .language import detect_language
from .metadata import enrich_csv_chunks, enrich_text_chunks
from .models import (
    ChunkingOptions,
    ChunkingResult,
    ChunkingStats,
    ChunkWithMetadata,
)
from .preprocessor import preprocess
from .text_splitter import TextSplitter

logger = logging.getLogger(__name__)


class DocumentChunker:
    """
    Splits document text into retrieval-ready chunks with metadata.

    Holds only its options; every call is independent, so one instance can
    serve concurrent documents.
    """

    def __init__(self, options: Optional[ChunkingOptions] = None):
        self.options = options or ChunkingOptions()
        self.splitter = TextSplitter(self.options)

    def chunk(
        self,
        text: str,
        document_id: str,
        *,
        is_csv: Optional[bool] = None,
        mime_type: Optional[str] = None,
    ) -> ChunkingResult:
        """
        Chunk one document.

        Args:
            text: Extracted document text.
            document_id: Opaque identifier from the file-management layer.
            is_csv: Force the tabular (True) or prose (False) path.
                None sniffs the content.
            mime_type: Optional MIME type used by CSV sniffing.

        Returns:
            ChunkingResult with chunks, keywords and statistics.

        Raises:
            NoHeadersFoundError: Tabular path without a header row.
            CSVParseError: Tabular path with malformed CSV.
        """
        if not text or not text.strip():
            logger.info(f"Document {document_id} is empty; nothing to chunk")
            return self._empty_result(document_id, bool(is_csv), text)

        use_csv = is_csv if is_csv is not None else is_csv_content(text, mime_type)
        if use_csv:
            return self._chunk_csv(text, document_id)
        return self._chunk_prose(text, document_id)

    def chunk_from_file(
        self,
        path: str,
        document_id: Optional[str] = None,
        *,
        is_csv: Optional[bool] = None,
    ) -> ChunkingResult:
        """
        Read a UTF-8 text file and chunk it.

        Args:
            path: Path to an extracted text or CSV file.
            document_id: Defaults to the file name without extension.
            is_csv: Force a path; None uses the ".csv" suffix, then sniffing.

        Returns:
            ChunkingResult with all chunks.
        """
        file_path = Path(path)
        text = file_path.read_text(encoding="utf-8")
        if is_csv is None and file_path.suffix.lower() == ".csv":
            is_csv = True
        return self.chunk(
            text,
            document_id or self._make_document_id(path),
            is_csv=is_csv,
        )

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _make_document_id(self, source_file: str) -> str:
        """Generate a document ID from the source file path."""
        normalized = source_file.replace("\\", "/")
        return Path(normalized).stem

    def _chunk_prose(self, text: str, document_id: str) -> ChunkingResult:
        processed = preprocess(text, clean_redundant_data=self.options.clean_redundant_data)
        pieces = self.splitter.split(processed)
        chunks = enrich_text_chunks(pieces, document_id, source_text=processed)

        stats = self._compute_stats(chunks, len(text), len(processed))
        logger.info(
            f"Chunked document {document_id} (prose): {stats.total_chunks} chunks, "
            f"avg {stats.avg_chunk_characters:.0f} chars"
        )
        if stats.oversized_chunks:
            logger.debug(
                f"{stats.oversized_chunks} chunk(s) exceed chunk_size "
                f"{self.options.chunk_size} because of atomic table blocks"
            )

        return ChunkingResult(
            document_id=document_id,
            options=self.options,
            is_csv=False,
            language=detect_language(processed),
            keywords=extract_keywords(processed),
            chunks=chunks,
            stats=stats,
        )

    def _chunk_csv(self, text: str, document_id: str) -> ChunkingResult:
        parsed = parse_csv(text)
        csv_chunks = chunk_rows(parsed, self.options.chunk_size)
        chunks = enrich_csv_chunks(csv_chunks, parsed, document_id)

        stats = self._compute_stats(
            chunks, len(text), len(text), total_rows=parsed.row_count
        )
        logger.info(
            f"Chunked document {document_id} (csv): {parsed.row_count} rows, "
            f"{parsed.column_count} columns, {stats.total_chunks} chunks"
        )

        return ChunkingResult(
            document_id=document_id,
            options=self.options,
            is_csv=True,
            language=detect_language(text),
            keywords=extract_keywords(text),
            chunks=chunks,
            stats=stats,
        )

    def _compute_stats(
        self,
        chunks: list[ChunkWithMetadata],
        original_length: int,
        processed_length: int,
        total_rows: int = 0,
    ) -> ChunkingStats:
        """Compute statistics about the chunking result."""
        if not chunks:
            return ChunkingStats(
                original_length=original_length,
                processed_length=processed_length,
                total_rows=total_rows,
            )

        sizes = [c.metadata.character_count for c in chunks]
        return ChunkingStats(
            total_chunks=len(chunks),
            total_characters=sum(sizes),
            avg_chunk_characters=sum(sizes) / len(sizes),
            min_chunk_characters=min(sizes),
            max_chunk_characters=max(sizes),
            original_length=original_length,
            processed_length=processed_length,
            total_rows=total_rows,
            oversized_chunks=sum(1 for size in sizes if size > self.options.chunk_size),
        )

    def _empty_result(self, document_id: str, is_csv: bool, text: Optional[str]) -> ChunkingResult:
        """Return an empty ChunkingResult for edge cases."""
        return ChunkingResult(
            document_id=document_id,
            options=self.options,
            is_csv=is_csv,
            chunks=[],
            stats=ChunkingStats(original_length=len(text or "")),
        )


def process_document(
    text: str,
    document_id: str,
    options: Optional[ChunkingOptions] = None,
    *,
    is_csv: Optional[bool] = None,
    mime_type: Optional[str] = None,
) -> list[ChunkWithMetadata]:
    """
    Chunk a document and return only the (text, metadata) records.

    Convenience wrapper around DocumentChunker for callers that do not
    need keywords or statistics.
    """
    result = DocumentChunker(options).chunk(
        text, document_id, is_csv=is_csv, mime_type=mime_type
    )
    return result.chunks
