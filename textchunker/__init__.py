"""
textchunker - Structure-aware chunking and metadata enrichment

Turns already-extracted document text (prose or CSV) into bounded,
retrieval-ready chunks. Each chunk carries discriminated metadata:
TextChunkMetadata with per-chunk language for prose, CSVChunkMetadata
with row counts and dataset segments for tabular input.

Quick Start:
    from textchunker import DocumentChunker, ChunkingOptions

    chunker = DocumentChunker(ChunkingOptions(chunk_size=512, chunk_overlap=50))
    result = chunker.chunk(text, document_id="doc-1")
    for chunk in result.chunks:
        print(chunk.metadata.chunk_index, chunk.text[:40])
"""

__version__ = "1.0.0"

from .chunker import DocumentChunker, process_document
from .config import ChunkingServiceConfig
from .csv_chunker import ParsedCSV, chunk_rows, count_rows, is_csv_content, parse_csv
from .exceptions import (
    ChunkingError,
    CSVError,
    CSVParseError,
    InvalidOptionsError,
    NoHeadersFoundError,
)
from .keywords import extract_keywords
from .language import detect_language, validate_language_detection
from .metadata import enrich_csv_chunks, enrich_text_chunks
from .models import (
    ChunkingOptions,
    ChunkingResult,
    ChunkingStats,
    ChunkMetadata,
    ChunkWithMetadata,
    CSVChunkMetadata,
    TextChunkMetadata,
)
from .preprocessor import preprocess
from .sentence_splitter import split_sentences
from .service import ChunkingService
from .text_splitter import TextSplitter, chunk_text

__all__ = [
    "__version__",
    "DocumentChunker",
    "process_document",
    "ChunkingService",
    "ChunkingServiceConfig",
    "ChunkingOptions",
    "ChunkingResult",
    "ChunkingStats",
    "ChunkMetadata",
    "ChunkWithMetadata",
    "CSVChunkMetadata",
    "TextChunkMetadata",
    "ParsedCSV",
    "parse_csv",
    "chunk_rows",
    "count_rows",
    "is_csv_content",
    "TextSplitter",
    "chunk_text",
    "preprocess",
    "split_sentences",
    "detect_language",
    "validate_language_detection",
    "enrich_text_chunks",
    "enrich_csv_chunks",
    "extract_keywords",
    "ChunkingError",
    "InvalidOptionsError",
    "CSVError",
    "NoHeadersFoundError",
    "CSVParseError",
]
