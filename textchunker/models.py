"""
Data Models for the Chunking Engine

Defines:
1. ChunkingOptions - Chunk size, overlap and structure switches
2. TextChunkMetadata / CSVChunkMetadata - Discriminated per-chunk metadata
3. ChunkWithMetadata - The engine's output unit
4. ChunkingResult - Complete chunking output with keywords and statistics

Design Principles:
- Pydantic v2 for validation and serialization
- Metadata is a tagged union on ``is_csv``; each variant forbids the other's fields
- Everything is frozen once produced
- Save/load pattern for JSON hand-off to persistence and embedding stages

Usage:
    options = ChunkingOptions(chunk_size=512, chunk_overlap=50)
    result = DocumentChunker(options).chunk(text, document_id="doc-1")
    result.save("chunks.json")
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    model_validator,
)
from pydantic.alias_generators import to_camel

from .exceptions import InvalidOptionsError


LanguageCode = Literal["ar", "en"]
DetectedLanguage = Literal["ar", "en", "auto"]
TextDirection = Literal["rtl", "ltr"]


class ChunkingOptions(BaseModel):
    """
    Configuration for the chunking engine.

    Field names accept both snake_case and the camelCase aliases used by
    upstream callers (``chunkSize``, ``chunkOverlap``, ...).
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    chunk_size: int = Field(
        768,
        description="Target number of characters per chunk",
    )
    chunk_overlap: int = Field(
        80,
        description="Characters repeated from the end of the previous chunk",
    )
    split_by_sentence: bool = Field(
        True,
        description="Accumulate sentences instead of whole paragraphs",
    )
    structure_aware: bool = Field(
        True,
        description="Keep table blocks atomic and list items whole",
    )
    preserve_tables: bool = Field(
        True,
        description="Keep table blocks atomic",
    )
    clean_redundant_data: bool = Field(
        False,
        description="Remove repeated boilerplate lines and punctuation runs",
    )

    @model_validator(mode="after")
    def _check_sizes(self) -> "ChunkingOptions":
        if self.chunk_size <= 0:
            raise InvalidOptionsError(
                f"chunk_size must be positive, got {self.chunk_size}",
                self.chunk_size,
                self.chunk_overlap,
            )
        if self.chunk_overlap < 0:
            raise InvalidOptionsError(
                f"chunk_overlap must not be negative, got {self.chunk_overlap}",
                self.chunk_size,
                self.chunk_overlap,
            )
        if self.chunk_overlap >= self.chunk_size:
            raise InvalidOptionsError(
                f"chunk_overlap ({self.chunk_overlap}) must be less than "
                f"chunk_size ({self.chunk_size})",
                self.chunk_size,
                self.chunk_overlap,
            )
        return self

    @property
    def keeps_tables(self) -> bool:
        return self.structure_aware or self.preserve_tables


# -----------------------------------------------------------------------------
# Chunk metadata
# -----------------------------------------------------------------------------


class BaseChunkMetadata(BaseModel):
    """Positional metadata shared by prose and tabular chunks."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    document_id: str = Field(
        ...,
        description="Opaque identifier supplied by the file-management subsystem",
    )
    chunk_index: int = Field(
        ...,
        description="Position of this chunk among its siblings (0-indexed)",
        ge=0,
    )
    chunk_count: int = Field(
        ...,
        description="Total number of sibling chunks",
        ge=1,
    )
    character_count: int = Field(
        ...,
        description="Length of the chunk text in characters",
        ge=0,
    )
    position: Optional[int] = Field(
        None,
        description="Character offset of the body (prose) or index of the first data row (CSV)",
    )
    word_count: Optional[int] = Field(
        None,
        description="Whitespace-delimited word count",
    )


class TextChunkMetadata(BaseChunkMetadata):
    """Metadata for a plain-text chunk."""
    is_csv: Literal[False] = False
    language: Optional[LanguageCode] = None
    direction: Optional[TextDirection] = None
    language_reliable: Optional[bool] = Field(
        None,
        description="False when the chunk is too short for a trustworthy detection",
    )


class CSVChunkMetadata(BaseChunkMetadata):
    """Metadata for a tabular chunk."""
    is_csv: Literal[True] = True
    row_count: int = Field(..., description="Data rows in this chunk", ge=0)
    total_rows: int = Field(..., description="Data rows in the source document", ge=0)
    column_count: int = Field(..., ge=0)
    column_headers: list[str] = Field(default_factory=list)
    data_segment: str = Field(..., description="Percentage range, e.g. '10%-20%'")
    position_percent: str = Field(..., description="Start percentage, e.g. '10%'")
    data_format: Literal["tabular"] = "tabular"
    product_count: Optional[int] = Field(
        None,
        description="Distinct values in the guessed product/name column",
    )
    products: Optional[list[str]] = Field(
        None,
        description="Up to 10 sample values from the guessed product/name column",
    )


def _metadata_kind(value: Any) -> str:
    if isinstance(value, dict):
        is_csv = value.get("is_csv", False)
    else:
        is_csv = getattr(value, "is_csv", False)
    return "csv" if is_csv else "text"


ChunkMetadata = Annotated[
    Union[
        Annotated[TextChunkMetadata, Tag("text")],
        Annotated[CSVChunkMetadata, Tag("csv")],
    ],
    Discriminator(_metadata_kind),
]


class ChunkWithMetadata(BaseModel):
    """A single chunk, ready for embedding and storage."""
    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="The chunk text content")
    metadata: ChunkMetadata

    @property
    def is_csv(self) -> bool:
        return self.metadata.is_csv

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


# -----------------------------------------------------------------------------
# Results
# -----------------------------------------------------------------------------


class ChunkingStats(BaseModel):
    """Statistics about the chunking process."""
    model_config = ConfigDict(frozen=True)

    total_chunks: int = 0
    total_characters: int = 0
    avg_chunk_characters: float = 0.0
    min_chunk_characters: int = 0
    max_chunk_characters: int = 0
    original_length: int = 0
    processed_length: int = 0
    total_rows: int = 0
    oversized_chunks: int = 0


class ChunkingResult(BaseModel):
    """
    Complete result of chunking one document.

    Ready for the persistence layer and the embedding-request layer; both
    only ever read ``chunks``.
    """
    model_config = ConfigDict(frozen=True)

    document_id: str = Field(..., description="Opaque document identifier")
    options: ChunkingOptions = Field(
        default_factory=ChunkingOptions,
        description="Options used for chunking",
    )
    is_csv: bool = Field(False, description="True when the tabular path was used")
    language: DetectedLanguage = Field(
        "auto",
        description="Whole-document language detection",
    )
    keywords: list[str] = Field(default_factory=list)
    chunks: list[ChunkWithMetadata] = Field(default_factory=list)
    stats: ChunkingStats = Field(default_factory=ChunkingStats)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When chunking was performed",
    )

    @property
    def total_chunks(self) -> int:
        return len(self.chunks)

    @property
    def texts(self) -> list[str]:
        return [chunk.text for chunk in self.chunks]

    def get_chunk(self, index: int) -> Optional[ChunkWithMetadata]:
        """Find a chunk by its chunk_index."""
        for chunk in self.chunks:
            if chunk.metadata.chunk_index == index:
                return chunk
        return None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    def save(self, path: str) -> None:
        """Save chunking result to a JSON file."""
        Path(path).write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load(cls, path: str) -> "ChunkingResult":
        """Load chunking result from a JSON file."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.model_validate(data)


# -----------------------------------------------------------------------------
# HTTP request model
# -----------------------------------------------------------------------------


class ChunkRequest(BaseModel):
    text: str
    document_id: str
    options: Optional[ChunkingOptions] = None
    is_csv: Optional[bool] = None
    mime_type: Optional[str] = None
