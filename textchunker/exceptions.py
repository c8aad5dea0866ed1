"""
Custom Exceptions for the Chunking Engine.

Exception Hierarchy:
    ChunkingError (base)
    ├── InvalidOptionsError
    └── CSVError
        ├── NoHeadersFoundError
        └── CSVParseError

Usage:
    from textchunker.exceptions import ChunkingError, NoHeadersFoundError

    try:
        chunks = process_document(text, "doc-1", is_csv=True)
    except NoHeadersFoundError:
        chunks = process_document(text, "doc-1", is_csv=False)
    except ChunkingError as e:
        print(f"Chunking failed: {e}")
"""

from __future__ import annotations

from typing import Optional


# =============================================================================
# BASE EXCEPTION
# =============================================================================


class ChunkingError(Exception):
    """
    Base exception for all chunking-related errors.

    Attributes:
        message: Human-readable error description
        details: Additional technical details (optional)
    """

    def __init__(
        self,
        message: str = "A chunking error occurred",
        details: Optional[str] = None,
    ):
        self.message = message
        self.details = details

        full_message = message
        if details:
            full_message = f"{message} | Details: {details}"

        super().__init__(full_message)


# =============================================================================
# OPTION ERRORS
# =============================================================================


class InvalidOptionsError(ChunkingError):
    """
    Raised when ChunkingOptions are inconsistent.

    Not a ValueError subclass, so pydantic validators re-raise it
    unchanged instead of wrapping it in a ValidationError.

    Attributes:
        chunk_size: The rejected chunk size
        chunk_overlap: The rejected overlap
    """

    def __init__(self, message: str, chunk_size: int, chunk_overlap: int):
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        super().__init__(
            message,
            details=f"chunk_size={chunk_size}, chunk_overlap={chunk_overlap}",
        )


# =============================================================================
# CSV ERRORS
# =============================================================================


class CSVError(ChunkingError):
    """Base class for tabular-path errors."""


class NoHeadersFoundError(CSVError):
    """
    Raised when CSV input has no parseable header row.

    The tabular path never falls back to prose on its own; the caller
    decides whether to retry the document as plain text.
    """

    def __init__(self, message: str = "No headers found in CSV data"):
        super().__init__(message)


class CSVParseError(CSVError):
    """
    Raised when CSV content is malformed or a field exceeds the size limit.

    Attributes:
        line_number: Source line where parsing failed (if known)
        original_error: The underlying csv module error (if any)
    """

    def __init__(
        self,
        message: str = "Failed to parse CSV",
        line_number: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        self.line_number = line_number
        self.original_error = original_error
        if line_number is not None:
            message = f"{message} (line {line_number})"
        details = str(original_error) if original_error else None
        super().__init__(message, details)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def format_error_chain(error: Exception) -> str:
    """
    Format an exception and its chain for logging.

    Returns a multi-line string showing the error hierarchy.
    """
    lines = []
    current = error
    depth = 0

    while current is not None:
        prefix = "  " * depth + ("└─ " if depth > 0 else "")
        lines.append(f"{prefix}{type(current).__name__}: {current}")

        if getattr(current, "original_error", None):
            current = current.original_error
            depth += 1
        elif current.__cause__:
            current = current.__cause__
            depth += 1
        else:
            break

    return "\n".join(lines)
