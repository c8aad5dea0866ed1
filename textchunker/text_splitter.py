"""
Structure-Aware Text Splitter - prose path of the chunking engine

Takes normalized text and produces bounded, overlapping chunks whose
bodies are exact slices of the input.

Algorithm:
1. Detect blocks: prose paragraphs, table blocks, list items.
2. Turn blocks into units: sentences (or whole paragraphs), list items,
   and atomic table blocks.
3. Hard-split any non-atomic unit longer than chunk_size, preferring the
   last whitespace inside each window.
4. Pack units greedily: a chunk grows while its body plus the overlap
   prefix stays within chunk_size.
5. Prefix every chunk after the first with the tail of the previous
   chunk, trimmed forward to a sentence or word boundary.

Usage:
    from textchunker import TextSplitter, ChunkingOptions

    splitter = TextSplitter(ChunkingOptions(chunk_size=512, chunk_overlap=50))
    pieces = splitter.split(preprocess(raw_text))
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from .models import ChunkingOptions
from .sentence_splitter import sentence_spans
from .structure import PROSE, TABLE, detect_blocks

logger = logging.getLogger(__name__)

_TERMINALS = ".!?؟۔。！？"
_SENTENCE_GAP = re.compile(r"[" + _TERMINALS + r"][\"'”’)\]]*\s+")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class Unit:
    """A span of the source text that is packed as a whole."""
    start: int
    end: int
    atomic: bool = False

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class ChunkPiece:
    """
    One prose chunk.

    Attributes:
        text: Final chunk text (overlap prefix, a space, then the body).
        start: Offset of the body in the processed text.
        end: End offset of the body (exclusive).
        overlap: Prefix copied from the previous chunk ("" for none).
        ends_with_table: The body's last unit is an atomic table block.
    """
    text: str
    start: int
    end: int
    overlap: str = ""
    ends_with_table: bool = False

    @property
    def body(self) -> str:
        return self.text[len(self.text) - (self.end - self.start):]


def hard_split(text: str, start: int, end: int, size: int) -> list[tuple[int, int]]:
    """
    Cut text[start:end] into spans of at most ``size`` characters.

    Each cut is placed at the last whitespace inside the window when there
    is one, otherwise exactly at ``size`` characters. Whitespace between
    spans is dropped.
    """
    spans: list[tuple[int, int]] = []
    pos = start
    while end - pos > size:
        window_end = pos + size
        cut = window_end
        for i in range(window_end, pos, -1):
            if text[i].isspace():
                cut = i
                break

        piece_end = cut
        while piece_end > pos and text[piece_end - 1].isspace():
            piece_end -= 1
        if piece_end == pos:
            piece_end = cut = window_end

        spans.append((pos, piece_end))
        pos = cut
        while pos < end and text[pos].isspace():
            pos += 1

    if pos < end:
        spans.append((pos, end))
    return spans


class TextSplitter:
    """
    Splits normalized prose into bounded, overlapping chunks that respect
    sentence, list and table structure.
    """

    def __init__(self, options: Optional[ChunkingOptions] = None):
        self.options = options or ChunkingOptions()

    def chunk(self, text: str) -> list[str]:
        """
        Chunk text and return the chunk strings.

        Args:
            text: Normalized text (see preprocess()).

        Returns:
            Chunk texts in document order. Empty input returns [].
        """
        return [piece.text for piece in self.split(text)]

    def split(self, text: str) -> list[ChunkPiece]:
        """
        Chunk text and return pieces with their source offsets.

        Args:
            text: Normalized text (see preprocess()).

        Returns:
            ChunkPiece list in document order. Empty input returns [].
        """
        if not text or not text.strip():
            return []

        units = self._build_units(text)
        pieces = self._pack(text, units)

        logger.debug(
            f"Split {len(text)} chars into {len(units)} units and {len(pieces)} chunks "
            f"(chunk_size={self.options.chunk_size}, overlap={self.options.chunk_overlap})"
        )
        return pieces

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _build_units(self, text: str) -> list[Unit]:
        """Turn structure blocks into packable units."""
        blocks = detect_blocks(
            text,
            keep_tables=self.options.keeps_tables,
            keep_lists=self.options.structure_aware,
        )

        units: list[Unit] = []
        for block in blocks:
            if block.kind == TABLE:
                units.append(Unit(block.start, block.end, atomic=True))
                continue

            if block.kind == PROSE and self.options.split_by_sentence:
                spans = sentence_spans(text, block.start, block.end)
            else:
                spans = [(block.start, block.end)]

            for start, end in spans:
                units.extend(self._fit_unit(text, start, end))

        return units

    def _fit_unit(self, text: str, start: int, end: int) -> list[Unit]:
        """Hard-split a unit that alone exceeds chunk_size."""
        size = self.options.chunk_size
        if end - start <= size:
            return [Unit(start, end)]

        logger.debug(
            f"Unit at {start} has {end - start} chars (> {size}); "
            f"falling back to a character split"
        )
        return [Unit(s, e) for s, e in hard_split(text, start, end, size)]

    def _pack(self, text: str, units: list[Unit]) -> list[ChunkPiece]:
        """Greedily pack units into chunks with overlap prefixes."""
        size = self.options.chunk_size
        pieces: list[ChunkPiece] = []
        i = 0

        while i < len(units):
            first = units[i]

            overlap = ""
            if pieces and not pieces[-1].ends_with_table:
                overlap = self._overlap_prefix(pieces[-1].text)
            budget = size - (len(overlap) + 1 if overlap else 0)

            # The next unit must fit; give up the overlap before the unit.
            if first.length > budget:
                overlap = ""
                budget = size

            end = first.end
            j = i + 1
            while j < len(units) and units[j].end - first.start <= budget:
                end = units[j].end
                j += 1

            body = text[first.start:end]
            if first.atomic and len(body) > size:
                logger.debug(
                    f"Table block at {first.start} kept whole at {len(body)} chars"
                )

            pieces.append(ChunkPiece(
                text=f"{overlap} {body}" if overlap else body,
                start=first.start,
                end=end,
                overlap=overlap,
                ends_with_table=units[j - 1].atomic,
            ))
            i = j

        return pieces

    def _overlap_prefix(self, previous: str) -> str:
        """
        Take the trailing chunk_overlap characters of the previous chunk,
        moved forward to the nearest sentence (or word) boundary.
        """
        overlap = self.options.chunk_overlap
        if overlap <= 0 or not previous:
            return ""
        if len(previous) <= overlap:
            return previous.strip()

        tail = previous[-overlap:]
        at_word_start = previous[-overlap - 1].isspace()
        at_sentence_start = (
            at_word_start and previous[:-overlap].rstrip().endswith(tuple(_TERMINALS))
        )

        if self.options.split_by_sentence and not at_sentence_start:
            match = _SENTENCE_GAP.search(tail)
            if match and match.end() < len(tail):
                return tail[match.end():].strip()

        if not at_word_start:
            match = _WHITESPACE.search(tail)
            if match and match.end() < len(tail):
                tail = tail[match.end():]

        return tail.strip()


def chunk_text(text: str, options: Optional[ChunkingOptions] = None) -> list[str]:
    """Convenience wrapper: TextSplitter(options).chunk(text)."""
    return TextSplitter(options).chunk(text)
