"""
Sentence Splitter for the Chunking Engine

Regex-based sentence boundary detection that reports character spans, so
chunk bodies can be cut as exact slices of the source text.

Design:
- Split after sentence-ending punctuation (. ! ? plus Arabic ؟ and Urdu ۔)
  when followed by whitespace and a character that is not a lowercase
  Latin letter
- CJK terminals (。！？) split without requiring whitespace
- Protect common English abbreviations (Dr., etc., e.g.) and list ordinals
  from triggering false splits
- Punctuation-free text yields a single sentence; the chunker handles
  oversized sentences with its hard-split fallback

Usage:
    from textchunker.sentence_splitter import split_sentences

    sentences = split_sentences("Hello. World. This is a test.")
    # ["Hello.", "World.", "This is a test."]
"""

import re
from typing import Optional

# Same-length placeholder, so offsets in the protected copy match the source.
_DOT_PLACEHOLDER = "\x00"

_ABBREVIATIONS = {
    # Titles
    "mr", "mrs", "ms", "dr", "prof", "sr", "jr", "st", "rev", "gen", "sgt",
    # Business / references
    "inc", "ltd", "corp", "dept", "vol", "fig", "approx", "etc", "vs", "al",
    # Months (abbreviated)
    "jan", "feb", "mar", "apr", "jun", "jul", "aug", "sep", "sept", "oct",
    "nov", "dec",
}

_ABBREV_PATTERN = re.compile(
    r"(?<!\w)(?:" + "|".join(re.escape(a) for a in sorted(_ABBREVIATIONS)) + r")\.(?=\s)",
    re.IGNORECASE,
)

# Multi-part abbreviations: e.g., i.e., U.S., a.m.
_MULTI_ABBREV_PATTERN = re.compile(r"\b[A-Za-z]\.(?:[A-Za-z]\.)+")

# List ordinals at line start or after whitespace: "1. ", "23. "
_ORDINAL_PATTERN = re.compile(r"(?:^|(?<=\s))\d{1,3}\.(?=\s)", re.MULTILINE)

_CLOSERS = "\"'”’)\\]"
_BOUNDARY_PATTERN = re.compile(
    r"(?:[.!?؟۔][" + _CLOSERS + r"]*(?=\s+[^\sa-z])"
    r"|[。！？][" + _CLOSERS + r"」』]*)"
    r"(\s*)"
)


def _protect_dots(text: str) -> str:
    """Replace dots in abbreviations and ordinals with placeholders."""
    for pattern in (_MULTI_ABBREV_PATTERN, _ABBREV_PATTERN, _ORDINAL_PATTERN):
        text = pattern.sub(
            lambda m: m.group().replace(".", _DOT_PLACEHOLDER), text
        )
    return text


def _trimmed(text: str, start: int, end: int) -> Optional[tuple[int, int]]:
    while start < end and text[start].isspace():
        start += 1
    while end > start and text[end - 1].isspace():
        end -= 1
    return (start, end) if start < end else None


def sentence_spans(
    text: str,
    start: int = 0,
    end: Optional[int] = None,
) -> list[tuple[int, int]]:
    """
    Find sentence spans inside text[start:end].

    Args:
        text: Source text.
        start: First character of the region to split.
        end: End of the region (exclusive); defaults to len(text).

    Returns:
        List of (start, end) offsets into ``text``, trimmed of surrounding
        whitespace, in order. Whitespace-only regions return [].
    """
    if not text:
        return []
    end = len(text) if end is None else end
    segment = text[start:end]
    protected = _protect_dots(segment)

    spans: list[tuple[int, int]] = []
    pos = 0
    for match in _BOUNDARY_PATTERN.finditer(protected):
        span = _trimmed(segment, pos, match.start(1))
        if span:
            spans.append(span)
        pos = match.end(1)

    span = _trimmed(segment, pos, len(segment))
    if span:
        spans.append(span)

    return [(s + start, e + start) for s, e in spans]


def split_sentences(text: Optional[str]) -> list[str]:
    """
    Split text into sentences at proper sentence boundaries.

    Args:
        text: Input text to split into sentences.

    Returns:
        List of sentence strings. Empty/whitespace input returns empty list.
        Each sentence is stripped of leading/trailing whitespace.
    """
    if not text or not text.strip():
        return []
    return [text[s:e] for s, e in sentence_spans(text)]
