"""
Text Preprocessor for the Chunking Engine

Normalizes raw extracted text before chunking. Line structure survives:
newlines and tabs are kept so the chunker can still see paragraphs,
tables and lists.

Steps:
1. Normalize line endings and Unicode (NFC), repair common mojibake.
2. Strip byte-order marks, zero-width and control characters.
3. Collapse horizontal whitespace, trim line edges, cap blank lines at one.
4. Optionally drop redundant data: punctuation runs, boilerplate lines
   repeated throughout the document, consecutive duplicate lines.

Usage:
    from textchunker.preprocessor import preprocess

    clean = preprocess(raw_text, clean_redundant_data=True)
"""

import re
import unicodedata
from collections import Counter
from typing import Optional

# UTF-8 punctuation that was decoded as cp1252.
_MOJIBAKE = (
    ("â€™", "'"),
    ("â€˜", "'"),
    ("â€œ", '"'),
    ("â€\u009d", '"'),
    ("â€“", "-"),
    ("â€”", "-"),
    ("â€¦", "..."),
)

_INVISIBLE = re.compile("[\x00-\x08\x0e-\x1f\x7f-\x9f\u200b-\u200f\u2060\ufeff]")
_HORIZONTAL_SPACE = re.compile(r"[^\S\n\t]+")
_LINE_EDGE_SPACE = re.compile(r" *\n *")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")
_PUNCTUATION_RUN = re.compile(r"([.,!?;:؟،])\1{2,}")

# Boilerplate: short lines that keep coming back (page headers, footers).
_BOILERPLATE_MIN_REPEATS = 3
_BOILERPLATE_MAX_LENGTH = 80


def _repair_mojibake(text: str) -> str:
    for broken, fixed in _MOJIBAKE:
        text = text.replace(broken, fixed)
    return text


def _normalize(text: str) -> str:
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    # Repair runs twice: once while the C1 byte of a right quote is still
    # present, once after removals and NFC may have joined a sequence.
    text = _repair_mojibake(text)
    text = _INVISIBLE.sub("", text)
    text = unicodedata.normalize("NFC", text)
    text = _repair_mojibake(text)
    text = _HORIZONTAL_SPACE.sub(" ", text)
    text = _LINE_EDGE_SPACE.sub("\n", text)
    text = _EXCESS_NEWLINES.sub("\n\n", text)
    return text.strip()


def _is_table_line(line: str) -> bool:
    return "\t" in line or line.count("|") >= 2


def _remove_redundant_lines(text: str) -> str:
    lines = text.split("\n")
    counts = Counter(line for line in lines if line)

    kept: list[str] = []
    for line in lines:
        if (
            line
            and counts[line] >= _BOILERPLATE_MIN_REPEATS
            and len(line) <= _BOILERPLATE_MAX_LENGTH
            and not _is_table_line(line)
        ):
            continue
        if line and kept and kept[-1] == line:
            continue
        kept.append(line)

    return "\n".join(kept)


def strip_redundant_data(text: str) -> str:
    """
    Remove repeated boilerplate from already-normalized text.

    Args:
        text: Text in the shape produced by preprocess().

    Returns:
        Text without punctuation runs, recurring short lines and
        consecutive duplicate lines.
    """
    text = _PUNCTUATION_RUN.sub(r"\1", text)
    text = _remove_redundant_lines(text)
    text = _EXCESS_NEWLINES.sub("\n\n", text)
    return text.strip()


def preprocess(text: Optional[str], clean_redundant_data: bool = False) -> str:
    """
    Normalize raw text for chunking.

    Idempotent: preprocess(preprocess(x)) == preprocess(x) for both
    settings of clean_redundant_data. Never raises.

    Args:
        text: Raw extracted document text.
        clean_redundant_data: Also strip boilerplate repetition.

    Returns:
        Normalized text. Empty or None input returns "".
    """
    if not text:
        return ""

    processed = _normalize(text)
    if clean_redundant_data and processed:
        processed = strip_redundant_data(processed)
    return processed
