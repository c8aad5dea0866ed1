"""
Structure detection for prose input.

Splits normalized text into blocks (prose paragraphs, table blocks and
list items) with character offsets. Table blocks are runs of at least two
consecutive lines sharing a delimiter kind ("|" used twice or more, or a
tab) whose delimiter counts stay within one of the first line's count.
"""

import re
from dataclasses import dataclass
from typing import Optional

PROSE = "prose"
TABLE = "table"
LIST = "list"

MIN_TABLE_LINES = 2

_LIST_ITEM = re.compile(r"^(?:[-*+•·▪◦‣]|\d{1,3}[.)])\s+\S")


@dataclass(frozen=True)
class Block:
    kind: str
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


def table_delimiter(line: str) -> Optional[str]:
    """Return the column delimiter of a table-like line, or None."""
    if line.count("|") >= 2:
        return "|"
    if "\t" in line:
        return "\t"
    return None


def is_list_item(line: str) -> bool:
    return _LIST_ITEM.match(line.strip()) is not None


def _lines_with_offsets(text: str) -> list[tuple[int, int]]:
    spans = []
    pos = 0
    for line in text.split("\n"):
        spans.append((pos, pos + len(line)))
        pos += len(line) + 1
    return spans


def _table_run_length(lines: list[str], first: int) -> int:
    delimiter = table_delimiter(lines[first])
    if delimiter is None:
        return 0
    expected = lines[first].count(delimiter)
    length = 1
    for line in lines[first + 1:]:
        if table_delimiter(line) != delimiter:
            break
        if abs(line.count(delimiter) - expected) > 1:
            break
        length += 1
    return length


def _trim(text: str, start: int, end: int) -> Optional[Block]:
    while start < end and text[start].isspace():
        start += 1
    while end > start and text[end - 1].isspace():
        end -= 1
    if start >= end:
        return None
    return Block(PROSE, start, end)


def detect_blocks(
    text: str,
    keep_tables: bool = True,
    keep_lists: bool = True,
) -> list[Block]:
    """
    Split text into ordered, non-overlapping blocks.

    Args:
        text: Normalized text.
        keep_tables: Emit table runs as TABLE blocks.
        keep_lists: Emit each list item line as a LIST block.

    Returns:
        Blocks trimmed of surrounding whitespace. Prose blocks end at blank
        lines and at any table or list block.
    """
    if not text or not text.strip():
        return []

    offsets = _lines_with_offsets(text)
    lines = [text[s:e] for s, e in offsets]
    blocks: list[Block] = []
    prose_start: Optional[int] = None
    prose_end = 0

    def flush_prose() -> None:
        nonlocal prose_start
        if prose_start is not None:
            block = _trim(text, prose_start, prose_end)
            if block:
                blocks.append(block)
        prose_start = None

    i = 0
    while i < len(lines):
        line = lines[i]
        start, end = offsets[i]

        if not line.strip():
            flush_prose()
            i += 1
            continue

        if keep_tables:
            run = _table_run_length(lines, i)
            if run >= MIN_TABLE_LINES:
                flush_prose()
                block = _trim(text, start, offsets[i + run - 1][1])
                if block:
                    blocks.append(Block(TABLE, block.start, block.end))
                i += run
                continue

        if keep_lists and is_list_item(line):
            flush_prose()
            block = _trim(text, start, end)
            if block:
                blocks.append(Block(LIST, block.start, block.end))
            i += 1
            continue

        if prose_start is None:
            prose_start = start
        prose_end = end
        i += 1

    flush_prose()
    return blocks


def is_table_block(text: str) -> bool:
    """Return True if the whole text is a single table block."""
    blocks = detect_blocks(text, keep_tables=True, keep_lists=False)
    return len(blocks) == 1 and blocks[0].kind == TABLE
