"""Tests for textchunker.structure."""

from textchunker.structure import (
    LIST,
    PROSE,
    TABLE,
    detect_blocks,
    is_list_item,
    is_table_block,
    table_delimiter,
)


def _kinds(text: str, **kwargs) -> list[str]:
    return [block.kind for block in detect_blocks(text, **kwargs)]


def _texts(text: str, **kwargs) -> list[str]:
    return [text[block.start:block.end] for block in detect_blocks(text, **kwargs)]


class TestLineClassification:
    def test_pipe_delimiter(self):
        assert table_delimiter("| a | b |") == "|"

    def test_single_pipe_is_not_a_table(self):
        assert table_delimiter("a | b") is None

    def test_tab_delimiter(self):
        assert table_delimiter("a\tb") == "\t"

    def test_plain_line(self):
        assert table_delimiter("just words") is None

    def test_list_items(self):
        assert is_list_item("- apples")
        assert is_list_item("* pears")
        assert is_list_item("• plums")
        assert is_list_item("1. first")
        assert is_list_item("12) twelfth")

    def test_not_list_items(self):
        assert not is_list_item("-not a list")
        assert not is_list_item("Plain sentence.")
        assert not is_list_item("2024. was a year")


class TestDetectBlocks:
    def test_empty(self):
        assert detect_blocks("") == []
        assert detect_blocks(" \n \n") == []

    def test_paragraphs(self):
        text = "First paragraph.\nStill first.\n\nSecond paragraph."
        assert _kinds(text) == [PROSE, PROSE]
        assert _texts(text) == ["First paragraph.\nStill first.", "Second paragraph."]

    def test_mixed_structure(self):
        text = "Intro line.\n\n| a | b |\n| 1 | 2 |\n- item one\n- item two\nOutro."
        assert _kinds(text) == [PROSE, TABLE, LIST, LIST, PROSE]
        assert _texts(text)[1] == "| a | b |\n| 1 | 2 |"

    def test_table_needs_two_lines(self):
        text = "| a | b |\nplain text"
        assert _kinds(text) == [PROSE]

    def test_tab_table(self):
        assert _kinds("name\tprice\napple\t1") == [TABLE]

    def test_inconsistent_delimiter_count_breaks_run(self):
        text = "| a | b | c | d |\n| 1 | 2 |"
        assert TABLE not in _kinds(text)

    def test_count_within_one_continues_run(self):
        text = "| a | b | c |\n| 1 | 2 |\n| 3 | 4 | 5 |"
        assert _kinds(text) == [TABLE]

    def test_tables_disabled(self):
        text = "| a | b |\n| 1 | 2 |"
        assert _kinds(text, keep_tables=False) == [PROSE]

    def test_lists_disabled(self):
        text = "Intro:\n- one\n- two"
        assert _kinds(text, keep_lists=False) == [PROSE]

    def test_blocks_are_trimmed_and_ordered(self):
        text = "  Alpha.  \n\n\tBeta."
        blocks = detect_blocks(text)
        assert [text[b.start:b.end] for b in blocks] == ["Alpha.", "Beta."]
        assert blocks[0].end <= blocks[1].start


class TestIsTableBlock:
    def test_table(self):
        assert is_table_block("| a | b |\n| 1 | 2 |")

    def test_prose(self):
        assert not is_table_block("Just a sentence.")

    def test_table_with_prose(self):
        assert not is_table_block("Heading\n| a | b |\n| 1 | 2 |")
