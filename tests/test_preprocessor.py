"""Tests for textchunker.preprocessor."""

from textchunker.preprocessor import preprocess, strip_redundant_data


class TestNormalization:
    def test_empty_string(self):
        assert preprocess("") == ""

    def test_none_input(self):
        assert preprocess(None) == ""

    def test_whitespace_only(self):
        assert preprocess("  \n\t \n ") == ""

    def test_collapses_spaces(self):
        assert preprocess("Hello    world") == "Hello world"

    def test_trims_line_edges(self):
        assert preprocess("  line one  \n   line two  ") == "line one\nline two"

    def test_windows_line_endings(self):
        assert preprocess("a\r\nb\rc") == "a\nb\nc"

    def test_caps_blank_lines(self):
        assert preprocess("a\n\n\n\n\nb") == "a\n\nb"

    def test_keeps_tabs(self):
        """Tabs delimit table columns and must survive."""
        assert preprocess("a\tb\n1\t2") == "a\tb\n1\t2"

    def test_strips_bom_and_zero_width(self):
        assert preprocess("\ufeffHello\u200bWorld") == "HelloWorld"

    def test_strips_control_characters(self):
        assert preprocess("abc\x00\x07def") == "abcdef"

    def test_repairs_mojibake_quote(self):
        assert preprocess("donâ€™t") == "don't"

    def test_nfc_normalization(self):
        assert preprocess("Cafe\u0301") == "Caf\u00e9"

    def test_arabic_untouched(self):
        text = "مرحبا بالعالم"
        assert preprocess(text) == text


class TestRedundantData:
    def test_disabled_by_default(self):
        assert preprocess("Wow!!!!") == "Wow!!!!"

    def test_collapses_punctuation_runs(self):
        assert preprocess("Wow!!!! Really????", clean_redundant_data=True) == "Wow! Really?"

    def test_removes_boilerplate_lines(self):
        text = "Company Confidential\nA\nCompany Confidential\nB\nCompany Confidential\nC"
        assert preprocess(text, clean_redundant_data=True) == "A\nB\nC"

    def test_removes_consecutive_duplicates(self):
        text = "Same line\nSame line\nOther line"
        assert preprocess(text, clean_redundant_data=True) == "Same line\nOther line"

    def test_keeps_repeated_table_lines(self):
        text = "| a | b |\nx\n| a | b |\ny\n| a | b |"
        assert strip_redundant_data(text) == text

    def test_keeps_long_repeated_lines(self):
        line = "x" * 100
        text = "\n".join([line, "a", line, "b", line])
        assert strip_redundant_data(text) == text


class TestIdempotence:
    SAMPLES = [
        "  Hello \r\n\r\n\r\n world\u200b!!!  ",
        "Header\nBody one\nHeader\nBody two\nHeader\n\n\n\nEnd....",
        "\ufeffâ€œQuotedâ€\x9d text\t\tcell",
        "مرحبا   بالعالم\n\n\nسطر آخر",
    ]

    def test_plain(self):
        for sample in self.SAMPLES:
            once = preprocess(sample)
            assert preprocess(once) == once

    def test_with_cleaning(self):
        for sample in self.SAMPLES:
            once = preprocess(sample, clean_redundant_data=True)
            assert preprocess(once, clean_redundant_data=True) == once
