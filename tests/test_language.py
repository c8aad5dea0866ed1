"""Tests for textchunker.language."""

import pytest

from textchunker.language import (
    arabic_ratio,
    contains_arabic,
    detect_language,
    text_direction,
    validate_language_detection,
)


class TestDetectLanguage:
    def test_empty_is_auto(self):
        assert detect_language("") == "auto"

    def test_whitespace_is_auto(self):
        assert detect_language("   \n\t") == "auto"

    def test_digits_and_punctuation_are_auto(self):
        assert detect_language("123 !!! 45.6") == "auto"

    def test_english(self):
        assert detect_language("Hello world") == "en"

    def test_thousand_arabic_letters(self):
        assert detect_language("ب" * 1000) == "ar"

    def test_arabic_sentence(self):
        assert detect_language("مرحبا بكم في المكتبة") == "ar"

    def test_mostly_english_with_arabic_word(self):
        text = "This is a fairly long English sentence containing عربي"
        assert detect_language(text) == "en"

    def test_mixed_above_threshold(self):
        assert detect_language("Hello مرحبا") == "ar"

    def test_arabic_digits_and_punctuation_ignored(self):
        """Arabic-Indic digits and Arabic punctuation are not meaningful."""
        assert detect_language("٣٤٥ ، ؟ Report") == "en"

    def test_presentation_forms(self):
        assert detect_language("\ufef7\ufefb\ufe8d") == "ar"

    @pytest.mark.parametrize("text", ["", "abc", "مرحبا", "123", "مرحبا hello", "😀"])
    def test_total_and_idempotent(self, text):
        first = detect_language(text)
        assert first in {"ar", "en", "auto"}
        assert detect_language(text) == first


class TestHelpers:
    def test_contains_arabic(self):
        assert contains_arabic("abc ب")
        assert not contains_arabic("abc")
        assert not contains_arabic("")

    def test_arabic_ratio(self):
        assert arabic_ratio("") == 0.0
        assert arabic_ratio("بب aa") == pytest.approx(0.5)

    def test_text_direction(self):
        assert text_direction("ar") == "rtl"
        assert text_direction("en") == "ltr"
        assert text_direction("auto") is None


class TestValidateLanguageDetection:
    def test_short_input_unreliable(self):
        assert validate_language_detection("Hi", "en") is False

    def test_short_after_trim_unreliable(self):
        assert validate_language_detection("   abcd   ", "en") is False

    def test_long_enough(self):
        assert validate_language_detection("Hello", "en") is True

    def test_auto_always_reliable(self):
        assert validate_language_detection("", "auto") is True

    def test_label_not_changed(self):
        """Validation only reports; detection still returns its label."""
        assert detect_language("ب") == "ar"
        assert validate_language_detection("ب", "ar") is False
