"""
Arabic / non-Arabic language detection by Unicode range density.

The detector is binary: it only decides whether a span is
predominantly Arabic script. Anything else is reported as "en" so that
callers can fall back to left-to-right handling.
"""

import re
import unicodedata

from .models import DetectedLanguage, TextDirection

# Arabic, Arabic Supplement, Arabic Extended-A, Presentation Forms-A/B.
ARABIC_RANGES = (
    (0x0600, 0x06FF),
    (0x0750, 0x077F),
    (0x08A0, 0x08FF),
    (0xFB50, 0xFDFF),
    (0xFE70, 0xFEFF),
)

_ARABIC_PATTERN = re.compile(
    "[" + "".join(f"\\u{low:04x}-\\u{high:04x}" for low, high in ARABIC_RANGES) + "]"
)

ARABIC_THRESHOLD = 0.3
MIN_RELIABLE_LENGTH = 5


def is_arabic_char(char: str) -> bool:
    code = ord(char)
    return any(low <= code <= high for low, high in ARABIC_RANGES)


def _is_meaningful(char: str) -> bool:
    if char.isspace() or char.isdigit():
        return False
    return not unicodedata.category(char).startswith("P")


def contains_arabic(text: str) -> bool:
    """Return True if the text contains at least one Arabic-block character."""
    if not text:
        return False
    return _ARABIC_PATTERN.search(text) is not None


def arabic_ratio(text: str) -> float:
    """
    Share of meaningful characters that fall in the Arabic blocks.

    Meaningful characters exclude whitespace, digits and punctuation.
    Returns 0.0 when there are none.
    """
    meaningful = 0
    arabic = 0
    for char in text or "":
        if not _is_meaningful(char):
            continue
        meaningful += 1
        if is_arabic_char(char):
            arabic += 1
    return arabic / meaningful if meaningful else 0.0


def detect_language(text: str) -> DetectedLanguage:
    """
    Classify a span of text as Arabic or non-Arabic.

    Args:
        text: Any string, including empty.

    Returns:
        "auto" when the text has no meaningful characters,
        "ar" when more than 30% of them are Arabic, otherwise "en".
    """
    if not text or not any(_is_meaningful(char) for char in text):
        return "auto"
    if arabic_ratio(text) > ARABIC_THRESHOLD:
        return "ar"
    return "en"


def validate_language_detection(text: str, language: DetectedLanguage) -> bool:
    """
    Report whether a detection can be trusted.

    Very short inputs (fewer than 5 characters after trimming) are flagged
    as unreliable. The label itself is never changed. "auto" is always
    considered reliable.
    """
    if language == "auto":
        return True
    return len((text or "").strip()) >= MIN_RELIABLE_LENGTH


def text_direction(language: DetectedLanguage) -> TextDirection | None:
    """Map a detected language to its writing direction."""
    if language == "ar":
        return "rtl"
    if language == "en":
        return "ltr"
    return None
