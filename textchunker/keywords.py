"""
Document-level keyword extraction.

A small, deterministic term scorer used for tagging and search assist. It
runs once per document (not per chunk) and never calls out to a model.

Scoring (non-Arabic):
    score = tf * min(1, len(word) / 5) * max(0.5, 1 - tf * 10)

where tf is the word's share of all candidate words. Arabic text is
ranked by raw frequency after function-word filtering. Ties keep the
order of first occurrence.
"""

import re
from collections import Counter

from .language import contains_arabic

DEFAULT_MAX_KEYWORDS = 20
MIN_SCORED_WORDS = 5

_WORD = re.compile(r"[^\W\d_]+")
_ARABIC_MARKS = re.compile("[\u064b-\u065f\u0670\u0640]")

ARABIC_STOPWORDS = frozenset({
    # Prepositions
    "في", "من", "إلى", "على", "عن", "مع", "ب", "ل", "ك",
    "فى", "الى", "علي", "الي", "إلي",
    # Prepositions with attached pronouns
    "فيه", "فيها", "منه", "منها", "إليه", "إليها", "عليه", "عليها",
    "معه", "معها", "به", "بها", "له", "لها", "لك", "لي", "لنا", "لهم", "لكم",
    "عنه", "عنها",
    # Conjunctions
    "و", "أو", "ثم", "ف", "أم", "لكن", "بل", "حتى", "إذ", "إذا", "إن", "أن", "ان",
    # Pronouns
    "هو", "هي", "هم", "هن", "هما", "أنت", "أنتم", "أنتن", "أنا", "نحن",
    "انت", "انتم", "انتن", "انا",
    # Demonstratives
    "هذا", "هذه", "ذلك", "تلك", "هؤلاء", "أولئك", "هنا", "هناك",
    # Relative pronouns
    "الذي", "التي", "الذين", "اللذان", "اللتان", "اللواتي", "اللائي",
    "الذى", "التى",
    # Question words
    "ما", "ماذا", "أين", "متى", "كيف", "لماذا", "هل",
    # Particles and auxiliaries
    "قد", "لقد", "لم", "لن", "لا", "ليس",
    "كان", "كانت", "كانوا", "يكون", "تكون", "كنت", "أصبح", "صار",
    "ال",
    "كل", "بعض", "غير", "سوى", "أي", "جميع", "عدة", "خلال", "ضمن", "عبر",
    "قبل", "بعد", "تحت", "فوق", "بين", "أمام", "خلف", "حول", "دون", "سوف",
    "انه", "إنه", "انها", "إنها", "انهم", "إنهم",
})

STOP_WORDS = {
    "english": frozenset({
        "a", "an", "the", "and", "or", "but", "if", "then", "else", "when",
        "at", "from", "by", "for", "with", "about", "against", "between", "into",
        "through", "during", "before", "after", "above", "below", "to", "of", "in",
        "is", "are", "was", "were", "be", "been", "being", "have", "has", "had",
        "having", "do", "does", "did", "doing", "would", "should", "could", "ought",
        "i", "you", "he", "she", "it", "we", "they", "them", "their", "this", "that",
        "these", "those", "am", "on", "your", "my", "its", "me", "him", "her", "us",
        "what", "which", "who", "whom", "whose", "where", "why", "how",
        "all", "any", "both", "each", "few", "more", "most", "other", "some", "such",
        "no", "nor", "not", "only", "own", "same", "so", "than", "too", "very", "s", "t",
    }),
    "arabic": ARABIC_STOPWORDS,
    "spanish": frozenset({
        "de", "la", "el", "en", "y", "a", "que", "los", "del", "se", "las", "por", "un",
        "para", "con", "no", "una", "su", "al", "lo", "como", "más", "pero", "sus", "le",
        "ya", "o", "este", "si", "porque", "esta", "entre", "cuando", "muy", "sin",
        "sobre", "también", "me", "hasta", "hay", "donde", "quien", "desde", "todo",
        "nos", "durante", "todos", "uno", "les", "ni", "contra", "otros", "ese", "eso",
        "ante", "ellos", "e", "esto", "mi", "antes", "algunos", "qué", "unos", "yo",
        "otro", "otras",
    }),
    "french": frozenset({
        "le", "la", "les", "un", "une", "des", "du", "de", "à", "au", "aux", "et", "ou",
        "en", "dans", "sur", "pour", "par", "ce", "cette", "ces", "est", "il", "elle",
        "ils", "elles", "nous", "vous", "je", "tu", "qui", "que", "quoi", "dont", "où",
        "comment", "pourquoi", "quand", "plus", "moins", "sans", "avec", "même",
        "autre", "autres", "son", "sa", "ses",
    }),
}

_ARABIC_PREFIXES = ("ال", "و", "ف", "ب", "ل")
_PREPOSITION_PRONOUN = re.compile(
    r"^(?:في|من|إلى|على|عن|مع|ب|ل|ك)(?:ه|ها|هم|هن|ك|كم|كن|ي|نا)$"
)


def strip_arabic_marks(text: str) -> str:
    """Remove Arabic diacritics and tatweel."""
    return _ARABIC_MARKS.sub("", text)


def tokenize(text: str) -> list[str]:
    """Return runs of letters (any script), lowercased."""
    return [word.lower() for word in _WORD.findall(strip_arabic_marks(text or ""))]


def guess_stopword_language(words: list[str], text: str) -> str:
    """
    Pick the stop-word table with the most hits.

    Any Arabic-block character forces "arabic". No hits at all gives
    "unknown".
    """
    if contains_arabic(text):
        return "arabic"

    best, best_score = "unknown", 0
    for language, stop_words in STOP_WORDS.items():
        score = sum(1 for word in words if word in stop_words)
        if score > best_score:
            best, best_score = language, score
    return best


def is_arabic_function_word(word: str) -> bool:
    if not word:
        return False
    if word in ARABIC_STOPWORDS or len(word) <= 2:
        return True

    for prefix in _ARABIC_PREFIXES:
        if word.startswith(prefix):
            remainder = word[len(prefix):]
            if remainder in ARABIC_STOPWORDS or len(remainder) <= 2:
                return True
            break

    return _PREPOSITION_PRONOUN.match(word) is not None


def _distinct(words: list[str]) -> list[str]:
    return list(dict.fromkeys(words))


def extract_keywords(text: str, max_keywords: int = DEFAULT_MAX_KEYWORDS) -> list[str]:
    """
    Extract salient terms from a whole document.

    Args:
        text: Document text (preprocessed or raw).
        max_keywords: Upper bound on the number of keywords returned.

    Returns:
        Lowercased keywords, best first. Empty input returns [].
    """
    if not text or not text.strip() or max_keywords <= 0:
        return []

    words = tokenize(text)
    language = guess_stopword_language(words, text)

    if language == "arabic":
        candidates = [word for word in words if not is_arabic_function_word(word)]
        if len(candidates) < MIN_SCORED_WORDS:
            return _distinct(candidates)[:max_keywords]
        ranked = Counter(candidates).most_common()
        return [word for word, _ in ranked[:max_keywords]]

    stop_words = STOP_WORDS.get(language, frozenset())
    candidates = [
        word for word in words if word not in stop_words and len(word) > 1
    ]
    if len(candidates) < MIN_SCORED_WORDS:
        return _distinct(candidates)[:max_keywords]

    total = len(candidates)
    scores = {}
    for word, count in Counter(candidates).items():
        tf = count / total
        length_boost = min(1.0, len(word) / 5)
        commonness_penalty = max(0.5, 1.0 - tf * 10)
        scores[word] = tf * length_boost * commonness_penalty

    ranked = sorted(scores, key=scores.get, reverse=True)
    return ranked[:max_keywords]
