"""Text statistics and truncation helpers."""
from client.models import AnalysisSnapshot, Language
from shared.utils import split_words

TRUNCATE_WORDS = 20
ELLIPSIS = "..."

ENGLISH_VOWELS = frozenset("aeiouAEIOU")
# Alef forms, waw forms, yeh forms and the short vowel marks zabar, pesh, zer.
URDU_VOWELS = frozenset(
    "اآأإ"
    "وؤ"
    "یيےئى"
    "\N{ARABIC FATHA}\N{ARABIC DAMMA}\N{ARABIC KASRA}"
)

VOWELS = {
    Language.ENGLISH: ENGLISH_VOWELS,
    Language.URDU: URDU_VOWELS,
}


def count_words(text: str) -> int:
    return len(split_words(text))


def count_vowels(text: str, language: Language) -> int:
    vowels = VOWELS[language]
    return sum(1 for char in text if char in vowels)


def analyze_text(text: str, language: Language) -> AnalysisSnapshot:
    """Compute word, character and vowel counts for a summary text."""
    return AnalysisSnapshot(
        word_count=count_words(text),
        char_count=len(text),
        vowel_count=count_vowels(text, language),
    )


def is_truncatable(text: str, limit: int = TRUNCATE_WORDS) -> bool:
    return count_words(text) > limit


def truncate_words(text: str, limit: int = TRUNCATE_WORDS) -> str:
    """
    Shorten text to its first `limit` words followed by an ellipsis.

    Text with `limit` words or fewer is returned unchanged.
    """
    words = split_words(text)
    if len(words) <= limit:
        return text
    return " ".join(words[:limit]) + ELLIPSIS
