"""Text analysis and truncation tests."""
import pytest
from client.analysis import analyze_text, count_vowels, is_truncatable, truncate_words
from client.models import Language

URDU_SUMMARY = "ایک مختصر خلاصہ"


class TestAnalyzeText:
    """Tests for word, character and vowel counting."""

    def test_english_counts(self):
        snapshot = analyze_text("A short summary.", Language.ENGLISH)
        assert snapshot.word_count == 3
        assert snapshot.char_count == 16
        assert snapshot.vowel_count == 4

    def test_urdu_counts(self):
        snapshot = analyze_text(URDU_SUMMARY, Language.URDU)
        assert snapshot.word_count == 3
        assert snapshot.char_count == 15
        assert snapshot.vowel_count == 3

    def test_whitespace_runs_count_as_one_separator(self):
        snapshot = analyze_text("  one\t two \n\nthree  ", Language.ENGLISH)
        assert snapshot.word_count == 3

    def test_empty_text(self):
        snapshot = analyze_text("", Language.ENGLISH)
        assert (snapshot.word_count, snapshot.char_count, snapshot.vowel_count) == (0, 0, 0)

    def test_vowel_sets_are_language_specific(self):
        assert count_vowels("aeiou", Language.URDU) == 0
        assert count_vowels("اوی", Language.ENGLISH) == 0
        assert count_vowels("اوی", Language.URDU) == 3

    def test_urdu_short_vowel_marks_counted(self):
        assert count_vowels("بَبُبِ", Language.URDU) == 3


class TestTruncateWords:
    """Tests for the 20-word truncation."""

    def test_long_text_truncated_with_ellipsis(self):
        text = " ".join(f"w{i}" for i in range(25))
        assert truncate_words(text) == " ".join(f"w{i}" for i in range(20)) + "..."

    def test_exactly_twenty_words_unchanged(self):
        text = " ".join(f"w{i}" for i in range(20))
        assert truncate_words(text) == text
        assert not is_truncatable(text)

    def test_short_text_returned_as_is(self):
        text = "  spaced   out  "
        assert truncate_words(text) == text

    def test_truncation_normalizes_separators(self):
        text = "\n".join(f"w{i}" for i in range(21))
        assert truncate_words(text) == " ".join(f"w{i}" for i in range(20)) + "..."

    @pytest.mark.parametrize("count", [21, 40, 100])
    def test_truncation_is_stable(self, count):
        text = " ".join(f"w{i}" for i in range(count))
        assert truncate_words(text) == truncate_words(text)
        assert is_truncatable(text)
