"""Flesch Reading Ease approximation.

    score = 206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words)

Syllables are estimated per word by counting groups of consecutive vowels
(``aeiouy``), with a correction for a silent trailing ``e``.  Short words
(three letters or fewer) always count as one syllable.
"""

from __future__ import annotations

import re

from noteflow.models.document import Readability
from noteflow.utils.text import split_sentences

_VOWELS = frozenset("aeiouy")
_NON_LETTERS = re.compile(r"[^a-z]")

# Lower bound of each band, checked from the top down.
_BANDS: tuple[tuple[float, str], ...] = (
    (90.0, "Very Easy"),
    (80.0, "Easy"),
    (70.0, "Fairly Easy"),
    (60.0, "Standard"),
    (50.0, "Fairly Difficult"),
    (30.0, "Difficult"),
)


def count_syllables(word: str) -> int:
    word = _NON_LETTERS.sub("", word.lower())
    if len(word) <= 3:
        return 1

    syllables = 0
    previous_was_vowel = False
    for char in word:
        is_vowel = char in _VOWELS
        if is_vowel and not previous_was_vowel:
            syllables += 1
        previous_was_vowel = is_vowel

    if word.endswith("e") and syllables > 1:
        syllables -= 1

    return max(1, syllables)


def readability_level(score: float) -> str:
    for lower_bound, label in _BANDS:
        if score >= lower_bound:
            return label
    return "Very Difficult"


def flesch_reading_ease(text: str) -> Readability:
    """Compute the Flesch score for *text*.

    Empty text scores 0 ("Very Difficult") rather than dividing by zero.
    """
    words = text.split()
    sentences = split_sentences(text)
    if not words or not sentences:
        return Readability(score=0.0, level=readability_level(0.0))

    syllables = sum(count_syllables(word) for word in words)
    avg_words_per_sentence = len(words) / len(sentences)
    avg_syllables_per_word = syllables / len(words)

    score = 206.835 - (1.015 * avg_words_per_sentence) - (84.6 * avg_syllables_per_word)

    return Readability(
        score=round(score, 1),
        level=readability_level(score),
        avg_words_per_sentence=round(avg_words_per_sentence, 1),
        avg_syllables_per_word=round(avg_syllables_per_word, 2),
    )
