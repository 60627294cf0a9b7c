"""Sentence and word tokenization shared by the chunker and the analyzer.

Sentence boundaries come from NLTK's Punkt tokenizer.  The tokenizer is
built from in-code parameters (a fixed abbreviation set) instead of the
downloadable ``punkt`` model, so the same text always splits the same way
regardless of which NLTK data happens to be installed.
"""

from __future__ import annotations

from functools import lru_cache

from nltk.tokenize import RegexpTokenizer
from nltk.tokenize.punkt import PunktParameters, PunktSentenceTokenizer

# Abbreviations that must not end a sentence ("Dr. Smith", "e.g. this").
# Punkt stores them lowercased and without the trailing period.
_ABBREVIATIONS = frozenset(
    {
        "dr",
        "mr",
        "mrs",
        "ms",
        "prof",
        "jr",
        "sr",
        "st",
        "vs",
        "etc",
        "approx",
        "dept",
        "est",
        "fig",
        "eq",
        "vol",
        "no",
        "inc",
        "ltd",
        "co",
        "e.g",
        "i.e",
        "cf",
        "ch",
        "sec",
        "p",
        "pp",
    }
)

_WORD_TOKENIZER = RegexpTokenizer(r"\w+")


@lru_cache(maxsize=1)
def _sentence_tokenizer() -> PunktSentenceTokenizer:
    params = PunktParameters()
    params.abbrev_types = set(_ABBREVIATIONS)
    return PunktSentenceTokenizer(params)


def sentence_spans(text: str) -> list[tuple[int, int]]:
    """Return ``(start, end)`` offsets of each sentence in *text*.

    Spans are trimmed of surrounding whitespace, so ``text[start:end]`` is
    the sentence itself.  Text without terminal punctuation is one sentence.
    """
    spans: list[tuple[int, int]] = []
    for start, end in _sentence_tokenizer().span_tokenize(text):
        while start < end and text[start].isspace():
            start += 1
        while end > start and text[end - 1].isspace():
            end -= 1
        if end > start:
            spans.append((start, end))
    return spans


def split_sentences(text: str) -> list[str]:
    return [text[start:end] for start, end in sentence_spans(text)]


def word_tokens(text: str) -> list[str]:
    """Lowercased ``\\w+`` tokens of *text*."""
    return _WORD_TOKENIZER.tokenize(text.lower())
