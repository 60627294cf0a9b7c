"""Subject, keyword, summary, language and readability analysis.

Each derivation has two paths:

* a **rich path** that asks the configured
  :class:`~noteflow.interfaces.llm_provider.ILLMProvider`, and
* a **free path** computed locally (keyword table, word frequencies,
  leading sentences, stop-word heuristics).

Derivations never raise.  They return an
:class:`~noteflow.models.outcome.Outcome` carrying the rich value, or the
free value plus a ``degraded_reason`` when the LLM is missing, fails, or
answers with something unusable.  Readability is always computed locally.

LLM calls are gated by a semaphore so that analyzing every chunk of a long
document concurrently stays under the provider's rate limit.
"""

from __future__ import annotations

import asyncio
import json
import re
from collections import Counter
from typing import TYPE_CHECKING

import structlog
from langdetect import DetectorFactory, LangDetectException, detect

from noteflow.models.document import DocumentAnalysis, Keyword, Readability
from noteflow.models.outcome import Outcome
from noteflow.utils.errors import LLMError
from noteflow.utils.readability import flesch_reading_ease
from noteflow.utils.text import split_sentences, word_tokens

if TYPE_CHECKING:
    from noteflow.interfaces.llm_provider import ILLMProvider

logger = structlog.get_logger(logger_name=__name__)

# langdetect is non-deterministic on short inputs unless seeded.
DetectorFactory.seed = 0

LLM_UNAVAILABLE = "llm_unavailable"

# Subject table scored by substring presence in the lowercased text.
# Order matters: on a tie the earlier subject wins.
_SUBJECT_KEYWORDS: dict[str, tuple[str, ...]] = {
    "mathematics": ("math", "algebra", "calculus", "geometry", "equation", "formula", "number", "solve"),
    "science": ("science", "biology", "chemistry", "physics", "experiment", "research", "theory", "hypothesis"),
    "history": ("history", "historical", "ancient", "century", "war", "battle", "empire", "civilization"),
    "literature": ("literature", "novel", "poetry", "author", "character", "plot", "theme", "writing"),
    "technology": ("technology", "computer", "software", "programming", "digital", "internet", "data", "system"),
    "business": ("business", "management", "marketing", "finance", "economy", "company", "strategy", "profit"),
}

_STOP_WORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
        "of", "with", "by", "is", "are", "was", "were", "be", "been", "have",
        "has", "had", "do", "does", "did", "will", "would", "could", "should",
        "may", "might", "must", "can", "this", "that", "these", "those",
    }
)

_NUMERAL = re.compile(r"\d+")

_SYSTEM_PROMPT = "You are a study assistant that analyzes learning materials."

_SUBJECT_PROMPT = """\
What is the main subject or topic of this text? Respond with only the subject \
name (e.g., "Mathematics", "Science", "History", "Technology", "Business", "Literature").

Text: {text}"""

_KEYWORDS_PROMPT = """\
Extract the top {max_keywords} most important keywords from this text. \
Return only a JSON array of strings, no other text.

Text: {text}"""

_SUMMARY_PROMPT = """\
Summarize this text in {max_sentences} sentences. Focus on the main points and key information.

Text: {text}"""


# ---------------------------------------------------------------------------
# Free paths
# ---------------------------------------------------------------------------

def subject_from_keywords(text: str) -> str:
    """Best-matching subject from the keyword table, or ``"General"``."""
    lowered = text.lower()
    best, best_score = "General", 0
    for subject, keywords in _SUBJECT_KEYWORDS.items():
        score = sum(1 for keyword in keywords if keyword in lowered)
        if score > best_score:
            best, best_score = subject.capitalize(), score
    return best


def frequency_keywords(text: str, max_keywords: int = 10) -> list[Keyword]:
    """Most frequent non-stop-word tokens, ties broken by first occurrence."""
    tokens = [
        token
        for token in word_tokens(text)
        if len(token) > 2 and token not in _STOP_WORDS and not _NUMERAL.fullmatch(token)
    ]
    # Counter.most_common keeps insertion order among equal counts.
    return [
        Keyword(word=word, count=count, source="frequency")
        for word, count in Counter(tokens).most_common(max_keywords)
    ]


def leading_sentences(text: str, max_sentences: int = 3) -> str:
    """Extractive summary: the first *max_sentences* sentences."""
    sentences = split_sentences(text)
    if len(sentences) <= max_sentences:
        return text.strip()
    return " ".join(sentences[:max_sentences])


def english_heuristic(text: str) -> str:
    """``"en"`` when more than 10% of words are English function words."""
    words = text.lower().split()
    if not words:
        return "unknown"
    english = sum(1 for word in words if word in _STOP_WORDS)
    return "en" if english > len(words) * 0.1 else "unknown"


class MetadataAnalyzer:
    """Derives document and chunk metadata, preferring the LLM when present.

    Parameters
    ----------
    llm:
        Optional LLM provider for the rich paths.  ``None`` runs every
        derivation on its free path, flagged ``llm_unavailable``.
    max_concurrent:
        Maximum number of concurrent LLM calls (default 5).
    """

    def __init__(self, llm: ILLMProvider | None = None, max_concurrent: int = 5) -> None:
        self._llm = llm
        self._semaphore = asyncio.Semaphore(max_concurrent)

    @property
    def has_llm(self) -> bool:
        return self._llm is not None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def classify_subject(self, text: str) -> Outcome[str]:
        free = subject_from_keywords(text)
        if not text.strip():
            return Outcome.ok(free)
        if self._llm is None:
            return Outcome.fallback(free, LLM_UNAVAILABLE)

        try:
            response = await self._ask(_SUBJECT_PROMPT.format(text=text[:2000]), max_tokens=50)
        except Exception as exc:  # noqa: BLE001
            return self._degrade("classify_subject", free, exc)

        subject = response.strip().splitlines()[0] if response.strip() else ""
        subject = subject.replace('"', "").replace("'", "").strip().rstrip(".")
        if not subject:
            return Outcome.fallback(free, "llm_empty_response")
        return Outcome.ok(subject[:80])

    async def extract_keywords(
        self, text: str, max_keywords: int = 10
    ) -> Outcome[list[Keyword]]:
        free = frequency_keywords(text, max_keywords)
        if not text.strip():
            return Outcome.ok(free)
        if self._llm is None:
            return Outcome.fallback(free, LLM_UNAVAILABLE)

        try:
            response = await self._ask(
                _KEYWORDS_PROMPT.format(max_keywords=max_keywords, text=text[:2000]),
                temperature=0.1,
                max_tokens=300,
            )
        except Exception as exc:  # noqa: BLE001
            return self._degrade("extract_keywords", free, exc)

        words = self._parse_keyword_list(response)
        if not words:
            return Outcome.fallback(free, "llm_unparseable_response")
        return Outcome.ok(
            [Keyword(word=word, count=1, source="llm") for word in words[:max_keywords]]
        )

    async def summarize(self, text: str, max_sentences: int = 3) -> Outcome[str]:
        free = leading_sentences(text, max_sentences)
        if not text.strip():
            return Outcome.ok(free)
        if self._llm is None:
            return Outcome.fallback(free, LLM_UNAVAILABLE)

        try:
            response = await self._ask(
                _SUMMARY_PROMPT.format(max_sentences=max_sentences, text=text[:3000]),
                max_tokens=500,
            )
        except Exception as exc:  # noqa: BLE001
            return self._degrade("summarize", free, exc)

        summary = response.strip()
        if not summary:
            return Outcome.fallback(free, "llm_empty_response")
        return Outcome.ok(summary)

    async def detect_language(self, text: str) -> Outcome[str]:
        """ISO 639-1 code from langdetect, or the stop-word heuristic."""
        try:
            return Outcome.ok(detect(text))
        except LangDetectException as exc:
            logger.debug("language_detection_fallback", error=str(exc))
            return Outcome.fallback(english_heuristic(text), "langdetect_failed")

    def readability(self, text: str) -> Readability:
        return flesch_reading_ease(text)

    async def analyze(
        self, text: str, max_keywords: int = 20, summary_sentences: int = 5
    ) -> Outcome[DocumentAnalysis]:
        """Run every derivation for a whole document concurrently."""
        subject, keywords, summary, language = await asyncio.gather(
            self.classify_subject(text),
            self.extract_keywords(text, max_keywords),
            self.summarize(text, summary_sentences),
            self.detect_language(text),
        )

        reasons = [
            f"{name}: {outcome.degraded_reason}"
            for name, outcome in (
                ("subject", subject),
                ("keywords", keywords),
                ("summary", summary),
                ("language", language),
            )
            if outcome.degraded
        ]
        analysis = DocumentAnalysis(
            subject=subject.value,
            keywords=keywords.value,
            summary=summary.value,
            language=language.value,
            readability=self.readability(text),
            degraded_reasons=reasons,
        )
        if reasons:
            return Outcome.fallback(analysis, "; ".join(reasons))
        return Outcome.ok(analysis)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _ask(self, user_prompt: str, temperature: float = 0.3, max_tokens: int = 500) -> str:
        if self._llm is None:
            raise LLMError("No LLM provider configured")
        async with self._semaphore:
            return await self._llm.complete(
                system_prompt=_SYSTEM_PROMPT,
                user_prompt=user_prompt,
                temperature=temperature,
                max_tokens=max_tokens,
            )

    @staticmethod
    def _degrade(operation: str, free_value, exc: Exception) -> Outcome:
        logger.warning(
            "llm_analysis_failed",
            operation=operation,
            error=str(exc),
            msg="Using local fallback.",
        )
        return Outcome.fallback(free_value, f"llm_error: {type(exc).__name__}")

    @staticmethod
    def _parse_keyword_list(response: str) -> list[str]:
        """Parse a JSON array of strings from an LLM answer.

        Accepts a bare array, a markdown-fenced array, or an array embedded
        in prose.  Returns an empty list when nothing parses.
        """
        cleaned = response.strip()

        fence_match = re.search(r"```(?:json)?\s*\n?(.*?)```", cleaned, re.DOTALL)
        if fence_match:
            cleaned = fence_match.group(1).strip()
        else:
            start = cleaned.find("[")
            end = cleaned.rfind("]")
            if start != -1 and end > start:
                cleaned = cleaned[start : end + 1]

        try:
            data = json.loads(cleaned)
        except json.JSONDecodeError:
            logger.warning("keyword_json_parse_failed", response_preview=response[:200])
            return []

        if not isinstance(data, list):
            return []
        return [str(item).strip() for item in data if str(item).strip()]
