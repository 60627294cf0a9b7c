"""Unit tests for MetadataAnalyzer: rich LLM paths and local fallbacks."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from noteflow.services.ingestion.metadata_analyzer import (
    LLM_UNAVAILABLE,
    MetadataAnalyzer,
    english_heuristic,
    frequency_keywords,
    leading_sentences,
    subject_from_keywords,
)
from noteflow.utils.errors import LLMError


# ======================================================================
# Free paths
# ======================================================================


class TestSubjectFromKeywords:
    def test_mathematics(self) -> None:
        text = "Solve the equation using algebra and the quadratic formula."
        assert subject_from_keywords(text) == "Mathematics"

    def test_no_match_is_general(self) -> None:
        assert subject_from_keywords("The cat sat on the mat.") == "General"

    def test_empty_is_general(self) -> None:
        assert subject_from_keywords("") == "General"

    def test_tie_goes_to_earlier_subject(self) -> None:
        # One hit each for mathematics ("algebra") and business ("profit").
        assert subject_from_keywords("algebra profit") == "Mathematics"


class TestFrequencyKeywords:
    def test_counts_and_orders_by_frequency(self) -> None:
        text = "Energy flows. Energy changes form. Plants store energy as sugar in plants."
        keywords = frequency_keywords(text, max_keywords=2)

        assert [k.word for k in keywords] == ["energy", "plants"]
        assert keywords[0].count == 3
        assert keywords[1].count == 2
        assert all(k.source == "frequency" for k in keywords)

    def test_drops_stop_words_short_tokens_and_numerals(self) -> None:
        keywords = frequency_keywords("The cat is on a mat in 2024 and 42 of those", max_keywords=10)
        words = [k.word for k in keywords]
        assert words == ["cat", "mat"]

    def test_ties_keep_first_occurrence(self) -> None:
        words = [k.word for k in frequency_keywords("zebra apple mango", max_keywords=3)]
        assert words == ["zebra", "apple", "mango"]

    def test_empty_text(self) -> None:
        assert frequency_keywords("") == []


class TestLeadingSentences:
    def test_takes_first_sentences(self) -> None:
        text = "One is first. Two is second. Three is third. Four is fourth."
        assert leading_sentences(text, 2) == "One is first. Two is second."

    def test_short_text_returned_whole(self) -> None:
        text = "Only one sentence here."
        assert leading_sentences(text, 3) == text


class TestEnglishHeuristic:
    def test_english(self) -> None:
        assert english_heuristic("This is the start of a note that has words") == "en"

    def test_not_english(self) -> None:
        assert english_heuristic("Dies ist ein kurzer deutscher Satz") == "unknown"

    def test_empty(self) -> None:
        assert english_heuristic("") == "unknown"


# ======================================================================
# Analyzer without an LLM
# ======================================================================


class TestAnalyzerWithoutLLM:
    @pytest.mark.asyncio
    async def test_subject_flagged_llm_unavailable(self) -> None:
        analyzer = MetadataAnalyzer(llm=None)
        outcome = await analyzer.classify_subject("A computer runs software written in programming languages.")

        assert outcome.value == "Technology"
        assert outcome.degraded
        assert outcome.degraded_reason == LLM_UNAVAILABLE

    @pytest.mark.asyncio
    async def test_keywords_and_summary_fall_back(self, sample_text: str) -> None:
        analyzer = MetadataAnalyzer(llm=None)

        keywords = await analyzer.extract_keywords(sample_text, 5)
        summary = await analyzer.summarize(sample_text, 2)

        assert keywords.degraded_reason == LLM_UNAVAILABLE
        assert len(keywords.value) == 5
        assert summary.degraded_reason == LLM_UNAVAILABLE
        assert summary.value.startswith("Photosynthesis is the process")

    @pytest.mark.asyncio
    async def test_analyze_collects_reasons(self, sample_text: str) -> None:
        analyzer = MetadataAnalyzer(llm=None)
        outcome = await analyzer.analyze(sample_text)

        assert outcome.degraded
        assert outcome.value.subject == "Science"
        assert outcome.value.language == "en"
        assert len(outcome.value.degraded_reasons) == 3
        assert outcome.value.readability.level

    @pytest.mark.asyncio
    async def test_direct_llm_call_raises_llm_error(self) -> None:
        with pytest.raises(LLMError):
            await MetadataAnalyzer(llm=None)._ask("Classify this.")


# ======================================================================
# Analyzer with an LLM
# ======================================================================


class TestAnalyzerWithLLM:
    @pytest.mark.asyncio
    async def test_subject_from_llm(self, mock_llm: MagicMock) -> None:
        mock_llm.complete = AsyncMock(return_value='"Biology"\n')
        analyzer = MetadataAnalyzer(llm=mock_llm)

        outcome = await analyzer.classify_subject("Cells and organisms.")

        assert outcome.value == "Biology"
        assert not outcome.degraded

    @pytest.mark.asyncio
    async def test_keywords_parsed_from_fenced_json(self, mock_llm: MagicMock) -> None:
        mock_llm.complete = AsyncMock(return_value='```json\n["photosynthesis", "chlorophyll"]\n```')
        analyzer = MetadataAnalyzer(llm=mock_llm)

        outcome = await analyzer.extract_keywords("Plants use chlorophyll.", 10)

        assert [k.word for k in outcome.value] == ["photosynthesis", "chlorophyll"]
        assert all(k.source == "llm" for k in outcome.value)
        assert not outcome.degraded

    @pytest.mark.asyncio
    async def test_keywords_capped_at_max(self, mock_llm: MagicMock) -> None:
        mock_llm.complete = AsyncMock(return_value='Here you go: ["a1", "b2", "c3", "d4"]')
        analyzer = MetadataAnalyzer(llm=mock_llm)

        outcome = await analyzer.extract_keywords("Some text here.", 2)
        assert [k.word for k in outcome.value] == ["a1", "b2"]

    @pytest.mark.asyncio
    async def test_unparseable_keywords_fall_back(self, mock_llm: MagicMock) -> None:
        mock_llm.complete = AsyncMock(return_value="photosynthesis, chlorophyll")
        analyzer = MetadataAnalyzer(llm=mock_llm)

        outcome = await analyzer.extract_keywords("Plants use chlorophyll for photosynthesis.", 10)

        assert outcome.degraded_reason == "llm_unparseable_response"
        assert all(k.source == "frequency" for k in outcome.value)

    @pytest.mark.asyncio
    async def test_llm_error_falls_back_to_free_summary(self, mock_llm: MagicMock) -> None:
        mock_llm.complete = AsyncMock(side_effect=LLMError("boom", provider_name="mock-llm"))
        analyzer = MetadataAnalyzer(llm=mock_llm)
        text = "First point. Second point. Third point. Fourth point."

        outcome = await analyzer.summarize(text, 2)

        assert outcome.value == "First point. Second point."
        assert outcome.degraded_reason == "llm_error: LLMError"

    @pytest.mark.asyncio
    async def test_summary_prompt_truncates_text(self, mock_llm: MagicMock) -> None:
        mock_llm.complete = AsyncMock(return_value="A summary.")
        analyzer = MetadataAnalyzer(llm=mock_llm)

        await analyzer.summarize("word " * 2000, 3)

        user_prompt = mock_llm.complete.call_args.kwargs["user_prompt"]
        assert len(user_prompt) < 3200

    @pytest.mark.asyncio
    async def test_blank_text_skips_llm(self, mock_llm: MagicMock) -> None:
        analyzer = MetadataAnalyzer(llm=mock_llm)
        outcome = await analyzer.classify_subject("   ")

        assert outcome.value == "General"
        assert not outcome.degraded
        mock_llm.complete.assert_not_called()


class TestLanguageAndReadability:
    @pytest.mark.asyncio
    async def test_detect_english(self, sample_text: str) -> None:
        outcome = await MetadataAnalyzer().detect_language(sample_text)
        assert outcome.value == "en"
        assert not outcome.degraded

    @pytest.mark.asyncio
    async def test_detect_language_falls_back_on_empty(self) -> None:
        outcome = await MetadataAnalyzer().detect_language("")
        assert outcome.value == "unknown"
        assert outcome.degraded_reason == "langdetect_failed"

    def test_readability_delegates_to_flesch(self) -> None:
        result = MetadataAnalyzer().readability("The cat sat. The dog ran.")
        assert result.level in {"Very Easy", "Easy"}
