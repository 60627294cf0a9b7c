"""Shared pytest fixtures for the NoteFlow test suite."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from PIL import Image, ImageDraw

from noteflow.config.settings import Settings
from noteflow.interfaces.embedding_provider import IEmbeddingProvider
from noteflow.interfaces.llm_provider import ILLMProvider
from noteflow.interfaces.ocr_provider import IOCRProvider
from noteflow.models.document import ChunkMetadata, Keyword, ProcessedChunk, ProcessingMethod

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> Settings:
    """Settings with two Gemini keys and no .env lookup."""
    return Settings(
        _env_file=None,
        gemini_api_key="test-key-1",
        gemini_api_key_2="test-key-2",
        gemini_api_key_3="",
        gemini_api_key_4="",
        ollama_base_url="",
        chroma_host="localhost",
        chroma_port=8000,
    )


@pytest.fixture
def bare_settings() -> Settings:
    """Settings with no credentials of any kind."""
    return Settings(
        _env_file=None,
        gemini_api_key="",
        gemini_api_key_2="",
        gemini_api_key_3="",
        gemini_api_key_4="",
        ollama_base_url="",
    )


# ---------------------------------------------------------------------------
# Sample text
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_text() -> str:
    return (
        "Photosynthesis is the process by which plants convert light into chemical energy. "
        "It takes place mainly in the chloroplasts of leaf cells. "
        "Chlorophyll absorbs light most strongly in the blue and red wavelengths. "
        "The light-dependent reactions split water and release oxygen. "
        "The Calvin cycle then fixes carbon dioxide into sugars. "
        "Scientists still research how to make the process more efficient. "
        "Dr. Smith and colleagues measured the rates in a controlled experiment. "
        "Their theory predicts higher yields under moderate light."
    )


# ---------------------------------------------------------------------------
# Provider doubles
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_llm() -> MagicMock:
    llm = MagicMock(spec=ILLMProvider)
    llm.complete = AsyncMock(return_value="")
    llm.get_provider_name.return_value = "mock-llm"
    llm.is_available.return_value = True
    return llm


@pytest.fixture
def make_embedding_provider() -> Callable[..., MagicMock]:
    """Factory for embedding provider doubles.

    ``vector`` is returned for every text; pass ``error`` to make
    ``embed_single`` raise instead.
    """

    def _make(
        name: str = "mock-embedder",
        vector: list[float] | None = None,
        error: Exception | None = None,
        dimension: int = 3,
    ) -> MagicMock:
        provider = MagicMock(spec=IEmbeddingProvider)
        provider.get_provider_name.return_value = name
        provider.get_dimension.return_value = dimension
        provider.is_available.return_value = True
        if error is not None:
            provider.embed_single = AsyncMock(side_effect=error)
        else:
            provider.embed_single = AsyncMock(return_value=vector or [1.0, 0.0, 0.0])
        return provider

    return _make


@pytest.fixture
def mock_ocr() -> MagicMock:
    ocr = MagicMock(spec=IOCRProvider)
    ocr.extract_text = AsyncMock(return_value="Recognised page text.")
    ocr.get_provider_name.return_value = "mock-ocr"
    ocr.is_available.return_value = True
    return ocr


# ---------------------------------------------------------------------------
# Chunks
# ---------------------------------------------------------------------------


@pytest.fixture
def make_processed_chunk() -> Callable[..., ProcessedChunk]:
    def _make(
        index: int = 0,
        content: str = "Chunk content.",
        embedding: list[float] | None = None,
        keywords: list[str] | None = None,
    ) -> ProcessedChunk:
        return ProcessedChunk(
            content=content,
            embedding=embedding,
            keywords=[Keyword(word=w) for w in (keywords or [])],
            summary=content,
            metadata=ChunkMetadata(
                chunk_index=index,
                start=0,
                end=len(content),
                length=len(content),
                sentence_count=1,
                processing_method=(
                    ProcessingMethod.PRIMARY if embedding is not None else ProcessingMethod.DEGRADED
                ),
                embedding_provider="mock-embedder" if embedding is not None else None,
            ),
        )

    return _make


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


@pytest.fixture
def blank_image_path(tmp_path: Path) -> Path:
    """A plain white PNG with nothing to read."""
    path = tmp_path / "blank.png"
    Image.new("RGB", (400, 300), color="white").save(path)
    return path


@pytest.fixture
def text_image_path(tmp_path: Path) -> Path:
    """A PNG with a line of black text drawn on it."""
    path = tmp_path / "page.png"
    image = Image.new("RGB", (600, 200), color="white")
    ImageDraw.Draw(image).text((20, 80), "Mitochondria are the powerhouse of the cell.", fill="black")
    image.save(path)
    return path
