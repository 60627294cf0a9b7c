"""Unit tests for the Ollama-backed nomic-embed-text provider."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai
import pytest

from noteflow.config.settings import Settings
from noteflow.providers.embedding.nomic_embedding_provider import NomicEmbeddingProvider
from noteflow.utils.errors import RAGError


@pytest.fixture
def provider(bare_settings: Settings) -> NomicEmbeddingProvider:
    settings = bare_settings.model_copy(update={"ollama_base_url": "http://ollama.test:11434/"})
    return NomicEmbeddingProvider(settings=settings)


def _response(count: int) -> SimpleNamespace:
    return SimpleNamespace(data=[SimpleNamespace(embedding=[float(i)] * 3) for i in range(count)])


class TestNomicEmbeddingProvider:
    @pytest.mark.asyncio
    async def test_embed_single(self, provider: NomicEmbeddingProvider) -> None:
        provider._client = MagicMock()
        provider._client.embeddings.create = AsyncMock(return_value=_response(1))

        assert await provider.embed_single("cells") == [0.0, 0.0, 0.0]
        provider._client.embeddings.create.assert_awaited_once_with(
            input=["cells"], model="nomic-embed-text"
        )

    @pytest.mark.asyncio
    async def test_large_input_is_batched(self, provider: NomicEmbeddingProvider) -> None:
        provider._client = MagicMock()
        provider._client.embeddings.create = AsyncMock(
            side_effect=lambda input, model: _response(len(input))
        )

        vectors = await provider.embed(["t"] * 600)

        assert len(vectors) == 600
        assert provider._client.embeddings.create.await_count == 2

    @pytest.mark.asyncio
    async def test_connection_error_wrapped(self, provider: NomicEmbeddingProvider) -> None:
        provider._client = MagicMock()
        provider._client.embeddings.create = AsyncMock(
            side_effect=openai.APIConnectionError(request=httpx.Request("POST", "http://ollama.test"))
        )

        with pytest.raises(RAGError) as exc_info:
            await provider.embed_single("cells")

        assert exc_info.value.provider_name == "nomic-embed-text"

    def test_available_when_model_pulled(self, provider: NomicEmbeddingProvider) -> None:
        response = httpx.Response(
            200,
            json={"models": [{"name": "nomic-embed-text:latest"}]},
            request=httpx.Request("GET", "http://ollama.test:11434/api/tags"),
        )
        with patch(
            "noteflow.providers.embedding.nomic_embedding_provider.httpx.get", return_value=response
        ) as mock_get:
            assert provider.is_available()

        mock_get.assert_called_once_with("http://ollama.test:11434/api/tags", timeout=3.0)

    def test_unavailable_when_server_down(self, provider: NomicEmbeddingProvider) -> None:
        with patch(
            "noteflow.providers.embedding.nomic_embedding_provider.httpx.get",
            side_effect=httpx.ConnectError("refused"),
        ):
            assert not provider.is_available()

    def test_metadata(self, provider: NomicEmbeddingProvider) -> None:
        assert provider.get_dimension() == 768
        assert provider.get_provider_name() == "nomic-embed-text"
