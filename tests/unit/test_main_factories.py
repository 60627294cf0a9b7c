"""Unit tests for the dependency-assembly factories in noteflow.main."""

from __future__ import annotations

from unittest.mock import patch

from noteflow.config.settings import Settings
from noteflow.main import (
    build_components,
    build_document_processor,
    build_embedding_chain,
    build_llm_provider,
    build_vector_store,
)
from noteflow.providers.embedding.gemini_embedding_provider import GeminiEmbeddingProvider
from noteflow.providers.embedding.nomic_embedding_provider import NomicEmbeddingProvider
from noteflow.providers.llm.gemini_provider import GeminiLLMProvider
from noteflow.services.ingestion.document_processor import DocumentProcessor
from noteflow.services.vector_store_service import VectorStore, VectorStoreMode


class TestProviderSelection:
    def test_llm_built_when_key_present(self, settings: Settings) -> None:
        assert isinstance(build_llm_provider(settings), GeminiLLMProvider)

    def test_no_llm_without_keys(self, bare_settings: Settings) -> None:
        assert build_llm_provider(bare_settings) is None

    def test_embedding_chain_order(self, settings: Settings) -> None:
        settings = settings.model_copy(update={"ollama_base_url": "http://localhost:11434/"})

        chain = build_embedding_chain(settings)

        assert [type(p) for p in chain.providers] == [GeminiEmbeddingProvider, NomicEmbeddingProvider]
        assert chain.primary_name == "gemini-text-embedding-004"
        assert chain.dimension == 768

    def test_embedding_chain_empty_without_config(self, bare_settings: Settings) -> None:
        assert build_embedding_chain(bare_settings).providers == []


class TestAssembly:
    def test_vector_store_not_connected_at_build(self, settings: Settings) -> None:
        store = build_vector_store(settings)
        assert isinstance(store, VectorStore)
        assert store.mode is VectorStoreMode.UNINITIALIZED

    def test_document_processor(self, bare_settings: Settings) -> None:
        assert isinstance(build_document_processor(bare_settings), DocumentProcessor)

    def test_build_components(self, settings: Settings) -> None:
        with patch("noteflow.main.configure_logging") as mock_logging:
            components = build_components(settings)

        mock_logging.assert_called_once_with(log_level="INFO", json_output=False)
        assert set(components) == {
            "settings",
            "llm",
            "embedding_chain",
            "vector_store",
            "document_processor",
        }
        assert components["settings"] is settings
        assert isinstance(components["llm"], GeminiLLMProvider)
