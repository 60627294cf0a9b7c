"""Dependency assembly for the NoteFlow ingestion core.

NoteFlow is a library: the host application (HTTP layer, job runner, test
harness) calls these factories once at startup and injects the resulting
services where it needs them.  Every concrete provider is chosen here from
:class:`~noteflow.config.settings.Settings`; nothing else in the package
reads configuration.

Typical use::

    components = build_components()
    processor = components["document_processor"]
    store = components["vector_store"]

    document = await processor.ingest(document)
    if document.processing_status is ProcessingStatus.COMPLETED:
        await store.store_chunks(document.id, document.chunks)
"""

from __future__ import annotations

from typing import Any

import structlog

from noteflow.config.settings import Settings
from noteflow.interfaces.embedding_provider import IEmbeddingProvider
from noteflow.interfaces.llm_provider import ILLMProvider
from noteflow.providers.credentials import CredentialPool
from noteflow.providers.embedding.gemini_embedding_provider import GeminiEmbeddingProvider
from noteflow.providers.embedding.nomic_embedding_provider import NomicEmbeddingProvider
from noteflow.providers.llm.gemini_provider import GeminiLLMProvider
from noteflow.providers.ocr.tesseract_provider import TesseractOCRProvider
from noteflow.providers.vector_store.chromadb_provider import ChromaDBProvider
from noteflow.services.embedding_chain import EmbeddingChain
from noteflow.services.ingestion.chunker import TextChunker
from noteflow.services.ingestion.document_processor import DocumentProcessor
from noteflow.services.ingestion.extractors.text_extractor import TextExtractor
from noteflow.services.ingestion.metadata_analyzer import MetadataAnalyzer
from noteflow.services.vector_store_service import VectorStore, VectorStoreState
from noteflow.utils.image_preprocessor import ImagePreprocessor
from noteflow.utils.logging import configure_logging, get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Provider selection
# ---------------------------------------------------------------------------


def build_llm_provider(app_settings: Settings) -> ILLMProvider | None:
    """Return the Gemini LLM provider, or ``None`` when no key is configured.

    Without an LLM the metadata analyzer runs on its local heuristics.
    """
    keys = app_settings.get_gemini_api_keys()
    if not keys:
        return None
    return GeminiLLMProvider(settings=app_settings, credentials=CredentialPool(keys))


def build_embedding_chain(app_settings: Settings) -> EmbeddingChain:
    """Build the embedding chain in priority order.

    Priority: Gemini (if any API key is set) -> Nomic/Ollama (if
    ``OLLAMA_BASE_URL`` is set).  An empty chain is valid; every chunk is
    then stored without a vector.
    """
    providers: list[IEmbeddingProvider] = []

    keys = app_settings.get_gemini_api_keys()
    if keys:
        providers.append(
            GeminiEmbeddingProvider(settings=app_settings, credentials=CredentialPool(keys))
        )
    if app_settings.ollama_base_url:
        providers.append(NomicEmbeddingProvider(settings=app_settings))

    if not providers:
        _logger.warning(
            "no_embedding_provider_configured",
            msg="Chunks will be stored without embeddings.",
        )
    return EmbeddingChain(providers)


def build_vector_store(
    app_settings: Settings,
    embedding_chain: EmbeddingChain | None = None,
    state: VectorStoreState | None = None,
) -> VectorStore:
    """Build the vector store facade over ChromaDB with an in-memory fallback.

    No network traffic happens here; the facade probes ChromaDB on first use.
    """
    external = ChromaDBProvider(
        host=app_settings.chroma_host,
        port=app_settings.chroma_port,
        collection_name=app_settings.chroma_collection,
    )
    heartbeat_url = (
        f"http://{app_settings.chroma_host}:{app_settings.chroma_port}"
        f"{app_settings.chroma_heartbeat_path}"
    )
    return VectorStore(
        external=external,
        heartbeat_url=heartbeat_url,
        embedding_chain=embedding_chain,
        probe_timeout=app_settings.vector_probe_timeout,
        state=state,
    )


def build_document_processor(
    app_settings: Settings,
    embedding_chain: EmbeddingChain | None = None,
    llm: ILLMProvider | None = None,
) -> DocumentProcessor:
    """Wire extractor, chunker, analyzer and embedding chain together."""
    extractor = TextExtractor.with_defaults(
        ocr_provider=TesseractOCRProvider(),
        preprocessor=ImagePreprocessor(),
    )
    chunker = TextChunker(
        chunk_size=app_settings.chunk_size,
        overlap=app_settings.chunk_overlap,
    )
    analyzer = MetadataAnalyzer(
        llm=llm if llm is not None else build_llm_provider(app_settings),
        max_concurrent=app_settings.llm_max_concurrent,
    )
    return DocumentProcessor(
        extractor=extractor,
        chunker=chunker,
        analyzer=analyzer,
        embedding_chain=embedding_chain or build_embedding_chain(app_settings),
    )


# ---------------------------------------------------------------------------
# Full assembly
# ---------------------------------------------------------------------------


def build_components(custom_settings: Settings | None = None) -> dict[str, Any]:
    """Configure logging and construct every service with its dependencies.

    Returns
    -------
    dict
        Service instances keyed by role name: ``settings``, ``llm``,
        ``embedding_chain``, ``vector_store``, ``document_processor``.
    """
    s = custom_settings or Settings()
    configure_logging(log_level=s.log_level, json_output=(s.app_env == "production"))

    llm = build_llm_provider(s)
    embedding_chain = build_embedding_chain(s)
    vector_store = build_vector_store(s, embedding_chain=embedding_chain)
    document_processor = build_document_processor(s, embedding_chain=embedding_chain, llm=llm)

    _logger.info(
        "components_built",
        llm=llm.get_provider_name() if llm else None,
        embedding_providers=[p.get_provider_name() for p in embedding_chain.providers],
        chunk_size=s.chunk_size,
        chunk_overlap=s.chunk_overlap,
    )
    return {
        "settings": s,
        "llm": llm,
        "embedding_chain": embedding_chain,
        "vector_store": vector_store,
        "document_processor": document_processor,
    }
