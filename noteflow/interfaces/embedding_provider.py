"""Abstract base class for text-embedding service providers.

Defines the contract for generating embedding vectors from text.
Implementations wrap Gemini ``text-embedding-004`` (through its
OpenAI-compatible endpoint) or Nomic ``nomic-embed-text`` served locally by
Ollama.  The :class:`~noteflow.services.embedding_chain.EmbeddingChain`
tries providers in order, so they must be interchangeable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementations:
#   GeminiEmbeddingProvider : text-embedding-004, rotates through API keys
#   NomicEmbeddingProvider  : nomic-embed-text via Ollama (local)
# Located in: noteflow/providers/embedding/
class IEmbeddingProvider(ABC):
    """Contract for text-embedding services used by the ingestion pipeline.

    Embeddings are consumed by
    :class:`~noteflow.interfaces.vector_store_provider.IVectorStoreProvider`
    for indexing and query-time similarity search.
    """

    @abstractmethod
    async def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for a batch of texts.

        Parameters
        ----------
        texts:
            One or more text strings to embed.

        Returns
        -------
        list[list[float]]
            Embedding vectors corresponding positionally to *texts*.  Each
            inner list has length equal to :meth:`get_dimension`.

        Raises
        ------
        noteflow.utils.errors.EmbeddingProviderExhaustedError
            If every credential the provider holds is rate limited.
        noteflow.utils.errors.RAGError
            If the embedding API call fails for any other reason.
        """

    @abstractmethod
    async def embed_single(self, text: str) -> list[float]:
        """Generate an embedding vector for a single text string.

        Convenience wrapper around :meth:`embed` for one chunk or one
        search query.
        """

    @abstractmethod
    def get_dimension(self) -> int:
        """Return the dimensionality of the embedding vectors.

        Must match the dimension of vectors already held by the vector
        store.  Both bundled providers return ``768``.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this embedding provider.

        Example return values: ``"gemini-text-embedding-004"``,
        ``"nomic-embed-text"``.
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider is configured.

        Implementations check that credentials or a base URL are present
        without generating an actual embedding.
        """
