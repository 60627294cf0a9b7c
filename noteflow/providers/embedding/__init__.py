"""Embedding provider implementations.

Embeddings convert text into numeric vectors that capture semantic meaning.
These vectors are stored in ChromaDB (or the in-memory fallback store) and
used for similarity search.

Two implementations of IEmbeddingProvider, in chain order:
    1. GeminiEmbeddingProvider: text-embedding-004 (768 dims), rotates
       through up to four API keys on rate limits.
    2. NomicEmbeddingProvider : nomic-embed-text via Ollama (768 dims).
       Free and local, used only when OLLAMA_BASE_URL is set.
"""

from noteflow.providers.embedding.gemini_embedding_provider import GeminiEmbeddingProvider
from noteflow.providers.embedding.nomic_embedding_provider import NomicEmbeddingProvider

__all__ = ["GeminiEmbeddingProvider", "NomicEmbeddingProvider"]
