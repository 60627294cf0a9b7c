"""Vector store provider implementations.

Two implementations of IVectorStoreProvider:
    - ChromaDBProvider    : remote ChromaDB server (chromadb.HttpClient),
      cosine-similarity search over pre-computed embeddings.
    - InMemoryVectorStore : process-local fallback used by the VectorStore
      facade when the ChromaDB heartbeat probe fails.
"""

from noteflow.providers.vector_store.chromadb_provider import ChromaDBProvider
from noteflow.providers.vector_store.memory_vector_store import InMemoryVectorStore

__all__ = ["ChromaDBProvider", "InMemoryVectorStore"]
