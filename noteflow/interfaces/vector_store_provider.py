"""Abstract base class for vector-store service providers.

Defines the contract for storing, querying, and deleting embedded document
chunks.  Two backends ship with NoteFlow: a remote ChromaDB collection and
an in-process store used when ChromaDB cannot be reached.  The
:class:`~noteflow.services.vector_store_service.VectorStore` facade picks
between them, so the retrieval layer never depends on a backend directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from noteflow.models.document import ProcessedChunk
from noteflow.models.rag import SearchResult, VectorStoreStats


# Concrete implementations: ChromaDBProvider, InMemoryVectorStore
# Located in: noteflow/providers/vector_store/
class IVectorStoreProvider(ABC):
    """Contract for vector-store backends.

    All query and mutation methods are async to support network-backed
    stores without blocking the event loop.  Records are keyed by
    ``(document_id, chunk_index)``.
    """

    @abstractmethod
    async def store_chunks(
        self, document_id: str, chunks: list[ProcessedChunk]
    ) -> int:
        """Persist the chunks of one document.

        Storing a document again replaces its previous records rather than
        adding duplicates.

        Returns
        -------
        int
            The number of records written.

        Raises
        ------
        noteflow.utils.errors.RAGError
            If the store operation fails.
        """

    @abstractmethod
    async def search(
        self,
        query_vector: list[float],
        document_id: str | None = None,
        limit: int = 5,
    ) -> list[SearchResult]:
        """Return up to *limit* records ranked by cosine similarity.

        Parameters
        ----------
        query_vector:
            The embedded query.
        document_id:
            When given, only records of that document are considered.
        limit:
            Maximum number of results.

        Returns
        -------
        list[SearchResult]
            Zero or more results ordered by descending ``score``.
        """

    @abstractmethod
    async def delete_chunks(self, document_id: str) -> int:
        """Delete every record of *document_id*.

        Returns the number of records removed; ``0`` when there were none.
        """

    @abstractmethod
    async def get_stats(self) -> VectorStoreStats:
        """Return record and document counts for the store."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"chromadb"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the backend has been opened and can serve requests."""
