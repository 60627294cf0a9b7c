"""In-process vector store used when ChromaDB is unreachable.

Records live in a ``document_id -> list[VectorRecord]`` map for the
lifetime of the process; nothing is persisted.  Search is a linear scan
scored with :func:`~noteflow.utils.similarity.cosine_similarity`.

Chunks stored without an embedding are kept (so stats and deletes see
them) but never match a search.
"""

from __future__ import annotations

import structlog

from noteflow.interfaces.vector_store_provider import IVectorStoreProvider
from noteflow.models.document import ProcessedChunk
from noteflow.models.rag import SearchResult, VectorRecord, VectorStoreStats
from noteflow.utils.similarity import cosine_similarity

logger = structlog.get_logger(logger_name=__name__)


class InMemoryVectorStore(IVectorStoreProvider):
    """Dictionary-backed vector store with brute-force cosine search."""

    def __init__(self) -> None:
        self._records: dict[str, list[VectorRecord]] = {}

    async def store_chunks(
        self, document_id: str, chunks: list[ProcessedChunk]
    ) -> int:
        records = [VectorRecord.from_chunk(document_id, chunk) for chunk in chunks]
        # Replaces any earlier records for the document.
        self._records[document_id] = records
        logger.info("memory_store_chunks", document_id=document_id, count=len(records))
        return len(records)

    async def search(
        self,
        query_vector: list[float],
        document_id: str | None = None,
        limit: int = 5,
    ) -> list[SearchResult]:
        if limit <= 0 or not query_vector:
            return []

        if document_id is not None:
            candidates = self._records.get(document_id, [])
        else:
            candidates = [r for records in self._records.values() for r in records]

        scored = [
            (cosine_similarity(query_vector, record.embedding), record)
            for record in candidates
            if record.embedding
        ]
        # sorted() is stable, so equal scores keep insertion order.
        scored = sorted(scored, key=lambda pair: pair[0], reverse=True)[:limit]

        return [
            SearchResult(
                document_id=record.document_id,
                chunk_index=record.chunk_index,
                content=record.content,
                score=score,
                metadata=dict(record.metadata),
            )
            for score, record in scored
        ]

    async def delete_chunks(self, document_id: str) -> int:
        removed = self._records.pop(document_id, [])
        logger.info("memory_delete_chunks", document_id=document_id, deleted_count=len(removed))
        return len(removed)

    async def get_stats(self) -> VectorStoreStats:
        return VectorStoreStats(
            total_chunks=sum(len(records) for records in self._records.values()),
            documents=sum(1 for records in self._records.values() if records),
            backend=self.get_provider_name(),
        )

    def get_provider_name(self) -> str:
        return "memory"

    def is_available(self) -> bool:
        return True
