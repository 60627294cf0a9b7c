"""ChromaDB vector store provider adapter.

Wraps a remote ``chromadb.HttpClient`` collection to implement
:class:`IVectorStoreProvider`.  The collection uses cosine distance, so a
result's similarity is ``1 - distance``.

Record ids are ``"{document_id}:{chunk_index}"``.  ChromaDB metadata values
must be scalars, so list fields (keywords) are stored comma-separated and
``None`` values are dropped.  Chunks without an embedding cannot be indexed
and are skipped.

The chromadb client is synchronous; every call runs in a worker thread so
the event loop is never blocked on the network.
"""

from __future__ import annotations

import asyncio
from typing import Any

import chromadb
import structlog

from noteflow.interfaces.vector_store_provider import IVectorStoreProvider
from noteflow.models.document import ProcessedChunk
from noteflow.models.rag import SearchResult, VectorRecord, VectorStoreStats
from noteflow.utils.errors import RAGError

logger = structlog.get_logger(logger_name=__name__)


class _NoopEmbeddingFunction(chromadb.EmbeddingFunction[list[str]]):
    """Embedding function that is never called.

    NoteFlow always passes pre-computed embeddings, so ChromaDB must not
    load its default ONNX model for the collection.
    """

    def __call__(self, input: list[str]) -> list[list[float]]:
        raise NotImplementedError(
            "NoteFlow uses pre-computed embeddings; "
            "ChromaDB's built-in embedding should never be called."
        )

    def name(self) -> str:
        return "noop_precomputed"


class ChromaDBProvider(IVectorStoreProvider):
    """Vector store backed by a remote ChromaDB server."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 8000,
        collection_name: str = "noteflow_embeddings",
    ) -> None:
        self._host = host
        self._port = port
        self._collection_name = collection_name
        self._client: Any = None
        self._collection: Any = None

    def open(self) -> None:
        """Connect to the server and get (or create) the collection.

        Blocking; the :class:`VectorStore` facade calls it from a worker
        thread after its heartbeat probe succeeds.
        """
        self._client = chromadb.HttpClient(
            host=self._host,
            port=self._port,
            settings=chromadb.config.Settings(anonymized_telemetry=False),
        )
        self._collection = self._client.get_or_create_collection(
            name=self._collection_name,
            metadata={"hnsw:space": "cosine"},
            embedding_function=_NoopEmbeddingFunction(),
        )
        logger.info(
            "chromadb_collection_opened",
            host=self._host,
            port=self._port,
            collection=self._collection_name,
        )

    # ------------------------------------------------------------------
    # IVectorStoreProvider implementation
    # ------------------------------------------------------------------

    async def store_chunks(
        self, document_id: str, chunks: list[ProcessedChunk]
    ) -> int:
        collection = self._require_collection()
        records = [VectorRecord.from_chunk(document_id, chunk) for chunk in chunks]
        indexable = [r for r in records if r.embedding is not None]
        skipped = len(records) - len(indexable)

        try:
            await asyncio.to_thread(collection.delete, where={"document_id": document_id})
            if indexable:
                await asyncio.to_thread(
                    collection.upsert,
                    ids=[self._record_id(r.document_id, r.chunk_index) for r in indexable],
                    embeddings=[r.embedding for r in indexable],
                    documents=[r.content for r in indexable],
                    metadatas=[self._flatten_metadata(r.metadata) for r in indexable],
                )
        except Exception as exc:
            raise RAGError(
                message=f"ChromaDB store_chunks failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if skipped:
            logger.warning(
                "chromadb_skipped_unembedded_chunks",
                document_id=document_id,
                skipped=skipped,
            )
        logger.info(
            "chromadb_store_chunks",
            document_id=document_id,
            count=len(indexable),
        )
        return len(indexable)

    async def search(
        self,
        query_vector: list[float],
        document_id: str | None = None,
        limit: int = 5,
    ) -> list[SearchResult]:
        collection = self._require_collection()
        if limit <= 0 or not query_vector:
            return []

        try:
            total = await asyncio.to_thread(collection.count)
            if total == 0:
                return []

            kwargs: dict[str, Any] = {
                "query_embeddings": [query_vector],
                "n_results": min(limit, total),
                "include": ["documents", "metadatas", "distances"],
            }
            if document_id is not None:
                kwargs["where"] = {"document_id": document_id}

            results = await asyncio.to_thread(collection.query, **kwargs)
        except Exception as exc:
            raise RAGError(
                message=f"ChromaDB query failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not results.get("documents") or not results["documents"][0]:
            return []

        documents = results["documents"][0]
        metadatas = results["metadatas"][0] if results.get("metadatas") else [{}] * len(documents)
        distances = results["distances"][0] if results.get("distances") else [1.0] * len(documents)

        hits: list[SearchResult] = []
        for content, meta, distance in zip(documents, metadatas, distances, strict=True):
            meta = dict(meta or {})
            similarity = max(-1.0, min(1.0, 1.0 - float(distance)))
            hits.append(
                SearchResult(
                    document_id=str(meta.get("document_id", "")),
                    chunk_index=int(meta.get("chunk_index", 0)),
                    content=content or "",
                    score=similarity,
                    metadata=meta,
                )
            )
        hits.sort(key=lambda hit: hit.score, reverse=True)
        return hits

    async def delete_chunks(self, document_id: str) -> int:
        collection = self._require_collection()
        try:
            existing = await asyncio.to_thread(
                collection.get, where={"document_id": document_id}
            )
            count = len(existing["ids"]) if existing.get("ids") else 0
            if count > 0:
                await asyncio.to_thread(collection.delete, where={"document_id": document_id})
        except Exception as exc:
            raise RAGError(
                message=f"ChromaDB delete_chunks failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        logger.info("chromadb_delete_chunks", document_id=document_id, deleted_count=count)
        return count

    async def get_stats(self) -> VectorStoreStats:
        collection = self._require_collection()
        try:
            total = await asyncio.to_thread(collection.count)
            page = await asyncio.to_thread(collection.get, include=["metadatas"])
        except Exception as exc:
            raise RAGError(
                message=f"ChromaDB get_stats failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        document_ids = {
            m.get("document_id") for m in (page.get("metadatas") or []) if m
        }
        document_ids.discard(None)
        return VectorStoreStats(
            total_chunks=total,
            documents=len(document_ids),
            backend=self.get_provider_name(),
        )

    def get_provider_name(self) -> str:
        return "chromadb"

    def is_available(self) -> bool:
        return self._collection is not None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_collection(self) -> Any:
        if self._collection is None:
            raise RAGError(
                message="ChromaDB collection is not open",
                provider_name=self.get_provider_name(),
            )
        return self._collection

    @staticmethod
    def _record_id(document_id: str, chunk_index: int) -> str:
        return f"{document_id}:{chunk_index}"

    @staticmethod
    def _flatten_metadata(metadata: dict[str, Any]) -> dict[str, str | int | float | bool]:
        """Convert record metadata to ChromaDB-compatible scalar values."""
        flat: dict[str, str | int | float | bool] = {}
        for key, value in metadata.items():
            if value is None:
                continue
            if isinstance(value, (list, tuple, set)):
                flat[key] = ",".join(str(v) for v in value)
            elif isinstance(value, (str, int, float, bool)):
                flat[key] = value
            else:
                flat[key] = str(value)
        return flat
