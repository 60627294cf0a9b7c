"""Vector store facade with an in-process fallback.

The retrieval layer talks only to :class:`VectorStore`.  On first use the
facade probes the ChromaDB heartbeat endpoint with a short timeout:

* reachable   -> the ChromaDB collection is opened and used for the rest
  of the process lifetime (mode ``external``);
* unreachable -> one :class:`~noteflow.utils.errors.VectorStoreUnreachableError`
  warning is logged and every operation goes to the
  :class:`~noteflow.providers.vector_store.memory_vector_store.InMemoryVectorStore`
  instead (mode ``fallback``).  There is no reconnection; the switch is
  permanent for the process.

The mode lives in a :class:`VectorStoreState` object that is injected, so
tests (or a host application) can share or inspect it.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from enum import Enum

import httpx
import structlog

from noteflow.interfaces.vector_store_provider import IVectorStoreProvider
from noteflow.models.document import ProcessedChunk
from noteflow.models.rag import SearchResult, VectorStoreStats
from noteflow.providers.vector_store.chromadb_provider import ChromaDBProvider
from noteflow.providers.vector_store.memory_vector_store import InMemoryVectorStore
from noteflow.services.embedding_chain import EmbeddingChain
from noteflow.utils.errors import VectorStoreUnreachableError

logger = structlog.get_logger(logger_name=__name__)


class VectorStoreMode(str, Enum):
    UNINITIALIZED = "uninitialized"
    EXTERNAL = "external"
    FALLBACK = "fallback"


class VectorStoreState:
    """Which backend the facade is bound to, and why."""

    def __init__(self) -> None:
        self.mode = VectorStoreMode.UNINITIALIZED
        self.fallback_reason: str | None = None

    @property
    def connected(self) -> bool:
        return self.mode is not VectorStoreMode.UNINITIALIZED

    def use_external(self) -> None:
        self.mode = VectorStoreMode.EXTERNAL
        self.fallback_reason = None

    def use_fallback(self, reason: str) -> None:
        self.mode = VectorStoreMode.FALLBACK
        self.fallback_reason = reason


class VectorStore:
    """Stores and searches chunk embeddings, ChromaDB first, memory second.

    Parameters
    ----------
    external:
        The ChromaDB backend, or ``None`` to run in memory only.
    heartbeat_url:
        Full URL of the ChromaDB heartbeat endpoint used by the probe.
    embedding_chain:
        Used to embed text queries passed to :meth:`search`.
    fallback:
        In-memory backend; a fresh one is created when omitted.
    probe_timeout:
        Seconds allowed for the heartbeat probe.
    state:
        Shared mode flag; a fresh one is created when omitted.
    """

    def __init__(
        self,
        external: ChromaDBProvider | None,
        heartbeat_url: str = "",
        embedding_chain: EmbeddingChain | None = None,
        fallback: InMemoryVectorStore | None = None,
        probe_timeout: float = 3.0,
        state: VectorStoreState | None = None,
    ) -> None:
        self._external = external
        self._heartbeat_url = heartbeat_url
        self._embedding_chain = embedding_chain
        self._fallback = fallback or InMemoryVectorStore()
        self._probe_timeout = probe_timeout
        self._state = state or VectorStoreState()
        self._connect_lock = asyncio.Lock()

    @property
    def state(self) -> VectorStoreState:
        return self._state

    @property
    def mode(self) -> VectorStoreMode:
        return self._state.mode

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def connect(self) -> VectorStoreMode:
        """Probe ChromaDB once and bind to it or to the in-memory store.

        Safe to call repeatedly and concurrently; only the first call
        probes.
        """
        async with self._connect_lock:
            if self._state.connected:
                return self._state.mode

            if self._external is None:
                self._state.use_fallback("no external vector store configured")
                logger.info("vector_store_memory_only")
                return self._state.mode

            try:
                async with httpx.AsyncClient(timeout=self._probe_timeout) as client:
                    response = await client.get(self._heartbeat_url)
                    response.raise_for_status()
                await asyncio.to_thread(self._external.open)
            except Exception as exc:  # noqa: BLE001
                error = VectorStoreUnreachableError(
                    message=f"ChromaDB unreachable at {self._heartbeat_url}: {exc}",
                    provider_name=self._external.get_provider_name(),
                )
                self._state.use_fallback(str(error))
                logger.warning(
                    "vector_store_unreachable",
                    error=str(error),
                    msg="Using in-memory vector store for this process.",
                )
                return self._state.mode

            self._state.use_external()
            logger.info("vector_store_connected", backend=self._external.get_provider_name())
            return self._state.mode

    async def store_chunks(self, document_id: str, chunks: list[ProcessedChunk]) -> int:
        """Store a document's chunks, replacing any records stored earlier for it."""
        backend = await self._backend()
        return await backend.store_chunks(document_id, chunks)

    async def search(
        self,
        query: str | Sequence[float],
        document_id: str | None = None,
        limit: int = 5,
    ) -> list[SearchResult]:
        """Rank stored chunks by similarity to *query*.

        *query* is either raw text, embedded through the embedding chain,
        or an already-computed vector.  A text query that cannot be embedded
        returns no results.
        """
        if isinstance(query, str):
            vector = await self._embed_query(query)
            if vector is None:
                return []
        else:
            vector = list(query)

        backend = await self._backend()
        results = await backend.search(vector, document_id=document_id, limit=limit)
        logger.debug(
            "vector_store_search",
            backend=backend.get_provider_name(),
            document_id=document_id,
            results=len(results),
        )
        return results

    async def delete_chunks(self, document_id: str) -> int:
        backend = await self._backend()
        return await backend.delete_chunks(document_id)

    async def get_stats(self) -> VectorStoreStats:
        backend = await self._backend()
        return await backend.get_stats()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _backend(self) -> IVectorStoreProvider:
        mode = await self.connect()
        if mode is VectorStoreMode.EXTERNAL and self._external is not None:
            return self._external
        return self._fallback

    async def _embed_query(self, query: str) -> list[float] | None:
        if self._embedding_chain is None:
            logger.warning("vector_store_text_query_without_embedder")
            return None
        outcome = await self._embedding_chain.embed(query)
        if outcome.value is None:
            logger.warning(
                "query_embedding_degraded",
                reason=outcome.degraded_reason,
                msg="Returning no results.",
            )
            return None
        return outcome.value
