"""Vector-store data models for the NoteFlow retrieval layer.

RAG (retrieval-augmented generation) in NoteFlow:

    1. INGESTION: an uploaded document is extracted and split into chunks.
    2. EMBEDDING: each chunk is turned into a 768-dim vector.
    3. STORAGE: chunks + vectors are stored as :class:`VectorRecord` rows,
       in ChromaDB when reachable, otherwise in process memory.
    4. RETRIEVAL: the question-answering layer calls ``VectorStore.search``
       and receives :class:`SearchResult` rows ranked by cosine similarity.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from noteflow.models.document import ProcessedChunk


class VectorRecord(BaseModel):
    """One stored chunk of one document."""

    model_config = ConfigDict(frozen=True)

    document_id: str
    chunk_index: int = Field(ge=0)
    # Duplicated from the chunk so retrieval never needs the document record.
    content: str
    embedding: list[float] | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_chunk(cls, document_id: str, chunk: ProcessedChunk) -> VectorRecord:
        metadata = chunk.metadata.model_dump(mode="json")
        metadata["document_id"] = document_id
        metadata["keywords"] = [kw.word for kw in chunk.keywords]
        metadata["summary"] = chunk.summary
        return cls(
            document_id=document_id,
            chunk_index=chunk.metadata.chunk_index,
            content=chunk.content,
            embedding=chunk.embedding,
            metadata=metadata,
        )


class SearchResult(BaseModel):
    """A stored chunk returned by a similarity search, with its score."""

    model_config = ConfigDict(frozen=True)

    document_id: str
    chunk_index: int = Field(ge=0)
    content: str
    score: float = Field(
        default=0.0,
        ge=-1.0,
        le=1.0,
        description="Cosine similarity between the query and this chunk.",
    )
    metadata: dict[str, Any] = Field(default_factory=dict)


class VectorStoreStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_chunks: int = Field(default=0, ge=0)
    documents: int = Field(default=0, ge=0)
    backend: str = ""
