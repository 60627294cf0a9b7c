"""NoteFlow domain models -- re-exports all public model classes.

The models are organized across three submodules:
    - document.py -- Document record, file types, chunks, and metadata
    - outcome.py  -- Outcome wrapper for degradable calls
    - rag.py      -- Vector-store records and search results
"""

from __future__ import annotations

from noteflow.models.document import (
    ChunkMetadata,
    ChunkSpan,
    Document,
    DocumentAnalysis,
    DocumentMetadata,
    FileType,
    Keyword,
    ProcessedChunk,
    ProcessingMethod,
    ProcessingResult,
    ProcessingStatus,
    Readability,
)
from noteflow.models.outcome import Outcome
from noteflow.models.rag import SearchResult, VectorRecord, VectorStoreStats

__all__ = [
    "ChunkMetadata",
    "ChunkSpan",
    "Document",
    "DocumentAnalysis",
    "DocumentMetadata",
    "FileType",
    "Keyword",
    "Outcome",
    "ProcessedChunk",
    "ProcessingMethod",
    "ProcessingResult",
    "ProcessingStatus",
    "Readability",
    "SearchResult",
    "VectorRecord",
    "VectorStoreStats",
]
