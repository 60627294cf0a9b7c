"""Document, chunk, and metadata models for the ingestion pipeline.

Value objects produced by the pipeline (chunks, keywords, readability,
metadata, results) are frozen Pydantic v2 models.  The :class:`Document`
record is the one mutable model: it belongs to the persistence layer and the
orchestrator writes extraction results and processing status back onto it.

Lifecycle of a :class:`Document`::

    uploaded --> processing --> completed
                           \\-> failed   (processing_error recorded)
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from pathlib import PurePath

from pydantic import BaseModel, ConfigDict, Field

from noteflow.utils.errors import UnsupportedFormatError

# MIME types accepted by the upload layer, mapped to extractor kinds.
_MIME_TYPES: dict[str, str] = {
    "application/pdf": "pdf",
    "text/plain": "txt",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "image/jpeg": "image",
    "image/png": "image",
    "image/gif": "image",
}

_EXTENSIONS: dict[str, str] = {
    ".pdf": "pdf",
    ".txt": "txt",
    ".docx": "docx",
    ".jpg": "image",
    ".jpeg": "image",
    ".png": "image",
    ".gif": "image",
}


class FileType(str, Enum):
    """Extractor kinds the pipeline can read."""

    PDF = "pdf"
    TXT = "txt"
    DOCX = "docx"
    IMAGE = "image"

    @classmethod
    def parse(cls, value: FileType | str) -> FileType:
        """Coerce *value* to a FileType, raising UnsupportedFormatError otherwise."""
        if isinstance(value, FileType):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnsupportedFormatError(f"Unsupported file type: {value}") from None

    @classmethod
    def from_mime(cls, mime_type: str) -> FileType:
        kind = _MIME_TYPES.get(mime_type.strip().lower())
        if kind is None:
            raise UnsupportedFormatError(f"Unsupported MIME type: {mime_type}")
        return cls(kind)

    @classmethod
    def from_extension(cls, filename: str) -> FileType:
        kind = _EXTENSIONS.get(PurePath(filename).suffix.lower())
        if kind is None:
            raise UnsupportedFormatError(f"Unsupported file extension: {filename}")
        return cls(kind)


class ProcessingStatus(str, Enum):
    UPLOADED = "uploaded"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class ProcessingMethod(str, Enum):
    """Which embedding path produced a chunk (or a whole document)."""

    PRIMARY = "primary"
    DEGRADED = "degraded"


# ---------------------------------------------------------------------------
# Chunker output
# ---------------------------------------------------------------------------
class ChunkSpan(BaseModel):
    """A contiguous slice of the extracted text, as produced by TextChunker.

    ``content`` always equals ``text[start:end]`` of the chunked text.
    """

    model_config = ConfigDict(frozen=True)

    content: str
    start: int = Field(ge=0)
    end: int = Field(ge=0)
    length: int = Field(ge=0)
    sentence_count: int = Field(default=0, ge=0)


# ---------------------------------------------------------------------------
# Analyzer output
# ---------------------------------------------------------------------------
class Keyword(BaseModel):
    model_config = ConfigDict(frozen=True)

    word: str
    count: int = Field(default=1, ge=0)
    # "llm" when the rich path produced it, "frequency" for the local count.
    source: str = "frequency"


class Readability(BaseModel):
    """Flesch Reading Ease score and the averages it was computed from."""

    model_config = ConfigDict(frozen=True)

    score: float
    level: str
    avg_words_per_sentence: float = 0.0
    avg_syllables_per_word: float = 0.0


class DocumentAnalysis(BaseModel):
    """Whole-text derivations produced by the MetadataAnalyzer."""

    model_config = ConfigDict(frozen=True)

    subject: str = "General"
    keywords: list[Keyword] = Field(default_factory=list)
    summary: str = ""
    language: str = "unknown"
    readability: Readability
    degraded_reasons: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Orchestrator output
# ---------------------------------------------------------------------------
class ChunkMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    chunk_index: int = Field(ge=0)
    start: int = Field(ge=0)
    end: int = Field(ge=0)
    length: int = Field(ge=0)
    sentence_count: int = Field(default=0, ge=0)
    processing_method: ProcessingMethod = ProcessingMethod.DEGRADED
    embedding_provider: str | None = None


class ProcessedChunk(BaseModel):
    """A chunk ready for storage: text, optional vector, and local analysis.

    ``embedding`` is ``None`` when every embedding provider failed; the chunk
    is still kept and its ``processing_method`` is ``degraded``.
    """

    model_config = ConfigDict(frozen=True)

    content: str
    embedding: list[float] | None = None
    keywords: list[Keyword] = Field(default_factory=list)
    summary: str = ""
    metadata: ChunkMetadata


class DocumentMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    word_count: int = Field(default=0, ge=0)
    chunk_count: int = Field(default=0, ge=0)
    language: str = "unknown"
    subject: str = "General"
    keywords: list[Keyword] = Field(default_factory=list)
    summary: str = ""
    readability: Readability
    processed_at: datetime
    processing_method: ProcessingMethod = ProcessingMethod.DEGRADED
    degraded_reasons: list[str] = Field(default_factory=list)


class ProcessingResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    chunks: list[ProcessedChunk] = Field(default_factory=list)
    metadata: DocumentMetadata


# ---------------------------------------------------------------------------
# Document record (owned by the persistence layer)
# ---------------------------------------------------------------------------
class Document(BaseModel):
    """The caller-owned record the orchestrator reads from and writes back to."""

    model_config = ConfigDict(validate_assignment=True)

    id: str
    filename: str = ""
    file_type: FileType
    file_path: str
    extracted_text: str = ""
    chunks: list[ProcessedChunk] = Field(default_factory=list)
    metadata: DocumentMetadata | None = None
    processing_status: ProcessingStatus = ProcessingStatus.UPLOADED
    processing_error: str | None = None
