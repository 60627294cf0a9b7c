"""Orchestrator for the document ingestion pipeline.

Pipeline stages: **extract -> chunk -> analyze + embed -> assemble**.

The :class:`DocumentProcessor` coordinates four collaborators (text
extractor, chunker, metadata analyzer, embedding chain) without any of them
knowing about each other.  All of them are injected via the constructor.

Failure policy:

* Document-level errors (unsupported format, empty content, parser
  failure) abort the run.  :meth:`DocumentProcessor.process` raises them;
  :meth:`DocumentProcessor.ingest` records them on the document record.
* Everything below document level degrades instead of failing: a chunk
  whose embedding failed is kept with ``embedding=None``; an analyzer
  derivation that lost its LLM falls back to the local heuristic.

Storing the resulting chunks in the vector store is left to the caller.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import TYPE_CHECKING

import structlog

from noteflow.models.document import (
    ChunkMetadata,
    ChunkSpan,
    Document,
    DocumentMetadata,
    FileType,
    ProcessedChunk,
    ProcessingMethod,
    ProcessingResult,
    ProcessingStatus,
)
from noteflow.utils.errors import DocumentProcessingError

if TYPE_CHECKING:
    from noteflow.models.outcome import Outcome
    from noteflow.services.embedding_chain import EmbeddingChain
    from noteflow.services.ingestion.chunker import TextChunker
    from noteflow.services.ingestion.extractors.text_extractor import TextExtractor
    from noteflow.services.ingestion.metadata_analyzer import MetadataAnalyzer

logger = structlog.get_logger(logger_name=__name__)

_CHUNK_KEYWORDS = 10
_CHUNK_SUMMARY_SENTENCES = 3
_DOCUMENT_KEYWORDS = 20
_DOCUMENT_SUMMARY_SENTENCES = 5


class DocumentProcessor:
    """Turns an uploaded file into analyzed, embedded chunks.

    Parameters
    ----------
    extractor:
        Reads the file's text according to its declared type.
    chunker:
        Splits the text into overlapping sentence-aligned chunks.
    analyzer:
        Derives subject, keywords, summary, language and readability.
    embedding_chain:
        Produces one vector per chunk, or a degraded outcome.
    """

    def __init__(
        self,
        extractor: TextExtractor,
        chunker: TextChunker,
        analyzer: MetadataAnalyzer,
        embedding_chain: EmbeddingChain,
    ) -> None:
        self._extractor = extractor
        self._chunker = chunker
        self._analyzer = analyzer
        self._embedding_chain = embedding_chain

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def process(
        self,
        document_id: str,
        file_path: str,
        file_type: FileType | str,
    ) -> ProcessingResult:
        """Run the full pipeline for one file.

        Raises
        ------
        UnsupportedFormatError, EmptyContentError, ExtractionFailedError
            Document-level failures.  Degraded chunk embeddings and analyses
            never raise; unexpected errors from a parser or OCR engine do.
        """
        log = logger.bind(document_id=document_id)
        log.info("document_processing_started", file_path=file_path, file_type=str(file_type))

        text = await self._extractor.extract(file_path, file_type)
        spans = self._chunker.chunk(text)
        log.info("document_chunked", chars=len(text), chunks=len(spans))

        analysis_outcome, embeddings, chunk_analyses = await asyncio.gather(
            self._analyzer.analyze(
                text,
                max_keywords=_DOCUMENT_KEYWORDS,
                summary_sentences=_DOCUMENT_SUMMARY_SENTENCES,
            ),
            self._embedding_chain.embed_batch([span.content for span in spans]),
            asyncio.gather(*(self._analyze_chunk(span.content) for span in spans)),
        )
        chunks = [
            _assemble_chunk(index, span, embedding, keywords, summary)
            for index, (span, embedding, (keywords, summary)) in enumerate(
                zip(spans, embeddings, chunk_analyses)
            )
        ]
        analysis = analysis_outcome.value

        embedded = sum(1 for chunk in chunks if chunk.embedding is not None)
        degraded_reasons = list(analysis.degraded_reasons)
        if embedded < len(chunks):
            degraded_reasons.append(
                f"embedding: {len(chunks) - embedded} of {len(chunks)} chunks without vector"
            )

        metadata = DocumentMetadata(
            word_count=len(text.split()),
            chunk_count=len(chunks),
            language=analysis.language,
            subject=analysis.subject,
            keywords=analysis.keywords,
            summary=analysis.summary,
            readability=analysis.readability,
            processed_at=datetime.now(timezone.utc),
            processing_method=ProcessingMethod.PRIMARY if embedded else ProcessingMethod.DEGRADED,
            degraded_reasons=degraded_reasons,
        )

        log.info(
            "document_processing_complete",
            chunks=len(chunks),
            embedded=embedded,
            subject=metadata.subject,
            language=metadata.language,
            processing_method=metadata.processing_method.value,
        )
        return ProcessingResult(text=text, chunks=chunks, metadata=metadata)

    async def ingest(self, document: Document, force: bool = False) -> Document:
        """Process *document* and write the results back onto the record.

        Moves the record through ``uploaded -> processing -> completed``,
        or ``failed`` with ``processing_error`` set when a document-level
        error occurs (nothing is raised in that case).  Any other exception
        also marks the record ``failed`` before it propagates, so a record
        never stays in ``processing``.  A ``completed`` record is left
        untouched unless *force* is true.
        """
        if document.processing_status is ProcessingStatus.COMPLETED and not force:
            logger.info("document_already_processed", document_id=document.id)
            return document

        document.processing_status = ProcessingStatus.PROCESSING
        document.processing_error = None
        document.chunks = []
        document.metadata = None

        try:
            result = await self.process(document.id, document.file_path, document.file_type)
        except DocumentProcessingError as exc:
            document.processing_status = ProcessingStatus.FAILED
            document.processing_error = str(exc)
            logger.warning(
                "document_processing_failed",
                document_id=document.id,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return document
        except Exception as exc:
            document.processing_status = ProcessingStatus.FAILED
            document.processing_error = f"Unexpected error: {exc}"
            logger.exception(
                "document_processing_crashed",
                document_id=document.id,
                error_type=type(exc).__name__,
            )
            raise

        document.extracted_text = result.text
        document.chunks = result.chunks
        document.metadata = result.metadata
        document.processing_status = ProcessingStatus.COMPLETED
        return document

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _analyze_chunk(self, content: str) -> tuple[Outcome, Outcome]:
        """Keywords and summary for one chunk; both degrade instead of raising."""
        keywords, summary = await asyncio.gather(
            self._analyzer.extract_keywords(content, _CHUNK_KEYWORDS),
            self._analyzer.summarize(content, _CHUNK_SUMMARY_SENTENCES),
        )
        return keywords, summary


def _assemble_chunk(
    index: int,
    span: ChunkSpan,
    embedding: Outcome,
    keywords: Outcome,
    summary: Outcome,
) -> ProcessedChunk:
    has_vector = embedding.value is not None
    return ProcessedChunk(
        content=span.content,
        embedding=embedding.value,
        keywords=keywords.value,
        summary=summary.value,
        metadata=ChunkMetadata(
            chunk_index=index,
            start=span.start,
            end=span.end,
            length=span.length,
            sentence_count=span.sentence_count,
            processing_method=(
                ProcessingMethod.PRIMARY if has_vector else ProcessingMethod.DEGRADED
            ),
            embedding_provider=embedding.provider if has_vector else None,
        ),
    )
