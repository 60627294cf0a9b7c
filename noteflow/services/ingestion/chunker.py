"""Sentence-aware text chunking with overlapping windows.

Splits extracted document text into :class:`~noteflow.models.document.ChunkSpan`
objects sized for the embedding model (~1000 characters with ~200 characters
of overlap by default).

The chunking strategy has two design goals:

1. **Sentence-preserving** -- Chunk boundaries always fall on sentence
   boundaries (Punkt tokenizer, see :mod:`noteflow.utils.text`), so no
   chunk ends mid-sentence.  A single sentence longer than the chunk size
   becomes its own oversized chunk rather than being cut.

2. **Overlapping windows** -- Each new chunk starts with the tail of the
   previous one (trimmed forward to a word boundary) so that an idea
   spanning a boundary is retrievable from either side.

Every chunk is a contiguous slice of the input: ``content == text[start:end]``.
"""

from __future__ import annotations

import structlog

from noteflow.models.document import ChunkSpan
from noteflow.utils.text import sentence_spans

logger = structlog.get_logger(logger_name=__name__)


class TextChunker:
    """Greedily accumulates sentences into overlapping chunks.

    Parameters
    ----------
    chunk_size:
        Target maximum length of a chunk in characters (default 1000).
    overlap:
        Number of trailing characters of a closed chunk carried into the
        next one (default 200).  Must be smaller than *chunk_size*.
    """

    def __init__(self, chunk_size: int = 1000, overlap: int = 200) -> None:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        if overlap < 0:
            raise ValueError(f"overlap must not be negative, got {overlap}")
        if overlap >= chunk_size:
            raise ValueError(
                f"overlap ({overlap}) must be smaller than chunk_size ({chunk_size})"
            )
        self._chunk_size = chunk_size
        self._overlap = overlap

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    @property
    def overlap(self) -> int:
        return self._overlap

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def chunk(self, text: str) -> list[ChunkSpan]:
        """Split *text* into ordered, overlapping chunks.

        Returns an empty list for empty or whitespace-only text.
        """
        spans = sentence_spans(text)
        if not spans:
            return []

        chunks: list[ChunkSpan] = []
        buffer_start: int | None = None
        buffer_end = 0
        sentence_count = 0

        for sent_start, sent_end in spans:
            if buffer_start is not None and sent_end - buffer_start > self._chunk_size:
                chunks.append(self._make_chunk(text, buffer_start, buffer_end, sentence_count))
                buffer_start = self._overlap_start(text, buffer_start, buffer_end)
                if buffer_start >= buffer_end:
                    buffer_start = sent_start
                sentence_count = 0

            if buffer_start is None:
                buffer_start = sent_start
            buffer_end = sent_end
            sentence_count += 1

        if buffer_start is not None:
            chunks.append(self._make_chunk(text, buffer_start, buffer_end, sentence_count))

        logger.debug(
            "text_chunked",
            text_length=len(text),
            sentences=len(spans),
            chunks=len(chunks),
        )
        return chunks

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _overlap_start(self, text: str, start: int, end: int) -> int:
        """Offset where the next chunk begins inside the closed chunk ``[start, end)``.

        Takes the last ``overlap`` characters, drops the partial word at the
        front of that tail, then skips whitespace.  A chunk no longer than
        ``overlap`` is carried over whole.  Returns ``end`` when nothing
        remains to carry.
        """
        if self._overlap == 0:
            return end

        if end - start <= self._overlap:
            tail_start = start
        else:
            tail_start = end - self._overlap
            space = text.find(" ", tail_start, end)
            if space != -1:
                tail_start = space + 1

        while tail_start < end and text[tail_start].isspace():
            tail_start += 1
        return tail_start

    @staticmethod
    def _make_chunk(text: str, start: int, end: int, sentence_count: int) -> ChunkSpan:
        return ChunkSpan(
            content=text[start:end],
            start=start,
            end=end,
            length=end - start,
            sentence_count=sentence_count,
        )
