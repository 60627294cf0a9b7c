"""Unit tests for the document, outcome and vector-store models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from noteflow.models.document import ChunkSpan, Document, FileType, ProcessingStatus
from noteflow.models.outcome import Outcome
from noteflow.models.rag import SearchResult, VectorRecord
from noteflow.utils.errors import UnsupportedFormatError


class TestFileType:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("pdf", FileType.PDF),
            (" TXT ", FileType.TXT),
            ("docx", FileType.DOCX),
            (FileType.IMAGE, FileType.IMAGE),
        ],
    )
    def test_parse(self, value, expected: FileType) -> None:
        assert FileType.parse(value) is expected

    def test_parse_unknown_raises(self) -> None:
        with pytest.raises(UnsupportedFormatError, match="xlsx"):
            FileType.parse("xlsx")

    @pytest.mark.parametrize(
        ("mime", "expected"),
        [
            ("application/pdf", FileType.PDF),
            ("text/plain", FileType.TXT),
            (
                "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
                FileType.DOCX,
            ),
            ("image/png", FileType.IMAGE),
            ("IMAGE/JPEG", FileType.IMAGE),
        ],
    )
    def test_from_mime(self, mime: str, expected: FileType) -> None:
        assert FileType.from_mime(mime) is expected

    def test_from_mime_unknown_raises(self) -> None:
        with pytest.raises(UnsupportedFormatError):
            FileType.from_mime("application/zip")

    def test_from_extension(self) -> None:
        assert FileType.from_extension("notes/Week1.PDF") is FileType.PDF
        assert FileType.from_extension("scan.jpeg") is FileType.IMAGE

    def test_from_extension_unknown_raises(self) -> None:
        with pytest.raises(UnsupportedFormatError):
            FileType.from_extension("slides.pptx")


class TestOutcome:
    def test_ok_is_not_degraded(self) -> None:
        outcome = Outcome.ok([0.1, 0.2], provider="gemini-text-embedding-004")
        assert not outcome.degraded
        assert outcome.provider == "gemini-text-embedding-004"

    def test_fallback_carries_reason(self) -> None:
        outcome = Outcome.fallback("General", "llm_unavailable")
        assert outcome.degraded
        assert outcome.degraded_reason == "llm_unavailable"
        assert outcome.provider is None

    def test_frozen(self) -> None:
        outcome = Outcome.ok("x")
        with pytest.raises(ValidationError):
            outcome.value = "y"


class TestDocument:
    def test_defaults(self) -> None:
        document = Document(id="doc-1", file_type="pdf", file_path="/tmp/a.pdf")
        assert document.processing_status is ProcessingStatus.UPLOADED
        assert document.chunks == []
        assert document.metadata is None

    def test_assignment_is_validated(self) -> None:
        document = Document(id="doc-1", file_type=FileType.TXT, file_path="/tmp/a.txt")
        with pytest.raises(ValidationError):
            document.processing_status = "archived"

    def test_chunk_span_rejects_negative_offsets(self) -> None:
        with pytest.raises(ValidationError):
            ChunkSpan(content="x", start=-1, end=1, length=1)


class TestVectorRecord:
    def test_from_chunk_copies_metadata(self, make_processed_chunk) -> None:
        chunk = make_processed_chunk(
            index=4, content="Mitosis has four phases.", embedding=[0.1, 0.2, 0.3], keywords=["mitosis"]
        )

        record = VectorRecord.from_chunk("doc-7", chunk)

        assert record.document_id == "doc-7"
        assert record.chunk_index == 4
        assert record.content == "Mitosis has four phases."
        assert record.embedding == [0.1, 0.2, 0.3]
        assert record.metadata["document_id"] == "doc-7"
        assert record.metadata["keywords"] == ["mitosis"]
        assert record.metadata["processing_method"] == "primary"
        assert record.metadata["embedding_provider"] == "mock-embedder"

    def test_search_result_score_bounds(self) -> None:
        with pytest.raises(ValidationError):
            SearchResult(document_id="d", chunk_index=0, content="x", score=1.5)
