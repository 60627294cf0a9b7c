"""PDF text extraction with PyMuPDF.

Reads the text layer page by page and joins non-empty pages with blank
lines.  Scanned PDFs without a text layer yield no text and are reported
as empty; OCR of PDF page images is not attempted.
"""

from __future__ import annotations

import asyncio

import fitz  # PyMuPDF -- the "fitz" import name is a PyMuPDF convention
import structlog

from noteflow.interfaces.text_extractor import ITextExtractor
from noteflow.models.document import FileType
from noteflow.utils.errors import EmptyContentError, ExtractionFailedError

logger = structlog.get_logger(logger_name=__name__)


class PdfExtractor(ITextExtractor):
    """Extracts the text layer of a PDF file."""

    async def extract(self, file_path: str) -> str:
        try:
            pages = await asyncio.to_thread(self._extract_pages, file_path)
        except Exception as exc:
            raise ExtractionFailedError(
                FileType.PDF.value,
                message=f"Failed to extract text from pdf file: {exc}",
                provider_name="pymupdf",
            ) from exc

        text = "\n\n".join(pages).strip()
        if not text:
            raise EmptyContentError("No text content found in pdf file")

        logger.info("pdf_extracted", file_path=file_path, pages=len(pages), chars=len(text))
        return text

    def get_file_type(self) -> FileType:
        return FileType.PDF

    @staticmethod
    def _extract_pages(file_path: str) -> list[str]:
        """Return the stripped text of each page that has any."""
        doc = fitz.open(file_path)
        pages: list[str] = []
        try:
            for page_num in range(len(doc)):
                text = doc[page_num].get_text("text").strip()
                if text:
                    pages.append(text)
        finally:
            doc.close()
        return pages
