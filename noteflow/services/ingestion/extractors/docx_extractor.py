"""Word-processor (.docx) extraction via python-docx.

python-docx reads the XML inside the DOCX zip archive.  Paragraph text and
then table cell text are joined with blank lines; formatting is dropped.
"""

from __future__ import annotations

import asyncio

import docx
import structlog

from noteflow.interfaces.text_extractor import ITextExtractor
from noteflow.models.document import FileType
from noteflow.utils.errors import EmptyContentError, ExtractionFailedError

logger = structlog.get_logger(logger_name=__name__)


class DocxExtractor(ITextExtractor):
    """Extracts paragraph and table text from a .docx file."""

    async def extract(self, file_path: str) -> str:
        try:
            blocks = await asyncio.to_thread(self._read_blocks, file_path)
        except Exception as exc:
            raise ExtractionFailedError(
                FileType.DOCX.value,
                message=f"Failed to extract text from docx file: {exc}",
                provider_name="python-docx",
            ) from exc

        text = "\n\n".join(blocks).strip()
        if not text:
            raise EmptyContentError("No text content found in docx file")

        logger.info("docx_extracted", file_path=file_path, blocks=len(blocks), chars=len(text))
        return text

    def get_file_type(self) -> FileType:
        return FileType.DOCX

    @staticmethod
    def _read_blocks(file_path: str) -> list[str]:
        document = docx.Document(file_path)
        blocks = [p.text.strip() for p in document.paragraphs if p.text.strip()]
        for table in document.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if cells:
                    blocks.append(" | ".join(cells))
        return blocks
