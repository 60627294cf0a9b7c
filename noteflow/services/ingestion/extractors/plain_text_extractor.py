"""Plain-text extraction: UTF-8 with undecodable bytes replaced."""

from __future__ import annotations

import asyncio
from pathlib import Path

import structlog

from noteflow.interfaces.text_extractor import ITextExtractor
from noteflow.models.document import FileType
from noteflow.utils.errors import EmptyContentError, ExtractionFailedError

logger = structlog.get_logger(logger_name=__name__)


class PlainTextExtractor(ITextExtractor):
    async def extract(self, file_path: str) -> str:
        try:
            raw = await asyncio.to_thread(Path(file_path).read_bytes)
        except OSError as exc:
            raise ExtractionFailedError(
                FileType.TXT.value,
                message=f"Failed to extract text from txt file: {exc}",
            ) from exc

        text = raw.decode("utf-8", errors="replace").strip()
        if not text:
            raise EmptyContentError("No text content found in txt file")

        logger.info("txt_extracted", file_path=file_path, chars=len(text))
        return text

    def get_file_type(self) -> FileType:
        return FileType.TXT
