"""Dispatches extraction to the strategy registered for a file type.

The dispatch table maps every :class:`~noteflow.models.document.FileType`
to one :class:`~noteflow.interfaces.text_extractor.ITextExtractor`.  A type
with no registered strategy is rejected with
:class:`~noteflow.utils.errors.UnsupportedFormatError`.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from noteflow.interfaces.ocr_provider import IOCRProvider
from noteflow.interfaces.text_extractor import ITextExtractor
from noteflow.models.document import FileType
from noteflow.services.ingestion.extractors.docx_extractor import DocxExtractor
from noteflow.services.ingestion.extractors.image_extractor import ImageExtractor
from noteflow.services.ingestion.extractors.pdf_extractor import PdfExtractor
from noteflow.services.ingestion.extractors.plain_text_extractor import PlainTextExtractor
from noteflow.utils.errors import UnsupportedFormatError
from noteflow.utils.image_preprocessor import ImagePreprocessor

logger = structlog.get_logger(logger_name=__name__)


class TextExtractor:
    """Reads the text of a file using the strategy for its declared type."""

    def __init__(self, extractors: Iterable[ITextExtractor]) -> None:
        self._extractors: dict[FileType, ITextExtractor] = {
            extractor.get_file_type(): extractor for extractor in extractors
        }

    @classmethod
    def with_defaults(
        cls,
        ocr_provider: IOCRProvider,
        preprocessor: ImagePreprocessor | None = None,
    ) -> TextExtractor:
        """Build an extractor covering every supported file type."""
        return cls(
            [
                PdfExtractor(),
                PlainTextExtractor(),
                DocxExtractor(),
                ImageExtractor(ocr_provider, preprocessor),
            ]
        )

    @property
    def supported_types(self) -> list[FileType]:
        return list(self._extractors)

    async def extract(self, file_path: str, file_type: FileType | str) -> str:
        """Return the stripped, non-empty text of *file_path*.

        Raises
        ------
        UnsupportedFormatError
            If *file_type* is unknown or has no registered strategy.
        EmptyContentError
            If the file contains no text.
        ExtractionFailedError
            If the format's parser fails.
        """
        kind = FileType.parse(file_type)
        extractor = self._extractors.get(kind)
        if extractor is None:
            raise UnsupportedFormatError(f"Unsupported file type: {kind.value}")

        logger.debug("extracting_text", file_path=file_path, file_type=kind.value)
        return await extractor.extract(file_path)
