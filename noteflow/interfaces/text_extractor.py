"""Abstract base class for per-format text extractors.

Each supported :class:`~noteflow.models.document.FileType` has exactly one
extractor strategy.  The
:class:`~noteflow.services.ingestion.extractors.text_extractor.TextExtractor`
holds a ``FileType -> ITextExtractor`` map and dispatches on it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from noteflow.models.document import FileType


# Concrete implementations: PdfExtractor, PlainTextExtractor, DocxExtractor,
# ImageExtractor
# Located in: noteflow/services/ingestion/extractors/
class ITextExtractor(ABC):
    """Contract for reading the text content of one file format."""

    @abstractmethod
    async def extract(self, file_path: str) -> str:
        """Read *file_path* and return its text, stripped of outer whitespace.

        Raises
        ------
        noteflow.utils.errors.EmptyContentError
            If the file contains no text.
        noteflow.utils.errors.ExtractionFailedError
            If the underlying parser fails.
        """

    @abstractmethod
    def get_file_type(self) -> FileType:
        """Return the file type this extractor handles."""
