"""Abstract base class for OCR service providers.

Defines the contract for the OCR engine used by the image extractor to
read scanned pages and photographed notes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from PIL import Image


# Concrete implementation: TesseractOCRProvider
# Located in: noteflow/providers/ocr/
class IOCRProvider(ABC):
    """Contract for OCR services that read text from images."""

    @abstractmethod
    async def extract_text(self, image: Image.Image) -> str:
        """Run OCR on *image* and return the recognised text.

        The result may be empty or whitespace-only; deciding whether that
        is an error is left to the caller.

        Raises
        ------
        noteflow.utils.errors.ExtractionFailedError
            If the OCR engine itself fails.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"tesseract"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the OCR engine binary can be found."""
