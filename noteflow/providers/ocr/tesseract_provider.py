"""Tesseract OCR provider for scanned pages and photographed notes.

Wraps pytesseract.  Tesseract is CPU-bound and blocking, so each call runs
in a worker thread via :func:`asyncio.to_thread`.
"""

from __future__ import annotations

import asyncio

import pytesseract
from PIL import Image

from noteflow.interfaces.ocr_provider import IOCRProvider
from noteflow.utils.errors import ExtractionFailedError
from noteflow.utils.logging import get_logger


class TesseractOCRProvider(IOCRProvider):
    """OCR provider backed by Google Tesseract via pytesseract."""

    def __init__(self, language: str = "eng") -> None:
        self._language = language
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # IOCRProvider interface
    # ------------------------------------------------------------------

    async def extract_text(self, image: Image.Image) -> str:
        try:
            text = await asyncio.to_thread(
                pytesseract.image_to_string, image, lang=self._language
            )
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as exc:
            raise ExtractionFailedError(
                "image",
                message=f"Tesseract failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        self._logger.debug(
            "tesseract_ocr_complete",
            chars=len(text),
            width=image.width,
            height=image.height,
        )
        return text

    def get_provider_name(self) -> str:
        return "tesseract"

    def is_available(self) -> bool:
        """Return ``True`` if the Tesseract binary is installed."""
        try:
            pytesseract.get_tesseract_version()
        except pytesseract.TesseractNotFoundError:
            return False
        return True
