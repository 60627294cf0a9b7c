"""Image extraction: preprocess, then OCR.

The image is opened with PIL, passed through
:class:`~noteflow.utils.image_preprocessor.ImagePreprocessor` and handed
to the OCR provider.  If preprocessing fails the original image is used.
"""

from __future__ import annotations

import asyncio

import structlog
from PIL import Image

from noteflow.interfaces.ocr_provider import IOCRProvider
from noteflow.interfaces.text_extractor import ITextExtractor
from noteflow.models.document import FileType
from noteflow.utils.errors import EmptyContentError, ExtractionFailedError
from noteflow.utils.image_preprocessor import ImagePreprocessor

logger = structlog.get_logger(logger_name=__name__)


class ImageExtractor(ITextExtractor):
    """Reads text from a scanned page or photo via OCR."""

    def __init__(
        self,
        ocr_provider: IOCRProvider,
        preprocessor: ImagePreprocessor | None = None,
    ) -> None:
        self._ocr = ocr_provider
        self._preprocessor = preprocessor or ImagePreprocessor()

    async def extract(self, file_path: str) -> str:
        try:
            image = await asyncio.to_thread(self._open, file_path)
        except OSError as exc:
            raise ExtractionFailedError(
                FileType.IMAGE.value,
                message=f"Failed to extract text from image file: {exc}",
            ) from exc

        try:
            prepared = await asyncio.to_thread(self._preprocessor.prepare_for_ocr, image)
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "image_preprocessing_failed",
                file_path=file_path,
                error=str(exc),
                msg="Running OCR on the original image.",
            )
            prepared = image

        text = (await self._ocr.extract_text(prepared)).strip()
        if not text:
            raise EmptyContentError(
                "No text content found in image file",
                provider_name=self._ocr.get_provider_name(),
            )

        logger.info(
            "image_extracted",
            file_path=file_path,
            ocr=self._ocr.get_provider_name(),
            chars=len(text),
        )
        return text

    def get_file_type(self) -> FileType:
        return FileType.IMAGE

    @staticmethod
    def _open(file_path: str) -> Image.Image:
        # PIL opens lazily; load() forces the decode while the file is open.
        with Image.open(file_path) as image:
            image.load()
            return image.copy()
