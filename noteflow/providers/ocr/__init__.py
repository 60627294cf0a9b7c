"""OCR provider implementations for scanned documents.

One implementation of IOCRProvider:
    - TesseractOCRProvider: traditional OCR (Google Tesseract). Lightweight
      and free. The image extractor runs a single preprocessing pass
      (noteflow/utils/image_preprocessor.py) before handing it the image.
"""

from noteflow.providers.ocr.tesseract_provider import TesseractOCRProvider

__all__ = ["TesseractOCRProvider"]
