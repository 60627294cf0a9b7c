"""Per-format text extraction strategies and the dispatcher that selects them.

Strategies (one per FileType):
    - PdfExtractor      : PyMuPDF text layer, page by page
    - PlainTextExtractor: UTF-8 with replacement of undecodable bytes
    - DocxExtractor     : python-docx paragraphs and tables
    - ImageExtractor    : PIL preprocessing + Tesseract OCR
"""

from noteflow.services.ingestion.extractors.docx_extractor import DocxExtractor
from noteflow.services.ingestion.extractors.image_extractor import ImageExtractor
from noteflow.services.ingestion.extractors.pdf_extractor import PdfExtractor
from noteflow.services.ingestion.extractors.plain_text_extractor import PlainTextExtractor
from noteflow.services.ingestion.extractors.text_extractor import TextExtractor

__all__ = [
    "DocxExtractor",
    "ImageExtractor",
    "PdfExtractor",
    "PlainTextExtractor",
    "TextExtractor",
]
