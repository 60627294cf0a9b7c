"""Document ingestion pipeline for NoteFlow.

Pipeline stages overview:

1. **Extract** (extractors/) -- One strategy per file type (PDF, plain
   text, DOCX, image OCR) turns the uploaded file into plain text.

2. **Chunk** (chunker.py / TextChunker) -- Splits the text into ~1000
   character overlapping windows aligned on sentence boundaries.

3. **Analyze** (metadata_analyzer.py / MetadataAnalyzer) -- Subject,
   keywords, summary, language and readability, via the LLM when one is
   configured and local heuristics otherwise.

4. **Embed** (noteflow/services/embedding_chain.py) -- One vector per
   chunk from the first embedding provider that succeeds.

The DocumentProcessor class orchestrates all four stages.
"""

from noteflow.services.ingestion.chunker import TextChunker
from noteflow.services.ingestion.document_processor import DocumentProcessor
from noteflow.services.ingestion.extractors.text_extractor import TextExtractor
from noteflow.services.ingestion.metadata_analyzer import MetadataAnalyzer

__all__ = [
    "DocumentProcessor",
    "MetadataAnalyzer",
    "TextChunker",
    "TextExtractor",
]
