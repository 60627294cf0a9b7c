"""Utility modules for NoteFlow.

Available utility modules:

- **errors** -- Domain-specific exception hierarchy rooted at NoteFlowError;
  document-level errors reach the caller, everything else is absorbed by
  the component that owns the failing provider.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
- **image_preprocessor** -- PIL resize/grayscale/normalize/sharpen pass
  applied to images before OCR.
- **similarity** -- numpy cosine similarity used by the in-memory store.
- **text** -- Punkt sentence spans and word tokens shared by the chunker
  and the metadata analyzer.
- **readability** (not re-exported here; it depends on the models
  package) -- Flesch Reading Ease scoring.
"""

# -- Domain exception hierarchy --------------------------------------------
from noteflow.utils.errors import (
    DocumentProcessingError,
    EmbeddingProviderExhaustedError,
    EmptyContentError,
    ExtractionFailedError,
    LLMError,
    NoteFlowError,
    RAGError,
    RateLimitError,
    UnsupportedFormatError,
    VectorStoreUnreachableError,
)

# -- Image preprocessing for OCR -------------------------------------------
from noteflow.utils.image_preprocessor import ImagePreprocessor

# -- Structured logging setup ----------------------------------------------
from noteflow.utils.logging import configure_logging, get_logger

# -- Vector math and tokenization ------------------------------------------
from noteflow.utils.similarity import cosine_similarity
from noteflow.utils.text import sentence_spans, split_sentences, word_tokens

__all__ = [
    "DocumentProcessingError",
    "EmbeddingProviderExhaustedError",
    "EmptyContentError",
    "ExtractionFailedError",
    "ImagePreprocessor",
    "LLMError",
    "NoteFlowError",
    "RAGError",
    "RateLimitError",
    "UnsupportedFormatError",
    "VectorStoreUnreachableError",
    "configure_logging",
    "cosine_similarity",
    "get_logger",
    "sentence_spans",
    "split_sentences",
    "word_tokens",
]
