"""Public interface definitions for all external service providers.

Every external API, engine, or database used by the ingestion pipeline is
accessed exclusively through the abstract base classes defined in this
package.  Concrete adapters implement these interfaces and are injected at
runtime by the factory functions in ``noteflow/main.py``.  Unit tests inject
mocks or fakes in their place.

CONCRETE PROVIDER MAP:
    Interface                  ->  Concrete implementations
    ---------------------------------------------------------------------
    IEmbeddingProvider         ->  GeminiEmbeddingProvider,
                                   NomicEmbeddingProvider
    ILLMProvider               ->  GeminiLLMProvider
    IOCRProvider               ->  TesseractOCRProvider
    IVectorStoreProvider       ->  ChromaDBProvider, InMemoryVectorStore
    ITextExtractor             ->  PdfExtractor, PlainTextExtractor,
                                   DocxExtractor, ImageExtractor
"""

from noteflow.interfaces.embedding_provider import IEmbeddingProvider
from noteflow.interfaces.llm_provider import ILLMProvider
from noteflow.interfaces.ocr_provider import IOCRProvider
from noteflow.interfaces.text_extractor import ITextExtractor
from noteflow.interfaces.vector_store_provider import IVectorStoreProvider

__all__ = [
    "IEmbeddingProvider",
    "ILLMProvider",
    "IOCRProvider",
    "ITextExtractor",
    "IVectorStoreProvider",
]
