"""Custom exception hierarchy for NoteFlow.

All application exceptions inherit from :class:`NoteFlowError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "gemini", "tesseract", "chromadb") caused the failure.

The hierarchy is organized by how far an error is allowed to travel:

    NoteFlowError  (base -- catch-all for any NoteFlow error)
    +-- DocumentProcessingError          (document-level, fatal for the run)
    |   +-- UnsupportedFormatError       (no extractor for the file type)
    |   +-- EmptyContentError            (extraction produced no text)
    |   +-- ExtractionFailedError        (the format parser itself failed)
    +-- EmbeddingProviderExhaustedError  (chunk-level, chunk kept without vector)
    +-- VectorStoreUnreachableError      (subsystem-level, triggers fallback mode)
    +-- RateLimitError                   (provider rate-limit exceeded)
    +-- LLMError                         (any LLM API call failure)
    +-- RAGError                         (embedding or vector-store failure)

Only :class:`DocumentProcessingError` subclasses ever reach the caller of the
ingestion pipeline.  Everything else is absorbed by the component that owns
the provider and turned into a degraded result.
"""


class NoteFlowError(Exception):
    """Base exception for all NoteFlow errors.

    The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[gemini] Rate limit exceeded``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Document-level errors
# ---------------------------------------------------------------------------

class DocumentProcessingError(NoteFlowError):
    """Base for errors that fail a whole document.

    The orchestrator writes these to ``Document.processing_error`` and marks
    the document ``failed``.
    """

    def __init__(
        self,
        message: str = "Document processing failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class UnsupportedFormatError(DocumentProcessingError):
    """Raised when no extractor exists for the declared file type."""

    def __init__(
        self,
        message: str = "Unsupported file type",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class EmptyContentError(DocumentProcessingError):
    """Raised when a document yields no extractable text."""

    def __init__(
        self,
        message: str = "No text content found in document",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ExtractionFailedError(DocumentProcessingError):
    """Raised when the underlying parser for a format fails."""

    def __init__(
        self,
        file_format: str,
        message: str | None = None,
        provider_name: str | None = None,
    ) -> None:
        self._file_format = file_format
        super().__init__(
            message=message or f"Failed to extract text from {file_format} file",
            provider_name=provider_name,
        )

    @property
    def file_format(self) -> str:
        return self._file_format


# ---------------------------------------------------------------------------
# Provider / subsystem errors (absorbed inside the pipeline)
# ---------------------------------------------------------------------------

class EmbeddingProviderExhaustedError(NoteFlowError):
    """Raised when every credential of an embedding provider is rate limited."""

    def __init__(
        self,
        message: str = "All embedding credentials exhausted",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class VectorStoreUnreachableError(NoteFlowError):
    """Raised when the external vector database cannot be reached at startup."""

    def __init__(
        self,
        message: str = "Vector database is unreachable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class RateLimitError(NoteFlowError):
    """Raised when an API rate limit is exceeded.

    Providers holding several credentials catch this to rotate to the next
    key before giving up.
    """

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class LLMError(NoteFlowError):
    """Raised when an LLM API call fails or returns an unparseable response."""

    def __init__(
        self,
        message: str = "LLM API call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class RAGError(NoteFlowError):
    """Raised when a RAG pipeline operation fails (embedding or vector store)."""

    def __init__(
        self,
        message: str = "RAG pipeline operation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
