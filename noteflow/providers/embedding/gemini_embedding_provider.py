"""Gemini embedding provider adapter.

Wraps the ``openai`` async client pointed at Gemini's OpenAI-compatible
endpoint to implement :class:`IEmbeddingProvider` with
``text-embedding-004`` (768 dimensions).

Each configured API key gets its own client.  When a key is rate limited
the provider advances its :class:`CredentialPool` and retries the same
request with the next key, trying every key at most once per request.
"""

from __future__ import annotations

import openai
import structlog

from noteflow.config.settings import Settings
from noteflow.interfaces.embedding_provider import IEmbeddingProvider
from noteflow.providers.credentials import CredentialPool
from noteflow.utils.errors import EmbeddingProviderExhaustedError, RAGError

logger = structlog.get_logger(logger_name=__name__)

_MODEL_DIMENSIONS: dict[str, int] = {
    "text-embedding-004": 768,
    "gemini-embedding-001": 768,
}


class GeminiEmbeddingProvider(IEmbeddingProvider):
    """Embedding provider backed by the Gemini embeddings API."""

    def __init__(
        self, settings: Settings, credentials: CredentialPool | None = None
    ) -> None:
        self._settings = settings
        self._credentials = (
            credentials if credentials is not None else CredentialPool(settings.get_gemini_api_keys())
        )
        self._model = settings.gemini_embedding_model or "text-embedding-004"
        self._dimension = _MODEL_DIMENSIONS.get(self._model, 768)
        # One client per key; built lazily on first use of that key.
        self._clients: dict[str, openai.AsyncOpenAI] = {}

    # ------------------------------------------------------------------
    # IEmbeddingProvider implementation
    # ------------------------------------------------------------------

    async def embed(self, texts: list[str]) -> list[list[float]]:
        """Embed *texts* in one request, rotating keys on rate limits."""
        if not texts:
            return []
        if not self._credentials:
            raise RAGError(
                message="No Gemini API key configured",
                provider_name=self.get_provider_name(),
            )

        for _attempt in range(self._credentials.size):
            api_key = self._credentials.current()
            try:
                response = await self._client_for(api_key).embeddings.create(
                    input=texts,
                    model=self._model,
                )
            except openai.RateLimitError as exc:
                self._credentials.advance()
                logger.warning(
                    "gemini_embedding_rate_limited",
                    model=self._model,
                    rotated_to=self._credentials.position,
                    pool_size=self._credentials.size,
                    error=str(exc),
                )
                continue
            except openai.APIError as exc:
                raise RAGError(
                    message=f"Gemini embedding API error: {exc}",
                    provider_name=self.get_provider_name(),
                ) from exc

            embeddings = [item.embedding for item in response.data]
            logger.debug(
                "gemini_embedding_batch",
                model=self._model,
                batch_size=len(texts),
            )
            return embeddings

        raise EmbeddingProviderExhaustedError(
            message=f"All {self._credentials.size} Gemini API keys are rate limited",
            provider_name=self.get_provider_name(),
        )

    async def embed_single(self, text: str) -> list[float]:
        """Generate an embedding vector for a single text string."""
        result = await self.embed([text])
        return result[0]

    def get_dimension(self) -> int:
        return self._dimension

    def get_provider_name(self) -> str:
        return f"gemini-{self._model}"

    def is_available(self) -> bool:
        """Return ``True`` if at least one API key is configured."""
        return bool(self._credentials)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _client_for(self, api_key: str) -> openai.AsyncOpenAI:
        client = self._clients.get(api_key)
        if client is None:
            client = openai.AsyncOpenAI(
                api_key=api_key,
                base_url=self._settings.gemini_base_url,
                # Rotation in embed() is the only retry policy.
                max_retries=0,
            )
            self._clients[api_key] = client
        return client
