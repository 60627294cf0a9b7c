"""Secondary embedding provider: ``nomic-embed-text`` served by a local Ollama.

Ollama exposes an OpenAI-compatible ``/v1`` API, so this adapter reuses the
``openai`` async client.  ``nomic-embed-text`` produces 768-dimensional
vectors, the same width as Gemini ``text-embedding-004``, which lets the
embedding chain fall back to it without splitting the vector collection.

Only built when ``OLLAMA_BASE_URL`` is set.
"""

from __future__ import annotations

import httpx
import openai
import structlog

from noteflow.config.settings import Settings
from noteflow.interfaces.embedding_provider import IEmbeddingProvider
from noteflow.utils.errors import RAGError

logger = structlog.get_logger(logger_name=__name__)

_MODEL = "nomic-embed-text"
_DIMENSION = 768
# Ollama rejects larger embedding requests.
_MAX_BATCH = 512


class NomicEmbeddingProvider(IEmbeddingProvider):
    def __init__(self, settings: Settings) -> None:
        self._base_url = settings.ollama_base_url.rstrip("/")
        # Ollama ignores the API key; the SDK refuses to start without one.
        self._client = openai.AsyncOpenAI(base_url=f"{self._base_url}/v1", api_key="ollama")

    async def embed(self, texts: list[str]) -> list[list[float]]:
        vectors: list[list[float]] = []
        for offset in range(0, len(texts), _MAX_BATCH):
            vectors.extend(await self._embed_batch(texts[offset : offset + _MAX_BATCH]))
        return vectors

    async def embed_single(self, text: str) -> list[float]:
        (vector,) = await self._embed_batch([text])
        return vector

    def get_dimension(self) -> int:
        return _DIMENSION

    def get_provider_name(self) -> str:
        return _MODEL

    def is_available(self) -> bool:
        """``True`` when Ollama answers and has ``nomic-embed-text`` pulled."""
        if not self._base_url:
            return False
        try:
            response = httpx.get(f"{self._base_url}/api/tags", timeout=3.0)
            response.raise_for_status()
        except httpx.HTTPError:
            return False
        models = response.json().get("models") or []
        return any(str(m.get("name", "")).startswith(_MODEL) for m in models)

    async def _embed_batch(self, batch: list[str]) -> list[list[float]]:
        try:
            response = await self._client.embeddings.create(input=batch, model=_MODEL)
        except openai.APIConnectionError as exc:
            raise RAGError(
                message=f"Ollama not reachable at {self._base_url}: {exc}",
                provider_name=_MODEL,
            ) from exc
        except openai.APIError as exc:
            raise RAGError(
                message=f"Ollama embedding request failed: {exc}",
                provider_name=_MODEL,
            ) from exc

        logger.debug("nomic_embedding_batch", batch_size=len(batch))
        return [item.embedding for item in response.data]
