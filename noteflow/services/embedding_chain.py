"""Ordered fallback chain over embedding providers.

:meth:`EmbeddingChain.embed` asks each provider in turn and returns the
first vector produced.  When every provider fails the chunk is not lost:
the chain returns ``Outcome(value=None, degraded_reason=...)`` and the
orchestrator stores the chunk without a vector.

Provider-level retries (credential rotation) happen inside each provider;
the chain only moves on once a provider has given up.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

import structlog

from noteflow.interfaces.embedding_provider import IEmbeddingProvider
from noteflow.models.outcome import Outcome

logger = structlog.get_logger(logger_name=__name__)


class EmbeddingChain:
    """Tries embedding providers in priority order.

    Parameters
    ----------
    providers:
        Providers in priority order.  The first is the primary provider;
        its dimension is the one the vector store is built for.
    """

    def __init__(self, providers: Sequence[IEmbeddingProvider]) -> None:
        self._providers = list(providers)

    @property
    def providers(self) -> list[IEmbeddingProvider]:
        return list(self._providers)

    @property
    def primary_name(self) -> str | None:
        return self._providers[0].get_provider_name() if self._providers else None

    @property
    def dimension(self) -> int:
        return self._providers[0].get_dimension() if self._providers else 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def embed(self, text: str) -> Outcome[list[float] | None]:
        """Embed *text* with the first provider that succeeds.

        Never raises.  ``value`` is ``None`` and ``degraded_reason`` lists
        each provider's failure when all of them fail.
        """
        if not self._providers:
            return Outcome.fallback(None, "no_embedding_provider")

        failures: list[str] = []
        for position, provider in enumerate(self._providers):
            name = provider.get_provider_name()
            try:
                vector = await provider.embed_single(text)
            except Exception as exc:  # noqa: BLE001
                failures.append(f"{name}: {exc}")
                logger.warning(
                    "embedding_provider_failed",
                    provider=name,
                    position=position,
                    error=str(exc),
                )
                continue

            if not vector:
                failures.append(f"{name}: empty vector")
                logger.warning("embedding_provider_empty_vector", provider=name)
                continue

            if position > 0:
                logger.info("embedding_fallback_used", provider=name, position=position)
            return Outcome.ok(list(vector), provider=name)

        return Outcome.fallback(None, "all_embedding_providers_failed: " + "; ".join(failures))

    async def embed_batch(self, texts: Sequence[str]) -> list[Outcome[list[float] | None]]:
        """Embed every text concurrently; one failure never affects the others."""
        if not texts:
            return []
        outcomes = await asyncio.gather(*(self.embed(text) for text in texts))

        degraded = sum(1 for outcome in outcomes if outcome.degraded)
        logger.info("embedding_batch_complete", total=len(outcomes), degraded=degraded)
        return list(outcomes)
