"""Gemini LLM provider adapter.

Wraps the ``openai`` async client pointed at Gemini's OpenAI-compatible
endpoint to implement :class:`ILLMProvider`.  Used by the metadata
analyzer for subject classification, keyword extraction and summaries.

Like the embedding provider, it holds a :class:`CredentialPool` and moves
to the next key whenever the current one is rate limited.
"""

from __future__ import annotations

import openai
import structlog

from noteflow.config.settings import Settings
from noteflow.interfaces.llm_provider import ILLMProvider
from noteflow.providers.credentials import CredentialPool
from noteflow.utils.errors import LLMError, RateLimitError

logger = structlog.get_logger(logger_name=__name__)


class GeminiLLMProvider(ILLMProvider):
    """LLM provider backed by Gemini chat completions."""

    def __init__(
        self, settings: Settings, credentials: CredentialPool | None = None
    ) -> None:
        self._settings = settings
        self._credentials = (
            credentials if credentials is not None else CredentialPool(settings.get_gemini_api_keys())
        )
        self._text_model = settings.gemini_text_model or "gemini-2.5-flash"
        self._clients: dict[str, openai.AsyncOpenAI] = {}

    # ------------------------------------------------------------------
    # ILLMProvider implementation
    # ------------------------------------------------------------------

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_tokens: int = 1000,
    ) -> str:
        """Generate a text completion, rotating keys on rate limits."""
        if not self._credentials:
            raise LLMError(
                message="No Gemini API key configured",
                provider_name=self.get_provider_name(),
            )

        for _attempt in range(self._credentials.size):
            api_key = self._credentials.current()
            try:
                response = await self._client_for(api_key).chat.completions.create(
                    model=self._text_model,
                    messages=[
                        {"role": "system", "content": system_prompt},
                        {"role": "user", "content": user_prompt},
                    ],
                    temperature=temperature,
                    max_tokens=max_tokens,
                )
            except openai.RateLimitError as exc:
                self._credentials.advance()
                logger.warning(
                    "gemini_completion_rate_limited",
                    model=self._text_model,
                    rotated_to=self._credentials.position,
                    error=str(exc),
                )
                continue
            except openai.APIError as exc:
                raise LLMError(
                    message=f"Gemini API error: {exc}",
                    provider_name=self.get_provider_name(),
                ) from exc

            content = response.choices[0].message.content if response.choices else None
            if not content:
                raise LLMError(
                    message="Gemini returned empty response",
                    provider_name=self.get_provider_name(),
                )
            logger.debug(
                "gemini_completion",
                model=self._text_model,
                tokens=response.usage.total_tokens if response.usage else None,
            )
            return content

        raise RateLimitError(
            message=f"All {self._credentials.size} Gemini API keys are rate limited",
            provider_name=self.get_provider_name(),
        )

    def get_provider_name(self) -> str:
        return self._text_model

    def is_available(self) -> bool:
        """Return ``True`` if an API key is configured (doesn't verify it works)."""
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
                timeout=openai.Timeout(25.0, connect=5.0),
                # Rotation in complete() is the only retry policy.
                max_retries=0,
            )
            self._clients[api_key] = client
        return client
