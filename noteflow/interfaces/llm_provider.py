"""Abstract base class for LLM service providers.

Defines the contract for the large-language-model backend used by the
metadata analyzer for subject classification, keyword extraction, and
summarization.  Every call-site depends only on this interface, so the
analyzer runs unchanged against a real provider or a test double.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementation: GeminiLLMProvider
# Located in: noteflow/providers/llm/
class ILLMProvider(ABC):
    """Contract for text-completion services."""

    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_tokens: int = 1000,
    ) -> str:
        """Generate a text completion from the model.

        Parameters
        ----------
        system_prompt:
            The system/instruction message that sets the model's behaviour.
        user_prompt:
            The user-facing prompt containing the actual request or data.
        temperature:
            Sampling temperature (0.0 = deterministic, 1.0 = creative).
        max_tokens:
            Upper bound on the number of tokens in the response.

        Returns
        -------
        str
            The model's text response.

        Raises
        ------
        noteflow.utils.errors.LLMError
            If the API call fails or returns an empty response.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this LLM provider.

        Example return value: ``"gemini-2.5-flash"``.
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider has credentials configured."""
