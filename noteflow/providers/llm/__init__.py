"""LLM provider adapters.

One concrete implementation of ILLMProvider (noteflow/interfaces/llm_provider.py):
    - GeminiLLMProvider: Gemini chat completions through the
      OpenAI-compatible endpoint, with API-key rotation.

``noteflow.main.build_llm_provider`` returns it when a Gemini key is
configured and ``None`` otherwise, in which case the metadata analyzer runs
on its local heuristics only.
"""

from noteflow.providers.llm.gemini_provider import GeminiLLMProvider

__all__ = ["GeminiLLMProvider"]
