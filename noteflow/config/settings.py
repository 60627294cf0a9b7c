"""Application settings loaded from environment variables via pydantic-settings.

Values are read from (highest priority first) environment variables, then a
``.env`` file in the working directory, then the defaults below.  The field
``gemini_api_key`` maps to the ``GEMINI_API_KEY`` variable, and so on.

Up to four Gemini keys can be configured.  They form the rotation pool used
by the embedding and LLM providers when a key hits its rate limit.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """NoteFlow ingestion settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Gemini (OpenAI-compatible endpoint) ===
    # Empty string = "not configured"; empty keys are dropped from the pool.
    gemini_api_key: str = ""
    gemini_api_key_2: str = ""
    gemini_api_key_3: str = ""
    gemini_api_key_4: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    gemini_embedding_model: str = "text-embedding-004"
    gemini_text_model: str = "gemini-2.5-flash"

    # === Secondary embedding provider (nomic-embed-text via Ollama) ===
    # Disabled unless a base URL is set.
    ollama_base_url: str = ""

    # === Vector database ===
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    chroma_collection: str = "noteflow_embeddings"
    chroma_heartbeat_path: str = "/api/v2/heartbeat"
    vector_probe_timeout: float = 3.0

    # === Ingestion ===
    chunk_size: int = 1000
    chunk_overlap: int = 200
    llm_max_concurrent: int = 5

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    def get_gemini_api_keys(self) -> list[str]:
        """Return the configured Gemini keys in priority order, skipping blanks."""
        keys = [
            self.gemini_api_key,
            self.gemini_api_key_2,
            self.gemini_api_key_3,
            self.gemini_api_key_4,
        ]
        return [key for key in keys if key]
