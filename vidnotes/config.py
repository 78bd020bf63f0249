from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings validated via Pydantic.

    Values are loaded from environment variables and/or a .env file.
    """

    # API Keys
    anthropic_api_key: str = ""
    openai_api_key: str = ""
    pinecone_api_key: str = ""

    # Models
    default_model: str = "claude-sonnet-4"
    embedding_model: str = "text-embedding-3-small"
    max_output_tokens: int = 4000  # Uniform across providers, see DESIGN.md
    temperature: float = 0.3

    # Path selection
    context_threshold: float = 0.7
    segment_max_chars: int = 0  # 0 = derive from the model's context window

    # Retrieval-augmented path
    pinecone_index_name: str = "vidnotes"
    rag_chunk_chars: int = 2000
    rag_batch_size: int = 10
    rag_top_k: int = 3

    # App config
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Gracefully handles missing .env files (e.g. in CI/testing) by falling
    back to environment variables and defaults.
    """
    try:
        return Settings()
    except Exception:  # noqa: BLE001
        # If .env is missing or unreadable, build settings from env vars only.
        return Settings(_env_file=None)  # type: ignore[call-arg]


settings = get_settings()
