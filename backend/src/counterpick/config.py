"""Application configuration via pydantic-settings."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Settings
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # CORS - comma-separated origins (env var: CORS_ORIGINS)
    cors_origins: str = "http://localhost:5173,http://127.0.0.1:5173"

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # Reference data directory (defaults to the repository's knowledge/)
    knowledge_dir: Optional[Path] = None

    # Recommendations
    recommendation_limit: int = 8
    flex_fallback_threshold: int = 5

    # Sessions
    session_ttl_seconds: int = 60 * 60

    # Narrative generator (OpenAI-compatible chat completions)
    llm_api_key: str = ""
    llm_base_url: str = "https://api.cerebras.ai/v1"
    llm_model: str = "llama-3.3-70b"
    llm_timeout_seconds: float = 30.0

    # Feature flags
    enable_llm: bool = True
    scoring_diagnostics: bool = False
    diagnostics_dir: Optional[Path] = None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
