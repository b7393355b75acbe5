"""Application configuration from environment variables and Docker Swarm secrets."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

# Settings fields that may be supplied as Docker Swarm secrets
SECRET_FIELDS = (
    "supabase_url",
    "supabase_key",
    "openai_api_key",
    "anthropic_api_key",
    "grok_api_key",
    "jwt_secret",
)


def _read_secret(name: str) -> str | None:
    """Read a Docker Swarm secret from /run/secrets/."""
    secret_path = Path(f"/run/secrets/{name}")
    if secret_path.exists():
        return secret_path.read_text().strip()
    return None


class Settings(BaseSettings):
    """Application settings with env var and secret support."""

    supabase_url: str = ""
    supabase_key: str = ""

    openai_api_key: str = ""
    anthropic_api_key: str = ""
    grok_api_key: str = ""

    openai_base_url: str = "https://api.openai.com/v1"
    anthropic_base_url: str = "https://api.anthropic.com"
    grok_base_url: str = "https://api.x.ai/v1"

    openai_model: str = "gpt-4o"
    anthropic_model: str = "claude-sonnet-4-20250514"
    grok_model: str = "grok-3"

    default_provider: str = "openai"
    default_temperature: float = 0.7
    llm_timeout_seconds: float = 60.0
    prompt_tools_beta: str = "prompt-tools-2025-04-02"

    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"

    port: int = 8400
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Override with Docker Swarm secrets if available
        for name in SECRET_FIELDS:
            if secret := _read_secret(name):
                setattr(self, name, secret)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
