"""Application configuration managed via environment variables."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Luna Sleep Coach API"
    debug: bool = False
    log_level: str = "INFO"
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    openai_temperature: float = 0.7
    openai_timeout_seconds: float = 60.0
    plan_max_tokens: int = 1500
    assistant_max_tokens: int = 800
    cors_allow_origins: list[str] = ["*"]
    opik_enabled: bool = False
    opik_api_key: str | None = None
    opik_project: str = "luna-sleep-coach"


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()


settings = get_settings()
