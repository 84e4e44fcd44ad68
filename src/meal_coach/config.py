"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str
    openai_model: str = "gpt-4o-mini"
    openai_max_tokens: int = 1000
    openai_temperature: float = 0.3
    recognition_timeout_seconds: float = 45.0
    enable_caching: bool = True
    redis_url: str | None = None
    personalized_cache: bool = False
    image_max_dimension: int = 1024
    image_jpeg_quality: int = 85
    image_max_download_bytes: int = 10 * 1024 * 1024
    low_confidence_threshold: float = 60
    default_language: str = "en"
    timezone: str = "Asia/Singapore"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
