"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ContextField = Literal["major", "year", "semester"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "CourseHub"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Backend
    api_base_url: str = "http://localhost:8000"
    # None keeps the httpx default timeout
    request_timeout: float | None = None

    # Setup dimensions the student must fill in before leaving the setup modal.
    # Older deployments only ask for major and year.
    context_fields: list[ContextField] = ["major", "year", "semester"]

    # CORS (mock backend)
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    @field_validator("context_fields")
    @classmethod
    def check_context_fields(cls, v: list[str]) -> list[str]:
        """Require major and year, and reject duplicates."""
        if len(set(v)) != len(v):
            raise ValueError("context_fields must not contain duplicates")
        if "major" not in v or "year" not in v:
            raise ValueError("context_fields must include major and year")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
