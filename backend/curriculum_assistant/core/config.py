"""Application configuration and settings management."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="CURRICULUM_ASSISTANT_", extra="ignore")

    app_name: str = Field(default="Curriculum Assistant API", description="Human readable application name.")
    environment: Literal["local", "development", "staging", "production"] = Field(
        default="local",
        description="Deployment environment name.",
    )
    gemini_api_key: str | None = Field(
        default=None,
        description="API key for the Generative Language API.",
    )
    gemini_model: str = Field(
        default="gemini-2.5-pro",
        description="Model used for all three curriculum generations.",
    )
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the Generative Language REST API.",
    )
    request_timeout: float = Field(
        default=120.0,
        description="Timeout in seconds for a single generation request.",
    )
    retry_attempts: int = Field(
        default=3,
        ge=1,
        description="How many times a generation is attempted before giving up.",
    )
    retry_base_delay: float = Field(
        default=1.0,
        ge=0,
        description="Delay in seconds before the first retry; doubles on every further attempt.",
    )
    output_language: str = Field(
        default="Bahasa Indonesia",
        description="Language the model is asked to write the curriculum in.",
    )
    default_teacher_name: str = Field(
        default="Guru",
        description="Author name printed on exported documents when the form does not provide one.",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()


settings = get_settings()
