"""Common dependency functions for API routes."""

from functools import lru_cache

from fastapi import Depends

from curriculum_assistant.core.config import Settings, get_settings
from curriculum_assistant.services.curriculum_generator import CurriculumGenerator
from curriculum_assistant.services.gemini_client import GeminiClient


@lru_cache
def get_gemini_client() -> GeminiClient:
    settings = get_settings()
    return GeminiClient(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        base_url=settings.gemini_base_url,
        timeout=settings.request_timeout,
    )


def get_app_settings() -> Settings:
    return get_settings()


def get_curriculum_generator(
    client: GeminiClient = Depends(get_gemini_client),
    settings: Settings = Depends(get_app_settings),
) -> CurriculumGenerator:
    return CurriculumGenerator(
        client,
        max_attempts=settings.retry_attempts,
        base_delay=settings.retry_base_delay,
        language=settings.output_language,
    )
