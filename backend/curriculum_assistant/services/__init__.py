"""Service layer for the application."""

from curriculum_assistant.services.curriculum_generator import CurriculumGenerator, split_time_allocation
from curriculum_assistant.services.gemini_client import (
    GeminiClient,
    GeminiConfigurationError,
    GeminiError,
    GeminiResponse,
)
from curriculum_assistant.services.retry import GenerationFailedError, ResponseParseError, with_retry

__all__ = [
    "CurriculumGenerator",
    "GeminiClient",
    "GeminiConfigurationError",
    "GeminiError",
    "GeminiResponse",
    "GenerationFailedError",
    "ResponseParseError",
    "split_time_allocation",
    "with_retry",
]
