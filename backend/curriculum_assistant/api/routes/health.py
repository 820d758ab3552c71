"""Health check and form option endpoints."""

from typing import Any

from fastapi import APIRouter

from curriculum_assistant.curriculum_options import options_payload

router = APIRouter()


@router.get("/health", tags=["system"])
def healthcheck() -> dict[str, str]:
    """Simple readiness probe."""

    return {"status": "ok"}


@router.get("/options", tags=["system"])
def form_options() -> dict[str, Any]:
    """Option sets for the lesson form; grades are keyed by phase."""

    return options_payload()
