"""Endpoints that generate the curriculum artifacts."""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

from fastapi import APIRouter, Depends, HTTPException

from curriculum_assistant.api.deps import get_curriculum_generator
from curriculum_assistant.schemas.curriculum import (
    LearningSequence,
    LessonForm,
    LessonPlanRequest,
    LessonPlanResponse,
    ObjectiveAnalysisResponse,
    SequenceRequest,
)
from curriculum_assistant.services.curriculum_generator import CurriculumGenerator
from curriculum_assistant.services.gemini_client import GeminiConfigurationError, GeminiError
from curriculum_assistant.services.retry import GenerationFailedError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/curriculum", tags=["curriculum"])

T = TypeVar("T")


def _run_generation(action: str, call: Callable[[], T]) -> T:
    try:
        return call()
    except GeminiConfigurationError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    except GenerationFailedError as exc:
        logger.error("Failed to generate %s: %s", action, exc.__cause__ or exc)
        raise HTTPException(status_code=502, detail=f"Failed to generate {action}: {exc}") from exc
    except GeminiError as exc:
        logger.error("Gemini rejected the %s request: %s", action, exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc


@router.post("/objectives", response_model=ObjectiveAnalysisResponse)
def generate_objectives(
    form: LessonForm,
    generator: CurriculumGenerator = Depends(get_curriculum_generator),
) -> ObjectiveAnalysisResponse:
    analysis = _run_generation("learning objectives", lambda: generator.generate_objective_analysis(form))
    return ObjectiveAnalysisResponse(analysis=analysis, rows=analysis.flat_rows())


@router.post("/sequence", response_model=LearningSequence)
def generate_sequence(
    payload: SequenceRequest,
    generator: CurriculumGenerator = Depends(get_curriculum_generator),
) -> LearningSequence:
    if not payload.analysis.outcome_analyses:
        raise HTTPException(status_code=400, detail="Generate the learning objectives first")
    return _run_generation(
        "learning objective flow",
        lambda: generator.generate_learning_sequence(payload.form, payload.analysis),
    )


@router.post("/lesson-plan", response_model=LessonPlanResponse)
def generate_lesson_plan(
    payload: LessonPlanRequest,
    generator: CurriculumGenerator = Depends(get_curriculum_generator),
) -> LessonPlanResponse:
    markdown = _run_generation(
        "lesson plan",
        lambda: generator.generate_lesson_plan(payload.form, payload.item),
    )
    return LessonPlanResponse(objective_no=payload.item.no, markdown=markdown)
