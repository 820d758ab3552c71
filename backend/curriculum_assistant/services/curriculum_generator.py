"""Service that asks the language model for curriculum artifacts."""

from __future__ import annotations

import json
import logging
import re
import time
from typing import Any, Callable, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from curriculum_assistant.prompts import (
    LEARNING_SEQUENCE_PROMPT,
    LEARNING_SEQUENCE_SCHEMA,
    LESSON_PLAN_PROMPT,
    LOVE_VALUE_LIST,
    OBJECTIVES_PER_OUTCOME,
    OBJECTIVE_ANALYSIS_PROMPT,
    PROFILE_DIMENSION_LIST,
    numbered,
    objective_analysis_schema,
)
from curriculum_assistant.schemas.curriculum import LearningSequence, LessonForm, ObjectiveAnalysis, SequenceItem
from curriculum_assistant.services.gemini_client import GeminiClient
from curriculum_assistant.services.retry import ResponseParseError, with_retry

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_FENCE_START_RE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_END_RE = re.compile(r"\s*```$")
_MINUTES_RE = re.compile(r"(\d+)")


def split_time_allocation(time_allocation: str) -> tuple[int, int, int]:
    """Split the minutes of ``time_allocation`` into opening, core and closing parts.

    The first integer in the text is taken as the total; the parts are 15%, 70%
    and 15% of it, rounded half up. Text without a number yields zeros.
    """

    match = _MINUTES_RE.search(time_allocation or "")
    total = int(match.group(1)) if match else 0
    opening = (total * 15 + 50) // 100
    core = (total * 70 + 50) // 100
    return opening, core, opening


def strip_code_fences(reply: str) -> str:
    reply = _FENCE_START_RE.sub("", reply.strip())
    return _FENCE_END_RE.sub("", reply)


def parse_json_reply(reply: str, model: Type[ModelT]) -> ModelT:
    """Parse a JSON reply into ``model``; any failure becomes :class:`ResponseParseError`."""

    cleaned = strip_code_fences(reply)
    if not cleaned:
        raise ResponseParseError("Model returned an empty reply")
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        logger.debug("Model response is not a valid JSON: %s", cleaned)
        raise ResponseParseError(f"Model reply is not valid JSON: {exc}") from exc
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ResponseParseError(f"Model reply does not match {model.__name__}: {exc}") from exc


class CurriculumGenerator:
    """Generate objective analyses, learning sequences and lesson plans."""

    def __init__(
        self,
        client: GeminiClient,
        *,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        language: str = "Bahasa Indonesia",
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._client = client
        self._max_attempts = max_attempts
        self._base_delay = base_delay
        self._language = language
        self._sleep = sleep

    # ------------------------------------------------------------------
    def generate_objective_analysis(self, form: LessonForm) -> ObjectiveAnalysis:
        """Derive learning objectives for every learning outcome of ``form``."""

        prompt = OBJECTIVE_ANALYSIS_PROMPT.substitute(
            **self._context(form),
            learning_outcomes=numbered(form.learning_outcomes, prefix="LO "),
            objectives_per_outcome=OBJECTIVES_PER_OUTCOME,
            love_values=LOVE_VALUE_LIST,
        )
        schema = objective_analysis_schema(form.semester.value)

        def _parse(reply: str) -> ObjectiveAnalysis:
            analysis = parse_json_reply(reply, ObjectiveAnalysis)
            if analysis.semester != form.semester:
                raise ResponseParseError(
                    f"Model answered for semester {analysis.semester.value}, expected {form.semester.value}"
                )
            return analysis

        analysis = self._generate(prompt, _parse, response_schema=schema)
        logger.info(
            "Generated %s objectives for %s learning outcomes",
            len(analysis.objectives()),
            len(analysis.outcome_analyses),
        )
        return analysis

    def generate_learning_sequence(self, form: LessonForm, analysis: ObjectiveAnalysis) -> LearningSequence:
        """Build the learning objective flow for an existing analysis."""

        rows = analysis.flat_rows()
        prompt = LEARNING_SEQUENCE_PROMPT.substitute(
            **self._context(form),
            objectives=numbered([row.objective for row in rows]),
            core_materials=numbered([row.core_material for row in rows]),
            profile_dimensions=PROFILE_DIMENSION_LIST,
        )
        sequence = self._generate(
            prompt,
            lambda reply: parse_json_reply(reply, LearningSequence),
            response_schema=LEARNING_SEQUENCE_SCHEMA,
        )
        logger.info("Generated learning sequence with %s items", len(sequence.items))
        return sequence

    def generate_lesson_plan(self, form: LessonForm, item: SequenceItem) -> str:
        """Return a Markdown lesson plan for a single sequence item."""

        opening, core, closing = split_time_allocation(item.time_allocation)
        prompt = LESSON_PLAN_PROMPT.substitute(
            **self._context(form),
            objective_no=item.no,
            objective=item.objective,
            core_material=item.core_material,
            indicator=item.indicator,
            love_values=item.love_values,
            time_allocation=item.time_allocation,
            profile_dimensions=", ".join(dimension.value for dimension in item.profile_dimensions),
            assessment=item.assessment,
            learning_resources=item.learning_resources,
            opening_minutes=opening,
            core_minutes=core,
            closing_minutes=closing,
        )

        def _parse(reply: str) -> str:
            text = reply.strip()
            if not text:
                raise ResponseParseError("Model returned an empty lesson plan")
            return text

        markdown = self._generate(prompt, _parse, response_mime_type="text/plain")
        logger.info("Generated lesson plan for TP %s (%s characters)", item.no, len(markdown))
        return markdown

    # ------------------------------------------------------------------
    def _context(self, form: LessonForm) -> Dict[str, Any]:
        return {
            "institution_name": form.institution_name,
            "teacher_name": form.teacher_name,
            "subject": form.subject,
            "phase": form.phase.value,
            "grade": form.grade.value,
            "academic_year": form.academic_year,
            "semester": form.semester.value,
            "language": self._language,
        }

    def _generate(
        self,
        prompt: str,
        parse: Callable[[str], Any],
        *,
        response_mime_type: str = "application/json",
        response_schema: Optional[Dict[str, Any]] = None,
    ) -> Any:
        def _attempt() -> Any:
            logger.debug("Sending prompt to model '%s'", self._client.model)
            response = self._client.generate(
                prompt,
                response_mime_type=response_mime_type,
                response_schema=response_schema,
            )
            return parse(response.text)

        return with_retry(
            _attempt,
            max_attempts=self._max_attempts,
            base_delay=self._base_delay,
            sleep=self._sleep,
        )
