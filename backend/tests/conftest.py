"""Shared fixtures: a valid lesson form and canned model replies."""

from __future__ import annotations

import json
from typing import Any, Callable, Iterable, Union

import pytest

from curriculum_assistant.schemas.curriculum import LearningSequence, LessonForm, ObjectiveAnalysis
from curriculum_assistant.services.gemini_client import GeminiResponse


class ScriptedClient:
    """Gemini client stub that replays replies (or raises exceptions) in order."""

    model = "scripted"

    def __init__(self, replies: Iterable[Union[str, Exception]]) -> None:
        self._replies = list(replies)
        self.calls: list[dict[str, Any]] = []

    def generate(self, prompt: str, **kwargs: Any) -> GeminiResponse:
        self.calls.append({"prompt": prompt, **kwargs})
        if not self._replies:
            raise AssertionError("Model called more often than scripted")
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return GeminiResponse(model=self.model, text=reply, raw={})


@pytest.fixture
def form_data() -> dict[str, Any]:
    return {
        "institution_name": "MTs Negeri 1",
        "teacher_name": "Siti Aminah",
        "subject": "Ilmu Pengetahuan Alam",
        "phase": "D",
        "grade": "7",
        "academic_year": "2024/2025",
        "semester": "Ganjil",
        "learning_outcomes": [
            "Peserta didik memahami siklus air.",
            "Peserta didik menjelaskan ekosistem.",
        ],
    }


@pytest.fixture
def lesson_form(form_data: dict[str, Any]) -> LessonForm:
    return LessonForm.model_validate(form_data)


@pytest.fixture
def analysis_payload() -> dict[str, Any]:
    return {
        "semester": "Ganjil",
        "outcome_analyses": [
            {
                "learning_outcome": "Peserta didik memahami siklus air.",
                "details": [
                    {
                        "no": 1,
                        "content": "Siklus air",
                        "competency": "Menjelaskan",
                        "core_material": "Evaporasi",
                        "objective": "Menjelaskan evaporasi dengan Cinta Alam",
                    },
                    {
                        "no": 2,
                        "content": "Siklus air",
                        "competency": "Mengamati",
                        "core_material": "Kondensasi",
                        "objective": "Mengamati kondensasi dengan Cinta Ilmu",
                    },
                ],
            },
            {
                "learning_outcome": "Peserta didik menjelaskan ekosistem.",
                "details": [
                    {
                        "no": 1,
                        "content": "Ekosistem",
                        "competency": "Mengidentifikasi",
                        "core_material": "Rantai makanan",
                        "objective": "Mengidentifikasi rantai makanan dengan Cinta Alam",
                    }
                ],
            },
        ],
    }


@pytest.fixture
def analysis(analysis_payload: dict[str, Any]) -> ObjectiveAnalysis:
    return ObjectiveAnalysis.model_validate(analysis_payload)


@pytest.fixture
def sequence_payload() -> dict[str, Any]:
    return {
        "items": [
            {
                "no": 1,
                "objective": "Menjelaskan evaporasi dengan Cinta Alam",
                "indicator": "Menyebutkan tahapan evaporasi",
                "core_material": "Evaporasi",
                "love_values": "Cinta Alam: mengagumi ciptaan",
                "time_allocation": "90 Menit (2 JP)",
                "profile_dimensions": ["Penalaran Kritis", "Kolaborasi"],
                "assessment": "Observasi diskusi kelompok",
                "learning_resources": "Buku teks, video edukasi",
            }
        ]
    }


@pytest.fixture
def sequence(sequence_payload: dict[str, Any]) -> LearningSequence:
    return LearningSequence.model_validate(sequence_payload)


@pytest.fixture
def as_json() -> Callable[[Any], str]:
    return lambda payload: json.dumps(payload, ensure_ascii=False)


@pytest.fixture
def scripted_client() -> Callable[..., ScriptedClient]:
    return lambda *replies: ScriptedClient(replies)
