"""Validation rules for the lesson form and the curriculum option sets."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from curriculum_assistant.curriculum_options import (
    Grade,
    Phase,
    grades_for_phase,
    options_payload,
    phase_for_grade,
)
from curriculum_assistant.schemas.curriculum import LessonForm, ObjectiveAnalysis, SequenceItem


def test_form_is_stripped(form_data) -> None:
    form = LessonForm.model_validate({**form_data, "subject": "  Fiqih  "})

    assert form.subject == "Fiqih"
    assert form.phase is Phase.D
    assert form.grade is Grade.G7


def test_grade_must_belong_to_phase(form_data) -> None:
    with pytest.raises(ValidationError, match="Grade 10 is not part of phase D"):
        LessonForm.model_validate({**form_data, "grade": "10"})


@pytest.mark.parametrize("field", ["institution_name", "teacher_name", "subject", "academic_year"])
def test_blank_text_fields_are_rejected(form_data, field: str) -> None:
    with pytest.raises(ValidationError):
        LessonForm.model_validate({**form_data, field: "   "})


@pytest.mark.parametrize(
    "outcomes",
    [[], ["   "], [f"Capaian {index}" for index in range(7)]],
)
def test_learning_outcome_limits(form_data, outcomes: list[str]) -> None:
    with pytest.raises(ValidationError):
        LessonForm.model_validate({**form_data, "learning_outcomes": outcomes})


def test_unknown_semester_is_rejected(form_data) -> None:
    with pytest.raises(ValidationError):
        LessonForm.model_validate({**form_data, "semester": "Ketiga"})


def test_flat_rows_number_across_outcomes(analysis: ObjectiveAnalysis) -> None:
    rows = analysis.flat_rows()

    assert [row.no for row in rows] == [1, 2, 3]
    assert [row.learning_outcome for row in rows] == [
        "Peserta didik memahami siklus air.",
        "Peserta didik memahami siklus air.",
        "Peserta didik menjelaskan ekosistem.",
    ]
    assert rows[2].core_material == "Rantai makanan"
    assert analysis.objectives()[1] == "Mengamati kondensasi dengan Cinta Ilmu"


def test_outcome_without_objectives_is_invalid(analysis_payload) -> None:
    broken = {**analysis_payload, "outcome_analyses": [{"learning_outcome": "x", "details": []}]}

    with pytest.raises(ValidationError):
        ObjectiveAnalysis.model_validate(broken)


def test_sequence_item_number_starts_at_one(sequence_payload) -> None:
    with pytest.raises(ValidationError):
        SequenceItem.model_validate({**sequence_payload["items"][0], "no": 0})


def test_phase_and_grade_lookup() -> None:
    assert grades_for_phase(Phase.E) == (Grade.G10,)
    assert phase_for_grade(Grade.G12) is Phase.F
    assert all(phase_for_grade(grade) is phase for phase in Phase for grade in grades_for_phase(phase))


def test_options_payload_covers_every_option() -> None:
    payload = options_payload()

    assert [item["value"] for item in payload["phases"]] == ["A", "B", "C", "D", "E", "F"]
    assert [item["value"] for item in payload["grades"]["D"]] == ["7", "8", "9"]
    assert [item["value"] for item in payload["semesters"]] == ["Ganjil", "Genap"]
    assert len(payload["love_values"]) == 5
    assert len(payload["profile_dimensions"]) == 8
    assert {"label": "Grade 1", "value": "1"} in payload["grades"]["A"]
