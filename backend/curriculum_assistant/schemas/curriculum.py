"""Schemas for the lesson form and the generated curriculum artifacts."""

from __future__ import annotations

from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from curriculum_assistant.curriculum_options import GRADES_BY_PHASE, Grade, Phase, ProfileDimension, Semester

MAX_LEARNING_OUTCOMES = 6

NonEmptyStr = Annotated[str, Field(min_length=1)]


class LessonForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    institution_name: NonEmptyStr = Field(..., description="Name of the school (madrasah)")
    teacher_name: NonEmptyStr = Field(..., description="Teacher preparing the plan")
    subject: NonEmptyStr = Field(..., description="Subject taught")
    phase: Phase = Field(..., description="Curriculum phase A-F")
    grade: Grade = Field(..., description="Grade, must belong to the selected phase")
    academic_year: NonEmptyStr = Field(..., description="Academic year, e.g. 2024/2025")
    semester: Semester = Field(..., description="Semester of the academic year")
    learning_outcomes: List[NonEmptyStr] = Field(
        ...,
        min_length=1,
        max_length=MAX_LEARNING_OUTCOMES,
        description="Learning outcome (capaian pembelajaran) statements to analyse",
    )

    @model_validator(mode="after")
    def _grade_matches_phase(self) -> "LessonForm":
        allowed = GRADES_BY_PHASE[self.phase]
        if self.grade not in allowed:
            choices = ", ".join(grade.value for grade in allowed)
            raise ValueError(f"Grade {self.grade.value} is not part of phase {self.phase.value} ({choices})")
        return self


class ObjectiveDetail(BaseModel):
    no: int = Field(..., description="Position of the objective within its learning outcome")
    content: str = Field(..., description="Learning content")
    competency: str = Field(..., description="Competency trained")
    core_material: str = Field(..., description="Core material (materi pokok)")
    objective: str = Field(..., description="Learning objective integrating a love-based value")


class OutcomeAnalysis(BaseModel):
    learning_outcome: str = Field(..., description="Learning outcome the objectives were derived from")
    details: List[ObjectiveDetail] = Field(..., min_length=1)


class FlatObjectiveRow(BaseModel):
    no: int = Field(..., description="Number across all learning outcomes, starting at 1")
    learning_outcome: str
    content: str
    competency: str
    core_material: str
    objective: str


class ObjectiveAnalysis(BaseModel):
    semester: Semester
    outcome_analyses: List[OutcomeAnalysis] = Field(default_factory=list)

    def flat_rows(self) -> list[FlatObjectiveRow]:
        """Return every objective as a table row, numbered across all outcomes."""

        rows: list[FlatObjectiveRow] = []
        for entry in self.outcome_analyses:
            for detail in entry.details:
                rows.append(
                    FlatObjectiveRow(
                        no=len(rows) + 1,
                        learning_outcome=entry.learning_outcome,
                        content=detail.content,
                        competency=detail.competency,
                        core_material=detail.core_material,
                        objective=detail.objective,
                    )
                )
        return rows

    def objectives(self) -> list[str]:
        return [detail.objective for entry in self.outcome_analyses for detail in entry.details]


class SequenceItem(BaseModel):
    no: int = Field(..., ge=1, description="Objective number (TP ke-n)")
    objective: str = Field(..., description="Learning objective taken from the analysis")
    indicator: str = Field(..., description="Achievement indicator")
    core_material: str = Field(..., description="Core material for the objective")
    love_values: str = Field(..., description="Relevant love-based values and why they fit")
    time_allocation: str = Field(..., description="Time allocation, e.g. '90 Menit (2 JP)'")
    profile_dimensions: List[ProfileDimension] = Field(default_factory=list)
    assessment: str = Field(..., description="Suitable assessment")
    learning_resources: str = Field(..., description="Learning resources")


class LearningSequence(BaseModel):
    items: List[SequenceItem] = Field(default_factory=list)


class ObjectiveAnalysisResponse(BaseModel):
    analysis: ObjectiveAnalysis
    rows: List[FlatObjectiveRow] = Field(..., description="Objectives flattened for tabular display")


class SequenceRequest(BaseModel):
    form: LessonForm
    analysis: ObjectiveAnalysis


class LessonPlanRequest(BaseModel):
    form: LessonForm
    item: SequenceItem


class LessonPlanResponse(BaseModel):
    objective_no: int
    markdown: str = Field(..., description="Lesson plan as Markdown")


class CurriculumExportRequest(BaseModel):
    form: Optional[LessonForm] = None
    analysis: Optional[ObjectiveAnalysis] = None
    sequence: Optional[LearningSequence] = None


class LessonPlanExportRequest(BaseModel):
    form: Optional[LessonForm] = None
    objective_no: int = Field(..., ge=1)
    markdown: str = Field(..., description="Lesson plan Markdown to convert")
