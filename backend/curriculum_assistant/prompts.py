"""Prompt templates and response schemas for the three curriculum generations."""
from __future__ import annotations

from string import Template
from typing import Any

from .curriculum_options import LoveValue, ProfileDimension

OBJECTIVES_PER_OUTCOME = 6

LOVE_VALUE_LIST = "\n".join(f"- {value.value}" for value in LoveValue)
PROFILE_DIMENSION_LIST = ", ".join(item.value for item in ProfileDimension)

OBJECTIVE_ANALYSIS_PROMPT = Template("""
You are a curriculum expert and instructional designer for Islamic schools (madrasah).
Analyse the learning outcomes below and derive deep-learning objectives that integrate
the love-based curriculum (Kurikulum Berbasis Cinta, KBC).

Context:
- School: $institution_name
- Teacher: $teacher_name
- Subject: $subject
- Phase: $phase
- Grade: $grade
- Academic year: $academic_year
- Semester: $semester

Learning outcomes to analyse:
$learning_outcomes

For every learning outcome produce exactly $objectives_per_outcome sets of
(content, competency, core material, learning objective). Every learning objective must
explicitly integrate one of these KBC values:
$love_values

Write all text in $language. Reply with JSON only, shaped like:
{
  "semester": "$semester",
  "outcome_analyses": [
    {
      "learning_outcome": "the learning outcome as given",
      "details": [
        {"no": 1, "content": "...", "competency": "...", "core_material": "...", "objective": "..."}
      ]
    }
  ]
}
""")

LEARNING_SEQUENCE_PROMPT = Template("""
You are a curriculum expert. Build the learning objective flow (Alur Tujuan Pembelajaran)
for the learning objectives below.

Context:
- School: $institution_name
- Teacher: $teacher_name
- Subject: $subject
- Phase: $phase
- Grade: $grade
- Semester: $semester

Learning objectives:
$objectives

Core materials already identified:
$core_materials

For every learning objective give an indicator, the matching core material, the relevant
KBC values with a short reason, a realistic time allocation (for example "90 Menit (2 JP)"),
graduate profile dimensions chosen only from [$profile_dimensions], a suitable assessment and
learning resources.

Write all text in $language. Reply with JSON only, shaped like:
{
  "items": [
    {
      "no": 1,
      "objective": "...",
      "indicator": "...",
      "core_material": "...",
      "love_values": "...",
      "time_allocation": "90 Menit (2 JP)",
      "profile_dimensions": ["..."],
      "assessment": "...",
      "learning_resources": "..."
    }
  ]
}
""")

LESSON_PLAN_PROMPT = Template("""
You are a curriculum developer experienced in deep learning (mindful, meaningful, joyful)
and in the love-based curriculum (KBC). Write a complete deep-learning lesson plan for the
learning objective below.

Identity:
- School: $institution_name
- Teacher: $teacher_name
- Subject: $subject
- Phase: $phase
- Grade: $grade
- Semester: $semester
- Academic year: $academic_year

Selected learning objective:
- Objective: $objective
- Core material: $core_material
- Indicator: $indicator
- KBC values: $love_values
- Time allocation: $time_allocation
- Graduate profile dimensions: $profile_dimensions
- Assessment: $assessment
- Learning resources: $learning_resources

Write in $language and format the answer as Markdown with these parts:

# Lesson Plan
## TP $objective_no

**I. IDENTITY** with subject material integrated with KBC values, graduate profile dimensions
and core material.

**II. LEARNING DESIGN**: learning outcome, cross-disciplinary links, learning objective,
pedagogical practice (model, strategy, method), learning partnerships, learning environment
(physical, virtual, learning culture) and use of digital tools.

**III. LEARNING EXPERIENCE**, each stage described as mindful, meaningful and joyful with steps:
1. Opening activity ($opening_minutes minutes)
2. Core activity ($core_minutes minutes)
3. Closing activity ($closing_minutes minutes)

**IV. ASSESSMENT**: initial, formative (including attitude) and summative assessment.

**Appendix**: a student worksheet (LKPD) and rubrics for knowledge, attitude and presentation.
Give every worksheet and rubric as a Markdown pipe table with a header row and a
|---| separator row.
""")

OBJECTIVE_ANALYSIS_SCHEMA_TEMPLATE: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "semester": {"type": "STRING"},
        "outcome_analyses": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "learning_outcome": {"type": "STRING"},
                    "details": {
                        "type": "ARRAY",
                        "items": {
                            "type": "OBJECT",
                            "properties": {
                                "no": {"type": "INTEGER"},
                                "content": {"type": "STRING"},
                                "competency": {"type": "STRING"},
                                "core_material": {"type": "STRING"},
                                "objective": {"type": "STRING"},
                            },
                            "required": ["no", "content", "competency", "core_material", "objective"],
                            "propertyOrdering": ["no", "content", "competency", "core_material", "objective"],
                        },
                    },
                },
                "required": ["learning_outcome", "details"],
                "propertyOrdering": ["learning_outcome", "details"],
            },
        },
    },
    "required": ["semester", "outcome_analyses"],
    "propertyOrdering": ["semester", "outcome_analyses"],
}

_SEQUENCE_FIELDS = [
    "no",
    "objective",
    "indicator",
    "core_material",
    "love_values",
    "time_allocation",
    "profile_dimensions",
    "assessment",
    "learning_resources",
]

LEARNING_SEQUENCE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "items": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "no": {"type": "INTEGER"},
                    "objective": {"type": "STRING"},
                    "indicator": {"type": "STRING"},
                    "core_material": {"type": "STRING"},
                    "love_values": {"type": "STRING"},
                    "time_allocation": {"type": "STRING"},
                    "profile_dimensions": {
                        "type": "ARRAY",
                        "items": {"type": "STRING", "enum": [item.value for item in ProfileDimension]},
                    },
                    "assessment": {"type": "STRING"},
                    "learning_resources": {"type": "STRING"},
                },
                "required": list(_SEQUENCE_FIELDS),
                "propertyOrdering": list(_SEQUENCE_FIELDS),
            },
        },
    },
    "required": ["items"],
    "propertyOrdering": ["items"],
}


def objective_analysis_schema(semester: str) -> dict[str, Any]:
    """Return the analysis schema with the semester pinned to ``semester``."""

    properties = {
        **OBJECTIVE_ANALYSIS_SCHEMA_TEMPLATE["properties"],
        "semester": {"type": "STRING", "enum": [semester]},
    }
    return {**OBJECTIVE_ANALYSIS_SCHEMA_TEMPLATE, "properties": properties}


def numbered(items: list[str], *, prefix: str = "") -> str:
    """Render ``items`` as a numbered list, one per line."""

    return "\n".join(f"{prefix}{index}. {item}" for index, item in enumerate(items, start=1))


__all__ = [
    "LEARNING_SEQUENCE_PROMPT",
    "LEARNING_SEQUENCE_SCHEMA",
    "LESSON_PLAN_PROMPT",
    "LOVE_VALUE_LIST",
    "OBJECTIVES_PER_OUTCOME",
    "OBJECTIVE_ANALYSIS_PROMPT",
    "PROFILE_DIMENSION_LIST",
    "numbered",
    "objective_analysis_schema",
]
