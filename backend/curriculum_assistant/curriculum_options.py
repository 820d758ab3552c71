"""Closed option sets used by the lesson form and the generated curriculum."""
from __future__ import annotations

from enum import Enum
from typing import Any


class Phase(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"


class Grade(str, Enum):
    G1 = "1"
    G2 = "2"
    G3 = "3"
    G4 = "4"
    G5 = "5"
    G6 = "6"
    G7 = "7"
    G8 = "8"
    G9 = "9"
    G10 = "10"
    G11 = "11"
    G12 = "12"


class Semester(str, Enum):
    GANJIL = "Ganjil"
    GENAP = "Genap"


class LoveValue(str, Enum):
    """Values of the love-based curriculum (Kurikulum Berbasis Cinta, KBC)."""

    LOVE_OF_GOD_AND_PROPHET = "Cinta Allah dan Rasul-Nya"
    LOVE_OF_KNOWLEDGE = "Cinta Ilmu"
    LOVE_OF_SELF_AND_OTHERS = "Cinta Diri dan Sesama"
    LOVE_OF_NATURE = "Cinta Alam"
    LOVE_OF_NATION = "Cinta Bangsa dan Negara"


class ProfileDimension(str, Enum):
    """Graduate profile dimensions a learning objective can contribute to."""

    FAITH = "Keimanan dan Ketakwaan terhadap Tuhan YME"
    CITIZENSHIP = "Kewargaan"
    CRITICAL_REASONING = "Penalaran Kritis"
    CREATIVITY = "Kreativitas"
    COLLABORATION = "Kolaborasi"
    INDEPENDENCE = "Kemandirian"
    HEALTH = "Kesehatan"
    COMMUNICATION = "Komunikasi"


PHASE_LABELS: dict[Phase, str] = {
    Phase.A: "Phase A (Grades 1-2 SD/MI)",
    Phase.B: "Phase B (Grades 3-4 SD/MI)",
    Phase.C: "Phase C (Grades 5-6 SD/MI)",
    Phase.D: "Phase D (Grades 7-9 SMP/MTs)",
    Phase.E: "Phase E (Grade 10 SMA/MA)",
    Phase.F: "Phase F (Grades 11-12 SMA/MA)",
}

GRADES_BY_PHASE: dict[Phase, tuple[Grade, ...]] = {
    Phase.A: (Grade.G1, Grade.G2),
    Phase.B: (Grade.G3, Grade.G4),
    Phase.C: (Grade.G5, Grade.G6),
    Phase.D: (Grade.G7, Grade.G8, Grade.G9),
    Phase.E: (Grade.G10,),
    Phase.F: (Grade.G11, Grade.G12),
}

SEMESTER_LABELS: dict[Semester, str] = {
    Semester.GANJIL: "Ganjil (odd)",
    Semester.GENAP: "Genap (even)",
}


def grade_label(grade: Grade) -> str:
    return f"Grade {grade.value}"


def grades_for_phase(phase: Phase) -> tuple[Grade, ...]:
    return GRADES_BY_PHASE[phase]


def phase_for_grade(grade: Grade) -> Phase:
    for phase, grades in GRADES_BY_PHASE.items():
        if grade in grades:
            return phase
    raise ValueError(f"Grade {grade.value} is not assigned to any phase")


def options_payload() -> dict[str, Any]:
    """Return every option set as label/value pairs for building the lesson form."""

    return {
        "phases": [{"label": PHASE_LABELS[phase], "value": phase.value} for phase in Phase],
        "grades": {
            phase.value: [{"label": grade_label(grade), "value": grade.value} for grade in grades]
            for phase, grades in GRADES_BY_PHASE.items()
        },
        "semesters": [{"label": SEMESTER_LABELS[semester], "value": semester.value} for semester in Semester],
        "love_values": [{"label": value.value, "value": value.value} for value in LoveValue],
        "profile_dimensions": [{"label": item.value, "value": item.value} for item in ProfileDimension],
    }


__all__ = [
    "GRADES_BY_PHASE",
    "Grade",
    "LoveValue",
    "PHASE_LABELS",
    "Phase",
    "ProfileDimension",
    "SEMESTER_LABELS",
    "Semester",
    "grade_label",
    "grades_for_phase",
    "options_payload",
    "phase_for_grade",
]
