"""Utilities for exporting curriculum results and lesson plans into DOCX files."""
from __future__ import annotations

import re
from dataclasses import dataclass
from io import BytesIO
from typing import Iterable

from docx import Document
from docx.document import Document as _Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Twips
from docx.table import _Row
from docx.text.paragraph import Paragraph as _DocxParagraph

from .curriculum_options import PHASE_LABELS, grade_label
from .document_models import DocumentBlock, Paragraph, Table, TableCell, TableRow, TextRun
from .markdown_converter import SPACER_AFTER, convert
from .schemas.curriculum import LearningSequence, LessonForm, ObjectiveAnalysis

DOCUMENT_TITLE = "Deep Learning Objectives & Lesson Planning"
SECTION_SPACER_AFTER = 240

OBJECTIVE_TABLE_HEADERS = [
    "No",
    "Learning Outcome",
    "Learning Content",
    "Competency",
    "Core Material",
    "Learning Objective",
]

SEQUENCE_TABLE_HEADERS = [
    "No",
    "Learning Objective",
    "Indicator",
    "Core Material",
    "KBC Values",
    "Time Allocation",
    "Graduate Profile Dimensions",
    "Assessment",
    "Learning Resources",
]


@dataclass(slots=True)
class ExportedDocument:
    filename: str
    payload: bytes


def _sanitize_stem(value: str, fallback: str) -> str:
    """Return a filesystem-safe fragment for the generated file name."""

    sanitized = re.sub(r"[^0-9A-Za-z_-]+", "_", value or "").strip("._")
    return sanitized or fallback


def curriculum_filename(form: LessonForm | None) -> str:
    subject = _sanitize_stem(form.subject if form else "", "Generated")
    year = _sanitize_stem(form.academic_year if form else "", "Year")
    return f"Curriculum_Summary_{subject}_{year}.docx"


def lesson_plan_filename(objective_no: int, form: LessonForm | None) -> str:
    subject = _sanitize_stem(form.subject if form else "", "Lesson")
    year = _sanitize_stem(form.academic_year if form else "", "Year")
    return f"Lesson_Plan_TP_{objective_no}_{subject}_{year}.docx"


# ----------------------------------------------------------------------
# Block rendering
# ----------------------------------------------------------------------
def _fill_paragraph(target: _DocxParagraph, paragraph: Paragraph, *, force_bold: bool = False) -> None:
    for run in paragraph.runs:
        docx_run = target.add_run(run.text)
        if run.bold or force_bold:
            docx_run.bold = True
        if run.italic:
            docx_run.italic = True

    paragraph_format = target.paragraph_format
    if paragraph.spacing_before is not None:
        paragraph_format.space_before = Twips(paragraph.spacing_before)
    if paragraph.spacing_after is not None:
        paragraph_format.space_after = Twips(paragraph.spacing_after)


def _mark_header_row(row: _Row) -> None:
    """Repeat ``row`` at the top of every page the table spans."""

    tr_pr = row._tr.get_or_add_trPr()  # type: ignore[attr-defined]
    element = OxmlElement("w:tblHeader")
    element.set(qn("w:val"), "true")
    tr_pr.append(element)


def _append_paragraph(document: _Document, paragraph: Paragraph) -> None:
    style = f"Heading {paragraph.heading_level}" if paragraph.heading_level else None
    _fill_paragraph(document.add_paragraph(style=style), paragraph)


def _append_table(document: _Document, table: Table) -> None:
    column_count = table.column_count
    if not table.rows or column_count == 0:
        return

    docx_table = document.add_table(rows=len(table.rows), cols=column_count)
    docx_table.style = "Table Grid"

    for row_index, row in enumerate(table.rows):
        for column_index, cell in enumerate(row.cells):
            target = docx_table.cell(row_index, column_index).paragraphs[0]
            _fill_paragraph(target, cell.paragraph, force_bold=row.is_header)
        if row.is_header:
            _mark_header_row(docx_table.rows[row_index])


def append_blocks(document: _Document, blocks: Iterable[DocumentBlock]) -> None:
    """Append converted Markdown blocks to ``document`` in order."""

    for block in blocks:
        if isinstance(block, Table):
            _append_table(document, block)
        else:
            _append_paragraph(document, block)


# ----------------------------------------------------------------------
# Document assembly
# ----------------------------------------------------------------------
def _plain(text: str, **kwargs) -> Paragraph:
    return Paragraph([TextRun(text)], **kwargs)


def _spacer(after: int = SECTION_SPACER_AFTER) -> Paragraph:
    return Paragraph(spacing_after=after)


def _data_table(headers: list[str], rows: Iterable[list[str]]) -> Table:
    def _row(values: list[str], *, is_header: bool = False) -> TableRow:
        return TableRow(cells=[TableCell(_plain(value)) for value in values], is_header=is_header)

    return Table(rows=[_row(headers, is_header=True), *(_row(values) for values in rows)])


def _add_centered(document: _Document, text: str, *, title: bool = False) -> None:
    paragraph = document.add_heading(text, level=0) if title else document.add_paragraph(text)
    paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER


def _identity_blocks(form: LessonForm) -> list[DocumentBlock]:
    return [
        _plain("I. GENERAL IDENTITY", heading_level=1),
        _plain(f"School: {form.institution_name}"),
        _plain(f"Teacher: {form.teacher_name}"),
        _plain(f"Subject: {form.subject}"),
        _plain(f"Phase: {PHASE_LABELS[form.phase]}"),
        _plain(f"Grade: {grade_label(form.grade)}"),
        _plain(f"Academic Year: {form.academic_year}"),
        _plain(f"Semester: {form.semester.value}"),
        _spacer(),
    ]


def _analysis_blocks(analysis: ObjectiveAnalysis) -> list[DocumentBlock]:
    rows = [
        [str(row.no), row.learning_outcome, row.content, row.competency, row.core_material, row.objective]
        for row in analysis.flat_rows()
    ]
    return [
        _plain(
            f"II. Learning Objective Analysis ({analysis.semester.value} Semester)",
            heading_level=1,
        ),
        _spacer(SPACER_AFTER),
        _data_table(OBJECTIVE_TABLE_HEADERS, rows),
        _spacer(),
    ]


def _sequence_blocks(sequence: LearningSequence) -> list[DocumentBlock]:
    rows = [
        [
            str(item.no),
            item.objective,
            item.indicator,
            item.core_material,
            item.love_values,
            item.time_allocation,
            ", ".join(dimension.value for dimension in item.profile_dimensions),
            item.assessment,
            item.learning_resources,
        ]
        for item in sequence.items
    ]
    return [
        _plain("III. Learning Objective Flow (ATP)", heading_level=1),
        _spacer(SPACER_AFTER),
        _data_table(SEQUENCE_TABLE_HEADERS, rows),
        _spacer(),
    ]


def build_curriculum_document(
    form: LessonForm | None,
    analysis: ObjectiveAnalysis | None,
    sequence: LearningSequence | None,
    *,
    default_teacher_name: str = "Guru",
) -> _Document:
    """Assemble the curriculum summary: identity, objective analysis and learning flow."""

    document = Document()
    _add_centered(document, DOCUMENT_TITLE, title=True)
    _add_centered(document, f"By: {form.teacher_name if form else default_teacher_name}")

    blocks: list[DocumentBlock] = [_spacer()]
    if form is not None:
        blocks.extend(_identity_blocks(form))
    if analysis is not None and analysis.flat_rows():
        blocks.extend(_analysis_blocks(analysis))
    if sequence is not None and sequence.items:
        blocks.extend(_sequence_blocks(sequence))

    append_blocks(document, blocks)
    return document


def build_lesson_plan_document(
    markdown: str,
    objective_no: int,
    form: LessonForm | None,
    *,
    default_teacher_name: str = "Guru",
) -> _Document:
    """Assemble a single lesson plan document from its Markdown text."""

    document = Document()
    _add_centered(document, f"Deep Learning Lesson Plan TP {objective_no}", title=True)
    _add_centered(document, f"Subject: {form.subject if form else 'Lesson'}")
    _add_centered(document, f"By: {form.teacher_name if form else default_teacher_name}")

    append_blocks(document, [_spacer(), *convert(markdown)])
    return document


def document_to_bytes(document: _Document) -> bytes:
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def export_curriculum(
    form: LessonForm | None,
    analysis: ObjectiveAnalysis | None,
    sequence: LearningSequence | None,
    *,
    default_teacher_name: str = "Guru",
) -> ExportedDocument | None:
    """Create the curriculum summary DOCX, or ``None`` when there is nothing to export."""

    has_analysis = analysis is not None and bool(analysis.outcome_analyses)
    has_sequence = sequence is not None and bool(sequence.items)
    if not (has_analysis or has_sequence):
        return None

    document = build_curriculum_document(form, analysis, sequence, default_teacher_name=default_teacher_name)
    return ExportedDocument(filename=curriculum_filename(form), payload=document_to_bytes(document))


def export_lesson_plan(
    markdown: str,
    objective_no: int,
    form: LessonForm | None,
    *,
    default_teacher_name: str = "Guru",
) -> ExportedDocument:
    document = build_lesson_plan_document(markdown, objective_no, form, default_teacher_name=default_teacher_name)
    return ExportedDocument(filename=lesson_plan_filename(objective_no, form), payload=document_to_bytes(document))


__all__ = [
    "ExportedDocument",
    "append_blocks",
    "build_curriculum_document",
    "build_lesson_plan_document",
    "curriculum_filename",
    "document_to_bytes",
    "export_curriculum",
    "export_lesson_plan",
    "lesson_plan_filename",
]
