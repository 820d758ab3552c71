"""Endpoints that export curriculum results as DOCX downloads."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from curriculum_assistant.api.deps import get_app_settings
from curriculum_assistant.core.config import Settings
from curriculum_assistant.curriculum_exporter import ExportedDocument, export_curriculum, export_lesson_plan
from curriculum_assistant.schemas.curriculum import CurriculumExportRequest, LessonPlanExportRequest

router = APIRouter(prefix="/export", tags=["export"])

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _download(exported: ExportedDocument) -> Response:
    return Response(
        content=exported.payload,
        media_type=DOCX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{exported.filename}"'},
    )


@router.post("/curriculum")
def export_curriculum_summary(
    payload: CurriculumExportRequest,
    settings: Settings = Depends(get_app_settings),
) -> Response:
    exported = export_curriculum(
        payload.form,
        payload.analysis,
        payload.sequence,
        default_teacher_name=settings.default_teacher_name,
    )
    if exported is None:
        raise HTTPException(status_code=400, detail="Nothing to export: generate objectives or a learning flow first")
    return _download(exported)


@router.post("/lesson-plan")
def export_single_lesson_plan(
    payload: LessonPlanExportRequest,
    settings: Settings = Depends(get_app_settings),
) -> Response:
    if not payload.markdown.strip():
        raise HTTPException(status_code=400, detail="Lesson plan is empty")
    exported = export_lesson_plan(
        payload.markdown,
        payload.objective_no,
        payload.form,
        default_teacher_name=settings.default_teacher_name,
    )
    return _download(exported)
