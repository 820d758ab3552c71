"""Endpoint exposing the Markdown to document-block converter."""

from fastapi import APIRouter

from curriculum_assistant.markdown_builder import build_blocks_response
from curriculum_assistant.markdown_converter import convert
from curriculum_assistant.schemas.markdown import ConvertMarkdownRequest, ConvertMarkdownResponse

router = APIRouter(prefix="/markdown", tags=["markdown"])


@router.post("/convert", response_model=ConvertMarkdownResponse)
def convert_markdown(payload: ConvertMarkdownRequest) -> ConvertMarkdownResponse:
    return build_blocks_response(convert(payload.markdown))
