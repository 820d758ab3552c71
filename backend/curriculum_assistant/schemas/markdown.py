"""Schemas for the Markdown conversion endpoint."""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class TextRunSchema(BaseModel):
    text: str
    bold: bool = False
    italic: bool = False


class ParagraphSchema(BaseModel):
    type: Literal["paragraph"] = "paragraph"
    runs: List[TextRunSchema] = Field(default_factory=list)
    heading_level: Optional[int] = Field(default=None, description="1-6 for headings")
    text: str = Field(..., description="Run texts joined together")


class TableRowSchema(BaseModel):
    is_header: bool = False
    cells: List[ParagraphSchema]


class TableSchema(BaseModel):
    type: Literal["table"] = "table"
    rows: List[TableRowSchema]
    column_count: int


MarkdownBlock = Annotated[Union[ParagraphSchema, TableSchema], Field(discriminator="type")]


class ConvertMarkdownRequest(BaseModel):
    markdown: str = Field(..., description="Markdown text to convert")


class ConvertMarkdownResponse(BaseModel):
    blocks: List[MarkdownBlock] = Field(default_factory=list)
