"""Helpers for converting document blocks into API schemas."""
from __future__ import annotations

from .document_models import DocumentBlock, Paragraph, Table
from .schemas.markdown import ConvertMarkdownResponse, ParagraphSchema, TableRowSchema, TableSchema, TextRunSchema


def _make_paragraph(paragraph: Paragraph) -> ParagraphSchema:
    return ParagraphSchema(
        runs=[TextRunSchema(text=run.text, bold=run.bold, italic=run.italic) for run in paragraph.runs],
        heading_level=paragraph.heading_level,
        text=paragraph.text,
    )


def _make_table(table: Table) -> TableSchema:
    rows = [
        TableRowSchema(
            is_header=row.is_header,
            cells=[_make_paragraph(cell.paragraph) for cell in row.cells],
        )
        for row in table.rows
    ]
    return TableSchema(rows=rows, column_count=table.column_count)


def build_blocks_response(blocks: list[DocumentBlock]) -> ConvertMarkdownResponse:
    """Convert converter output to a :class:`ConvertMarkdownResponse`."""

    return ConvertMarkdownResponse(
        blocks=[_make_table(block) if isinstance(block, Table) else _make_paragraph(block) for block in blocks]
    )


__all__ = ["build_blocks_response"]
