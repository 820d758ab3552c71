"""Document block model produced by the Markdown converter and consumed by the exporter."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(slots=True)
class TextRun:
    """A contiguous span of text with its emphasis flags."""

    text: str
    bold: bool = False
    italic: bool = False


@dataclass(slots=True)
class Paragraph:
    """A paragraph of text runs.

    Parameters
    ----------
    runs:
        Ordered runs; a blank spacer paragraph has no runs at all.
    heading_level:
        ``1``-``6`` for headings, ``None`` for body text.
    spacing_before, spacing_after:
        Optional spacing hints in twips. Purely cosmetic.
    """

    runs: list[TextRun] = field(default_factory=list)
    heading_level: int | None = None
    spacing_before: int | None = None
    spacing_after: int | None = None

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)

    @property
    def is_blank(self) -> bool:
        return not self.runs


@dataclass(slots=True)
class TableCell:
    paragraph: Paragraph

    @property
    def text(self) -> str:
        return self.paragraph.text


@dataclass(slots=True)
class TableRow:
    cells: list[TableCell]
    is_header: bool = False

    @property
    def texts(self) -> list[str]:
        return [cell.text for cell in self.cells]


@dataclass(slots=True)
class Table:
    """A table whose first row may be flagged as the header row."""

    rows: list[TableRow]

    @property
    def header(self) -> TableRow | None:
        if self.rows and self.rows[0].is_header:
            return self.rows[0]
        return None

    @property
    def body(self) -> list[TableRow]:
        return [row for row in self.rows if not row.is_header]

    @property
    def column_count(self) -> int:
        return max((len(row.cells) for row in self.rows), default=0)


DocumentBlock = Union[Paragraph, Table]


__all__ = ["DocumentBlock", "Paragraph", "Table", "TableCell", "TableRow", "TextRun"]
