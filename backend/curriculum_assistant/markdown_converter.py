"""Convert the Markdown subset produced by the lesson-plan generator into document blocks.

Only what the generator actually emits is recognised: ATX headings, blank
lines, fenced code blocks, pipe tables and ``*``/``_`` emphasis. Everything
else degrades to a plain paragraph, so :func:`convert` never raises.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum

from .document_models import DocumentBlock, Paragraph, Table, TableCell, TableRow, TextRun

logger = logging.getLogger(__name__)

SPACER_AFTER = 120
HEADING_SPACING = 180
CELL_SPACING_AFTER = 100
MAX_HEADING_LEVEL = 6

_FENCE = "```"
# **bold** | *italic* | __bold__ | _italic_, scanned as one alternation.
_INLINE_RE = re.compile(r"\*\*([^*]+?)\*\*|\*([^*]+?)\*|__([^_]+?)__|_([^_]+?)_")
_HEADING_RE = re.compile(r"^(#{1,6})\s+(\S.*)$")
_DEEP_HEADING_RE = re.compile(r"^#{7,}\s*([^#\s].*)$")
_SEPARATOR_RE = re.compile(r"^\|(?:\s*:?-+:?\s*\|)*\s*:?-+:?\s*\|?$")


class LineKind(Enum):
    FENCE = "fence"
    CODE = "code"
    TABLE = "table"
    HEADING = "heading"
    BLANK = "blank"
    TEXT = "text"


@dataclass(slots=True)
class ConverterState:
    """Scan state for a single :func:`convert` call."""

    in_code_block: bool = False
    table_lines: list[str] = field(default_factory=list)


def parse_inline_formatting(text: str) -> list[TextRun]:
    """Split ``text`` into runs, stripping recognised emphasis delimiters.

    Nested emphasis is not supported; unmatched delimiters stay in the plain
    runs verbatim.
    """

    runs: list[TextRun] = []
    last_index = 0
    for match in _INLINE_RE.finditer(text):
        if match.start() > last_index:
            runs.append(TextRun(text[last_index:match.start()]))

        bold_text = match.group(1) or match.group(3)
        if bold_text:
            runs.append(TextRun(bold_text, bold=True))
        else:
            runs.append(TextRun(match.group(2) or match.group(4), italic=True))
        last_index = match.end()

    if last_index < len(text):
        runs.append(TextRun(text[last_index:]))
    return runs


def is_table_line(line: str) -> bool:
    stripped = line.strip()
    return stripped.startswith("|") and stripped.count("|") >= 2


def match_heading(line: str) -> tuple[int, str] | None:
    """Return ``(level, text)`` for a heading line, clamping deep headings to level 6."""

    match = _HEADING_RE.match(line)
    if match:
        return len(match.group(1)), match.group(2).rstrip()
    match = _DEEP_HEADING_RE.match(line)
    if match:
        return MAX_HEADING_LEVEL, match.group(1).rstrip()
    return None


def classify_line(line: str, state: ConverterState) -> LineKind:
    """Classify one physical line; the first matching kind wins."""

    if line.strip().startswith(_FENCE):
        return LineKind.FENCE
    if state.in_code_block:
        return LineKind.CODE
    if is_table_line(line):
        return LineKind.TABLE
    if match_heading(line) is not None:
        return LineKind.HEADING
    if not line.strip():
        return LineKind.BLANK
    return LineKind.TEXT


def split_cells(line: str) -> list[str]:
    """Split a pipe row into trimmed cells, dropping the empty edge fragments."""

    cells = [cell.strip() for cell in line.strip().split("|")]
    if cells and not cells[0]:
        cells = cells[1:]
    if cells and not cells[-1]:
        cells = cells[:-1]
    return cells


def _spacer() -> Paragraph:
    return Paragraph(spacing_after=SPACER_AFTER)


def _make_row(cells: list[str], *, is_header: bool = False) -> TableRow:
    return TableRow(
        cells=[
            TableCell(Paragraph(parse_inline_formatting(text), spacing_after=CELL_SPACING_AFTER))
            for text in cells
        ],
        is_header=is_header,
    )


def flush_table(state: ConverterState) -> Table | None:
    """Turn the accumulated table lines into a :class:`Table` and reset them.

    The header row is the line right above a ``|---|---|`` separator, or the
    first line when there is no separator. Body rows whose width differs from
    the header are dropped, as are rows whose cells are all empty.
    """

    lines = [line for line in state.table_lines if line.strip().startswith("|")]
    state.table_lines = []
    if not lines:
        return None

    separator_index = next(
        (index for index, line in enumerate(lines) if _SEPARATOR_RE.match(line.strip())),
        None,
    )

    header: list[str] | None = None
    if separator_index is not None:
        if separator_index > 0:
            header = split_cells(lines[separator_index - 1])
        body_lines = lines[separator_index + 1:]
    else:
        header = split_cells(lines[0])
        body_lines = lines[1:]

    if header is not None and not any(header):
        header = None

    rows: list[TableRow] = []
    if header is not None:
        rows.append(_make_row(header, is_header=True))

    for line in body_lines:
        cells = split_cells(line)
        if not any(cells):
            continue
        if header is not None and len(cells) != len(header):
            logger.debug("Dropping table row with %s cells, header has %s", len(cells), len(header))
            continue
        rows.append(_make_row(cells))

    if not rows:
        return None
    return Table(rows=rows)


def _flush(state: ConverterState) -> list[DocumentBlock]:
    table = flush_table(state)
    return [table] if table is not None else []


def _process_line(line: str, next_line: str | None, state: ConverterState) -> list[DocumentBlock]:
    kind = classify_line(line, state)

    if kind is LineKind.FENCE:
        blocks = _flush(state)
        blocks.append(_spacer())
        state.in_code_block = not state.in_code_block
        return blocks

    if kind is LineKind.CODE:
        return [Paragraph([TextRun(line)])]

    if kind is LineKind.TABLE:
        state.table_lines.append(line)
        # Tables have no terminator: close this one unless the next line continues it.
        if next_line is None or not is_table_line(next_line):
            return _flush(state)
        return []

    blocks = _flush(state)

    if kind is LineKind.HEADING:
        level, text = match_heading(line)  # type: ignore[misc]
        blocks.append(
            Paragraph(
                parse_inline_formatting(text),
                heading_level=level,
                spacing_before=HEADING_SPACING,
                spacing_after=HEADING_SPACING,
            )
        )
    elif kind is LineKind.BLANK:
        blocks.append(_spacer())
    else:
        runs = parse_inline_formatting(line)
        if runs:
            blocks.append(Paragraph(runs))
    return blocks


def convert(markdown: str) -> list[DocumentBlock]:
    """Convert Markdown text into an ordered list of paragraphs and tables."""

    if not markdown:
        return []

    lines = markdown.replace("\r\n", "\n").split("\n")
    state = ConverterState()
    blocks: list[DocumentBlock] = []
    for index, line in enumerate(lines):
        next_line = lines[index + 1] if index + 1 < len(lines) else None
        blocks.extend(_process_line(line, next_line, state))

    blocks.extend(_flush(state))
    return blocks


__all__ = [
    "ConverterState",
    "LineKind",
    "classify_line",
    "convert",
    "flush_table",
    "is_table_line",
    "match_heading",
    "parse_inline_formatting",
    "split_cells",
]
