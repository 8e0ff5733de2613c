"""Render the block/span document model as Markdown and as plain text.

Both renderers are pure functions of their input: the same blocks always give
byte-identical output, so re-ingesting unchanged documents produces no diff.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from gdocs_source.types import (
    TEXT_BLOCKS,
    Block,
    BulletedListItem,
    Heading,
    HorizontalRule,
    Image,
    ListItem,
    NumberedListItem,
    Paragraph,
    Span,
    Table,
    TableCell,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

LIST_INDENT = "  "
HORIZONTAL_RULE = "---"
CELL_BREAK = "<br>"

# Characters that would otherwise start emphasis, code, links or HTML
_INLINE_SPECIAL = re.compile(r"([\\`*_~\[\]<>])")
# Block openers that turn a paragraph into a heading, list item or rule
_BLOCK_MARKERS = ("#", "-", "+")
_ORDERED_MARKER = re.compile(r"^(\d+)[.)]")


def to_markdown(blocks: Iterable[Block]) -> str:
    """Render blocks as a Markdown document.

    Consecutive list items are separated by a single newline, every other
    pair of blocks by a blank line. Non-empty output ends with one newline.
    """
    parts: list[str] = []
    previous: Block | None = None
    for block in blocks:
        rendered = render_block(block)
        if not rendered:
            continue
        if parts:
            parts.append("\n" if _is_list_item(previous) and _is_list_item(block) else "\n\n")
        parts.append(rendered)
        previous = block
    if not parts:
        return ""
    return "".join(parts) + "\n"


def to_plain_text(blocks: Iterable[Block]) -> str:
    """Render blocks as plain text for search indexing.

    Style markers and link syntax are dropped; each block is one line, table
    rows are lines of tab-separated cells. Images and rules contribute nothing.
    """
    lines: list[str] = []
    for block in blocks:
        lines.extend(_plain_lines(block))
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def render_block(block: Block) -> str:
    """Render a single block as Markdown (without trailing newline)."""
    if isinstance(block, Heading):
        return "#" * block.level + " " + render_spans(block.spans)
    if isinstance(block, Paragraph):
        return _escape_block_start(render_spans(block.spans))
    if isinstance(block, (BulletedListItem, NumberedListItem)):
        content = _escape_block_start(render_spans(block.spans))
        return LIST_INDENT * block.depth + _list_marker(block) + " " + content
    if isinstance(block, Image):
        return f"![{escape_text(block.alt)}]({block.reference})"
    if isinstance(block, HorizontalRule):
        return HORIZONTAL_RULE
    if isinstance(block, Table):
        return _render_table(block)
    raise TypeError(f"Cannot render {type(block).__name__}")


def render_spans(spans: Iterable[Span]) -> str:
    return "".join(render_span(span) for span in spans)


def render_span(span: Span) -> str:
    """Wrap a span's text in its Markdown delimiters.

    Leading and trailing whitespace stays outside the delimiters, since
    ``** bold **`` is not emphasis in Markdown. Text outside code spans is
    escaped so literal ``*``, ``_`` or brackets survive rendering.
    """
    text = span.text
    core = text.strip()
    if not core:
        return text
    leading = text[: len(text) - len(text.lstrip())]
    trailing = text[len(text.rstrip()) :]

    style = span.style
    if style.code:
        core = _code(core)
    else:
        core = escape_text(core)
    if style.strikethrough:
        core = f"~~{core}~~"
    if style.italic:
        core = f"*{core}*"
    if style.bold:
        core = f"**{core}**"
    if style.link is not None:
        core = f"[{core}]({style.link})"
    return leading + core + trailing


def escape_text(text: str) -> str:
    """Backslash-escape characters Markdown reads as inline syntax."""
    return _INLINE_SPECIAL.sub(r"\\\1", text)


def _escape_block_start(text: str) -> str:
    match = _ORDERED_MARKER.match(text)
    if match:
        return match.group(1) + "\\" + text[match.end(1) :]
    if text.startswith(_BLOCK_MARKERS):
        return "\\" + text
    return text


def _code(text: str) -> str:
    if "`" not in text:
        return f"`{text}`"
    return f"`` {text} ``"


def _list_marker(block: ListItem) -> str:
    if isinstance(block, NumberedListItem):
        return f"{block.number}."
    return "-"


def _is_list_item(block: Block | None) -> bool:
    return isinstance(block, (BulletedListItem, NumberedListItem))


def _render_table(table: Table) -> str:
    if not table.rows or table.column_count == 0:
        return ""
    lines = [_table_row(table.rows[0])]
    lines.append("| " + " | ".join("---" for _ in table.rows[0]) + " |")
    lines.extend(_table_row(row) for row in table.rows[1:])
    return "\n".join(lines)


def _table_row(row: Sequence[TableCell]) -> str:
    return "| " + " | ".join(_render_cell(cell) for cell in row) + " |"


def _render_cell(cell: TableCell) -> str:
    rendered = []
    for block in cell.blocks:
        if isinstance(block, Table):
            # Nested tables flatten to their text
            text = " ".join(line.replace("\t", " ") for line in _plain_lines(block))
        else:
            text = render_block(block)
        if text:
            rendered.append(text.strip())
    return CELL_BREAK.join(rendered).replace("|", "\\|")


def _plain_lines(block: Block) -> list[str]:
    if isinstance(block, TEXT_BLOCKS):
        return ["".join(span.text for span in block.spans)]
    if isinstance(block, Table):
        return [
            "\t".join(_plain_cell(cell) for cell in row)
            for row in block.rows
            if row
        ]
    return []


def _plain_cell(cell: TableCell) -> str:
    lines: list[str] = []
    for block in cell.blocks:
        lines.extend(line.replace("\t", " ") for line in _plain_lines(block))
    return " ".join(lines)
