"""Parse Google Docs structured content into the block/span document model.

Walks the validated API response (see ``api_types``) and produces a tuple of
blocks that is independent of any output format:

- paragraphs and headings (TITLE -> 1, SUBTITLE -> 2, HEADING_N -> N)
- bulleted and numbered list items with a nesting depth
- tables as rectangular grids of cells, each cell a block sequence
- images (inline objects) and horizontal rules, lifted to block level

LIST NUMBERING
==============

Numbering is tracked in a ``ListState`` created for one conversion call:

- counters are kept per list-id and nesting level; an item at level N
  increments counter N and resets every deeper counter
- a level's ``startNumber`` seeds its counter
- a list-id first seen right after an item of another list, indented deeper
  than that item, starts one level below it

Unknown structural or paragraph element kinds raise ``UnsupportedBlockKind``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gdocs_source import api_types
from gdocs_source.exceptions import UnsupportedBlockKind
from gdocs_source.types import (
    PLAIN,
    Block,
    BulletedListItem,
    Heading,
    HorizontalRule,
    Image,
    NumberedListItem,
    Paragraph,
    Span,
    StyleFlags,
    Table,
    TableCell,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

HEADING_LEVELS = {
    "TITLE": 1,
    "SUBTITLE": 2,
    "HEADING_1": 1,
    "HEADING_2": 2,
    "HEADING_3": 3,
    "HEADING_4": 4,
    "HEADING_5": 5,
    "HEADING_6": 6,
}

NUMBERED_GLYPH_TYPES = frozenset(
    {"DECIMAL", "ZERO_DECIMAL", "ALPHA", "UPPER_ALPHA", "ROMAN", "UPPER_ROMAN"}
)

# Font families rendered as inline code
MONOSPACE_FONTS = frozenset(
    {
        "consolas",
        "courier",
        "courier new",
        "cousine",
        "fira code",
        "fira mono",
        "ibm plex mono",
        "inconsolata",
        "jetbrains mono",
        "menlo",
        "monaco",
        "overpass mono",
        "pt mono",
        "roboto mono",
        "source code pro",
        "space mono",
        "ubuntu mono",
    }
)

# Paragraph elements that carry nothing we render
IGNORED_ELEMENTS = frozenset(
    {"pageBreak", "columnBreak", "footnoteReference", "dateElement", "autoText", "equation"}
)

# Default indentation step of Google Docs lists, in points
_INDENT_STEP = 36.0

_EMPTY_CELL = TableCell()


@dataclass
class _PreviousItem:
    list_id: str
    depth: int
    indent: float


@dataclass
class ListState:
    """Per-document list numbering state, threaded through the block walk."""

    counters: dict[str, list[int]] = field(default_factory=dict)
    bases: dict[str, int] = field(default_factory=dict)
    previous: _PreviousItem | None = None

    def next_item(
        self, list_id: str, level: int, indent: float, start_number: int = 1
    ) -> tuple[int, int]:
        """Register a list item and return its (depth, number)."""
        if list_id not in self.bases:
            base = 0
            prev = self.previous
            if prev is not None and prev.list_id != list_id and indent > prev.indent:
                base = max(0, prev.depth + 1 - level)
            self.bases[list_id] = base
        depth = self.bases[list_id] + level

        counts = self.counters.setdefault(list_id, [])
        del counts[level + 1 :]
        while len(counts) <= level:
            counts.append(start_number - 1)
        counts[level] += 1

        self.previous = _PreviousItem(list_id=list_id, depth=depth, indent=indent)
        return depth, counts[level]

    def interrupt(self) -> None:
        """Mark that a non-list block ended the current run of list items."""
        self.previous = None


@dataclass
class ParseContext:
    """Tracks state while parsing one document tab."""

    document_id: str | None
    list_state: ListState
    lists: dict[str, api_types.DocsList] = field(default_factory=dict)
    inline_objects: dict[str, api_types.InlineObject] = field(default_factory=dict)


def parse_document(
    document: api_types.Document, document_id: str | None = None
) -> tuple[Block, ...]:
    """Parse a Google Docs document into blocks.

    Args:
        document: Validated Docs API response
        document_id: Id used in error messages (defaults to the document's own id)

    Returns:
        The document's blocks in reading order, across all tabs

    Raises:
        UnsupportedBlockKind: If an element kind is not recognized
    """
    state = ListState()
    blocks: list[Block] = []
    for tab in document.document_tabs():
        ctx = ParseContext(
            document_id=document_id or document.document_id,
            list_state=state,
            lists=tab.lists or document.lists or {},
            inline_objects=tab.inline_objects or document.inline_objects or {},
        )
        content = tab.body.content if tab.body else None
        blocks.extend(parse_content(content or [], ctx))
    return tuple(blocks)


def parse_content(
    elements: Iterable[api_types.StructuralElement], ctx: ParseContext
) -> list[Block]:
    """Parse a sequence of structural elements."""
    blocks: list[Block] = []
    for element in elements:
        kind = element.kind
        if kind == "paragraph":
            assert element.paragraph is not None
            blocks.extend(_parse_paragraph(element.paragraph, ctx))
        elif kind == "table":
            assert element.table is not None
            ctx.list_state.interrupt()
            blocks.append(_parse_table(element.table, ctx))
            ctx.list_state.interrupt()
        elif kind == "tableOfContents":
            assert element.table_of_contents is not None
            blocks.extend(parse_content(element.table_of_contents.content or [], ctx))
        elif kind == "sectionBreak":
            continue
        else:
            raise UnsupportedBlockKind(kind, ctx.document_id)
    return blocks


def _parse_paragraph(
    paragraph: api_types.Paragraph, ctx: ParseContext
) -> list[Block]:
    """Parse one paragraph; images and rules inside it become separate blocks."""
    blocks: list[Block] = []
    pending: list[Span] = []
    list_position: list[tuple[int, int]] = []

    def flush() -> None:
        spans = normalize_spans(pending)
        pending.clear()
        if spans:
            blocks.append(_text_block(paragraph, spans, ctx, list_position))

    for element in paragraph.elements or []:
        kind = element.kind
        if kind == "textRun":
            assert element.text_run is not None
            text = _clean_text(element.text_run.content or "")
            if text:
                pending.append(Span(text, style_flags(element.text_run.text_style)))
        elif kind == "inlineObjectElement":
            assert element.inline_object_element is not None
            flush()
            blocks.append(_parse_image(element.inline_object_element, ctx))
        elif kind == "horizontalRule":
            flush()
            blocks.append(HorizontalRule())
        elif kind == "person":
            assert element.person is not None
            props = element.person.person_properties
            name = (props.name or props.email or "") if props else ""
            if name:
                pending.append(Span(name, style_flags(element.person.text_style)))
        elif kind == "richLink":
            assert element.rich_link is not None
            props = element.rich_link.rich_link_properties
            uri = props.uri if props else None
            title = (props.title if props else None) or uri
            if title:
                style = style_flags(element.rich_link.text_style)
                pending.append(Span(title, _with_link(style, uri)))
        elif kind in IGNORED_ELEMENTS:
            continue
        else:
            raise UnsupportedBlockKind(kind, ctx.document_id)
    flush()

    if paragraph.bullet is None and any(
        not isinstance(b, (Image, HorizontalRule)) for b in blocks
    ):
        ctx.list_state.interrupt()
    return blocks


def _text_block(
    paragraph: api_types.Paragraph,
    spans: tuple[Span, ...],
    ctx: ParseContext,
    list_position: list[tuple[int, int]],
) -> Block:
    bullet = paragraph.bullet
    if bullet is not None:
        # Text after an image inside a list item continues that item
        if list_position:
            return Paragraph(spans=spans)
        list_id = bullet.list_id or ""
        level = bullet.nesting_level or 0
        nesting = _nesting_level(ctx, list_id, level)
        start = nesting.start_number if nesting and nesting.start_number else 1
        indent = _indent(paragraph, nesting, level)
        list_position.append(ctx.list_state.next_item(list_id, level, indent, start))
        depth, number = list_position[0]
        if nesting is not None and nesting.glyph_type in NUMBERED_GLYPH_TYPES:
            return NumberedListItem(
                depth=depth, list_id=list_id, number=number, spans=spans
            )
        return BulletedListItem(depth=depth, list_id=list_id, spans=spans)

    style = paragraph.paragraph_style
    named_style = (style.named_style_type if style else None) or "NORMAL_TEXT"
    if named_style in HEADING_LEVELS:
        return Heading(level=HEADING_LEVELS[named_style], spans=spans)
    return Paragraph(spans=spans)


def _nesting_level(
    ctx: ParseContext, list_id: str, level: int
) -> api_types.NestingLevel | None:
    doc_list = ctx.lists.get(list_id)
    if doc_list is None or doc_list.list_properties is None:
        return None
    levels = doc_list.list_properties.nesting_levels or []
    if level < len(levels):
        return levels[level]
    return None


def _indent(
    paragraph: api_types.Paragraph,
    nesting: api_types.NestingLevel | None,
    level: int,
) -> float:
    style = paragraph.paragraph_style
    if style and style.indent_start and style.indent_start.magnitude is not None:
        return style.indent_start.magnitude
    if nesting and nesting.indent_start and nesting.indent_start.magnitude is not None:
        return nesting.indent_start.magnitude
    return _INDENT_STEP * (level + 1)


def _parse_table(table: api_types.Table, ctx: ParseContext) -> Table:
    """Lay a table out as a rectangular grid.

    A spanned cell's content sits at its top-left position; the positions it
    spans over are emitted as empty cells.
    """
    source_rows = table.table_rows or []
    width = table.columns or 0
    placed: dict[tuple[int, int], TableCell] = {}
    covered: set[tuple[int, int]] = set()

    for r, row in enumerate(source_rows):
        cells = row.table_cells or []
        # The API usually lists every grid position, spanned-over ones included
        positional = len(cells) == width
        c = 0
        for index, cell in enumerate(cells):
            if positional:
                c = index
                if (r, c) in covered:
                    continue
            else:
                while (r, c) in covered:
                    c += 1

            style = cell.table_cell_style
            row_span = max(1, (style.row_span if style else None) or 1)
            col_span = max(1, (style.column_span if style else None) or 1)

            placed[(r, c)] = TableCell(blocks=tuple(parse_content(cell.content or [], ctx)))
            for dr in range(row_span):
                for dc in range(col_span):
                    if dr or dc:
                        covered.add((r + dr, c + dc))
            c += col_span

    n_rows = max(len(source_rows), table.rows or 0)
    n_cols = max([width] + [c + 1 for (_, c) in placed] + [c + 1 for (_, c) in covered])
    rows = tuple(
        tuple(placed.get((r, c), _EMPTY_CELL) for c in range(n_cols))
        for r in range(n_rows)
    )
    return Table(rows=rows)


def _parse_image(
    element: api_types.InlineObjectElement, ctx: ParseContext
) -> Image:
    object_id = element.inline_object_id or ""
    embedded = None
    inline_object = ctx.inline_objects.get(object_id)
    if inline_object and inline_object.inline_object_properties:
        embedded = inline_object.inline_object_properties.embedded_object

    reference = object_id
    alt = ""
    if embedded is not None:
        image = embedded.image_properties
        if image is not None:
            reference = image.content_uri or image.source_uri or object_id
        alt = embedded.description or embedded.title or ""
    return Image(reference=reference, alt=alt.strip() or "image")


def style_flags(text_style: api_types.TextStyle | None) -> StyleFlags:
    """Reduce a Docs text style to the flags Markdown can express."""
    if text_style is None:
        return PLAIN

    font = text_style.weighted_font_family
    family = (font.font_family or "").lower() if font else ""

    return StyleFlags(
        bold=bool(text_style.bold),
        italic=bool(text_style.italic),
        strikethrough=bool(text_style.strikethrough),
        code=family in MONOSPACE_FONTS,
        link=_link_target(text_style.link),
    )


def _link_target(link: api_types.Link | None) -> str | None:
    if link is None:
        return None
    if link.url:
        return link.url
    if link.heading_id:
        return f"#{link.heading_id}"
    if link.bookmark_id:
        return f"#{link.bookmark_id}"
    return None


def _with_link(style: StyleFlags, url: str | None) -> StyleFlags:
    return StyleFlags(
        bold=style.bold,
        italic=style.italic,
        strikethrough=style.strikethrough,
        code=style.code,
        link=url or style.link,
    )


def _clean_text(content: str) -> str:
    # \n terminates the paragraph; \x0b is a line break within it
    return content.replace("\n", "").replace("\x0b", " ")


def merge_spans(spans: Iterable[Span]) -> tuple[Span, ...]:
    """Merge adjacent spans that share identical style flags."""
    merged: list[Span] = []
    for span in spans:
        if not span.text:
            continue
        if merged and merged[-1].style == span.style:
            merged[-1] = Span(merged[-1].text + span.text, span.style)
        else:
            merged.append(span)
    return tuple(merged)


def normalize_spans(spans: Iterable[Span]) -> tuple[Span, ...]:
    """Merge spans and trim whitespace at the block edges.

    Returns an empty tuple for whitespace-only content.
    """
    merged = list(merge_spans(spans))
    if not "".join(s.text for s in merged).strip():
        return ()

    while merged and not merged[0].text.strip():
        merged.pop(0)
    while merged and not merged[-1].text.strip():
        merged.pop()
    merged[0] = Span(merged[0].text.lstrip(), merged[0].style)
    merged[-1] = Span(merged[-1].text.rstrip(), merged[-1].style)
    return merge_spans(merged)
