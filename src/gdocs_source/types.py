"""Data types for the document model.

The parser produces a tuple of blocks; the serializers consume it. Blocks and
spans are frozen so a parsed document can be shared between renderers and
converted to JSON without copying. No logic beyond ``to_dict`` here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class StyleFlags:
    """Inline styling that survives conversion to Markdown."""

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    code: bool = False
    link: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for name in ("bold", "italic", "strikethrough", "code"):
            if getattr(self, name):
                result[name] = True
        if self.link is not None:
            result["link"] = self.link
        return result


PLAIN = StyleFlags()


@dataclass(frozen=True)
class Span:
    """A run of text sharing one set of style flags."""

    text: str
    style: StyleFlags = PLAIN

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"text": self.text}
        style = self.style.to_dict()
        if style:
            result["style"] = style
        return result


@dataclass(frozen=True)
class Paragraph:
    spans: tuple[Span, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"type": "paragraph", "spans": [s.to_dict() for s in self.spans]}


@dataclass(frozen=True)
class Heading:
    """A heading; level is 1-6."""

    level: int
    spans: tuple[Span, ...] = ()

    def __post_init__(self) -> None:
        if not 1 <= self.level <= 6:
            raise ValueError(f"heading level must be between 1 and 6, got {self.level}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "heading",
            "level": self.level,
            "spans": [s.to_dict() for s in self.spans],
        }


@dataclass(frozen=True)
class BulletedListItem:
    depth: int
    list_id: str
    spans: tuple[Span, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "bulleted_list_item",
            "depth": self.depth,
            "list_id": self.list_id,
            "spans": [s.to_dict() for s in self.spans],
        }


@dataclass(frozen=True)
class NumberedListItem:
    """A numbered list item; ``number`` is the running counter for its list."""

    depth: int
    list_id: str
    number: int
    spans: tuple[Span, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "numbered_list_item",
            "depth": self.depth,
            "list_id": self.list_id,
            "number": self.number,
            "spans": [s.to_dict() for s in self.spans],
        }


@dataclass(frozen=True)
class Image:
    """An image reference. No binary data is carried."""

    reference: str
    alt: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"type": "image", "reference": self.reference, "alt": self.alt}


@dataclass(frozen=True)
class HorizontalRule:
    def to_dict(self) -> dict[str, Any]:
        return {"type": "horizontal_rule"}


@dataclass(frozen=True)
class TableCell:
    """A grid cell; spanned-over cells have no blocks."""

    blocks: tuple[Block, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"blocks": [b.to_dict() for b in self.blocks]}


@dataclass(frozen=True)
class Table:
    """A rectangular grid: every row has the same number of cells."""

    rows: tuple[tuple[TableCell, ...], ...] = field(default_factory=tuple)

    @property
    def column_count(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "table",
            "rows": [[cell.to_dict() for cell in row] for row in self.rows],
        }


ListItem = Union[BulletedListItem, NumberedListItem]

Block = Union[
    Paragraph,
    Heading,
    BulletedListItem,
    NumberedListItem,
    Table,
    Image,
    HorizontalRule,
]

# Blocks whose content is a sequence of spans
TEXT_BLOCKS = (Paragraph, Heading, BulletedListItem, NumberedListItem)
