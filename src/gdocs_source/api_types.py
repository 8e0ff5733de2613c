"""Google Docs API models for the subset of the document resource we read.

Field names and aliases follow the Docs API v1 discovery document. Models
allow extra fields so that element kinds we do not model stay visible in
``model_extra`` and can be reported instead of silently ignored.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Keys that appear on every element and carry no content
_POSITION_KEYS = frozenset({"startIndex", "endIndex", "start_index", "end_index"})


def _extra_kind(model: BaseModel) -> str:
    """Name the first unmodelled content key of an element."""
    for key in model.model_extra or {}:
        if key not in _POSITION_KEYS:
            return key
    return "empty"


class Dimension(BaseModel):
    """A magnitude in a single direction in the specified units."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    magnitude: float | None = Field(None)
    unit: str | None = Field(None)


class Link(BaseModel):
    """A reference to another portion of a document or an external URL resource."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    url: str | None = Field(None)
    heading_id: str | None = Field(None, alias="headingId")
    bookmark_id: str | None = Field(None, alias="bookmarkId")


class WeightedFontFamily(BaseModel):
    """Represents a font family and weight of text."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    font_family: str | None = Field(None, alias="fontFamily")
    weight: int | None = Field(None)


class TextStyle(BaseModel):
    """Represents the styling that can be applied to text."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    bold: bool | None = Field(None)
    italic: bool | None = Field(None)
    strikethrough: bool | None = Field(None)
    underline: bool | None = Field(None)
    link: Link | None = Field(None)
    weighted_font_family: WeightedFontFamily | None = Field(
        None, alias="weightedFontFamily"
    )
    baseline_offset: str | None = Field(None, alias="baselineOffset")


class TextRun(BaseModel):
    """A ParagraphElement that represents a run of text that all has the same styling."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    content: str | None = Field(None)
    text_style: TextStyle | None = Field(None, alias="textStyle")


class InlineObjectElement(BaseModel):
    """A ParagraphElement that contains an InlineObject."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    inline_object_id: str | None = Field(None, alias="inlineObjectId")
    text_style: TextStyle | None = Field(None, alias="textStyle")


class PersonProperties(BaseModel):
    """Properties specific to a linked Person."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str | None = Field(None)
    email: str | None = Field(None)


class Person(BaseModel):
    """A person or email address mentioned in a document."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    person_properties: PersonProperties | None = Field(None, alias="personProperties")
    text_style: TextStyle | None = Field(None, alias="textStyle")


class RichLinkProperties(BaseModel):
    """Properties specific to a RichLink."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    title: str | None = Field(None)
    uri: str | None = Field(None)


class RichLink(BaseModel):
    """A link to a Google resource (such as a file in Drive)."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    rich_link_properties: RichLinkProperties | None = Field(
        None, alias="richLinkProperties"
    )
    text_style: TextStyle | None = Field(None, alias="textStyle")


class ParagraphElement(BaseModel):
    """A ParagraphElement describes content within a Paragraph."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    start_index: int | None = Field(None, alias="startIndex")
    end_index: int | None = Field(None, alias="endIndex")
    text_run: TextRun | None = Field(None, alias="textRun")
    inline_object_element: InlineObjectElement | None = Field(
        None, alias="inlineObjectElement"
    )
    person: Person | None = Field(None)
    rich_link: RichLink | None = Field(None, alias="richLink")
    horizontal_rule: dict[str, Any] | None = Field(None, alias="horizontalRule")
    page_break: dict[str, Any] | None = Field(None, alias="pageBreak")
    column_break: dict[str, Any] | None = Field(None, alias="columnBreak")
    footnote_reference: dict[str, Any] | None = Field(None, alias="footnoteReference")
    date_element: dict[str, Any] | None = Field(None, alias="dateElement")
    auto_text: dict[str, Any] | None = Field(None, alias="autoText")
    equation: dict[str, Any] | None = Field(None)

    @property
    def kind(self) -> str:
        """The element variant, named after its API key."""
        for name, field_info in type(self).model_fields.items():
            if name in ("start_index", "end_index"):
                continue
            if getattr(self, name) is not None:
                return field_info.alias or name
        return _extra_kind(self)


class Bullet(BaseModel):
    """Describes the bullet of a paragraph."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    list_id: str | None = Field(None, alias="listId")
    nesting_level: int | None = Field(None, alias="nestingLevel")


class ParagraphStyle(BaseModel):
    """Styles that apply to a whole paragraph."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    named_style_type: str | None = Field(None, alias="namedStyleType")
    heading_id: str | None = Field(None, alias="headingId")
    indent_start: Dimension | None = Field(None, alias="indentStart")


class Paragraph(BaseModel):
    """A StructuralElement representing a paragraph."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    bullet: Bullet | None = Field(None)
    elements: list[ParagraphElement] | None = Field(None)
    paragraph_style: ParagraphStyle | None = Field(None, alias="paragraphStyle")


class TableCellStyle(BaseModel):
    """The style of a TableCell."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    row_span: int | None = Field(None, alias="rowSpan")
    column_span: int | None = Field(None, alias="columnSpan")


class TableCell(BaseModel):
    """The contents and style of a cell in a Table."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    content: list[StructuralElement] | None = Field(None)
    table_cell_style: TableCellStyle | None = Field(None, alias="tableCellStyle")


class TableRow(BaseModel):
    """The contents and style of a row in a Table."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    table_cells: list[TableCell] | None = Field(None, alias="tableCells")


class Table(BaseModel):
    """A StructuralElement representing a table."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    rows: int | None = Field(None)
    columns: int | None = Field(None)
    table_rows: list[TableRow] | None = Field(None, alias="tableRows")


class TableOfContents(BaseModel):
    """A StructuralElement representing a table of contents."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    content: list[StructuralElement] | None = Field(None)


class StructuralElement(BaseModel):
    """A StructuralElement describes content that provides structure to the document."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    start_index: int | None = Field(None, alias="startIndex")
    end_index: int | None = Field(None, alias="endIndex")
    paragraph: Paragraph | None = Field(None)
    section_break: dict[str, Any] | None = Field(None, alias="sectionBreak")
    table: Table | None = Field(None)
    table_of_contents: TableOfContents | None = Field(None, alias="tableOfContents")

    @property
    def kind(self) -> str:
        """The element variant, named after its API key."""
        if self.paragraph is not None:
            return "paragraph"
        if self.table is not None:
            return "table"
        if self.section_break is not None:
            return "sectionBreak"
        if self.table_of_contents is not None:
            return "tableOfContents"
        return _extra_kind(self)


class Body(BaseModel):
    """The document body."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    content: list[StructuralElement] | None = Field(None)


class NestingLevel(BaseModel):
    """Properties describing a list bullet at a given level of nesting."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    glyph_type: str | None = Field(None, alias="glyphType")
    glyph_symbol: str | None = Field(None, alias="glyphSymbol")
    glyph_format: str | None = Field(None, alias="glyphFormat")
    start_number: int | None = Field(None, alias="startNumber")
    indent_start: Dimension | None = Field(None, alias="indentStart")


class ListProperties(BaseModel):
    """The properties of a list."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    nesting_levels: list[NestingLevel] | None = Field(None, alias="nestingLevels")


class DocsList(BaseModel):
    """A List represents the list attributes for a group of paragraphs."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    list_properties: ListProperties | None = Field(None, alias="listProperties")


class ImageProperties(BaseModel):
    """The properties of an image."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    content_uri: str | None = Field(None, alias="contentUri")
    source_uri: str | None = Field(None, alias="sourceUri")


class EmbeddedObject(BaseModel):
    """An embedded object in the document."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    title: str | None = Field(None)
    description: str | None = Field(None)
    image_properties: ImageProperties | None = Field(None, alias="imageProperties")


class InlineObjectProperties(BaseModel):
    """Properties of an InlineObject."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    embedded_object: EmbeddedObject | None = Field(None, alias="embeddedObject")


class InlineObject(BaseModel):
    """An object that appears inline with text, such as an image."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    object_id: str | None = Field(None, alias="objectId")
    inline_object_properties: InlineObjectProperties | None = Field(
        None, alias="inlineObjectProperties"
    )


class DocumentTab(BaseModel):
    """A tab with document contents."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    body: Body | None = Field(None)
    lists: dict[str, DocsList] | None = Field(None)
    inline_objects: dict[str, InlineObject] | None = Field(None, alias="inlineObjects")


class TabProperties(BaseModel):
    """Properties of a tab."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    tab_id: str | None = Field(None, alias="tabId")
    title: str | None = Field(None)


class Tab(BaseModel):
    """A tab in a document."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    tab_properties: TabProperties | None = Field(None, alias="tabProperties")
    document_tab: DocumentTab | None = Field(None, alias="documentTab")
    child_tabs: list[Tab] | None = Field(None, alias="childTabs")


class Document(BaseModel):
    """A Google Docs document."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    document_id: str | None = Field(None, alias="documentId")
    title: str | None = Field(None)
    revision_id: str | None = Field(None, alias="revisionId")
    body: Body | None = Field(None)
    lists: dict[str, DocsList] | None = Field(None)
    inline_objects: dict[str, InlineObject] | None = Field(None, alias="inlineObjects")
    tabs: list[Tab] | None = Field(None)

    def document_tabs(self) -> list[DocumentTab]:
        """Return the document tabs in reading order.

        Responses fetched without ``includeTabsContent`` carry the body at the
        top level; they are presented as a single synthesized tab.
        """
        if not self.tabs:
            return [
                DocumentTab(
                    body=self.body,
                    lists=self.lists,
                    inline_objects=self.inline_objects,
                )
            ]

        result: list[DocumentTab] = []

        def _walk(tabs: list[Tab]) -> None:
            for tab in tabs:
                if tab.document_tab is not None:
                    result.append(tab.document_tab)
                _walk(tab.child_tabs or [])

        _walk(self.tabs)
        return result
