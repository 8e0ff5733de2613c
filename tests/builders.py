"""Builders for raw Google Docs API JSON used across tests.

These produce the same camelCase shapes the Docs API returns, without the
index bookkeeping the parser does not read.
"""

from __future__ import annotations

from typing import Any


def text_run(content: str, **style: Any) -> dict[str, Any]:
    """A textRun paragraph element; keyword args become the textStyle."""
    return {"textRun": {"content": content, "textStyle": style}}


def paragraph(
    *elements: dict[str, Any],
    style: str = "NORMAL_TEXT",
    bullet: dict[str, Any] | None = None,
    indent: float | None = None,
) -> dict[str, Any]:
    """A paragraph structural element."""
    paragraph_style: dict[str, Any] = {"namedStyleType": style}
    if indent is not None:
        paragraph_style["indentStart"] = {"magnitude": indent, "unit": "PT"}
    para: dict[str, Any] = {
        "elements": list(elements),
        "paragraphStyle": paragraph_style,
    }
    if bullet is not None:
        para["bullet"] = bullet
    return {"paragraph": para}


def list_item(
    text: str, list_id: str, level: int = 0, indent: float | None = None
) -> dict[str, Any]:
    bullet: dict[str, Any] = {"listId": list_id}
    if level:
        bullet["nestingLevel"] = level
    return paragraph(text_run(text + "\n"), bullet=bullet, indent=indent)


def numbered_list(start_number: int | None = None) -> dict[str, Any]:
    level: dict[str, Any] = {"glyphType": "DECIMAL", "glyphFormat": "%0."}
    if start_number is not None:
        level["startNumber"] = start_number
    return {"listProperties": {"nestingLevels": [dict(level) for _ in range(3)]}}


def bulleted_list() -> dict[str, Any]:
    level = {"glyphSymbol": "●", "glyphFormat": "%0"}
    return {"listProperties": {"nestingLevels": [dict(level) for _ in range(3)]}}


def table_cell(
    *content: dict[str, Any], row_span: int = 1, column_span: int = 1
) -> dict[str, Any]:
    return {
        "content": list(content),
        "tableCellStyle": {"rowSpan": row_span, "columnSpan": column_span},
    }


def table(rows: list[list[dict[str, Any]]], columns: int) -> dict[str, Any]:
    return {
        "table": {
            "rows": len(rows),
            "columns": columns,
            "tableRows": [{"tableCells": cells} for cells in rows],
        }
    }


def image_object(
    object_id: str,
    content_uri: str = "",
    source_uri: str = "",
    title: str = "",
    description: str = "",
) -> dict[str, Any]:
    embedded: dict[str, Any] = {
        "imageProperties": {"contentUri": content_uri, "sourceUri": source_uri}
    }
    if title:
        embedded["title"] = title
    if description:
        embedded["description"] = description
    return {
        "objectId": object_id,
        "inlineObjectProperties": {"embeddedObject": embedded},
    }


def document(
    *content: dict[str, Any],
    document_id: str = "doc-1",
    title: str = "Untitled",
    lists: dict[str, Any] | None = None,
    inline_objects: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """A legacy (non-tab) documents.get response."""
    raw: dict[str, Any] = {
        "documentId": document_id,
        "title": title,
        "body": {"content": [{"sectionBreak": {}}, *content]},
    }
    if lists is not None:
        raw["lists"] = lists
    if inline_objects is not None:
        raw["inlineObjects"] = inline_objects
    return raw
