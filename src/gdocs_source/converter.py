"""Convert a raw Google Docs API response into a ConvertedDocument.

Validation, parsing and rendering happen here; nothing in this module does
I/O, so conversions can run side by side without coordination.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from gdocs_source.api_types import Document
from gdocs_source.exceptions import ConversionError
from gdocs_source.markdown import to_markdown, to_plain_text
from gdocs_source.parser import parse_document

if TYPE_CHECKING:
    from gdocs_source.drive import FileDescriptor
    from gdocs_source.types import Block


@dataclass(frozen=True)
class ConvertedDocument:
    """One converted document, ready for node assembly.

    Attributes:
        id: Document id, inherited from the file descriptor
        date: Creation timestamp of the file
        title: Drive file name, or the Docs title when there is none
        content: Structural tree (blocks in reading order)
        markdown: Markdown rendition of ``content``
        text: Plain-text rendition of ``content``
    """

    id: str
    date: str | None
    title: str
    content: tuple[Block, ...]
    markdown: str
    text: str

    def content_tree(self) -> list[dict[str, Any]]:
        """Return the structural tree as JSON-compatible data."""
        return [block.to_dict() for block in self.content]

    def content_json(self) -> str:
        """Return the structural tree as a deterministic JSON string."""
        return json.dumps(self.content_tree(), ensure_ascii=False, sort_keys=True)


def convert_document(
    raw: dict[str, Any], descriptor: FileDescriptor | None = None
) -> ConvertedDocument:
    """Convert a raw Docs API response.

    Args:
        raw: Document JSON as returned by ``documents.get``
        descriptor: The Drive file the document was listed as; supplies the
            id, title and date. Without it the document's own id and title
            are used and the date is unknown.

    Returns:
        The converted document

    Raises:
        ConversionError: If the response does not have the document shape
        UnsupportedBlockKind: If the document contains an unknown element kind
    """
    document_id = descriptor.id if descriptor else str(raw.get("documentId", ""))

    try:
        document = Document.model_validate(raw)
    except ValidationError as e:
        raise ConversionError(
            f"Invalid document structure ({e.error_count()} validation errors)",
            document_id,
        ) from e

    blocks = parse_document(document, document_id=document_id)

    title = (descriptor.name if descriptor else "") or document.title or ""
    return ConvertedDocument(
        id=document_id,
        date=descriptor.created_time if descriptor else None,
        title=title,
        content=blocks,
        markdown=to_markdown(blocks),
        text=to_plain_text(blocks),
    )
