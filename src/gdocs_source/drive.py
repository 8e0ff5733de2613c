"""Google Drive listing: turn root folder ids into file descriptors.

Folders are walked depth-first; Google Docs files anywhere below a root
become ``FileDescriptor`` values, every other file type is ignored.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from gdocs_source.transport import Transport

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
DOCUMENT_MIME_TYPE = "application/vnd.google-apps.document"

# Always requested; everything else comes from the configured field list
BASE_FIELDS = ("id", "name", "mimeType", "createdTime", "description")

_CORE_FIELDS = frozenset({"id", "name", "mimeType", "createdTime"})


@dataclass(frozen=True)
class FileDescriptor:
    """A Google Docs file found in Drive.

    Attributes:
        id: Drive file id (also the Docs document id)
        name: File name as shown in Drive
        created_time: RFC 3339 creation timestamp
        mime_type: Drive MIME type
        metadata: Extra Drive fields, plus the keys of a JSON-object description
        breadcrumb: Folder names from the root folder down to the parent
    """

    id: str
    name: str
    created_time: str | None = None
    mime_type: str = DOCUMENT_MIME_TYPE
    metadata: dict[str, Any] = field(default_factory=dict, hash=False)
    breadcrumb: tuple[str, ...] = ()

    @classmethod
    def from_drive_file(
        cls,
        file: dict[str, Any],
        breadcrumb: tuple[str, ...] = (),
    ) -> FileDescriptor:
        """Build a descriptor from a Drive API ``File`` resource."""
        metadata = {k: v for k, v in file.items() if k not in _CORE_FIELDS}

        description = metadata.get("description")
        if isinstance(description, str) and description.strip().startswith("{"):
            try:
                parsed = json.loads(description)
            except json.JSONDecodeError:
                parsed = None
            if isinstance(parsed, dict):
                del metadata["description"]
                metadata.update(parsed)

        return cls(
            id=file["id"],
            name=file.get("name", ""),
            created_time=file.get("createdTime"),
            mime_type=file.get("mimeType", DOCUMENT_MIME_TYPE),
            metadata=metadata,
            breadcrumb=breadcrumb,
        )


def drive_fields(extra_fields: Iterable[str] = ()) -> list[str]:
    """Merge the configured Drive fields with the fields we always need."""
    fields = list(BASE_FIELDS)
    for name in extra_fields:
        if name not in fields:
            fields.append(name)
    return fields


async def fetch_drive_files(
    transport: Transport,
    folder_ids: Iterable[str],
    *,
    fields: Iterable[str] = (),
    page_size: int = 100,
) -> list[FileDescriptor]:
    """List every Google Docs file below the given folders.

    Args:
        transport: Transport used for the Drive ``files.list`` calls
        folder_ids: Root folder ids, walked in order
        fields: Extra Drive file fields to request and carry as metadata
        page_size: Page size for each listing request

    Returns:
        Descriptors in walk order; a file reachable twice is listed once
    """
    requested = drive_fields(fields)
    descriptors: list[FileDescriptor] = []
    seen_folders: set[str] = set()
    seen_files: set[str] = set()

    async def _walk(folder_id: str, breadcrumb: tuple[str, ...]) -> None:
        if folder_id in seen_folders:
            return
        seen_folders.add(folder_id)

        files = await transport.list_folder(
            folder_id, page_size=page_size, fields=requested
        )
        logger.debug("Folder {} has {} entries", folder_id, len(files))

        for file in files:
            mime_type = file.get("mimeType")
            if mime_type == FOLDER_MIME_TYPE:
                await _walk(file["id"], (*breadcrumb, file.get("name", "")))
            elif mime_type == DOCUMENT_MIME_TYPE and file["id"] not in seen_files:
                seen_files.add(file["id"])
                descriptors.append(FileDescriptor.from_drive_file(file, breadcrumb))

    for folder_id in folder_ids:
        await _walk(folder_id, ())

    return descriptors
