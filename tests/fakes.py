"""In-memory transport fakes for source and drive tests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from gdocs_source.transport import DocumentData, NotFoundError, Transport

if TYPE_CHECKING:
    from collections.abc import Iterable

    from gdocs_source.settings import Settings


class FakeTransport(Transport):
    """Serves folder listings and documents from dicts and records every call."""

    def __init__(
        self,
        folders: dict[str, list[dict[str, Any]]] | None = None,
        documents: dict[str, dict[str, Any]] | None = None,
    ) -> None:
        self.folders = folders or {}
        self.documents = documents or {}
        self.calls: list[tuple[str, str]] = []
        self.closed = False

    async def list_folder(
        self,
        folder_id: str,
        *,
        page_size: int = 100,  # noqa: ARG002
        fields: Iterable[str] = (),  # noqa: ARG002
    ) -> list[dict[str, Any]]:
        self.calls.append(("list_folder", folder_id))
        if folder_id not in self.folders:
            raise NotFoundError(f"Folder not found: {folder_id}")
        return list(self.folders[folder_id])

    async def get_document(self, document_id: str) -> DocumentData:
        self.calls.append(("get_document", document_id))
        if document_id not in self.documents:
            raise NotFoundError(f"Document not found: {document_id}")
        raw = self.documents[document_id]
        return DocumentData(document_id=document_id, title=raw.get("title", ""), raw=raw)

    async def close(self) -> None:
        self.closed = True


class TransportFactory:
    """Transport factory that hands out one transport and counts invocations."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport
        self.created = 0

    async def __call__(self, settings: Settings) -> Transport:  # noqa: ARG002
        self.created += 1
        return self.transport


def folder(folder_id: str, name: str) -> dict[str, Any]:
    return {
        "id": folder_id,
        "name": name,
        "mimeType": "application/vnd.google-apps.folder",
    }


def doc_file(file_id: str, name: str, **extra: Any) -> dict[str, Any]:
    return {
        "id": file_id,
        "name": name,
        "mimeType": "application/vnd.google-apps.document",
        "createdTime": "2023-01-01T00:00:00Z",
        **extra,
    }
