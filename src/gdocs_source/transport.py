"""Transport layer for fetching Drive listings and document data.

Defines the Transport protocol and implementations:
- GoogleApiTransport: Production transport using the Drive v3 and Docs v1 APIs
- LocalFileTransport: Test transport reading from local golden files
"""

from __future__ import annotations

import json
import ssl
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

import certifi
import httpx

from gdocs_source.drive import DOCUMENT_MIME_TYPE, FOLDER_MIME_TYPE, drive_fields

# API constants
DOCS_API_BASE = "https://docs.googleapis.com/v1/documents"
DRIVE_FILES_URL = "https://www.googleapis.com/drive/v3/files"
DEFAULT_TIMEOUT = 60


class TransportError(Exception):
    """Base exception for transport errors."""


class AuthenticationError(TransportError):
    """Raised when authentication fails (401/403)."""


class NotFoundError(TransportError):
    """Raised when a document or folder is not found (404)."""


class APIError(TransportError):
    """Raised when the API returns an error."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class DocumentData:
    """Complete document data from the Google Docs API."""

    document_id: str
    title: str
    raw: dict[str, Any]  # Full API response


class Transport(ABC):
    """Abstract base class for Drive/Docs data transport."""

    @abstractmethod
    async def list_folder(
        self,
        folder_id: str,
        *,
        page_size: int = 100,
        fields: Iterable[str] = (),
    ) -> list[dict[str, Any]]:
        """List the folders and documents directly inside a folder.

        Args:
            folder_id: The Drive folder identifier
            page_size: Number of files requested per page
            fields: Drive file fields to include for each file

        Returns:
            Drive ``File`` resources from every page
        """
        ...

    @abstractmethod
    async def get_document(self, document_id: str) -> DocumentData:
        """Fetch complete document data.

        Args:
            document_id: The document identifier

        Returns:
            DocumentData with full document contents
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        ...


class GoogleApiTransport(Transport):
    """Production transport for the Drive and Docs REST APIs.

    Handles authentication, SSL, and HTTP communication.
    """

    def __init__(
        self,
        access_token: str,
        api_key: str | None = None,
        timeout: int = DEFAULT_TIMEOUT,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            access_token: OAuth2 access token with documents/drive read scopes
            api_key: Optional API key appended to Docs requests
            timeout: Request timeout in seconds
            http_transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        self._api_key = api_key
        self._client = httpx.AsyncClient(
            timeout=timeout,
            verify=ssl_context,
            transport=http_transport,
            headers={
                "Authorization": f"Bearer {access_token}",
                "Accept": "application/json",
            },
        )

    async def list_folder(
        self,
        folder_id: str,
        *,
        page_size: int = 100,
        fields: Iterable[str] = (),
    ) -> list[dict[str, Any]]:
        """List a folder via Drive API v3 with pagination."""
        query = (
            f"'{folder_id}' in parents and trashed = false and "
            f"(mimeType = '{FOLDER_MIME_TYPE}' or mimeType = '{DOCUMENT_MIME_TYPE}')"
        )
        params: dict[str, Any] = {
            "q": query,
            "fields": f"nextPageToken, files({', '.join(drive_fields(fields))})",
            "pageSize": page_size,
            "orderBy": "folder,name",
            "supportsAllDrives": "true",
            "includeItemsFromAllDrives": "true",
        }

        all_files: list[dict[str, Any]] = []
        page_token: str | None = None
        while True:
            if page_token:
                params["pageToken"] = page_token
            response = await self._request(DRIVE_FILES_URL, params)
            all_files.extend(response.get("files", []))
            page_token = response.get("nextPageToken")
            if not page_token:
                break
        return all_files

    async def get_document(self, document_id: str) -> DocumentData:
        """Fetch document data from Google Docs API."""
        params: dict[str, Any] = {"includeTabsContent": "true"}
        if self._api_key:
            params["key"] = self._api_key
        response = await self._request(f"{DOCS_API_BASE}/{document_id}", params)

        return DocumentData(
            document_id=response.get("documentId", document_id),
            title=response.get("title", ""),
            raw=response,
        )

    async def _request(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        """Make an authenticated GET request."""
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
            result: dict[str, Any] = response.json()
            return result
        except httpx.HTTPStatusError as e:
            self._handle_http_error(e)
            raise  # unreachable, but makes type checker happy
        except httpx.RequestError as e:
            raise TransportError(f"Network error: {e}") from e

    def _handle_http_error(self, e: httpx.HTTPStatusError) -> None:
        """Handle HTTP errors and raise appropriate exceptions."""
        status = e.response.status_code
        if status == 401:
            raise AuthenticationError("Invalid or expired access token") from e
        if status == 403:
            raise AuthenticationError(
                "Access denied. Check your scopes and permissions."
            ) from e
        if status == 404:
            raise NotFoundError(
                "Not found. Check the ID and sharing permissions."
            ) from e
        body = e.response.text
        raise APIError(f"API error ({status}): {body}", status_code=status) from e

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()


class LocalFileTransport(Transport):
    """Test transport that reads from local golden files.

    Expected directory structure:
        golden_dir/
            <folder_id>.files.json   {"files": [...]}
            <document_id>.json       raw Docs API response
    """

    def __init__(self, golden_dir: Path) -> None:
        """Initialize the transport.

        Args:
            golden_dir: Directory containing golden test files
        """
        self._golden_dir = golden_dir

    async def list_folder(
        self,
        folder_id: str,
        *,
        page_size: int = 100,  # noqa: ARG002
        fields: Iterable[str] = (),  # noqa: ARG002
    ) -> list[dict[str, Any]]:
        """Read a folder listing from a local file."""
        path = self._golden_dir / f"{folder_id}.files.json"
        if not path.exists():
            raise NotFoundError(f"Folder not found: {folder_id}")
        data = json.loads(path.read_text(encoding="utf-8"))
        result: list[dict[str, Any]] = data.get("files", [])
        return result

    async def get_document(self, document_id: str) -> DocumentData:
        """Read document data from local file."""
        path = self._golden_dir / f"{document_id}.json"
        if not path.exists():
            raise NotFoundError(f"Document not found: {document_id}")
        response = json.loads(path.read_text(encoding="utf-8"))

        return DocumentData(
            document_id=response.get("documentId", document_id),
            title=response.get("title", ""),
            raw=response,
        )

    async def close(self) -> None:
        """No-op for local file transport."""
