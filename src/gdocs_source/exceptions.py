"""Custom exceptions for the gdocs-source pipeline."""

from __future__ import annotations


class GdocsSourceError(Exception):
    """Base exception for gdocs-source errors."""

    pass


class ConfigurationError(GdocsSourceError):
    """Raised when required configuration is missing.

    Always raised before any network activity takes place.
    """

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(
            "source-google-docs: configuration errors:\n  - "
            + "\n  - ".join(f"Missing {name}" for name in self.missing)
        )


class ConversionError(GdocsSourceError):
    """Base exception for document conversion failures."""

    def __init__(self, message: str, document_id: str | None = None) -> None:
        self.document_id = document_id
        if document_id:
            message = f"{message} (document '{document_id}')"
        super().__init__(message)


class UnsupportedBlockKind(ConversionError):
    """Raised when a document contains an element kind the parser does not know.

    Conversion fails instead of dropping the element, so that no node is ever
    built from silently truncated content.
    """

    def __init__(self, kind: str, document_id: str | None = None) -> None:
        self.kind = kind
        super().__init__(f"Unsupported block kind '{kind}'", document_id)


class DocumentConversionFailed(GdocsSourceError):
    """Raised when a run aborts because one document could not be processed."""

    def __init__(self, file_id: str, name: str, cause: Exception) -> None:
        self.file_id = file_id
        self.name = name
        self.cause = cause
        super().__init__(f"Failed to process '{name}' ({file_id}): {cause}")
