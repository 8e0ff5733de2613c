"""gdocs-source - Google Docs content source.

Lists Google Docs in Drive folders, converts each document to Markdown,
plain text and a structural tree, and hands the results to a content store
as one node per document.
"""

__version__ = "0.1.0"

from gdocs_source.converter import ConvertedDocument, convert_document
from gdocs_source.drive import FileDescriptor, fetch_drive_files
from gdocs_source.exceptions import (
    ConfigurationError,
    ConversionError,
    DocumentConversionFailed,
    GdocsSourceError,
    UnsupportedBlockKind,
)
from gdocs_source.markdown import to_markdown, to_plain_text
from gdocs_source.nodes import ContentNode, FieldMapping, assemble_node, slugify
from gdocs_source.parser import ListState, parse_document
from gdocs_source.settings import Settings
from gdocs_source.source import (
    ContentStore,
    GoogleDocsSource,
    MemoryStore,
    register_nodes,
)
from gdocs_source.transport import (
    APIError,
    AuthenticationError,
    GoogleApiTransport,
    LocalFileTransport,
    NotFoundError,
    Transport,
    TransportError,
)

__all__ = [
    "APIError",
    "AuthenticationError",
    "ConfigurationError",
    "ContentNode",
    "ContentStore",
    "ConversionError",
    "ConvertedDocument",
    "DocumentConversionFailed",
    "FieldMapping",
    "FileDescriptor",
    "GdocsSourceError",
    "GoogleApiTransport",
    "GoogleDocsSource",
    "ListState",
    "LocalFileTransport",
    "MemoryStore",
    "NotFoundError",
    "Settings",
    "Transport",
    "TransportError",
    "UnsupportedBlockKind",
    "__version__",
    "assemble_node",
    "convert_document",
    "fetch_drive_files",
    "parse_document",
    "register_nodes",
    "slugify",
    "to_markdown",
    "to_plain_text",
]
