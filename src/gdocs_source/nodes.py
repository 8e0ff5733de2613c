"""Node assembly: combine a converted document with its Drive metadata."""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from gdocs_source.settings import DEFAULT_FIELDS_MAPPER

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from gdocs_source.converter import ConvertedDocument
    from gdocs_source.drive import FileDescriptor
    from gdocs_source.settings import Settings

MARKDOWN_MIME_TYPE = "text/markdown"

# Node keys that metadata projection can never overwrite
_RESERVED_KEYS = frozenset({"id", "slug", "body", "json", "text", "internal"})


def slugify(value: str) -> str:
    """Lowercase ASCII slug with runs of other characters collapsed to ``-``.

    Two documents with the same title get the same slug. Titles with no
    Latin letters or digits give an empty slug; ``assemble_node`` then uses
    the file id instead.
    """
    if not value:
        return ""
    normalized = unicodedata.normalize("NFKD", value)
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii").lower()
    slug = re.sub(r"[^a-z0-9]+", "-", ascii_text)
    return slug.strip("-")


@dataclass(frozen=True)
class FieldMapping:
    """Metadata projection rules.

    Attributes:
        mapper: Source field name -> node field name
        defaults: Node field name -> value used when the source has none
    """

    mapper: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_FIELDS_MAPPER))
    defaults: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings: Settings) -> FieldMapping:
        """Layer the configured mapper over the default one."""
        return cls(
            mapper={**DEFAULT_FIELDS_MAPPER, **settings.fields_mapper},
            defaults=dict(settings.fields_default),
        )

    def project(self, source: Mapping[str, Any]) -> dict[str, Any]:
        """Rename source fields and fill in defaults for missing values."""
        projected: dict[str, Any] = {}
        for key, value in source.items():
            projected[self.mapper.get(key, key)] = value
        for key, default in self.defaults.items():
            if projected.get(key) is None:
                projected[key] = default
        return projected


@dataclass(frozen=True)
class ContentNode:
    """The unit handed to the host content store, one per document."""

    id: str
    title: str
    slug: str
    body: str
    json: str
    text: str
    date: str | None = None
    internal: dict[str, str] = field(default_factory=dict, hash=False)
    fields: dict[str, Any] = field(default_factory=dict, hash=False)

    def to_dict(self) -> dict[str, Any]:
        """Flatten the node: projected fields next to the core fields."""
        result: dict[str, Any] = dict(self.fields)
        result.update(
            {
                "id": self.id,
                "date": self.date,
                "title": self.title,
                "slug": self.slug,
                "body": self.body,
                "json": self.json,
                "text": self.text,
                "internal": dict(self.internal),
            }
        )
        return result


def assemble_node(
    document: ConvertedDocument,
    descriptor: FileDescriptor,
    mapping: FieldMapping | None = None,
    slugify: Callable[[str], str] = slugify,
) -> ContentNode:
    """Build the content node for one converted document.

    The descriptor's ``createdTime``, ``name`` and metadata are projected
    through ``mapping``; projected ``title`` and ``date`` become the node's
    title and date, everything else is carried in ``fields``.
    """
    mapping = mapping or FieldMapping()

    source: dict[str, Any] = {
        "createdTime": descriptor.created_time,
        "name": descriptor.name,
        **descriptor.metadata,
    }
    if descriptor.breadcrumb:
        source["breadcrumb"] = list(descriptor.breadcrumb)

    projected = mapping.project(source)
    title = projected.pop("title", None) or document.title
    date = projected.pop("date", None) or document.date
    extra = {k: v for k, v in projected.items() if k not in _RESERVED_KEYS}

    return ContentNode(
        id=descriptor.id,
        date=date,
        title=title,
        slug=slugify(title) or descriptor.id,
        body=document.markdown,
        json=document.content_json(),
        text=document.text,
        internal={"mimeType": MARKDOWN_MIME_TYPE, "content": document.markdown},
        fields=extra,
    )
