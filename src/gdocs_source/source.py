"""GoogleDocsSource - orchestrates listing, fetching, conversion and assembly.

The source returns plain ``ContentNode`` values; ``create_nodes`` adapts them
to any store that implements the small ``ContentStore`` protocol.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

from loguru import logger

from gdocs_source.converter import convert_document
from gdocs_source.drive import fetch_drive_files
from gdocs_source.exceptions import ConversionError, DocumentConversionFailed
from gdocs_source.nodes import ContentNode, FieldMapping, assemble_node

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

    from gdocs_source.drive import FileDescriptor
    from gdocs_source.settings import Settings
    from gdocs_source.transport import Transport

    TransportFactory = Callable[[Settings], Awaitable[Transport]]


class Collection(Protocol):
    """A named node collection in the host store."""

    def add_node(self, node: ContentNode) -> Any: ...


class ContentStore(Protocol):
    """The part of a host content store the source writes to."""

    def add_collection(self, type_name: str) -> Collection: ...


@dataclass
class MemoryCollection:
    type_name: str
    nodes: list[ContentNode] = field(default_factory=list)

    def add_node(self, node: ContentNode) -> ContentNode:
        self.nodes.append(node)
        return node


@dataclass
class MemoryStore:
    """In-process content store, used by the CLI and in tests."""

    collections: dict[str, MemoryCollection] = field(default_factory=dict)

    def add_collection(self, type_name: str) -> MemoryCollection:
        if type_name not in self.collections:
            self.collections[type_name] = MemoryCollection(type_name)
        return self.collections[type_name]


def register_nodes(
    store: ContentStore, type_name: str, nodes: Iterable[ContentNode]
) -> Collection:
    """Create the collection and add every node to it, in order."""
    collection = store.add_collection(type_name)
    for node in nodes:
        collection.add_node(node)
    return collection


async def google_api_transport(settings: Settings) -> Transport:
    """Authenticate and open the production transport."""
    from gdocs_source.auth import access_token
    from gdocs_source.transport import GoogleApiTransport

    token = await asyncio.to_thread(access_token, settings)
    return GoogleApiTransport(access_token=token, api_key=settings.api_key)


class GoogleDocsSource:
    """Turns the documents of configured Drive folders into content nodes."""

    def __init__(
        self,
        settings: Settings,
        transport_factory: TransportFactory | None = None,
    ) -> None:
        self._settings = settings
        self._transport_factory = transport_factory or google_api_transport
        self._mapping = FieldMapping.from_settings(settings)

    async def load_nodes(self) -> list[ContentNode]:
        """Run the whole pipeline and return one node per document.

        Raises:
            ConfigurationError: Before any network activity, if required
                settings are missing
            DocumentConversionFailed: If a document cannot be converted and
                ``on_error`` is ``"abort"``
            TransportError: Propagated unchanged from the API layer
        """
        settings = self._settings
        settings.require()

        logger.info(
            "Loading Google Docs from {} folder(s)", len(settings.folders_ids)
        )
        transport = await self._transport_factory(settings)
        try:
            descriptors = await fetch_drive_files(
                transport,
                settings.folders_ids,
                fields=settings.drive_fields,
                page_size=settings.num_nodes,
            )
            logger.info("Found {} document(s)", len(descriptors))

            semaphore = asyncio.Semaphore(settings.concurrency)
            tasks = [
                asyncio.ensure_future(self._load_node(transport, d, semaphore))
                for d in descriptors
            ]
            try:
                results = await asyncio.gather(*tasks)
            except BaseException:
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise
        finally:
            await transport.close()

        nodes = [node for node in results if node is not None]
        skipped = len(descriptors) - len(nodes)
        if skipped:
            logger.warning("Skipped {} document(s) that failed to convert", skipped)
        return nodes

    async def _load_node(
        self,
        transport: Transport,
        descriptor: FileDescriptor,
        semaphore: asyncio.Semaphore,
    ) -> ContentNode | None:
        async with semaphore:
            data = await transport.get_document(descriptor.id)

        try:
            converted = convert_document(data.raw, descriptor)
        except ConversionError as e:
            if self._settings.on_error == "skip":
                logger.bind(file_id=descriptor.id).warning(
                    "Skipping '{}': {}", descriptor.name, e
                )
                return None
            raise DocumentConversionFailed(descriptor.id, descriptor.name, e) from e

        logger.debug("Converted '{}' ({})", descriptor.name, descriptor.id)
        return assemble_node(converted, descriptor, self._mapping)

    async def create_nodes(self, store: ContentStore) -> Collection:
        """Load all nodes and register them in ``store``."""
        nodes = await self.load_nodes()
        collection = register_nodes(store, self._settings.type_name, nodes)
        logger.info(
            "Added {} node(s) to collection {}", len(nodes), self._settings.type_name
        )
        return collection
