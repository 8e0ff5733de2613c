"""Tests for Drive folder listing."""

from __future__ import annotations

import pytest

from gdocs_source.drive import BASE_FIELDS, FileDescriptor, drive_fields, fetch_drive_files
from gdocs_source.transport import NotFoundError
from tests.fakes import FakeTransport, doc_file, folder


def test_drive_fields_merges_without_duplicates() -> None:
    assert drive_fields(["createdTime", "modifiedTime"]) == [*BASE_FIELDS, "modifiedTime"]


def test_descriptor_from_drive_file() -> None:
    descriptor = FileDescriptor.from_drive_file(
        doc_file("f1", "Doc", modifiedTime="2023-05-01T00:00:00Z"), ("Root",)
    )
    assert descriptor.id == "f1"
    assert descriptor.name == "Doc"
    assert descriptor.created_time == "2023-01-01T00:00:00Z"
    assert descriptor.metadata == {"modifiedTime": "2023-05-01T00:00:00Z"}
    assert descriptor.breadcrumb == ("Root",)


def test_json_description_becomes_metadata() -> None:
    descriptor = FileDescriptor.from_drive_file(
        doc_file("f1", "Doc", description='{"draft": true, "tags": ["x"]}')
    )
    assert descriptor.metadata == {"draft": True, "tags": ["x"]}


@pytest.mark.parametrize("description", ["Just words", "{not json", '["a list"]'])
def test_other_descriptions_are_kept_verbatim(description: str) -> None:
    descriptor = FileDescriptor.from_drive_file(doc_file("f1", "Doc", description=description))
    assert descriptor.metadata == {"description": description}


@pytest.mark.asyncio
async def test_fetch_walks_subfolders_depth_first() -> None:
    transport = FakeTransport(
        folders={
            "root": [
                folder("a", "Alpha"),
                doc_file("d1", "One"),
                folder("b", "Beta"),
            ],
            "a": [doc_file("d2", "Two"), folder("a1", "Deep")],
            "a1": [doc_file("d3", "Three")],
            "b": [{"id": "s1", "name": "Sheet", "mimeType": "application/vnd.google-apps.spreadsheet"}],
        }
    )

    descriptors = await fetch_drive_files(transport, ["root"])

    assert [d.id for d in descriptors] == ["d2", "d3", "d1"]
    assert [d.breadcrumb for d in descriptors] == [("Alpha",), ("Alpha", "Deep"), ()]


@pytest.mark.asyncio
async def test_fetch_lists_each_file_and_folder_once() -> None:
    transport = FakeTransport(
        folders={
            "r1": [folder("shared", "Shared"), doc_file("d1", "One")],
            "r2": [folder("shared", "Shared"), doc_file("d1", "One"), doc_file("d2", "Two")],
            "shared": [doc_file("d3", "Three")],
        }
    )

    descriptors = await fetch_drive_files(transport, ["r1", "r2", "r1"])

    assert [d.id for d in descriptors] == ["d3", "d1", "d2"]
    assert transport.calls.count(("list_folder", "shared")) == 1
    assert transport.calls.count(("list_folder", "r1")) == 1


@pytest.mark.asyncio
async def test_fetch_propagates_transport_errors() -> None:
    with pytest.raises(NotFoundError):
        await fetch_drive_files(FakeTransport(), ["missing"])
