from __future__ import annotations

import asyncio
import io
from typing import Callable

import pytest
from pypdf import PdfReader

from conftest import page_widths
from pdf_organizer.assembler import assemble
from pdf_organizer.backends.pypdf_backend import PRODUCER
from pdf_organizer.cancellation import CancellationToken
from pdf_organizer.config import EngineSettings
from pdf_organizer.editor import CollectionEditor
from pdf_organizer.exceptions import AssemblyError, OperationCancelledError
from pdf_organizer.store import OrganizerStore
from pdf_organizer.types import OwnedPage


@pytest.fixture()
def loaded_store(settings: EngineSettings, pdf_factory: Callable[..., bytes]) -> OrganizerStore:
    store = OrganizerStore(settings=settings)
    asyncio.run(store.ingest(pdf_factory((100, 300), (110, 300), (120, 300)), "a.pdf"))
    asyncio.run(store.ingest(pdf_factory((200, 300), (210, 300)), "b.pdf"))
    return store


def test_assemble_keeps_collection_order(loaded_store: OrganizerStore) -> None:
    data = asyncio.run(assemble(loaded_store))

    assert page_widths(data) == [100.0, 110.0, 120.0, 200.0, 210.0]


def test_assemble_after_edits(loaded_store: OrganizerStore) -> None:
    editor = CollectionEditor(loaded_store)
    editor.move(0, 3)
    editor.toggle(0)
    editor.toggle(4)
    editor.delete_selected()

    data = asyncio.run(assemble(loaded_store))

    assert page_widths(data) == [120.0, 200.0, 100.0]


def test_assemble_reversed(loaded_store: OrganizerStore) -> None:
    CollectionEditor(loaded_store).reverse_all()

    data = asyncio.run(assemble(loaded_store))

    assert page_widths(data) == [210.0, 200.0, 120.0, 110.0, 100.0]


def test_assemble_same_page_twice(settings: EngineSettings, pdf_factory: Callable[..., bytes]) -> None:
    store = OrganizerStore(settings=settings)
    data = pdf_factory((150, 150))
    asyncio.run(store.ingest(data, "x.pdf"))
    asyncio.run(store.ingest(data, "x.pdf"))

    assert page_widths(asyncio.run(assemble(store))) == [150.0, 150.0]


def test_assemble_sets_producer_and_reports_progress(loaded_store: OrganizerStore) -> None:
    calls = []

    data = asyncio.run(assemble(loaded_store, progress=lambda c, t: calls.append((c, t))))

    assert PdfReader(io.BytesIO(data)).metadata["/Producer"] == PRODUCER
    assert calls == [(1, 5), (2, 5), (3, 5), (4, 5), (5, 5)]


def test_assemble_empty_store_returns_none() -> None:
    assert asyncio.run(assemble(OrganizerStore())) is None


def test_assemble_failure_names_position(loaded_store: OrganizerStore) -> None:
    loaded_store.pages.insert(2, OwnedPage(page_index=7, data=b"garbage", source_name="bad.pdf"))

    with pytest.raises(AssemblyError) as excinfo:
        asyncio.run(assemble(loaded_store))

    assert excinfo.value.position == 2
    assert "bad.pdf" in str(excinfo.value)


def test_assemble_cancelled(loaded_store: OrganizerStore) -> None:
    token = CancellationToken()
    token.cancel()

    with pytest.raises(OperationCancelledError):
        asyncio.run(assemble(loaded_store, token=token))

    assert len(loaded_store) == 5
