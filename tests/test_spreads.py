from __future__ import annotations

import asyncio
from typing import Callable

import pytest

from conftest import center_color, is_blue, is_red, page_sizes
from pdf_organizer.cancellation import CancellationToken
from pdf_organizer.config import EngineSettings
from pdf_organizer.editor import CollectionEditor
from pdf_organizer.exceptions import OperationCancelledError, SplitError
from pdf_organizer.spreads import half_placements, split_spreads, spread_placements
from pdf_organizer.store import SplitterStore
from pdf_organizer.types import Placement, SourceDocument, SplitDirection, SpreadPage


@pytest.fixture()
def spread_store(settings: EngineSettings, spread_pdf: bytes) -> SplitterStore:
    store = SplitterStore(settings=settings)
    asyncio.run(store.ingest(spread_pdf, "book.pdf"))
    return store


def test_half_placements() -> None:
    left, right = half_placements(400, 200)

    assert left == Placement(x=0, y=0, clip_x=0, clip_y=0, clip_width=200, clip_height=200)
    assert right == Placement(x=-200, y=0, clip_x=200, clip_y=0, clip_width=200, clip_height=200)


def test_spread_placements_follow_direction() -> None:
    left, right = half_placements(300, 100)

    assert spread_placements(300, 100, SplitDirection.LEFT_TO_RIGHT) == (left, right)
    assert spread_placements(300, 100, "rtl") == (right, left)


def test_unknown_direction_rejected() -> None:
    with pytest.raises(ValueError):
        spread_placements(300, 100, "ttb")


def test_split_left_to_right(spread_store: SplitterStore) -> None:
    data = asyncio.run(split_spreads(spread_store, SplitDirection.LEFT_TO_RIGHT))

    assert page_sizes(data) == [(200.0, 200.0)] * 4
    assert is_red(center_color(data, 1))
    assert is_blue(center_color(data, 2))
    assert is_red(center_color(data, 3))
    assert is_blue(center_color(data, 4))


def test_split_right_to_left(spread_store: SplitterStore) -> None:
    data = asyncio.run(split_spreads(spread_store, SplitDirection.RIGHT_TO_LEFT))

    assert is_blue(center_color(data, 1))
    assert is_red(center_color(data, 2))


def test_unflagged_pages_are_copied_unchanged(spread_store: SplitterStore) -> None:
    CollectionEditor(spread_store).toggle_flag(0)

    data = asyncio.run(split_spreads(spread_store))

    assert page_sizes(data) == [(400.0, 200.0), (200.0, 200.0), (200.0, 200.0)]
    assert is_red(center_color(data, 2))


def test_page_count_is_pages_plus_flagged(
    settings: EngineSettings, pdf_factory: Callable[..., bytes]
) -> None:
    store = SplitterStore(settings=settings)
    asyncio.run(store.ingest(pdf_factory((400, 200), (300, 300), (400, 200)), "mixed.pdf"))
    CollectionEditor(store).set_flag(1, False)

    data = asyncio.run(split_spreads(store))

    assert page_sizes(data) == [
        (200.0, 200.0),
        (200.0, 200.0),
        (300.0, 300.0),
        (200.0, 200.0),
        (200.0, 200.0),
    ]


def test_split_follows_collection_order(
    settings: EngineSettings, pdf_factory: Callable[..., bytes]
) -> None:
    store = SplitterStore(settings=settings)
    asyncio.run(store.ingest(pdf_factory((100, 100), (300, 100)), "two.pdf"))
    editor = CollectionEditor(store)
    editor.unflag_all()
    editor.move(1, 0)

    data = asyncio.run(split_spreads(store))

    assert page_sizes(data) == [(300.0, 100.0), (100.0, 100.0)]


def test_split_leaves_source_untouched(spread_store: SplitterStore, spread_pdf: bytes) -> None:
    asyncio.run(split_spreads(spread_store))
    asyncio.run(split_spreads(spread_store, "rtl"))

    assert spread_store.source.data == spread_pdf


def test_split_empty_store_returns_none() -> None:
    assert asyncio.run(split_spreads(SplitterStore())) is None


def test_split_bad_page_reference_names_position(spread_store: SplitterStore) -> None:
    spread_store.pages.append(SpreadPage(page_index=9, selected=True, source=spread_store.source))

    with pytest.raises(SplitError) as excinfo:
        asyncio.run(split_spreads(spread_store))

    assert excinfo.value.position == 2


def test_split_unreadable_source(spread_store: SplitterStore) -> None:
    spread_store.source = SourceDocument(data=b"not a pdf", name="broken.pdf")

    with pytest.raises(SplitError):
        asyncio.run(split_spreads(spread_store))


def test_split_cancelled(spread_store: SplitterStore) -> None:
    token = CancellationToken()
    token.cancel()

    with pytest.raises(OperationCancelledError):
        asyncio.run(split_spreads(spread_store, token=token))
