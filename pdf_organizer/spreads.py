"""Split two-page spreads into single pages."""

from __future__ import annotations

import logging
from typing import Optional, Tuple, Union

from .backends.pypdf_backend import PypdfBackend
from .cancellation import CancellationToken, checkpoint
from .config import EngineSettings
from .exceptions import InvalidPDFError, SplitError
from .store import SplitterStore
from .types import Placement, ProgressCallback, SplitDirection

LOGGER = logging.getLogger("pdf_organizer.spreads")


def half_placements(width: float, height: float) -> Tuple[Placement, Placement]:
    """Return the placements showing the visually-left and -right halves.

    Both target a page of size ``(width / 2, height)`` at native scale. The
    right half is shifted left by exactly ``width / 2`` so that its clip
    rectangle starts at the destination's origin.
    """

    half = width / 2
    left = Placement(x=0, y=0, clip_x=0, clip_y=0, clip_width=half, clip_height=height)
    right = Placement(x=-half, y=0, clip_x=half, clip_y=0, clip_width=half, clip_height=height)
    return left, right


def spread_placements(
    width: float,
    height: float,
    direction: Union[SplitDirection, str],
) -> Tuple[Placement, Placement]:
    """Placements for the first and second output page of a spread."""

    left, right = half_placements(width, height)
    if SplitDirection(direction) is SplitDirection.LEFT_TO_RIGHT:
        return left, right
    return right, left


async def split_spreads(
    store: SplitterStore,
    direction: Union[SplitDirection, str] = SplitDirection.LEFT_TO_RIGHT,
    *,
    settings: Optional[EngineSettings] = None,
    structure: Optional[PypdfBackend] = None,
    progress: Optional[ProgressCallback] = None,
    token: Optional[CancellationToken] = None,
) -> Optional[bytes]:
    """Build a PDF where every flagged page is split in two.

    Unflagged pages are copied unchanged. The shared source document is
    opened once for the whole run. Returns ``None`` for an empty store.

    Raises:
        SplitError: If the source cannot be read or any page fails.
            ``position`` names the failing collection index when known.
    """

    if store.is_empty or store.source is None:
        LOGGER.info("Nothing to split")
        return None

    direction = SplitDirection(direction)
    settings = settings or store.settings
    structure = structure or store.structure
    pages = list(store.pages)
    total = len(pages)

    try:
        reader = structure.load(store.source.data)
    except InvalidPDFError as exc:
        LOGGER.error("Failed to open spread source: %s", exc)
        raise SplitError(f"Split failed: {exc}") from exc

    writer = structure.new_writer()
    for position, page in enumerate(pages):
        try:
            source_page = reader.pages[page.page_index]
            if not page.selected:
                writer.add_page(source_page)
            else:
                size = structure.page_size(source_page)
                first, second = spread_placements(size.width, size.height, direction)
                drawable = structure.embed_page(source_page)
                half = size.width / 2
                for placement in (first, second):
                    target = writer.add_blank_page(width=half, height=size.height)
                    structure.draw_page(target, drawable, placement)
        except Exception as exc:
            LOGGER.error("Failed to split page at position %d: %s", position, exc)
            raise SplitError(
                f"Split failed on spread {position + 1} (page {page.page_index + 1}): {exc}",
                position=position,
            ) from exc
        if progress:
            progress(position + 1, total)
        await checkpoint(
            position + 1,
            every=settings.yield_every,
            delay=settings.yield_delay,
            token=token,
        )

    try:
        data = structure.to_bytes(writer)
    except Exception as exc:
        LOGGER.error("Failed to serialize split PDF: %s", exc)
        raise SplitError(f"Split failed while writing output: {exc}") from exc

    LOGGER.info(
        "Split %d of %d pages %s into %d pages",
        sum(1 for page in pages if page.selected),
        total,
        direction.value,
        len(writer.pages),
    )
    return data


__all__ = ["half_placements", "spread_placements", "split_spreads"]
