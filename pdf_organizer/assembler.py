"""Rebuild one PDF from an organizer store, front to back."""

from __future__ import annotations

import logging
from typing import Optional

from .backends.pypdf_backend import PypdfBackend
from .cancellation import CancellationToken, checkpoint
from .config import EngineSettings
from .exceptions import AssemblyError
from .store import OrganizerStore
from .types import ProgressCallback

LOGGER = logging.getLogger("pdf_organizer.assembler")


async def assemble(
    store: OrganizerStore,
    *,
    settings: Optional[EngineSettings] = None,
    structure: Optional[PypdfBackend] = None,
    progress: Optional[ProgressCallback] = None,
    token: Optional[CancellationToken] = None,
) -> Optional[bytes]:
    """Concatenate the store's pages in collection order.

    Each surrogate's owned buffer is opened on its own and its single page is
    appended to the output. Returns ``None`` for an empty store.

    Raises:
        AssemblyError: If any page cannot be copied or the output cannot be
            written. ``position`` names the failing collection index.
    """

    if store.is_empty:
        LOGGER.info("Nothing to assemble")
        return None

    settings = settings or store.settings
    structure = structure or store.structure
    pages = list(store.pages)
    total = len(pages)
    writer = structure.new_writer()

    for position, page in enumerate(pages):
        try:
            reader = structure.load(page.data)
            writer.add_page(reader.pages[0])
        except Exception as exc:
            LOGGER.error("Failed to copy page at position %d: %s", position, exc)
            raise AssemblyError(
                f"Failed to copy page {position + 1} ({page.source_name or 'unnamed'}, "
                f"original page {page.page_index + 1}): {exc}",
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
        LOGGER.error("Failed to serialize assembled PDF: %s", exc)
        raise AssemblyError(f"Failed to write assembled PDF: {exc}") from exc

    LOGGER.info("Assembled %d pages (%d bytes)", total, len(data))
    return data


__all__ = ["assemble"]
