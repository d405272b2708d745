"""Export every page of a document as JPEG images inside a zip archive."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .archive import ArchiveFolder, ArchiveWriter
from .backends.base import RenderBackend, RenderDocument
from .backends.pymupdf_backend import PyMuPDFBackend
from .cancellation import CancellationToken, check_cancelled
from .config import EngineSettings
from .exceptions import ExportError
from .thumbnails import encode_jpeg
from .types import ProgressCallback
from .utils import image_entry_name, strip_extension

LOGGER = logging.getLogger("pdf_organizer.exporter")


async def _export_page(
    document: RenderDocument,
    page_number: int,
    folder: ArchiveFolder,
    base_name: str,
    settings: EngineSettings,
) -> None:
    # Rendering stays on the event loop thread; only encoding is offloaded.
    image = document.rasterize(page_number, settings.export_scale)
    try:
        data = await asyncio.to_thread(encode_jpeg, image, settings.export_quality)
    finally:
        image.close()
    folder.add(image_entry_name(base_name, page_number), data)
    LOGGER.debug("Exported page %d (%d bytes)", page_number, len(data))


async def export_images(
    data: bytes,
    archive_name: str,
    *,
    settings: Optional[EngineSettings] = None,
    renderer: Optional[RenderBackend] = None,
    progress: Optional[ProgressCallback] = None,
    token: Optional[CancellationToken] = None,
) -> Optional[bytes]:
    """Render every page of ``data`` into ``<name>/<name>_Page_<n>.jpg``.

    Pages are processed in batches of ``settings.export_batch_size``. The
    pages of one batch run concurrently and the next batch starts only once
    all of them have finished. Returns ``None`` for a document without pages.

    Raises:
        ExportError: If the document cannot be opened or any page fails. The
            whole export is abandoned and no archive is produced.
    """

    settings = settings or EngineSettings()
    renderer = renderer or PyMuPDFBackend()
    base_name = strip_extension(archive_name)

    try:
        document = renderer.open(data)
    except Exception as exc:
        raise ExportError(f"Unable to open {archive_name} for export: {exc}") from exc

    try:
        total = document.page_count
        if total == 0:
            LOGGER.info("Nothing to export from %s", archive_name)
            return None

        archive = ArchiveWriter()
        folder = archive.folder(base_name)
        batch_size = settings.export_batch_size
        for start in range(1, total + 1, batch_size):
            check_cancelled(token)
            numbers = list(range(start, min(start + batch_size, total + 1)))
            results = await asyncio.gather(
                *(_export_page(document, number, folder, base_name, settings) for number in numbers),
                return_exceptions=True,
            )
            for number, result in zip(numbers, results):
                if isinstance(result, asyncio.CancelledError):
                    raise result
                if isinstance(result, BaseException):
                    LOGGER.error("Export failed on page %d: %s", number, result)
                    raise ExportError(
                        f"Failed to export page {number} of {archive_name}: {result}",
                        page_number=number,
                    ) from result
            if progress:
                progress(numbers[-1], total)
            await asyncio.sleep(settings.yield_delay)
            check_cancelled(token)
    finally:
        document.close()

    payload = archive.to_bytes()
    LOGGER.info("Exported %d pages from %s (%d bytes)", total, archive_name, len(payload))
    return payload


__all__ = ["export_images"]
