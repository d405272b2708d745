"""Wrap engine output into named artifacts and hand them to a delivery step."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from .assembler import assemble
from .cancellation import CancellationToken
from .config import EngineSettings
from .exporter import export_images
from .spreads import split_spreads
from .store import OrganizerStore, SplitterStore
from .types import OutputArtifact, ProgressCallback, SplitDirection
from .utils import strip_extension

LOGGER = logging.getLogger("pdf_organizer.delivery")

PDF_MEDIA_TYPE = "application/pdf"
ZIP_MEDIA_TYPE = "application/zip"

Deliver = Callable[[OutputArtifact], object]


def organized_filename(settings: EngineSettings) -> str:
    return f"{settings.output_prefix}_Organized.pdf"


def split_filename(settings: EngineSettings) -> str:
    return f"{settings.output_prefix}_Split_Result.pdf"


def archive_filename(settings: EngineSettings, source_name: str) -> str:
    return f"{settings.output_prefix}_{strip_extension(source_name)}.zip"


def write_to_directory(directory: Union[str, Path]) -> Callable[[OutputArtifact], Path]:
    """Return a delivery step that writes artifacts into ``directory``."""

    output_dir = Path(directory)

    def _deliver(artifact: OutputArtifact) -> Path:
        output_dir.mkdir(parents=True, exist_ok=True)
        destination = output_dir / artifact.filename
        destination.write_bytes(artifact.data)
        LOGGER.info("Wrote %s to %s", artifact.filename, destination)
        return destination

    return _deliver


def _handoff(artifact: OutputArtifact, deliver: Optional[Deliver]) -> OutputArtifact:
    if deliver is not None:
        deliver(artifact)
    return artifact


async def save_organized(
    store: OrganizerStore,
    *,
    deliver: Optional[Deliver] = None,
    progress: Optional[ProgressCallback] = None,
    token: Optional[CancellationToken] = None,
) -> Optional[OutputArtifact]:
    data = await assemble(store, progress=progress, token=token)
    if data is None:
        return None
    artifact = OutputArtifact(data, organized_filename(store.settings), PDF_MEDIA_TYPE)
    return _handoff(artifact, deliver)


async def save_split(
    store: SplitterStore,
    direction: Union[SplitDirection, str] = SplitDirection.LEFT_TO_RIGHT,
    *,
    deliver: Optional[Deliver] = None,
    progress: Optional[ProgressCallback] = None,
    token: Optional[CancellationToken] = None,
) -> Optional[OutputArtifact]:
    data = await split_spreads(store, direction, progress=progress, token=token)
    if data is None:
        return None
    artifact = OutputArtifact(data, split_filename(store.settings), PDF_MEDIA_TYPE)
    return _handoff(artifact, deliver)


async def save_images(
    data: bytes,
    source_name: str,
    *,
    settings: Optional[EngineSettings] = None,
    deliver: Optional[Deliver] = None,
    progress: Optional[ProgressCallback] = None,
    token: Optional[CancellationToken] = None,
) -> Optional[OutputArtifact]:
    settings = settings or EngineSettings()
    archive = await export_images(
        data, source_name, settings=settings, progress=progress, token=token
    )
    if archive is None:
        return None
    artifact = OutputArtifact(archive, archive_filename(settings, source_name), ZIP_MEDIA_TYPE)
    return _handoff(artifact, deliver)


__all__ = [
    "PDF_MEDIA_TYPE",
    "ZIP_MEDIA_TYPE",
    "organized_filename",
    "split_filename",
    "archive_filename",
    "write_to_directory",
    "save_organized",
    "save_split",
    "save_images",
]
