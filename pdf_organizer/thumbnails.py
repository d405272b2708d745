"""Preview rendering for page surrogates."""

from __future__ import annotations

import io
import logging

from PIL import Image

from .backends.base import RenderDocument

LOGGER = logging.getLogger("pdf_organizer.thumbnails")


def encode_jpeg(image: Image.Image, quality: int) -> bytes:
    buffer = io.BytesIO()
    image.convert("RGB").save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()


def generate_thumbnail(
    document: RenderDocument,
    page_number: int,
    *,
    scale: float = 0.3,
    quality: int = 50,
) -> bytes:
    """Render a small JPEG preview of ``page_number`` (1-based).

    Any render or encode failure yields ``b""`` so callers can keep going
    with an empty preview.
    """

    try:
        image = document.rasterize(page_number, scale)
        try:
            return encode_jpeg(image, quality)
        finally:
            image.close()
    except Exception as exc:
        LOGGER.warning("Preview for page %s failed: %s", page_number, exc)
        return b""


__all__ = ["encode_jpeg", "generate_thumbnail"]
