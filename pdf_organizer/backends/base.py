"""Backend protocols for page rendering."""

from __future__ import annotations

from typing import Protocol

from PIL import Image

from ..types import PageSize


class RenderDocument(Protocol):
    """An opened document that can report geometry and rasterize pages.

    Page numbers are 1-based, matching how render libraries address pages.
    """

    @property
    def page_count(self) -> int:
        """Number of pages in the document."""

    def page_size(self, page_number: int) -> PageSize:
        """Return the page dimensions at scale 1."""

    def rasterize(self, page_number: int, scale: float) -> Image.Image:
        """Render a page at ``scale`` into an RGB image."""

    def close(self) -> None:
        """Release decode resources held for the document."""


class RenderBackend(Protocol):
    """Protocol for the library that decodes and renders PDF pages."""

    def open(self, data: bytes) -> RenderDocument:
        """Open ``data`` and return a render handle."""
