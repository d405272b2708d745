"""PyMuPDF render backend."""

from __future__ import annotations

import logging

import fitz  # PyMuPDF
from PIL import Image

from ..exceptions import InvalidPDFError, PageIndexError
from ..types import PageSize
from .base import RenderBackend

LOGGER = logging.getLogger("pdf_organizer.render")


class PyMuPDFDocument:
    """Render handle around an open :class:`fitz.Document`."""

    def __init__(self, document: fitz.Document) -> None:
        self._document = document

    def __enter__(self) -> "PyMuPDFDocument":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def page_count(self) -> int:
        return self._document.page_count

    def _page(self, page_number: int) -> fitz.Page:
        if page_number < 1 or page_number > self.page_count:
            raise PageIndexError(
                f"Page {page_number} is out of bounds. PDF has {self.page_count} pages."
            )
        return self._document[page_number - 1]

    def page_size(self, page_number: int) -> PageSize:
        rect = self._page(page_number).rect
        return PageSize(width=rect.width, height=rect.height)

    def rasterize(self, page_number: int, scale: float) -> Image.Image:
        page = self._page(page_number)
        pix = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
        return Image.frombytes("RGB", (pix.width, pix.height), pix.samples)

    def close(self) -> None:
        if not self._document.is_closed:
            self._document.close()


class PyMuPDFBackend(RenderBackend):
    """Backend implementation that uses PyMuPDF under the hood."""

    def open(self, data: bytes) -> PyMuPDFDocument:
        try:
            document = fitz.open(stream=data, filetype="pdf")
        except Exception as exc:
            raise InvalidPDFError(f"Unable to open PDF for rendering. Error: {exc}") from exc
        LOGGER.debug("Opened render document with %d pages", document.page_count)
        return PyMuPDFDocument(document)


__all__ = ["PyMuPDFBackend", "PyMuPDFDocument"]
