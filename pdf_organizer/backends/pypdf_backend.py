"""pypdf backend for structural PDF edits."""

from __future__ import annotations

import io

from pypdf import PageObject, PdfReader, PdfWriter, Transformation
from pypdf.errors import PdfReadError
from pypdf.generic import NameObject, RectangleObject

from ..exceptions import InvalidPDFError
from ..types import PageSize, Placement

PRODUCER = "PDF Organizer"


class PypdfBackend:
    """Copies, embeds and serializes pages using `pypdf` under the hood."""

    def load(self, data: bytes) -> PdfReader:
        """Open ``data`` read-only; the bytes are never modified."""

        try:
            reader = PdfReader(io.BytesIO(data))
        except PdfReadError as exc:
            raise InvalidPDFError(f"Corrupted or invalid PDF data. Error: {exc}") from exc
        except Exception as exc:
            raise InvalidPDFError(f"Unexpected error reading PDF data. Error: {exc}") from exc

        if reader.is_encrypted:
            try:
                reader.decrypt("")
            except Exception as exc:
                raise InvalidPDFError("PDF is encrypted and cannot be organized.") from exc
        return reader

    def new_writer(self) -> PdfWriter:
        return PdfWriter()

    def to_bytes(self, writer: PdfWriter) -> bytes:
        writer.add_metadata({"/Producer": PRODUCER})
        buffer = io.BytesIO()
        writer.write(buffer)
        return buffer.getvalue()

    def extract_page(self, reader: PdfReader, index: int) -> bytes:
        """Return a standalone single-page PDF holding page ``index``."""

        writer = self.new_writer()
        writer.add_page(reader.pages[index])
        return self.to_bytes(writer)

    @staticmethod
    def page_size(page: PageObject) -> PageSize:
        box = page.mediabox
        return PageSize(width=float(box.width), height=float(box.height))

    @staticmethod
    def embed_page(page: PageObject) -> PageObject:
        """Return a drawable view of ``page``.

        The view shares content and resources with ``page`` but owns its page
        dictionary, so clipping it leaves the source document untouched.
        """

        drawable = PageObject(pdf=page.pdf, indirect_reference=page.indirect_reference)
        drawable.update(page)
        return drawable

    @staticmethod
    def draw_page(target: PageObject, drawable: PageObject, placement: Placement) -> None:
        """Draw ``drawable`` onto ``target`` at ``placement``.

        The clip rectangle is applied in the drawable's own coordinates; pypdf
        clips merged content to the merged page's crop box.
        """

        box = drawable.mediabox
        left = float(box.left)
        bottom = float(box.bottom)
        drawable[NameObject("/CropBox")] = RectangleObject(
            (
                left + placement.clip_x,
                bottom + placement.clip_y,
                left + placement.clip_x + placement.clip_width,
                bottom + placement.clip_y + placement.clip_height,
            )
        )
        transformation = Transformation().translate(
            tx=placement.x - left,
            ty=placement.y - bottom,
        )
        target.merge_transformed_page(drawable, transformation)


__all__ = ["PypdfBackend", "PRODUCER"]
