from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import Callable, Iterable, List, Tuple

import fitz  # PyMuPDF
import pytest
from PIL import Image
from pypdf import PdfReader, PdfWriter

from pdf_organizer.config import EngineSettings
from pdf_organizer.exceptions import InvalidPDFError, PageIndexError
from pdf_organizer.types import PageSize

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

RED = (1, 0, 0)
BLUE = (0, 0, 1)


def build_pdf(sizes: Iterable[Tuple[float, float]]) -> bytes:
    writer = PdfWriter()
    for width, height in sizes:
        writer.add_blank_page(width=width, height=height)
    writer.add_metadata({"/Producer": "pdf-organizer-tests"})
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def page_widths(data: bytes) -> List[float]:
    reader = PdfReader(io.BytesIO(data))
    return [float(page.mediabox.width) for page in reader.pages]


def page_sizes(data: bytes) -> List[Tuple[float, float]]:
    reader = PdfReader(io.BytesIO(data))
    return [(float(page.mediabox.width), float(page.mediabox.height)) for page in reader.pages]


def center_color(data: bytes, page_number: int) -> Tuple[int, int, int]:
    """RGB of the centre pixel of a rendered page (1-based)."""

    with fitz.open(stream=data, filetype="pdf") as document:
        page = document[page_number - 1]
        pix = page.get_pixmap(matrix=fitz.Matrix(0.5, 0.5), alpha=False)
        return pix.pixel(pix.width // 2, pix.height // 2)[:3]


def is_red(color: Tuple[int, int, int]) -> bool:
    r, g, b = color
    return r > 200 and g < 60 and b < 60


def is_blue(color: Tuple[int, int, int]) -> bool:
    r, g, b = color
    return b > 200 and r < 60 and g < 60


class FakeDocument:
    """Render handle that records calls and can fail on chosen pages."""

    def __init__(self, page_count: int, fail_on: Iterable[int] = (), events: list | None = None) -> None:
        self._page_count = page_count
        self.fail_on = set(fail_on)
        self.events = events if events is not None else []
        self.closed = False

    @property
    def page_count(self) -> int:
        return self._page_count

    def page_size(self, page_number: int) -> PageSize:
        return PageSize(width=100, height=100)

    def rasterize(self, page_number: int, scale: float) -> Image.Image:
        if page_number < 1 or page_number > self._page_count:
            raise PageIndexError(f"Page {page_number} is out of bounds.")
        self.events.append(("render", page_number))
        if page_number in self.fail_on:
            raise RuntimeError(f"cannot render page {page_number}")
        return Image.new("RGB", (4, 4), color=(255, 255, 255))

    def close(self) -> None:
        self.closed = True


class FakeRenderer:
    def __init__(self, document: FakeDocument | None = None, *, broken: bool = False) -> None:
        self.document = document
        self.broken = broken

    def open(self, data: bytes) -> FakeDocument:
        if self.broken or self.document is None:
            raise InvalidPDFError("renderer cannot open this document")
        return self.document


@pytest.fixture()
def settings() -> EngineSettings:
    return EngineSettings(yield_every=1)


@pytest.fixture()
def pdf_factory() -> Callable[..., bytes]:
    def _create(*sizes: Tuple[float, float]) -> bytes:
        return build_pdf(sizes)

    return _create


@pytest.fixture()
def sample_pdf() -> bytes:
    return build_pdf([(200, 200)] * 3)


@pytest.fixture()
def empty_pdf() -> bytes:
    return build_pdf([])


@pytest.fixture()
def spread_pdf() -> bytes:
    """Two 400x200 spreads, left half red and right half blue."""

    document = fitz.open()
    for _ in range(2):
        page = document.new_page(width=400, height=200)
        page.draw_rect(fitz.Rect(0, 0, 200, 200), color=None, fill=RED)
        page.draw_rect(fitz.Rect(200, 0, 400, 200), color=None, fill=BLUE)
    data = document.tobytes()
    document.close()
    return data


@pytest.fixture()
def sample_pdf_path(tmp_path: Path, sample_pdf: bytes) -> Path:
    path = tmp_path / "sample.pdf"
    path.write_bytes(sample_pdf)
    return path
