"""Backend abstractions for PDF Organizer."""

from .base import RenderBackend, RenderDocument
from .pymupdf_backend import PyMuPDFBackend, PyMuPDFDocument
from .pypdf_backend import PypdfBackend

__all__ = [
    "RenderBackend",
    "RenderDocument",
    "PyMuPDFBackend",
    "PyMuPDFDocument",
    "PypdfBackend",
]
