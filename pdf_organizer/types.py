"""
Type definitions and dataclasses for PDF Organizer.

This module defines data structures shared by the stores, the editor and the
output stages.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

ProgressCallback = Callable[[int, int], None]


class SplitDirection(str, Enum):
    """Reading direction of a two-page spread."""

    LEFT_TO_RIGHT = "ltr"
    RIGHT_TO_LEFT = "rtl"


@dataclass(frozen=True)
class PageSize:
    """Page dimensions in PDF points at scale 1."""

    width: float
    height: float


@dataclass(frozen=True, eq=False)
class SourceDocument:
    """
    Read-only upload shared by every surrogate of one document.

    Attributes:
        data: Complete bytes of the uploaded PDF
        name: Upload filename, used for display and output naming
    """
    data: bytes
    name: str = ""


@dataclass(eq=False)
class PageSurrogate:
    """
    Lightweight stand-in for one page of a document.

    Surrogates compare by identity: two entries are never the same page even
    when they reference the same bytes.

    Attributes:
        page_index: Zero-based index of the page in its original document
        preview: Cached JPEG preview, empty when rendering failed
        selected: Selection flag (split flag in the splitter store)
    """
    page_index: int
    preview: bytes = b""
    selected: bool = False

    @property
    def has_preview(self) -> bool:
        return bool(self.preview)


@dataclass(eq=False)
class OwnedPage(PageSurrogate):
    """Organizer surrogate that exclusively owns a single-page PDF buffer."""

    data: bytes = b""
    source_name: str = ""


@dataclass(eq=False)
class SpreadPage(PageSurrogate):
    """Splitter surrogate referencing a page of a shared source document."""

    source: Optional[SourceDocument] = None

    @property
    def source_name(self) -> str:
        return self.source.name if self.source is not None else ""


@dataclass(frozen=True)
class Placement:
    """
    Placement of an embedded page on a destination page.

    ``x``/``y`` translate the embedded page on the destination; the clip
    rectangle is expressed in the embedded page's own coordinates.
    """
    x: float
    y: float
    clip_x: float
    clip_y: float
    clip_width: float
    clip_height: float


@dataclass(frozen=True)
class OutputArtifact:
    """
    Finished output handed to a delivery step.

    Attributes:
        data: Serialized output bytes
        filename: Suggested download filename
        media_type: MIME type of ``data``
    """
    data: bytes
    filename: str
    media_type: str

    def __str__(self) -> str:
        return f"OutputArtifact(filename='{self.filename}', size={len(self.data)})"
