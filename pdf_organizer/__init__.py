"""
PDF Organizer - Reorder, delete and split PDF pages, export pages as images.

The engine models a document as an ordered, selectable collection of page
surrogates and rebuilds output documents from that collection.

Quick Start:
    >>> import asyncio
    >>> from pdf_organizer import OrganizerStore, CollectionEditor, assemble
    >>> store = OrganizerStore()
    >>> asyncio.run(store.ingest(open('input.pdf', 'rb').read(), 'input.pdf'))
    >>> CollectionEditor(store).move(0, 3)
    >>> data = asyncio.run(assemble(store))

Main Classes:
    - OrganizerStore: Multi-document page collection, one owned buffer per page
    - SplitterStore: Single-document collection sharing one source buffer
    - CollectionEditor: Move, select, delete and reverse pages
    - OrganizerGrid / SplitterGrid: Grid interaction adapters

Operations:
    - assemble: Rebuild one PDF in collection order
    - split_spreads: Split flagged two-page spreads
    - export_images: Zip every page as a JPEG image

Exceptions:
    - PDFOrganizerException: Base exception
    - InvalidPDFError: Invalid or corrupted PDF
    - PageIndexError: Collection index out of bounds
    - AssemblyError / SplitError / ExportError: Failed output stage
    - OperationCancelledError: Cancellation token triggered

For CLI usage, use the 'pdf-organizer' command after installation.
"""

__version__ = "1.0.0"
__license__ = "MIT"

# Core classes
from pdf_organizer.store import OrganizerStore, SplitterStore, SelectionState
from pdf_organizer.editor import CollectionEditor
from pdf_organizer.adapter import Card, OrganizerGrid, SplitterGrid
from pdf_organizer.cancellation import CancellationToken
from pdf_organizer.config import EngineSettings

# Operations
from pdf_organizer.assembler import assemble
from pdf_organizer.spreads import split_spreads, spread_placements
from pdf_organizer.exporter import export_images
from pdf_organizer.thumbnails import generate_thumbnail
from pdf_organizer.delivery import save_images, save_organized, save_split, write_to_directory

# Data types
from pdf_organizer.types import (
    OutputArtifact,
    OwnedPage,
    PageSize,
    PageSurrogate,
    Placement,
    SourceDocument,
    SplitDirection,
    SpreadPage,
)

# Exceptions
from pdf_organizer.exceptions import (
    PDFOrganizerException,
    InvalidPDFError,
    PageIndexError,
    AssemblyError,
    SplitError,
    ExportError,
    OperationCancelledError,
)

__all__ = [
    # Main classes
    "OrganizerStore",
    "SplitterStore",
    "SelectionState",
    "CollectionEditor",
    "Card",
    "OrganizerGrid",
    "SplitterGrid",
    "CancellationToken",
    "EngineSettings",
    # Operations
    "assemble",
    "split_spreads",
    "spread_placements",
    "export_images",
    "generate_thumbnail",
    "save_organized",
    "save_split",
    "save_images",
    "write_to_directory",
    # Data types
    "OutputArtifact",
    "OwnedPage",
    "PageSize",
    "PageSurrogate",
    "Placement",
    "SourceDocument",
    "SplitDirection",
    "SpreadPage",
    # Exceptions
    "PDFOrganizerException",
    "InvalidPDFError",
    "PageIndexError",
    "AssemblyError",
    "SplitError",
    "ExportError",
    "OperationCancelledError",
    # Version info
    "__version__",
]
