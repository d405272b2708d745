"""Page surrogate stores and document ingestion."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Generic, Iterator, List, Optional, Set, TypeVar

from .backends.base import RenderBackend, RenderDocument
from .backends.pymupdf_backend import PyMuPDFBackend
from .backends.pypdf_backend import PypdfBackend
from .cancellation import CancellationToken, checkpoint
from .config import EngineSettings
from .exceptions import InvalidPDFError, PageIndexError
from .thumbnails import generate_thumbnail
from .types import OwnedPage, PageSurrogate, ProgressCallback, SourceDocument, SpreadPage

LOGGER = logging.getLogger("pdf_organizer.store")

PageT = TypeVar("PageT", bound=PageSurrogate)


@dataclass
class SelectionState:
    """Selected collection indices plus the anchor used by range selection."""

    indices: Set[int] = field(default_factory=set)
    last_clicked: Optional[int] = None

    def __contains__(self, index: int) -> bool:
        return index in self.indices

    def __len__(self) -> int:
        return len(self.indices)

    def clear(self, *, reset_anchor: bool = True) -> None:
        self.indices.clear()
        if reset_anchor:
            self.last_clicked = None


class PageStore(Generic[PageT]):
    """Ordered collection of page surrogates with its selection state."""

    def __init__(
        self,
        *,
        settings: Optional[EngineSettings] = None,
        renderer: Optional[RenderBackend] = None,
        structure: Optional[PypdfBackend] = None,
    ) -> None:
        self.settings = settings or EngineSettings()
        self.renderer: RenderBackend = renderer or PyMuPDFBackend()
        self.structure = structure or PypdfBackend()
        self.pages: List[PageT] = []
        self.selection = SelectionState()

    def __len__(self) -> int:
        return len(self.pages)

    def __iter__(self) -> Iterator[PageT]:
        return iter(self.pages)

    def __getitem__(self, index: int) -> PageT:
        return self.pages[index]

    @property
    def is_empty(self) -> bool:
        return not self.pages

    def check_index(self, index: int) -> None:
        if index < 0 or index >= len(self.pages):
            raise PageIndexError(
                f"Index {index} is out of bounds. Collection has {len(self.pages)} pages."
            )

    def reset(self) -> None:
        """Return the store to its pre-ingestion state."""

        self.pages.clear()
        self.selection.clear()

    def _open_renderer(self, data: bytes) -> Optional[RenderDocument]:
        try:
            return self.renderer.open(data)
        except InvalidPDFError as exc:
            LOGGER.warning("Previews unavailable, renderer could not open document: %s", exc)
            return None

    def _thumbnail(self, render: Optional[RenderDocument], page_number: int) -> bytes:
        if render is None:
            return b""
        return generate_thumbnail(
            render,
            page_number,
            scale=self.settings.thumbnail_scale,
            quality=self.settings.thumbnail_quality,
        )

    def _discard(self, pages: List[PageT]) -> None:
        doomed = {id(page) for page in pages}
        self.pages[:] = [page for page in self.pages if id(page) not in doomed]


class OrganizerStore(PageStore[OwnedPage]):
    """Multi-document store where every surrogate owns a single-page PDF."""

    async def ingest(
        self,
        data: bytes,
        name: str = "",
        *,
        progress: Optional[ProgressCallback] = None,
        token: Optional[CancellationToken] = None,
    ) -> List[OwnedPage]:
        """Append every page of ``data`` to the collection.

        Pages are appended as they are produced. If ingestion fails or is
        cancelled, the pages added by this call are removed again.
        """

        reader = self.structure.load(data)
        total = len(reader.pages)
        if total == 0:
            LOGGER.info("Document %s has no pages", name or "<unnamed>")
            return []

        added: List[OwnedPage] = []
        render = self._open_renderer(data)
        try:
            for index in range(total):
                page = OwnedPage(
                    page_index=index,
                    preview=self._thumbnail(render, index + 1),
                    data=self.structure.extract_page(reader, index),
                    source_name=name,
                )
                self.pages.append(page)
                added.append(page)
                LOGGER.debug("Ingested page %d/%d of %s", index + 1, total, name)
                if progress:
                    progress(index + 1, total)
                await checkpoint(
                    index + 1,
                    every=self.settings.yield_every,
                    delay=self.settings.yield_delay,
                    token=token,
                )
        except BaseException:
            self._discard(added)
            raise
        finally:
            if render is not None:
                render.close()

        LOGGER.info("Ingested %d pages from %s", total, name or "<unnamed>")
        return added


class SplitterStore(PageStore[SpreadPage]):
    """Single-document store whose surrogates share one read-only source."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.source: Optional[SourceDocument] = None

    def reset(self) -> None:
        super().reset()
        self.source = None

    @property
    def flagged_count(self) -> int:
        return sum(1 for page in self.pages if page.selected)

    async def ingest(
        self,
        data: bytes,
        name: str = "",
        *,
        progress: Optional[ProgressCallback] = None,
        token: Optional[CancellationToken] = None,
    ) -> List[SpreadPage]:
        """Replace the collection with one flagged surrogate per page of ``data``."""

        self.reset()
        reader = self.structure.load(data)
        total = len(reader.pages)
        source = SourceDocument(data=bytes(data), name=name)
        if total == 0:
            LOGGER.info("Document %s has no pages", name or "<unnamed>")
            return []

        render = self._open_renderer(source.data)
        try:
            for index in range(total):
                self.pages.append(
                    SpreadPage(
                        page_index=index,
                        preview=self._thumbnail(render, index + 1),
                        selected=True,
                        source=source,
                    )
                )
                if progress:
                    progress(index + 1, total)
                await checkpoint(
                    index + 1,
                    every=self.settings.yield_every,
                    delay=self.settings.yield_delay,
                    token=token,
                )
        except BaseException:
            self.reset()
            raise
        finally:
            if render is not None:
                render.close()

        self.source = source
        LOGGER.info("Loaded %d spreads from %s", total, name or "<unnamed>")
        return list(self.pages)


__all__ = ["SelectionState", "PageStore", "OrganizerStore", "SplitterStore"]
