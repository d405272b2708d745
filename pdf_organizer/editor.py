"""In-place editing of a page store's order and selection."""

from __future__ import annotations

import logging
from typing import Generic, List

from .store import PageStore, PageT

LOGGER = logging.getLogger("pdf_organizer.editor")


class CollectionEditor(Generic[PageT]):
    """Reorders, selects and deletes surrogates without touching page bytes."""

    def __init__(self, store: PageStore[PageT]) -> None:
        self.store = store

    @property
    def pages(self) -> List[PageT]:
        return self.store.pages

    @property
    def selected_indices(self) -> List[int]:
        return sorted(self.store.selection.indices)

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------
    def move(self, source: int, target: int) -> None:
        """Move the entry at ``source`` so it ends up at ``target``.

        ``target`` is an index into the sequence after the entry has been
        removed, so moving 0 to 3 in ``[A, B, C, D, E]`` gives
        ``[B, C, D, A, E]``.
        """

        if source == target:
            return
        self.store.check_index(source)
        self.store.check_index(target)
        page = self.pages.pop(source)
        self.pages.insert(target, page)
        self.store.selection.clear()
        LOGGER.debug("Moved page from %d to %d", source, target)

    def reverse_all(self, *, clear_selection: bool = False) -> None:
        """Reverse the collection; selected indices are not remapped."""

        self.pages.reverse()
        if clear_selection:
            self.store.selection.clear()

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def toggle(self, index: int) -> bool:
        """Flip the selection of ``index`` and make it the range anchor."""

        self.store.check_index(index)
        selection = self.store.selection
        if index in selection.indices:
            selection.indices.discard(index)
        else:
            selection.indices.add(index)
        selection.last_clicked = index
        return index in selection.indices

    def range_select(self, index: int) -> bool:
        """Add the span between the anchor and ``index`` to the selection.

        Returns ``False`` without changing anything when there is no anchor.
        """

        self.store.check_index(index)
        selection = self.store.selection
        if selection.last_clicked is None:
            return False
        start = min(index, selection.last_clicked)
        end = max(index, selection.last_clicked)
        selection.indices.update(range(start, end + 1))
        return True

    def select_all(self) -> None:
        self.store.selection.indices.update(range(len(self.pages)))

    def deselect_all(self) -> None:
        self.store.selection.clear(reset_anchor=False)

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------
    def delete_selected(self) -> List[PageT]:
        """Remove every selected entry in one step and return the removed pages."""

        doomed = self.store.selection.indices
        removed = [page for index, page in enumerate(self.pages) if index in doomed]
        self.pages[:] = [page for index, page in enumerate(self.pages) if index not in doomed]
        self.store.selection.clear()
        LOGGER.debug("Deleted %d selected pages", len(removed))
        if not self.pages:
            LOGGER.info("Collection is empty, resetting store")
            self.store.reset()
        return removed

    def remove_at(self, index: int) -> PageT:
        self.store.check_index(index)
        return self.pages.pop(index)

    # ------------------------------------------------------------------
    # Split flags
    # ------------------------------------------------------------------
    def toggle_flag(self, index: int) -> bool:
        """Flip the per-page flag stored on the surrogate itself."""

        self.store.check_index(index)
        page = self.pages[index]
        page.selected = not page.selected
        return page.selected

    def set_flag(self, index: int, value: bool) -> None:
        self.store.check_index(index)
        self.pages[index].selected = value

    def flag_all(self) -> None:
        for page in self.pages:
            page.selected = True

    def unflag_all(self) -> None:
        for page in self.pages:
            page.selected = False


__all__ = ["CollectionEditor"]
