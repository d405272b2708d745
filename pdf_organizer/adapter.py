"""Translate grid interactions into collection editor calls.

The editor knows nothing about clicks or drags; these controllers hold the
little UI state the grids need (the drag source) and decide which editor
operation an interaction maps to.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .editor import CollectionEditor
from .store import OrganizerStore, SplitterStore


@dataclass(frozen=True)
class Card:
    """What a grid cell displays."""

    label: str
    preview: bytes
    selected: bool


class OrganizerGrid:
    """Page grid of the organizer tool."""

    def __init__(self, store: OrganizerStore) -> None:
        self.store = store
        self.editor = CollectionEditor(store)
        self._drag_source: Optional[int] = None

    def cards(self) -> List[Card]:
        selection = self.store.selection
        return [
            Card(label=f"Page {index + 1}", preview=page.preview, selected=index in selection)
            for index, page in enumerate(self.store.pages)
        ]

    def click(self, index: int, *, shift: bool = False) -> None:
        # Without an anchor a shift-click behaves like a plain click.
        if shift and self.store.selection.last_clicked is not None:
            self.editor.range_select(index)
        else:
            self.editor.toggle(index)

    def drag_start(self, index: int) -> None:
        self.store.check_index(index)
        self._drag_source = index

    def drop(self, index: int) -> None:
        if self._drag_source is None:
            return
        source, self._drag_source = self._drag_source, None
        self.editor.move(source, index)

    def delete_card(self, index: int) -> None:
        self.editor.remove_at(index)

    def select_all(self) -> None:
        self.editor.select_all()

    def deselect_all(self) -> None:
        self.editor.deselect_all()

    def delete_selected(self) -> None:
        self.editor.delete_selected()

    def reverse(self) -> None:
        self.editor.reverse_all()


class SplitterGrid:
    """Spread grid of the splitter tool; a click flips the split flag."""

    def __init__(self, store: SplitterStore) -> None:
        self.store = store
        self.editor = CollectionEditor(store)

    def cards(self) -> List[Card]:
        return [
            Card(label=f"Spread {index + 1}", preview=page.preview, selected=page.selected)
            for index, page in enumerate(self.store.pages)
        ]

    def click(self, index: int) -> None:
        self.editor.toggle_flag(index)

    def split_all(self) -> None:
        self.editor.flag_all()

    def split_none(self) -> None:
        self.editor.unflag_all()


__all__ = ["Card", "OrganizerGrid", "SplitterGrid"]
