"""Anchor probe backed by a Qt item view."""

from __future__ import annotations

from typing import Optional

from PySide6.QtWidgets import QAbstractItemView

from .paging_list_model import PagingListModel


class ListViewAnchorProbe:
    """Answer ``probe(key) -> offset`` from ``view.visualRect``.

    Offsets are the top edge of the item's rectangle in viewport coordinates,
    so only vertical lists are compensated.  Returns ``None`` for unknown keys
    or items the view has not laid out.
    """

    def __init__(self, view: QAbstractItemView, model: PagingListModel) -> None:
        self._view = view
        self._model = model

    def __call__(self, key: str) -> Optional[float]:
        row = self._model.row_for_key(key)
        if row is None:
            return None
        rect = self._view.visualRect(self._model.index(row, 0))
        if not rect.isValid():
            return None
        return float(rect.top())
