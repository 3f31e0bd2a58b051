"""Qt list model mirroring a :class:`PagingController`."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from PySide6.QtCore import QAbstractListModel, QModelIndex, QObject, QSize, Qt, Signal

from ..models import PagingState
from ..viewmodels.paging_controller import PagingController
from .roles import Roles, role_names

logger = logging.getLogger(__name__)


class PagingListModel(QAbstractListModel):
    """Expose controller items to Qt views behind a leading spacer row.

    Row ``0`` is a spacer whose height follows
    :attr:`PagingController.leading_space`, so views keep the anchor item in
    place after the controller trims leading items.  Item rows start at ``1``.
    """

    pagingStateChanged = Signal(str, str)

    def __init__(
        self,
        controller: PagingController,
        display: Optional[Callable[[Any], str]] = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._display = display or str
        controller.changed.connect(self._handle_controller_changed)
        controller.state_changed.connect(self._handle_state_changed)
        controller.leading_space_changed.connect(self._handle_leading_space_changed)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def controller(self) -> PagingController:
        return self._controller

    def detach(self) -> None:
        """Stop mirroring the controller."""

        self._controller.changed.disconnect(self._handle_controller_changed)
        self._controller.state_changed.disconnect(self._handle_state_changed)
        self._controller.leading_space_changed.disconnect(self._handle_leading_space_changed)

    def row_for_key(self, key: str) -> Optional[int]:
        """Return the model row of the item owning *key*."""

        row = self._controller.index_of_key(key)
        return None if row is None else row + 1

    def item_row(self, model_row: int) -> Optional[int]:
        """Map a model row back to a controller item position."""

        if 1 <= model_row <= self._controller.item_count:
            return model_row - 1
        return None

    # ------------------------------------------------------------------
    # QAbstractListModel overrides
    # ------------------------------------------------------------------
    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:  # noqa: N802
        if parent.isValid():
            return 0
        count = self._controller.item_count
        return count + 1 if count > 0 else 0

    def data(self, index: QModelIndex, role: int = Qt.DisplayRole):  # type: ignore[override]
        if not index.isValid():
            return None

        row = index.row()
        if row == 0 and self._controller.item_count > 0:
            if role == Roles.IS_SPACER:
                return True
            if role == Qt.ItemDataRole.SizeHintRole:
                return QSize(0, round(self._controller.leading_space))
            return None

        item_row = self.item_row(row)
        if item_row is None:
            return None
        item = self._controller.item_at(item_row)
        if role == Qt.ItemDataRole.DisplayRole:
            return self._display(item)
        if role == Roles.ITEM:
            return item
        if role == Roles.KEY:
            key_of = self._controller.key_of
            return key_of(item) if key_of is not None else None
        if role == Roles.IS_SPACER:
            return False
        return None

    def flags(self, index: QModelIndex) -> Qt.ItemFlags:  # noqa: N802
        if not index.isValid() or bool(self.data(index, Roles.IS_SPACER)):
            return Qt.NoItemFlags
        return Qt.ItemIsEnabled | Qt.ItemIsSelectable

    def roleNames(self) -> Dict[int, bytes]:  # type: ignore[override]
        return role_names(super().roleNames())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _handle_controller_changed(self) -> None:
        # Controller notifications are coarse; a reset keeps views in sync.
        self.beginResetModel()
        self.endResetModel()

    def _handle_state_changed(self, previous: PagingState, current: PagingState) -> None:
        self.pagingStateChanged.emit(previous.value, current.value)

    def _handle_leading_space_changed(self, _leading_space: float) -> None:
        if self.rowCount() <= 0:
            return
        spacer = self.index(0, 0)
        self.dataChanged.emit(spacer, spacer, [Qt.ItemDataRole.SizeHintRole])
