import asyncio
import os

import pytest

pytest.importorskip("PySide6", reason="PySide6 is required for model tests", exc_type=ImportError)
pytest.importorskip("PySide6.QtWidgets", reason="Qt widgets not available", exc_type=ImportError)

from PySide6.QtCore import QRect, QSize, Qt
from PySide6.QtWidgets import QApplication

from pagewindow.gui import ListViewAnchorProbe, PagingListModel, Roles
from pagewindow.models import PagingState
from pagewindow.settings import PagingConfig
from pagewindow.viewmodels import PagingController


@pytest.fixture(scope="module")
def qapp() -> QApplication:
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


def _controller(items):
    async def fetch(page):
        return list(items) if page == 0 else []

    controller = PagingController(
        fetch,
        PagingConfig(page_size=max(len(items), 1), auto_load_first_page=False),
        key_of=str,
    )
    asyncio.run(controller.load_first_page())
    return controller


class _FakeView:
    """Minimal stand-in for a list view laying rows out 20px apart."""

    def __init__(self, hidden_rows=()):
        self._hidden = set(hidden_rows)

    def visualRect(self, index):  # noqa: N802
        if index.row() in self._hidden:
            return QRect()
        return QRect(0, index.row() * 20, 100, 20)


def test_spacer_row_precedes_items(qapp):
    model = PagingListModel(_controller(["a", "b", "c"]))

    assert model.rowCount() == 4
    spacer = model.index(0, 0)
    assert model.data(spacer, Roles.IS_SPACER) is True
    assert model.data(spacer, Qt.ItemDataRole.SizeHintRole) == QSize(0, 0)
    assert model.flags(spacer) == Qt.NoItemFlags

    first = model.index(1, 0)
    assert model.data(first) == "a"
    assert model.data(first, Roles.KEY) == "a"
    assert model.data(first, Roles.ITEM) == "a"
    assert model.data(first, Roles.IS_SPACER) is False


def test_empty_controller_has_no_rows(qapp):
    model = PagingListModel(_controller([]))

    assert model.rowCount() == 0


def test_row_mapping(qapp):
    model = PagingListModel(_controller(["a", "b"]))

    assert model.row_for_key("b") == 2
    assert model.row_for_key("zzz") is None
    assert model.item_row(0) is None
    assert model.item_row(2) == 1
    assert model.item_row(3) is None


def test_role_names_include_custom_roles(qapp):
    model = PagingListModel(_controller(["a"]))

    names = model.roleNames()

    assert names[Roles.ITEM] == b"item"
    assert names[Roles.KEY] == b"itemKey"
    assert names[Roles.IS_SPACER] == b"isSpacer"


def test_controller_changes_reset_the_model(qapp):
    controller = _controller(["a"])
    model = PagingListModel(controller)
    resets = []
    model.modelReset.connect(lambda: resets.append(True))

    controller.append_item("b")

    assert resets == [True]
    assert model.rowCount() == 3
    assert model.data(model.index(2, 0)) == "b"


def test_state_changes_are_forwarded(qapp):
    controller = _controller(["a"])
    model = PagingListModel(controller)
    transitions = []
    model.pagingStateChanged.connect(lambda prev, cur: transitions.append((prev, cur)))

    controller.remove_item(key="a")

    assert controller.state is PagingState.EMPTY
    assert transitions == [("loaded", "empty")]


def test_leading_space_change_refreshes_spacer(qapp):
    controller = _controller(["a", "b"])
    model = PagingListModel(controller)
    changed_rows = []
    model.dataChanged.connect(lambda top, bottom, roles: changed_rows.append(top.row()))

    controller.leading_space_changed.emit(50.0)

    assert changed_rows == [0]


def test_detach_stops_mirroring(qapp):
    controller = _controller(["a"])
    model = PagingListModel(controller)
    resets = []
    model.modelReset.connect(lambda: resets.append(True))

    model.detach()
    controller.append_item("b")

    assert resets == []


def test_view_anchor_lookup_reports_row_top(qapp):
    model = PagingListModel(_controller(["a", "b", "c"]))
    probe = ListViewAnchorProbe(_FakeView(hidden_rows={3}), model)

    assert probe("b") == pytest.approx(40.0)
    assert probe("missing") is None
    assert probe("c") is None
