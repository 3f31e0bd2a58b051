"""PySide6 bridge for paging controllers."""

from .paging_list_model import PagingListModel
from .roles import Roles, role_names
from .viewport_probe import ListViewAnchorProbe

__all__ = ["ListViewAnchorProbe", "PagingListModel", "Roles", "role_names"]
