"""Page source boundary.

The controller never performs I/O itself; it calls an injected fetcher with
a page index.  The fetcher may return a :class:`PageResult` carrying an
explicit ``has_more`` flag, or a plain sequence, in which case more data is
assumed while a full page comes back.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import (
    Any,
    Awaitable,
    Generic,
    List,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    TypeVar,
    Union,
)

T = TypeVar("T")


@dataclass
class PageResult(Generic[T]):
    """Result of fetching a single page.

    ``has_more`` left as ``None`` falls back to page-size inference.
    """

    items: List[T] = field(default_factory=list)
    has_more: Optional[bool] = None


RawPage = Union[PageResult[T], Sequence[T]]


class PageFetcher(Protocol[T]):
    """Callable producing the items for a page index."""

    def __call__(self, page: int) -> Union[Awaitable[RawPage], RawPage]: ...


def resolve_page(raw: Any, page_size: int) -> Tuple[List[Any], bool]:
    """Normalise a fetcher return value into ``(items, has_more)``."""

    if isinstance(raw, PageResult):
        items = list(raw.items)
        if raw.has_more is not None:
            return items, bool(raw.has_more)
        return items, len(items) >= page_size
    if raw is None:
        return [], False
    items = list(raw)
    return items, len(items) >= page_size


async def fetch_page(fetcher: PageFetcher, page: int, page_size: int) -> Tuple[List[Any], bool]:
    """Invoke *fetcher* for *page* and normalise its result.

    Plain (non-async) fetchers are accepted too; their return value is used
    directly unless it is awaitable.
    """

    raw = fetcher(page)
    if inspect.isawaitable(raw):
        raw = await raw
    return resolve_page(raw, page_size)


__all__ = ["PageFetcher", "PageResult", "RawPage", "fetch_page", "resolve_page"]
