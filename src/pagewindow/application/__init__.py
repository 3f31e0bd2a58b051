"""Boundary types for the injected page source."""

from .page_fetch import PageFetcher, PageResult, fetch_page, resolve_page

__all__ = ["PageFetcher", "PageResult", "fetch_page", "resolve_page"]
