"""Catalog session: explicit owner of the view position and the snippet set"""

from pathlib import Path

from snippet_catalog.entities import ConnectionStatus, NewSnippet, SortOption
from snippet_catalog.repository import (
    AddResult,
    CatalogStats,
    SnippetRepository,
    SyncResult,
)
from snippet_catalog.view import SnippetPage, SnippetView


class CatalogSession:
    """State of one catalog session.

    Holds the search query, the sort key and the current page next to the
    repository. The presentation layer reads pages from here and changes state
    only through these methods.
    """

    def __init__(self, repository: SnippetRepository):
        self.repository = repository
        self.query = ""
        self.sort: SortOption | str = SortOption.DATE_DESC
        self.page = 1

    def _view(self) -> SnippetView:
        return (
            SnippetView(self.repository.snippets, self.repository.config.page_size)
            .search(self.query)
            .sort_by(self.sort)
            .page(self.page)
        )

    @property
    def connection_status(self) -> ConnectionStatus:
        return self.repository.status

    def stats(self) -> CatalogStats:
        return self.repository.stats()

    def current_page(self) -> SnippetPage:
        return self._view().get()

    def search(self, query: str) -> SnippetPage:
        self.query = query
        self.page = 1
        return self.current_page()

    def sort_by(self, sort: SortOption | str) -> SnippetPage:
        self.sort = sort
        self.page = 1
        return self.current_page()

    def go_to_page(self, page: int) -> SnippetPage:
        """Jump to a page, clamped to the pages that exist"""
        last = max(self._view().total_pages(), 1)
        self.page = min(max(page, 1), last)
        return self.current_page()

    def next_page(self) -> SnippetPage:
        self.page = self._view().next_page().current_page
        return self.current_page()

    def previous_page(self) -> SnippetPage:
        self.page = self._view().previous_page().current_page
        return self.current_page()

    async def initialize(self) -> SyncResult:
        return await self.repository.initialize()

    async def add(self, new_snippet: NewSnippet) -> AddResult:
        """Add a snippet and jump to the newest-first first page"""
        result = await self.repository.add(new_snippet)
        self.sort = SortOption.DATE_DESC
        self.page = 1
        return result

    async def export_all(self) -> str:
        return await self.repository.export_all()

    async def export_to(self, directory: Path | str) -> Path:
        return await self.repository.export_to(directory)
