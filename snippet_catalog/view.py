"""Derived view over a snippet set: filter, sort and paginate.

Everything here is pure. The same snippets, query, sort key and page always
produce the same SnippetPage.
"""

import math
import unicodedata
from collections.abc import Sequence
from datetime import UTC, datetime

from pydantic import BaseModel, computed_field

from snippet_catalog.config import DEFAULT_PAGE_SIZE
from snippet_catalog.entities import Snippet, SnippetSchema, SortOption


class SnippetPage(BaseModel):
    """One page of the derived view plus pagination metadata"""

    items: list[Snippet]
    page: int
    page_size: int
    total_pages: int
    total_count: int

    @computed_field
    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @computed_field
    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def matches(snippet: Snippet, query: str) -> bool:
    """Case-insensitive substring match against any searchable field"""
    needle = query.casefold()
    if not needle:
        return True
    return any(
        needle in getattr(snippet, field.attribute).casefold()
        for field in SnippetSchema.searchable
    )


def filter_snippets(snippets: Sequence[Snippet], query: str) -> list[Snippet]:
    return [snippet for snippet in snippets if matches(snippet, query)]


def parse_date(value: str | None) -> datetime | None:
    """Best-effort parse of an ISO date or datetime string, None when invalid"""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    # Aware values are compared as naive UTC
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)
    return parsed


def _sort_by_date(snippets: list[Snippet], descending: bool) -> list[Snippet]:
    # Unparseable dates go last in both directions, in their original order
    dated = [(parse_date(s.date), s) for s in snippets]
    valid = [pair for pair in dated if pair[0] is not None]
    invalid = [s for parsed, s in dated if parsed is None]
    valid.sort(key=lambda pair: pair[0], reverse=descending)
    return [s for _, s in valid] + invalid


def collation_key(text: str) -> tuple[str, str, str]:
    """Accent- and case-insensitive key, with finer distinctions as tie-breaks"""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text.casefold(), text


def sort_snippets(snippets: Sequence[Snippet], sort: SortOption | str) -> list[Snippet]:
    """Stable sort by the given key. An unrecognized key keeps the input order."""
    option = SortOption.parse(sort)
    ordered = list(snippets)
    if option is SortOption.DATE_DESC:
        return _sort_by_date(ordered, descending=True)
    if option is SortOption.DATE_ASC:
        return _sort_by_date(ordered, descending=False)
    if option is SortOption.THEME_ASC:
        return sorted(ordered, key=lambda s: collation_key(s.theme_name))
    return ordered


def total_pages(count: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    if page_size < 1:
        raise ValueError("Page size must be 1 or greater")
    return math.ceil(count / page_size)


def paginate(
    snippets: Sequence[Snippet], page: int, page_size: int = DEFAULT_PAGE_SIZE
) -> list[Snippet]:
    """Return the 1-based page. A page past the end is empty."""
    if page < 1:
        raise ValueError("Page number must be 1 or greater")
    if page_size < 1:
        raise ValueError("Page size must be 1 or greater")
    start = (page - 1) * page_size
    return list(snippets[start : start + page_size])


class SnippetView:
    """
    Immutable, fluent view over a snippet set.

    Usage:
        view = SnippetView(repository.snippets)
        page = view.search("shopify").sort_by("theme-asc").page(2).get()

    Changing the query or the sort key always moves the view back to page 1.
    """

    def __init__(
        self,
        snippets: Sequence[Snippet],
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        if page_size < 1:
            raise ValueError("Page size must be 1 or greater")
        self.snippets = tuple(snippets)
        self.page_size = page_size
        self.query = ""
        self.sort: SortOption | str = SortOption.DATE_DESC
        self.current_page = 1

    def _clone(self) -> "SnippetView":
        new_view = SnippetView(self.snippets, self.page_size)
        new_view.query = self.query
        new_view.sort = self.sort
        new_view.current_page = self.current_page
        return new_view

    def search(self, query: str) -> "SnippetView":
        new_view = self._clone()
        new_view.query = query
        new_view.current_page = 1
        return new_view

    def sort_by(self, sort: SortOption | str) -> "SnippetView":
        new_view = self._clone()
        new_view.sort = sort
        new_view.current_page = 1
        return new_view

    def page(self, page: int) -> "SnippetView":
        if page < 1:
            raise ValueError("Page number must be 1 or greater")
        new_view = self._clone()
        new_view.current_page = page
        return new_view

    def next_page(self) -> "SnippetView":
        """Move one page forward, staying on the last page"""
        last = max(self.total_pages(), 1)
        return self.page(min(self.current_page + 1, last))

    def previous_page(self) -> "SnippetView":
        """Move one page back, staying on the first page"""
        return self.page(max(self.current_page - 1, 1))

    def results(self) -> list[Snippet]:
        """Filtered and sorted snippets, before pagination"""
        return sort_snippets(filter_snippets(self.snippets, self.query), self.sort)

    def total_pages(self) -> int:
        return total_pages(len(filter_snippets(self.snippets, self.query)), self.page_size)

    def get(self) -> SnippetPage:
        results = self.results()
        return SnippetPage(
            items=paginate(results, self.current_page, self.page_size),
            page=self.current_page,
            page_size=self.page_size,
            total_pages=total_pages(len(results), self.page_size),
            total_count=len(results),
        )
