"""Snippet catalog: in-memory integration snippets synced with a remote store"""

from snippet_catalog.config import CatalogConfig
from snippet_catalog.db_context import DatabaseManager, transactional
from snippet_catalog.entities import ConnectionStatus, NewSnippet, Snippet, SortOption
from snippet_catalog.errors import CatalogError, SnippetValidationError, SyncError
from snippet_catalog.gateway import (
    InMemorySnippetGateway,
    PostgresSnippetGateway,
    SnippetGateway,
)
from snippet_catalog.repository import (
    AddResult,
    CatalogStats,
    SnippetRepository,
    SyncResult,
    merge_snippets,
)
from snippet_catalog.session import CatalogSession
from snippet_catalog.view import SnippetPage, SnippetView

__all__ = [
    "AddResult",
    "CatalogConfig",
    "CatalogError",
    "CatalogSession",
    "CatalogStats",
    "ConnectionStatus",
    "DatabaseManager",
    "InMemorySnippetGateway",
    "NewSnippet",
    "PostgresSnippetGateway",
    "Snippet",
    "SnippetGateway",
    "SnippetPage",
    "SnippetRepository",
    "SnippetValidationError",
    "SnippetView",
    "SortOption",
    "SyncError",
    "SyncResult",
    "merge_snippets",
    "transactional",
]
