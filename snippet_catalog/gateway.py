"""Remote snippet store gateways"""

import asyncio
import logging
from typing import Protocol, runtime_checkable
from uuid import uuid4

import asyncpg
from pydantic import ValidationError

from snippet_catalog.config import CatalogConfig
from snippet_catalog.database_operations import DatabaseOperations
from snippet_catalog.db_context import DatabaseManager, PoolNotFoundError
from snippet_catalog.entities import NewSnippet, Snippet, SnippetSchema
from snippet_catalog.entity_mapper import EntityMapper
from snippet_catalog.errors import SnippetValidationError, SyncError
from snippet_catalog.query_builder import QueryBuilder

logger = logging.getLogger(__name__)

# Failures that mean "the remote store could not be reached or answered badly"
_REMOTE_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    TimeoutError,
    PoolNotFoundError,
    ValidationError,
)


@runtime_checkable
class SnippetGateway(Protocol):
    """The two remote operations the snippet repository depends on.

    Implementations are stateless from the caller's point of view: every call
    is a fresh round trip, nothing is cached or retried. Both methods raise
    SyncError on failure.
    """

    async def fetch_all(self) -> list[Snippet]: ...

    async def insert(self, new_snippet: NewSnippet) -> str: ...


class PostgresSnippetGateway:
    """Snippet gateway over a PostgreSQL table, through asyncpg.

    The pool named by ``config.db_name`` must be registered with
    DatabaseManager before the first call.
    """

    def __init__(self, config: CatalogConfig | None = None):
        self.config = config or CatalogConfig()
        self.db_ops = DatabaseOperations()
        self.entity_mapper = EntityMapper(Snippet)
        self._builder = QueryBuilder(self.config.qualified_table_name)

    async def fetch_all(self) -> list[Snippet]:
        """Return every stored snippet, newest first"""
        query, params = self._builder.order_by_desc(SnippetSchema.created_at).build()
        try:
            async with asyncio.timeout(self.config.timeout):
                async with DatabaseManager.transaction(self.config.db_name):
                    rows = await self.db_ops.fetch_all(query, params)
            snippets = self.entity_mapper.map_rows_to_entities(rows)
        except _REMOTE_ERRORS as exc:
            raise SyncError(f"Failed to fetch snippets: {exc}") from exc

        logger.debug("Fetched %d snippets from %s", len(snippets), self.config.db_name)
        return snippets

    async def insert(self, new_snippet: NewSnippet) -> str:
        """Store a snippet and return the id generated by the database"""
        values = self.entity_mapper.map_entity_to_row(new_snippet)
        query, params = self._builder.insert(values, returning=SnippetSchema.id)
        try:
            async with asyncio.timeout(self.config.timeout):
                async with DatabaseManager.transaction(self.config.db_name):
                    snippet_id = await self.db_ops.fetch_value(query, params)
        except (asyncpg.IntegrityConstraintViolationError, asyncpg.DataError) as exc:
            raise SnippetValidationError(f"Snippet rejected: {exc}") from exc
        except _REMOTE_ERRORS as exc:
            raise SyncError(f"Failed to insert snippet: {exc}") from exc

        if snippet_id is None:
            raise SyncError("Insert did not return a snippet id")
        return str(snippet_id)

    async def ensure_schema(self):
        """Create the snippets table if it does not exist yet"""
        statements = []
        if self.config.db_schema:
            statements.append(f"CREATE SCHEMA IF NOT EXISTS {self.config.db_schema}")
        statements.append(
            f"""
            CREATE TABLE IF NOT EXISTS {self.config.qualified_table_name} (
                id TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
                store_name TEXT NOT NULL,
                theme_name TEXT NOT NULL,
                date TEXT NOT NULL,
                author TEXT NOT NULL,
                code TEXT NOT NULL,
                tags TEXT[],
                screenshot TEXT,
                theme_changes TEXT,
                created_at TIMESTAMPTZ NOT NULL DEFAULT clock_timestamp()
            )
            """
        )
        async with DatabaseManager.transaction(self.config.db_name):
            for statement in statements:
                await self.db_ops.execute_query(statement)


class InMemorySnippetGateway:
    """Process-local snippet gateway with the same contract as the remote one.

    Set ``available`` to False to simulate an unreachable store.
    """

    def __init__(self, snippets: list[Snippet] | None = None):
        self._snippets: list[Snippet] = list(snippets or [])
        self.available = True

    def _check_available(self):
        if not self.available:
            raise SyncError("In-memory snippet store is unavailable")

    async def fetch_all(self) -> list[Snippet]:
        self._check_available()
        return [snippet.model_copy() for snippet in self._snippets]

    async def insert(self, new_snippet: NewSnippet) -> str:
        self._check_available()
        snippet = new_snippet.with_id(str(uuid4()))
        self._snippets.insert(0, snippet)
        return snippet.id
