import logging
from contextlib import asynccontextmanager
from contextvars import ContextVar
from functools import wraps
from typing import Any

import asyncpg

logger = logging.getLogger(__name__)

# Context variable to store the current database connection (only one per context)
_current_connection: ContextVar[asyncpg.Connection | None] = ContextVar(
    "current_connection", default=None
)
_db_pools: dict[str, asyncpg.Pool] = {}


class PoolNotFoundError(ValueError):
    """Raised when no pool is registered under the requested name"""


class DatabaseManager:
    """Manages database pools and connections"""

    @classmethod
    async def add_pool(cls, name: str, pool: asyncpg.Pool):
        """Add a database pool with a name"""
        _db_pools[name] = pool

    @classmethod
    async def get_pool(cls, name: str = "default") -> asyncpg.Pool:
        """Get a database pool by name"""
        if name not in _db_pools:
            raise PoolNotFoundError(f"Database pool '{name}' not found")
        return _db_pools[name]

    @classmethod
    async def remove_pool(cls, name: str) -> asyncpg.Pool | None:
        """Forget a pool. The caller stays responsible for closing it."""
        return _db_pools.pop(name, None)

    @classmethod
    def get_current_connection(cls) -> asyncpg.Connection | None:
        """Get the current active connection from context"""
        return _current_connection.get()

    @classmethod
    def log_query(cls, query: str, params: list[Any]):
        logger.debug("SQL %s params=%r", query, params)

    @classmethod
    @asynccontextmanager
    async def transaction(cls, db_name: str = "default"):
        """Context manager for database transactions.

        Behavior:
        - If called within an existing transaction/connection, it opens a nested transaction using the same connection.
        - Otherwise it acquires a connection from the asyncpg pool and starts a transaction.
          The connection is released back to the pool when the context exits, normally or not.

        Args:
            db_name: Name of the database pool to use
        """
        current_conn = _current_connection.get()

        if current_conn:
            async with current_conn.transaction():
                yield current_conn
        else:
            pool = await cls.get_pool(db_name)
            async with pool.acquire() as conn, conn.transaction():
                token = _current_connection.set(conn)
                try:
                    yield conn
                finally:
                    _current_connection.reset(token)


def transactional(db_name: str = "default"):
    """Decorator to run a coroutine function within a database transaction.

    Example:
        @transactional("catalog")
        async def seed_remote(gateway, snippets):
            for snippet in snippets:
                await gateway.insert(snippet)
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            async with DatabaseManager.transaction(db_name):
                return await func(*args, **kwargs)

        return wrapper

    return decorator
