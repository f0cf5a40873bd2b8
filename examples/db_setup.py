"""
Database setup utilities for examples
"""
import asyncpg
import sys
from pathlib import Path

# Add the parent directory to Python path so we can import the package
sys.path.append(str(Path(__file__).parent.parent))

from snippet_catalog.config import CatalogConfig
from snippet_catalog.db_context import DatabaseManager
from snippet_catalog.gateway import PostgresSnippetGateway


async def setup_postgres_connection(
    host: str = "localhost",
    port: int = 5432,
    database: str = "postgres",
    user: str = "root",
    password: str = "root",
    pool_name: str = "default"
):
    """
    Set up a connection pool to a local PostgreSQL instance.

    Make sure you have PostgreSQL running locally with these credentials,
    or modify the parameters to match your setup.
    """
    try:
        pool = await asyncpg.create_pool(
            host=host,
            port=port,
            database=database,
            user=user,
            password=password,
            min_size=1,
            max_size=10
        )
        await DatabaseManager.add_pool(pool_name, pool)

        print(f"✅ Connected to PostgreSQL at {host}:{port}/{database} as {user}")
        return pool

    except (OSError, asyncpg.PostgresError) as e:
        print(f"❌ Failed to connect to PostgreSQL: {e}")
        print("The catalog will run in local mode")
        return None


async def setup_example_schema(config: CatalogConfig):
    """
    Create the snippets table for examples if it doesn't exist.
    """
    await PostgresSnippetGateway(config).ensure_schema()
    print(f"✅ {config.qualified_table_name} table ready")


async def close_connections(pool_name: str = "default"):
    """
    Close the example pool (call this at the end of examples).
    """
    pool = await DatabaseManager.remove_pool(pool_name)
    if pool is not None:
        await pool.close()
    print("🔒 Closed database connections")
