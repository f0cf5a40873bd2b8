import asyncpg
import pytest
import pytest_asyncio
from testcontainers.postgres import PostgresContainer

from snippet_catalog.config import CatalogConfig
from snippet_catalog.db_context import DatabaseManager
from snippet_catalog.gateway import PostgresSnippetGateway


@pytest.fixture(scope="session")
def postgres_container():
    """Start a PostgreSQL test container for the session."""
    try:
        container = PostgresContainer("postgres:17")
        container.start()
    except Exception as exc:  # Docker missing or not running
        pytest.skip(f"PostgreSQL container unavailable: {exc}")
    yield container
    container.stop()


@pytest.fixture
def catalog_config():
    return CatalogConfig(db_name="test_db", timeout=5.0)


@pytest_asyncio.fixture
async def test_db_pool(postgres_container, catalog_config):
    """Create a database pool connected to the test container for each test."""
    host = postgres_container.get_container_host_ip()
    port = postgres_container.get_exposed_port(5432)
    dsn = f"postgresql://{postgres_container.username}:{postgres_container.password}@{host}:{port}/{postgres_container.dbname}"

    # A new pool per test avoids event loop issues
    pool = await asyncpg.create_pool(dsn, min_size=1, max_size=5)
    await DatabaseManager.add_pool(catalog_config.db_name, pool)
    await PostgresSnippetGateway(catalog_config).ensure_schema()

    yield pool

    async with pool.acquire() as conn:
        await conn.execute(f"TRUNCATE TABLE {catalog_config.qualified_table_name};")
    await DatabaseManager.remove_pool(catalog_config.db_name)
    await pool.close()
