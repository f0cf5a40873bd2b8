"""
Example walking through a catalog session: load, search, add and export
"""

import asyncio
import sys
import tempfile
from pathlib import Path

# Add the parent directory to Python path so we can import the package
sys.path.append(str(Path(__file__).parent.parent))

from examples.db_setup import (
    close_connections,
    setup_example_schema,
    setup_postgres_connection,
)
from snippet_catalog import (
    CatalogConfig,
    CatalogSession,
    NewSnippet,
    PostgresSnippetGateway,
    SnippetRepository,
    SortOption,
    SyncError,
)


async def main():
    config = CatalogConfig()
    pool = await setup_postgres_connection(pool_name=config.db_name)
    if pool is not None:
        await setup_example_schema(config)

    session = CatalogSession(SnippetRepository(PostgresSnippetGateway(config), config))

    result = await session.initialize()
    print(f"=== {session.connection_status.label} ({result.added} remote snippets merged) ===")

    page = session.search("drawer")
    print(f"'drawer' matches {page.total_count} snippets on {page.total_pages} page(s)")
    for snippet in session.sort_by(SortOption.THEME_ASC).items:
        print(f"  {snippet.theme_name:<12} {snippet.store_name}")

    added = await session.add(
        NewSnippet(
            store_name="example-store.myshopify.com",
            theme_name="Craft",
            date="2024-06-01",
            author="Example Author",
            code="window.WiserDrawer.init();",
        )
    )
    where = "remote store" if added.persisted else "this session only"
    print(f"Added snippet {added.snippet.id} ({where})")

    try:
        path = await session.export_to(tempfile.gettempdir())
        print(f"Exported remote snippets to {path}")
    except SyncError as e:
        print(f"⚠️  Export failed: {e}")

    await close_connections(config.db_name)


if __name__ == "__main__":
    asyncio.run(main())
