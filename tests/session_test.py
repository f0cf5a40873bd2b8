import pytest

from snippet_catalog.config import CatalogConfig
from snippet_catalog.entities import ConnectionStatus, SortOption
from snippet_catalog.gateway import InMemorySnippetGateway
from snippet_catalog.repository import SnippetRepository
from snippet_catalog.session import CatalogSession
from tests.snippet_factory import ids, make_new_snippet, make_snippet


class TestCatalogSession:
    """Test the session state that drives the derived view"""

    @pytest.fixture
    def gateway(self):
        return InMemorySnippetGateway(
            [
                make_snippet(f"r{i}", theme_name=f"Remote {i:03d}", date=f"2024-01-{i % 28 + 1:02d}")
                for i in range(60)
            ]
        )

    @pytest.fixture
    def session(self, gateway):
        seed = [
            make_snippet("1", theme_name="Dawn", store_name="shopify-a.com", date="2023-06-01"),
            make_snippet("2", theme_name="Sense", store_name="other.com", date="2023-07-01"),
        ]
        return CatalogSession(SnippetRepository(gateway, seed=seed))

    @pytest.mark.asyncio
    async def test_initial_page(self, session):
        await session.initialize()

        page = session.current_page()

        assert page.page == 1
        assert page.total_count == 62
        assert page.total_pages == 2
        assert len(page.items) == 48
        assert session.connection_status is ConnectionStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_search_and_sort_reset_page(self, session):
        await session.initialize()
        session.go_to_page(2)
        assert session.page == 2

        session.search("remote")
        assert session.page == 1

        session.go_to_page(2)
        session.sort_by(SortOption.THEME_ASC)
        assert session.page == 1

    @pytest.mark.asyncio
    async def test_navigation_is_clamped(self, session):
        await session.initialize()

        assert session.previous_page().page == 1
        assert session.next_page().page == 2
        assert session.next_page().page == 2
        assert session.go_to_page(99).page == 2
        assert session.go_to_page(-3).page == 1

    @pytest.mark.asyncio
    async def test_add_shows_newest_first(self, session):
        await session.initialize()
        session.sort_by("theme-asc")
        session.go_to_page(2)

        result = await session.add(make_new_snippet(theme_name="Zeta", date="2025-01-01"))

        assert session.sort is SortOption.DATE_DESC
        assert session.page == 1
        assert session.current_page().items[0].id == result.snippet.id

    @pytest.mark.asyncio
    async def test_local_mode_still_works(self, session, gateway):
        gateway.available = False

        result = await session.initialize()

        assert not result.ok
        assert session.connection_status is ConnectionStatus.INACTIVE
        assert ids(session.search("shopify").items) == ["1"]

        added = await session.add(make_new_snippet(store_name="shopify-b.com"))
        assert not added.persisted
        assert session.search("shopify").total_count == 2
        assert session.stats().total_snippets == 3

    @pytest.mark.asyncio
    async def test_page_size_comes_from_config(self, gateway):
        repo = SnippetRepository(gateway, CatalogConfig(page_size=25), seed=[])
        session = CatalogSession(repo)
        await session.initialize()

        page = session.current_page()

        assert page.page_size == 25
        assert page.total_pages == 3

    @pytest.mark.asyncio
    async def test_export_delegates_to_repository(self, session, tmp_path):
        path = await session.export_to(tmp_path)
        assert path.name == "snippets.json"
        assert '"r0"' in await session.export_all()
