"""Snippet repository: the in-memory snippet set and its remote sync"""

import logging
import time
from collections.abc import Iterable, Sequence
from pathlib import Path

from pydantic import BaseModel, TypeAdapter

from snippet_catalog.config import CatalogConfig
from snippet_catalog.entities import ConnectionStatus, NewSnippet, Snippet
from snippet_catalog.errors import SyncError
from snippet_catalog.gateway import SnippetGateway
from snippet_catalog.seed import load_seed_snippets

logger = logging.getLogger(__name__)

_snippet_list = TypeAdapter(list[Snippet])


class SyncResult(BaseModel):
    """Outcome of a fetch-and-merge against the remote store"""

    model_config = {"arbitrary_types_allowed": True}

    status: ConnectionStatus
    added: int = 0
    error: SyncError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class AddResult(BaseModel):
    """Outcome of adding a snippet. ``persisted`` is False in local mode."""

    model_config = {"arbitrary_types_allowed": True}

    snippet: Snippet
    persisted: bool
    error: SyncError | None = None


class CatalogStats(BaseModel):
    total_snippets: int
    stores: int
    themes: int


def _unique(snippets: Iterable[Snippet]) -> list[Snippet]:
    seen: set[str] = set()
    unique = []
    for snippet in snippets:
        if snippet.id not in seen:
            seen.add(snippet.id)
            unique.append(snippet)
    return unique


def merge_snippets(
    existing: Sequence[Snippet], incoming: Sequence[Snippet]
) -> tuple[tuple[Snippet, ...], int]:
    """Prepend incoming snippets whose id is not present yet.

    Existing snippets win on id collisions. Incoming order is preserved.
    Returns the merged set and the number of snippets added.
    """
    known = {snippet.id for snippet in existing}
    added = _unique(snippet for snippet in incoming if snippet.id not in known)
    return (*added, *existing), len(added)


class SnippetRepository:
    """Owns the authoritative in-memory snippet set for a session.

    All mutations replace the whole set in a single assignment, so callers
    never observe a partially merged state.

    Usage:
        repo = SnippetRepository(PostgresSnippetGateway(config), config)
        result = await repo.initialize()
        if not result.ok:
            print(repo.status.label)  # "Local Mode"
    """

    def __init__(
        self,
        gateway: SnippetGateway,
        config: CatalogConfig | None = None,
        seed: Sequence[Snippet] | None = None,
    ):
        if gateway is None:
            raise ValueError("gateway is required")

        self.gateway = gateway
        self.config = config or CatalogConfig()
        self._seed = list(seed) if seed is not None else None
        self._snippets: tuple[Snippet, ...] = ()
        self._status = ConnectionStatus.ACTIVE
        self._last_error: SyncError | None = None

    @property
    def snippets(self) -> tuple[Snippet, ...]:
        return self._snippets

    @property
    def status(self) -> ConnectionStatus:
        return self._status

    @property
    def is_connected(self) -> bool:
        return self._status is ConnectionStatus.ACTIVE

    @property
    def last_error(self) -> SyncError | None:
        return self._last_error

    def __len__(self) -> int:
        return len(self._snippets)

    def get(self, snippet_id: str) -> Snippet | None:
        return next((s for s in self._snippets if s.id == snippet_id), None)

    def stats(self) -> CatalogStats:
        return CatalogStats(
            total_snippets=len(self._snippets),
            stores=len({s.store_name for s in self._snippets}),
            themes=len({s.theme_name for s in self._snippets}),
        )

    def load_seed(self) -> tuple[Snippet, ...]:
        """Replace the set with the bundled seed data"""
        if self._seed is None:
            self._seed = load_seed_snippets(self.config.resolved_seed_path())
        self._snippets = tuple(_unique(self._seed))
        return self._snippets

    async def initialize(self) -> SyncResult:
        """Show seed data right away, then merge in whatever the remote store has"""
        self.load_seed()
        return await self.refresh()

    async def refresh(self) -> SyncResult:
        """Fetch all remote snippets and merge the new ones in front"""
        try:
            remote = await self.gateway.fetch_all()
        except SyncError as exc:
            logger.warning("Remote snippet store unavailable, using local data: %s", exc)
            self._status = ConnectionStatus.INACTIVE
            self._last_error = exc
            return SyncResult(status=self._status, error=exc)

        # Merge against the set as it is now, not as it was before the fetch
        self._snippets, added = merge_snippets(self._snippets, remote)
        self._status = ConnectionStatus.ACTIVE
        self._last_error = None
        logger.info("Merged %d new snippets from the remote store", added)
        return SyncResult(status=self._status, added=added)

    def _local_id(self) -> str:
        base = str(time.time_ns() // 1_000_000)
        known = {s.id for s in self._snippets}
        snippet_id, counter = base, 1
        while snippet_id in known:
            snippet_id = f"{base}-{counter}"
            counter += 1
        return snippet_id

    async def add(self, new_snippet: NewSnippet) -> AddResult:
        """Store a snippet remotely if possible and always add it locally.

        A remote failure is not raised: the snippet gets a local id instead.
        """
        error = None
        try:
            snippet_id = await self.gateway.insert(new_snippet)
        except SyncError as exc:
            logger.warning("Could not store snippet remotely, keeping it local: %s", exc)
            error = exc
            snippet_id = self._local_id()

        snippet = new_snippet.with_id(snippet_id)
        self._snippets = (snippet, *self._snippets)
        logger.info("Added snippet %s (persisted=%s)", snippet_id, error is None)
        return AddResult(snippet=snippet, persisted=error is None, error=error)

    async def export_all(self) -> str:
        """Serialize a fresh copy of every remote snippet as a JSON array.

        Raises:
            SyncError: when the remote store cannot be read
        """
        remote = await self.gateway.fetch_all()
        payload = _snippet_list.dump_json(
            remote, indent=2, by_alias=True, exclude_none=True
        )
        return payload.decode("utf-8")

    async def export_to(self, directory: Path | str) -> Path:
        """Write the export file into ``directory`` and return its path"""
        content = await self.export_all()
        path = Path(directory) / self.config.export_filename
        path.write_text(content, encoding="utf-8")
        return path
