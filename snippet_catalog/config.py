"""Catalog configuration"""

from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_PAGE_SIZE = 48
DEFAULT_SEED_PATH = Path(__file__).parent / "seed_snippets.json"


class CatalogConfig(BaseModel):
    """Configuration options for the snippet catalog"""

    db_name: str = Field(
        default="default", description="Name of the registered database pool"
    )
    table_name: str = Field(default="snippets", description="Snippets table name")
    db_schema: str | None = Field(default=None, description="Database schema name")
    timeout: float = Field(
        default=10.0, gt=0, description="Seconds allowed for each remote call"
    )
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)
    export_filename: str = Field(default="snippets.json")
    seed_path: Path | None = Field(
        default=None, description="JSON seed file, defaults to the bundled seed data"
    )

    @property
    def qualified_table_name(self) -> str:
        if self.db_schema:
            return f"{self.db_schema}.{self.table_name}"
        return self.table_name

    def resolved_seed_path(self) -> Path:
        return self.seed_path or DEFAULT_SEED_PATH
