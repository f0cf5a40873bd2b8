from datetime import datetime
from enum import Enum
from typing import ClassVar, Generic, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict


T = TypeVar("T")


class Field(Generic[T]):
    """Type-safe reference to a snippet column.

    Usage:
        SnippetSchema.theme_name.column  # "theme_name"
        SnippetSchema.theme_name.attribute  # "theme_name" on the Snippet model
    """

    def __init__(self, column_name: str, attribute: str | None = None):
        """
        Args:
            column_name: The actual database column name
            attribute: Name of the model attribute, defaults to the column name
        """
        self._column_name = column_name
        self._attribute = attribute or column_name

    @property
    def column(self) -> str:
        """Return the underlying database column name."""
        return self._column_name

    @property
    def attribute(self) -> str:
        """Return the model attribute the column maps to."""
        return self._attribute

    def __str__(self) -> str:
        return self._column_name

    def __repr__(self) -> str:
        return f"Field({self._column_name})"


class SnippetFields(BaseModel):
    """Fields shared by stored snippets and new snippet payloads.

    Attributes are snake_case; the camelCase aliases (``storeName``,
    ``themeName``, ``themeChanges``) are used on the wire and in exports.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        alias_generator=to_camel, populate_by_name=True
    )

    store_name: str
    theme_name: str
    date: str
    author: str
    code: str
    tags: list[str] | None = None
    screenshot: str | None = None
    theme_changes: str | None = None


class NewSnippet(SnippetFields):
    """Snippet payload without an id, as collected by the add form"""

    def with_id(self, snippet_id: str) -> "Snippet":
        return Snippet(id=snippet_id, **self.model_dump())


class Snippet(SnippetFields):
    """A stored integration snippet"""

    id: str


class SnippetSchema:
    """Column definitions of the snippets table"""

    id = Field[str]("id")
    store_name = Field[str]("store_name")
    theme_name = Field[str]("theme_name")
    date = Field[str]("date")
    author = Field[str]("author")
    code = Field[str]("code")
    tags = Field[list[str]]("tags")
    screenshot = Field[str]("screenshot")
    theme_changes = Field[str]("theme_changes")
    created_at = Field[datetime]("created_at")

    # Columns matched by free-text search, in match order
    searchable = (theme_name, store_name, author, code)

    # Columns written on insert, the id and created_at are generated remotely
    writable = (
        store_name,
        theme_name,
        date,
        author,
        code,
        tags,
        screenshot,
        theme_changes,
    )


class SortOption(str, Enum):
    """Sort keys offered by the catalog view"""

    DATE_DESC = "date-desc"
    DATE_ASC = "date-asc"
    THEME_ASC = "theme-asc"

    @classmethod
    def parse(cls, value: "SortOption | str") -> "SortOption | None":
        """Return the matching option, or None for an unrecognized key"""
        try:
            return cls(value)
        except ValueError:
            return None


class ConnectionStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"

    @property
    def label(self) -> str:
        return "Database Connected" if self is ConnectionStatus.ACTIVE else "Local Mode"
