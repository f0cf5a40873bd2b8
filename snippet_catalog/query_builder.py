"""
Small QueryBuilder for the snippets table.
The goal is to produce SQL queries without execution.
"""

from typing import Any

from snippet_catalog.entities import Field


class QueryBuilder:
    """
    Immutable query builder for SELECT and INSERT statements.

    Usage:
        builder = QueryBuilder("snippets")
        query, params = builder.order_by_desc("created_at").build()
        query, params = builder.insert({"author": "ana"}, returning="id")
    """

    def __init__(self, table_name: str):
        self.table_name = table_name
        self.select_fields = "*"
        self.order_by_parts: list[str] = []

    def _clone(self) -> "QueryBuilder":
        """Create a copy of the current QueryBuilder instance"""
        new_builder = QueryBuilder(self.table_name)
        new_builder.select_fields = self.select_fields
        new_builder.order_by_parts = self.order_by_parts.copy()
        return new_builder

    def select(self, *fields: str | Field) -> "QueryBuilder":
        """Set the SELECT fields, defaults to * when none is provided"""
        new_builder = self._clone()
        new_builder.select_fields = (
            ", ".join(str(field) for field in fields) if fields else "*"
        )
        return new_builder

    def order_by_asc(self, field: str | Field) -> "QueryBuilder":
        """Add ORDER BY ... ASC. Can be chained for multiple fields."""
        new_builder = self._clone()
        new_builder.order_by_parts.append(f"{field} ASC")
        return new_builder

    def order_by_desc(self, field: str | Field) -> "QueryBuilder":
        """Add ORDER BY ... DESC. Can be chained for multiple fields."""
        new_builder = self._clone()
        new_builder.order_by_parts.append(f"{field} DESC")
        return new_builder

    def build(self) -> tuple[str, list[Any]]:
        """Build the final SELECT query and parameters"""
        query_parts = [f"SELECT {self.select_fields} FROM {self.table_name}"]
        if self.order_by_parts:
            query_parts.append(f"ORDER BY {', '.join(self.order_by_parts)}")
        return " ".join(query_parts), []

    def insert(
        self, values: dict[str, Any], returning: str | Field | None = None
    ) -> tuple[str, list[Any]]:
        """Build an INSERT statement for a single row"""
        if not values:
            raise ValueError("Cannot insert a row without values")

        columns = ", ".join(values.keys())
        placeholders = ", ".join(f"${i + 1}" for i in range(len(values)))
        query = f"INSERT INTO {self.table_name} ({columns}) VALUES ({placeholders})"
        if returning is not None:
            query += f" RETURNING {returning}"
        return query, list(values.values())

    def to_sql(self) -> str:
        """Return the SELECT query string for debugging"""
        query, _ = self.build()
        return query
