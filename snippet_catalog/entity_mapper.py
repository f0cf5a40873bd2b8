from datetime import date, datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from snippet_catalog.entities import SnippetSchema


T = TypeVar("T", bound=BaseModel)


class EntityMapper(Generic[T]):
    """Composition class for mapping rows to entities and entities to rows"""

    def __init__(self, entity_class: type[T]):
        self.entity_class = entity_class

    @staticmethod
    def _normalize(value: Any) -> Any:
        # Date columns may be typed DATE/TIMESTAMP on some deployments
        if isinstance(value, (date, datetime)):
            return value.isoformat()
        return value

    def map_row_to_entity(self, row: Any) -> T:
        """Map database row to entity, ignoring columns the entity does not know"""
        known = self.entity_class.model_fields
        data = {
            key: self._normalize(value)
            for key, value in dict(row).items()
            if key in known
        }
        if "id" in data and data["id"] is not None:
            data["id"] = str(data["id"])
        return self.entity_class.model_validate(data)

    def map_rows_to_entities(self, rows: list[Any]) -> list[T]:
        """Map database rows to entities"""
        return [self.map_row_to_entity(row) for row in rows]

    @staticmethod
    def map_entity_to_row(entity: BaseModel) -> dict[str, Any]:
        """Map an entity to the writable columns of the snippets table"""
        data = entity.model_dump()
        return {
            field.column: data.get(field.attribute) for field in SnippetSchema.writable
        }
