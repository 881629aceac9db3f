from sqlalchemy import select

from tocs.db.models.schema_definition import SchemaDefinition
from tocs.db.repositories.base_repo import BaseRepository


class SchemaRepository(BaseRepository):
    def list_schemas(self, project_id: str) -> list[SchemaDefinition]:
        stmt = (
            select(SchemaDefinition)
            .where(SchemaDefinition.project_id == project_id)
            .order_by(SchemaDefinition.name.asc())
        )
        return list(self.db.scalars(stmt).all())

    def get_schema(self, project_id: str, schema_id: str) -> SchemaDefinition | None:
        stmt = select(SchemaDefinition).where(
            SchemaDefinition.id == schema_id,
            SchemaDefinition.project_id == project_id,
        )
        return self.db.scalars(stmt).first()

    def create_schema(self, schema: SchemaDefinition) -> SchemaDefinition:
        return self._add(schema)

    def delete_schema(self, schema: SchemaDefinition) -> None:
        self.db.delete(schema)
