import json
from typing import Any

from sqlalchemy.orm import Session

from tocs.db.models.schema_definition import SchemaDefinition
from tocs.db.repositories.schema_repo import SchemaRepository
from tocs.middleware.error_handler import NotFoundError
from tocs.schemas.schema_defs import (
    CreateSchemaRequest,
    DeleteSchemaResponse,
    GetSchemasResponse,
    SchemaResponse,
    UpdateSchemaRequest,
)
from tocs.services.access import ProjectAccess
from tocs.utils.ids import generate_id
from tocs.utils.json_helpers import safe_parse_json
from tocs.utils.mappers import schema_out
from tocs.utils.time import utc_now_iso

SHARED_KIND = "shared"
_STRUCTURE_FIELDS = ("type", "properties", "required", "items", "enum")


def _structure(request: CreateSchemaRequest | UpdateSchemaRequest) -> dict[str, Any]:
    """Structural fields the caller actually sent."""
    sent = request.model_fields_set
    return {
        name: getattr(request, name)
        for name in _STRUCTURE_FIELDS
        if name in sent and getattr(request, name) is not None
    }


class SchemaService:
    def __init__(self, db: Session):
        self.repo = SchemaRepository(db)
        self.access = ProjectAccess(db)

    def _require_schema(self, project_id: str, schema_id: str) -> SchemaDefinition:
        schema = self.repo.get_schema(project_id, schema_id)
        if schema is None:
            raise NotFoundError("Schema not found")
        return schema

    def get_schemas(self, project_id: str, user_id: str) -> GetSchemasResponse:
        self.access.require_member(project_id, user_id)
        return GetSchemasResponse(schemas=[schema_out(s) for s in self.repo.list_schemas(project_id)])

    def get_schema(self, project_id: str, schema_id: str, user_id: str) -> SchemaResponse:
        self.access.require_member(project_id, user_id)
        return SchemaResponse(schemaDefinition=schema_out(self._require_schema(project_id, schema_id)))

    def create_schema(self, project_id: str, user_id: str, request: CreateSchemaRequest) -> SchemaResponse:
        self.access.require_editor(project_id, user_id)
        now = utc_now_iso()
        document = {"type": request.type, **_structure(request)}
        schema = self.repo.create_schema(
            SchemaDefinition(
                id=generate_id("schema"),
                project_id=project_id,
                name=request.name.strip(),
                description=request.description,
                kind=SHARED_KIND,
                schema_json=json.dumps(document),
                created_at=now,
                updated_at=now,
            )
        )
        self.repo.commit()
        return SchemaResponse(schemaDefinition=schema_out(schema))

    def update_schema(
        self, project_id: str, schema_id: str, user_id: str, request: UpdateSchemaRequest
    ) -> SchemaResponse:
        """Rename/redescribe, and merge any structural fields into the stored document."""
        self.access.require_editor(project_id, user_id)
        schema = self._require_schema(project_id, schema_id)
        if request.name is not None:
            schema.name = request.name.strip()
        if "description" in request.model_fields_set:
            schema.description = request.description
        changes = _structure(request)
        if changes:
            schema.schema_json = json.dumps({**safe_parse_json(schema.schema_json), **changes})
        schema.updated_at = utc_now_iso()
        self.repo.commit()
        return SchemaResponse(schemaDefinition=schema_out(schema))

    def delete_schema(self, project_id: str, schema_id: str, user_id: str) -> DeleteSchemaResponse:
        self.access.require_owner(project_id, user_id)
        schema = self._require_schema(project_id, schema_id)
        self.repo.delete_schema(schema)
        self.repo.commit()
        return DeleteSchemaResponse(deletedSchemaId=schema_id)
