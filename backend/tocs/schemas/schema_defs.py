from typing import Any, Literal

from pydantic import BaseModel, Field

from tocs.schemas.common import AliasedModel, Name

SchemaType = Literal["object", "array", "string", "number", "boolean", "enum"]


class SchemaOut(AliasedModel):
    id: str
    projectId: str
    name: str
    description: str | None
    kind: str
    definition: dict[str, Any] = Field(alias="schema")
    createdAt: str
    updatedAt: str


class GetSchemasResponse(BaseModel):
    schemas: list[SchemaOut]


class SchemaResponse(BaseModel):
    schemaDefinition: SchemaOut


class CreateSchemaRequest(BaseModel):
    name: Name
    description: str | None = None
    type: SchemaType
    properties: dict[str, Any] | None = None
    required: list[str] | None = None
    items: Any = None
    enum: list[Any] | None = None


class UpdateSchemaRequest(BaseModel):
    name: Name | None = None
    description: str | None = None
    type: SchemaType | None = None
    properties: dict[str, Any] | None = None
    required: list[str] | None = None
    items: Any = None
    enum: list[Any] | None = None


class DeleteSchemaResponse(BaseModel):
    deletedSchemaId: str
