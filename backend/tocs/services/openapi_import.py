"""Turn OpenAPI 3.x / Swagger 2.0 JSON documents into folders and endpoints."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.orm import Session

from tocs.config.defaults import IMPORTED_FOLDER_DESCRIPTION, IMPORTED_FOLDER_NAME
from tocs.db.models.endpoint import (
    Endpoint,
    EndpointBody,
    EndpointParameter,
    EndpointResponse,
)
from tocs.db.models.folder import Folder
from tocs.db.repositories.endpoint_repo import EndpointRepository
from tocs.db.repositories.folder_repo import FolderRepository
from tocs.schemas.transfer import ImportOpenAPIRequest, ImportResultOut
from tocs.services.access import ProjectAccess
from tocs.services.project_service import ProjectService
from tocs.services.request_executor import send_request
from tocs.utils.ids import generate_id
from tocs.utils.mappers import endpoint_summary_out, folder_child_out
from tocs.utils.time import utc_now_iso

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "post", "put", "delete", "patch", "head", "options")
PARAMETER_TYPES = {
    "string": "STRING",
    "integer": "INTEGER",
    "number": "NUMBER",
    "boolean": "BOOLEAN",
    "array": "ARRAY",
    "object": "OBJECT",
}
PARAMETER_LOCATIONS = {"query": "QUERY", "path": "PATH", "header": "HEADER", "cookie": "COOKIE"}
DEFAULT_CONTENT_TYPE = "application/json"
NAME_LIMIT = 100


@dataclass
class ImportedParameter:
    name: str
    type: str
    location: str
    required: bool
    description: str | None = None
    default_value: str | None = None
    example: str | None = None


@dataclass
class ImportedBody:
    content_type: str
    schema: str | None
    example: str | None
    description: str | None = None


@dataclass
class ImportedResponse:
    status_code: int
    description: str | None
    content_type: str | None
    schema: str | None
    example: str | None


@dataclass
class ImportedOperation:
    name: str
    method: str
    path: str
    description: str | None
    tags: list[str]
    parameters: list[ImportedParameter] = field(default_factory=list)
    body: ImportedBody | None = None
    responses: list[ImportedResponse] = field(default_factory=list)


@dataclass
class ParsedDocument:
    # (name, description) in creation order
    tags: list[tuple[str, str | None]]
    operations: list[ImportedOperation]


def resolve_pointer(document: dict[str, Any], ref: str) -> Any:
    """Follow a local ``#/a/b`` reference; ``None`` when it leads nowhere."""
    if not ref.startswith("#/"):
        return None
    node: Any = document
    for part in ref[2:].split("/"):
        part = part.replace("~1", "/").replace("~0", "~")
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node


def _scalar_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value)


class ExampleGenerator:
    """Produces sample values from JSON schemas, following local ``$ref`` pointers."""

    def __init__(self, document: dict[str, Any]):
        self.document = document

    def example(self, schema: Any, seen: frozenset[str] = frozenset()) -> Any:
        if not isinstance(schema, dict):
            return None
        if "$ref" in schema:
            ref = str(schema["$ref"])
            target = resolve_pointer(self.document, ref)
            if ref in seen or not isinstance(target, dict):
                return {}
            return self.example(target, seen | {ref})
        if "example" in schema:
            return schema["example"]
        if "allOf" in schema:
            merged: dict[str, Any] = {}
            for part in schema["allOf"]:
                value = self.example(part, seen)
                if isinstance(value, dict):
                    merged.update(value)
            return merged
        for key in ("oneOf", "anyOf"):
            if schema.get(key):
                return self.example(schema[key][0], seen)

        schema_type = schema.get("type")
        if schema_type is None and "properties" in schema:
            schema_type = "object"
        enum = schema.get("enum")
        if schema_type == "string":
            return enum[0] if enum else "string"
        if schema_type in ("number", "integer"):
            return enum[0] if enum else 0
        if schema_type == "boolean":
            return True
        if schema_type == "array":
            items = schema.get("items")
            return [self.example(items, seen)] if items else []
        if schema_type == "object":
            return {key: self.example(prop, seen) for key, prop in (schema.get("properties") or {}).items()}
        return None

    def example_text(self, schema: Any) -> str | None:
        if not schema:
            return None
        return json.dumps(self.example(schema), indent=2)


class OpenAPIParser:
    def __init__(self, document: dict[str, Any]):
        if not isinstance(document, dict) or not (document.get("openapi") or document.get("swagger")):
            raise ValueError("Invalid OpenAPI/Swagger specification")
        self.document = document
        self.examples = ExampleGenerator(document)

    def parse(self) -> ParsedDocument:
        tags: dict[str, str | None] = {}
        for tag in self.document.get("tags") or []:
            if isinstance(tag, dict) and tag.get("name"):
                tags.setdefault(str(tag["name"]), tag.get("description"))

        operations: list[ImportedOperation] = []
        for path, path_item in (self.document.get("paths") or {}).items():
            if not isinstance(path_item, dict):
                continue
            shared_params = path_item.get("parameters") or []
            for method, operation in path_item.items():
                if method.lower() not in HTTP_METHODS or not isinstance(operation, dict):
                    continue
                imported = self._operation(path, method.upper(), operation, shared_params)
                for tag in imported.tags:
                    tags.setdefault(tag, f"Auto-generated folder for {tag} endpoints")
                operations.append(imported)
        return ParsedDocument(tags=list(tags.items()), operations=operations)

    def _deref(self, value: Any) -> Any:
        if isinstance(value, dict) and "$ref" in value:
            target = resolve_pointer(self.document, str(value["$ref"]))
            return target if isinstance(target, dict) else {}
        return value

    def _operation(
        self, path: str, method: str, operation: dict[str, Any], shared_params: list[Any]
    ) -> ImportedOperation:
        name = operation.get("summary") or operation.get("operationId") or f"{method} {path}"
        imported = ImportedOperation(
            name=str(name)[:NAME_LIMIT],
            method=method,
            path=path,
            description=operation.get("description"),
            tags=[str(tag) for tag in operation.get("tags") or []],
        )

        merged: dict[tuple[str, str], dict[str, Any]] = {}
        for raw in [*shared_params, *(operation.get("parameters") or [])]:
            param = self._deref(raw)
            if isinstance(param, dict) and param.get("name"):
                merged[(str(param["name"]), str(param.get("in", "")))] = param

        for param in merged.values():
            if param.get("in") == "body":
                imported.body = self._swagger_body(param, operation)
            else:
                imported.parameters.append(self._parameter(param))

        request_body = operation.get("requestBody")
        if isinstance(request_body, dict) and request_body.get("content"):
            content_type, media = next(iter(request_body["content"].items()))
            schema = (media or {}).get("schema")
            example = (media or {}).get("example")
            imported.body = ImportedBody(
                content_type=content_type,
                schema=json.dumps(schema) if schema is not None else None,
                example=_scalar_text(example) if example is not None else self.examples.example_text(schema),
                description=request_body.get("description"),
            )

        for status, response in (operation.get("responses") or {}).items():
            imported_response = self._response(str(status), response, operation)
            if imported_response is not None:
                imported.responses.append(imported_response)
        return imported

    def _parameter(self, param: dict[str, Any]) -> ImportedParameter:
        schema = param.get("schema") or {}
        raw_type = schema.get("type") or param.get("type") or "string"
        example = param.get("example", schema.get("example"))
        default = schema.get("default", param.get("default"))
        return ImportedParameter(
            name=str(param["name"]),
            type=PARAMETER_TYPES.get(str(raw_type).lower(), "STRING"),
            location=PARAMETER_LOCATIONS.get(str(param.get("in", "")).lower(), "QUERY"),
            required=bool(param.get("required", False)),
            description=param.get("description"),
            default_value=_scalar_text(default),
            example=_scalar_text(example),
        )

    def _content_type(self, operation: dict[str, Any], key: str) -> str:
        types = operation.get(key) or self.document.get(key) or []
        return types[0] if types else DEFAULT_CONTENT_TYPE

    def _swagger_body(self, param: dict[str, Any], operation: dict[str, Any]) -> ImportedBody:
        schema = param.get("schema")
        return ImportedBody(
            content_type=self._content_type(operation, "consumes"),
            schema=json.dumps(schema) if schema is not None else None,
            example=self.examples.example_text(schema),
            description=param.get("description"),
        )

    def _response(self, status: str, response: Any, operation: dict[str, Any]) -> ImportedResponse | None:
        if not status.isdigit() or not 100 <= int(status) <= 599 or not isinstance(response, dict):
            return None
        response = self._deref(response)
        content_type = None
        schema = None
        example = None
        if response.get("content"):
            content_type, media = next(iter(response["content"].items()))
            schema = (media or {}).get("schema")
            example = (media or {}).get("example")
        elif response.get("schema") is not None:
            content_type = self._content_type(operation, "produces")
            schema = response["schema"]
        return ImportedResponse(
            status_code=int(status),
            description=response.get("description"),
            content_type=content_type,
            schema=json.dumps(schema) if schema is not None else None,
            example=_scalar_text(example) if example is not None else self.examples.example_text(schema),
        )


def load_document(request: ImportOpenAPIRequest) -> dict[str, Any]:
    """Return the JSON document from the request, fetching it when only a URL is given."""
    raw = request.spec
    if raw is None:
        result = send_request("GET", request.url or "", headers={"Accept": "application/json"})
        if result.status >= 400:
            raise ValueError(f"Failed to fetch OpenAPI spec: {result.status} {result.status_text}")
        raw = result.text
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ValueError("Invalid JSON format") from exc
    if not isinstance(raw, dict):
        raise ValueError("Invalid OpenAPI/Swagger specification")
    return raw


class OpenAPIImportService:
    def __init__(self, db: Session):
        self.folders = FolderRepository(db)
        self.endpoints = EndpointRepository(db)
        self.access = ProjectAccess(db)
        self.projects = ProjectService(db)

    def _folder(self, project_id: str, name: str, description: str | None, created: list[Folder]) -> Folder:
        name = name[:NAME_LIMIT]
        existing = self.folders.get_folder_by_name(project_id, name)
        if existing is not None and existing.parent_id is None:
            return existing
        now = utc_now_iso()
        folder = self.folders.create_folder(
            Folder(
                id=generate_id("fold"),
                project_id=project_id,
                parent_id=None,
                name=name,
                description=description,
                sort_order=self.folders.get_next_sort_order(project_id, None),
                created_at=now,
                updated_at=now,
            )
        )
        created.append(folder)
        return folder

    def _endpoint(self, project_id: str, folder_id: str, operation: ImportedOperation) -> Endpoint:
        now = utc_now_iso()
        endpoint = self.endpoints.create_endpoint(
            Endpoint(
                id=generate_id("ep"),
                project_id=project_id,
                folder_id=folder_id,
                name=operation.name,
                description=operation.description,
                type="HTTP",
                method=operation.method,
                path=operation.path,
                sort_order=self.endpoints.get_next_sort_order(project_id, folder_id),
                created_at=now,
                updated_at=now,
            )
        )
        self.endpoints.replace_parameters(
            endpoint,
            [
                EndpointParameter(
                    id=generate_id("param"),
                    endpoint_id=endpoint.id,
                    name=param.name,
                    type=param.type,
                    location=param.location,
                    required=int(param.required),
                    description=param.description,
                    default_value=param.default_value,
                    example=param.example,
                )
                for param in operation.parameters
            ],
        )
        self.endpoints.replace_responses(
            endpoint,
            [
                EndpointResponse(
                    id=generate_id("resp"),
                    endpoint_id=endpoint.id,
                    status_code=response.status_code,
                    description=response.description,
                    content_type=response.content_type,
                    schema=response.schema,
                    example=response.example,
                )
                for response in operation.responses
            ],
        )
        if operation.body is not None:
            self.endpoints.add_body(
                EndpointBody(
                    id=generate_id("body"),
                    endpoint_id=endpoint.id,
                    content_type=operation.body.content_type,
                    schema=operation.body.schema,
                    example=operation.body.example,
                    description=operation.body.description,
                )
            )
        return endpoint

    def import_document(self, project_id: str, user_id: str, request: ImportOpenAPIRequest) -> ImportResultOut:
        self.access.require_editor(project_id, user_id)
        parsed = OpenAPIParser(load_document(request)).parse()

        created_folders: list[Folder] = []
        by_tag = {
            name: self._folder(project_id, name, description, created_folders)
            for name, description in parsed.tags
        }
        fallback: Folder | None = None
        created_endpoints: list[Endpoint] = []
        for operation in parsed.operations:
            folder = by_tag.get(operation.tags[0]) if operation.tags else None
            if folder is None:
                if fallback is None:
                    fallback = self._folder(
                        project_id, IMPORTED_FOLDER_NAME, IMPORTED_FOLDER_DESCRIPTION, created_folders
                    )
                folder = fallback
            created_endpoints.append(self._endpoint(project_id, folder.id, operation))

        self.projects.touch(project_id)
        self.folders.commit()
        logger.info(
            "Imported %d endpoints into %d new folders for project %s",
            len(created_endpoints),
            len(created_folders),
            project_id,
        )
        return ImportResultOut(
            foldersCreated=len(created_folders),
            endpointsCreated=len(created_endpoints),
            folders=[folder_child_out(folder) for folder in created_folders],
            endpoints=[endpoint_summary_out(endpoint) for endpoint in created_endpoints],
        )
