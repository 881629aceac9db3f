"""Build an OpenAPI 3.0.0 document from a project's HTTP endpoints."""

from __future__ import annotations

from typing import Any

from tocs.config.settings import get_settings
from tocs.db.models.endpoint import Endpoint
from tocs.db.models.folder import Folder
from tocs.db.models.project import Project
from tocs.utils.json_helpers import parse_json_or_text
from tocs.utils.mappers import project_servers

OPENAPI_VERSION = "3.0.0"
BODY_METHODS = ("POST", "PUT", "PATCH")
DEFAULT_RESPONSES = {"200": {"description": "Successful response"}}


def _compact(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


def _media(schema: str | None, example: str | None) -> dict[str, Any]:
    return _compact(
        {
            "schema": parse_json_or_text(schema) if schema else {},
            "example": parse_json_or_text(example) if example else None,
        }
    )


def _operation(endpoint: Endpoint, folder_names: dict[str, str]) -> dict[str, Any]:
    operation: dict[str, Any] = {
        "summary": endpoint.name,
        "description": endpoint.description,
        "tags": [folder_names[endpoint.folder_id]] if endpoint.folder_id in folder_names else [],
    }
    if endpoint.parameters:
        operation["parameters"] = [
            _compact(
                {
                    "name": param.name,
                    "in": param.location.lower(),
                    "required": bool(param.required),
                    "description": param.description,
                    "schema": {"type": param.type.lower()},
                }
            )
            for param in endpoint.parameters
        ]
    body = endpoint.body
    if body is not None and endpoint.method in BODY_METHODS:
        operation["requestBody"] = _compact(
            {
                "content": {body.content_type: _media(body.schema, body.example)},
                "description": body.description,
            }
        )
    if endpoint.responses:
        operation["responses"] = {
            str(response.status_code): _compact(
                {
                    "description": response.description or f"{response.status_code} response",
                    "content": (
                        {response.content_type: _media(response.schema, response.example)}
                        if response.content_type
                        else None
                    ),
                }
            )
            for response in endpoint.responses
        }
    else:
        operation["responses"] = dict(DEFAULT_RESPONSES)
    return _compact(operation)


def build_openapi_document(project: Project, folders: list[Folder], endpoints: list[Endpoint]) -> dict[str, Any]:
    folder_names = {folder.id: folder.name for folder in folders}
    paths: dict[str, dict[str, Any]] = {}
    for endpoint in endpoints:
        if endpoint.type != "HTTP":
            continue
        method = (endpoint.method or "GET").lower()
        paths.setdefault(endpoint.path, {})[method] = _operation(endpoint, folder_names)

    servers = [{"url": server.url, "description": server.name} for server in project_servers(project)]
    return {
        "openapi": OPENAPI_VERSION,
        "info": {
            "title": project.name,
            "description": project.description or "",
            "version": "1.0.0",
        },
        "servers": servers or [{"url": get_settings().default_server_url}],
        "paths": paths,
        "tags": [_compact({"name": folder.name, "description": folder.description}) for folder in folders],
    }
