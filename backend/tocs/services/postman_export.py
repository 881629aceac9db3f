"""Build a Postman Collection v2.1 from a project's HTTP endpoints."""

from __future__ import annotations

from typing import Any

from tocs.config.settings import get_settings
from tocs.db.models.endpoint import Endpoint
from tocs.db.models.folder import Folder
from tocs.db.models.project import Project
from tocs.utils.mappers import project_servers

POSTMAN_SCHEMA = "https://schema.getpostman.com/json/collection/v2.1.0/collection.json"
UNCATEGORIZED = "Uncategorized"
BODY_METHODS = ("POST", "PUT", "PATCH")


def _variable_key(server_name: str) -> str:
    return "base_url" if server_name.lower() == "default" else f"base_url_{server_name}"


def _item(endpoint: Endpoint) -> dict[str, Any]:
    method = endpoint.method or "GET"
    request: dict[str, Any] = {
        "method": method,
        "header": [
            {"key": header.key, "value": header.value or "", "description": header.description}
            for header in endpoint.headers
        ],
        "url": {
            "raw": "{{base_url}}" + endpoint.path,
            "host": ["{{base_url}}"],
            "path": [segment for segment in endpoint.path.split("/") if segment],
        },
    }
    query = [
        {"key": param.name, "value": param.default_value or "", "description": param.description}
        for param in endpoint.parameters
        if param.location == "QUERY"
    ]
    if query:
        request["url"]["query"] = query
    if endpoint.body is not None and method in BODY_METHODS:
        request["body"] = {
            "mode": "raw",
            "raw": endpoint.body.example or "",
            "options": {"raw": {"language": "json"}},
        }
    return {"name": endpoint.name, "request": request}


def build_postman_collection(project: Project, folders: list[Folder], endpoints: list[Endpoint]) -> dict[str, Any]:
    groups: dict[str | None, dict[str, Any]] = {folder.id: {"name": folder.name, "item": []} for folder in folders}
    groups[None] = {"name": UNCATEGORIZED, "item": []}
    for endpoint in endpoints:
        if endpoint.type != "HTTP":
            continue
        group = groups.get(endpoint.folder_id)
        if group is not None:
            group["item"].append(_item(endpoint))

    servers = project_servers(project)
    variables = [{"key": _variable_key(server.name), "value": server.url, "type": "string"} for server in servers]
    return {
        "info": {
            "name": project.name,
            "description": project.description or "",
            "schema": POSTMAN_SCHEMA,
        },
        "item": [group for group in groups.values() if group["item"]],
        "variable": variables or [{"key": "base_url", "value": get_settings().default_server_url, "type": "string"}],
    }
