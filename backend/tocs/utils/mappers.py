"""ORM row -> API schema conversions shared by several services."""

from __future__ import annotations

import json

from tocs.db.models.endpoint import Endpoint
from tocs.db.models.folder import Folder
from tocs.db.models.history import History
from tocs.db.models.project import Project, ProjectMember
from tocs.db.models.schema_definition import SchemaDefinition
from tocs.db.models.variable import Variable
from tocs.schemas.endpoints import (
    BodyOut,
    EndpointOut,
    FolderRefOut,
    HeaderOut,
    ParameterOut,
    ResponseOut,
)
from tocs.schemas.folders import EndpointSummaryOut, FolderChildOut, FolderOut
from tocs.schemas.histories import HistoryEndpointOut, HistoryOut, HistorySummaryOut, HistoryUserOut
from tocs.schemas.projects import MemberUserOut, ProjectMemberOut, ProjectOut, ServerEntry
from tocs.schemas.schema_defs import SchemaOut
from tocs.schemas.variables import VariableOut
from tocs.utils.json_helpers import parse_json_or_text, safe_parse_json, safe_parse_json_list


def project_servers(project: Project) -> list[ServerEntry]:
    return [
        ServerEntry(name=str(entry.get("name", "")), url=str(entry.get("url", "")))
        for entry in safe_parse_json_list(project.servers_json)
        if isinstance(entry, dict)
    ]


def member_out(member: ProjectMember) -> ProjectMemberOut:
    return ProjectMemberOut(
        id=member.id,
        projectId=member.project_id,
        userId=member.user_id,
        role=member.role,
        user=MemberUserOut(
            id=member.user.id,
            name=member.user.name,
            email=member.user.email,
            image=member.user.image,
        ),
    )


def project_out(project: Project) -> ProjectOut:
    return ProjectOut(
        id=project.id,
        name=project.name,
        slug=project.slug,
        description=project.description,
        isPublic=bool(project.is_public),
        servers=project_servers(project),
        createdAt=project.created_at,
        updatedAt=project.updated_at,
        members=[member_out(member) for member in project.members],
    )


def endpoint_summary_out(endpoint: Endpoint) -> EndpointSummaryOut:
    return EndpointSummaryOut(
        id=endpoint.id,
        name=endpoint.name,
        type=endpoint.type,
        method=endpoint.method,
        path=endpoint.path,
        folderId=endpoint.folder_id,
        order=endpoint.sort_order,
    )


def folder_child_out(folder: Folder) -> FolderChildOut:
    return FolderChildOut(id=folder.id, name=folder.name, parentId=folder.parent_id, order=folder.sort_order)


def folder_out(folder: Folder) -> FolderOut:
    return FolderOut(
        id=folder.id,
        projectId=folder.project_id,
        parentId=folder.parent_id,
        name=folder.name,
        description=folder.description,
        order=folder.sort_order,
        createdAt=folder.created_at,
        updatedAt=folder.updated_at,
        children=[folder_child_out(child) for child in sorted(folder.children, key=lambda f: f.sort_order)],
        endpoints=[
            endpoint_summary_out(endpoint)
            for endpoint in sorted(folder.endpoints, key=lambda e: e.sort_order)
        ],
    )


def endpoint_out(endpoint: Endpoint) -> EndpointOut:
    body = endpoint.body
    return EndpointOut(
        id=endpoint.id,
        projectId=endpoint.project_id,
        folderId=endpoint.folder_id,
        folder=FolderRefOut(id=endpoint.folder.id, name=endpoint.folder.name) if endpoint.folder else None,
        name=endpoint.name,
        description=endpoint.description,
        type=endpoint.type,
        method=endpoint.method,
        path=endpoint.path,
        query=endpoint.query,
        variables=parse_json_or_text(endpoint.variables_json),
        wsUrl=endpoint.ws_url,
        wsProtocol=endpoint.ws_protocol,
        protoFile=endpoint.proto_file,
        serviceName=endpoint.service_name,
        methodName=endpoint.method_name,
        order=endpoint.sort_order,
        createdAt=endpoint.created_at,
        updatedAt=endpoint.updated_at,
        headers=[
            HeaderOut(
                id=header.id,
                endpointId=header.endpoint_id,
                key=header.key,
                value=header.value,
                description=header.description,
                required=bool(header.required),
            )
            for header in endpoint.headers
        ],
        parameters=[
            ParameterOut(
                id=param.id,
                endpointId=param.endpoint_id,
                name=param.name,
                type=param.type,
                location=param.location,
                required=bool(param.required),
                description=param.description,
                defaultValue=param.default_value,
                example=param.example,
            )
            for param in endpoint.parameters
        ],
        body=(
            BodyOut(
                id=body.id,
                endpointId=body.endpoint_id,
                contentType=body.content_type,
                schema_text=body.schema,
                example=body.example,
                description=body.description,
            )
            if body is not None
            else None
        ),
        responses=[
            ResponseOut(
                id=response.id,
                endpointId=response.endpoint_id,
                statusCode=response.status_code,
                description=response.description,
                contentType=response.content_type,
                schema_text=response.schema,
                example=response.example,
            )
            for response in endpoint.responses
        ],
    )


def variable_out(variable: Variable) -> VariableOut:
    return VariableOut(
        id=variable.id,
        projectId=variable.project_id,
        key=variable.key,
        value=variable.value,
        createdAt=variable.created_at,
        updatedAt=variable.updated_at,
    )


def schema_out(schema: SchemaDefinition) -> SchemaOut:
    return SchemaOut(
        id=schema.id,
        projectId=schema.project_id,
        name=schema.name,
        description=schema.description,
        kind=schema.kind,
        definition=safe_parse_json(schema.schema_json),
        createdAt=schema.created_at,
        updatedAt=schema.updated_at,
    )


def _history_endpoint(history: History) -> HistoryEndpointOut:
    endpoint = history.endpoint
    return HistoryEndpointOut(id=endpoint.id, name=endpoint.name, method=endpoint.method, path=endpoint.path)


def history_summary_out(history: History) -> HistorySummaryOut:
    return HistorySummaryOut(
        id=history.id,
        endpointId=history.endpoint_id,
        endpoint=_history_endpoint(history),
        method=history.method,
        url=history.url,
        status=history.status,
        statusText=history.status_text,
        responseTime=history.response_time,
        createdAt=history.created_at,
    )


def _json_dict_or_none(raw: str | None) -> dict | None:
    return safe_parse_json(raw) if raw else None


def history_out(history: History) -> HistoryOut:
    user = history.user
    return HistoryOut(
        **history_summary_out(history).model_dump(),
        userId=history.user_id,
        user=HistoryUserOut(id=user.id, name=user.name, email=user.email) if user else None,
        headers=_json_dict_or_none(history.headers_json),
        params=_json_dict_or_none(history.params_json),
        body=history.body,
        variables=_json_dict_or_none(history.variables_json),
        responseSize=history.response_size,
        responseHeaders=_json_dict_or_none(history.response_headers_json),
        responseBody=history.response_body,
    )


def servers_json(servers: list[ServerEntry]) -> str:
    return json.dumps([server.model_dump() for server in servers])
