from sqlalchemy.orm import Session

from tocs.db.models.endpoint import (
    Endpoint,
    EndpointBody,
    EndpointHeader,
    EndpointParameter,
    EndpointResponse,
)
from tocs.db.repositories.endpoint_repo import EndpointRepository
from tocs.db.repositories.folder_repo import FolderRepository
from tocs.middleware.error_handler import NotFoundError
from tocs.schemas.common import OrderEntry
from tocs.schemas.endpoints import (
    BodyIn,
    CreateEndpointRequest,
    DeleteEndpointResponse,
    EndpointDetailResponse,
    GetEndpointsResponse,
    HeaderIn,
    ParameterIn,
    ResponseIn,
    UpdateEndpointRequest,
)
from tocs.services.access import ProjectAccess
from tocs.services.project_service import ProjectService
from tocs.utils.ids import generate_id
from tocs.utils.json_helpers import dumps_or_none
from tocs.utils.mappers import endpoint_out
from tocs.utils.time import utc_now_iso

HTTP = "HTTP"
DEFAULT_HTTP_METHOD = "GET"

# Request fields copied onto the row as-is, keyed by their column name.
_PLAIN_FIELDS = {
    "description": "description",
    "path": "path",
    "query": "query",
    "wsUrl": "ws_url",
    "wsProtocol": "ws_protocol",
    "protoFile": "proto_file",
    "serviceName": "service_name",
    "methodName": "method_name",
}


def _method_for(endpoint_type: str, method: str | None) -> str | None:
    if endpoint_type != HTTP:
        return None
    return method or DEFAULT_HTTP_METHOD


class EndpointService:
    def __init__(self, db: Session):
        self.repo = EndpointRepository(db)
        self.folders = FolderRepository(db)
        self.access = ProjectAccess(db)
        self.projects = ProjectService(db)

    def _require_endpoint(self, project_id: str, endpoint_id: str) -> Endpoint:
        endpoint = self.repo.get_endpoint(project_id, endpoint_id)
        if endpoint is None:
            raise NotFoundError("Endpoint not found")
        return endpoint

    def _check_folder(self, project_id: str, folder_id: str | None) -> None:
        if folder_id is not None and self.folders.get_folder(project_id, folder_id) is None:
            raise ValueError("Folder not found in this project")

    def _detail(self, project_id: str, endpoint_id: str) -> EndpointDetailResponse:
        return EndpointDetailResponse(endpoint=endpoint_out(self._require_endpoint(project_id, endpoint_id)))

    def _changed(self, endpoint: Endpoint) -> None:
        endpoint.updated_at = utc_now_iso()
        self.projects.touch(endpoint.project_id)

    def get_endpoints(self, project_id: str, user_id: str | None) -> GetEndpointsResponse:
        self.access.require_readable(project_id, user_id)
        return GetEndpointsResponse(endpoints=[endpoint_out(e) for e in self.repo.list_endpoints(project_id)])

    def get_endpoint(self, project_id: str, endpoint_id: str, user_id: str | None) -> EndpointDetailResponse:
        self.access.require_readable(project_id, user_id)
        return self._detail(project_id, endpoint_id)

    def create_endpoint(self, project_id: str, user_id: str, request: CreateEndpointRequest) -> EndpointDetailResponse:
        self.access.require_editor(project_id, user_id)
        self._check_folder(project_id, request.folderId)
        now = utc_now_iso()
        endpoint = self.repo.create_endpoint(
            Endpoint(
                id=generate_id("ep"),
                project_id=project_id,
                folder_id=request.folderId,
                name=request.name.strip(),
                description=request.description,
                type=request.type,
                method=_method_for(request.type, request.method),
                path=request.path,
                query=request.query,
                variables_json=dumps_or_none(request.variables),
                ws_url=request.wsUrl,
                ws_protocol=request.wsProtocol,
                proto_file=request.protoFile,
                service_name=request.serviceName,
                method_name=request.methodName,
                sort_order=self.repo.get_next_sort_order(project_id, request.folderId),
                created_at=now,
                updated_at=now,
            )
        )
        self.projects.touch(project_id)
        self.repo.commit()
        return self._detail(project_id, endpoint.id)

    def update_endpoint(
        self, project_id: str, endpoint_id: str, user_id: str, request: UpdateEndpointRequest
    ) -> EndpointDetailResponse:
        self.access.require_editor(project_id, user_id)
        endpoint = self._require_endpoint(project_id, endpoint_id)
        fields = request.model_fields_set
        if request.name is not None:
            endpoint.name = request.name.strip()
        for field_name, column in _PLAIN_FIELDS.items():
            if field_name in fields and (field_name != "path" or request.path is not None):
                setattr(endpoint, column, getattr(request, field_name))
        if "variables" in fields:
            endpoint.variables_json = dumps_or_none(request.variables)
        if "folderId" in fields:
            self._check_folder(project_id, request.folderId)
            endpoint.folder_id = request.folderId
        if request.type is not None:
            endpoint.type = request.type
        endpoint.method = _method_for(endpoint.type, request.method or endpoint.method)
        self._changed(endpoint)
        self.repo.commit()
        return self._detail(project_id, endpoint_id)

    def delete_endpoint(self, project_id: str, endpoint_id: str, user_id: str) -> DeleteEndpointResponse:
        self.access.require_editor(project_id, user_id)
        endpoint = self._require_endpoint(project_id, endpoint_id)
        self.repo.delete_endpoint(endpoint)
        self.projects.touch(project_id)
        self.repo.commit()
        return DeleteEndpointResponse(deletedEndpointId=endpoint_id)

    def reorder_endpoints(self, project_id: str, user_id: str, entries: list[OrderEntry]) -> GetEndpointsResponse:
        self.access.require_editor(project_id, user_id)
        self.repo.set_endpoint_order(project_id, [(entry.id, entry.order) for entry in entries])
        self.repo.commit()
        return GetEndpointsResponse(endpoints=[endpoint_out(e) for e in self.repo.list_endpoints(project_id)])

    # -- endpoint parts ---------------------------------------------------

    def replace_headers(
        self, project_id: str, endpoint_id: str, user_id: str, headers: list[HeaderIn]
    ) -> EndpointDetailResponse:
        self.access.require_editor(project_id, user_id)
        endpoint = self._require_endpoint(project_id, endpoint_id)
        self.repo.replace_headers(
            endpoint,
            [
                EndpointHeader(
                    id=generate_id("hdr"),
                    endpoint_id=endpoint.id,
                    key=header.key,
                    value=header.value,
                    description=header.description,
                    required=int(header.required),
                )
                for header in headers
            ],
        )
        self._changed(endpoint)
        self.repo.commit()
        return self._detail(project_id, endpoint_id)

    def replace_parameters(
        self, project_id: str, endpoint_id: str, user_id: str, parameters: list[ParameterIn]
    ) -> EndpointDetailResponse:
        self.access.require_editor(project_id, user_id)
        endpoint = self._require_endpoint(project_id, endpoint_id)
        self.repo.replace_parameters(
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
                    default_value=param.defaultValue,
                    example=param.example,
                )
                for param in parameters
            ],
        )
        self._changed(endpoint)
        self.repo.commit()
        return self._detail(project_id, endpoint_id)

    def replace_responses(
        self, project_id: str, endpoint_id: str, user_id: str, responses: list[ResponseIn]
    ) -> EndpointDetailResponse:
        self.access.require_editor(project_id, user_id)
        endpoint = self._require_endpoint(project_id, endpoint_id)
        self.repo.replace_responses(
            endpoint,
            [
                EndpointResponse(
                    id=generate_id("resp"),
                    endpoint_id=endpoint.id,
                    status_code=response.statusCode,
                    description=response.description,
                    content_type=response.contentType,
                    schema=response.schema_text,
                    example=response.example,
                )
                for response in responses
            ],
        )
        self._changed(endpoint)
        self.repo.commit()
        return self._detail(project_id, endpoint_id)

    def upsert_body(self, project_id: str, endpoint_id: str, user_id: str, body: BodyIn) -> EndpointDetailResponse:
        self.access.require_editor(project_id, user_id)
        endpoint = self._require_endpoint(project_id, endpoint_id)
        row = self.repo.get_body(endpoint.id)
        if row is None:
            row = self.repo.add_body(EndpointBody(id=generate_id("body"), endpoint_id=endpoint.id, content_type=""))
        row.content_type = body.contentType
        row.schema = body.schema_text
        row.example = body.example
        row.description = body.description
        self._changed(endpoint)
        self.repo.commit()
        return self._detail(project_id, endpoint_id)
