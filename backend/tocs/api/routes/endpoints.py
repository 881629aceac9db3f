from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tocs.api.deps import get_current_user, get_db
from tocs.api.envelope import ok
from tocs.db.models.user import User
from tocs.middleware.error_handler import error_response
from tocs.schemas.endpoints import (
    BodyIn,
    CreateEndpointRequest,
    ReorderEndpointsRequest,
    ReplaceHeadersRequest,
    ReplaceParametersRequest,
    ReplaceResponsesRequest,
    UpdateEndpointRequest,
)
from tocs.schemas.proxy import ExecuteEndpointRequest
from tocs.services.endpoint_service import EndpointService
from tocs.services.request_executor import RequestExecutor

router = APIRouter(prefix="/api/projects/{project_id}/endpoints", tags=["endpoints"])


@router.get("")
def get_endpoints(project_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        data = EndpointService(db).get_endpoints(project_id, user.id)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.post("")
def create_endpoint(
    project_id: str,
    request: CreateEndpointRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = EndpointService(db).create_endpoint(project_id, user.id, request)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


# Static "/reorder" path must be registered BEFORE the dynamic "/{endpoint_id}" path
# to prevent "reorder" from being captured as an endpoint_id.
@router.put("/reorder")
def reorder_endpoints(
    project_id: str,
    request: ReorderEndpointsRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = EndpointService(db).reorder_endpoints(project_id, user.id, request.endpoints)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.get("/{endpoint_id}")
def get_endpoint(
    project_id: str,
    endpoint_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = EndpointService(db).get_endpoint(project_id, endpoint_id, user.id)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.put("/{endpoint_id}")
def update_endpoint(
    project_id: str,
    endpoint_id: str,
    request: UpdateEndpointRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = EndpointService(db).update_endpoint(project_id, endpoint_id, user.id, request)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.delete("/{endpoint_id}")
def delete_endpoint(
    project_id: str,
    endpoint_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = EndpointService(db).delete_endpoint(project_id, endpoint_id, user.id)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.put("/{endpoint_id}/headers")
def replace_headers(
    project_id: str,
    endpoint_id: str,
    request: ReplaceHeadersRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = EndpointService(db).replace_headers(project_id, endpoint_id, user.id, request.headers)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.put("/{endpoint_id}/parameters")
def replace_parameters(
    project_id: str,
    endpoint_id: str,
    request: ReplaceParametersRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = EndpointService(db).replace_parameters(project_id, endpoint_id, user.id, request.parameters)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.put("/{endpoint_id}/responses")
def replace_responses(
    project_id: str,
    endpoint_id: str,
    request: ReplaceResponsesRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = EndpointService(db).replace_responses(project_id, endpoint_id, user.id, request.responses)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.put("/{endpoint_id}/body")
def upsert_body(
    project_id: str,
    endpoint_id: str,
    request: BodyIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = EndpointService(db).upsert_body(project_id, endpoint_id, user.id, request)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.post("/{endpoint_id}/execute")
def execute_endpoint(
    project_id: str,
    endpoint_id: str,
    request: ExecuteEndpointRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = RequestExecutor(db).execute(project_id, endpoint_id, user.id, request)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)
