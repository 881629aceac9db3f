from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tocs.api.deps import get_current_user, get_db
from tocs.api.envelope import ok
from tocs.db.models.user import User
from tocs.middleware.error_handler import error_response
from tocs.schemas.histories import CreateHistoryRequest
from tocs.services.history_service import HistoryService

router = APIRouter(prefix="/api/projects/{project_id}", tags=["histories"])


@router.get("/histories")
def get_project_histories(
    project_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = HistoryService(db).get_project_histories(project_id, user.id)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.get("/endpoints/{endpoint_id}/histories")
def get_endpoint_histories(
    project_id: str,
    endpoint_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = HistoryService(db).get_endpoint_histories(project_id, endpoint_id, user.id)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.post("/endpoints/{endpoint_id}/histories")
def create_history(
    project_id: str,
    endpoint_id: str,
    request: CreateHistoryRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = HistoryService(db).create_history(project_id, endpoint_id, user.id, request)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)
