from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tocs.api.deps import get_current_user, get_db
from tocs.api.envelope import ok
from tocs.db.models.user import User
from tocs.middleware.error_handler import error_response
from tocs.schemas.variables import CreateVariableRequest, UpdateVariableRequest
from tocs.services.variable_service import VariableService

router = APIRouter(prefix="/api/projects/{project_id}/variables", tags=["variables"])


@router.get("")
def get_variables(project_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        data = VariableService(db).get_variables(project_id, user.id)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.post("")
def create_variable(
    project_id: str,
    request: CreateVariableRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = VariableService(db).create_variable(project_id, user.id, request)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.get("/{variable_id}")
def get_variable(
    project_id: str,
    variable_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = VariableService(db).get_variable(project_id, variable_id, user.id)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.put("/{variable_id}")
def update_variable(
    project_id: str,
    variable_id: str,
    request: UpdateVariableRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = VariableService(db).update_variable(project_id, variable_id, user.id, request)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.delete("/{variable_id}")
def delete_variable(
    project_id: str,
    variable_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = VariableService(db).delete_variable(project_id, variable_id, user.id)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)
