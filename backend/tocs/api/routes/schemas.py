from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tocs.api.deps import get_current_user, get_db
from tocs.api.envelope import ok
from tocs.db.models.user import User
from tocs.middleware.error_handler import error_response
from tocs.schemas.schema_defs import CreateSchemaRequest, UpdateSchemaRequest
from tocs.services.schema_service import SchemaService

router = APIRouter(prefix="/api/projects/{project_id}/schemas", tags=["schemas"])


@router.get("")
def get_schemas(project_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        data = SchemaService(db).get_schemas(project_id, user.id)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.post("")
def create_schema(
    project_id: str,
    request: CreateSchemaRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = SchemaService(db).create_schema(project_id, user.id, request)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.get("/{schema_id}")
def get_schema(
    project_id: str,
    schema_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = SchemaService(db).get_schema(project_id, schema_id, user.id)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.put("/{schema_id}")
def update_schema(
    project_id: str,
    schema_id: str,
    request: UpdateSchemaRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = SchemaService(db).update_schema(project_id, schema_id, user.id, request)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.delete("/{schema_id}")
def delete_schema(
    project_id: str,
    schema_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = SchemaService(db).delete_schema(project_id, schema_id, user.id)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)
