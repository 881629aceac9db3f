from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tocs.api.deps import get_current_user, get_db
from tocs.api.envelope import ok
from tocs.db.models.user import User
from tocs.middleware.error_handler import error_response
from tocs.schemas.folders import CreateFolderRequest, ReorderFoldersRequest, UpdateFolderRequest
from tocs.services.folder_service import FolderService

router = APIRouter(prefix="/api/projects/{project_id}/folders", tags=["folders"])


@router.get("")
def get_folders(project_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        data = FolderService(db).get_folders(project_id, user.id)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.post("")
def create_folder(
    project_id: str,
    request: CreateFolderRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = FolderService(db).create_folder(project_id, user.id, request)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


# Static "/reorder" path must be registered BEFORE the dynamic "/{folder_id}" path
# to prevent "reorder" from being captured as a folder_id.
@router.put("/reorder")
def reorder_folders(
    project_id: str,
    request: ReorderFoldersRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = FolderService(db).reorder_folders(project_id, user.id, request.folders)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.get("/{folder_id}")
def get_folder(
    project_id: str,
    folder_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = FolderService(db).get_folder(project_id, folder_id, user.id)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.put("/{folder_id}")
def update_folder(
    project_id: str,
    folder_id: str,
    request: UpdateFolderRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = FolderService(db).update_folder(project_id, folder_id, user.id, request)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.delete("/{folder_id}")
def delete_folder(
    project_id: str,
    folder_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = FolderService(db).delete_folder(project_id, folder_id, user.id)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)
