from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tocs.api.deps import get_current_user, get_db
from tocs.api.envelope import ok
from tocs.db.models.user import User
from tocs.middleware.error_handler import error_response
from tocs.schemas.projects import (
    CreateProjectRequest,
    InviteMemberRequest,
    UpdateMemberRequest,
    UpdateProjectRequest,
    UpdateVisibilityRequest,
)
from tocs.services.member_service import MemberService
from tocs.services.project_service import ProjectService

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get("")
def get_projects(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        data = ProjectService(db).get_projects(user.id)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.post("")
def create_project(
    request: CreateProjectRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = ProjectService(db).create_project(user.id, request)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.get("/{project_id}")
def get_project(project_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        data = ProjectService(db).get_project(project_id, user.id)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.put("/{project_id}")
def update_project(
    project_id: str,
    request: UpdateProjectRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = ProjectService(db).update_project(project_id, user.id, request)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.delete("/{project_id}")
def delete_project(project_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        data = ProjectService(db).delete_project(project_id, user.id)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.put("/{project_id}/visibility")
def update_visibility(
    project_id: str,
    request: UpdateVisibilityRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = ProjectService(db).update_visibility(project_id, user.id, request.isPublic)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.post("/{project_id}/members")
def invite_member(
    project_id: str,
    request: InviteMemberRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = MemberService(db).invite_member(project_id, user.id, request)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.put("/{project_id}/members/{member_id}")
def update_member(
    project_id: str,
    member_id: str,
    request: UpdateMemberRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = MemberService(db).update_member_role(project_id, user.id, member_id, request.role)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.delete("/{project_id}/members/{member_id}")
def remove_member(
    project_id: str,
    member_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = MemberService(db).remove_member(project_id, user.id, member_id)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)
