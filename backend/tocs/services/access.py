"""Project-level authorization.

Missing projects and insufficient roles both surface as NotFoundError so that
callers cannot discover projects they are not allowed to see.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from tocs.db.models.project import Project, ProjectMember
from tocs.db.repositories.project_repo import ProjectRepository
from tocs.middleware.error_handler import NotFoundError

OWNER = "OWNER"
EDITOR = "EDITOR"
VIEWER = "VIEWER"
WRITE_ROLES = frozenset({OWNER, EDITOR})

_NOT_FOUND = "Project not found"
_NO_PERMISSION = "Project not found or insufficient permissions"


class ProjectAccess:
    def __init__(self, db: Session) -> None:
        self.repo = ProjectRepository(db)

    def require_readable(self, project_id: str, user_id: str | None) -> Project:
        """Public projects are readable by anyone; private ones by members only."""
        project = self.repo.get_visible_project(project_id, user_id)
        if project is None:
            raise NotFoundError(_NOT_FOUND)
        return project

    def require_member(self, project_id: str, user_id: str) -> ProjectMember:
        member = self.repo.get_member(project_id, user_id)
        if member is None:
            raise NotFoundError(_NOT_FOUND)
        return member

    def require_role(self, project_id: str, user_id: str, roles: frozenset[str] = WRITE_ROLES) -> ProjectMember:
        member = self.repo.get_member(project_id, user_id)
        if member is None or member.role not in roles:
            raise NotFoundError(_NO_PERMISSION)
        return member

    def require_editor(self, project_id: str, user_id: str) -> ProjectMember:
        return self.require_role(project_id, user_id, WRITE_ROLES)

    def require_owner(self, project_id: str, user_id: str) -> ProjectMember:
        return self.require_role(project_id, user_id, frozenset({OWNER}))
