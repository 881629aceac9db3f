from sqlalchemy.orm import Session

from tocs.db.models.project import ProjectMember
from tocs.db.repositories.project_repo import ProjectRepository
from tocs.db.repositories.user_repo import UserRepository
from tocs.middleware.error_handler import NotFoundError
from tocs.schemas.projects import (
    DeleteMemberResponse,
    InviteMemberRequest,
    MemberResponse,
    MemberRole,
)
from tocs.services.access import OWNER, ProjectAccess
from tocs.utils.ids import generate_id
from tocs.utils.mappers import member_out
from tocs.utils.time import utc_now_iso


class MemberService:
    def __init__(self, db: Session):
        self.repo = ProjectRepository(db)
        self.users = UserRepository(db)
        self.access = ProjectAccess(db)

    def _require_member_row(self, project_id: str, member_id: str) -> ProjectMember:
        member = self.repo.get_member_by_id(project_id, member_id)
        if member is None:
            raise NotFoundError("Member not found")
        return member

    def invite_member(self, project_id: str, user_id: str, request: InviteMemberRequest) -> MemberResponse:
        """Add a user by email, creating the account when the email is unknown."""
        self.access.require_editor(project_id, user_id)
        invitee = self.users.get_or_create_by_email(request.email)
        if self.repo.get_member(project_id, invitee.id) is not None:
            raise ValueError("User is already a member of this project")
        member = self.repo.add_member(
            ProjectMember(
                id=generate_id("mem"),
                project_id=project_id,
                user_id=invitee.id,
                role=request.role,
                created_at=utc_now_iso(),
            )
        )
        self.repo.commit()
        return MemberResponse(member=member_out(member))

    def update_member_role(self, project_id: str, user_id: str, member_id: str, role: MemberRole) -> MemberResponse:
        self.access.require_owner(project_id, user_id)
        member = self._require_member_row(project_id, member_id)
        member.role = role
        self.repo.commit()
        return MemberResponse(member=member_out(member))

    def remove_member(self, project_id: str, user_id: str, member_id: str) -> DeleteMemberResponse:
        self.access.require_editor(project_id, user_id)
        member = self._require_member_row(project_id, member_id)
        if member.role == OWNER:
            raise ValueError("Cannot remove project owner")
        self.repo.delete_member(member)
        self.repo.commit()
        return DeleteMemberResponse(deletedMemberId=member_id)
