from sqlalchemy import or_, select
from sqlalchemy.orm import selectinload

from tocs.db.models.project import Project, ProjectMember
from tocs.db.repositories.base_repo import BaseRepository


class ProjectRepository(BaseRepository):
    def list_projects_for_user(self, user_id: str) -> list[Project]:
        stmt = (
            select(Project)
            .join(ProjectMember, ProjectMember.project_id == Project.id)
            .where(ProjectMember.user_id == user_id)
            .options(selectinload(Project.members).selectinload(ProjectMember.user))
            .order_by(Project.updated_at.desc())
        )
        return list(self.db.scalars(stmt).unique().all())

    def get_project(self, project_id: str) -> Project | None:
        return self.db.get(Project, project_id)

    def get_visible_project(self, project_id: str, user_id: str | None) -> Project | None:
        """Project that is public, or that ``user_id`` belongs to."""
        conditions = [Project.is_public == 1]
        if user_id is not None:
            conditions.append(
                Project.members.any(ProjectMember.user_id == user_id)
            )
        stmt = select(Project).where(Project.id == project_id, or_(*conditions))
        return self.db.scalars(stmt).first()

    def get_member(self, project_id: str, user_id: str) -> ProjectMember | None:
        stmt = select(ProjectMember).where(
            ProjectMember.project_id == project_id,
            ProjectMember.user_id == user_id,
        )
        return self.db.scalars(stmt).first()

    def get_member_by_id(self, project_id: str, member_id: str) -> ProjectMember | None:
        stmt = select(ProjectMember).where(
            ProjectMember.id == member_id,
            ProjectMember.project_id == project_id,
        )
        return self.db.scalars(stmt).first()

    def create_project(self, project: Project) -> Project:
        return self._add(project)

    def add_member(self, member: ProjectMember) -> ProjectMember:
        return self._add(member)

    def delete_project(self, project: Project) -> None:
        self.db.delete(project)

    def delete_member(self, member: ProjectMember) -> None:
        self.db.delete(member)
