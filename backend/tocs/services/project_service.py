import logging

from sqlalchemy.orm import Session

from tocs.config.defaults import DEFAULT_SERVER_NAME
from tocs.config.settings import get_settings
from tocs.db.models.project import Project, ProjectMember
from tocs.db.repositories.project_repo import ProjectRepository
from tocs.middleware.error_handler import NotFoundError
from tocs.schemas.projects import (
    CreateProjectRequest,
    DeleteProjectResponse,
    GetProjectsResponse,
    ProjectResponse,
    ServerEntry,
    UpdateProjectRequest,
)
from tocs.services.access import OWNER, ProjectAccess
from tocs.utils.ids import generate_id
from tocs.utils.mappers import project_out, servers_json
from tocs.utils.slugs import slugify
from tocs.utils.time import utc_now_iso, utc_now_millis

logger = logging.getLogger(__name__)


class ProjectService:
    def __init__(self, db: Session):
        self.repo = ProjectRepository(db)
        self.access = ProjectAccess(db)

    @staticmethod
    def _now() -> str:
        return utc_now_iso()

    @staticmethod
    def _new_id(prefix: str) -> str:
        return generate_id(prefix)

    @staticmethod
    def _default_servers() -> list[ServerEntry]:
        return [ServerEntry(name=DEFAULT_SERVER_NAME, url=get_settings().default_server_url)]

    def _reload(self, project_id: str) -> ProjectResponse:
        project = self.repo.get_project(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        self.repo.db.refresh(project)
        return ProjectResponse(project=project_out(project))

    def get_projects(self, user_id: str) -> GetProjectsResponse:
        projects = [project_out(project) for project in self.repo.list_projects_for_user(user_id)]
        return GetProjectsResponse(projects=projects)

    def get_project(self, project_id: str, user_id: str | None) -> ProjectResponse:
        project = self.access.require_readable(project_id, user_id)
        return ProjectResponse(project=project_out(project))

    def create_project(self, user_id: str, request: CreateProjectRequest) -> ProjectResponse:
        now = self._now()
        name = request.name.strip()
        servers = request.servers if request.servers else self._default_servers()
        project = Project(
            id=self._new_id("proj"),
            name=name,
            slug=f"{slugify(name)}-{utc_now_millis()}",
            description=request.description,
            is_public=int(request.isPublic),
            servers_json=servers_json(servers),
            created_at=now,
            updated_at=now,
        )
        self.repo.create_project(project)
        self.repo.add_member(
            ProjectMember(
                id=self._new_id("mem"),
                project_id=project.id,
                user_id=user_id,
                role=OWNER,
                created_at=now,
            )
        )
        self.repo.commit()
        logger.info("Created project %s (%s)", project.id, project.slug)
        return self._reload(project.id)

    def update_project(self, project_id: str, user_id: str, request: UpdateProjectRequest) -> ProjectResponse:
        self.access.require_editor(project_id, user_id)
        project = self.repo.get_project(project_id)
        fields = request.model_fields_set
        if request.name is not None:
            project.name = request.name.strip()
            project.slug = slugify(project.name)
        if "description" in fields:
            project.description = request.description
        if request.isPublic is not None:
            project.is_public = int(request.isPublic)
        if request.servers is not None:
            project.servers_json = servers_json(request.servers)
        project.updated_at = self._now()
        self.repo.commit()
        return self._reload(project_id)

    def update_visibility(self, project_id: str, user_id: str, is_public: bool) -> ProjectResponse:
        self.access.require_editor(project_id, user_id)
        project = self.repo.get_project(project_id)
        project.is_public = int(is_public)
        project.updated_at = self._now()
        self.repo.commit()
        logger.info("Project %s is now %s", project_id, "public" if is_public else "private")
        return self._reload(project_id)

    def delete_project(self, project_id: str, user_id: str) -> DeleteProjectResponse:
        self.access.require_owner(project_id, user_id)
        project = self.repo.get_project(project_id)
        self.repo.delete_project(project)
        self.repo.commit()
        logger.info("Deleted project %s", project_id)
        return DeleteProjectResponse(deletedProjectId=project_id)

    def touch(self, project_id: str) -> None:
        """Bump ``updatedAt`` after a change to something the project owns."""
        project = self.repo.get_project(project_id)
        if project is not None:
            project.updated_at = self._now()
