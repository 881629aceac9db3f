from sqlalchemy.orm import Session

from tocs.db.repositories.endpoint_repo import EndpointRepository
from tocs.db.repositories.folder_repo import FolderRepository
from tocs.db.repositories.project_repo import ProjectRepository
from tocs.db.repositories.schema_repo import SchemaRepository
from tocs.middleware.error_handler import NotFoundError
from tocs.schemas.docs import PublicDocsResponse, PublicProjectOut
from tocs.utils.mappers import endpoint_out, folder_out, project_servers, schema_out


class DocsService:
    """Read-only documentation bundle for public projects. No session required."""

    def __init__(self, db: Session):
        self.projects = ProjectRepository(db)
        self.folders = FolderRepository(db)
        self.endpoints = EndpointRepository(db)
        self.schemas = SchemaRepository(db)

    def get_public_docs(self, project_id: str) -> PublicDocsResponse:
        project = self.projects.get_visible_project(project_id, None)
        if project is None:
            raise NotFoundError("Project not found")
        return PublicDocsResponse(
            project=PublicProjectOut(
                id=project.id,
                name=project.name,
                slug=project.slug,
                description=project.description,
                servers=project_servers(project),
                updatedAt=project.updated_at,
            ),
            folders=[folder_out(folder) for folder in self.folders.list_folders(project_id)],
            endpoints=[endpoint_out(endpoint) for endpoint in self.endpoints.list_endpoints(project_id)],
            schemas=[schema_out(schema) for schema in self.schemas.list_schemas(project_id)],
        )
