from typing import Any

from sqlalchemy.orm import Session

from tocs.db.repositories.endpoint_repo import EndpointRepository
from tocs.db.repositories.folder_repo import FolderRepository
from tocs.services.access import ProjectAccess
from tocs.services.openapi_export import build_openapi_document
from tocs.services.postman_export import build_postman_collection


class ExportService:
    def __init__(self, db: Session):
        self.folders = FolderRepository(db)
        self.endpoints = EndpointRepository(db)
        self.access = ProjectAccess(db)

    def _export(self, project_id: str, user_id: str | None, builder) -> tuple[str, dict[str, Any]]:
        project = self.access.require_readable(project_id, user_id)
        folders = self.folders.list_folders(project_id)
        endpoints = self.endpoints.list_endpoints(project_id)
        return project.name, builder(project, folders, endpoints)

    def export_openapi(self, project_id: str, user_id: str | None) -> tuple[str, dict[str, Any]]:
        """Returns the download filename and the OpenAPI document."""
        name, document = self._export(project_id, user_id, build_openapi_document)
        return f"{name}-openapi.json", document

    def export_postman(self, project_id: str, user_id: str | None) -> tuple[str, dict[str, Any]]:
        name, document = self._export(project_id, user_id, build_postman_collection)
        return f"{name}-postman.json", document
