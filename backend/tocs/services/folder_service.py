from sqlalchemy.orm import Session

from tocs.db.models.folder import Folder
from tocs.db.repositories.endpoint_repo import EndpointRepository
from tocs.db.repositories.folder_repo import FolderRepository
from tocs.middleware.error_handler import NotFoundError
from tocs.schemas.common import OrderEntry
from tocs.schemas.folders import (
    CreateFolderRequest,
    DeleteFolderResponse,
    FolderResponse,
    GetFoldersResponse,
    UpdateFolderRequest,
)
from tocs.services.access import ProjectAccess
from tocs.services.project_service import ProjectService
from tocs.utils.ids import generate_id
from tocs.utils.mappers import folder_out
from tocs.utils.time import utc_now_iso


class FolderService:
    def __init__(self, db: Session):
        self.repo = FolderRepository(db)
        self.endpoints = EndpointRepository(db)
        self.access = ProjectAccess(db)
        self.projects = ProjectService(db)

    def _require_folder(self, project_id: str, folder_id: str) -> Folder:
        folder = self.repo.get_folder(project_id, folder_id)
        if folder is None:
            raise NotFoundError("Folder not found")
        return folder

    def _require_parent(self, project_id: str, parent_id: str) -> Folder:
        parent = self.repo.get_folder(project_id, parent_id)
        if parent is None:
            raise ValueError("Parent folder not found in this project")
        return parent

    def get_folders(self, project_id: str, user_id: str | None) -> GetFoldersResponse:
        self.access.require_readable(project_id, user_id)
        return GetFoldersResponse(folders=[folder_out(folder) for folder in self.repo.list_folders(project_id)])

    def get_folder(self, project_id: str, folder_id: str, user_id: str | None) -> FolderResponse:
        self.access.require_readable(project_id, user_id)
        return FolderResponse(folder=folder_out(self._require_folder(project_id, folder_id)))

    def create_folder(self, project_id: str, user_id: str, request: CreateFolderRequest) -> FolderResponse:
        self.access.require_editor(project_id, user_id)
        if request.parentId is not None:
            self._require_parent(project_id, request.parentId)
        now = utc_now_iso()
        folder = self.repo.create_folder(
            Folder(
                id=generate_id("fold"),
                project_id=project_id,
                parent_id=request.parentId,
                name=request.name.strip(),
                description=request.description,
                sort_order=self.repo.get_next_sort_order(project_id, request.parentId),
                created_at=now,
                updated_at=now,
            )
        )
        self.projects.touch(project_id)
        self.repo.commit()
        return FolderResponse(folder=folder_out(folder))

    def update_folder(
        self, project_id: str, folder_id: str, user_id: str, request: UpdateFolderRequest
    ) -> FolderResponse:
        self.access.require_editor(project_id, user_id)
        folder = self._require_folder(project_id, folder_id)
        fields = request.model_fields_set
        if request.name is not None:
            folder.name = request.name.strip()
        if "description" in fields:
            folder.description = request.description
        if "parentId" in fields:
            parent_id = request.parentId
            if parent_id is not None:
                self._require_parent(project_id, parent_id)
                if parent_id == folder.id or parent_id in self.repo.list_descendant_ids(project_id, folder.id):
                    raise ValueError("A folder cannot be moved into itself or one of its subfolders")
            folder.parent_id = parent_id
        folder.updated_at = utc_now_iso()
        self.projects.touch(project_id)
        self.repo.commit()
        return FolderResponse(folder=folder_out(folder))

    def delete_folder(self, project_id: str, folder_id: str, user_id: str) -> DeleteFolderResponse:
        """Delete a folder together with its subfolders and every endpoint inside them."""
        self.access.require_editor(project_id, user_id)
        folder = self._require_folder(project_id, folder_id)
        folder_ids = [folder.id, *self.repo.list_descendant_ids(project_id, folder.id)]
        endpoint_ids = self.endpoints.list_endpoint_ids_in_folders(folder_ids)
        self.repo.delete_folder(folder)
        self.projects.touch(project_id)
        self.repo.commit()
        return DeleteFolderResponse(deletedFolderId=folder_id, deletedEndpointIds=endpoint_ids)

    def reorder_folders(self, project_id: str, user_id: str, entries: list[OrderEntry]) -> GetFoldersResponse:
        self.access.require_editor(project_id, user_id)
        self.repo.set_folder_order(project_id, [(entry.id, entry.order) for entry in entries])
        self.repo.commit()
        return GetFoldersResponse(folders=[folder_out(folder) for folder in self.repo.list_folders(project_id)])
