from pydantic import BaseModel, Field

from tocs.schemas.common import Name, OrderEntry


class EndpointSummaryOut(BaseModel):
    id: str
    name: str
    type: str
    method: str | None
    path: str
    folderId: str | None
    order: int


class FolderChildOut(BaseModel):
    id: str
    name: str
    parentId: str | None
    order: int


class FolderOut(BaseModel):
    id: str
    projectId: str
    parentId: str | None
    name: str
    description: str | None
    order: int
    createdAt: str
    updatedAt: str
    children: list[FolderChildOut] = []
    endpoints: list[EndpointSummaryOut] = []


class GetFoldersResponse(BaseModel):
    folders: list[FolderOut]


class FolderResponse(BaseModel):
    folder: FolderOut


class CreateFolderRequest(BaseModel):
    name: Name
    description: str | None = None
    parentId: str | None = None


class UpdateFolderRequest(BaseModel):
    name: Name | None = None
    description: str | None = None
    # An explicit null moves the folder to the project root.
    parentId: str | None = None


class DeleteFolderResponse(BaseModel):
    deletedFolderId: str
    deletedEndpointIds: list[str]


class ReorderFoldersRequest(BaseModel):
    folders: list[OrderEntry]
