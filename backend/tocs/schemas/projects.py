from typing import Literal

from pydantic import BaseModel, Field

from tocs.schemas.common import Name

MemberRole = Literal["OWNER", "EDITOR", "VIEWER"]


class ServerEntry(BaseModel):
    name: str
    url: str


class MemberUserOut(BaseModel):
    id: str
    name: str
    email: str
    image: str | None = None


class ProjectMemberOut(BaseModel):
    id: str
    projectId: str
    userId: str
    role: MemberRole
    user: MemberUserOut


class ProjectOut(BaseModel):
    id: str
    name: str
    slug: str
    description: str | None
    isPublic: bool
    servers: list[ServerEntry]
    createdAt: str
    updatedAt: str
    members: list[ProjectMemberOut]


class GetProjectsResponse(BaseModel):
    projects: list[ProjectOut]


class ProjectResponse(BaseModel):
    project: ProjectOut


class CreateProjectRequest(BaseModel):
    name: Name
    description: str | None = None
    isPublic: bool = False
    servers: list[ServerEntry] | None = None


class UpdateProjectRequest(BaseModel):
    name: Name | None = None
    description: str | None = None
    isPublic: bool | None = None
    servers: list[ServerEntry] | None = None


class UpdateVisibilityRequest(BaseModel):
    isPublic: bool


class DeleteProjectResponse(BaseModel):
    deletedProjectId: str


class InviteMemberRequest(BaseModel):
    email: str = Field(min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")
    role: MemberRole = "VIEWER"


class UpdateMemberRequest(BaseModel):
    role: MemberRole


class MemberResponse(BaseModel):
    member: ProjectMemberOut


class DeleteMemberResponse(BaseModel):
    deletedMemberId: str
