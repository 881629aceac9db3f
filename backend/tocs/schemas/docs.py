from pydantic import BaseModel

from tocs.schemas.endpoints import EndpointOut
from tocs.schemas.folders import FolderOut
from tocs.schemas.projects import ServerEntry
from tocs.schemas.schema_defs import SchemaOut


class PublicProjectOut(BaseModel):
    id: str
    name: str
    slug: str
    description: str | None
    servers: list[ServerEntry]
    updatedAt: str


class PublicDocsResponse(BaseModel):
    project: PublicProjectOut
    folders: list[FolderOut]
    endpoints: list[EndpointOut]
    schemas: list[SchemaOut]
