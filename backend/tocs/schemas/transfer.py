from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from tocs.schemas.folders import EndpointSummaryOut, FolderChildOut


class ImportOpenAPIRequest(BaseModel):
    spec: dict[str, Any] | str | None = None
    url: str | None = None

    @model_validator(mode="after")
    def _require_source(self) -> "ImportOpenAPIRequest":
        if self.spec is None and not self.url:
            raise ValueError("Provide either an OpenAPI document or a URL to fetch it from")
        return self


class ImportResultOut(BaseModel):
    foldersCreated: int
    endpointsCreated: int
    folders: list[FolderChildOut]
    endpoints: list[EndpointSummaryOut]


class DiscoverRequest(BaseModel):
    serverUrl: str = Field(min_length=1)


class DiscoveredDocumentOut(BaseModel):
    url: str
    path: str
    format: Literal["OpenAPI", "Swagger"]


class DiscoverResponse(BaseModel):
    documents: list[DiscoveredDocumentOut]
