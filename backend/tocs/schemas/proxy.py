from typing import Any

from pydantic import BaseModel, Field

from tocs.schemas.endpoints import HttpMethod


class ProxyRequest(BaseModel):
    url: str = Field(min_length=1)
    method: HttpMethod = "GET"
    headers: dict[str, str] = {}
    params: dict[str, str] = {}
    body: Any = None
    projectId: str | None = None
    endpointId: str | None = None


class ExecuteEndpointRequest(BaseModel):
    serverUrl: str | None = None
    serverName: str | None = None
    headers: dict[str, str] = {}
    params: dict[str, str] = {}
    pathParams: dict[str, str] = {}
    body: Any = None
    # Merged over the project's variables for this call only.
    variables: dict[str, str] = {}


class ProxyResultOut(BaseModel):
    status: int
    statusText: str
    headers: dict[str, str]
    body: Any
    size: int
    responseTime: int
    url: str
    historyId: str | None = None
