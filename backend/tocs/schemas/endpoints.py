from typing import Any, Literal

from pydantic import BaseModel, Field

from tocs.schemas.common import AliasedModel, Name, OrderEntry

EndpointType = Literal["HTTP", "GRAPHQL", "WEBSOCKET", "SOCKETIO", "GRPC", "STOMP", "MQTT", "SSE", "OVERVIEW"]
HttpMethod = Literal["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]
ParameterType = Literal["STRING", "INTEGER", "NUMBER", "BOOLEAN", "ARRAY", "OBJECT"]
ParameterLocation = Literal["QUERY", "PATH", "HEADER", "COOKIE"]


class HeaderIn(BaseModel):
    key: str = Field(min_length=1)
    value: str | None = None
    description: str | None = None
    required: bool = False


class HeaderOut(HeaderIn):
    id: str
    endpointId: str


class ParameterIn(BaseModel):
    name: str = Field(min_length=1)
    type: ParameterType = "STRING"
    location: ParameterLocation = "QUERY"
    required: bool = False
    description: str | None = None
    defaultValue: str | None = None
    example: str | None = None


class ParameterOut(ParameterIn):
    id: str
    endpointId: str


class BodyIn(AliasedModel):
    contentType: str = Field(min_length=1)
    schema_text: str | None = Field(None, alias="schema")
    example: str | None = None
    description: str | None = None


class BodyOut(BodyIn):
    id: str
    endpointId: str


class ResponseIn(AliasedModel):
    statusCode: int = Field(ge=100, le=599)
    description: str | None = None
    contentType: str | None = None
    schema_text: str | None = Field(None, alias="schema")
    example: str | None = None


class ResponseOut(ResponseIn):
    id: str
    endpointId: str


class FolderRefOut(BaseModel):
    id: str
    name: str


class EndpointOut(BaseModel):
    id: str
    projectId: str
    folderId: str | None
    folder: FolderRefOut | None = None
    name: str
    description: str | None
    type: EndpointType
    method: HttpMethod | None
    path: str
    query: str | None = None
    variables: Any = None
    wsUrl: str | None = None
    wsProtocol: str | None = None
    protoFile: str | None = None
    serviceName: str | None = None
    methodName: str | None = None
    order: int
    createdAt: str
    updatedAt: str
    headers: list[HeaderOut] = []
    parameters: list[ParameterOut] = []
    body: BodyOut | None = None
    responses: list[ResponseOut] = []


class GetEndpointsResponse(BaseModel):
    endpoints: list[EndpointOut]


class EndpointDetailResponse(BaseModel):
    endpoint: EndpointOut


class CreateEndpointRequest(BaseModel):
    name: Name
    description: str | None = None
    type: EndpointType = "HTTP"
    method: HttpMethod | None = None
    path: str = Field(min_length=1)
    folderId: str | None = None
    query: str | None = None
    variables: Any = None
    wsUrl: str | None = None
    wsProtocol: str | None = None
    protoFile: str | None = None
    serviceName: str | None = None
    methodName: str | None = None


class UpdateEndpointRequest(BaseModel):
    name: Name | None = None
    description: str | None = None
    type: EndpointType | None = None
    method: HttpMethod | None = None
    path: str | None = Field(None, min_length=1)
    query: str | None = None
    variables: Any = None
    wsUrl: str | None = None
    wsProtocol: str | None = None
    protoFile: str | None = None
    serviceName: str | None = None
    methodName: str | None = None
    # An explicit null moves the endpoint to the project root.
    folderId: str | None = None


class DeleteEndpointResponse(BaseModel):
    deletedEndpointId: str


class ReorderEndpointsRequest(BaseModel):
    endpoints: list[OrderEntry]


class ReplaceHeadersRequest(BaseModel):
    headers: list[HeaderIn]


class ReplaceParametersRequest(BaseModel):
    parameters: list[ParameterIn]


class ReplaceResponsesRequest(BaseModel):
    responses: list[ResponseIn]
