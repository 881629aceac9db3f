from typing import Any

from pydantic import BaseModel, Field


class HistoryEndpointOut(BaseModel):
    id: str
    name: str
    method: str | None
    path: str


class HistoryUserOut(BaseModel):
    id: str
    name: str
    email: str


class HistorySummaryOut(BaseModel):
    id: str
    endpointId: str
    endpoint: HistoryEndpointOut
    method: str
    url: str
    status: int
    statusText: str
    responseTime: int
    createdAt: str


class HistoryOut(HistorySummaryOut):
    userId: str | None
    user: HistoryUserOut | None = None
    headers: dict[str, Any] | None = None
    params: dict[str, Any] | None = None
    body: str | None = None
    variables: dict[str, Any] | None = None
    responseSize: int
    responseHeaders: dict[str, Any] | None = None
    responseBody: str | None = None


class GetProjectHistoriesResponse(BaseModel):
    histories: list[HistorySummaryOut]


class GetEndpointHistoriesResponse(BaseModel):
    histories: list[HistoryOut]


class HistoryResponse(BaseModel):
    history: HistoryOut


class CreateHistoryRequest(BaseModel):
    method: str = Field(min_length=1)
    url: str = Field(min_length=1)
    headers: dict[str, Any] | None = None
    params: dict[str, Any] | None = None
    body: str | None = None
    variables: dict[str, Any] | None = None
    status: int = Field(ge=0, le=599)
    statusText: str = ""
    responseTime: int = Field(0, ge=0)
    responseSize: int = Field(0, ge=0)
    responseHeaders: dict[str, Any] | None = None
    responseBody: str | None = None
