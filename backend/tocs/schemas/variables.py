from pydantic import BaseModel, Field

from tocs.schemas.common import Name


class VariableOut(BaseModel):
    id: str
    projectId: str
    key: str
    value: str
    createdAt: str
    updatedAt: str


class GetVariablesResponse(BaseModel):
    variables: list[VariableOut]


class VariableResponse(BaseModel):
    variable: VariableOut


class CreateVariableRequest(BaseModel):
    key: Name
    value: str


class UpdateVariableRequest(BaseModel):
    key: Name | None = None
    value: str | None = None


class DeleteVariableResponse(BaseModel):
    deletedVariableId: str
