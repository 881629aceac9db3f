from sqlalchemy.orm import Session

from tocs.db.models.variable import Variable
from tocs.db.repositories.variable_repo import VariableRepository
from tocs.middleware.error_handler import NotFoundError
from tocs.schemas.variables import (
    CreateVariableRequest,
    DeleteVariableResponse,
    GetVariablesResponse,
    UpdateVariableRequest,
    VariableResponse,
)
from tocs.services.access import ProjectAccess
from tocs.utils.ids import generate_id
from tocs.utils.mappers import variable_out
from tocs.utils.time import utc_now_iso


class VariableService:
    def __init__(self, db: Session):
        self.repo = VariableRepository(db)
        self.access = ProjectAccess(db)

    def _require_variable(self, project_id: str, variable_id: str) -> Variable:
        variable = self.repo.get_variable(project_id, variable_id)
        if variable is None:
            raise NotFoundError("Variable not found")
        return variable

    def values_for(self, project_id: str) -> dict[str, str]:
        """Key -> value map used for ``{{key}}`` interpolation."""
        values: dict[str, str] = {}
        for variable in self.repo.list_variables(project_id):
            values.setdefault(variable.key, variable.value)
        return values

    def get_variables(self, project_id: str, user_id: str | None) -> GetVariablesResponse:
        self.access.require_readable(project_id, user_id)
        return GetVariablesResponse(variables=[variable_out(v) for v in self.repo.list_variables(project_id)])

    def get_variable(self, project_id: str, variable_id: str, user_id: str | None) -> VariableResponse:
        self.access.require_readable(project_id, user_id)
        return VariableResponse(variable=variable_out(self._require_variable(project_id, variable_id)))

    def create_variable(self, project_id: str, user_id: str, request: CreateVariableRequest) -> VariableResponse:
        self.access.require_editor(project_id, user_id)
        now = utc_now_iso()
        variable = self.repo.create_variable(
            Variable(
                id=generate_id("var"),
                project_id=project_id,
                key=request.key.strip(),
                value=request.value,
                created_at=now,
                updated_at=now,
            )
        )
        self.repo.commit()
        return VariableResponse(variable=variable_out(variable))

    def update_variable(
        self, project_id: str, variable_id: str, user_id: str, request: UpdateVariableRequest
    ) -> VariableResponse:
        self.access.require_editor(project_id, user_id)
        variable = self._require_variable(project_id, variable_id)
        if request.key is not None:
            variable.key = request.key.strip()
        if request.value is not None:
            variable.value = request.value
        variable.updated_at = utc_now_iso()
        self.repo.commit()
        return VariableResponse(variable=variable_out(variable))

    def delete_variable(self, project_id: str, variable_id: str, user_id: str) -> DeleteVariableResponse:
        self.access.require_editor(project_id, user_id)
        variable = self._require_variable(project_id, variable_id)
        self.repo.delete_variable(variable)
        self.repo.commit()
        return DeleteVariableResponse(deletedVariableId=variable_id)
