from sqlalchemy import select

from tocs.db.models.variable import Variable
from tocs.db.repositories.base_repo import BaseRepository


class VariableRepository(BaseRepository):
    def list_variables(self, project_id: str) -> list[Variable]:
        stmt = select(Variable).where(Variable.project_id == project_id).order_by(Variable.key.asc())
        return list(self.db.scalars(stmt).all())

    def get_variable(self, project_id: str, variable_id: str) -> Variable | None:
        stmt = select(Variable).where(Variable.id == variable_id, Variable.project_id == project_id)
        return self.db.scalars(stmt).first()

    def create_variable(self, variable: Variable) -> Variable:
        return self._add(variable)

    def delete_variable(self, variable: Variable) -> None:
        self.db.delete(variable)
