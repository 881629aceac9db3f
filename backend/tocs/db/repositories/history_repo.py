from sqlalchemy import select
from sqlalchemy.orm import selectinload

from tocs.db.models.endpoint import Endpoint
from tocs.db.models.history import History
from tocs.db.repositories.base_repo import BaseRepository


class HistoryRepository(BaseRepository):
    def list_for_project(self, project_id: str, *, limit: int) -> list[History]:
        stmt = (
            select(History)
            .join(Endpoint, Endpoint.id == History.endpoint_id)
            .where(Endpoint.project_id == project_id)
            .options(selectinload(History.endpoint))
            .order_by(History.created_at.desc())
            .limit(limit)
        )
        return list(self.db.scalars(stmt).all())

    def list_for_endpoint(self, endpoint_id: str, *, limit: int) -> list[History]:
        stmt = (
            select(History)
            .where(History.endpoint_id == endpoint_id)
            .options(selectinload(History.endpoint), selectinload(History.user))
            .order_by(History.created_at.desc())
            .limit(limit)
        )
        return list(self.db.scalars(stmt).all())

    def create_history(self, history: History) -> History:
        return self._add(history)
