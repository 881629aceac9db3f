from sqlalchemy import delete, func, select
from sqlalchemy.orm import selectinload

from tocs.db.models.endpoint import (
    Endpoint,
    EndpointBody,
    EndpointHeader,
    EndpointParameter,
    EndpointResponse,
)
from tocs.db.models.folder import Folder
from tocs.db.repositories.base_repo import BaseRepository

_DETAIL_OPTIONS = (
    selectinload(Endpoint.headers),
    selectinload(Endpoint.parameters),
    selectinload(Endpoint.body),
    selectinload(Endpoint.responses),
    selectinload(Endpoint.folder),
)


class EndpointRepository(BaseRepository):
    def list_endpoints(self, project_id: str) -> list[Endpoint]:
        """Folderless endpoints first, then by folder order, then by endpoint order."""
        stmt = (
            select(Endpoint)
            .outerjoin(Folder, Folder.id == Endpoint.folder_id)
            .where(Endpoint.project_id == project_id)
            .options(*_DETAIL_OPTIONS)
            .order_by(
                Folder.sort_order.asc().nulls_first(),
                Endpoint.sort_order.asc(),
                Endpoint.created_at.asc(),
            )
        )
        return list(self.db.scalars(stmt).all())

    def list_endpoint_ids_in_folders(self, folder_ids: list[str]) -> list[str]:
        if not folder_ids:
            return []
        stmt = select(Endpoint.id).where(Endpoint.folder_id.in_(folder_ids))
        return list(self.db.scalars(stmt).all())

    def get_endpoint(self, project_id: str, endpoint_id: str) -> Endpoint | None:
        stmt = (
            select(Endpoint)
            .where(Endpoint.id == endpoint_id, Endpoint.project_id == project_id)
            .options(*_DETAIL_OPTIONS)
            .execution_options(populate_existing=True)
        )
        return self.db.scalars(stmt).first()

    def create_endpoint(self, endpoint: Endpoint) -> Endpoint:
        return self._add(endpoint)

    def delete_endpoint(self, endpoint: Endpoint) -> None:
        self.db.delete(endpoint)

    def get_next_sort_order(self, project_id: str, folder_id: str | None) -> int:
        stmt = select(func.max(Endpoint.sort_order))
        if folder_id is None:
            stmt = stmt.where(Endpoint.project_id == project_id, Endpoint.folder_id.is_(None))
        else:
            stmt = stmt.where(Endpoint.folder_id == folder_id)
        current = self.db.scalar(stmt)
        return int(current) + 1 if current is not None else 0

    def set_endpoint_order(self, project_id: str, orders: list[tuple[str, int]]) -> None:
        for endpoint_id, order in orders:
            endpoint = self.db.get(Endpoint, endpoint_id)
            if endpoint is None or endpoint.project_id != project_id:
                raise ValueError(f"Endpoint not found: {endpoint_id}")
            endpoint.sort_order = order

    def replace_headers(self, endpoint: Endpoint, headers: list[EndpointHeader]) -> None:
        self.db.execute(delete(EndpointHeader).where(EndpointHeader.endpoint_id == endpoint.id))
        self.db.add_all(headers)
        self.db.flush()
        self.db.expire(endpoint, ["headers"])

    def replace_parameters(self, endpoint: Endpoint, parameters: list[EndpointParameter]) -> None:
        self.db.execute(delete(EndpointParameter).where(EndpointParameter.endpoint_id == endpoint.id))
        self.db.add_all(parameters)
        self.db.flush()
        self.db.expire(endpoint, ["parameters"])

    def replace_responses(self, endpoint: Endpoint, responses: list[EndpointResponse]) -> None:
        self.db.execute(delete(EndpointResponse).where(EndpointResponse.endpoint_id == endpoint.id))
        self.db.add_all(responses)
        self.db.flush()
        self.db.expire(endpoint, ["responses"])

    def get_body(self, endpoint_id: str) -> EndpointBody | None:
        stmt = select(EndpointBody).where(EndpointBody.endpoint_id == endpoint_id)
        return self.db.scalars(stmt).first()

    def add_body(self, body: EndpointBody) -> EndpointBody:
        return self._add(body)
