from typing import Any

from sqlalchemy.orm import Session

from tocs.config.settings import get_settings
from tocs.db.models.history import History
from tocs.db.repositories.endpoint_repo import EndpointRepository
from tocs.db.repositories.history_repo import HistoryRepository
from tocs.middleware.error_handler import NotFoundError
from tocs.schemas.histories import (
    CreateHistoryRequest,
    GetEndpointHistoriesResponse,
    GetProjectHistoriesResponse,
    HistoryResponse,
)
from tocs.services.access import ProjectAccess
from tocs.utils.ids import generate_id
from tocs.utils.json_helpers import dumps_or_none
from tocs.utils.mappers import history_out, history_summary_out
from tocs.utils.time import utc_now_iso


class HistoryService:
    def __init__(self, db: Session):
        self.repo = HistoryRepository(db)
        self.endpoints = EndpointRepository(db)
        self.access = ProjectAccess(db)

    def _require_endpoint(self, project_id: str, endpoint_id: str) -> None:
        if self.endpoints.get_endpoint(project_id, endpoint_id) is None:
            raise NotFoundError("Endpoint not found")

    def get_project_histories(self, project_id: str, user_id: str) -> GetProjectHistoriesResponse:
        self.access.require_member(project_id, user_id)
        rows = self.repo.list_for_project(project_id, limit=get_settings().project_history_limit)
        return GetProjectHistoriesResponse(histories=[history_summary_out(row) for row in rows])

    def get_endpoint_histories(self, project_id: str, endpoint_id: str, user_id: str) -> GetEndpointHistoriesResponse:
        self.access.require_member(project_id, user_id)
        self._require_endpoint(project_id, endpoint_id)
        rows = self.repo.list_for_endpoint(endpoint_id, limit=get_settings().endpoint_history_limit)
        return GetEndpointHistoriesResponse(histories=[history_out(row) for row in rows])

    def create_history(
        self, project_id: str, endpoint_id: str, user_id: str, request: CreateHistoryRequest
    ) -> HistoryResponse:
        self.access.require_member(project_id, user_id)
        self._require_endpoint(project_id, endpoint_id)
        history = self.record(
            endpoint_id=endpoint_id,
            user_id=user_id,
            method=request.method,
            url=request.url,
            headers=request.headers,
            params=request.params,
            body=request.body,
            variables=request.variables,
            status=request.status,
            status_text=request.statusText,
            response_time=request.responseTime,
            response_size=request.responseSize,
            response_headers=request.responseHeaders,
            response_body=request.responseBody,
        )
        self.repo.commit()
        return HistoryResponse(history=history_out(history))

    def record(
        self,
        *,
        endpoint_id: str,
        user_id: str | None,
        method: str,
        url: str,
        headers: dict[str, Any] | None,
        params: dict[str, Any] | None,
        body: str | None,
        variables: dict[str, Any] | None,
        status: int,
        status_text: str,
        response_time: int,
        response_size: int,
        response_headers: dict[str, Any] | None,
        response_body: str | None,
    ) -> History:
        """Add a history row to the session without committing."""
        return self.repo.create_history(
            History(
                id=generate_id("hist"),
                endpoint_id=endpoint_id,
                user_id=user_id,
                method=method.upper(),
                url=url,
                headers_json=dumps_or_none(headers),
                params_json=dumps_or_none(params),
                body=body,
                variables_json=dumps_or_none(variables),
                status=status,
                status_text=status_text,
                response_time=response_time,
                response_size=response_size,
                response_headers_json=dumps_or_none(response_headers),
                response_body=response_body,
                created_at=utc_now_iso(),
            )
        )
