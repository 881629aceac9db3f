"""Outbound test calls: the generic proxy and stored-endpoint execution."""

from __future__ import annotations

import json
import logging
import re
import time
from dataclasses import dataclass
from typing import Any

import httpx
from sqlalchemy.orm import Session

from tocs.config.settings import get_settings
from tocs.db.models.endpoint import Endpoint
from tocs.db.models.project import Project
from tocs.db.repositories.endpoint_repo import EndpointRepository
from tocs.middleware.error_handler import NotFoundError, RequestFailedError
from tocs.schemas.proxy import ExecuteEndpointRequest, ProxyRequest, ProxyResultOut
from tocs.services.access import ProjectAccess
from tocs.services.history_service import HistoryService
from tocs.services.variable_service import VariableService
from tocs.utils.json_helpers import parse_json_or_text
from tocs.utils.mappers import project_servers
from tocs.utils.variables import interpolate_value, interpolate_variables

logger = logging.getLogger(__name__)

EXECUTABLE_TYPES = ("HTTP", "GRAPHQL")
_BODYLESS_METHODS = ("GET", "HEAD")
_PATH_SEGMENT = re.compile(r"\{([^{}]+)\}")


def _default_transport() -> httpx.BaseTransport | None:
    """Transport for outbound calls; ``None`` lets httpx use the network."""
    return None


def build_client(timeout: float) -> httpx.Client:
    return httpx.Client(timeout=timeout, transport=_default_transport(), follow_redirects=True)


@dataclass
class OutboundResult:
    status: int
    status_text: str
    headers: dict[str, str]
    text: str
    size: int
    response_time: int
    url: str

    @property
    def body(self) -> Any:
        return parse_json_or_text(self.text) if self.text else self.text


def _body_text(body: Any) -> str | None:
    if body is None:
        return None
    return body if isinstance(body, str) else json.dumps(body)


def send_request(
    method: str,
    url: str,
    *,
    headers: dict[str, str] | None = None,
    params: dict[str, str] | None = None,
    body: Any = None,
    timeout: float | None = None,
) -> OutboundResult:
    """Perform one HTTP call and time it. Transport failures raise RequestFailedError."""
    method = method.upper()
    request_kwargs: dict[str, Any] = {"headers": headers or {}, "params": params or {}}
    if body is not None and method not in _BODYLESS_METHODS:
        if isinstance(body, (str, bytes)):
            request_kwargs["content"] = body
        else:
            request_kwargs["json"] = body

    started = time.perf_counter()
    try:
        with build_client(timeout or get_settings().proxy_timeout_seconds) as client:
            response = client.request(method, url, **request_kwargs)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("Outbound %s %s failed: %s", method, url, exc)
        raise RequestFailedError(str(exc) or "Request failed") from exc
    elapsed_ms = int((time.perf_counter() - started) * 1000)

    logger.info("Outbound %s %s -> %s in %dms", method, url, response.status_code, elapsed_ms)
    return OutboundResult(
        status=response.status_code,
        status_text=response.reason_phrase,
        headers=dict(response.headers.items()),
        text=response.text,
        size=len(response.content),
        response_time=elapsed_ms,
        url=str(response.request.url),
    )


def join_url(server_url: str, path: str) -> str:
    if path.startswith(("http://", "https://")) or not server_url:
        return path
    if not path:
        return server_url
    return f"{server_url.rstrip('/')}/{path.lstrip('/')}"


class RequestExecutor:
    def __init__(self, db: Session):
        self.access = ProjectAccess(db)
        self.endpoints = EndpointRepository(db)
        self.histories = HistoryService(db)
        self.variables = VariableService(db)

    def _record(
        self,
        endpoint_id: str,
        user_id: str,
        *,
        method: str,
        headers: dict[str, str],
        params: dict[str, str],
        body: Any,
        variables: dict[str, str],
        result: OutboundResult,
    ) -> str:
        history = self.histories.record(
            endpoint_id=endpoint_id,
            user_id=user_id,
            method=method,
            url=result.url,
            headers=headers,
            params=params,
            body=_body_text(body),
            variables=variables or None,
            status=result.status,
            status_text=result.status_text,
            response_time=result.response_time,
            response_size=result.size,
            response_headers=result.headers,
            response_body=result.text,
        )
        self.histories.repo.commit()
        return history.id

    @staticmethod
    def _out(result: OutboundResult, history_id: str | None) -> ProxyResultOut:
        return ProxyResultOut(
            status=result.status,
            statusText=result.status_text,
            headers=result.headers,
            body=result.body,
            size=result.size,
            responseTime=result.response_time,
            url=result.url,
            historyId=history_id,
        )

    def proxy(self, user_id: str, request: ProxyRequest) -> ProxyResultOut:
        """Forward an ad-hoc request, substituting project variables when a project is given.

        The call is recorded as history only when it names an endpoint of a
        project the caller belongs to.
        """
        variables: dict[str, str] = {}
        record_for: str | None = None
        if request.projectId:
            self.access.require_readable(request.projectId, user_id)
            variables = self.variables.values_for(request.projectId)
            if request.endpointId:
                if self.endpoints.get_endpoint(request.projectId, request.endpointId) is None:
                    raise NotFoundError("Endpoint not found")
                if self.access.repo.get_member(request.projectId, user_id) is not None:
                    record_for = request.endpointId
        elif request.endpointId:
            raise ValueError("projectId is required when endpointId is given")

        url = interpolate_variables(request.url, variables)
        headers = interpolate_value(request.headers, variables)
        params = interpolate_value(request.params, variables)
        body = interpolate_value(request.body, variables)
        result = send_request(request.method, url, headers=headers, params=params, body=body)

        history_id = None
        if record_for is not None:
            history_id = self._record(
                record_for,
                user_id,
                method=request.method,
                headers=headers,
                params=params,
                body=body,
                variables=variables,
                result=result,
            )
        return self._out(result, history_id)

    @staticmethod
    def _server_url(project: Project, request: ExecuteEndpointRequest) -> str:
        if request.serverUrl:
            return request.serverUrl
        servers = project_servers(project)
        if request.serverName:
            for server in servers:
                if server.name == request.serverName:
                    return server.url
            raise ValueError(f"Unknown server: {request.serverName}")
        return servers[0].url if servers else get_settings().default_server_url

    @staticmethod
    def _fill_path(path: str, values: dict[str, str]) -> str:
        return _PATH_SEGMENT.sub(lambda m: values.get(m.group(1), m.group(0)), path)

    @staticmethod
    def _defaults(endpoint: Endpoint, location: str) -> dict[str, str]:
        return {
            param.name: param.default_value
            for param in endpoint.parameters
            if param.location == location and param.default_value is not None
        }

    def _build(self, endpoint: Endpoint, project: Project, request: ExecuteEndpointRequest) -> dict[str, Any]:
        path_values = {**self._defaults(endpoint, "PATH"), **request.pathParams}
        url = join_url(self._server_url(project, request), self._fill_path(endpoint.path, path_values))
        headers = {header.key: header.value or "" for header in endpoint.headers}
        headers.update(self._defaults(endpoint, "HEADER"))
        params = self._defaults(endpoint, "QUERY")

        if endpoint.type == "GRAPHQL":
            method = "POST"
            variables = parse_json_or_text(endpoint.variables_json)
            body = request.body
            if body is None:
                body = {"query": endpoint.query or "", "variables": variables or {}}
            headers.setdefault("Content-Type", "application/json")
        else:
            method = endpoint.method or "GET"
            body = request.body
            stored = endpoint.body
            if body is None and stored is not None and stored.example:
                body = parse_json_or_text(stored.example)
            if stored is not None and body is not None:
                headers.setdefault("Content-Type", stored.content_type)

        headers.update(request.headers)
        params.update(request.params)
        return {"method": method, "url": url, "headers": headers, "params": params, "body": body}

    def execute(
        self, project_id: str, endpoint_id: str, user_id: str, request: ExecuteEndpointRequest
    ) -> ProxyResultOut:
        """Run a stored HTTP or GraphQL endpoint and record the call."""
        self.access.require_member(project_id, user_id)
        project = self.access.repo.get_project(project_id)
        endpoint = self.endpoints.get_endpoint(project_id, endpoint_id)
        if endpoint is None:
            raise NotFoundError("Endpoint not found")
        if endpoint.type not in EXECUTABLE_TYPES:
            raise ValueError(f"{endpoint.type} endpoints cannot be executed by the server")

        variables = {**self.variables.values_for(project_id), **request.variables}
        call = interpolate_value(self._build(endpoint, project, request), variables)
        result = send_request(
            call["method"], call["url"], headers=call["headers"], params=call["params"], body=call["body"]
        )
        history_id = self._record(
            endpoint.id,
            user_id,
            method=call["method"],
            headers=call["headers"],
            params=call["params"],
            body=call["body"],
            variables=variables,
            result=result,
        )
        return self._out(result, history_id)
