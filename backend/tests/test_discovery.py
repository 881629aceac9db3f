import httpx

from tocs.services.openapi_discovery import document_format


def test_document_format() -> None:
    assert document_format("/swagger/v1/swagger.json") == "Swagger"
    assert document_format("/v3/api-docs") == "OpenAPI"


def test_discover_lists_answering_paths(client, owner, mock_http) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path in ("/api/openapi.json", "/v2/api-docs"):
            return httpx.Response(200, json={"openapi": "3.0.0"})
        if request.url.path == "/swagger.json":
            raise httpx.ReadTimeout("slow", request=request)
        return httpx.Response(404)

    seen = mock_http(handler)
    response = client.post("/api/import/discover", json={"serverUrl": "https://svc.example.com/"}, headers=owner)
    assert response.status_code == 200
    documents = response.json()["data"]["documents"]
    assert documents == [
        {"url": "https://svc.example.com/v2/api-docs", "path": "/v2/api-docs", "format": "OpenAPI"},
        {"url": "https://svc.example.com/api/openapi.json", "path": "/api/openapi.json", "format": "OpenAPI"},
    ]
    assert str(seen[0].url) == "https://svc.example.com/openapi.json"


def test_discover_validates_input(client, owner) -> None:
    bad = client.post("/api/import/discover", json={"serverUrl": "ftp://svc"}, headers=owner)
    assert bad.status_code == 400
    assert bad.json()["error"] == "serverUrl must start with http:// or https://"
    assert client.post("/api/import/discover", json={"serverUrl": "https://svc"}).status_code == 401


def test_discover_rejects_malformed_urls(client, owner, mock_http) -> None:
    seen = mock_http(lambda request: httpx.Response(200))
    response = client.post("/api/import/discover", json={"serverUrl": "http://[::1"}, headers=owner)
    assert response.status_code == 400
    assert response.json()["ok"] is False
    assert response.json()["error"] == "Invalid serverUrl: http://[::1"
    assert seen == []
