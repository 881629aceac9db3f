from tocs.db.seed import DEMO_PRIVATE_PROJECT_ID, DEMO_PUBLIC_PROJECT_ID
from tocs.services.postman_export import POSTMAN_SCHEMA


def test_openapi_export_of_demo_project(client, outsider) -> None:
    response = client.get(f"/api/projects/{DEMO_PUBLIC_PROJECT_ID}/export/openapi", headers=outsider)
    assert response.status_code == 200
    disposition = response.headers["content-disposition"]
    assert disposition.startswith('attachment; filename="Demo API-openapi.json"')
    assert "filename*=UTF-8''Demo%20API-openapi.json" in disposition

    document = response.json()
    assert document["openapi"] == "3.0.0"
    assert document["info"]["title"] == "Demo API"
    assert document["servers"][0]["url"] == "https://api.example.com"
    assert {"name": "Users"} in [{"name": tag["name"]} for tag in document["tags"]]

    operation = document["paths"]["/users"]["get"]
    assert operation["tags"] == ["Users"]
    assert operation["responses"] == {"200": {"description": "Successful response"}}
    assert operation["parameters"][0]["name"] == "page"
    assert operation["parameters"][0]["in"] == "query"
    assert "requestBody" not in operation


def test_openapi_export_body_and_non_http(client, new_project, owner) -> None:
    project_id = new_project("Shop")
    base = f"/api/projects/{project_id}/endpoints"
    created = client.post(base, json={"name": "Add", "method": "POST", "path": "/items"}, headers=owner)
    endpoint_id = created.json()["data"]["endpoint"]["id"]
    client.put(
        f"{base}/{endpoint_id}/body",
        json={"contentType": "application/json", "schema": '{"type": "object"}', "example": '{"sku": "A1"}'},
        headers=owner,
    )
    client.put(
        f"{base}/{endpoint_id}/responses",
        json={"responses": [{"statusCode": 201, "contentType": "application/json", "example": '{"id": 1}'}]},
        headers=owner,
    )
    client.post(base, json={"name": "Live", "type": "SSE", "path": "/events"}, headers=owner)

    document = client.get(f"/api/projects/{project_id}/export/openapi", headers=owner).json()
    assert list(document["paths"]) == ["/items"]
    post = document["paths"]["/items"]["post"]
    assert post["requestBody"]["content"]["application/json"] == {
        "schema": {"type": "object"},
        "example": {"sku": "A1"},
    }
    assert post["responses"]["201"]["description"] == "201 response"
    assert post["responses"]["201"]["content"]["application/json"]["example"] == {"id": 1}


def test_postman_export_structure(client, owner) -> None:
    response = client.get(f"/api/projects/{DEMO_PUBLIC_PROJECT_ID}/export/postman", headers=owner)
    assert response.status_code == 200
    assert 'filename="Demo API-postman.json"' in response.headers["content-disposition"]

    collection = response.json()
    assert collection["info"]["schema"] == POSTMAN_SCHEMA
    assert collection["variable"] == [{"key": "base_url", "value": "https://api.example.com", "type": "string"}]
    assert [group["name"] for group in collection["item"]] == ["Users"]
    request = collection["item"][0]["item"][0]["request"]
    assert request["method"] == "GET"
    assert request["url"]["raw"] == "{{base_url}}/users"
    assert request["url"]["path"] == ["users"]
    assert request["url"]["query"] == [{"key": "page", "value": "1", "description": None}]
    assert request["header"][0]["key"] == "Authorization"


def test_postman_uncategorized_group_comes_last(client, new_project, owner) -> None:
    project_id = new_project("Grouped")
    folder = client.post(
        f"/api/projects/{project_id}/folders", json={"name": "Orders"}, headers=owner
    ).json()["data"]["folder"]
    client.post(
        f"/api/projects/{project_id}/endpoints", json={"name": "loose", "path": "/loose"}, headers=owner
    )
    client.post(
        f"/api/projects/{project_id}/endpoints",
        json={"name": "orders", "path": "/orders", "folderId": folder["id"]},
        headers=owner,
    )
    collection = client.get(f"/api/projects/{project_id}/export/postman", headers=owner).json()
    assert [group["name"] for group in collection["item"]] == ["Orders", "Uncategorized"]


def test_export_of_private_project_requires_membership(client, outsider) -> None:
    response = client.get(f"/api/projects/{DEMO_PRIVATE_PROJECT_ID}/export/openapi", headers=outsider)
    assert response.status_code == 404
    assert response.json()["ok"] is False
