from tocs.db.seed import DEMO_ENDPOINT_ID, DEMO_PUBLIC_PROJECT_ID


def _create_endpoint(client, project_id: str, headers: dict, **payload) -> dict:
    response = client.post(f"/api/projects/{project_id}/endpoints", json=payload, headers=headers)
    assert response.status_code == 200, response.json()
    return response.json()["data"]["endpoint"]


def test_http_endpoint_defaults_to_get(client, new_project, editor) -> None:
    project_id = new_project()
    endpoint = _create_endpoint(client, project_id, editor, name="List users", path="/users")
    assert endpoint["type"] == "HTTP"
    assert endpoint["method"] == "GET"
    assert endpoint["folderId"] is None
    assert endpoint["order"] == 0
    assert endpoint["headers"] == []
    assert endpoint["body"] is None


def test_non_http_endpoints_have_no_method(client, new_project, editor) -> None:
    project_id = new_project()
    graphql = _create_endpoint(
        client,
        project_id,
        editor,
        name="Viewer",
        type="GRAPHQL",
        method="POST",
        path="/graphql",
        query="{ viewer { id } }",
        variables={"first": 10},
    )
    assert graphql["method"] is None
    assert graphql["query"] == "{ viewer { id } }"
    assert graphql["variables"] == {"first": 10}

    socket = _create_endpoint(
        client, project_id, editor, name="Feed", type="WEBSOCKET", path="/feed", wsUrl="wss://example.com/feed"
    )
    assert socket["method"] is None
    assert socket["wsUrl"] == "wss://example.com/feed"

    # Switching an endpoint to HTTP gives it a method again.
    switched = client.put(
        f"/api/projects/{project_id}/endpoints/{socket['id']}", json={"type": "HTTP"}, headers=editor
    )
    assert switched.status_code == 200
    assert switched.json()["data"]["endpoint"]["method"] == "GET"


def test_update_and_move_endpoint(client, new_project, editor) -> None:
    project_id = new_project()
    folder = client.post(
        f"/api/projects/{project_id}/folders", json={"name": "Users"}, headers=editor
    ).json()["data"]["folder"]
    endpoint = _create_endpoint(
        client, project_id, editor, name="Create user", method="POST", path="/users", folderId=folder["id"]
    )
    assert endpoint["folder"] == {"id": folder["id"], "name": "Users"}

    updated = client.put(
        f"/api/projects/{project_id}/endpoints/{endpoint['id']}",
        json={"name": "Replace user", "method": "PUT", "path": "/users/{id}", "description": "full replace"},
        headers=editor,
    ).json()["data"]["endpoint"]
    assert updated["name"] == "Replace user"
    assert updated["method"] == "PUT"
    assert updated["path"] == "/users/{id}"
    assert updated["folderId"] == folder["id"]

    moved = client.put(
        f"/api/projects/{project_id}/endpoints/{endpoint['id']}", json={"folderId": None}, headers=editor
    ).json()["data"]["endpoint"]
    assert moved["folderId"] is None
    assert moved["folder"] is None
    assert moved["description"] == "full replace"


def test_folder_must_belong_to_project(client, new_project, owner) -> None:
    first = new_project("First")
    second = new_project("Second")
    foreign = client.post(
        f"/api/projects/{second}/folders", json={"name": "Theirs"}, headers=owner
    ).json()["data"]["folder"]

    response = client.post(
        f"/api/projects/{first}/endpoints",
        json={"name": "x", "path": "/x", "folderId": foreign["id"]},
        headers=owner,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Folder not found in this project"


def test_replace_endpoint_parts(client, new_project, editor) -> None:
    project_id = new_project()
    endpoint = _create_endpoint(client, project_id, editor, name="Create", method="POST", path="/items")
    base = f"/api/projects/{project_id}/endpoints/{endpoint['id']}"

    headers = client.put(
        f"{base}/headers",
        json={"headers": [{"key": "X-Trace", "value": "1", "required": True}, {"key": "Accept"}]},
        headers=editor,
    ).json()["data"]["endpoint"]["headers"]
    assert {h["key"] for h in headers} == {"X-Trace", "Accept"}
    assert next(h for h in headers if h["key"] == "X-Trace")["required"] is True

    replaced = client.put(
        f"{base}/headers", json={"headers": [{"key": "Accept", "value": "application/json"}]}, headers=editor
    ).json()["data"]["endpoint"]["headers"]
    assert [(h["key"], h["value"]) for h in replaced] == [("Accept", "application/json")]

    parameters = client.put(
        f"{base}/parameters",
        json={"parameters": [{"name": "limit", "type": "INTEGER", "defaultValue": "10"}]},
        headers=editor,
    ).json()["data"]["endpoint"]["parameters"]
    assert parameters[0]["location"] == "QUERY"
    assert parameters[0]["defaultValue"] == "10"

    body = client.put(
        f"{base}/body",
        json={"contentType": "application/json", "schema": '{"type": "object"}', "example": '{"a": 1}'},
        headers=editor,
    ).json()["data"]["endpoint"]["body"]
    assert body["schema"] == '{"type": "object"}'
    assert body["example"] == '{"a": 1}'

    body_again = client.put(
        f"{base}/body", json={"contentType": "text/plain", "example": "hi"}, headers=editor
    ).json()["data"]["endpoint"]["body"]
    assert body_again["id"] == body["id"]
    assert body_again["contentType"] == "text/plain"
    assert body_again["schema"] is None

    responses = client.put(
        f"{base}/responses",
        json={"responses": [{"statusCode": 201, "description": "Created"}, {"statusCode": 422}]},
        headers=editor,
    ).json()["data"]["endpoint"]["responses"]
    assert sorted(r["statusCode"] for r in responses) == [201, 422]

    invalid = client.put(f"{base}/responses", json={"responses": [{"statusCode": 42}]}, headers=editor)
    assert invalid.status_code == 400


def test_reorder_and_delete(client, new_project, editor, viewer) -> None:
    project_id = new_project()
    first = _create_endpoint(client, project_id, editor, name="one", path="/1")
    second = _create_endpoint(client, project_id, editor, name="two", path="/2")
    assert second["order"] == 1

    reordered = client.put(
        f"/api/projects/{project_id}/endpoints/reorder",
        json={"endpoints": [{"id": first["id"], "order": 5}, {"id": second["id"], "order": 0}]},
        headers=editor,
    )
    assert reordered.status_code == 200
    assert [e["name"] for e in reordered.json()["data"]["endpoints"]] == ["two", "one"]

    assert client.delete(f"/api/projects/{project_id}/endpoints/{first['id']}", headers=viewer).status_code == 404
    deleted = client.delete(f"/api/projects/{project_id}/endpoints/{first['id']}", headers=editor)
    assert deleted.json()["data"] == {"deletedEndpointId": first["id"]}
    assert client.get(f"/api/projects/{project_id}/endpoints/{first['id']}", headers=editor).status_code == 404


def test_public_project_endpoints_are_readable_by_anyone_signed_in(client, outsider) -> None:
    response = client.get(f"/api/projects/{DEMO_PUBLIC_PROJECT_ID}/endpoints/{DEMO_ENDPOINT_ID}", headers=outsider)
    assert response.status_code == 200
    endpoint = response.json()["data"]["endpoint"]
    assert endpoint["path"] == "/users"
    assert endpoint["headers"][0]["value"] == "Bearer {{token}}"

    edit = client.put(
        f"/api/projects/{DEMO_PUBLIC_PROJECT_ID}/endpoints/{DEMO_ENDPOINT_ID}", json={"name": "x"}, headers=outsider
    )
    assert edit.status_code == 404


def test_blank_endpoint_name_and_empty_path_are_rejected(client, new_project, editor) -> None:
    project_id = new_project()
    base = f"/api/projects/{project_id}/endpoints"

    blank_name = client.post(base, json={"name": "   ", "path": "/users"}, headers=editor)
    assert blank_name.status_code == 400
    assert blank_name.json()["error"].startswith("name:")

    empty_path = client.post(base, json={"name": "List users", "path": ""}, headers=editor)
    assert empty_path.status_code == 400
    assert empty_path.json()["error"].startswith("path:")

    endpoint = _create_endpoint(client, project_id, editor, name="List users", path="/users")
    assert client.put(f"{base}/{endpoint['id']}", json={"name": " "}, headers=editor).status_code == 400
