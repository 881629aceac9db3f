from tocs.db.seed import DEMO_ENDPOINT_ID, DEMO_PUBLIC_PROJECT_ID


def _create_endpoint(client, project_id: str, headers: dict) -> str:
    created = client.post(
        f"/api/projects/{project_id}/endpoints", json={"name": "Ping", "path": "/ping"}, headers=headers
    )
    return created.json()["data"]["endpoint"]["id"]


def test_record_and_list_histories(client, new_project, viewer, editor) -> None:
    project_id = new_project()
    endpoint_id = _create_endpoint(client, project_id, editor)

    recorded = client.post(
        f"/api/projects/{project_id}/endpoints/{endpoint_id}/histories",
        json={
            "method": "get",
            "url": "https://api.example.com/ping",
            "headers": {"Accept": "application/json"},
            "status": 200,
            "statusText": "OK",
            "responseTime": 12,
            "responseSize": 2,
            "responseBody": "{}",
        },
        headers=viewer,
    )
    assert recorded.status_code == 200
    history = recorded.json()["data"]["history"]
    assert history["method"] == "GET"
    assert history["endpoint"]["id"] == endpoint_id
    assert history["user"]["email"] == "viewer@example.com"
    assert history["headers"] == {"Accept": "application/json"}

    per_endpoint = client.get(f"/api/projects/{project_id}/endpoints/{endpoint_id}/histories", headers=editor)
    assert per_endpoint.status_code == 200
    rows = per_endpoint.json()["data"]["histories"]
    assert [row["id"] for row in rows] == [history["id"]]
    assert rows[0]["responseBody"] == "{}"

    per_project = client.get(f"/api/projects/{project_id}/histories", headers=editor).json()["data"]["histories"]
    assert per_project[0]["id"] == history["id"]
    assert per_project[0]["endpoint"]["path"] == "/ping"
    assert "responseBody" not in per_project[0]


def test_histories_are_member_only(client, outsider) -> None:
    # The demo project is public, but history stays private to members.
    listed = client.get(f"/api/projects/{DEMO_PUBLIC_PROJECT_ID}/histories", headers=outsider)
    assert listed.status_code == 404
    created = client.post(
        f"/api/projects/{DEMO_PUBLIC_PROJECT_ID}/endpoints/{DEMO_ENDPOINT_ID}/histories",
        json={"method": "GET", "url": "https://x", "status": 200},
        headers=outsider,
    )
    assert created.status_code == 404


def test_history_for_unknown_endpoint(client, new_project, owner) -> None:
    project_id = new_project()
    response = client.get(f"/api/projects/{project_id}/endpoints/ep-missing/histories", headers=owner)
    assert response.status_code == 404
    assert response.json()["error"] == "Endpoint not found"
