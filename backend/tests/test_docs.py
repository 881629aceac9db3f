from tocs.db.seed import DEMO_PRIVATE_PROJECT_ID, DEMO_PUBLIC_PROJECT_ID


def test_public_docs_need_no_session(client) -> None:
    response = client.get(f"/docs/{DEMO_PUBLIC_PROJECT_ID}")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["project"]["name"] == "Demo API"
    assert "members" not in data["project"]
    assert [folder["name"] for folder in data["folders"]] == ["Users"]
    assert data["endpoints"][0]["path"] == "/users"
    assert data["schemas"] == []


def test_private_and_unknown_projects_are_hidden(client) -> None:
    for project_id in (DEMO_PRIVATE_PROJECT_ID, "proj-unknown"):
        response = client.get(f"/docs/{project_id}")
        assert response.status_code == 404
        assert response.json()["error"] == "Project not found"


def test_docs_follow_visibility_changes(client, new_project, owner) -> None:
    project_id = new_project("Soon Public")
    assert client.get(f"/docs/{project_id}").status_code == 404
    client.put(f"/api/projects/{project_id}/visibility", json={"isPublic": True}, headers=owner)
    assert client.get(f"/docs/{project_id}").json()["data"]["project"]["id"] == project_id
