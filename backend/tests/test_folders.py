def _create_folder(client, project_id: str, headers: dict, **payload) -> dict:
    response = client.post(f"/api/projects/{project_id}/folders", json=payload, headers=headers)
    assert response.status_code == 200, response.json()
    return response.json()["data"]["folder"]


def test_create_folder_keeps_parent_and_order(client, new_project, editor) -> None:
    project_id = new_project()

    root = _create_folder(client, project_id, editor, name="Users")
    assert root["parentId"] is None
    assert root["order"] == 0
    second = _create_folder(client, project_id, editor, name="Orders")
    assert second["order"] == 1

    child = _create_folder(client, project_id, editor, name="Admins", parentId=root["id"])
    assert child["parentId"] == root["id"]
    assert child["order"] == 0

    fetched = client.get(f"/api/projects/{project_id}/folders/{root['id']}", headers=editor)
    assert fetched.status_code == 200
    assert [c["id"] for c in fetched.json()["data"]["folder"]["children"]] == [child["id"]]

    listed = client.get(f"/api/projects/{project_id}/folders", headers=editor).json()["data"]["folders"]
    assert {f["id"] for f in listed} == {root["id"], second["id"], child["id"]}


def test_parent_must_belong_to_same_project(client, new_project, owner) -> None:
    first = new_project("First API")
    second = new_project("Second API")
    foreign = _create_folder(client, second, owner, name="Elsewhere")

    response = client.post(
        f"/api/projects/{first}/folders", json={"name": "Stray", "parentId": foreign["id"]}, headers=owner
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Parent folder not found in this project"


def test_move_folder_rejects_cycles_and_supports_root(client, new_project, editor) -> None:
    project_id = new_project()
    top = _create_folder(client, project_id, editor, name="Top")
    middle = _create_folder(client, project_id, editor, name="Middle", parentId=top["id"])
    bottom = _create_folder(client, project_id, editor, name="Bottom", parentId=middle["id"])

    for target in (top["id"], bottom["id"]):
        response = client.put(
            f"/api/projects/{project_id}/folders/{top['id']}", json={"parentId": target}, headers=editor
        )
        assert response.status_code == 400
        assert response.json()["error"] == "A folder cannot be moved into itself or one of its subfolders"

    renamed = client.put(
        f"/api/projects/{project_id}/folders/{middle['id']}", json={"name": "Renamed"}, headers=editor
    ).json()["data"]["folder"]
    assert renamed["name"] == "Renamed"
    assert renamed["parentId"] == top["id"]

    moved = client.put(
        f"/api/projects/{project_id}/folders/{middle['id']}", json={"parentId": None}, headers=editor
    )
    assert moved.status_code == 200
    assert moved.json()["data"]["folder"]["parentId"] is None


def test_delete_folder_removes_subtree_and_endpoints(client, new_project, editor) -> None:
    project_id = new_project()
    top = _create_folder(client, project_id, editor, name="Top")
    nested = _create_folder(client, project_id, editor, name="Nested", parentId=top["id"])
    endpoint_ids = []
    for folder_id, path in ((top["id"], "/a"), (nested["id"], "/b")):
        created = client.post(
            f"/api/projects/{project_id}/endpoints",
            json={"name": path, "path": path, "folderId": folder_id},
            headers=editor,
        )
        assert created.status_code == 200
        endpoint_ids.append(created.json()["data"]["endpoint"]["id"])
    survivor = client.post(
        f"/api/projects/{project_id}/endpoints", json={"name": "root", "path": "/root"}, headers=editor
    ).json()["data"]["endpoint"]

    deleted = client.delete(f"/api/projects/{project_id}/folders/{top['id']}", headers=editor)
    assert deleted.status_code == 200
    data = deleted.json()["data"]
    assert data["deletedFolderId"] == top["id"]
    assert sorted(data["deletedEndpointIds"]) == sorted(endpoint_ids)

    assert client.get(f"/api/projects/{project_id}/folders", headers=editor).json()["data"]["folders"] == []
    remaining = client.get(f"/api/projects/{project_id}/endpoints", headers=editor).json()["data"]["endpoints"]
    assert [e["id"] for e in remaining] == [survivor["id"]]


def test_reorder_and_permissions(client, new_project, editor, viewer) -> None:
    project_id = new_project()
    a = _create_folder(client, project_id, editor, name="A")
    b = _create_folder(client, project_id, editor, name="B")

    reordered = client.put(
        f"/api/projects/{project_id}/folders/reorder",
        json={"folders": [{"id": a["id"], "order": 1}, {"id": b["id"], "order": 0}]},
        headers=editor,
    )
    assert reordered.status_code == 200
    assert [f["name"] for f in reordered.json()["data"]["folders"]] == ["B", "A"]

    assert client.get(f"/api/projects/{project_id}/folders", headers=viewer).status_code == 200
    denied = client.post(f"/api/projects/{project_id}/folders", json={"name": "C"}, headers=viewer)
    assert denied.status_code == 404
    assert client.get(f"/api/projects/{project_id}/folders/missing", headers=editor).status_code == 404


def test_blank_folder_names_are_rejected(client, new_project, editor) -> None:
    project_id = new_project()
    assert client.post(f"/api/projects/{project_id}/folders", json={"name": "  "}, headers=editor).status_code == 400

    folder = _create_folder(client, project_id, editor, name="Users")
    renamed = client.put(f"/api/projects/{project_id}/folders/{folder['id']}", json={"name": " "}, headers=editor)
    assert renamed.status_code == 400
    assert renamed.json()["error"].startswith("name:")
