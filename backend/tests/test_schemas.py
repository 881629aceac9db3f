def test_schema_lifecycle(client, new_project, owner, editor, viewer) -> None:
    project_id = new_project()
    base = f"/api/projects/{project_id}/schemas"

    created = client.post(
        base,
        json={
            "name": "User",
            "type": "object",
            "properties": {"id": {"type": "string"}},
            "required": ["id"],
        },
        headers=editor,
    )
    assert created.status_code == 200
    schema = created.json()["data"]["schemaDefinition"]
    assert schema["kind"] == "shared"
    assert schema["schema"] == {"type": "object", "properties": {"id": {"type": "string"}}, "required": ["id"]}

    assert client.get(base, headers=viewer).json()["data"]["schemas"][0]["id"] == schema["id"]

    updated = client.put(
        f"{base}/{schema['id']}",
        json={"description": "A user", "properties": {"id": {"type": "integer"}}},
        headers=editor,
    ).json()["data"]["schemaDefinition"]
    assert updated["description"] == "A user"
    assert updated["name"] == "User"
    assert updated["schema"]["properties"] == {"id": {"type": "integer"}}
    assert updated["schema"]["required"] == ["id"]

    # Deleting is reserved for the owner.
    assert client.delete(f"{base}/{schema['id']}", headers=editor).status_code == 404
    deleted = client.delete(f"{base}/{schema['id']}", headers=owner)
    assert deleted.json()["data"] == {"deletedSchemaId": schema["id"]}
    assert client.get(f"{base}/{schema['id']}", headers=owner).status_code == 404


def test_schema_validation_and_access(client, new_project, editor, viewer, outsider) -> None:
    project_id = new_project(isPublic=True)
    base = f"/api/projects/{project_id}/schemas"

    assert client.post(base, json={"name": "Bad", "type": "tuple"}, headers=editor).status_code == 400
    assert client.post(base, json={"name": "Nope", "type": "string"}, headers=viewer).status_code == 404
    assert client.get(base, headers=outsider).status_code == 404

    enum = client.post(base, json={"name": "Status", "type": "enum", "enum": ["on", "off"]}, headers=editor)
    assert enum.json()["data"]["schemaDefinition"]["schema"] == {"type": "enum", "enum": ["on", "off"]}


def test_blank_schema_names_are_rejected(client, new_project, editor) -> None:
    project_id = new_project()
    base = f"/api/projects/{project_id}/schemas"

    blank = client.post(base, json={"name": " ", "type": "string"}, headers=editor)
    assert blank.status_code == 400
    assert blank.json()["error"].startswith("name:")

    created = client.post(base, json={"name": "Token", "type": "string"}, headers=editor)
    schema_id = created.json()["data"]["schemaDefinition"]["id"]
    assert client.put(f"{base}/{schema_id}", json={"name": "   "}, headers=editor).status_code == 400
