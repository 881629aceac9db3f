import json

import httpx

from tocs.services.openapi_import import ExampleGenerator, OpenAPIParser, resolve_pointer

PETSTORE = {
    "openapi": "3.0.1",
    "info": {"title": "Pets", "version": "1"},
    "tags": [{"name": "pets", "description": "Everything about pets"}],
    "paths": {
        "/pets/{petId}": {
            "parameters": [{"name": "petId", "in": "path", "required": True, "schema": {"type": "integer"}}],
            "get": {
                "tags": ["pets"],
                "summary": "Get a pet",
                "parameters": [{"$ref": "#/components/parameters/Verbose"}],
                "responses": {
                    "200": {
                        "description": "A pet",
                        "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Pet"}}},
                    },
                    "404": {"$ref": "#/components/responses/NotFound"},
                    "default": {"description": "Unexpected"},
                },
            },
        },
        "/pets": {
            "post": {
                "tags": ["pets"],
                "operationId": "createPet",
                "requestBody": {
                    "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Pet"}}}
                },
                "responses": {"201": {"description": "Created"}},
            }
        },
        "/stores": {
            "get": {"tags": ["stores"], "responses": {"200": {"description": "ok"}}},
        },
        "/health": {"get": {"responses": {"200": {"description": "ok"}}}},
    },
    "components": {
        "parameters": {
            "Verbose": {"name": "verbose", "in": "query", "schema": {"type": "boolean", "default": False}}
        },
        "responses": {"NotFound": {"description": "No such pet"}},
        "schemas": {
            "Pet": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer"},
                    "name": {"type": "string", "example": "Rex"},
                    "parent": {"$ref": "#/components/schemas/Pet"},
                },
            }
        },
    },
}

SWAGGER = {
    "swagger": "2.0",
    "consumes": ["application/xml"],
    "paths": {
        "/orders": {
            "post": {
                "summary": "Place order",
                "parameters": [
                    {"name": "order", "in": "body", "schema": {"$ref": "#/definitions/Order"}},
                    {"name": "dryRun", "in": "query", "type": "boolean"},
                ],
                "responses": {"200": {"description": "ok", "schema": {"$ref": "#/definitions/Order"}}},
            }
        }
    },
    "definitions": {"Order": {"type": "object", "properties": {"qty": {"type": "integer", "example": 2}}}},
}


def test_resolve_pointer() -> None:
    assert resolve_pointer(PETSTORE, "#/components/responses/NotFound") == {"description": "No such pet"}
    assert resolve_pointer(PETSTORE, "#/components/missing") is None
    assert resolve_pointer(PETSTORE, "other.json#/a") is None
    assert resolve_pointer({"a/b": {"c": 1}}, "#/a~1b/c") == 1


def test_example_generator_stops_at_cycles() -> None:
    generator = ExampleGenerator(PETSTORE)
    assert generator.example({"$ref": "#/components/schemas/Pet"}) == {"id": 0, "name": "Rex", "parent": {}}
    assert generator.example({"type": "array", "items": {"type": "string", "enum": ["a", "b"]}}) == ["a"]
    assert generator.example({"allOf": [{"properties": {"a": {"type": "boolean"}}}, {"example": {"b": 1}}]}) == {
        "a": True,
        "b": 1,
    }
    assert generator.example_text(None) is None


def test_parser_reads_openapi3() -> None:
    parsed = OpenAPIParser(PETSTORE).parse()
    assert parsed.tags == [
        ("pets", "Everything about pets"),
        ("stores", "Auto-generated folder for stores endpoints"),
    ]
    by_name = {op.name: op for op in parsed.operations}
    assert set(by_name) == {"Get a pet", "createPet", "GET /stores", "GET /health"}

    get_pet = by_name["Get a pet"]
    assert [(p.name, p.location, p.type) for p in get_pet.parameters] == [
        ("petId", "PATH", "INTEGER"),
        ("verbose", "QUERY", "BOOLEAN"),
    ]
    assert get_pet.parameters[1].default_value == "false"
    assert [r.status_code for r in get_pet.responses] == [200, 404]
    assert get_pet.responses[1].description == "No such pet"
    assert json.loads(get_pet.responses[0].example)["name"] == "Rex"

    create = by_name["createPet"]
    assert create.body.content_type == "application/json"
    assert json.loads(create.body.schema) == {"$ref": "#/components/schemas/Pet"}


def test_parser_reads_swagger2_body_parameter() -> None:
    operation = OpenAPIParser(SWAGGER).parse().operations[0]
    assert operation.body.content_type == "application/xml"
    assert json.loads(operation.body.example) == {"qty": 2}
    assert [p.name for p in operation.parameters] == ["dryRun"]
    assert operation.responses[0].content_type == "application/json"


def test_import_creates_folders_and_endpoints(client, new_project, editor) -> None:
    project_id = new_project("Pets")
    response = client.post(f"/api/projects/{project_id}/import/openapi", json={"spec": PETSTORE}, headers=editor)
    assert response.status_code == 200
    result = response.json()["data"]
    assert result["foldersCreated"] == 3
    assert result["endpointsCreated"] == 4
    assert [f["name"] for f in result["folders"]] == ["pets", "stores", "Imported Endpoints"]

    endpoints = client.get(f"/api/projects/{project_id}/endpoints", headers=editor).json()["data"]["endpoints"]
    get_pet = next(e for e in endpoints if e["name"] == "Get a pet")
    assert get_pet["method"] == "GET"
    assert get_pet["path"] == "/pets/{petId}"
    assert get_pet["folder"]["name"] == "pets"
    assert {p["name"] for p in get_pet["parameters"]} == {"petId", "verbose"}
    create = next(e for e in endpoints if e["name"] == "createPet")
    assert create["body"]["contentType"] == "application/json"

    # A second import reuses the existing root folders.
    again = client.post(
        f"/api/projects/{project_id}/import/openapi", json={"spec": json.dumps(PETSTORE)}, headers=editor
    ).json()["data"]
    assert again["foldersCreated"] == 0
    assert again["endpointsCreated"] == 4


def test_export_then_import_round_trip(client, new_project, owner) -> None:
    source = new_project("Source")
    client.post(f"/api/projects/{source}/import/openapi", json={"spec": SWAGGER}, headers=owner)
    exported = client.get(f"/api/projects/{source}/export/openapi", headers=owner).json()

    target = new_project("Target")
    imported = client.post(f"/api/projects/{target}/import/openapi", json={"spec": exported}, headers=owner)
    assert imported.status_code == 200
    result = imported.json()["data"]
    assert result["endpointsCreated"] == 1
    assert result["endpoints"][0]["method"] == "POST"
    assert result["endpoints"][0]["path"] == "/orders"
    assert [f["name"] for f in result["folders"]] == ["Imported Endpoints"]


def test_import_rejects_bad_documents(client, new_project, editor, viewer) -> None:
    project_id = new_project()
    url = f"/api/projects/{project_id}/import/openapi"

    not_json = client.post(url, json={"spec": "{nope"}, headers=editor)
    assert not_json.status_code == 400
    assert not_json.json()["error"] == "Invalid JSON format"

    not_openapi = client.post(url, json={"spec": {"info": {}}}, headers=editor)
    assert not_openapi.status_code == 400
    assert not_openapi.json()["error"] == "Invalid OpenAPI/Swagger specification"

    assert client.post(url, json={}, headers=editor).status_code == 400
    assert client.post(url, json={"spec": PETSTORE}, headers=viewer).status_code == 404


def test_import_from_url(client, new_project, editor, mock_http) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/openapi.json":
            return httpx.Response(200, json=SWAGGER)
        return httpx.Response(404, text="missing")

    seen = mock_http(handler)
    project_id = new_project()
    url = f"/api/projects/{project_id}/import/openapi"

    imported = client.post(url, json={"url": "https://docs.example.com/openapi.json"}, headers=editor)
    assert imported.status_code == 200
    assert imported.json()["data"]["endpointsCreated"] == 1
    assert str(seen[0].url) == "https://docs.example.com/openapi.json"

    missing = client.post(url, json={"url": "https://docs.example.com/nothing.json"}, headers=editor)
    assert missing.status_code == 400
    assert missing.json()["error"] == "Failed to fetch OpenAPI spec: 404 Not Found"


def test_reimport_reuses_folder_for_long_tag(client, new_project, editor) -> None:
    tag = "t" * 150
    document = {
        "openapi": "3.0.0",
        "info": {"title": "Long", "version": "1"},
        "tags": [{"name": tag}],
        "paths": {"/ping": {"get": {"tags": [tag], "responses": {"200": {"description": "ok"}}}}},
    }
    project_id = new_project()
    url = f"/api/projects/{project_id}/import/openapi"

    first = client.post(url, json={"spec": document}, headers=editor).json()["data"]
    assert first["foldersCreated"] == 1
    assert first["folders"][0]["name"] == "t" * 100

    second = client.post(url, json={"spec": document}, headers=editor).json()["data"]
    assert second["foldersCreated"] == 0
    assert second["endpointsCreated"] == 1
    folders = client.get(f"/api/projects/{project_id}/folders", headers=editor).json()["data"]["folders"]
    assert len(folders) == 1
