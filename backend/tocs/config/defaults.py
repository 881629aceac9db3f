"""Static defaults for projects, discovery and history."""

DEFAULT_SERVER_NAME = "Default"
DEFAULT_SERVER_URL = "https://api.example.com"

PROJECT_HISTORY_LIMIT = 50
ENDPOINT_HISTORY_LIMIT = 100

# Requested in order when scanning a server for an OpenAPI/Swagger document.
DISCOVERY_PATHS = [
    "/openapi.json",
    "/swagger.json",
    "/v3/api-docs",
    "/v2/api-docs",
    "/api-docs",
    "/api/swagger.json",
    "/api/openapi.json",
    "/swagger/v1/swagger.json",
    "/swagger/v2/swagger.json",
    "/swagger/v3/swagger.json",
    "/api-docs.json",
    "/docs/swagger.json",
    "/docs/openapi.json",
]

IMPORTED_FOLDER_NAME = "Imported Endpoints"
IMPORTED_FOLDER_DESCRIPTION = "Endpoints imported from OpenAPI specification"
