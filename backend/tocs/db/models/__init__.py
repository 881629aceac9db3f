from tocs.db.models.endpoint import Endpoint, EndpointBody, EndpointHeader, EndpointParameter, EndpointResponse
from tocs.db.models.folder import Folder
from tocs.db.models.history import History
from tocs.db.models.project import Project, ProjectMember
from tocs.db.models.schema_definition import SchemaDefinition
from tocs.db.models.user import User
from tocs.db.models.variable import Variable

__all__ = [
    "Endpoint",
    "EndpointBody",
    "EndpointHeader",
    "EndpointParameter",
    "EndpointResponse",
    "Folder",
    "History",
    "Project",
    "ProjectMember",
    "SchemaDefinition",
    "User",
    "Variable",
]
