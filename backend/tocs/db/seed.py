from __future__ import annotations

import json
import logging

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from tocs.config.defaults import DEFAULT_SERVER_NAME
from tocs.config.settings import get_settings
from tocs.db.base import Base
from tocs.db.models.endpoint import Endpoint, EndpointHeader, EndpointParameter
from tocs.db.models.folder import Folder
from tocs.db.models.project import Project, ProjectMember
from tocs.db.models.user import User
from tocs.db.models.variable import Variable
from tocs.utils.time import utc_now_iso

logger = logging.getLogger(__name__)

# Fixed ids so local tooling and tests can refer to the demo rows directly.
DEMO_OWNER_ID = "user-owner"
DEMO_EDITOR_ID = "user-editor"
DEMO_VIEWER_ID = "user-viewer"
DEMO_OUTSIDER_ID = "user-outsider"
DEMO_PUBLIC_PROJECT_ID = "proj-public"
DEMO_PRIVATE_PROJECT_ID = "proj-private"
DEMO_FOLDER_ID = "fold-users"
DEMO_ENDPOINT_ID = "ep-list-users"


def _ensure_schema(db: Session) -> None:
    """Create tables on a fresh database that has not been migrated yet."""
    bind = db.get_bind()
    if inspect(bind).has_table("projects"):
        return
    # Importing models ensures all declarative mappings are registered.
    import tocs.db.models  # noqa: F401

    Base.metadata.create_all(bind=bind, checkfirst=True)
    logger.info("Created missing database tables during startup seed")


def seed_app_data(db: Session) -> None:
    _ensure_schema(db)


def seed_demo_data(db: Session) -> None:
    """Demo users with every role plus a public and a private project. Idempotent."""
    if db.get(User, DEMO_OWNER_ID) is not None:
        return
    now = utc_now_iso()
    servers = json.dumps([{"name": DEFAULT_SERVER_NAME, "url": get_settings().default_server_url}])

    for user_id, name in (
        (DEMO_OWNER_ID, "owner"),
        (DEMO_EDITOR_ID, "editor"),
        (DEMO_VIEWER_ID, "viewer"),
        (DEMO_OUTSIDER_ID, "outsider"),
    ):
        db.add(User(id=user_id, email=f"{name}@example.com", name=name.title(), created_at=now))

    for project_id, name, is_public in (
        (DEMO_PUBLIC_PROJECT_ID, "Demo API", 1),
        (DEMO_PRIVATE_PROJECT_ID, "Internal API", 0),
    ):
        db.add(
            Project(
                id=project_id,
                name=name,
                slug=project_id,
                description=f"{name} used for local development",
                is_public=is_public,
                servers_json=servers,
                created_at=now,
                updated_at=now,
            )
        )
        for user_id, role in (
            (DEMO_OWNER_ID, "OWNER"),
            (DEMO_EDITOR_ID, "EDITOR"),
            (DEMO_VIEWER_ID, "VIEWER"),
        ):
            db.add(
                ProjectMember(
                    id=f"mem-{project_id}-{role.lower()}",
                    project_id=project_id,
                    user_id=user_id,
                    role=role,
                    created_at=now,
                )
            )
    db.flush()

    db.add(
        Folder(
            id=DEMO_FOLDER_ID,
            project_id=DEMO_PUBLIC_PROJECT_ID,
            parent_id=None,
            name="Users",
            description="User management",
            sort_order=0,
            created_at=now,
            updated_at=now,
        )
    )
    db.flush()
    db.add(
        Endpoint(
            id=DEMO_ENDPOINT_ID,
            project_id=DEMO_PUBLIC_PROJECT_ID,
            folder_id=DEMO_FOLDER_ID,
            name="List users",
            description="Returns a page of users",
            type="HTTP",
            method="GET",
            path="/users",
            sort_order=0,
            created_at=now,
            updated_at=now,
        )
    )
    db.flush()
    db.add(
        EndpointHeader(
            id="hdr-list-users-auth",
            endpoint_id=DEMO_ENDPOINT_ID,
            key="Authorization",
            value="Bearer {{token}}",
            required=1,
        )
    )
    db.add(
        EndpointParameter(
            id="param-list-users-page",
            endpoint_id=DEMO_ENDPOINT_ID,
            name="page",
            type="INTEGER",
            location="QUERY",
            required=0,
            default_value="1",
        )
    )
    db.add(
        Variable(
            id="var-demo-token",
            project_id=DEMO_PUBLIC_PROJECT_ID,
            key="token",
            value="demo-token",
            created_at=now,
            updated_at=now,
        )
    )
    logger.info("Seeded demo users and projects")
