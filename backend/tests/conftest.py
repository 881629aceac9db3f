import os

import httpx
import pytest
from fastapi.testclient import TestClient

os.environ["DATABASE_URL"] = "sqlite:///./test_tocs.db"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-with-enough-entropy"
os.environ["ENABLE_DEV_LOGIN"] = "true"

import tocs.services.request_executor as request_executor_module
from tocs.config.settings import get_settings
from tocs.db.base import Base
from tocs.db.seed import (
    DEMO_EDITOR_ID,
    DEMO_OUTSIDER_ID,
    DEMO_OWNER_ID,
    DEMO_VIEWER_ID,
    seed_demo_data,
)
from tocs.db.session import get_engine, reset_engine, reset_sessionmaker
from tocs.main import create_app
from tocs.services.auth_service import AuthService


@pytest.fixture(scope="session", autouse=True)
def test_env() -> None:
    get_settings.cache_clear()
    reset_engine()
    reset_sessionmaker()
    engine = get_engine()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with engine.begin() as conn:
        from sqlalchemy.orm import Session

        session = Session(bind=conn)
        seed_demo_data(session)
        session.commit()


@pytest.fixture
def client() -> TestClient:
    app = create_app()
    return TestClient(app)


def bearer(user_id: str) -> dict[str, str]:
    token, _ = AuthService().create_token(user_id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def owner() -> dict[str, str]:
    return bearer(DEMO_OWNER_ID)


@pytest.fixture
def editor() -> dict[str, str]:
    return bearer(DEMO_EDITOR_ID)


@pytest.fixture
def viewer() -> dict[str, str]:
    return bearer(DEMO_VIEWER_ID)


@pytest.fixture
def outsider() -> dict[str, str]:
    return bearer(DEMO_OUTSIDER_ID)


@pytest.fixture
def mock_http(monkeypatch):
    """Route outbound calls to a handler instead of the network.

    Usage: ``mock_http(handler)`` where handler takes an ``httpx.Request``.
    Returns the list of requests seen.
    """
    seen: list[httpx.Request] = []

    def install(handler):
        def _record(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        monkeypatch.setattr(request_executor_module, "_default_transport", lambda: httpx.MockTransport(_record))
        return seen

    return install


@pytest.fixture
def new_project(client, owner):
    """Create a fresh project owned by the demo owner, with editor and viewer members."""

    def create(name: str = "Scratch API", **extra) -> str:
        created = client.post("/api/projects", json={"name": name, **extra}, headers=owner)
        assert created.status_code == 200
        project_id = created.json()["data"]["project"]["id"]
        for email, role in (("editor@example.com", "EDITOR"), ("viewer@example.com", "VIEWER")):
            invited = client.post(
                f"/api/projects/{project_id}/members",
                json={"email": email, "role": role},
                headers=owner,
            )
            assert invited.status_code == 200
        return project_id

    return create
