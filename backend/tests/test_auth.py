from datetime import timedelta

from tocs.db.seed import DEMO_OWNER_ID
from tocs.services.auth_service import AuthService


def test_missing_or_invalid_session_is_401(client) -> None:
    missing = client.get("/api/projects")
    assert missing.status_code == 401
    assert missing.json()["ok"] is False

    malformed = client.get("/api/projects", headers={"Authorization": "Token abc"})
    assert malformed.status_code == 401

    forged = client.get("/api/projects", headers={"Authorization": "Bearer not-a-jwt"})
    assert forged.status_code == 401
    assert forged.json()["error"] == "Invalid token"


def test_expired_and_unknown_user_tokens_are_rejected(client) -> None:
    expired, _ = AuthService().create_token(DEMO_OWNER_ID, expires_in=timedelta(seconds=-5))
    response = client.get("/api/auth/session", headers={"Authorization": f"Bearer {expired}"})
    assert response.status_code == 401
    assert response.json()["error"] == "Token expired"

    ghost, _ = AuthService().create_token("user-does-not-exist")
    response = client.get("/api/auth/session", headers={"Authorization": f"Bearer {ghost}"})
    assert response.status_code == 401
    assert response.json()["error"] == "User not found. Please sign in again."


def test_session_returns_current_user(client, owner) -> None:
    response = client.get("/api/auth/session", headers=owner)
    assert response.status_code == 200
    assert response.json()["data"]["user"]["email"] == "owner@example.com"


def test_dev_sign_in_issues_usable_token(client) -> None:
    signed_in = client.post("/api/auth/token", json={"email": "Fresh@Example.com"})
    assert signed_in.status_code == 200
    data = signed_in.json()["data"]
    assert data["tokenType"] == "bearer"
    assert data["user"]["email"] == "fresh@example.com"
    assert data["user"]["name"] == "fresh"

    session = client.get("/api/auth/session", headers={"Authorization": f"Bearer {data['token']}"})
    assert session.status_code == 200
    assert session.json()["data"]["user"]["id"] == data["user"]["id"]

    again = client.post("/api/auth/token", json={"email": "fresh@example.com"}).json()["data"]
    assert again["user"]["id"] == data["user"]["id"]


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}
