"""Bearer-token sessions signed with the application secret."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel
from sqlalchemy.orm import Session

from tocs.config.settings import AppSettings, get_settings
from tocs.db.models.user import User
from tocs.db.repositories.user_repo import UserRepository
from tocs.middleware.error_handler import ServiceError, UnauthorizedError
from tocs.schemas.auth import SessionUserOut, TokenResponse

logger = logging.getLogger(__name__)


class TokenPayload(BaseModel):
    sub: str
    iat: int
    exp: int


class AuthService:
    """Issue and validate HS256 session tokens."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        self.settings = settings or get_settings()

    def _require_secret(self) -> str:
        secret = self.settings.jwt_secret_key
        if not secret:
            raise ServiceError("JWT secret is not configured")
        return secret

    def create_token(self, user_id: str, *, expires_in: timedelta | None = None) -> tuple[str, datetime]:
        now = datetime.now(timezone.utc)
        expires_at = now + (expires_in or timedelta(days=self.settings.token_ttl_days))
        payload = TokenPayload(sub=user_id, iat=int(now.timestamp()), exp=int(expires_at.timestamp()))
        token = jwt.encode(payload.model_dump(), self._require_secret(), algorithm=self.settings.jwt_algorithm)
        return token, expires_at

    def validate_token(self, token: str) -> TokenPayload:
        try:
            decoded = jwt.decode(token, self._require_secret(), algorithms=[self.settings.jwt_algorithm])
        except jwt.ExpiredSignatureError as exc:
            raise UnauthorizedError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise UnauthorizedError("Invalid token") from exc
        return TokenPayload(**decoded)

    def authenticate(self, db: Session, authorization: str | None) -> User:
        """Resolve the ``Authorization: Bearer <token>`` header to a stored user."""
        if not authorization:
            raise UnauthorizedError("Unauthorized")
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token:
            raise UnauthorizedError("Authorization header must be in format: Bearer <token>")
        payload = self.validate_token(token.strip())
        user = UserRepository(db).get_user(payload.sub)
        if user is None:
            raise UnauthorizedError("User not found. Please sign in again.")
        return user


class SessionService:
    """Development sign-in; external identity providers sit in front of this in production."""

    def __init__(self, db: Session, auth: AuthService | None = None) -> None:
        self.repo = UserRepository(db)
        self.auth = auth or AuthService()

    @staticmethod
    def user_out(user: User) -> SessionUserOut:
        return SessionUserOut(id=user.id, email=user.email, name=user.name, image=user.image)

    def sign_in(self, *, email: str, name: str | None = None) -> TokenResponse:
        if not self.auth.settings.enable_dev_login:
            raise ServiceError("Development sign-in is disabled")
        user = self.repo.get_or_create_by_email(email, name=name)
        self.repo.commit()
        token, expires_at = self.auth.create_token(user.id)
        logger.info("Issued session token for %s", user.email)
        return TokenResponse(token=token, expiresAt=expires_at.isoformat(), user=self.user_out(user))
