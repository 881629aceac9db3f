from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from tocs.db.models.user import User
from tocs.db.session import get_sessionmaker
from tocs.services.auth_service import AuthService


def get_db() -> Generator[Session, None, None]:
    session_factory = get_sessionmaker()
    db = session_factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_current_user(
    authorization: Annotated[str | None, Header(alias="Authorization")] = None,
    db: Session = Depends(get_db),
) -> User:
    """Raises UnauthorizedError (401) when the bearer token is missing or invalid."""
    return AuthService().authenticate(db, authorization)
