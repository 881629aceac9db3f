from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tocs.api.deps import get_current_user, get_db
from tocs.api.envelope import ok
from tocs.db.models.user import User
from tocs.middleware.error_handler import error_response
from tocs.schemas.auth import SessionResponse, TokenRequest
from tocs.services.auth_service import SessionService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/session")
def get_session(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        data = SessionResponse(user=SessionService(db).user_out(user))
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.post("/token")
def create_token(request: TokenRequest, db: Session = Depends(get_db)):
    try:
        data = SessionService(db).sign_in(email=request.email, name=request.name)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)
