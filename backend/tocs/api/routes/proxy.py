from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tocs.api.deps import get_current_user, get_db
from tocs.api.envelope import ok
from tocs.db.models.user import User
from tocs.middleware.error_handler import error_response
from tocs.schemas.proxy import ProxyRequest
from tocs.services.request_executor import RequestExecutor

router = APIRouter(prefix="/api/proxy", tags=["proxy"])


@router.post("")
def proxy_request(request: ProxyRequest, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        data = RequestExecutor(db).proxy(user.id, request)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)
