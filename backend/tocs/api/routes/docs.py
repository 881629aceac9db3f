from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tocs.api.deps import get_db
from tocs.api.envelope import ok
from tocs.middleware.error_handler import error_response
from tocs.services.docs_service import DocsService

router = APIRouter(tags=["docs"])


@router.get("/docs/{project_id}")
def get_public_docs(project_id: str, db: Session = Depends(get_db)):
    try:
        data = DocsService(db).get_public_docs(project_id)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)
