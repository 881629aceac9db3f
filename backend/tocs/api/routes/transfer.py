from urllib.parse import quote

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from tocs.api.deps import get_current_user, get_db
from tocs.api.envelope import ok
from tocs.db.models.user import User
from tocs.middleware.error_handler import error_response
from tocs.schemas.transfer import DiscoverRequest, ImportOpenAPIRequest
from tocs.services.export_service import ExportService
from tocs.services.openapi_discovery import discover_documents
from tocs.services.openapi_import import OpenAPIImportService

router = APIRouter(prefix="/api", tags=["transfer"])


def _download(filename: str, document: dict) -> JSONResponse:
    """Raw JSON body (no envelope) served as a file attachment."""
    fallback = filename.encode("ascii", "ignore").decode().replace('"', "") or "export.json"
    disposition = f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"
    return JSONResponse(content=document, headers={"Content-Disposition": disposition})


@router.get("/projects/{project_id}/export/openapi")
def export_openapi(project_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        filename, document = ExportService(db).export_openapi(project_id, user.id)
        return _download(filename, document)
    except Exception as exc:
        return error_response(exc, db)


@router.get("/projects/{project_id}/export/postman")
def export_postman(project_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        filename, document = ExportService(db).export_postman(project_id, user.id)
        return _download(filename, document)
    except Exception as exc:
        return error_response(exc, db)


@router.post("/projects/{project_id}/import/openapi")
def import_openapi(
    project_id: str,
    request: ImportOpenAPIRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        data = OpenAPIImportService(db).import_document(project_id, user.id, request)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)


@router.post("/import/discover")
def discover(request: DiscoverRequest, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        data = discover_documents(request.serverUrl)
        return ok(data.model_dump(by_alias=True))
    except Exception as exc:
        return error_response(exc, db)
