import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from tocs.api.routes.auth import router as auth_router
from tocs.api.routes.docs import router as docs_router
from tocs.api.routes.endpoints import router as endpoints_router
from tocs.api.routes.folders import router as folders_router
from tocs.api.routes.histories import router as histories_router
from tocs.api.routes.projects import router as projects_router
from tocs.api.routes.proxy import router as proxy_router
from tocs.api.routes.schemas import router as schemas_router
from tocs.api.routes.transfer import router as transfer_router
from tocs.api.routes.variables import router as variables_router
from tocs.config.settings import get_settings
from tocs.db.seed import seed_app_data
from tocs.db.session import session_scope
from tocs.middleware.error_handler import (
    ServiceError,
    catch_all_handler,
    service_error_handler,
    validation_error_handler,
)

logger = logging.getLogger(__name__)


def _configure_app_logging() -> None:
    """Ensure tocs.* logs are visible under the same sink as uvicorn error logs."""
    app_logger = logging.getLogger("tocs")
    uvicorn_error_logger = logging.getLogger("uvicorn.error")

    if uvicorn_error_logger.handlers:
        app_logger.handlers = list(uvicorn_error_logger.handlers)
        app_logger.setLevel(uvicorn_error_logger.level or logging.INFO)
        app_logger.propagate = False
        return

    if not app_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(levelname)s:     %(name)s - %(message)s")
        )
        app_logger.addHandler(handler)
    app_logger.setLevel(logging.INFO)
    app_logger.propagate = False


@asynccontextmanager
async def lifespan(app: FastAPI):
    _configure_app_logging()

    # Schema managed by Alembic; the seed only bootstraps a fresh database.
    with session_scope() as session:
        seed_app_data(session)

    settings = get_settings()
    if not settings.jwt_secret_key:
        logger.warning("JWT_SECRET_KEY is not set - authenticated routes will fail")
    if settings.enable_dev_login:
        logger.info("Development sign-in is enabled at POST /api/auth/token")

    yield


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register error handlers
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(Exception, catch_all_handler)

    app.include_router(auth_router)
    app.include_router(projects_router)
    app.include_router(folders_router)
    app.include_router(endpoints_router)
    app.include_router(histories_router)
    app.include_router(variables_router)
    app.include_router(schemas_router)
    app.include_router(transfer_router)
    app.include_router(proxy_router)
    app.include_router(docs_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
