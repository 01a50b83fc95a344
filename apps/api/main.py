# apps/api/main.py

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.database import Database
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from apps.api.routers import auth, certificates, courses, students
from apps.api.schemas.common import envelope
from core.config import Settings, settings
from core.errors import Internal, PortalError
from core.logging import configure_logging
from services.observability.metrics import timing_metric
from services.persistence.mongo import connect, ensure_indexes

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(envelope(success=False, message=message), status_code=status_code)


def _summarize(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = [str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path")]
    field = ".".join(loc)
    return f"{field}: {first.get('msg')}" if field else str(first.get("msg"))


def create_app(cfg: Settings | None = None, db: Database | None = None) -> FastAPI:
    """
    Build the API. Pass `db` to reuse an existing handle (tests do);
    otherwise one client is opened at startup and closed at shutdown.
    """
    cfg = cfg or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging()
        client = None
        if getattr(app.state, "db", None) is None:
            client = connect(cfg)
            app.state.db = client[cfg.MONGO_DB]
            ensure_indexes(app.state.db)
        try:
            yield
        finally:
            if client is not None:
                client.close()

    app = FastAPI(title="Student Portal API", version="0.1.0", lifespan=lifespan)
    app.state.settings = cfg
    app.state.db = db
    if db is not None:
        ensure_indexes(db)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_timing(request: Request, call_next):
        with timing_metric(f"{request.method} {request.url.path}"):
            return await call_next(request)

    @app.exception_handler(PortalError)
    async def portal_error(request: Request, exc: PortalError):
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_invalid(request: Request, exc: RequestValidationError):
        return _error(422, _summarize(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(PyMongoError)
    async def db_error(request: Request, exc: PyMongoError):
        logger.exception("database error on %s %s", request.method, request.url.path)
        return _error(Internal.status_code, Internal.default_message)

    @app.exception_handler(Exception)
    async def unexpected(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return _error(Internal.status_code, Internal.default_message)

    @app.get("/healthz")
    def healthz() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(students.router)
    app.include_router(certificates.router)
    app.include_router(courses.router)
    app.include_router(auth.router)
    return app


app = create_app()
