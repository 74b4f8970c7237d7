# src/ballot_box/main.py
"""Main entry point for the Ballot Box application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException

from ballot_box.api.v1 import admin_router, auth_router, votes_router
from ballot_box.core.errors import (
    AppError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
)
from ballot_box.core.logging import configure_logging
from ballot_box.core.settings import Settings, get_settings
from ballot_box.db.session import build_engine, build_session_factory, create_tables
from ballot_box.schemas.common import ErrorDetailOut, ErrorResponse

logger = logging.getLogger(__name__)

REQUEST_VALIDATION_CODE = 20002
GENERIC_HTTP_ERROR_CODE = 99998
HTTP_ERROR_CODES = {
    401: UnauthorizedError.code,
    403: ForbiddenError.code,
    404: NotFoundError.code,
}


def _error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    """Render a deliberate application error."""
    if isinstance(exc, InternalError):
        logger.error("Internal error on %s %s: %s", request.method, request.url.path, exc.message)
        return await handle_unexpected_error(request, exc)
    body = ErrorResponse(
        code=exc.code,
        message=exc.message,
        details=[ErrorDetailOut(field=d.field, error=d.error) for d in exc.details],
    )
    return _error_response(exc.status_code, body)


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework-level errors such as unknown routes in the common shape."""
    body = ErrorResponse(
        code=HTTP_ERROR_CODES.get(exc.status_code, GENERIC_HTTP_ERROR_CODE),
        message=str(exc.detail),
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(),
        headers=getattr(exc, "headers", None),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request schema failures as 422 with per-field details."""
    details = [
        ErrorDetailOut(
            field=".".join(str(part) for part in err.get("loc", ()) if part not in {"body", "query"}),
            error=str(err.get("msg", "invalid value")),
        )
        for err in exc.errors()
    ]
    body = ErrorResponse(
        code=REQUEST_VALIDATION_CODE,
        message="Validation error",
        details=details,
    )
    return _error_response(422, body)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Render anything else as a generic 500 without leaking internals."""
    if not isinstance(exc, AppError):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    body = ErrorResponse(code=InternalError.code, message="Internal server error")
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, body)


def create_app(settings: Settings | None = None, *, engine: Engine | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Configuration to use; read from the environment when omitted.
        engine: Pre-built engine to bind sessions to; built from
            ``settings.database_url`` when omitted.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    owns_engine = engine is None
    engine = engine or build_engine(settings.database_url, echo=settings.sql_debug)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        create_tables(engine)
        logger.info("%s ready on port %s", settings.app_name, settings.port)
        yield
        if owns_engine:
            engine.dispose()
        logger.info("Shutting down %s", settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        description="Single-election voting API",
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, handle_app_error)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, handle_http_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(auth_router)
    app.include_router(votes_router)
    app.include_router(admin_router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        return {"status": "ok"}

    return app


def run() -> None:
    """Serve the application with uvicorn using environment settings."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "ballot_box.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
