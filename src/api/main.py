from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.core.errors import (
    AmbiguousResultError,
    ClinicQueryError,
    GatewayError,
    NoResultError,
    ValidationError,
)
from src.core.logging import configure_logging, correlation_id_var
from src.core.settings import get_app_settings
from src.db.config import get_settings
from src.db.seed import seed_all
from src.db.session import dispose_engine
from src.schemas.common import ErrorInfo, ErrorResponse, MessageResponse

# Routers
from src.api.routes.owners import router as owners_router
from src.api.routes.pets import router as pets_router
from src.api.routes.veterinarians import router as veterinarians_router

settings = get_app_settings()

# Configure structured logging once at import
configure_logging(settings.LOG_LEVEL, sql_echo=get_settings().SQL_ECHO)
logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "Health", "description": "Liveness probe."},
    {"name": "Pets", "description": "Pet listing, filters, ordering, search and aggregates."},
    {"name": "Owners", "description": "Owner listing and pet-count joins."},
    {"name": "Veterinarians", "description": "Veterinarian listing."},
]

app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    openapi_tags=openapi_tags,
)

# Query layer error -> (HTTP status, error type code)
_ERROR_STATUS: dict[type[ClinicQueryError], tuple[int, str]] = {
    ValidationError: (422, "validation_error"),
    NoResultError: (404, "no_result"),
    AmbiguousResultError: (409, "ambiguous_result"),
    GatewayError: (503, "gateway_error"),
}


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    """
    Enrich request context with a correlation_id for logging and error responses.
    Adds 'X-Correlation-ID' to every response.
    """
    corr = request.headers.get("X-Correlation-ID") or request.headers.get("X-Request-ID") or str(uuid4())
    token_corr = correlation_id_var.set(corr)
    request.state.correlation_id = corr

    logger.info("Incoming request %s %s", request.method, request.url.path)
    try:
        response = await call_next(request)
    finally:
        correlation_id_var.reset(token_corr)

    response.headers["X-Correlation-ID"] = corr
    return response


def _build_error_response(
    request: Request,
    status_code: int,
    error_type: str,
    message: str,
    details: Any | None = None,
) -> JSONResponse:
    """Build a standardized ErrorResponse JSONResponse."""
    ts = datetime.now(tz=timezone.utc)
    corr = getattr(request.state, "correlation_id", None)
    err = ErrorResponse(
        status=status_code,
        error=ErrorInfo(type=error_type, message=message, details=details),
        correlation_id=corr,
        path=request.url.path,
        method=request.method,
        timestamp=ts,
    )
    return JSONResponse(status_code=status_code, content=err.model_dump(mode="json"))


@app.exception_handler(ClinicQueryError)
async def query_error_handler(request: Request, exc: ClinicQueryError):
    """
    Map query layer errors onto HTTP statuses with the standard error envelope.
    """
    status_code, error_type = 500, "query_error"
    for klass, mapped in _ERROR_STATUS.items():
        if isinstance(exc, klass):
            status_code, error_type = mapped
            break
    details = {k: str(v) for k, v in exc.context.items()} or None
    if status_code >= 500:
        details = None
    return _build_error_response(
        request=request,
        status_code=status_code,
        error_type=error_type,
        message=exc.message,
        details=details,
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """
    Global handler for HTTPException to produce a standardized error envelope.
    """
    detail = exc.detail if isinstance(exc.detail, str) else "HTTP Error"
    return _build_error_response(
        request=request,
        status_code=exc.status_code,
        error_type="http_error",
        message=str(detail),
        details=None if isinstance(exc.detail, str) else exc.detail,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Global handler for request validation errors with a standard structure.
    """
    return _build_error_response(
        request=request,
        status_code=422,
        error_type="validation_error",
        message="Request validation failed",
        details=exc.errors(),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Catch-all handler to avoid leaking stack traces and to return a structured error.
    """
    logger.exception("Unhandled error processing request")
    return _build_error_response(
        request=request,
        status_code=500,
        error_type="internal_error",
        message="An unexpected error occurred",
        details=None,
    )


@app.on_event("startup")
async def on_startup() -> None:
    """
    Optionally create the schema and load sample data on service startup.
    """
    logger.info(
        "Starting %s %s (environment=%s)",
        settings.APP_NAME,
        settings.APP_VERSION,
        settings.ENVIRONMENT or "unset",
    )
    if settings.AUTO_SEED:
        logger.info("Running database seeding...")
        await seed_all()
        logger.info("Seeding completed.")


@app.on_event("shutdown")
async def on_shutdown() -> None:
    """Release pooled connections."""
    await dispose_engine()


# Build API v1 router and include sub-routers
api_v1 = APIRouter(prefix="/api/v1")


# PUBLIC_INTERFACE
@api_v1.get(
    "/health",
    response_model=MessageResponse,
    summary="Health Check",
    tags=["Health"],
)
def health_check() -> MessageResponse:
    """
    Basic liveness health check endpoint.

    Returns:
        MessageResponse: Simple confirmation that the service is running.
    """
    return MessageResponse(message="Healthy")


api_v1.include_router(pets_router)
api_v1.include_router(owners_router)
api_v1.include_router(veterinarians_router)

# Attach api_v1 to app
app.include_router(api_v1)
