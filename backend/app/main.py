"""Expose the Pump Master FastAPI app, its CORS policy and its error envelope."""

import logging
import os
import re
import uuid
from contextlib import asynccontextmanager
from typing import Iterable

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import schemas
from .errors import ErrorKind, HTTP_STATUS_BY_KIND, ServiceError, ValidationError
from .migrations import run_database_migrations
from .routers import auth_router, dashboard_router, inspections_router, pumps_router

LOGGER = logging.getLogger(__name__)

RUN_MIGRATIONS_ENV = "RUN_MIGRATIONS_ON_STARTUP"
ALLOWED_ORIGINS_ENV = "BACKEND_ALLOWED_ORIGINS"
TRACE_ID_HEADER = "X-Request-ID"

LOCAL_DEVELOPMENT_ORIGIN = "http://localhost:5173"
LOCALHOST_ORIGIN_REGEX = r"https?://(localhost|127\.0\.0\.1|0\.0\.0\.0)(:\d+)?$"

DEFAULT_ALLOWED_ORIGINS = {
    LOCAL_DEVELOPMENT_ORIGIN,
    "http://127.0.0.1:5173",
    "http://localhost:4173",
    "http://127.0.0.1:4173",
}

_KIND_BY_HTTP_STATUS = {
    401: ErrorKind.INVALID_TOKEN,
    403: ErrorKind.ACCESS_DENIED,
    404: ErrorKind.NOT_FOUND,
    409: ErrorKind.CONFLICT,
}


def _normalize_origin(origin: str) -> str | None:
    stripped = origin.strip()
    if not stripped:
        return None
    return stripped.rstrip("/")


def _read_allowed_origins(raw_origins: Iterable[str]) -> list[str]:
    normalized = {_normalize_origin(origin) for origin in raw_origins}
    return sorted({origin for origin in normalized if origin})


def _split_raw_origins(raw_value: str) -> list[str]:
    """Split a raw origin string using commas or whitespace as separators."""

    return [origin for origin in re.split(r"[\s,]+", raw_value) if origin]


def _load_allowed_origins_from_env() -> list[str]:
    raw_value = os.getenv(ALLOWED_ORIGINS_ENV)
    if not raw_value:
        return []
    return _read_allowed_origins(_split_raw_origins(raw_value))


def _resolve_allowed_origins() -> list[str]:
    env_origins = _load_allowed_origins_from_env()
    if env_origins:
        return env_origins
    return _read_allowed_origins(DEFAULT_ALLOWED_ORIGINS)


def _read_bool_env(name: str, default: bool = True) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def ensure_database_is_ready() -> None:
    """Apply pending database migrations when the service starts."""

    if not _read_bool_env(RUN_MIGRATIONS_ENV, True):
        LOGGER.info("Startup migrations disabled via %s", RUN_MIGRATIONS_ENV)
        return
    LOGGER.info("Ensuring database schema is up to date before serving requests")
    run_database_migrations()


@asynccontextmanager
async def lifespan(_: FastAPI):
    ensure_database_is_ready()
    yield


app = FastAPI(title="Pump Master API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_resolve_allowed_origins(),
    allow_origin_regex=LOCALHOST_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(pumps_router, prefix="/api/pumps", tags=["pumps"])
app.include_router(inspections_router, prefix="/api/inspections", tags=["inspections"])
app.include_router(dashboard_router, prefix="/api/dashboard", tags=["dashboard"])


def _trace_id(request: Request) -> str:
    return request.headers.get(TRACE_ID_HEADER) or uuid.uuid4().hex


def _error_response(
    request: Request,
    *,
    status_code: int,
    kind: ErrorKind,
    message: str,
    details: str | None = None,
    validation_errors: dict[str, list[str]] | None = None,
) -> JSONResponse:
    body = schemas.ErrorResponse(
        error_code=kind,
        message=message,
        details=details,
        validation_errors=validation_errors or None,
        trace_id=_trace_id(request),
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body.model_dump(by_alias=True, exclude_none=True)),
    )


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        LOGGER.error("%s on %s %s: %s", exc.kind.value, request.method, request.url.path, exc.message)
    return _error_response(
        request,
        status_code=exc.status_code,
        kind=exc.kind,
        message=exc.message,
        details=exc.details,
        validation_errors=exc.errors if isinstance(exc, ValidationError) else None,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.setdefault(".".join(location) or "request", []).append(error.get("msg", "Invalid value"))
    return _error_response(
        request,
        status_code=HTTP_STATUS_BY_KIND[ErrorKind.INVALID_PARAMETER],
        kind=ErrorKind.INVALID_PARAMETER,
        message="One or more parameters are invalid.",
        validation_errors=errors,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    kind = _KIND_BY_HTTP_STATUS.get(exc.status_code, ErrorKind.INTERNAL_SERVER_ERROR)
    if exc.status_code < 500 and kind is ErrorKind.INTERNAL_SERVER_ERROR:
        kind = ErrorKind.INVALID_PARAMETER
    response = _error_response(
        request,
        status_code=exc.status_code,
        kind=kind,
        message=str(exc.detail),
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return _error_response(
        request,
        status_code=HTTP_STATUS_BY_KIND[ErrorKind.INTERNAL_SERVER_ERROR],
        kind=ErrorKind.INTERNAL_SERVER_ERROR,
        message="An unexpected error occurred.",
    )


@app.get("/", tags=["health"])
def read_root() -> dict[str, str]:
    """Return a simple health check response."""
    return {"status": "ok"}
