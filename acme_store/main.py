import json
import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from acme_store import __version__
from acme_store.api import favorites, products, users
from acme_store.db.connection import Database, sanitize_database_url
from acme_store.db.schema import ensure_schema, reset_schema
from acme_store.db.seed import seed_demo_data
from acme_store.errors import ErrorKind, StoreError
from acme_store.schemas.error import ErrorType, ValidationErrorDetail
from acme_store.settings import AppSettings, get_settings
from acme_store.utils.error_responses import build_error_response, error_json_response
from acme_store.utils.request_context import (
    REQUEST_ID_HEADER,
    get_request_id,
    set_request_id,
)

# Configure logging
logging.basicConfig(
    level=get_settings().log_level_numeric,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

STORE_ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.DUPLICATE_USERNAME: status.HTTP_409_CONFLICT,
    ErrorKind.DUPLICATE_PRODUCT_NAME: status.HTTP_409_CONFLICT,
    ErrorKind.DUPLICATE_FAVORITE: status.HTTP_409_CONFLICT,
    ErrorKind.FAVORITE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.STORAGE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_STATUS_ERROR_TYPE: dict[int, ErrorType] = {
    status.HTTP_400_BAD_REQUEST: ErrorType.VALIDATION_ERROR,
    status.HTTP_404_NOT_FOUND: ErrorType.NOT_FOUND,
    status.HTTP_409_CONFLICT: ErrorType.CONFLICT,
}

# Request fields whose values are never echoed back in validation errors.
REDACTED_FIELDS = frozenset({"password"})


def _rejected_value(loc: tuple, value):
    """Return ``value`` in a form safe to echo in a 400 body, or ``None``."""
    if loc and loc[-1] in REDACTED_FIELDS:
        return None

    try:
        encoded = jsonable_encoder(value)
        if isinstance(encoded, dict):
            encoded = {
                key: item for key, item in encoded.items() if key not in REDACTED_FIELDS
            }
        # JSONResponse renders UTF-8; lone surrogates cannot be encoded.
        json.dumps(encoded, ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError):
        return None
    return encoded


def validate_environment(settings: AppSettings) -> None:
    """Log warnings for risky configuration."""
    warnings = settings.optional_config_warnings()
    if warnings:
        logger.warning("=" * 60)
        logger.warning("Environment Configuration Warnings:")
        for warning in warnings:
            logger.warning(f"  • {warning}")
        logger.warning("=" * 60)


async def bootstrap_schema(database: Database, settings: AppSettings) -> None:
    """Reset or create the schema according to ``settings``.

    ``SchemaError`` propagates so startup aborts instead of serving requests
    against a half-built schema.
    """

    if settings.reset_schema:
        logger.warning("RESET_SCHEMA enabled - dropping and recreating all tables")
        await reset_schema(database)
        if settings.seed_demo_data:
            await seed_demo_data(database)
    else:
        await ensure_schema(database)
    logger.info("Tables ready")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    settings: AppSettings = app.state.settings
    validate_environment(settings)

    database: Database | None = getattr(app.state, "database", None)
    owns_database = database is None
    if database is None:
        database = Database.from_settings(settings)
        app.state.database = database

    # Preflight logging
    logger.info("=" * 60)
    logger.info("Acme Store API - Database Preflight Check")
    logger.info("=" * 60)
    logger.info(f"Database Type: {database.dialect_name.upper()}")
    logger.info(f"Database URL: {sanitize_database_url(settings.database_url)}")
    logger.info("=" * 60)

    try:
        await bootstrap_schema(database, settings)
    except Exception:
        logger.critical("Failed to initialize application", exc_info=True)
        if owns_database:
            await database.dispose()
        raise

    yield

    logger.info("Shutting down Acme Store API")
    if owns_database:
        await database.dispose()


# Middleware to add request ID to each request
async def add_request_id(request: Request, call_next):
    """Add unique request ID to each request for tracking."""
    request_id = str(uuid.uuid4())
    set_request_id(request_id)
    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


# Exception handlers
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed path ids and request bodies as 400s."""
    errors = [
        ValidationErrorDetail(
            field=".".join(str(loc) for loc in error["loc"]),
            message=error["msg"],
            value=_rejected_value(tuple(error["loc"]), error.get("input")),
        )
        for error in exc.errors()
    ]

    logger.warning(
        "Validation error for request %s to %s: %s errors",
        get_request_id(),
        request.url.path,
        len(errors),
    )

    error_response = build_error_response(
        error_type=ErrorType.VALIDATION_ERROR,
        message="Request validation failed",
        status_code=status.HTTP_400_BAD_REQUEST,
        path=str(request.url.path),
        errors=errors,
    )
    return error_json_response(error_response)


async def store_exception_handler(request: Request, exc: StoreError):
    """Map a repository failure onto its HTTP status code."""
    status_code = STORE_ERROR_STATUS[exc.kind]

    if status_code >= 500:
        logger.error(
            "Storage error for request %s to %s: %s",
            get_request_id(),
            request.url.path,
            exc.message,
            exc_info=exc,
        )
        error_type = ErrorType.DATABASE_ERROR
    else:
        logger.info(
            "Request %s to %s rejected (%s): %s",
            get_request_id(),
            request.url.path,
            exc.kind.value,
            exc.message,
        )
        error_type = _STATUS_ERROR_TYPE[status_code]

    error_response = build_error_response(
        error_type=error_type,
        message=exc.message,
        status_code=status_code,
        path=str(request.url.path),
    )
    return error_json_response(error_response)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render ``HTTPException`` (including routing 404/405s) in the shared shape."""
    error_response = build_error_response(
        error_type=_STATUS_ERROR_TYPE.get(exc.status_code, ErrorType.INTERNAL_ERROR),
        message=str(exc.detail),
        status_code=exc.status_code,
        path=str(request.url.path),
    )
    response = error_json_response(error_response)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def generic_exception_handler(request: Request, exc: Exception):
    """Handle all other unhandled exceptions."""
    logger.exception(
        "Unhandled exception for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        type(exc).__name__,
    )

    error_response = build_error_response(
        error_type=ErrorType.INTERNAL_ERROR,
        message="Internal Server Error",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        path=str(request.url.path),
    )
    return error_json_response(error_response)


async def healthcheck() -> dict[str, str]:
    """Simple health endpoint for readiness checks."""
    return {"status": "ok"}


def create_app(
    settings: AppSettings | None = None,
    database: Database | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    A ``database`` supplied here is used as-is and left open at shutdown;
    otherwise the lifespan builds one from ``settings`` and disposes it.
    """

    app = FastAPI(
        title="Acme Store API",
        version=__version__,
        description="Users, products, and the favorites linking them.",
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.settings = settings or get_settings()
    if database is not None:
        app.state.database = database

    app.middleware("http")(add_request_id)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StoreError, store_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    app.add_api_route("/health", healthcheck, methods=["GET"], tags=["system"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(products.router, prefix="/api/products", tags=["products"])
    app.include_router(favorites.router, prefix="/api/users", tags=["favorites"])

    return app


app = create_app()
