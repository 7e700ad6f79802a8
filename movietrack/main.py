import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from movietrack.catalog.client import CatalogClient
from movietrack.db.connection import (
    dispose_engine,
    get_database_url,
    get_engine,
    get_session_factory,
    init_models,
)
from movietrack.exceptions import MovieNotFoundError
from movietrack.services.dependencies import ServiceContainer
from movietrack.services.favorites import FavoritesStore
from movietrack.services.movie_repository import MovieRepository
from movietrack.services.preferences import PreferenceStore
from movietrack.services.search_state import SearchState
from movietrack.settings import get_settings

from .api import favorites, movies, preferences
from .schemas.error import ErrorType
from .utils.error_responses import (
    build_error_response,
    build_validation_error_response,
    error_json,
)
from .utils.request_context import clear_request_id, get_request_id, set_request_id

settings = get_settings()

logging.basicConfig(
    level=settings.log_level_numeric,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _validate_environment() -> None:
    """Log warnings for optional configuration left at its defaults."""
    warnings = get_settings().optional_config_warnings()

    if warnings:
        logger.warning("=" * 60)
        logger.warning("Environment Configuration Warnings:")
        for warning in warnings:
            logger.warning(f"  • {warning}")
        logger.warning("=" * 60)


def validate_environment() -> None:
    """Public wrapper ensuring scripts can trigger configuration validation."""

    _validate_environment()


def _sanitize_database_url(url: str) -> str:
    """Sanitize database URL to hide password in logs."""
    if "://" not in url:
        return url

    scheme, rest = url.split("://", 1)

    if "@" in rest:
        auth, host_db = rest.split("@", 1)
        if ":" in auth:
            user, _ = auth.split(":", 1)
            return f"{scheme}://{user}:***@{host_db}"
        return f"{scheme}://{auth}@{host_db}"

    return url


async def build_services() -> ServiceContainer:
    """Create tables and wire the catalog, stores, and search state."""

    current = get_settings()
    await init_models(get_engine())
    session_factory = get_session_factory()

    catalog = CatalogClient.from_settings(current)
    repository = MovieRepository(
        catalog=catalog,
        favorites=FavoritesStore(session_factory),
    )
    preference_store = PreferenceStore(session_factory)
    search_state = SearchState(
        repository,
        preference_store,
        default_term=current.default_search_term,
    )
    return ServiceContainer(
        catalog=catalog,
        repository=repository,
        preferences=preference_store,
        search_state=search_state,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    validate_environment()

    current = get_settings()
    logger.info("=" * 60)
    logger.info("MovieTrack API - Startup")
    logger.info("=" * 60)
    logger.info(f"Database URL: {_sanitize_database_url(get_database_url())}")
    logger.info(f"Catalog search URL: {current.catalog_search_url}")
    logger.info(f"Initial search term: {current.default_search_term!r}")
    logger.info("=" * 60)

    services = await build_services()
    app.state.services = services

    snapshot = await services.search_state.load_initial()
    logger.info(
        "Initial load produced %s movies (catalog error: %s)",
        len(snapshot.movies),
        snapshot.last_error or "none",
    )

    yield

    logger.info("Shutting down MovieTrack API")
    await services.search_state.drain()
    await services.catalog.aclose()
    await dispose_engine()


app = FastAPI(
    title="MovieTrack API",
    version="0.1.0",
    description="Search the movie catalog and keep a local list of favorites.",
    lifespan=lifespan,
    redirect_slashes=False,
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add unique request ID to each request for tracking."""
    request_id = str(uuid.uuid4())
    token = set_request_id(request_id)
    response = await call_next(request)
    # Left in place when call_next raises so the 500 handler can still log it.
    clear_request_id(token)
    response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(RequestValidationError)
@app.exception_handler(ValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError | ValidationError
):
    """Handle request-body and model validation errors."""
    payload = build_validation_error_response(
        raw_errors=exc.errors(), path=request.url.path
    )
    logger.warning(
        "Validation error for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        payload.detail,
    )
    return error_json(payload)


@app.exception_handler(MovieNotFoundError)
async def movie_not_found_handler(request: Request, exc: MovieNotFoundError):
    return error_json(
        build_error_response(
            error_type=ErrorType.NOT_FOUND,
            message="Movie not found",
            detail=str(exc),
            status_code=status.HTTP_404_NOT_FOUND,
            path=request.url.path,
        )
    )


@app.exception_handler(OperationalError)
async def database_unavailable_handler(request: Request, exc: OperationalError):
    """SQLite could not open the file or the database is locked."""
    logger.error(
        "Database unavailable for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        exc.orig,
    )
    return error_json(
        build_error_response(
            error_type=ErrorType.DATABASE_ERROR,
            message="Database unavailable",
            detail="The favorites database is busy or could not be opened.",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            path=request.url.path,
            retry_after=2,
        )
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(
        "Database error for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        exc,
    )
    return error_json(
        build_error_response(
            error_type=ErrorType.DATABASE_ERROR,
            message="Database operation failed",
            detail="An error occurred while accessing the favorites database.",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            path=request.url.path,
        )
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled exception for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        type(exc).__name__,
    )
    return error_json(
        build_error_response(
            error_type=ErrorType.INTERNAL_ERROR,
            message="Internal server error",
            detail=f"An unexpected error occurred: {type(exc).__name__}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            path=request.url.path,
        )
    )


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    """Simple health endpoint for readiness checks."""
    return {"status": "ok"}


app.include_router(movies.router, prefix="/movies", tags=["movies"])
app.include_router(favorites.router, prefix="/favorites", tags=["favorites"])
app.include_router(preferences.router, prefix="/preferences", tags=["preferences"])
