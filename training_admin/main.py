"""Training Admin API - Main Application."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from training_admin.assignments.router import router as assignments_router
from training_admin.assignments.service import AssignmentService
from training_admin.auth.router import router as auth_router
from training_admin.auth.service import AuthService
from training_admin.batches.router import router as batches_router
from training_admin.batches.service import BatchService
from training_admin.config import Settings, get_settings
from training_admin.core.context import get_request_id
from training_admin.core.database import init_async_cassandra, shutdown_async_cassandra
from training_admin.core.logging import configure_structlog, get_logger
from training_admin.core.middleware import RequestContextMiddleware
from training_admin.employees.router import router as employees_router
from training_admin.employees.service import EmployeeService
from training_admin.health.router import router as health_router
from training_admin.progress.router import router as progress_router
from training_admin.progress.service import ProgressService
from training_admin.reports.router import router as reports_router
from training_admin.reports.service import ReportService
from training_admin.store import (
    CassandraStateRepository,
    DataStore,
    FileStateRepository,
    StateRepository,
    StateStorageError,
)
from training_admin.training_modules.router import router as modules_router
from training_admin.training_modules.service import ModuleService


logger = get_logger(__name__)


async def build_repository(settings: Settings) -> StateRepository:
    """State repository for the configured backend."""
    if settings.storage_backend == "cassandra":
        session = await init_async_cassandra(settings)
        return CassandraStateRepository(session, settings.cassandra_keyspace)
    return FileStateRepository(Path(settings.state_dir))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    logger.info(
        "starting_application",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
        storage_backend=settings.storage_backend,
    )

    try:
        repository = await build_repository(settings)

        data_store = DataStore(repository, settings.state_storage_key)
        await data_store.load(seed=settings.seed_demo_data)
        app.state.data_store = data_store

        auth_service = AuthService(repository, settings)
        await auth_service.load()
        app.state.auth_service = auth_service
        logger.info("auth_service_initialized")

        app.state.module_service = ModuleService(data_store, settings)
        app.state.employee_service = EmployeeService(data_store)
        app.state.batch_service = BatchService(data_store, settings)
        app.state.progress_service = ProgressService(data_store)
        app.state.assignment_service = AssignmentService(data_store)
        app.state.report_service = ReportService(data_store, settings)
        logger.info("training_services_initialized")
    except Exception as e:
        logger.warning(
            "state_store_init_skipped",
            error=str(e),
            message="Running without a state store",
        )

    yield

    # Shutdown
    logger.info("shutting_down_application")
    if settings.storage_backend == "cassandra":
        await shutdown_async_cassandra()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    configure_structlog(settings, log_dir=Path(settings.log_dir))

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Training administration API",
        debug=False,
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
    )
    app.state.settings = settings

    # Request context middleware (must be added first - outermost)
    app.add_middleware(
        RequestContextMiddleware,
        log_requests=settings.log_requests,
        exclude_paths=settings.log_exclude_paths,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        max_age=settings.cors_max_age,
    )

    def _get_request_id_safe(request: Request) -> str | None:
        if hasattr(request.state, "request_id"):
            return request.state.request_id
        return get_request_id()

    def _error_body(request: Request, status_code: int, message: str) -> dict:
        return {
            "error": True,
            "message": message,
            "status_code": status_code,
            "request_id": _get_request_id_safe(request),
        }

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> ORJSONResponse:
        """Handle HTTP exceptions with safe error messages."""
        logger.warning(
            "http_exception",
            status_code=exc.status_code,
            detail=str(exc.detail),
            path=request.url.path,
            method=request.method,
        )

        message = (
            str(exc.detail)
            if exc.status_code < status.HTTP_500_INTERNAL_SERVER_ERROR
            else "Internal server error"
        )
        return ORJSONResponse(
            status_code=exc.status_code,
            content=_error_body(request, exc.status_code, message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> ORJSONResponse:
        """Handle validation errors (field errors are safe to expose)."""
        logger.warning(
            "validation_error",
            errors=exc.errors(),
            path=request.url.path,
            method=request.method,
        )

        content = _error_body(
            request, status.HTTP_422_UNPROCESSABLE_ENTITY, "Validation error"
        )
        content["details"] = [
            {
                "field": ".".join(str(loc) for loc in err.get("loc", [])),
                "message": err.get("msg", "Invalid value"),
            }
            for err in exc.errors()
        ]
        return ORJSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=content
        )

    @app.exception_handler(StateStorageError)
    async def storage_exception_handler(
        request: Request, exc: StateStorageError
    ) -> ORJSONResponse:
        logger.error(
            "state_storage_failed",
            error=exc.message,
            storage_key=exc.key,
            path=request.url.path,
            method=request.method,
        )
        return ORJSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=_error_body(
                request,
                status.HTTP_503_SERVICE_UNAVAILABLE,
                "Training data could not be saved. Please try again later.",
            ),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request, exc: Exception
    ) -> ORJSONResponse:
        """Catch-all handler for unhandled exceptions.

        Details are logged internally; the response carries a generic message.
        """
        logger.exception(
            "unhandled_exception",
            error_type=type(exc).__name__,
            error_message=str(exc),
            path=request.url.path,
            method=request.method,
        )

        return ORJSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(
                request,
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "An unexpected error occurred. Please try again later.",
            ),
        )

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(modules_router)
    app.include_router(employees_router)
    app.include_router(batches_router)
    app.include_router(progress_router)
    app.include_router(assignments_router)
    app.include_router(reports_router)

    @app.get("/", include_in_schema=False)
    async def root(request: Request) -> dict[str, str]:
        """Root endpoint."""
        return {
            "message": "Training Admin API",
            "version": settings.app_version,
            "docs": f"{request.url}docs",
        }

    return app


app = create_app()
