"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.api.http.routers.books import router as books_router
from src.catalog.api.http.routers.health import router as health_router
from src.catalog.api.utils.app_startup import configure_logging
from src.catalog.core.errors import NotFoundError
from src.catalog.core.services import DbManageService, DbSessionService
from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.context import get_config

PACKAGE_DIR = Path(__file__).resolve().parents[2]
TEMPLATES_DIR = PACKAGE_DIR / "templates"
STATIC_DIR = PACKAGE_DIR / "static"

__all__ = ["app", "create_app", "build_dependencies", "startup", "shutdown"]


def build_dependencies(config: ConfigData | None = None) -> ApplicationDependencies:
    """Build the collaborators injected into request handlers."""
    config = config or get_config()
    return ApplicationDependencies(
        config=config,
        database_service=DbSessionService(config),
        templates=Jinja2Templates(directory=str(TEMPLATES_DIR)),
    )


# --- Lifecycle hooks ---
async def startup(app: FastAPI) -> None:
    if getattr(app.state, "app_dependencies", None) is None:
        app.state.app_dependencies = build_dependencies()

    deps: ApplicationDependencies = app.state.app_dependencies
    logger.info(
        "Starting up application in {} environment", deps.config.app.environment
    )
    DbManageService(deps.database_service.engine).create_all()


async def shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    deps: ApplicationDependencies | None = getattr(app.state, "app_dependencies", None)
    if deps is not None:
        deps.database_service.dispose()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup(app)
    try:
        yield
    finally:
        await shutdown(app)


# --- Rendering helpers ---
def _dependencies(request: Request) -> ApplicationDependencies:
    deps: ApplicationDependencies | None = getattr(
        request.app.state, "app_dependencies", None
    )
    if deps is None:
        # Errors raised before startup finished
        deps = request.app.state.app_dependencies = build_dependencies()
    return deps


def render_not_found(request: Request) -> Response:
    return _dependencies(request).templates.TemplateResponse(
        request, "page-not-found.html", {"title": "Page Not Found"}, status_code=404
    )


def render_error(request: Request, status_code: int, message: str) -> Response:
    deps = _dependencies(request)
    return deps.templates.TemplateResponse(
        request,
        "error.html",
        {
            "title": "Server Error" if status_code >= 500 else "Error",
            "status": status_code,
            "message": message,
            "show_details": deps.config.app.environment != "production",
        },
        status_code=status_code,
    )


# --- Exception handlers ---
async def handle_not_found(request: Request, exc: NotFoundError) -> Response:
    """Answer a missing book or page according to ``app.not_found_policy``."""
    if _dependencies(request).config.app.not_found_policy == "escalate":
        logger.bind(status_code=404, error_type=type(exc).__name__).error(
            "request.not_found: {}", exc
        )
        return render_error(request, 404, str(exc))

    logger.bind(status_code=404).info("request.not_found: {}", exc)
    return render_not_found(request)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> Response:
    if exc.status_code == 404:
        return render_not_found(request)
    return render_error(request, exc.status_code, str(exc.detail))


async def handle_request_validation(request: Request, exc: RequestValidationError) -> Response:
    logger.bind(status_code=422, error_type=type(exc).__name__).warning(
        "request.validation_error: {}", exc.errors()
    )
    return render_error(request, 422, "The request could not be understood.")


# --- Request logging middleware ---
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
        "user_agent": request.headers.get("user-agent", "unknown"),
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)
        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            response = render_error(request, 500, "Internal Server Error")
            response.headers["X-Request-ID"] = request_id
            return response

        duration_ms = (time.perf_counter() - start) * 1000
        logger.bind(
            status_code=response.status_code,
            duration_ms=round(duration_ms, 1),
        ).info("request.end")
        response.headers.setdefault("X-Request-ID", request_id)
        return response


def create_app(dependencies: ApplicationDependencies | None = None) -> FastAPI:
    """Build the catalog application.

    ``dependencies`` replaces the collaborators normally built at startup.
    """
    config = dependencies.config if dependencies is not None else get_config()
    application = FastAPI(
        title="Library Catalog",
        lifespan=lifespan,
        docs_url=None if config.app.environment == "production" else "/docs",
        redoc_url=None if config.app.environment == "production" else "/redoc",
    )
    if dependencies is not None:
        application.state.app_dependencies = dependencies

    application.middleware("http")(log_requests)

    application.add_exception_handler(NotFoundError, handle_not_found)
    application.add_exception_handler(StarletteHTTPException, handle_http_exception)
    application.add_exception_handler(RequestValidationError, handle_request_validation)

    application.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    # --- Router registration ---
    application.include_router(health_router)
    application.include_router(books_router)

    return application


configure_logging()

app = create_app()
