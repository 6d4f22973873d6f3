"""FastAPI application factory and setup."""

import asyncio
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from blog_api import __version__
from blog_api.api.http.app_data import ApplicationDependencies
from blog_api.api.http.errors import error_response, register_error_handlers
from blog_api.api.http.routers.health import router as health_router
from blog_api.api.http.routers.posts import router as posts_router
from blog_api.api.http.routers.users import router as users_router
from blog_api.api.utils.app_startup import configure_logging
from blog_api.core.services import DbSessionService, MigrationRunner
from blog_api.runtime.context import get_config


# --- Request logging middleware ---
async def log_requests(request: Request, call_next):
    # Correlation / tracing
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    # Query strings and bodies may carry personal data; never log them.
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
        logger.info("request.start")
        try:
            response = await call_next(request)
        except Exception as exc:
            # Exceptions without a registered handler end up here.
            response = error_response(exc)

        duration_ms = (time.perf_counter() - start) * 1000
        logger.bind(
            status_code=response.status_code,
            duration_ms=round(duration_ms, 1),
        ).info("request.end")

        response.headers.setdefault("X-Request-ID", request_id)
        return response


# --- Lifecycle hooks ---
async def startup(
    database_service: DbSessionService | None = None,
) -> ApplicationDependencies:
    """Connect to the database and verify the schema before serving traffic.

    Raises:
        RuntimeError: If the database is unreachable.
        SchemaOutOfDateError: If migrations are pending and
            ``database.migrate_on_startup`` is off.
    """
    config = get_config()
    db_config = config.database
    logger.info("Starting up application in {} environment", config.app.environment)

    if db_config.startup_delay_seconds:
        logger.info(
            "Waiting {}s before connecting to the database",
            db_config.startup_delay_seconds,
        )
        await asyncio.sleep(db_config.startup_delay_seconds)

    if database_service is None:
        database_service = DbSessionService(db_config)

    try:
        await run_in_threadpool(database_service.check_connection)
    except SQLAlchemyError as e:
        logger.error(
            "Database connection failed during startup",
            error_type=type(e).__name__,
        )
        raise RuntimeError("Database is unreachable; refusing to start") from e

    runner = MigrationRunner(database_service.engine)
    if db_config.migrate_on_startup:
        await run_in_threadpool(runner.upgrade)
    else:
        await run_in_threadpool(runner.ensure_current)

    logger.info("Database ready")
    return ApplicationDependencies(database_service=database_service)


async def shutdown(app_dependencies: ApplicationDependencies, owns_engine: bool) -> None:
    logger.info("Shutting down application")
    if owns_engine:
        app_dependencies.database_service.dispose()


def create_app(database_service: DbSessionService | None = None) -> FastAPI:
    """Build the application.

    Args:
        database_service: Pre-built database service. When omitted, one is
            created from the active configuration at startup and disposed of
            at shutdown.
    """
    configure_logging()
    config = get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        deps = await startup(database_service)
        app.state.app_dependencies = deps
        try:
            yield
        finally:
            await shutdown(deps, owns_engine=database_service is None)

    is_production = config.app.environment == "production"
    app = FastAPI(
        title="Blog API",
        version=__version__,
        lifespan=lifespan,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
    )

    app.middleware("http")(log_requests)
    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(users_router)
    app.include_router(posts_router)

    return app


app = create_app()

__all__ = ["app", "create_app", "startup", "shutdown"]


if __name__ == "__main__":
    import uvicorn

    # Access logging is handled by the middleware above
    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,
    )
