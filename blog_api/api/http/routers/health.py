"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from starlette.responses import JSONResponse

from blog_api.api.http.app_data import ApplicationDependencies
from blog_api.api.http.deps import get_app_dependencies
from blog_api.core.services import MigrationRunner
from blog_api.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health() -> dict[str, str]:
    """Liveness check: 200 as long as the process is serving requests."""
    return {"status": "healthy", "service": "api"}


@router.get("/ready", response_model=None)
def readiness(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> dict[str, Any] | JSONResponse:
    """Readiness check: checks database connectivity and schema version.

    Returns 200 when ready, 503 otherwise.
    """
    database_service = app_deps.database_service
    checks: dict[str, Any] = {}

    db_healthy = database_service.health_check()
    checks["database"] = {
        "status": "healthy" if db_healthy else "unhealthy",
        "type": database_service.engine.dialect.name,
    }

    schema_ready = False
    if db_healthy:
        runner = MigrationRunner(database_service.engine)
        try:
            current, head = runner.current_version(), runner.head_version()
        except SQLAlchemyError as e:
            checks["schema"] = {"status": "unknown", "error_type": type(e).__name__}
        else:
            schema_ready = current >= head
            checks["schema"] = {
                "status": "current" if schema_ready else "outdated",
                "version": current,
                "head": head,
            }

    response = {
        "status": "ready" if db_healthy and schema_ready else "not_ready",
        "environment": get_config().app.environment,
        "checks": checks,
    }
    if response["status"] != "ready":
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=response)
    return response
