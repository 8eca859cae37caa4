"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.app.api.http.app_data import ApplicationDependencies
from src.app.api.http.deps import get_app_dependencies
from src.app.core.storage import InMemoryUserRepository

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health() -> dict[str, str]:
    """Liveness probe; returns 200 while the process is running."""
    return {"status": "healthy", "service": "user-records"}


@router.get("/ready", response_model=None)
def readiness(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> dict[str, Any] | JSONResponse:
    """Readiness probe for the user storage backend.

    Returns 200 when the repository backend is reachable, 503 otherwise.
    """
    repository = app_deps.user_repository

    if isinstance(repository, InMemoryUserRepository):
        storage = {"status": "healthy", "type": "in-memory"}
    elif app_deps.redis_service is not None:
        healthy = app_deps.redis_service.health_check()
        storage = {
            "status": "healthy" if healthy else "unhealthy",
            "type": "redis",
            "info": app_deps.redis_service.get_info() if healthy else None,
        }
    else:
        healthy = repository.is_available()
        storage = {
            "status": "healthy" if healthy else "unhealthy",
            "type": type(repository).__name__,
        }

    body = {
        "status": "ready" if storage["status"] == "healthy" else "not_ready",
        "checks": {"storage": storage},
    }
    if storage["status"] != "healthy":
        return JSONResponse(status_code=503, content=body)
    return body
