"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.responses import JSONResponse

from src.app.api.http.app_data import ApplicationDependencies
from src.app.api.http.routers.health import router as health_router
from src.app.api.http.routers.users import router as users_router
from src.app.api.utils.app_startup import configure_logging
from src.app.core.errors import ErrorKind, UserServiceError
from src.app.runtime.context import get_config

ERROR_STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.PERSISTENCE: 500,
}


async def handle_user_service_error(
    request: Request, exc: UserServiceError
) -> JSONResponse:
    """Map service errors to HTTP responses; storage causes are never exposed."""
    return JSONResponse(
        status_code=ERROR_STATUS_CODES[exc.kind],
        content={"detail": exc.message, "kind": exc.kind.value},
    )


async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": request.client.host if request.client else "unknown",
    }

    start = time.perf_counter()
    with logger.contextualize(**base_ctx):
        logger.info("request.start")
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.bind(
                status_code=500,
                duration_ms=round((time.perf_counter() - start) * 1000, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )

        logger.bind(
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 1),
        ).info("request.end")
        response.headers.setdefault("X-Request-ID", request_id)
        return response


def create_app(dependencies: ApplicationDependencies | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        dependencies: Pre-built dependencies. When omitted they are created
            from the current configuration at startup and closed at shutdown.
    """
    config = get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = dependencies is None
        deps = dependencies or ApplicationDependencies.from_config(get_config())
        app.state.app_dependencies = deps
        logger.info(
            "Starting up application in {} environment", get_config().app.environment
        )
        try:
            yield
        finally:
            logger.info("Shutting down application")
            if owned:
                deps.close()

    app = FastAPI(
        title="User Records",
        lifespan=lifespan,
        docs_url=None if config.app.environment == "production" else "/docs",
        redoc_url=None if config.app.environment == "production" else "/redoc",
    )

    if config.app.environment == "production" and "*" in config.app.cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
    )
    app.middleware("http")(log_requests)
    app.add_exception_handler(UserServiceError, handle_user_service_error)

    app.include_router(health_router)
    app.include_router(users_router)

    if dependencies is not None:
        app.state.app_dependencies = dependencies

    return app


configure_logging()
app = create_app()

__all__ = ["app", "create_app"]


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,  # We handle access logging in middleware
    )
