"""FastAPI dependency implementations."""

from fastapi import Request

from src.app.api.http.app_data import ApplicationDependencies
from src.app.core.services import UserService


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the application dependency container."""
    return request.app.state.app_dependencies


def get_user_service(request: Request) -> UserService:
    """Get the user service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.user_service
