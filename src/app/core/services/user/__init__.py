"""User services."""

from .logging_decorator import LoggingUserService
from .user_management import UserManagementService
from .user_service import UserService

__all__ = ["LoggingUserService", "UserManagementService", "UserService"]
