"""Core services exports."""

from .redis_service import RedisService
from .user import LoggingUserService, UserManagementService, UserService

__all__ = [
    "RedisService",
    "LoggingUserService",
    "UserManagementService",
    "UserService",
]
