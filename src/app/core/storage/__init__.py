"""User record storage backends."""

from .user_storage import (
    InMemoryUserRepository,
    RedisUserRepository,
    UserRepository,
    build_user_repository,
)

__all__ = [
    "InMemoryUserRepository",
    "RedisUserRepository",
    "UserRepository",
    "build_user_repository",
]
