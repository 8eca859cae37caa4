from __future__ import annotations

from dataclasses import dataclass

from src.app.core.services import (
    LoggingUserService,
    RedisService,
    UserManagementService,
    UserService,
)
from src.app.core.storage import UserRepository, build_user_repository
from src.app.runtime.config.config_data import ConfigData


@dataclass
class ApplicationDependencies:
    user_repository: UserRepository
    user_service: UserService
    redis_service: RedisService | None = None

    @classmethod
    def from_config(cls, config: ConfigData) -> ApplicationDependencies:
        """Wire Redis, the user repository and the logged user service."""
        redis_service = None
        if config.storage.backend == "redis":
            redis_service = RedisService(config)

        repository = build_user_repository(config, redis_service)
        service = LoggingUserService(UserManagementService(repository))
        return cls(
            user_repository=repository,
            user_service=service,
            redis_service=redis_service,
        )

    @classmethod
    def for_repository(cls, repository: UserRepository) -> ApplicationDependencies:
        """Wire the logged user service over an existing repository."""
        return cls(
            user_repository=repository,
            user_service=LoggingUserService(UserManagementService(repository)),
        )

    def close(self) -> None:
        if self.redis_service is not None:
            self.redis_service.close()
