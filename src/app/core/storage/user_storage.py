"""User record storage interface and implementations.

Provides a unified repository interface over a single-table key-value store,
with a Redis backend and an in-memory backend. Backend failures are normalized
into the storage error kinds of ``src.app.core.errors``; nothing here retries.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from loguru import logger
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticSerializationError

from src.app.core.errors import DeleteError, EncodeError, FetchError, WriteError
from src.app.entities.core.user import User

if TYPE_CHECKING:
    from src.app.core.services.redis_service import RedisService
    from src.app.runtime.config.config_data import ConfigData


def encode_user(user: User) -> str:
    """Serialize a user to the stored JSON attributes."""
    try:
        return user.model_dump_json(by_alias=True)
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise EncodeError(cause=e) from e


def decode_user(data: str | bytes) -> User:
    """Deserialize stored JSON attributes into a user.

    Raw bytes are parsed directly, so invalid UTF-8 surfaces as a decode
    failure rather than a ``UnicodeDecodeError``.
    """
    try:
        return User.model_validate_json(data)
    except PydanticValidationError as e:
        raise FetchError("failed to decode record", cause=e) from e


class UserRepository(ABC):
    """Abstract interface for user record storage backends."""

    @abstractmethod
    def fetch_all(self) -> list[User]:
        """Fetch every stored user, in no particular order.

        Raises:
            FetchError: If the backend scan or decoding fails
        """

    @abstractmethod
    def fetch_one(self, key: str) -> User:
        """Fetch a user by exact key.

        Args:
            key: User email

        Returns:
            The stored user, or the absent user when no record matches

        Raises:
            FetchError: If the backend read or decoding fails
        """

    @abstractmethod
    def persist(self, user: User) -> None:
        """Upsert the whole record, replacing any record with the same email.

        Raises:
            EncodeError: If the user cannot be serialized
            WriteError: If the backend write fails
        """

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete the record for ``key``; missing keys are not an error.

        Raises:
            DeleteError: If the backend delete fails
        """

    def is_available(self) -> bool:
        """Check if the storage backend is reachable."""
        return True


class InMemoryUserRepository(UserRepository):
    """In-memory user storage keeping serialized records behind a lock."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._lock = threading.Lock()

    def fetch_all(self) -> list[User]:
        with self._lock:
            records = list(self._data.values())
        return [decode_user(record) for record in records]

    def fetch_one(self, key: str) -> User:
        with self._lock:
            record = self._data.get(key)
        if record is None:
            return User.absent()
        return decode_user(record)

    def persist(self, user: User) -> None:
        record = encode_user(user)
        with self._lock:
            self._data[user.email] = record

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)


class RedisUserRepository(UserRepository):
    """Redis-based user storage, one JSON string per user.

    Records live under ``<table_name>:<email>``; fetch-all walks the namespace
    with SCAN.
    """

    def __init__(self, redis_client, table_name: str = "users"):
        self._redis = redis_client
        self._table_name = table_name
        self._available = True

    def _key(self, email: str) -> str:
        return f"{self._table_name}:{email}"

    def fetch_all(self) -> list[User]:
        try:
            keys = list(self._redis.scan_iter(match=f"{self._table_name}:*", count=100))
            values = self._redis.mget(keys) if keys else []
            self._available = True
        except Exception as e:
            self._available = False
            logger.bind(table=self._table_name).error(
                "Unable to scan user table: {}", e
            )
            raise FetchError(cause=e) from e

        # Keys removed between SCAN and MGET come back as None
        return [decode_user(value) for value in values if value is not None]

    def fetch_one(self, key: str) -> User:
        try:
            data = self._redis.get(self._key(key))
            self._available = True
        except Exception as e:
            self._available = False
            logger.bind(table=self._table_name).error(
                "Unable to fetch record with key {}: {}", key, e
            )
            raise FetchError(cause=e) from e

        if data is None:
            return User.absent()
        return decode_user(data)

    def persist(self, user: User) -> None:
        record = encode_user(user)
        try:
            self._redis.set(self._key(user.email), record)
            self._available = True
        except Exception as e:
            self._available = False
            logger.bind(table=self._table_name).error(
                "Unable to persist record with key {}: {}", user.email, e
            )
            raise WriteError(cause=e) from e

    def delete(self, key: str) -> None:
        try:
            self._redis.delete(self._key(key))
            self._available = True
        except Exception as e:
            self._available = False
            logger.bind(table=self._table_name).error(
                "Unable to delete record with key {}: {}", key, e
            )
            raise DeleteError(cause=e) from e

    def is_available(self) -> bool:
        """Check if the last Redis round trip succeeded."""
        return self._available

    def ping(self) -> bool:
        """Test Redis connection health."""
        try:
            self._redis.ping()
            self._available = True
        except Exception:
            self._available = False
        return self._available


def build_user_repository(
    config: ConfigData, redis_service: RedisService | None = None
) -> UserRepository:
    """Create the configured user repository.

    Falls back to in-memory storage when Redis is unreachable, except in
    production or when ``storage.fallback_to_memory`` is disabled.
    """
    storage = config.storage
    if storage.backend == "memory":
        logger.info("User storage: in-memory")
        return InMemoryUserRepository()

    client = redis_service.get_client() if redis_service else None
    if client is not None:
        repository = RedisUserRepository(client, table_name=storage.table_name)
        if repository.ping():
            logger.info("User storage: Redis table '{}'", storage.table_name)
            return repository

    if config.app.environment == "production" or not storage.fallback_to_memory:
        raise RuntimeError("Redis user storage is configured but unreachable")

    logger.warning("Redis unavailable, using in-memory user storage")
    return InMemoryUserRepository()
