"""Redis connection service for managing Redis client lifecycle and health checks."""

from typing import Any

import redis
from loguru import logger
from redis.backoff import NoBackoff
from redis.retry import Retry

from src.app.runtime.config.config_data import ConfigData


class RedisService:
    """Service for managing the Redis connection used by user storage.

    The client is created once from configuration and handed to the
    repository that owns it; no module-level client handle exists.
    """

    def __init__(self, config: ConfigData):
        logger.info("Setting up Redis service")
        redis_config = config.redis

        self._enabled = redis_config.enabled
        self._client: redis.Redis | None = None
        self._url = redis_config.url

        if not self._enabled:
            logger.info("Redis is disabled, service will not connect")
            return

        if not self._url:
            logger.warning("Redis URL not configured, service will not connect")
            self._enabled = False
            return

        try:
            logger.info(
                "Initializing Redis client with connection string: {}",
                redis_config.sanitized_connection_string,
            )
            # Storage operations never retry; failures surface to the caller
            self._client = redis.Redis.from_url(
                redis_config.connection_string,
                encoding="utf-8",
                decode_responses=redis_config.decode_responses,
                max_connections=redis_config.max_connections,
                socket_timeout=redis_config.socket_timeout,
                socket_connect_timeout=redis_config.socket_connect_timeout,
                retry=Retry(NoBackoff(), 0),
                retry_on_timeout=False,
                client_name="user_records",
            )
        except Exception as e:
            logger.bind(error_type=type(e).__name__, error_message=str(e)).error(
                "Failed to initialize Redis client"
            )
            self._enabled = False
            self._client = None
            if config.app.environment == "production":
                raise

    def get_client(self) -> redis.Redis | None:
        """Get the Redis client instance.

        Returns:
            Redis client if enabled and initialized, None otherwise.
        """
        if not self._enabled:
            logger.debug("Redis is disabled, returning None")
            return None
        return self._client

    def health_check(self) -> bool:
        """Perform a PING against the Redis server."""
        if not self._enabled or not self._client:
            return False

        try:
            return bool(self._client.ping())
        except Exception as e:
            logger.bind(error_type=type(e).__name__, error_message=str(e)).error(
                "Redis health check failed"
            )
            return False

    def get_info(self) -> dict[str, Any] | None:
        """Get Redis server information for monitoring."""
        if not self._enabled or not self._client:
            return None

        try:
            info = self._client.info()
        except Exception as e:
            logger.bind(error_type=type(e).__name__, error_message=str(e)).error(
                "Failed to get Redis info"
            )
            return None

        return {
            "version": info.get("redis_version"),
            "uptime_seconds": info.get("uptime_in_seconds"),
            "connected_clients": info.get("connected_clients"),
            "used_memory_human": info.get("used_memory_human"),
        }

    def close(self) -> None:
        """Close the Redis connection and clean up resources."""
        if not self._client:
            return
        try:
            logger.info("Closing Redis connection")
            self._client.close()
        except Exception as e:
            logger.bind(error_type=type(e).__name__, error_message=str(e)).error(
                "Error closing Redis connection"
            )
        finally:
            self._client = None

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    @property
    def url(self) -> str | None:
        return self._url
