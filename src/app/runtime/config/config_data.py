"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class RedisConfig(BaseModel):
    """Redis configuration model."""

    enabled: bool = Field(default=True, description="Enable Redis service")
    url: str = Field(
        default="redis://localhost:6379/0", description="Redis connection URL"
    )
    password: str | None = Field(
        default=None, description="Password for Redis authentication"
    )
    decode_responses: bool = Field(
        default=True, description="Decode Redis responses to strings"
    )
    max_connections: int = Field(
        default=20, description="Maximum connections kept in the pool"
    )
    socket_timeout: float = Field(
        default=5.0, description="Socket read/write timeout in seconds"
    )
    socket_connect_timeout: float = Field(
        default=2.0, description="Socket connect timeout in seconds"
    )

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the Redis connection string with password if provided."""
        if self.password:
            if "@" in self.url:
                # URL already has auth info
                return self.url
            parts = self.url.split("://", 1)
            if len(parts) == 2:
                scheme, rest = parts
                return f"{scheme}://:{self.password}@{rest}"
        return self.url

    @computed_field
    @property
    def sanitized_connection_string(self) -> str:
        """Connection string with any password masked, safe for logs."""
        conn = self.connection_string
        scheme, sep, rest = conn.partition("://")
        if not sep or "@" not in rest:
            return conn
        auth, host = rest.rsplit("@", 1)
        user = auth.split(":", 1)[0] if ":" in auth else auth
        return f"{scheme}://{user}:***@{host}"


class StorageConfig(BaseModel):
    """User record storage configuration."""

    backend: Literal["redis", "memory"] = Field(
        default="redis", description="Key-value backend holding user records"
    )
    table_name: str = Field(
        default="users", description="Key namespace for user records"
    )
    fallback_to_memory: bool = Field(
        default=True,
        description="Use in-memory storage when Redis is unreachable outside production",
    )


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str = Field(default="", description="Log file path (empty disables)")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    redis: RedisConfig = Field(
        default_factory=RedisConfig, description="Redis configuration"
    )
    storage: StorageConfig = Field(
        default_factory=StorageConfig, description="User storage configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
