"""Logging decorator for the user service boundary."""

import time
from collections.abc import Callable
from typing import TypeVar

from loguru import logger

from src.app.core.errors import ErrorKind, UserServiceError
from src.app.core.services.user.user_service import UserService
from src.app.entities.core.user import User

T = TypeVar("T")


class LoggingUserService(UserService):
    """Wrap a ``UserService`` and log every operation at its boundary.

    Each call logs ``<operation>.start`` and ``<operation>.end`` with its
    duration. Failures are logged once with ``msg``, ``err``, ``error_kind``
    and the underlying ``cause``, which is the only place storage details
    become visible.
    """

    def __init__(self, inner: UserService, name: str = "UserService"):
        self._inner = inner
        self._name = name

    @property
    def inner(self) -> UserService:
        return self._inner

    def _call(self, operation: str, func: Callable[..., T], *args) -> T:
        with logger.contextualize(operation=f"{self._name}::{operation}"):
            start = time.perf_counter()
            logger.debug(f"{operation}.start")
            try:
                result = func(*args)
            except UserServiceError as exc:
                level = "ERROR" if exc.kind is ErrorKind.PERSISTENCE else "WARNING"
                logger.bind(
                    msg=f"{operation} failed",
                    err=exc.message,
                    error_kind=exc.kind.value,
                    cause=repr(exc.cause) if exc.cause is not None else None,
                    duration_ms=round((time.perf_counter() - start) * 1000, 1),
                ).log(level, f"{operation}.error: {exc.message}")
                raise
            except Exception:
                logger.bind(
                    msg=f"{operation} failed unexpectedly",
                    duration_ms=round((time.perf_counter() - start) * 1000, 1),
                ).exception(f"{operation}.error")
                raise

            logger.bind(
                duration_ms=round((time.perf_counter() - start) * 1000, 1)
            ).debug(f"{operation}.end")
            return result

    def fetch_all(self) -> list[User]:
        return self._call("fetch_all", self._inner.fetch_all)

    def fetch_one(self, email: str) -> User:
        return self._call("fetch_one", self._inner.fetch_one, email)

    def create(self, user: User) -> User:
        return self._call("create", self._inner.create, user)

    def update(self, user: User) -> User:
        return self._call("update", self._inner.update, user)

    def delete(self, email: str) -> User:
        return self._call("delete", self._inner.delete, email)
