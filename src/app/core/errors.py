"""
Exception hierarchy for the user records service.

Every service error carries a ``kind`` so transports can map errors without
inspecting messages, a short fixed message that is safe to show to callers,
and an optional ``cause`` holding the underlying exception for logging.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    """Closed set of business-facing error kinds."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    PERSISTENCE = "persistence"


class UserServiceError(Exception):
    """Base exception for all user service errors."""

    kind: ClassVar[ErrorKind]
    default_message: ClassVar[str] = "user service error"

    def __init__(
        self,
        message: str | None = None,
        *,
        cause: BaseException | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.cause = cause
        super().__init__(self.message)


class ValidationError(UserServiceError):
    """Malformed input, such as an invalid email address."""

    kind = ErrorKind.VALIDATION
    default_message = "invalid email"


class NotFoundError(UserServiceError):
    """The targeted user record does not exist."""

    kind = ErrorKind.NOT_FOUND
    default_message = "user does not exist"


class ConflictError(UserServiceError):
    """A user with the same email is already registered."""

    kind = ErrorKind.CONFLICT
    default_message = "user already exists"


class PersistenceError(UserServiceError):
    """The backing store failed to complete an operation."""

    kind = ErrorKind.PERSISTENCE
    default_message = "unable to persist user"


class DeletionError(PersistenceError):
    """The backing store failed to delete a user."""

    default_message = "unable to delete user"


class StorageError(PersistenceError):
    """Base for errors raised at the repository boundary."""

    default_message = "storage operation failed"


class FetchError(StorageError):
    """Scanning, reading or decoding stored records failed."""

    default_message = "failed to fetch record"


class EncodeError(StorageError):
    """A record could not be serialized for storage."""

    default_message = "could not encode item"


class WriteError(StorageError):
    """The backend rejected a write."""

    default_message = "could not write item"


class DeleteError(StorageError):
    """The backend rejected a delete."""

    default_message = "could not delete item"
