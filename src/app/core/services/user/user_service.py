"""User service interface."""

from abc import ABC, abstractmethod

from src.app.entities.core.user import User


class UserService(ABC):
    """Public operations over user records exposed to transports.

    Implementations raise ``UserServiceError`` subclasses; callers only ever
    see the fixed message of each error kind.
    """

    @abstractmethod
    def fetch_all(self) -> list[User]:
        """Return every stored user."""

    @abstractmethod
    def fetch_one(self, email: str) -> User:
        """Return the user registered under ``email``."""

    @abstractmethod
    def create(self, user: User) -> User:
        """Register a new user and return it."""

    @abstractmethod
    def update(self, user: User) -> User:
        """Merge non-empty names into the stored user and return the result."""

    @abstractmethod
    def delete(self, email: str) -> User:
        """Remove a user and return the record as it was before deletion."""
