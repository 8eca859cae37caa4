from src.app.core.errors import (
    ConflictError,
    DeletionError,
    NotFoundError,
    PersistenceError,
    StorageError,
    ValidationError,
)
from src.app.core.services.user.user_service import UserService
from src.app.core.storage.user_storage import UserRepository
from src.app.core.validation import is_email_valid
from src.app.entities.core.user import User


class UserManagementService(UserService):
    """Business rules for user records on top of a ``UserRepository``.

    Every write is a read-then-write against the store with no locking, so
    concurrent writers racing on the same email can overwrite each other.
    """

    def __init__(self, repository: UserRepository):
        self._repository = repository

    def fetch_all(self) -> list[User]:
        try:
            return self._repository.fetch_all()
        except StorageError as e:
            raise PersistenceError("could not retrieve users", cause=e) from e

    def fetch_one(self, email: str) -> User:
        """Fetch a single user.

        Lookup failures and missing records are reported identically so
        callers cannot tell a backend outage from an unknown email.

        Raises:
            ValidationError: If ``email`` is malformed; the store is not queried
            NotFoundError: If no user exists or the lookup failed
        """
        self._require_valid_email(email)

        try:
            user = self._repository.fetch_one(email)
        except StorageError as e:
            raise NotFoundError("user not found", cause=e) from e

        if user.is_absent:
            raise NotFoundError("user not found")
        return user

    def create(self, user: User) -> User:
        self._require_valid_email(user.email)

        if not self._lookup(user.email).is_absent:
            raise ConflictError()

        try:
            self._repository.persist(user)
        except StorageError as e:
            raise PersistenceError("unable to create user", cause=e) from e
        return user

    def update(self, user: User) -> User:
        """Apply a partial update.

        Only non-empty incoming names that differ from the stored ones are
        written; the email is never changed.
        """
        self._require_valid_email(user.email)

        existing = self._lookup(user.email)
        if existing.is_absent:
            raise NotFoundError()

        changes = {}
        if user.first_name and user.first_name != existing.first_name:
            changes["first_name"] = user.first_name
        if user.last_name and user.last_name != existing.last_name:
            changes["last_name"] = user.last_name
        merged = existing.model_copy(update=changes)

        try:
            self._repository.persist(merged)
        except StorageError as e:
            raise PersistenceError("unable to update user", cause=e) from e
        return merged

    def delete(self, email: str) -> User:
        self._require_valid_email(email)

        existing = self._lookup(email)
        if existing.is_absent:
            raise NotFoundError()

        try:
            self._repository.delete(email)
        except StorageError as e:
            raise DeletionError(cause=e) from e
        return existing

    def _lookup(self, email: str) -> User:
        """Existence check; any lookup failure counts as absence."""
        try:
            return self.fetch_one(email)
        except NotFoundError:
            return User.absent()

    @staticmethod
    def _require_valid_email(email: str) -> None:
        if not is_email_valid(email):
            raise ValidationError()
