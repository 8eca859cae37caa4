"""User domain entity."""

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """User record keyed by email address.

    A User with an empty email is the absence sentinel: repositories return it
    instead of raising when no record matches a key.
    """

    model_config = ConfigDict(populate_by_name=True)

    email: str = Field(default="", description="User's email address, unique key")
    first_name: str = Field(
        default="", alias="firstName", description="User's first name"
    )
    last_name: str = Field(
        default="", alias="lastName", description="User's last name"
    )

    @classmethod
    def absent(cls) -> "User":
        """Return the zero-value user used to signal a missing record."""
        return cls()

    @property
    def is_absent(self) -> bool:
        return not self.email
