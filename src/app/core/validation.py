"""Input validation helpers."""

from pydantic import EmailStr, TypeAdapter, ValidationError

_EMAIL_ADAPTER = TypeAdapter(EmailStr)


def is_email_valid(email: str | None) -> bool:
    """Check that ``email`` is a well-formed ``local@domain.tld`` address."""
    if not email:
        return False
    try:
        _EMAIL_ADAPTER.validate_python(email)
    except ValidationError:
        return False
    return True
