"""User entity module."""

from .entity import User

__all__ = ["User"]
