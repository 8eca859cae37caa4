"""Domain entities, organized by business concept.

Each entity has its own package exposing the domain model; storage concerns
live in ``src.app.core.storage``.
"""

from .core.user import User

__all__ = ["User"]
