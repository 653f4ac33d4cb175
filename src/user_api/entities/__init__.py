"""Entities module with entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain record handed out by the store
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .user import User, UserRepository, UserTable

__all__ = [
    "User",
    "UserTable",
    "UserRepository",
]
