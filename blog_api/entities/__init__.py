"""Entities module with hybrid entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model as exposed by the API
- table.py: Database persistence model
- repository.py: Data access layer

Both table models are imported here so that the User <-> Post relationship
can be resolved as soon as either is used.
"""

from .post import Post, PostRepository, PostTable
from .user import User, UserRepository, UserTable

__all__ = [
    "Post",
    "PostRepository",
    "PostTable",
    "User",
    "UserRepository",
    "UserTable",
]
