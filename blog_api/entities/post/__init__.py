"""Entity package: Post."""

from .entity import Post
from .repository import PostRepository
from .table import PostTable

__all__ = ["Post", "PostRepository", "PostTable"]
