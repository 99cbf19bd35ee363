"""Repository layer for persistence access."""

from .base import SQLAlchemyRepository
from .post_repository import PostRepository, TagRepository

__all__ = ["PostRepository", "SQLAlchemyRepository", "TagRepository"]
