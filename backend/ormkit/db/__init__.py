"""Database module initialization."""

from .base import Base
from .models import Author, Note, Post, Tag, post_tags
from .session import SessionLocal, engine, get_db, init_db
from .validated import ValidatedModel

__all__ = [
    "Author",
    "Base",
    "Note",
    "Post",
    "Tag",
    "ValidatedModel",
    "post_tags",
    "get_db",
    "init_db",
    "engine",
    "SessionLocal",
]
