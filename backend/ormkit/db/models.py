"""Database models."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ormkit.db.base import Base
from ormkit.db.validated import ValidatedModel


# Association table for Post <-> Tag
post_tags = Table(
    "post_tags",
    Base.metadata,
    Column("post_id", Integer, ForeignKey("posts.id"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id"), primary_key=True),
)


class PostRules(BaseModel):
    """Rules checked before a post is written."""

    title: Optional[str] = None
    status: Optional[Literal["draft", "published"]] = None

    @field_validator("title")
    @classmethod
    def title_required(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            raise PydanticCustomError("required", "title required message")
        return value


class TagRules(BaseModel):
    name: str = Field(min_length=1, max_length=50)


class NoteRules(BaseModel):
    """Notes accept any content."""


class Author(ValidatedModel):
    """Author model (no rules)."""

    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    posts: Mapped[list["Post"]] = relationship("Post", back_populates="author")


class Post(ValidatedModel):
    """Post model."""

    __tablename__ = "posts"
    __rules__ = PostRules

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    body: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), default="draft", nullable=False)
    author_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("authors.id"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    author: Mapped[Optional["Author"]] = relationship("Author", back_populates="posts")
    tags: Mapped[list["Tag"]] = relationship(
        "Tag", secondary=post_tags, back_populates="posts", order_by="Tag.id"
    )


class Tag(ValidatedModel):
    """Tag model."""

    __tablename__ = "tags"
    __rules__ = TagRules

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)

    posts: Mapped[list["Post"]] = relationship(
        "Post", secondary=post_tags, back_populates="tags"
    )


class Note(ValidatedModel):
    """Free-form note; its rule model declares nothing to check."""

    __tablename__ = "notes"
    __rules__ = NoteRules

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    body: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
