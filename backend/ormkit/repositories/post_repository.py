"""Post and tag persistence helpers."""

from __future__ import annotations

from typing import Optional, Sequence

from sqlalchemy import select

from ormkit.db import Post, Tag
from ormkit.repositories.base import SQLAlchemyRepository


class PostRepository(SQLAlchemyRepository[Post]):
    """Post data access."""

    model = Post

    def list_by_status(self, status: str) -> Sequence[Post]:
        stmt = select(Post).where(Post.status == status).order_by(Post.id.asc())
        return self.session.scalars(stmt).all()

    def list_tagged(self, tag_name: str) -> Sequence[Post]:
        stmt = (
            select(Post)
            .join(Post.tags)
            .where(Tag.name == tag_name)
            .order_by(Post.id.asc())
        )
        return self.session.scalars(stmt).all()


class TagRepository(SQLAlchemyRepository[Tag]):
    """Tag data access."""

    model = Tag

    def get_by_name(self, name: str) -> Optional[Tag]:
        return self.session.scalars(select(Tag).where(Tag.name == name)).first()
