"""Test configuration and fixtures."""

import os

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ["TESTING"] = "true"

from ormkit.db import Author, Base, Post, Tag  # noqa: E402 - must set env vars before importing

# Use in-memory SQLite for tests
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def test_author(db_session):
    author = Author(name="Ada")
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def test_post(db_session, test_author):
    """Create a valid post."""
    post = Post(title="Hello", body="First post", author_id=test_author.id)
    db_session.add(post)
    db_session.commit()
    db_session.refresh(post)
    return post


@pytest.fixture
def tags(db_session):
    """Create three tags: python, sql, web."""
    created = [Tag(name=name) for name in ("python", "sql", "web")]
    db_session.add_all(created)
    db_session.commit()
    for tag in created:
        db_session.refresh(tag)
    return created
