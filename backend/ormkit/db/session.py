"""Engine and session factory."""

from __future__ import annotations

from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from ormkit.core.config import settings
from ormkit.core.logging import get_logger
from ormkit.db.base import Base

logger = get_logger(__name__)


def build_engine(url: str, echo: bool = False) -> Engine:
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, echo=echo, connect_args=connect_args)


engine = build_engine(settings.database_url, echo=settings.database_echo)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Iterator[Session]:
    """Yield a session for the duration of a request and always close it."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Optional[Engine] = None) -> None:
    """Create every table registered on the shared metadata."""
    target = bind or engine
    Base.metadata.create_all(bind=target)
    logger.info("Database schema ready", extra={"tables": len(Base.metadata.tables)})
