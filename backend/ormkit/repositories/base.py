"""Base repository utilities."""

from __future__ import annotations

from typing import Any, Generic, Optional, Sequence, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

from ormkit.db.validated import ValidatedModel

TModel = TypeVar("TModel")


class SQLAlchemyRepository(Generic[TModel]):
    """Session holder with the persistence calls services need."""

    model: Optional[type] = None

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, key: Any) -> Optional[TModel]:
        return self.session.get(self.model, key)

    def list_all(self) -> Sequence[TModel]:
        return self.session.scalars(select(self.model)).all()

    def add(self, instance: TModel) -> TModel:
        self.session.add(instance)
        return instance

    def save(self, instance: TModel, commit: bool = True) -> TModel:
        """Persist ``instance``, validating it first when it is a validated model."""
        if isinstance(instance, ValidatedModel):
            instance.save(self.session, commit=commit)
        else:
            self.session.add(instance)
            if commit:
                self.session.commit()
            else:
                self.session.flush()
        return instance

    def remove(self, instance: TModel) -> None:
        self.session.delete(instance)

    def refresh(self, instance: TModel) -> TModel:
        self.session.refresh(instance)
        return instance

    def commit(self) -> None:
        self.session.commit()

    def flush(self) -> None:
        self.session.flush()

    def rollback(self) -> None:
        self.session.rollback()
