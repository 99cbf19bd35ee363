"""Validated active-record base for declarative models.

``ValidatedModel`` gates persistence behind a per-class pydantic rule model and
adds helpers that mutate many-to-many collections while keeping the in-memory
collection consistent with the database.
"""

from typing import Any, ClassVar, Iterable, Optional

from pydantic import BaseModel
from sqlalchemy import event
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import RelationshipProperty, Session, object_session
from sqlalchemy.orm.collections import collection_adapter

from ormkit.core.config import settings
from ormkit.core.logging import get_logger
from ormkit.db.base import Base
from ormkit.db.validation import has_rules, validate_attributes
from ormkit.domain.exceptions import (
    ModelStateError,
    ModelValidationError,
    NotFoundError,
    RelationshipError,
)

logger = get_logger(__name__)


class ValidatedModel(Base):
    """Abstract base for models that must pass their rules before being persisted.

    Concrete models declare ``__rules__`` as a pydantic model whose fields are
    checked against the record's column values. Models without rules (or with
    an empty rule model) always persist.
    """

    __abstract__ = True

    __rules__: ClassVar[Optional[type[BaseModel]]] = None

    # ------------------------------------------------------------------
    # Validation

    @classmethod
    def get_validation_rules(cls) -> Optional[type[BaseModel]]:
        """Return the rule model used to validate instances of this class."""
        return cls.__rules__

    def attribute_values(self) -> dict[str, Any]:
        """Snapshot of the mapped column attributes keyed by attribute name."""
        mapper = sa_inspect(type(self))
        return {attr.key: getattr(self, attr.key) for attr in mapper.column_attrs}

    def validate(self) -> None:
        """Check the current attribute values against the declared rules.

        Raises:
            ModelValidationError: one or more rules were violated.
        """
        rules = self.get_validation_rules()
        if not has_rules(rules):
            return

        result = validate_attributes(self.attribute_values(), rules)
        if result.failed:
            logger.info(
                "Validation failed for %s",
                type(self).__name__,
                extra={"model": type(self).__name__, "violations": len(result.messages)},
            )
            raise ModelValidationError(result.messages, model=self, fields=result.fields)

    def save(self, session: Optional[Session] = None, commit: bool = True) -> bool:
        """Validate, then add to ``session`` and commit (or only flush).

        ``session`` defaults to the session the instance already belongs to.
        Nothing is left in the session when validation fails.
        """
        if session is None:
            session = object_session(self)
        if session is None:
            raise ModelStateError(
                f"{type(self).__name__} is not attached to a session; pass one to save()"
            )

        # Detached instances need a session to load expired attributes before validating.
        newly_added = object_session(self) is None
        session.add(self)
        try:
            with session.no_autoflush:
                self.validate()
        except ModelValidationError:
            if newly_added:
                session.expunge(self)
            raise

        if commit:
            session.commit()
        else:
            session.flush()
        return True

    # ------------------------------------------------------------------
    # Many-to-many helpers

    @classmethod
    def many_to_many_relationships(cls) -> dict[str, RelationshipProperty]:
        """Map of relationship name to property for every association-table relationship."""
        mapper = sa_inspect(cls)
        return {
            key: prop for key, prop in mapper.relationships.items() if prop.secondary is not None
        }

    def insert_into_many_to_many(self, property_name: str, value: Any) -> None:
        """Attach ``value`` (an instance or a primary key) and reload the collection.

        Attaching an existing member is a no-op apart from the reload.
        """
        prop = self._many_to_many(property_name)
        session = object_session(self)
        related = self._resolve_related(prop, value, session)

        collection = getattr(self, property_name)
        if related not in collection:
            collection_adapter(collection).append_with_event(related)

        logger.debug(
            "Attached to %s.%s",
            type(self).__name__,
            property_name,
            extra={"model": type(self).__name__, "relationship": property_name},
        )
        if session is not None:
            session.flush()
            self.reload_property(property_name)

    def remove_from_many_to_many(self, property_name: str, value: Any = None) -> int:
        """Detach ``value`` (or every member when ``value`` is None) and reload.

        Returns the number of members removed.
        """
        prop = self._many_to_many(property_name)
        session = object_session(self)
        collection = getattr(self, property_name)

        if value is None:
            members = list(collection)
        else:
            related = self._resolve_related(prop, value, session)
            members = [related] if related in collection else []

        adapter = collection_adapter(collection)
        for member in members:
            adapter.remove_with_event(member)

        logger.debug(
            "Detached %d from %s.%s",
            len(members),
            type(self).__name__,
            property_name,
            extra={"model": type(self).__name__, "relationship": property_name},
        )
        if session is not None:
            session.flush()
            self.reload_property(property_name)
        return len(members)

    def sync_many_to_many(self, property_name: str, values: Iterable[Any]) -> dict[str, list]:
        """Make the collection contain exactly ``values``.

        Membership is compared against the association table as it stands,
        not a previously loaded copy. The collection is then mutated in place
        and flushed, so it already matches the table and is not reloaded
        afterwards. Returns the primary keys that were attached and detached.
        """
        prop = self._many_to_many(property_name)
        session = object_session(self)

        wanted: list[Any] = []
        for value in values:
            related = self._resolve_related(prop, value, session)
            if related not in wanted:
                wanted.append(related)

        if session is not None and sa_inspect(self).persistent:
            session.refresh(self, attribute_names=[property_name])
        collection = getattr(self, property_name)
        current = list(collection)
        detached = [member for member in current if member not in wanted]
        attached = [member for member in wanted if member not in current]

        adapter = collection_adapter(collection)
        for member in detached:
            adapter.remove_with_event(member)
        for member in attached:
            adapter.append_with_event(member)

        if session is not None:
            session.flush()

        changes = {
            "attached": [_primary_key(prop, member) for member in attached],
            "detached": [_primary_key(prop, member) for member in detached],
        }
        logger.debug(
            "Synced %s.%s",
            type(self).__name__,
            property_name,
            extra={
                "model": type(self).__name__,
                "relationship": property_name,
                "attached": len(attached),
                "detached": len(detached),
            },
        )
        return changes

    def reload_property(self, property_name: str) -> None:
        """Reload one attribute from the database, discarding the cached value."""
        session = object_session(self)
        if session is None:
            raise ModelStateError(
                f"Cannot reload {type(self).__name__}.{property_name} without a session"
            )
        session.refresh(self, attribute_names=[property_name])
        logger.debug("Reloaded %s.%s", type(self).__name__, property_name)

    # ------------------------------------------------------------------

    def _many_to_many(self, property_name: str) -> RelationshipProperty:
        relationships = self.many_to_many_relationships()
        if property_name not in relationships:
            raise RelationshipError(
                f"{type(self).__name__}.{property_name} is not a many-to-many relationship"
            )
        return relationships[property_name]

    def _resolve_related(
        self, prop: RelationshipProperty, value: Any, session: Optional[Session]
    ) -> Any:
        target = prop.mapper.class_
        if isinstance(value, target):
            return value
        if sa_inspect(value, raiseerr=False) is not None:
            raise RelationshipError(
                f"{type(self).__name__}.{prop.key} expects {target.__name__}, "
                f"got {type(value).__name__}"
            )
        if session is None:
            raise ModelStateError(
                f"Cannot load {target.__name__} {value!r} for an instance without a session"
            )
        related = session.get(target, value)
        if related is None:
            raise NotFoundError(f"{target.__name__} {value!r} not found")
        return related


def _primary_key(prop: RelationshipProperty, instance: Any) -> Any:
    key = prop.mapper.primary_key_from_instance(instance)
    return key[0] if len(key) == 1 else tuple(key)


@event.listens_for(ValidatedModel, "before_insert", propagate=True)
@event.listens_for(ValidatedModel, "before_update", propagate=True)
def validate_before_flush(mapper, connection, target):
    """Reject inserts and updates of records that fail their rules."""
    if settings.validate_on_flush:
        target.validate()
